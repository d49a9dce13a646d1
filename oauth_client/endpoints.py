"""HTTP endpoints of the OAuth demo client.

- Start page and login redirect (/, /login)
- Redirect target (/callback)
- Token lifecycle (/refresh, /userinfo, /introspect/*, /revoke/*, /tokeninfo)

The session, provider client and settings live on app.state and are set
by main.create_app().
"""

import logging
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse

from oauth_client import lifecycle
from oauth_client.authorize import build_authorization_url
from oauth_client.callback import CallbackError, handle_callback
from oauth_client.results import OAuthResult
from oauth_client.session import TokenKind
from oauth_client.templates import render_index, render_result

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth"])


def _wants_json(request: Request) -> bool:
    return "application/json" in request.headers.get("accept", "")


def _render(
    request: Request,
    result: OAuthResult,
    title: str,
    heading: str,
    error_title: str = "Error",
    error_heading: Optional[str] = None,
):
    """Render an operation result. Errors are reported with status 200.

    error_heading replaces the derived error heading when given.
    """
    if not result.ok:
        title = error_title
        if error_heading:
            heading = error_heading
        elif result.called_provider:
            heading = f"{heading} Error"
        else:
            heading = f"Error: {result.data.get('error_description', 'Request failed')}"

    if _wants_json(request):
        return JSONResponse({"ok": result.ok, "error_kind": result.error_kind, "data": result.data})
    return HTMLResponse(render_result(title, heading, result.data, show_buttons=result.ok))


# ============== Authorization ==============

@router.get("/")
async def index(request: Request):
    """Start page showing the authorization URL."""
    state = request.app.state
    url = build_authorization_url(state.session, state.settings)
    if _wants_json(request):
        return {"authorization_url": url, "session": state.session.status()}
    return HTMLResponse(render_index(url, state.settings.provider_url, state.session.pkce_enabled))


@router.get("/login")
async def login(request: Request):
    """Redirect straight to the provider's authorization endpoint."""
    state = request.app.state
    return RedirectResponse(url=build_authorization_url(state.session, state.settings), status_code=302)


@router.get("/callback")
async def callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
):
    """Provider redirect target: verify state, then exchange the code."""
    app_state = request.app.state
    try:
        result = await handle_callback(
            app_state.session,
            app_state.provider,
            code=code,
            state=state,
            error=error,
            error_description=error_description,
        )
    except CallbackError as e:
        return PlainTextResponse(str(e), status_code=400)

    return _render(
        request,
        result,
        "OAuth Response",
        "OAuth Token Response",
        error_title="OAuth Error",
        error_heading="OAuth Token Error",
    )


# ============== Token Lifecycle ==============

@router.get("/refresh")
async def refresh_token(request: Request):
    state = request.app.state
    result = await lifecycle.refresh(state.session, state.provider)
    return _render(request, result, "Token Refreshed", "Token Refreshed")


@router.get("/userinfo")
async def user_info(request: Request):
    state = request.app.state
    result = await lifecycle.userinfo(state.session, state.provider)
    return _render(request, result, "User Info", "User Information")


@router.get("/introspect/{kind}")
async def introspect_token(request: Request, kind: TokenKind):
    state = request.app.state
    result = await lifecycle.introspect(state.session, state.provider, kind)
    label = kind.value.capitalize()
    return _render(request, result, "Token Introspection", f"{label} Token Introspection")


@router.get("/revoke/{kind}")
async def revoke_token(request: Request, kind: TokenKind):
    state = request.app.state
    result = await lifecycle.revoke(state.session, state.provider, kind)
    label = kind.value.capitalize()
    return _render(request, result, "Token Revoked", f"{label} Token Revoked")


@router.get("/tokeninfo")
async def token_info(request: Request):
    state = request.app.state
    result = await lifecycle.token_info(state.session, state.provider)
    return _render(request, result, "Token Info", "Token Information")

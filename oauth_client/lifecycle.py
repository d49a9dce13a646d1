"""Token lifecycle operations: refresh, userinfo, introspection, revocation.

Each operation checks its precondition against the session first and
returns a missing-token result without calling the provider when it is
not met.
"""

import logging

from oauth_client.provider import ProviderClient
from oauth_client.results import OAuthResult
from oauth_client.session import Session, TokenKind, TokenSet

logger = logging.getLogger(__name__)


def _missing(kind: TokenKind) -> OAuthResult:
    logger.info(f"[AUTH] No {kind.value} token in session, provider not called")
    return OAuthResult.missing_token(f"{kind.value} token")


async def refresh(session: Session, provider: ProviderClient) -> OAuthResult:
    """Exchange the stored refresh token for a new access token.

    Refresh-token rotation: a refresh_token in the response replaces the
    stored one; when the provider omits it the previous one is kept. A
    successful refresh proves both tokens usable, so revocation markers
    are dropped.
    """
    refresh_token = session.refresh_token
    if not refresh_token:
        return _missing(TokenKind.REFRESH)

    response = await provider.request_token("refresh_token", refresh_token=refresh_token)
    if not response.ok or not response.body.get("access_token"):
        logger.warning(f"[TOKEN] Refresh failed with status {response.status_code}")
        return OAuthResult.provider_error(response)

    body = response.body
    rotated = bool(body.get("refresh_token"))
    # Read again after the await: an exchange may have completed meanwhile
    latest = session.tokens
    session.replace_tokens(
        TokenSet(
            access_token=body["access_token"],
            refresh_token=body["refresh_token"] if rotated else latest.refresh_token,
            id_token=body.get("id_token") or latest.id_token,
        )
    )
    logger.info(f"[TOKEN] Access token refreshed (refresh token rotated: {rotated})")
    return OAuthResult.success(response)


async def userinfo(session: Session, provider: ProviderClient) -> OAuthResult:
    """Fetch the user's profile claims with the stored access token."""
    access_token = session.access_token
    if not access_token:
        return _missing(TokenKind.ACCESS)

    response = await provider.userinfo(access_token)
    if not response.ok:
        return OAuthResult.provider_error(response)
    return OAuthResult.success(response)


async def introspect(session: Session, provider: ProviderClient, kind: TokenKind) -> OAuthResult:
    """Ask the provider about one of the stored tokens."""
    token = session.tokens.get(kind)
    if not token:
        return _missing(kind)

    response = await provider.introspect(token, kind.hint)
    if not response.ok:
        return OAuthResult.provider_error(response)
    return OAuthResult.success(response)


async def revoke(session: Session, provider: ProviderClient, kind: TokenKind) -> OAuthResult:
    """Revoke one of the stored tokens at the provider.

    The token stays in the session; a successful revocation only marks it
    as revoked so later failures can be attributed.
    """
    token = session.tokens.get(kind)
    if not token:
        return _missing(kind)

    request_body = {"token": token, "token_type_hint": kind.hint}
    response = await provider.revoke(token, kind.hint)
    data = {"revocation": {"request_body": request_body, "response": response.body}}

    if not response.ok:
        logger.warning(f"[TOKEN] Revocation of {kind.value} token failed with status {response.status_code}")
        return OAuthResult.provider_error(response, data=data)

    session.mark_revoked(kind)
    logger.info(f"[TOKEN] {kind.value.capitalize()} token revoked (kept in session, marked stale)")
    return OAuthResult.success(response, data=data)


async def token_info(session: Session, provider: ProviderClient) -> OAuthResult:
    """Introspect both tokens. Requires both to be present."""
    tokens = session.tokens
    if not tokens.access_token or not tokens.refresh_token:
        logger.info("[AUTH] Token info needs both tokens, provider not called")
        return OAuthResult.missing_token("access or refresh token")

    access = await provider.introspect(tokens.access_token, TokenKind.ACCESS.hint)
    refresh_ = await provider.introspect(tokens.refresh_token, TokenKind.REFRESH.hint)
    data = {"access_token": access.body, "refresh_token": refresh_.body}

    failed = next((r for r in (access, refresh_) if not r.ok), None)
    if failed is not None:
        return OAuthResult.provider_error(failed, data=data)
    return OAuthResult(ok=True, data=data, status_code=access.status_code)

"""OAuth 2.0 Authorization Code demo client - FastAPI application.

This app runs on the user's machine and acts as an OAuth client of a
third-party identity provider. It handles:
- The authorization redirect and callback (state check, PKCE, code exchange)
- Token refresh, userinfo, introspection and revocation
- One in-memory session for one interactive user (nothing is persisted)
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from browser import open_browser
from config import Settings
from oauth_client.endpoints import router as oauth_router
from oauth_client.middleware import RequestLoggingMiddleware
from oauth_client.provider import ProviderClient
from oauth_client.session import Session

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

BROWSER_DELAY = 0.5


async def open_browser_when_ready(url: str, delay: float = BROWSER_DELAY) -> None:
    """Open the start page once the server is accepting connections.

    Lifespan startup completes before uvicorn binds its socket, so this runs
    as a task that waits first. The launch itself blocks and runs in a thread.
    """
    await asyncio.sleep(delay)
    logger.info("[BROWSER] Opening initial authorization page in browser...")
    await asyncio.to_thread(open_browser, url)


def create_app(
    settings: Settings,
    session: Optional[Session] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the application around one session.

    Args:
        settings: Validated configuration
        session: Session to serve (default: a fresh one honouring ENABLE_PKCE)
        transport: Optional httpx transport for provider calls (tests)
    """
    session = session or Session(pkce=settings.enable_pkce)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"[STARTUP] Listening on {settings.base_url} (PKCE: {session.pkce_enabled})")
        browser_task = None
        if settings.open_browser:
            browser_task = asyncio.create_task(open_browser_when_ready(f"{settings.base_url}/"))
        yield
        if browser_task and not browser_task.done():
            browser_task.cancel()
        logger.info("[SHUTDOWN] Session discarded")

    app = FastAPI(
        title="OAuth Client Demo",
        description="OAuth 2.0 authorization code flow (with PKCE) against a third-party provider",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.session = session
    app.state.provider = ProviderClient(settings, transport=transport)

    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(oauth_router)

    @app.get("/health")
    async def health_check():
        """Health check with session status (never token values)."""
        return {"status": "healthy", "version": VERSION, "session": app.state.session.status()}

    return app

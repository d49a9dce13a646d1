"""Authorization code exchange.

The only transition from "unauthenticated" to "authenticated": a
successful exchange replaces all three session tokens from one response.
"""

import logging

from oauth_client.provider import ProviderClient
from oauth_client.results import OAuthResult
from oauth_client.session import Session, TokenSet

logger = logging.getLogger(__name__)


async def exchange_code(session: Session, provider: ProviderClient, code: str) -> OAuthResult:
    """Trade an authorization code for tokens.

    Sends code_verifier only when the session carries one (PKCE enabled).
    On a non-2xx status, or a body without an access_token, the provider's
    body is returned as an error and the session is left as it was.
    """
    response = await provider.request_token(
        "authorization_code",
        code=code,
        code_verifier=session.code_verifier,
    )
    logger.info(f"[TOKEN] Code exchange response status: {response.status_code}")

    if not response.ok or not response.body.get("access_token"):
        logger.warning(f"[TOKEN] Code exchange failed: {response.body.get('error', 'no access_token')}")
        return OAuthResult.provider_error(response)

    session.replace_tokens(TokenSet.from_response(response.body))
    logger.info(
        f"[TOKEN] Session authenticated (refresh_token: {session.refresh_token is not None}, "
        f"id_token: {session.id_token is not None})"
    )
    return OAuthResult.success(response)

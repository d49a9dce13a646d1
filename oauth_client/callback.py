"""Redirect callback validation.

The returned state must match the session's state exactly before the
authorization code is exchanged. This is the flow's CSRF defence.
"""

import logging
import secrets
from typing import Optional

from oauth_client.exchange import exchange_code
from oauth_client.provider import ProviderClient
from oauth_client.results import OAuthResult, PROVIDER_ERROR
from oauth_client.session import Session

logger = logging.getLogger(__name__)


class CallbackError(Exception):
    """Callback rejected before any provider call."""


class StateMismatchError(CallbackError):
    def __init__(self):
        super().__init__("State param mismatch")


class MissingCodeError(CallbackError):
    def __init__(self):
        super().__init__("Missing authorization code")


def validate_state(session: Session, returned_state: Optional[str]) -> None:
    """Raise StateMismatchError unless returned_state equals the session state.

    Byte-exact, constant-time comparison; no normalization.
    """
    if returned_state is None:
        raise StateMismatchError()
    if not secrets.compare_digest(returned_state.encode("utf-8"), session.state.encode("utf-8")):
        raise StateMismatchError()


async def handle_callback(
    session: Session,
    provider: ProviderClient,
    code: Optional[str],
    state: Optional[str],
    error: Optional[str] = None,
    error_description: Optional[str] = None,
) -> OAuthResult:
    """Validate the provider redirect and, if it checks out, exchange the code.

    Raises:
        StateMismatchError: state missing or different from the session's
        MissingCodeError: state matched but no code and no error was returned
    """
    try:
        validate_state(session, state)
    except StateMismatchError:
        logger.warning("[AUTH] Callback rejected: state mismatch")
        raise

    if error:
        logger.warning(f"[AUTH] Provider redirected with error: {error}")
        data = {"error": error}
        if error_description:
            data["error_description"] = error_description
        return OAuthResult(ok=False, data=data, error_kind=PROVIDER_ERROR, called_provider=False)

    if not code:
        logger.warning("[AUTH] Callback rejected: no code")
        raise MissingCodeError()

    logger.info("[AUTH] Callback state verified, exchanging code")
    return await exchange_code(session, provider, code)

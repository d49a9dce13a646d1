"""Authorization request construction."""

from urllib.parse import urlencode

from config import Settings
from oauth_client.pkce import CODE_CHALLENGE_METHOD, generate_code_challenge
from oauth_client.session import Session


def authorization_params(session: Session, settings: Settings) -> dict:
    """Query parameters for the provider's authorization endpoint."""
    params = {
        "response_type": "code",
        "client_id": settings.client_id,
        "redirect_uri": settings.redirect_uri,
        "scope": settings.scope,
        "state": session.state,
    }
    if session.code_verifier:
        params["code_challenge"] = generate_code_challenge(session.code_verifier)
        params["code_challenge_method"] = CODE_CHALLENGE_METHOD
    return params


def build_authorization_url(session: Session, settings: Settings) -> str:
    """Provider authorization URL the user is sent to."""
    query = urlencode(authorization_params(session, settings))
    return f"{settings.provider_url}/oauth/authorize?{query}"

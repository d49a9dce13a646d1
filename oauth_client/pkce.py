"""PKCE (Proof Key for Code Exchange) helpers.

Implements the client half of RFC 7636. Only the S256 method is used.
"""

import base64
import hashlib
import secrets

CODE_CHALLENGE_METHOD = "S256"


def _b64url(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def generate_code_verifier() -> str:
    """Generate a cryptographically random code verifier.

    Returns:
        32 random bytes, base64url-encoded without padding (43 characters)
    """
    return _b64url(secrets.token_bytes(32))


def generate_code_challenge(code_verifier: str) -> str:
    """Derive the S256 code challenge for a verifier.

    Args:
        code_verifier: The code verifier string

    Returns:
        Base64url-encoded SHA-256 digest without padding (43 characters)
    """
    digest = hashlib.sha256(code_verifier.encode("ascii")).digest()
    return _b64url(digest)


def generate_state() -> str:
    """Generate the opaque state nonce round-tripped through the redirect."""
    return secrets.token_urlsafe(16)

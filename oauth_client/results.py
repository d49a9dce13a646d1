"""Structured results returned by OAuth operations."""

from dataclasses import dataclass, field
from typing import Optional

from oauth_client.provider import ProviderResponse

MISSING_TOKEN = "missing_token"
PROVIDER_ERROR = "provider_error"


@dataclass(frozen=True)
class OAuthResult:
    """Outcome of an OAuth operation.

    data carries the provider payload unmodified on success and on provider
    errors; on a missing precondition it carries a token_unavailable error.
    """

    ok: bool
    data: dict = field(default_factory=dict)
    error_kind: Optional[str] = None
    status_code: Optional[int] = None
    called_provider: bool = True

    @classmethod
    def success(cls, response: ProviderResponse, data: dict = None) -> "OAuthResult":
        return cls(
            ok=True,
            data=response.body if data is None else data,
            status_code=response.status_code,
        )

    @classmethod
    def provider_error(cls, response: ProviderResponse, data: dict = None) -> "OAuthResult":
        return cls(
            ok=False,
            data=response.body if data is None else data,
            error_kind=PROVIDER_ERROR,
            status_code=response.status_code,
        )

    @classmethod
    def missing_token(cls, description: str) -> "OAuthResult":
        return cls(
            ok=False,
            data={
                "error": "token_unavailable",
                "error_description": f"No {description} available. Please authorize first.",
            },
            error_kind=MISSING_TOKEN,
            called_provider=False,
        )

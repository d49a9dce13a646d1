"""In-memory OAuth session.

Holds the one session this process serves: the state nonce, the PKCE
verifier and the tokens returned by the provider. Nothing is persisted;
the session lives and dies with the process.

Single interactive user only. The state and verifier are generated once
and never regenerated, so concurrent authorization attempts share them
rather than overwrite each other.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from oauth_client.pkce import generate_code_verifier, generate_state


class TokenKind(str, Enum):
    """Token selector used by introspection and revocation."""

    ACCESS = "access"
    REFRESH = "refresh"

    @property
    def hint(self) -> str:
        """Value sent as ``token_type_hint``."""
        return f"{self.value}_token"


@dataclass(frozen=True)
class TokenSet:
    """Tokens issued together by one provider response."""

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None

    @classmethod
    def from_response(cls, body: dict) -> "TokenSet":
        return cls(
            access_token=body.get("access_token"),
            refresh_token=body.get("refresh_token"),
            id_token=body.get("id_token"),
        )

    def get(self, kind: TokenKind) -> Optional[str]:
        if kind is TokenKind.ACCESS:
            return self.access_token
        return self.refresh_token


class Session:
    """The single OAuth session of this process."""

    def __init__(
        self,
        state: Optional[str] = None,
        code_verifier: Optional[str] = None,
        pkce: bool = True,
    ):
        self._state = state or generate_state()
        if pkce:
            self._code_verifier = code_verifier or generate_code_verifier()
        else:
            self._code_verifier = None
        self._tokens = TokenSet()
        self._revoked: frozenset = frozenset()

    @property
    def state(self) -> str:
        return self._state

    @property
    def code_verifier(self) -> Optional[str]:
        return self._code_verifier

    @property
    def pkce_enabled(self) -> bool:
        return self._code_verifier is not None

    @property
    def tokens(self) -> TokenSet:
        return self._tokens

    @property
    def access_token(self) -> Optional[str]:
        return self._tokens.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._tokens.refresh_token

    @property
    def id_token(self) -> Optional[str]:
        return self._tokens.id_token

    @property
    def revoked(self) -> frozenset:
        return self._revoked

    @property
    def is_authenticated(self) -> bool:
        return self._tokens.access_token is not None

    def replace_tokens(self, tokens: TokenSet) -> None:
        """Swap in a new token set in a single assignment and drop revocation markers."""
        self._tokens = tokens
        self._revoked = frozenset()

    def mark_revoked(self, kind: TokenKind) -> None:
        """Record that a held token was revoked upstream. The token is kept."""
        self._revoked = self._revoked | {kind}

    def status(self) -> dict:
        """Session summary without any token values."""
        if not self.is_authenticated:
            phase = "unauthenticated"
        elif self._revoked:
            phase = "stale"
        else:
            phase = "authenticated"
        return {
            "phase": phase,
            "pkce": self.pkce_enabled,
            "has_access_token": self.access_token is not None,
            "has_refresh_token": self.refresh_token is not None,
            "has_id_token": self.id_token is not None,
            "revoked": sorted(kind.value for kind in self._revoked),
        }

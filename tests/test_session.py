"""Unit tests for the in-memory session."""

import pytest

from oauth_client.session import Session, TokenKind, TokenSet


class TestSessionConstruction:

    def test_generates_state_and_verifier(self):
        session = Session()
        assert session.state
        assert session.code_verifier
        assert session.pkce_enabled

    def test_without_pkce(self):
        session = Session(pkce=False)
        assert session.code_verifier is None
        assert not session.pkce_enabled

    def test_starts_unauthenticated(self):
        session = Session(state="abc123")
        assert session.tokens == TokenSet()
        assert session.status()["phase"] == "unauthenticated"

    def test_state_is_read_only(self):
        session = Session(state="abc123")
        with pytest.raises(AttributeError):
            session.state = "other"


class TestTokenUpdates:

    def test_replace_tokens_swaps_whole_set(self, session):
        session.replace_tokens(TokenSet("A", "R", "I"))
        assert (session.access_token, session.refresh_token, session.id_token) == ("A", "R", "I")

        session.replace_tokens(TokenSet("A2", "R2", None))
        assert session.tokens == TokenSet("A2", "R2", None)

    def test_token_set_is_immutable(self):
        tokens = TokenSet("A", "R", "I")
        with pytest.raises(AttributeError):
            tokens.access_token = "B"

    def test_from_response_ignores_extra_fields(self):
        tokens = TokenSet.from_response({"access_token": "A", "expires_in": 10})
        assert tokens == TokenSet("A", None, None)

    def test_mark_revoked_keeps_token(self, authenticated_session):
        authenticated_session.mark_revoked(TokenKind.ACCESS)
        assert authenticated_session.access_token == "A"
        assert authenticated_session.status()["phase"] == "stale"
        assert authenticated_session.status()["revoked"] == ["access"]

    def test_replace_clears_revocation_markers(self, authenticated_session):
        authenticated_session.mark_revoked(TokenKind.ACCESS)
        authenticated_session.mark_revoked(TokenKind.REFRESH)
        authenticated_session.replace_tokens(TokenSet("A2", "R", "I"))
        assert authenticated_session.revoked == frozenset()
        assert authenticated_session.status()["phase"] == "authenticated"

    def test_status_never_contains_token_values(self, authenticated_session):
        status = authenticated_session.status()
        assert "A" not in status.values()
        assert status["has_access_token"] is True
        assert status["has_id_token"] is True


def test_token_kind_hint():
    assert TokenKind.ACCESS.hint == "access_token"
    assert TokenKind.REFRESH.hint == "refresh_token"

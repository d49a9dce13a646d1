"""Unit tests for the PKCE helpers."""

import re

from oauth_client.pkce import generate_code_challenge, generate_code_verifier, generate_state

BASE64URL = re.compile(r"^[A-Za-z0-9_-]+$")


class TestCodeVerifier:

    def test_length_and_alphabet(self):
        verifier = generate_code_verifier()
        assert len(verifier) == 43
        assert BASE64URL.match(verifier)

    def test_unique(self):
        assert len({generate_code_verifier() for _ in range(50)}) == 50


class TestCodeChallenge:

    def test_rfc7636_vector(self):
        """Appendix B of RFC 7636."""
        verifier = "dBjftJeZ4CVP-mB92K27uhbUJU1p1r_wW1gFWFOEjXk"
        assert generate_code_challenge(verifier) == "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM"

    def test_deterministic(self):
        verifier = generate_code_verifier()
        assert generate_code_challenge(verifier) == generate_code_challenge(verifier)

    def test_fixed_length_without_padding_or_unsafe_chars(self):
        for _ in range(50):
            challenge = generate_code_challenge(generate_code_verifier())
            assert len(challenge) == 43
            assert "+" not in challenge
            assert "/" not in challenge
            assert "=" not in challenge

    def test_different_verifiers_differ(self):
        assert generate_code_challenge("a" * 43) != generate_code_challenge("b" * 43)


def test_state_is_random_and_url_safe():
    first, second = generate_state(), generate_state()
    assert first != second
    assert BASE64URL.match(first)

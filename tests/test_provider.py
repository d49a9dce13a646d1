"""Unit tests for provider response normalization."""

import base64

import httpx
import pytest

from oauth_client.provider import ProviderClient, ProviderResponse


def test_ok_requires_2xx():
    assert ProviderResponse(200).ok
    assert ProviderResponse(204).ok
    assert not ProviderResponse(400).ok
    assert not ProviderResponse(None).ok


def test_no_timeout_by_default(settings):
    assert ProviderClient(settings).timeout is None


@pytest.mark.asyncio
class TestProviderClient:

    async def test_token_request_includes_client_credentials(self, provider, fake_provider):
        fake_provider.respond("POST", "/oauth/token", json={"access_token": "A"})
        response = await provider.request_token("authorization_code", code="xyz", code_verifier=None)

        assert response.ok
        form = fake_provider.form()
        assert form == {
            "client_id": "client-123",
            "client_secret": "secret-456",
            "grant_type": "authorization_code",
            "redirect_uri": "http://localhost:3000/callback",
            "code": "xyz",
        }
        assert fake_provider.last_request.headers["content-type"] == "application/x-www-form-urlencoded"

    async def test_introspect_uses_basic_auth(self, provider, fake_provider):
        fake_provider.respond("POST", "/oauth/token_info", json={"active": True})
        await provider.introspect("A", "access_token")

        expected = base64.b64encode(b"client-123:secret-456").decode()
        assert fake_provider.last_request.headers["authorization"] == f"Basic {expected}"
        assert fake_provider.form() == {"token": "A", "token_type_hint": "access_token"}

    async def test_empty_body_becomes_empty_dict(self, provider, fake_provider):
        fake_provider.respond("POST", "/oauth/token/revoke", status_code=200)
        response = await provider.revoke("A", "access_token")
        assert response == ProviderResponse(200, {})

    async def test_non_json_body_is_wrapped(self, provider, fake_provider):
        fake_provider.respond("GET", "/oauth/userinfo", status_code=502, content=b"<html>Bad Gateway</html>")
        response = await provider.userinfo("A")
        assert not response.ok
        assert response.body["error"] == "invalid_response"
        assert response.body["status"] == 502
        assert "Bad Gateway" in response.body["body"]

    async def test_non_object_json_is_wrapped(self, provider, fake_provider):
        fake_provider.respond("GET", "/oauth/userinfo", json=["a", "b"])
        response = await provider.userinfo("A")
        assert response.body == {"data": ["a", "b"]}

    async def test_transport_error_is_not_raised(self, provider, fake_provider):
        fake_provider.fail("GET", "/oauth/userinfo", httpx.ConnectError("connection refused"))
        response = await provider.userinfo("A")
        assert response.status_code is None
        assert response.body["error"] == "provider_unreachable"
        assert "connection refused" in response.body["error_description"]


@pytest.mark.asyncio
class TestProviderTimeout:

    async def test_configured_timeout_reaches_client_and_maps_to_unreachable(self, settings, fake_provider):
        settings = settings.model_copy(update={"provider_timeout": 2.5})
        provider = ProviderClient(settings, transport=fake_provider.transport)
        seen = {}

        def hang(request):
            seen.update(request.extensions["timeout"])
            raise httpx.ReadTimeout("read timed out", request=request)

        fake_provider.route("GET", "/oauth/userinfo", hang)
        response = await provider.userinfo("A")

        assert provider.timeout == 2.5
        assert seen == {"connect": 2.5, "read": 2.5, "write": 2.5, "pool": 2.5}
        assert response.status_code is None
        assert response.body["error"] == "provider_unreachable"
        assert "read timed out" in response.body["error_description"]

    async def test_no_timeout_by_default_reaches_client(self, provider, fake_provider):
        seen = {}

        def record(request):
            seen.update(request.extensions["timeout"])
            return httpx.Response(200, json={})

        fake_provider.route("GET", "/oauth/userinfo", record)
        await provider.userinfo("A")

        assert seen == {"connect": None, "read": None, "write": None, "pool": None}

"""Shared fixtures: settings, a session with a known state, and a fake provider."""

from urllib.parse import parse_qs

import httpx
import pytest

from config import Settings
from oauth_client.provider import ProviderClient
from oauth_client.session import Session

PROVIDER_URL = "https://clerk.example.test"


class FakeProvider:
    """Records outbound requests and answers from canned responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes = {}

    def respond(self, method: str, path: str, status_code: int = 200, json=None, content: bytes = None):
        if json is not None:
            self._routes[(method, path)] = lambda request: httpx.Response(status_code, json=json)
        else:
            self._routes[(method, path)] = lambda request: httpx.Response(status_code, content=content or b"")

    def route(self, method: str, path: str, handler):
        """Answer with handler(request), which may inspect or act on the request."""
        self._routes[(method, path)] = handler

    def fail(self, method: str, path: str, exc: Exception):
        def raise_(request):
            raise exc
        self._routes[(method, path)] = raise_

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not_found"})
        return route(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def form(self, request: httpx.Request = None) -> dict:
        request = request or self.last_request
        return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


@pytest.fixture
def settings():
    return Settings(
        fapi_url=PROVIDER_URL,
        client_id="client-123",
        client_secret="secret-456",
        port=3000,
        scope="email profile",
        enable_pkce=True,
        open_browser=False,
    )


@pytest.fixture
def session():
    return Session(state="abc123")


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def provider(settings, fake_provider):
    return ProviderClient(settings, transport=fake_provider.transport)


@pytest.fixture
def token_response():
    return {
        "access_token": "A",
        "refresh_token": "R",
        "id_token": "I",
        "token_type": "Bearer",
        "expires_in": 7200,
        "scope": "email profile",
    }


@pytest.fixture
def authenticated_session(session, token_response):
    from oauth_client.session import TokenSet
    session.replace_tokens(TokenSet.from_response(token_response))
    return session

"""Outbound calls to the identity provider.

Every call returns a ProviderResponse instead of raising: provider errors
are data the caller shows to the user, not fatal conditions.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderResponse:
    """Normalized provider reply. status_code is None when the call never completed."""

    status_code: Optional[int]
    body: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status_code is not None and 200 <= self.status_code < 300


def _parse_body(response: httpx.Response) -> dict:
    if not response.content:
        return {}
    try:
        data = response.json()
    except ValueError:
        return {
            "error": "invalid_response",
            "status": response.status_code,
            "body": response.text,
        }
    if isinstance(data, dict):
        return data
    return {"data": data}


class ProviderClient:
    """HTTP client for the provider's OAuth endpoints.

    Args:
        settings: Client configuration (provider URL, credentials, timeout)
        transport: Optional httpx transport, used by tests to fake the provider
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.provider_url
        self.client_id = settings.client_id
        self.client_secret = settings.client_secret
        self.redirect_uri = settings.redirect_uri
        self.timeout = settings.provider_timeout
        self._transport = transport

    @property
    def token_endpoint(self) -> str:
        return f"{self.base_url}/oauth/token"

    @property
    def userinfo_endpoint(self) -> str:
        return f"{self.base_url}/oauth/userinfo"

    @property
    def introspection_endpoint(self) -> str:
        return f"{self.base_url}/oauth/token_info"

    @property
    def revocation_endpoint(self) -> str:
        return f"{self.base_url}/oauth/token/revoke"

    async def _send(self, method: str, url: str, **kwargs) -> ProviderResponse:
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"[PROVIDER] {method} {url} failed: {e!r}")
            return ProviderResponse(
                status_code=None,
                body={"error": "provider_unreachable", "error_description": str(e) or repr(e)},
            )

        logger.info(f"[PROVIDER] {method} {url} -> {response.status_code}")
        return ProviderResponse(status_code=response.status_code, body=_parse_body(response))

    async def request_token(self, grant_type: str, **params) -> ProviderResponse:
        """POST to the token endpoint with client credentials in the form body."""
        form = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": grant_type,
            "redirect_uri": self.redirect_uri,
        }
        form.update({key: value for key, value in params.items() if value is not None})
        return await self._send("POST", self.token_endpoint, data=form)

    async def userinfo(self, access_token: str) -> ProviderResponse:
        return await self._send(
            "GET",
            self.userinfo_endpoint,
            headers={"Authorization": f"Bearer {access_token}"},
        )

    async def introspect(self, token: str, token_type_hint: str) -> ProviderResponse:
        return await self._send(
            "POST",
            self.introspection_endpoint,
            data={"token": token, "token_type_hint": token_type_hint},
            auth=(self.client_id, self.client_secret),
        )

    async def revoke(self, token: str, token_type_hint: str) -> ProviderResponse:
        return await self._send(
            "POST",
            self.revocation_endpoint,
            data={"token": token, "token_type_hint": token_type_hint},
            auth=(self.client_id, self.client_secret),
        )

"""HTTP client for the Habo backend."""

from __future__ import annotations

from typing import Any

import httpx

from habo_data.models import APIConfig


def _encode_params(params: dict[str, Any] | None) -> dict[str, str] | None:
    """Render query parameters the way the backend parses them."""
    if params is None:
        return None
    encoded = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            encoded[key] = "true" if value else "false"
        else:
            encoded[key] = str(value)
    return encoded


class APIClient:
    """Thin async HTTP client; returns responses without judging their status."""

    def __init__(
        self,
        api_config: APIConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if api_config is None:
            from habo_data.services.config_service import get_config_service

            api_config = get_config_service().config.api
        self.base_url = api_config.endpoint.rstrip("/")
        self.timeout = api_config.timeout
        self.user_id = api_config.user_id
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and ensure the client is closed."""
        await self.close()

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def user_path(self, family: str, suffix: str = "") -> str:
        """Build a ``/{user}/{family}{suffix}`` path."""
        return f"/{self.user_id}/{family}{suffix}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Make an HTTP request to the backend.

        Raises:
            httpx.RequestError: If no response could be obtained
        """
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"
        return await client.request(
            method=method,
            url=url,
            params=_encode_params(params),
            json=json,
        )

    async def get(
        self, path: str, *, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, params=params, json=json)

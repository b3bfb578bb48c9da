"""Shared plumbing for the REST API adapters."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from habo_data.repositories.exceptions import SchemaMismatchError, TransportError
from habo_data.services.api.client import APIClient

logger = logging.getLogger(__name__)


class RestApiRepository:
    """Base for adapters that talk to ``/{user}/{family}`` endpoints.

    Every adapter of one storage strategy shares the same APIClient.
    """

    family = ""

    def __init__(self, client: APIClient | None = None):
        self._client = client

    @property
    def client(self) -> APIClient:
        """Get API client (lazy initialization)."""
        if self._client is None:
            self._client = APIClient()
        return self._client

    async def _request(
        self,
        method: str,
        action: str,
        suffix: str = "",
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send a request without checking its status.

        Raises:
            TransportError: If no response was received
        """
        path = self.client.user_path(self.family, suffix)
        logger.debug("%s %s params=%s", method, path, params)
        try:
            return await self.client.request(method, path, params=params, json=json)
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise TransportError(action, None, str(e)) from e

    @staticmethod
    def _expect_ok(response: httpx.Response, action: str) -> httpx.Response:
        if response.status_code != 200:
            logger.warning(
                "Backend refused to %s: %s %s", action, response.status_code, response.text
            )
            raise TransportError(action, response.status_code, response.text)
        return response

    async def _get(
        self, action: str, suffix: str = "", *, params: dict[str, Any] | None = None
    ) -> Any:
        """GET and decode a JSON body, requiring status 200."""
        response = self._expect_ok(
            await self._request("GET", action, suffix, params=params), action
        )
        return self._decode(response, action)

    async def _post(
        self,
        action: str,
        suffix: str = "",
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """POST, requiring status 200."""
        response = await self._request("POST", action, suffix, params=params, json=json)
        return self._expect_ok(response, action)

    @staticmethod
    def _decode(response: httpx.Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise SchemaMismatchError(f"Failed to {action}: response is not JSON") from e

    @staticmethod
    def _envelope(payload: Any, key: str, action: str, expected: type = list) -> Any:
        """Unwrap ``{key: value}``, checking the value's type.

        A missing key reads as an empty collection.
        """
        if not isinstance(payload, Mapping):
            raise SchemaMismatchError(f"Failed to {action}: expected a JSON object")
        value = payload.get(key)
        if value is None:
            return expected()
        if not isinstance(value, expected):
            raise SchemaMismatchError(
                f"Failed to {action}: '{key}' is not a {expected.__name__}"
            )
        return value

"""Shared plumbing for the bearer-authenticated HTTP services.

Both remote services speak JSON over HTTPS and authenticate with a bearer
token. ServiceClient owns one lazily created httpx.AsyncClient and turns
transport problems into TransportError and undecodable bodies into
MalformedResponse, so callers never need to know about httpx.
"""

from __future__ import annotations

from typing import Any

import httpx

from grouchy.config.logging import get_logger
from grouchy.errors import MalformedResponse, TransportError

logger = get_logger("clients")


class ServiceClient:
    """Bearer-authenticated JSON client for one remote service.

    Usage:
        client = ServiceClient("https://api.example.com/v1", "sk-...")
        response = await client.request("GET", "/things/1")
        data = client.json(response)
        await client.close()
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json",
                },
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def request(self, method: str, path: str, json: dict[str, Any] | None = None) -> httpx.Response:
        """Issue one request and return the 2xx response.

        Raises:
            TransportError: network failure, timeout or non-2xx status.
        """
        client = self._get_client()
        try:
            response = await client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            logger.warning(f"{method} {path} returned {response.status_code}")
            raise TransportError(
                f"{method} {path} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def json(response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body.

        Raises:
            MalformedResponse: body is not JSON or not an object.
        """
        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response from {response.url} is not JSON") from exc
        if not isinstance(data, dict):
            raise MalformedResponse(f"Response from {response.url} is not a JSON object")
        return data

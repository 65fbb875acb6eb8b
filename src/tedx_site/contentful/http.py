"""Contentful HTTP client.

Async HTTP client for the Contentful GraphQL delivery endpoint with bearer
authentication, a bounded request timeout and response tracking. Requests
are never retried; failures surface to the caller.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from tedx_site import __version__
from tedx_site.config import ContentfulConfig
from tedx_site.errors import QueryError, QueryTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class ContentfulResponse:
    """Contentful API response with parsed data and metadata."""

    status_code: int
    data: Any
    headers: httpx.Headers
    url: str = ""

    @property
    def is_success(self) -> bool:
        """Check if response was successful (2xx status code)."""
        return 200 <= self.status_code < 300

    @property
    def first_error_message(self) -> str | None:
        """Message of the first GraphQL error in the payload, if any."""
        if not isinstance(self.data, dict):
            return None
        errors = self.data.get("errors") or []
        if not errors or not isinstance(errors[0], dict):
            return None
        return errors[0].get("message")


class ContentfulClient:
    """Async HTTP client for the Contentful GraphQL endpoint."""

    def __init__(
        self,
        config: ContentfulConfig,
    ) -> None:
        """Initialize the Contentful HTTP client.

        Args:
            config: Contentful section of the configuration. Credentials must be set.

        Raises:
            ConfigError: If the space id or access token is missing.
        """
        config.require_credentials()
        self._config = config
        self._timeout_ms = config.timeout_ms
        self._endpoint = config.endpoint
        self._client: httpx.AsyncClient | None = None
        self.requests_made = 0

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def timeout_ms(self) -> int:
        return self._timeout_ms

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._config.access_token}",
            "User-Agent": f"tedx-site/{__version__}",
        }

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout_ms / 1000,
                headers=self._get_headers(),
            )
        return self._client

    async def post(self, json: dict[str, Any]) -> ContentfulResponse:
        """POST a JSON body to the GraphQL endpoint.

        Args:
            json: Request body, typically ``{"query": ..., "variables": ...}``.

        Returns:
            ContentfulResponse with the parsed payload.

        Raises:
            QueryTimeoutError: If the request exceeds the configured timeout.
            QueryError: On transport failures.
        """
        client = await self._ensure_client()
        self.requests_made += 1
        logger.debug("POST %s (request %d)", self._endpoint, self.requests_made)

        try:
            response = await client.post(self._endpoint, json=json)
        except httpx.TimeoutException as e:
            logger.warning("Timeout after %dms for POST %s", self._timeout_ms, self._endpoint)
            raise QueryTimeoutError(self._timeout_ms) from e
        except httpx.TransportError as e:
            logger.warning("Network error for POST %s: %s", self._endpoint, e)
            raise QueryError(f"Contentful request failed: {e}") from e

        data = None
        if response.content:
            try:
                data = response.json()
            except ValueError as e:
                logger.warning("Failed to parse JSON response: %s", e)
                data = response.text

        return ContentfulResponse(
            status_code=response.status_code,
            data=data,
            headers=response.headers,
            url=str(response.url),
        )

    async def close(self) -> None:
        """Close the HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ContentfulClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

"""Contentful GraphQL client.

Executes query documents against the delivery endpoint and unwraps the
``data`` payload, surfacing HTTP and GraphQL failures as ``QueryError``.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from tedx_site.contentful.http import ContentfulClient
from tedx_site.contentful.queries import (
    EMBEDDED_VIDEOS,
    EVENT_BY_YEAR,
    EVENT_LIST,
    STATIC_IMAGES_BY_CODE,
    TEAM_BY_YEAR,
    ContentQuery,
)
from tedx_site.errors import QueryError

logger = logging.getLogger(__name__)


def _collection_items(data: Mapping[str, Any], collection: str) -> list[dict[str, Any]]:
    """Return the non-null ``items`` of a collection field."""
    items = (data.get(collection) or {}).get("items") or []
    return [item for item in items if isinstance(item, dict)]


class GraphQLClient:
    """GraphQL client for the Contentful content model."""

    def __init__(self, http_client: ContentfulClient) -> None:
        self._http = http_client

    async def execute(
        self,
        query: ContentQuery | str,
        variables: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: Query document or ContentQuery.
            variables: Optional query variables.

        Returns:
            GraphQL response data payload (empty dict when the API returns null).

        Raises:
            QueryError: On a non-2xx status or a payload containing errors.
            QueryTimeoutError: If the request exceeds the configured timeout.
        """
        if isinstance(query, ContentQuery):
            name, document = query.name, query.document
        else:
            name, document = "anonymous", query
        if not document or not document.strip():
            raise QueryError("Missing GraphQL query")

        logger.debug("Executing %s with variables %s", name, dict(variables or {}))
        response = await self._http.post(
            json={"query": document, "variables": dict(variables or {})},
        )

        if not response.is_success:
            message = response.first_error_message or "Unknown error"
            logger.error("Query %s failed: status=%d, %s", name, response.status_code, message)
            raise QueryError(f"Contentful request failed ({response.status_code}): {message}")

        if not isinstance(response.data, dict):
            raise QueryError("Invalid GraphQL response format")

        if response.data.get("errors"):
            message = response.first_error_message or "Contentful response contained errors"
            logger.error("Query %s returned errors: %s", name, response.data["errors"])
            raise QueryError(message)

        data = response.data.get("data")
        return data if isinstance(data, dict) else {}

    async def query_static_images(self, codes: Sequence[str]) -> list[dict[str, Any]]:
        """Fetch image assets for a batch of codes in one request."""
        data = await self.execute(
            STATIC_IMAGES_BY_CODE,
            {"codes": list(codes), "limit": max(1, len(codes))},
        )
        return _collection_items(data, "imageStaticCollection")

    async def query_event_list(self, limit: int) -> list[dict[str, Any]]:
        """Fetch the lightweight event list, newest year first."""
        data = await self.execute(EVENT_LIST, {"limit": limit})
        return _collection_items(data, "eventCollection")

    async def query_event_by_year(self, year: int) -> dict[str, Any] | None:
        """Fetch full detail for the event of one year."""
        data = await self.execute(EVENT_BY_YEAR, {"year": year})
        items = _collection_items(data, "eventCollection")
        return items[0] if items else None

    async def query_team_by_year(self, year: int, limit: int) -> list[dict[str, Any]]:
        """Fetch the team roster cards for one year."""
        data = await self.execute(TEAM_BY_YEAR, {"year": year, "limit": limit})
        return _collection_items(data, "newTeamMemberCardCollection")

    async def query_embedded_videos(self, limit: int) -> list[dict[str, Any]]:
        """Fetch embedded video entries, newest event year first."""
        data = await self.execute(EMBEDDED_VIDEOS, {"limit": limit})
        return _collection_items(data, "newEmbeddedVideoCollection")

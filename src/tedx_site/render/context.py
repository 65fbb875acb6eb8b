"""Per-build state shared by the page renderers."""

import logging
from typing import Any

from tedx_site.config import Config
from tedx_site.contentful.graphql import GraphQLClient
from tedx_site.contentful.http import ContentfulClient
from tedx_site.paths import PathManager
from tedx_site.render.assets import AssetCache, AssetResolver

logger = logging.getLogger(__name__)


class BuildContext:
    """Config, paths, the Contentful clients and the asset cache of one build.

    The asset cache lives exactly as long as the context. Use as an async
    context manager so the HTTP client is closed when the build ends.
    """

    def __init__(self, config: Config, http_client: ContentfulClient | None = None) -> None:
        """Initialize the build context.

        Args:
            config: Validated configuration.
            http_client: Optional pre-built HTTP client.

        Raises:
            ConfigError: If Contentful credentials are missing.
        """
        self.config = config
        self.paths = PathManager(config)
        self.http = http_client if http_client is not None else ContentfulClient(config.contentful)
        self.graphql = GraphQLClient(self.http)
        self.asset_cache = AssetCache()
        self.assets = AssetResolver(self.graphql, self.asset_cache)

    async def close(self) -> None:
        logger.debug(
            "Closing build context (%d request(s), %d cached asset code(s))",
            self.http.requests_made,
            len(self.asset_cache),
        )
        self.asset_cache.clear()
        await self.http.close()

    async def __aenter__(self) -> "BuildContext":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

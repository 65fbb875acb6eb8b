"""Path management for site templates and build output."""

from pathlib import Path
from typing import Literal

from tedx_site.config import Config

PageName = Literal["landing", "events", "about", "team", "watch"]

# Template path of each pre-rendered page, relative to the site root.
# Output mirrors the same relative path under dist/.
PAGE_TEMPLATES: dict[str, str] = {
    "landing": "index.html",
    "events": "sites/events/events.html",
    "about": "sites/about/about.html",
    "team": "sites/team/team.html",
    "watch": "sites/watch/watch.html",
}

# Pages with no CMS content of their own; only static images are resolved.
STATIC_PAGES: tuple[str, ...] = (
    "sites/contact/contact.html",
    "sites/sponsors/sponsors.html",
)

# Copied verbatim into dist/ before any page is rendered. Missing entries are skipped.
STATIC_ASSET_ENTRIES: tuple[str, ...] = (
    "assets",
    "partials",
    "sites",
    "styles.css",
    "app.js",
    "README.md",
    "notes.md",
)


class PathManager:
    """Resolves template and output paths.

    - Templates: <site.root>/<relative path>
    - Output: <site.dist>/<relative path> (default <site.root>/dist)
    """

    def __init__(self, config: Config) -> None:
        self.config = config
        self.root = Path(config.site.root)
        self.dist_root = Path(config.site.dist_dir)

    def template_path(self, relative: str) -> Path:
        return self.root / relative

    def output_path(self, relative: str) -> Path:
        return self.dist_root / relative

    def page_template(self, page: PageName) -> Path:
        """Template path for a pre-rendered page."""
        return self.template_path(PAGE_TEMPLATES[page])

    def page_output(self, page: PageName) -> Path:
        """Output path for a pre-rendered page."""
        return self.output_path(PAGE_TEMPLATES[page])

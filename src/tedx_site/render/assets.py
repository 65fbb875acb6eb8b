"""Static image resolution.

Fills ``src``/``alt`` of image elements from ``ImageStatic`` CMS entries,
looked up by code. Lookups are batched per page and cached per build, so
each code is queried at most once while the cache lives.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from tedx_site.contentful.graphql import GraphQLClient
from tedx_site.errors import QueryError
from tedx_site.models import ImageAsset
from tedx_site.normalize.urls import normalize_url, with_params

logger = logging.getLogger(__name__)

# Accepted data-attribute spellings, checked in priority order. The first
# non-blank value wins. This is the only place the aliases are listed.
CODE_ATTRS = ("data-static-code", "data-cf-code", "data-static-image-code", "data-image-code")
PARAMS_ATTRS = ("data-static-params", "data-static-image-params", "data-image-params")
ALT_ATTRS = ("data-static-alt", "data-static-image-alt", "data-image-alt")
PLACEHOLDER_ATTRS = ("data-placeholder", "data-static-placeholder", "data-static-image-placeholder")

SCAN_SELECTORS = (
    "[data-static-code]",
    "[data-static-image-code]",
    "[data-image-code]",
    "[data-cf-code]",
)


def pick_attr(element: Tag | None, names: Sequence[str]) -> str:
    """Return the first non-blank attribute among ``names``, or ''."""
    if element is None:
        return ""
    for name in names:
        value = element.get(name)
        if isinstance(value, str) and value.strip():
            return value
    return ""


def element_alt(element: Tag | None) -> str:
    """Alt text declared on the element: data alt aliases, then its own ``alt``."""
    return pick_attr(element, (*ALT_ATTRS, "alt")).strip()


def _attr(element: Tag, name: str) -> str:
    value = element.get(name)
    return value if isinstance(value, str) else ""


@dataclass
class AssetTarget:
    """An explicit resolution request, located by element, selector or id."""

    code: str
    selector: str | None = None
    id: str | None = None
    element: Tag | None = None
    params: str | None = None
    alt: str | None = None
    placeholder: str | None = None


@dataclass
class ResolvedTarget:
    element: Tag
    code: str
    params: str
    fallback_alt: str
    placeholder: str


class AssetCache:
    """Code -> asset map owned by one build. ``None`` marks a known-absent code."""

    def __init__(self) -> None:
        self._assets: dict[str, ImageAsset | None] = {}

    def __contains__(self, code: object) -> bool:
        return code in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def get(self, code: str) -> ImageAsset | None:
        return self._assets.get(code)

    def missing(self, codes: Iterable[str]) -> list[str]:
        return [code for code in codes if code not in self._assets]

    def mark_absent(self, codes: Iterable[str]) -> None:
        for code in codes:
            self._assets[code] = None

    def store(self, asset: ImageAsset) -> None:
        self._assets[asset.code] = asset

    def clear(self) -> None:
        self._assets.clear()


def collect_scan_targets(
    document: BeautifulSoup,
    selectors: Sequence[str],
    default_params: str,
) -> list[ResolvedTarget]:
    """Targets declared in markup through the data-attribute aliases."""
    targets = []
    for selector in selectors:
        for element in document.select(selector):
            code = pick_attr(element, CODE_ATTRS)
            if not code:
                continue
            targets.append(
                ResolvedTarget(
                    element=element,
                    code=code,
                    params=pick_attr(element, PARAMS_ATTRS) or default_params,
                    fallback_alt=pick_attr(element, ALT_ATTRS) or _attr(element, "alt"),
                    placeholder=pick_attr(element, PLACEHOLDER_ATTRS),
                )
            )
    return targets


def collect_explicit_targets(
    document: BeautifulSoup,
    items: Sequence[AssetTarget],
    default_params: str,
) -> list[ResolvedTarget]:
    """Targets supplied by a renderer. Unlocatable or code-less items are skipped."""
    targets = []
    for item in items:
        element = item.element
        if element is None and item.selector:
            element = document.select_one(item.selector)
        if element is None and item.id:
            found = document.find(id=item.id)
            element = found if isinstance(found, Tag) else None
        if element is None or not item.code:
            continue
        targets.append(
            ResolvedTarget(
                element=element,
                code=item.code,
                params=item.params or default_params,
                fallback_alt=item.alt or _attr(element, "alt"),
                placeholder=item.placeholder or _attr(element, "data-placeholder"),
            )
        )
    return targets


def apply_asset(target: ResolvedTarget, asset: ImageAsset | None) -> None:
    """Set src and alt on the target element."""
    element = target.element
    url = normalize_url(asset.file.url if asset and asset.file else None)
    if url:
        element["src"] = with_params(url, target.params)
    elif target.placeholder and not _attr(element, "src"):
        element["src"] = target.placeholder

    alt = (
        (asset.alt if asset else None)
        or (asset.file.description if asset and asset.file else None)
        or target.fallback_alt
        or _attr(element, "alt")
    )
    if alt:
        element["alt"] = alt


class AssetResolver:
    """Resolves static image codes to CDN URLs through a shared cache."""

    def __init__(self, graphql: GraphQLClient, cache: AssetCache | None = None) -> None:
        self._graphql = graphql
        self.cache = cache if cache is not None else AssetCache()

    async def fetch_assets(self, codes: Sequence[str]) -> dict[str, ImageAsset | None]:
        """Look up codes, querying only those not yet cached (in one request).

        Raises:
            QueryError: If the batched lookup fails.
        """
        missing = self.cache.missing(codes)
        if missing:
            logger.debug("Fetching %d static image(s): %s", len(missing), ", ".join(missing))
            items = await self._graphql.query_static_images(missing)
            self.cache.mark_absent(missing)
            for item in items:
                if item.get("code"):
                    self.cache.store(ImageAsset.model_validate(item))
        return {code: self.cache.get(code) for code in codes}

    async def resolve(
        self,
        document: BeautifulSoup,
        targets: Sequence[AssetTarget] = (),
        *,
        selectors: Sequence[str] = SCAN_SELECTORS,
        default_params: str = "",
        throw_on_error: bool = False,
    ) -> int:
        """Inject static images into ``document`` in place.

        Scan targets come from ``selectors``; explicit ``targets`` override a
        scan target on the same element. Returns the number of elements updated.

        Raises:
            QueryError: Only when ``throw_on_error`` is set and the lookup fails.
        """
        merged: dict[int, ResolvedTarget] = {}
        for target in collect_scan_targets(document, selectors, default_params):
            merged[id(target.element)] = target
        for target in collect_explicit_targets(document, targets, default_params):
            merged[id(target.element)] = target

        resolved = list(merged.values())
        codes = list(dict.fromkeys(target.code for target in resolved))
        if not codes:
            return 0

        try:
            assets = await self.fetch_assets(codes)
        except QueryError as e:
            logger.warning("Static images could not be fetched: %s", e)
            if throw_on_error:
                raise
            assets = dict.fromkeys(codes)

        for target in resolved:
            apply_asset(target, assets.get(target.code))

        found = sum(1 for code in codes if assets.get(code) is not None)
        logger.debug("Resolved %d/%d static image code(s)", found, len(codes))
        return len(resolved)

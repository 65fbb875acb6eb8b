"""Landing page: hero background image."""

import logging
from pathlib import Path

from bs4 import BeautifulSoup

from tedx_site.render.assets import CODE_ATTRS, PARAMS_ATTRS, AssetTarget, element_alt, pick_attr
from tedx_site.render.context import BuildContext
from tedx_site.render.document import by_id, load_template, write_output

logger = logging.getLogger(__name__)

HERO_ID = "hero-background"
HERO_PARAMS = "fm=webp&q=86&w=1400"
HERO_ALT = "TEDxKI hero background"


def hero_target(document: BeautifulSoup, configured_code: str) -> AssetTarget | None:
    """Target for the hero image, or None if the template has no hero element."""
    element = by_id(document, HERO_ID)
    if element is None:
        return None
    return AssetTarget(
        code=pick_attr(element, CODE_ATTRS) or configured_code,
        element=element,
        params=pick_attr(element, PARAMS_ATTRS) or HERO_PARAMS,
        alt=element_alt(element) or HERO_ALT,
    )


async def render_landing(context: BuildContext) -> Path:
    """Render ``index.html``.

    Asset lookup is strict here: a failed hero lookup fails the page.
    """
    document = load_template(context.paths.page_template("landing"))
    target = hero_target(document, context.config.pages.landing_hero_code)
    if target is None:
        logger.warning("Landing template has no #%s element", HERO_ID)
    else:
        await context.assets.resolve(document, [target], throw_on_error=True)
    return write_output(context.paths.page_output("landing"), document)

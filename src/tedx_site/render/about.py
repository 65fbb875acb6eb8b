"""About page: hero and story images."""

from pathlib import Path

from bs4 import BeautifulSoup

from tedx_site.config import PagesConfig
from tedx_site.render.assets import (
    CODE_ATTRS,
    PARAMS_ATTRS,
    AssetTarget,
    element_alt,
    pick_attr,
)
from tedx_site.render.context import BuildContext
from tedx_site.render.document import by_id, load_template, write_output

HERO_ID = "aboutHeroImage"
STORY_ID = "aboutStoryImage"
HERO_PARAMS = "fm=webp&q=86&w=1400"
STORY_PARAMS = "fm=webp&q=84&w=1200"
HERO_ALT = "TEDxKI community"
STORY_ALT = "TED community"

def configured_codes(pages: PagesConfig) -> list[str]:
    """Codes from ABOUT_IMAGE_CODES, else the single-code settings as (hero, story)."""
    if pages.about_image_codes:
        return list(pages.about_image_codes)
    return [pages.resolved_about_hero_code, pages.resolved_about_story_code]


def resolve_codes(document: BeautifulSoup, pages: PagesConfig) -> tuple[str, str]:
    """(hero, story) codes; an element's own data aliases win over configuration.

    The story image falls back to the resolved hero code.
    """
    codes = configured_codes(pages)
    hero = (
        pick_attr(by_id(document, HERO_ID), CODE_ATTRS)
        or (codes[0] if codes else "")
        or pages.resolved_about_hero_code
    )
    story = (
        pick_attr(by_id(document, STORY_ID), CODE_ATTRS)
        or (codes[1] if len(codes) > 1 else "")
        or hero
    )
    return hero.strip(), story.strip()


def about_targets(document: BeautifulSoup, pages: PagesConfig) -> list[AssetTarget]:
    hero_code, story_code = resolve_codes(document, pages)
    targets = []
    for element_id, code, params, alt in (
        (HERO_ID, hero_code, HERO_PARAMS, HERO_ALT),
        (STORY_ID, story_code, STORY_PARAMS, STORY_ALT),
    ):
        element = by_id(document, element_id)
        if element is None:
            continue
        targets.append(
            AssetTarget(
                code=code,
                element=element,
                params=pick_attr(element, PARAMS_ATTRS) or params,
                alt=element_alt(element) or alt,
            )
        )
    return targets


async def render_about(context: BuildContext) -> Path:
    document = load_template(context.paths.page_template("about"))
    await context.assets.resolve(document, about_targets(document, context.config.pages))
    return write_output(context.paths.page_output("about"), document)

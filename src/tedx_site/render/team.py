"""Team page: the year's roster grouped into team sections."""

import logging
from collections.abc import Sequence
from pathlib import Path

from bs4 import BeautifulSoup

from tedx_site.errors import EmptyContentError
from tedx_site.models import TeamMemberCard
from tedx_site.normalize.team import format_team_label, group_members
from tedx_site.render.cards import roster_card, team_section
from tedx_site.render.context import BuildContext
from tedx_site.render.document import load_template, replace_children, require_id, write_output

logger = logging.getLogger(__name__)

SECTIONS_ID = "teamSections"


def render_team_sections(members: Sequence[TeamMemberCard]) -> list[str]:
    """Section markup per team, in display order.

    The reveal index keeps counting across sections so the entrance
    animation runs top to bottom over the whole page.
    """
    sections = []
    reveal_index = 0
    for group in group_members(list(members)):
        cards = []
        for member in group.members:
            cards.append(roster_card(member, reveal_index))
            reveal_index += 1
        sections.append(
            team_section(
                format_team_label(group.name),
                cards,
                section_class="team-section",
                header_class="team-section__header",
                heading_tag="h2",
                title_class="team-section__title",
            )
        )
    return sections


def build_team_document(
    document: BeautifulSoup, members: Sequence[TeamMemberCard]
) -> BeautifulSoup:
    """Fill ``#teamSections``.

    Raises:
        TemplateMissingError: If the container element is absent.
    """
    container = require_id(document, SECTIONS_ID)
    replace_children(container, render_team_sections(members))
    return document


async def render_team(context: BuildContext) -> Path:
    pages = context.config.pages
    year = pages.resolved_team_year
    document = load_template(context.paths.page_template("team"))

    items = await context.graphql.query_team_by_year(year, pages.team_limit)
    members = [TeamMemberCard.model_validate(item) for item in items]
    if not members:
        raise EmptyContentError(f"No team members found for {year}")
    logger.info("Rendering %d team member(s) for %d", len(members), year)

    build_team_document(document, members)
    await context.assets.resolve(document)
    return write_output(context.paths.page_output("team"), document)

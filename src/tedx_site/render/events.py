"""Events page: year switcher, event header, people grids and event teams.

The page is rendered for one initial year; every fetched event is embedded
as JSON in ``#event-data`` so the browser can switch years without
another request.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

from tedx_site.contentful.graphql import GraphQLClient
from tedx_site.errors import EmptyContentError, QueryError
from tedx_site.models import Event, EventSummary, Person, Team
from tedx_site.normalize.dates import meta_line
from tedx_site.normalize.people import to_person_view
from tedx_site.normalize.urls import with_params
from tedx_site.render.cards import event_team_card, person_card, team_section
from tedx_site.render.context import BuildContext
from tedx_site.render.document import (
    by_id,
    embed_json,
    load_template,
    replace_children,
    set_hidden,
    set_html,
    set_text,
    write_output,
)
from tedx_site.render.fragments import render_fragment

logger = logging.getLogger(__name__)

EVENT_IMAGE_PARAMS = "fm=webp&q=85&w=1400"
DEFAULT_EVENT_ALT = "TEDxKI event"
DATA_ELEMENT_ID = "event-data"

# (grid id, section id) per person collection
PEOPLE_GRIDS = {
    "speakers": ("speakersGrid", "speakersSection"),
    "hosts": ("hostsGrid", "hostsSection"),
    "performers": ("performersGrid", "performersSection"),
}


@dataclass(frozen=True)
class FetchedEvent:
    """A validated event together with the record it came from."""

    event: Event
    record: dict[str, Any]

    @property
    def year(self) -> int | None:
        return self.event.year


async def fetch_event_summaries(graphql: GraphQLClient, limit: int) -> list[EventSummary]:
    """Event list entries that carry an integer year.

    Raises:
        EmptyContentError: If no usable entry is returned.
    """
    items = await graphql.query_event_list(limit)
    summaries = [EventSummary.model_validate(item) for item in items]
    usable = [summary for summary in summaries if summary.year is not None]
    if not usable:
        raise EmptyContentError("No events with a year identifier found in Contentful")
    logger.info("Found %d event(s)", len(usable))
    return usable


async def fetch_event_details(
    graphql: GraphQLClient, summaries: Sequence[EventSummary]
) -> list[FetchedEvent]:
    """Fetch full detail for each year, one request at a time.

    A year whose request fails (or returns nothing) is logged and skipped.

    Raises:
        EmptyContentError: If no year could be fetched.
    """
    fetched = []
    for summary in summaries:
        if summary.year is None:
            continue
        try:
            record = await graphql.query_event_by_year(summary.year)
        except QueryError as e:
            logger.warning("Skipping event %d: %s", summary.year, e)
            continue
        if record is None:
            logger.warning("Skipping event %d: no detail returned", summary.year)
            continue
        fetched.append(FetchedEvent(event=Event.model_validate(record), record=record))

    if not fetched:
        raise EmptyContentError("Event details could not be loaded for any year")
    return fetched


def select_initial(events: Sequence[FetchedEvent], preferred_year: int | None) -> FetchedEvent:
    """The configured year when it was fetched, otherwise the first (newest) event."""
    if preferred_year is not None:
        for item in events:
            if item.year == preferred_year:
                return item
        logger.info(
            "EVENT_YEAR %d not among fetched events, using %s", preferred_year, events[0].year
        )
    return events[0]


def event_label(event: Event) -> str:
    return f"TEDxKI {event.year}" if event.year is not None else "TEDxKI"


def render_switcher(
    document: BeautifulSoup, events: Sequence[Event], active_year: int | None
) -> None:
    block = by_id(document, "eventSwitcherBlock")
    switcher = by_id(document, "eventSwitcher")
    if switcher is not None:
        options = [
            {
                "year": event.year,
                "label": event.name or event_label(event),
                "active": event.year == active_year,
            }
            for event in events
        ]
        replace_children(switcher, [render_fragment("event_switcher.html", options=options)])
    if block is not None:
        set_hidden(block, not events)


def render_header(document: BeautifulSoup, event: Event) -> None:
    set_text(document, "eventYear", event_label(event))
    set_text(document, "eventName", event.name)
    set_text(document, "eventMeta", meta_line(event.start_time, event.end_time, event.location))
    set_html(document, "eventDescription", event.description)

    image = by_id(document, "eventImage")
    if image is None:
        return
    asset = next((a for a in (event.image, event.team_photo) if a and a.url), None)
    if asset is None:
        return
    image["src"] = with_params(asset.url, EVENT_IMAGE_PARAMS)
    image["alt"] = asset.description or event.name or DEFAULT_EVENT_ALT


def render_people(
    document: BeautifulSoup, people: Sequence[Person], grid_id: str, section_id: str
) -> int:
    """Fill one person grid; an empty collection hides its section."""
    views = [to_person_view(person) for person in people]
    grid = by_id(document, grid_id)
    section = by_id(document, section_id)
    if grid is not None:
        replace_children(grid, [person_card(view) for view in views])
    if section is not None:
        set_hidden(section, not views)
    return len(views)


def render_teams(document: BeautifulSoup, teams: Sequence[Team]) -> int:
    """Render one column section per team with members; returns sections rendered."""
    sections = []
    for team in teams:
        cards = [event_team_card(member) for member in team.members]
        if not cards:
            continue
        sections.append(
            team_section(
                (team.name or "Team").strip() or "Team",
                cards,
                section_class="event-team-section",
                header_class="event-team-header",
                heading_tag="h3",
            )
        )

    container = by_id(document, "eventTeams")
    if container is not None:
        replace_children(container, sections)
    wrapper = by_id(document, "eventTeamsSection")
    if wrapper is not None:
        set_hidden(wrapper, not sections)
    return len(sections)


def build_event_payload(events: Sequence[FetchedEvent], initial: FetchedEvent) -> dict[str, Any]:
    return {
        "events": [item.record for item in events],
        "initialYear": initial.year,
        "defaultYear": events[0].year,
    }


def build_events_document(
    document: BeautifulSoup,
    events: Sequence[FetchedEvent],
    initial: FetchedEvent,
) -> BeautifulSoup:
    """Populate the events template in place for the initial event."""
    event = initial.event
    render_switcher(document, [item.event for item in events], initial.year)
    render_header(document, event)
    for field, (grid_id, section_id) in PEOPLE_GRIDS.items():
        render_people(document, getattr(event, field), grid_id, section_id)
    render_teams(document, event.teams)
    if not embed_json(document, DATA_ELEMENT_ID, build_event_payload(events, initial)):
        logger.warning("Events template has no #%s element", DATA_ELEMENT_ID)
    return document


async def render_events(context: BuildContext) -> Path:
    pages = context.config.pages
    document = load_template(context.paths.page_template("events"))

    summaries = await fetch_event_summaries(context.graphql, pages.event_list_limit)
    events = await fetch_event_details(context.graphql, summaries)
    initial = select_initial(events, pages.event_year)
    logger.info("Rendering events page for %s (%d year(s))", initial.year, len(events))

    build_events_document(document, events, initial)
    await context.assets.resolve(document)
    return write_output(context.paths.page_output("events"), document)

"""Test fixtures for tedx-site.

Provides fixtures for:
- A throwaway site root with minimal page templates
- Test configurations pointing at that site root
- A fake Contentful endpoint (respx) that answers by GraphQL operation name
- Builders for raw Contentful records
"""

import json
import re
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from tedx_site.config import Config

SPACE_ID = "test-space"
ACCESS_TOKEN = "test-delivery-token"
ENDPOINT = f"https://graphql.contentful.com/content/v1/spaces/{SPACE_ID}/environments/master"

_OPERATION = re.compile(r"query\s+(\w+)")

LANDING_HTML = """<!DOCTYPE html>
<html lang="en">
<head><title>TEDxKI</title></head>
<body>
<img id="hero-background" alt="">
<h1>Ideas worth spreading</h1>
</body>
</html>
"""

EVENTS_HTML = """<!DOCTYPE html>
<html lang="en">
<head><title>Events</title></head>
<body>
<div id="eventSwitcherBlock" hidden><div id="eventSwitcher"></div></div>
<h1 id="eventYear">TEDxKI</h1>
<h2 id="eventName"></h2>
<p id="eventMeta"></p>
<div id="eventDescription"></div>
<img id="eventImage" alt="">
<section id="speakersSection"><div id="speakersGrid"></div></section>
<section id="hostsSection"><div id="hostsGrid"></div></section>
<section id="performersSection"><div id="performersGrid"></div></section>
<section id="eventTeamsSection"><div id="eventTeams"></div></section>
<img class="sponsor" data-static-code="sponsor-logo" alt="Sponsor">
<script id="event-data" type="application/json"></script>
</body>
</html>
"""

ABOUT_HTML = """<!DOCTYPE html>
<html lang="en">
<head><title>About</title></head>
<body>
<img id="aboutHeroImage" alt="">
<img id="aboutStoryImage" alt="">
</body>
</html>
"""

TEAM_HTML = """<!DOCTYPE html>
<html lang="en">
<head><title>Team</title></head>
<body>
<main id="teamSections"></main>
</body>
</html>
"""

WATCH_HTML = """<!DOCTYPE html>
<html lang="en">
<head><title>Watch</title></head>
<body>
<p><span id="talk-count">0 talks</span> <span id="year-range"></span></p>
<select id="year-filter"></select>
<div id="video-grid"></div>
<script id="video-data" type="application/json"></script>
</body>
</html>
"""

CONTACT_HTML = """<!DOCTYPE html>
<html lang="en">
<head><title>Contact</title></head>
<body>
<img id="contactMap" data-cf-code="contact-map" data-static-params="w=800" alt="">
</body>
</html>
"""

SITE_FILES = {
    "index.html": LANDING_HTML,
    "sites/events/events.html": EVENTS_HTML,
    "sites/about/about.html": ABOUT_HTML,
    "sites/team/team.html": TEAM_HTML,
    "sites/watch/watch.html": WATCH_HTML,
    "sites/contact/contact.html": CONTACT_HTML,
    "styles.css": "body { margin: 0; }\n",
    "assets/logos/logo.svg": "<svg></svg>\n",
}


def write_site(root: Path, files: dict[str, str] | None = None) -> Path:
    """Write site source files under root and return it."""
    for relative, content in (files if files is not None else SITE_FILES).items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Site root with every page template and a couple of static files."""
    return write_site(tmp_path / "site")


@pytest.fixture
def make_config(site_root: Path) -> Callable[..., Config]:
    """Factory for configs rooted at site_root; keyword args override the pages section."""

    def _make(**pages: Any) -> Config:
        return Config.model_validate(
            {
                "contentful": {"space_id": SPACE_ID, "access_token": ACCESS_TOKEN},
                "pages": {"team_year": 2025, **pages},
                "site": {"root": str(site_root)},
            }
        )

    return _make


@pytest.fixture
def config(make_config: Callable[..., Config]) -> Config:
    return make_config()


Responder = dict[str, Any] | Callable[[dict[str, Any]], httpx.Response | dict[str, Any]]


class FakeContentful:
    """Answers Contentful GraphQL requests by operation name.

    A responder is either the ``data`` payload to return or a callable taking
    the request variables and returning a payload or an ``httpx.Response``.
    Operations without a responder get an empty ``data`` object.
    """

    def __init__(self) -> None:
        self.responders: dict[str, Responder] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def on(self, operation: str, responder: Responder) -> None:
        self.responders[operation] = responder

    def calls_for(self, operation: str) -> list[dict[str, Any]]:
        return [variables for name, variables in self.calls if name == operation]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        match = _OPERATION.search(body["query"])
        operation = match.group(1) if match else "anonymous"
        variables = body.get("variables") or {}
        self.calls.append((operation, variables))

        responder = self.responders.get(operation, {})
        result = responder(variables) if callable(responder) else responder
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json={"data": result})


@pytest.fixture
def contentful() -> Iterator[FakeContentful]:
    """Fake Contentful GraphQL endpoint, active for the duration of the test."""
    fake = FakeContentful()
    with respx.mock(assert_all_called=False) as router:
        router.post(ENDPOINT).mock(side_effect=fake)
        yield fake


def image_record(code: str, url: str, alt: str | None = None) -> dict[str, Any]:
    return {"code": code, "altDiscription": alt, "file": {"url": url, "description": None}}


def static_images(*records: dict[str, Any]) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """Responder returning only the requested codes among records."""

    def _respond(variables: dict[str, Any]) -> dict[str, Any]:
        codes = set(variables.get("codes") or [])
        items = [record for record in records if record["code"] in codes]
        return {"imageStaticCollection": {"items": items}}

    return _respond


def card_record(
    first: str,
    last: str,
    *,
    team: str | None = "Executive",
    position: str | None = "Organizer",
    is_lead: bool | None = False,
    linkedin: str | None = None,
    portrait: str | None = None,
    typename: bool = False,
) -> dict[str, Any]:
    record: dict[str, Any] = {
        "firstName": first,
        "lastName": last,
        "positionTitle": position,
        "team": team,
        "year": 2025,
        "isLead": is_lead,
        "linkedInUrl": linkedin,
        "portrait": {"url": portrait, "description": None} if portrait else None,
    }
    if typename:
        record["__typename"] = "NewTeamMemberCard"
    return record


def event_record(year: int, **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "sys": {"id": f"event-{year}"},
        "name": f"TEDxKI {year}: Ripple Effects",
        "yearIdentifier": year,
        "description": "<p>A day of <strong>ideas</strong>.</p>",
        "startTime": f"{year}-06-01T09:00:00.000+02:00",
        "endTime": f"{year}-06-01T17:00:00.000+02:00",
        "location": "Aula Medica",
        "ticketSaleLink": None,
        "image": {"url": f"https://images.ctfassets.net/{year}/hero.jpg", "description": None},
        "teamPhoto": None,
        "speakersCollection": {"items": []},
        "hostsCollection": {"items": []},
        "performersCollection": {"items": []},
        "teamsCollection": {"items": []},
    }
    record.update(overrides)
    return record


def event_list(*years: int | None) -> dict[str, Any]:
    items = [
        {"sys": {"id": f"event-{year}"}, "name": f"TEDxKI {year}", "yearIdentifier": year}
        for year in years
    ]
    return {"eventCollection": {"items": items}}


def event_details(records: dict[int, dict[str, Any]]) -> Callable[[dict[str, Any]], Any]:
    """Responder for EventByYear; years missing from records fail with a 500."""

    def _respond(variables: dict[str, Any]) -> Any:
        record = records.get(variables["year"])
        if record is None:
            return httpx.Response(500, json={"errors": [{"message": "Internal error"}]})
        return {"eventCollection": {"items": [record]}}

    return _respond


def video_record(
    entry_id: str,
    title: str | None,
    year: int | None,
    url: str,
    *,
    as_hyperlink: bool = True,
) -> dict[str, Any]:
    if as_hyperlink:
        node = {
            "nodeType": "hyperlink",
            "data": {"uri": url},
            "content": [{"nodeType": "text", "value": "Watch"}],
        }
    else:
        node = {"nodeType": "text", "value": f"Watch at {url} now"}
    return {
        "sys": {"id": entry_id},
        "videoTitle": title,
        "eventYear": year,
        "safeEmbeddingCode": {
            "json": {
                "nodeType": "document",
                "content": [{"nodeType": "paragraph", "content": [node]}],
            }
        },
    }

"""Card markup shared by the events and team pages."""

from collections.abc import Sequence
from dataclasses import dataclass

from tedx_site.models import LegacyTeamMember, TeamMemberCard
from tedx_site.normalize.people import PersonView, to_person_view
from tedx_site.normalize.team import normalize_profile_url
from tedx_site.normalize.urls import with_params
from tedx_site.render.fragments import distribute_columns, render_fragment

PERSON_IMAGE_PARAMS = "fm=webp&w=300&q=80"
TEAM_IMAGE_PARAMS = "fm=webp&q=80&w=900"
LINKEDIN_ICON = "/assets/logos/social/LI-In-Bug.png"
DEFAULT_MEMBER_NAME = "Team member"


@dataclass(frozen=True)
class TeamCard:
    """Display data for one portrait card."""

    full_name: str
    label_name: str
    role: str
    image_url: str = ""
    image_alt: str = ""
    linkedin_url: str = ""
    show_mark: bool = False
    reveal_index: int | None = None

    @property
    def initial(self) -> str:
        return self.full_name[:1].upper()


def person_card(person: PersonView) -> str:
    return render_fragment("person_card.html", person=person, image_params=PERSON_IMAGE_PARAMS)


def event_team_card(member: TeamMemberCard | LegacyTeamMember) -> TeamCard:
    """Card for a member listed under an event's team."""
    view = to_person_view(member)
    name = view.name or DEFAULT_MEMBER_NAME
    photo = view.photo
    return TeamCard(
        full_name=name,
        label_name=name,
        role=view.role,
        image_url=with_params(photo.url, TEAM_IMAGE_PARAMS) if photo else "",
        image_alt=(photo.description or name) if photo else "",
    )


def roster_card(member: TeamMemberCard, reveal_index: int) -> TeamCard:
    """Card for the team page: first name with the TEDx mark, LinkedIn link."""
    first = (member.first_name or "").strip()
    view = to_person_view(member)
    display = view.name or DEFAULT_MEMBER_NAME
    photo = view.photo
    default_alt = f"{display} — {view.role}" if view.role else display
    return TeamCard(
        full_name=display,
        label_name=first or display,
        role=view.role,
        image_url=with_params(photo.url, TEAM_IMAGE_PARAMS) if photo else "",
        image_alt=(photo.description or default_alt) if photo else "",
        linkedin_url=normalize_profile_url(member.linkedin_url),
        show_mark=True,
        reveal_index=reveal_index,
    )


def team_section(
    heading: str,
    cards: Sequence[TeamCard],
    *,
    section_class: str,
    header_class: str,
    heading_tag: str,
    title_class: str = "",
) -> str:
    """A titled section with cards distributed round-robin over four columns."""
    return render_fragment(
        "team_section.html",
        heading=heading,
        columns=distribute_columns(cards),
        section_class=section_class,
        header_class=header_class,
        heading_tag=heading_tag,
        title_class=title_class,
        linkedin_icon=LINKEDIN_ICON,
    )

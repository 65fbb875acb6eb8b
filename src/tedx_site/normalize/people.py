"""Collapse person variants into a single display shape."""

from dataclasses import dataclass

from tedx_site.models import (
    Asset,
    Host,
    LegacyTeamMember,
    Performer,
    Person,
    Speaker,
    TeamMemberCard,
)


@dataclass(frozen=True)
class PersonView:
    """What a card needs to show for any kind of person."""

    name: str
    role: str
    photo: Asset | None = None
    linkedin: str | None = None

    @property
    def initial(self) -> str:
        return self.name[:1].upper() or "?"


def _clean(*parts: str | None) -> str:
    """First non-blank part, stripped."""
    for part in parts:
        if part and part.strip():
            return part.strip()
    return ""


def _joined(*parts: str | None) -> str:
    return " ".join(part.strip() for part in parts if part and part.strip())


def _with_url(asset: Asset | None) -> Asset | None:
    return asset if asset is not None and asset.url else None


def full_name(member: TeamMemberCard | LegacyTeamMember) -> str:
    """Display name of a team roster entry."""
    if isinstance(member, TeamMemberCard):
        return _joined(member.first_name, member.last_name)
    return _clean(member.name)


def to_person_view(person: Person) -> PersonView:
    """Normalize any person variant into a PersonView.

    Name falls back through the variant's own name fields; role uses the
    variant's title field (position, job title or performer title).
    """
    match person:
        case Speaker():
            return PersonView(
                name=_clean(person.name),
                role=_clean(person.job_title),
                photo=_with_url(person.photo),
                linkedin=person.linkedin,
            )
        case Host():
            return PersonView(
                name=_clean(person.name),
                role="",
                photo=_with_url(person.photo),
                linkedin=person.linkedin,
            )
        case Performer():
            return PersonView(
                name=_clean(person.name, person.title),
                role=_clean(person.title),
                photo=_with_url(person.photo),
            )
        case TeamMemberCard():
            return PersonView(
                name=full_name(person),
                role=_clean(person.position_title),
                photo=_with_url(person.portrait),
                linkedin=person.linkedin_url,
            )
        case LegacyTeamMember():
            return PersonView(
                name=_clean(person.name, person.title),
                role=_clean(person.title),
                photo=_with_url(person.photo),
            )
    raise TypeError(f"Unsupported person variant: {type(person).__name__}")

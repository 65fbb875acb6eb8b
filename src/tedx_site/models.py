"""Typed views of Contentful records.

Raw GraphQL items are validated into these models at the edge of each
renderer. Person collections are a tagged union keyed on ``__typename``;
entries of unknown type (or nulls left behind by unpublished links) are
dropped during validation.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CMSModel(BaseModel):
    """Base model for CMS records (camelCase aliases, unknown fields ignored)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


def _strict_int(v: Any) -> int | None:
    """Keep only true integers, mirroring how the CMS marks missing years."""
    if isinstance(v, int) and not isinstance(v, bool):
        return v
    return None


def _flatten_sys_id(data: Any) -> Any:
    if isinstance(data, dict) and "id" not in data and isinstance(data.get("sys"), dict):
        return {**data, "id": data["sys"].get("id")}
    return data


class Asset(CMSModel):
    """A Contentful asset reference."""

    url: str | None = None
    description: str | None = None


class ImageAsset(CMSModel):
    """An ``ImageStatic`` entry looked up by its stable code."""

    code: str
    # The content type spells this field "altDiscription".
    alt: str | None = Field(default=None, alias="altDiscription")
    file: Asset | None = None


class Speaker(CMSModel):
    typename: Literal["Speaker"] = Field(default="Speaker", alias="__typename")
    name: str | None = None
    job_title: str | None = Field(default=None, alias="jobTitle")
    linkedin: str | None = Field(default=None, alias="linkedInProfileLink")
    photo: Asset | None = None


class Host(CMSModel):
    typename: Literal["Host"] = Field(default="Host", alias="__typename")
    name: str | None = None
    linkedin: str | None = None
    photo: Asset | None = None


class Performer(CMSModel):
    typename: Literal["Performer"] = Field(default="Performer", alias="__typename")
    name: str | None = None
    title: str | None = None
    photo: Asset | None = None


class TeamMemberCard(CMSModel):
    """A ``NewTeamMemberCard`` entry (team roster and event teams)."""

    typename: Literal["NewTeamMemberCard"] = Field(
        default="NewTeamMemberCard", alias="__typename"
    )
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    position_title: str | None = Field(default=None, alias="positionTitle")
    team: str | None = None
    year: int | None = None
    is_lead: bool = Field(default=False, alias="isLead")
    linkedin_url: str | None = Field(default=None, alias="linkedInUrl")
    portrait: Asset | None = None

    @field_validator("is_lead", mode="before")
    @classmethod
    def null_is_not_lead(cls, v: Any) -> bool:
        return bool(v)


class LegacyTeamMember(CMSModel):
    """The older ``TeamMember`` content type, still linked from some teams."""

    typename: Literal["TeamMember"] = Field(default="TeamMember", alias="__typename")
    name: str | None = None
    title: str | None = None
    photo: Asset | None = None


Person = Speaker | Host | Performer | TeamMemberCard | LegacyTeamMember
TeamEntry = TeamMemberCard | LegacyTeamMember

# __typename -> variant model
PERSON_MODELS: dict[str, type[CMSModel]] = {
    "Speaker": Speaker,
    "Host": Host,
    "Performer": Performer,
    "NewTeamMemberCard": TeamMemberCard,
    "TeamMember": LegacyTeamMember,
}
TEAM_ENTRY_MODELS: dict[str, type[CMSModel]] = {
    "NewTeamMemberCard": TeamMemberCard,
    "TeamMember": LegacyTeamMember,
}


def collection_items(value: Any) -> list[Any]:
    """Return the non-null entries of a ``{items: [...]}`` collection or a plain list."""
    if isinstance(value, dict):
        value = value.get("items")
    if not isinstance(value, list):
        return []
    return [item for item in value if item]


def _validate_tagged(value: Any, models: dict[str, type[CMSModel]]) -> list[CMSModel]:
    """Validate each entry with the model for its __typename, dropping unknown types."""
    variants = []
    for item in collection_items(value):
        if isinstance(item, CMSModel):
            variants.append(item)
            continue
        model = models.get(item.get("__typename")) if isinstance(item, dict) else None
        if model is not None:
            variants.append(model.model_validate(item))
    return variants


class Team(CMSModel):
    name: str | None = None
    members: list[TeamEntry] = Field(default_factory=list, alias="teamMembersCollection")

    @field_validator("members", mode="before")
    @classmethod
    def unwrap_members(cls, v: Any) -> list[Any]:
        return _validate_tagged(v, TEAM_ENTRY_MODELS)


class EventSummary(CMSModel):
    """Entry of the lightweight event list."""

    id: str | None = None
    name: str | None = None
    year: int | None = Field(default=None, alias="yearIdentifier")

    @model_validator(mode="before")
    @classmethod
    def flatten_sys(cls, data: Any) -> Any:
        return _flatten_sys_id(data)

    @field_validator("year", mode="before")
    @classmethod
    def integer_year(cls, v: Any) -> int | None:
        return _strict_int(v)


class Event(EventSummary):
    """Full event detail."""

    description: str | None = None
    start_time: str | None = Field(default=None, alias="startTime")
    end_time: str | None = Field(default=None, alias="endTime")
    location: str | None = None
    ticket_sale_link: str | None = Field(default=None, alias="ticketSaleLink")
    image: Asset | None = None
    team_photo: Asset | None = Field(default=None, alias="teamPhoto")
    speakers: list[Person] = Field(default_factory=list, alias="speakersCollection")
    hosts: list[Person] = Field(default_factory=list, alias="hostsCollection")
    performers: list[Person] = Field(default_factory=list, alias="performersCollection")
    teams: list[Team] = Field(default_factory=list, alias="teamsCollection")

    @field_validator("speakers", "hosts", "performers", mode="before")
    @classmethod
    def unwrap_people(cls, v: Any) -> list[Any]:
        return _validate_tagged(v, PERSON_MODELS)

    @field_validator("teams", mode="before")
    @classmethod
    def unwrap_teams(cls, v: Any) -> list[Any]:
        return [
            item
            for item in collection_items(v)
            if isinstance(item, dict) and item.get("__typename", "Team") == "Team"
        ]


class VideoEntry(CMSModel):
    """A ``NewEmbeddedVideo`` entry before YouTube parsing."""

    id: str | None = None
    title: str | None = Field(default=None, alias="videoTitle")
    event_year: int | None = Field(default=None, alias="eventYear")
    embed: dict[str, Any] | None = Field(default=None, alias="safeEmbeddingCode")

    @model_validator(mode="before")
    @classmethod
    def flatten_sys(cls, data: Any) -> Any:
        return _flatten_sys_id(data)

    @field_validator("event_year", mode="before")
    @classmethod
    def integer_year(cls, v: Any) -> int | None:
        return _strict_int(v)


class Video(CMSModel):
    """A playable talk, ready for the watch page."""

    id: str
    title: str
    year: int | None = None
    video_id: str = Field(alias="videoId")
    embed_url: str = Field(alias="embedUrl")
    source_url: str = Field(alias="sourceUrl")
    thumbnail: str

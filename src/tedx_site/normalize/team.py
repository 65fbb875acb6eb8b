"""Team roster grouping and ordering."""

import re
from dataclasses import dataclass

from tedx_site.models import TeamMemberCard
from tedx_site.normalize.people import full_name

# Known teams, in display order. Matched by case-insensitive prefix once the
# word "team" is removed, so "Speaker Team" and "Finances" both match.
TEAM_PRIORITY = ("executive", "finance", "logistics", "marketing", "speaker")
DEFAULT_TEAM_NAME = "Team"

_TEAM_WORD = re.compile(r"\s*team\b", re.IGNORECASE)


@dataclass(frozen=True)
class TeamGroup:
    name: str
    members: tuple[TeamMemberCard, ...]


def team_order_value(name: str | None) -> int:
    """Index in TEAM_PRIORITY, or len(TEAM_PRIORITY) for unknown teams."""
    normalized = (name or "").strip().lower()
    stripped = _TEAM_WORD.sub("", normalized, count=1).strip()
    for index, prefix in enumerate(TEAM_PRIORITY):
        if stripped.startswith(prefix):
            return index
    return len(TEAM_PRIORITY)


def member_sort_key(member: TeamMemberCard) -> tuple[bool, str, str]:
    """Leads first, then role, then full name (all case-insensitive)."""
    role = (member.position_title or "").strip()
    return (not member.is_lead, role.casefold(), full_name(member).casefold())


def sort_members(members: list[TeamMemberCard]) -> list[TeamMemberCard]:
    return sorted(members, key=member_sort_key)


def group_members(members: list[TeamMemberCard]) -> list[TeamGroup]:
    """Group roster cards by team and order teams and members for display."""
    teams: dict[str, list[TeamMemberCard]] = {}
    for member in members:
        team_name = (member.team or DEFAULT_TEAM_NAME).strip() or DEFAULT_TEAM_NAME
        teams.setdefault(team_name, []).append(member)

    ordered = sorted(teams, key=lambda name: (team_order_value(name), name.casefold(), name))
    return [TeamGroup(name=name, members=tuple(sort_members(teams[name]))) for name in ordered]


def format_team_label(name: str | None) -> str:
    """Heading for a team section, appending "Team" when the name lacks it."""
    trimmed = (name or DEFAULT_TEAM_NAME).strip()
    if not trimmed:
        return DEFAULT_TEAM_NAME
    if re.search("team", trimmed, re.IGNORECASE):
        return trimmed
    return f"{trimmed} Team"


def normalize_profile_url(url: str | None) -> str:
    """Profile links are stored without a scheme more often than not."""
    trimmed = (url or "").strip()
    if not trimmed:
        return ""
    if re.match(r"^https?://", trimmed, re.IGNORECASE):
        return trimmed
    return f"https://{trimmed}"

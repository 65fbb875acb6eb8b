"""Pure transformations from CMS records to display data."""

from tedx_site.normalize.dates import format_date_range, meta_line
from tedx_site.normalize.people import PersonView, full_name, to_person_view
from tedx_site.normalize.team import (
    TEAM_PRIORITY,
    TeamGroup,
    format_team_label,
    group_members,
    normalize_profile_url,
    team_order_value,
)
from tedx_site.normalize.urls import normalize_url, with_params
from tedx_site.normalize.videos import (
    YouTubeDetails,
    build_year_list,
    find_url_in_rich_text,
    normalize_video_entry,
    parse_time_to_seconds,
    parse_youtube_details,
    sort_videos,
)

__all__ = [
    "TEAM_PRIORITY",
    "PersonView",
    "TeamGroup",
    "YouTubeDetails",
    "build_year_list",
    "find_url_in_rich_text",
    "format_date_range",
    "format_team_label",
    "full_name",
    "group_members",
    "meta_line",
    "normalize_profile_url",
    "normalize_url",
    "normalize_video_entry",
    "parse_time_to_seconds",
    "parse_youtube_details",
    "sort_videos",
    "team_order_value",
    "to_person_view",
    "with_params",
]

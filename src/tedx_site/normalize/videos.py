"""YouTube link extraction and video library normalization."""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs, urlencode, urljoin, urlsplit

from tedx_site.models import Video, VideoEntry
from tedx_site.normalize.urls import normalize_url

DEFAULT_VIDEO_TITLE = "TEDxKI Talk"
EMBED_BASE = "https://www.youtube-nocookie.com/embed"
THUMBNAIL_TEMPLATE = "https://img.youtube.com/vi/{video_id}/hqdefault.jpg"
MIN_VIDEO_ID_LENGTH = 5

_URL_IN_TEXT = re.compile(r"(https?://[^\s\"'>]+)", re.IGNORECASE)
_INVALID_ID_CHARS = re.compile(r"[^0-9A-Za-z_-]")
_DURATION = re.compile(r"(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?", re.IGNORECASE)


@dataclass(frozen=True)
class YouTubeDetails:
    video_id: str
    start: int | None
    source_url: str
    embed_url: str
    thumbnail: str


def parse_time_to_seconds(raw: str | None) -> int | None:
    """Parse ``90``, ``t=90``, ``#1m30s`` or ``1h2m3s`` into seconds.

    Returns None for empty or zero durations.
    """
    if not raw:
        return None
    value = re.sub(r"^t=", "", str(raw), flags=re.IGNORECASE)
    value = value.removeprefix("#").strip()
    if not value:
        return None
    if value.isdigit():
        return int(value)
    match = _DURATION.match(value)
    if match is None:
        return None
    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    total = hours * 3600 + minutes * 60 + seconds
    return total if total > 0 else None


def find_url_in_rich_text(rich_text: dict[str, Any] | None) -> str:
    """Return the first link in a rich-text document.

    Hyperlink nodes win as soon as they are reached; otherwise the first
    http(s) URL found in a text value is used. Traversal is depth first.
    """
    document = (rich_text or {}).get("json")
    if not document:
        return ""

    def walk(node: Any) -> str:
        if not isinstance(node, dict):
            return ""
        if node.get("nodeType") == "hyperlink":
            uri = (node.get("data") or {}).get("uri")
            if uri:
                return str(uri)
        value = node.get("value")
        if isinstance(value, str):
            match = _URL_IN_TEXT.search(value)
            if match:
                return match.group(1)
        for child in node.get("content") or []:
            found = walk(child)
            if found:
                return found
        return ""

    return normalize_url(walk(document))


def _first_param(query: dict[str, list[str]], name: str) -> str:
    values = query.get(name) or [""]
    return values[0]


def parse_youtube_details(raw_url: str | None) -> YouTubeDetails | None:
    """Extract the video id, start offset and embed URLs from a YouTube link.

    Accepts ``youtu.be/<id>``, ``/embed/<id>``, ``watch?v=<id>`` and falls
    back to the last path segment. Returns None for malformed URLs, non-YouTube hosts and
    ids shorter than MIN_VIDEO_ID_LENGTH after sanitizing.
    """
    normalized = normalize_url(raw_url)
    if not normalized:
        return None

    try:
        url = urlsplit(normalized)
        if not url.scheme or not url.netloc:
            url = urlsplit(urljoin("https://www.youtube.com", normalized))
    except ValueError:
        return None

    host = (url.hostname or "").lower().removeprefix("www.")
    if "youtube" not in host and "youtu.be" not in host:
        return None

    query = parse_qs(url.query)
    segments = [part for part in url.path.split("/") if part]
    if host == "youtu.be":
        video_id = segments[0] if segments else ""
    elif url.path.startswith("/embed/"):
        video_id = segments[1] if len(segments) > 1 else ""
    elif _first_param(query, "v"):
        video_id = _first_param(query, "v")
    else:
        video_id = segments[-1] if segments else ""

    video_id = _INVALID_ID_CHARS.sub("", video_id)
    if len(video_id) < MIN_VIDEO_ID_LENGTH:
        return None

    start_param = _first_param(query, "start") or _first_param(query, "t")
    hash_start = url.fragment.split("t=")[1] if "t=" in url.fragment else ""
    start = parse_time_to_seconds(start_param or hash_start)

    params = {"rel": "0", "modestbranding": "1"}
    if start:
        params["start"] = str(start)

    return YouTubeDetails(
        video_id=video_id,
        start=start,
        source_url=url.geturl(),
        embed_url=f"{EMBED_BASE}/{video_id}?{urlencode(params)}",
        thumbnail=THUMBNAIL_TEMPLATE.format(video_id=video_id),
    )


def normalize_video_entry(entry: VideoEntry) -> Video | None:
    """Turn a CMS video entry into a Video, or None without a usable YouTube link."""
    details = parse_youtube_details(find_url_in_rich_text(entry.embed))
    if details is None:
        return None
    return Video(
        id=entry.id or details.video_id,
        title=(entry.title or "").strip() or DEFAULT_VIDEO_TITLE,
        year=entry.event_year,
        video_id=details.video_id,
        embed_url=details.embed_url,
        source_url=details.source_url,
        thumbnail=details.thumbnail,
    )


def sort_videos(videos: Iterable[Video]) -> list[Video]:
    """Newest year first (unknown years last), then title case-insensitively."""
    return sorted(videos, key=lambda v: (-(v.year or 0), v.title.casefold(), v.title, v.id))


def build_year_list(videos: Iterable[Video]) -> list[int]:
    return sorted({video.year for video in videos if video.year is not None}, reverse=True)

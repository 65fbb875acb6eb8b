"""Watch page: the talk library."""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup

from tedx_site.models import Video, VideoEntry
from tedx_site.normalize.videos import build_year_list, normalize_video_entry, sort_videos
from tedx_site.render.context import BuildContext
from tedx_site.render.document import (
    by_id,
    embed_json,
    load_template,
    replace_children,
    set_text,
    write_output,
)
from tedx_site.render.fragments import render_fragment

logger = logging.getLogger(__name__)

DATA_ELEMENT_ID = "video-data"


def collect_videos(items: Sequence[dict[str, Any]]) -> list[Video]:
    """Validate, parse and sort raw entries; entries without a usable link are dropped."""
    videos = []
    for item in items:
        video = normalize_video_entry(VideoEntry.model_validate(item))
        if video is None:
            logger.debug("Discarding video entry without a YouTube link: %s", item.get("sys"))
            continue
        videos.append(video)
    return sort_videos(videos)


def talk_count_label(count: int) -> str:
    return f"{count} talks"


def year_range_label(years: Sequence[int]) -> str:
    if not years:
        return ""
    low, high = min(years), max(years)
    return str(low) if low == high else f"{low}–{high}"


def build_watch_payload(videos: Sequence[Video], years: Sequence[int]) -> dict[str, Any]:
    return {
        "videos": [video.model_dump(by_alias=True) for video in videos],
        "years": list(years),
    }


def build_watch_document(document: BeautifulSoup, videos: Sequence[Video]) -> BeautifulSoup:
    years = build_year_list(videos)

    year_filter = by_id(document, "year-filter")
    if year_filter is not None:
        replace_children(year_filter, [render_fragment("year_options.html", years=years)])

    set_text(document, "talk-count", talk_count_label(len(videos)))
    if years:
        set_text(document, "year-range", year_range_label(years))

    grid = by_id(document, "video-grid")
    if grid is not None:
        if videos:
            cards = [
                render_fragment("video_card.html", video=video, index=index)
                for index, video in enumerate(videos)
            ]
        else:
            cards = [render_fragment("watch_empty.html")]
        replace_children(grid, cards)

    embed_json(document, DATA_ELEMENT_ID, build_watch_payload(videos, years))
    return document


async def render_watch(context: BuildContext) -> Path:
    document = load_template(context.paths.page_template("watch"))
    items = await context.graphql.query_embedded_videos(context.config.pages.watch_video_limit)
    videos = collect_videos(items)
    logger.info("Rendering %d video(s) from %d entries", len(videos), len(items))

    build_watch_document(document, videos)
    return write_output(context.paths.page_output("watch"), document)

"""Build orchestrator.

Runs the build as a fixed sequence of named steps: clean the output
directory, copy static assets, then render each page. Every step is timed
and logged; the first failing step aborts the build with a BuildError.
"""

import logging
import shutil
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tedx_site.config import Config
from tedx_site.contentful.http import ContentfulClient
from tedx_site.errors import BuildError, ConfigError
from tedx_site.paths import STATIC_ASSET_ENTRIES, PathManager
from tedx_site.render.about import render_about
from tedx_site.render.context import BuildContext
from tedx_site.render.events import render_events
from tedx_site.render.landing import render_landing
from tedx_site.render.static_pages import render_static_pages
from tedx_site.render.team import render_team
from tedx_site.render.watch import render_watch

logger = logging.getLogger(__name__)

StepFunc = Callable[[BuildContext], Awaitable[Any]]

# Page name -> renderer, in build order
PAGE_RENDERERS: dict[str, StepFunc] = {
    "landing": render_landing,
    "events": render_events,
    "about": render_about,
    "team": render_team,
    "watch": render_watch,
    "static": render_static_pages,
}

STEP_LABELS: dict[str, str] = {
    "clean": "Cleaning dist",
    "copy": "Copying static assets",
    "landing": "Rendering landing page",
    "events": "Rendering events page",
    "about": "Rendering about page",
    "team": "Rendering team page",
    "watch": "Rendering watch page",
    "static": "Rendering static pages",
}


@dataclass(frozen=True)
class BuildStep:
    name: str
    label: str
    run: StepFunc


def format_duration(seconds: float) -> str:
    """``123ms`` below one second, ``1.23s`` otherwise."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.2f}s"


def clean_dist(paths: PathManager) -> None:
    """Remove and recreate the output directory.

    Raises:
        ConfigError: If the output directory is the site root itself.
    """
    dist = paths.dist_root
    if dist.resolve() == paths.root.resolve():
        raise ConfigError(f"Refusing to clean the site root: {dist}")
    if dist.exists():
        shutil.rmtree(dist)
    dist.mkdir(parents=True, exist_ok=True)


def _copy_tree(src: Path, dest: Path) -> int:
    files_copied = 0
    for item in sorted(src.rglob("*")):
        if item.is_file():
            dest_path = dest / item.relative_to(src)
            dest_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, dest_path)
            files_copied += 1
    return files_copied


def copy_static_assets(paths: PathManager) -> int:
    """Copy static site entries into the output directory; missing entries are skipped."""
    files_copied = 0
    for entry in STATIC_ASSET_ENTRIES:
        src = paths.template_path(entry)
        dest = paths.output_path(entry)
        if src.is_dir():
            files_copied += _copy_tree(src, dest)
        elif src.is_file():
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dest)
            files_copied += 1
        else:
            logger.debug("Static entry not found, skipping: %s", src)
    logger.info("Copied %d static file(s)", files_copied)
    return files_copied


async def _clean_step(context: BuildContext) -> None:
    clean_dist(context.paths)


async def _copy_step(context: BuildContext) -> int:
    return copy_static_assets(context.paths)


def default_steps() -> list[BuildStep]:
    steps = [
        BuildStep("clean", STEP_LABELS["clean"], _clean_step),
        BuildStep("copy", STEP_LABELS["copy"], _copy_step),
    ]
    steps.extend(BuildStep(name, STEP_LABELS[name], run) for name, run in PAGE_RENDERERS.items())
    return steps


async def run_step(step: BuildStep, context: BuildContext) -> tuple[Any, float]:
    """Run one step with timing.

    Raises:
        BuildError: Wrapping whatever the step raised.
    """
    logger.info("▶ %s...", step.label)
    started = time.perf_counter()
    try:
        result = await step.run(context)
    except Exception as e:
        elapsed = time.perf_counter() - started
        logger.error("✗ %s failed after %s: %s", step.label, format_duration(elapsed), e)
        raise BuildError(step.name, e) from e
    elapsed = time.perf_counter() - started
    logger.info("✓ %s (%s)", step.label, format_duration(elapsed))
    return result, elapsed


async def run_steps(context: BuildContext, steps: list[BuildStep]) -> dict[str, Any]:
    started = time.perf_counter()
    stats: dict[str, Any] = {
        "steps": [],
        "pages_written": [],
        "assets_copied": 0,
    }

    for step in steps:
        result, elapsed = await run_step(step, context)
        stats["steps"].append({"name": step.name, "duration_ms": round(elapsed * 1000)})
        if step.name == "copy":
            stats["assets_copied"] = result
        elif isinstance(result, Path):
            stats["pages_written"].append(str(result))
        elif isinstance(result, list):
            stats["pages_written"].extend(str(path) for path in result)

    stats["requests_made"] = context.http.requests_made
    stats["duration_seconds"] = time.perf_counter() - started
    return stats


async def build_site(
    config: Config,
    http_client: ContentfulClient | None = None,
) -> dict[str, Any]:
    """Build the complete site into the configured dist directory.

    Args:
        config: Application configuration.
        http_client: Optional pre-built Contentful HTTP client.

    Returns:
        Dictionary with build statistics.

    Raises:
        ConfigError: If Contentful credentials are missing.
        BuildError: If any step fails.
    """
    async with BuildContext(config, http_client) as context:
        logger.info("Building site from %s into %s", context.paths.root, context.paths.dist_root)
        stats = await run_steps(context, default_steps())

    logger.info(
        "Build complete: %d page(s), %d static file(s), %d request(s) in %s",
        len(stats["pages_written"]),
        stats["assets_copied"],
        stats["requests_made"],
        format_duration(stats["duration_seconds"]),
    )
    return stats


async def render_page(
    config: Config,
    page: str,
    http_client: ContentfulClient | None = None,
) -> dict[str, Any]:
    """Render a single page (or ``static`` for all static pages) without cleaning.

    Raises:
        ValueError: If the page name is unknown.
        BuildError: If rendering fails.
    """
    if page not in PAGE_RENDERERS:
        raise ValueError(f"Unknown page: {page}")
    step = BuildStep(page, STEP_LABELS[page], PAGE_RENDERERS[page])
    async with BuildContext(config, http_client) as context:
        return await run_steps(context, [step])

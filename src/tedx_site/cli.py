"""CLI entry point for tedx-site.

Two commands:
- build: Clean dist/, copy static files and pre-render every page
- render: Re-render a single page into the existing dist/
"""

import asyncio
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from tedx_site import __version__
from tedx_site.config import Config, load_config
from tedx_site.errors import SiteError
from tedx_site.logging import setup_logging
from tedx_site.render.build import PAGE_RENDERERS, build_site, format_duration, render_page

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="tedx-site")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output")
@click.option("--json-logs", is_flag=True, default=False, help="Emit log records as JSON lines")
@click.pass_context
def main(ctx: click.Context, verbose: bool, json_logs: bool) -> None:
    """TEDx website build pipeline.

    Fetches content from Contentful and pre-renders the site pages into
    static HTML.

    \b
    Quick Start:
        1. Set CONTENTFUL_SPACE_ID and CONTENTFUL_ACCESS_TOKEN (or use a .env file)
        2. Build the site: tedx-site build
        3. Re-render one page: tedx-site render events
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose=verbose, json_format=json_logs)


def _load(config: Path | None) -> Config:
    try:
        return load_config(config)
    except Exception as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {e}")
        raise click.Abort() from e


def _fail(ctx: click.Context, title: str, error: Exception) -> None:
    console.print(f"\n[bold red]{title}:[/bold red] {error}")
    if ctx.obj.get("verbose"):
        import traceback

        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())
    ctx.exit(1)


def _print_stats(stats: dict[str, Any]) -> None:
    for step in stats["steps"]:
        console.print(f"  ✓ {step['name']} ({format_duration(step['duration_ms'] / 1000)})")
    console.print(f"  Pages written: {len(stats['pages_written'])}")
    console.print(f"  Contentful requests: {stats['requests_made']}")
    console.print(f"  Duration: {format_duration(stats['duration_seconds'])}")


@main.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to an optional config.yaml file",
)
@click.pass_context
def build(ctx: click.Context, config: Path | None) -> None:
    """Build the complete static site.

    Cleans the output directory, copies the static site files and renders
    the landing, events, about, team, watch and static content pages.
    """
    cfg = _load(config)
    console.print(f"[bold]Building site into {cfg.site.dist_dir}[/bold]")
    console.print()

    try:
        stats = asyncio.run(build_site(cfg))
    except KeyboardInterrupt:
        console.print("\n[yellow]Build interrupted by user[/yellow]")
        raise click.Abort() from None
    except SiteError as e:
        _fail(ctx, "Build failed", e)
        return

    console.print()
    console.print("[bold green]Site built successfully![/bold green]")
    _print_stats(stats)
    console.print(f"  Static files copied: {stats['assets_copied']}")
    console.print(f"  Output: {cfg.site.dist_dir}")


@main.command()
@click.argument("page", type=click.Choice(list(PAGE_RENDERERS)))
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to an optional config.yaml file",
)
@click.pass_context
def render(ctx: click.Context, page: str, config: Path | None) -> None:
    """Render a single PAGE into the existing output directory.

    Does not clean the output or copy static files.
    """
    cfg = _load(config)
    console.print(f"[bold]Rendering {page}[/bold]")

    try:
        stats = asyncio.run(render_page(cfg, page))
    except KeyboardInterrupt:
        console.print("\n[yellow]Render interrupted by user[/yellow]")
        raise click.Abort() from None
    except SiteError as e:
        _fail(ctx, "Render failed", e)
        return

    console.print("[bold green]Done![/bold green]")
    _print_stats(stats)
    for path in stats["pages_written"]:
        console.print(f"  {path}")

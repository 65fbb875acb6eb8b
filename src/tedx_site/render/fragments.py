"""Jinja2 partials for the cards and lists injected into page templates."""

from collections.abc import Sequence
from functools import lru_cache
from typing import Any, TypeVar

from jinja2 import Environment, PackageLoader

from tedx_site.normalize.urls import with_params

T = TypeVar("T")

COLUMN_COUNT = 4


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=PackageLoader("tedx_site", "templates"),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["with_params"] = with_params
    return env


def render_fragment(name: str, **context: Any) -> str:
    """Render a partial from ``tedx_site/templates``."""
    return get_environment().get_template(name).render(**context)


def distribute_columns(items: Sequence[T], count: int = COLUMN_COUNT) -> list[list[T]]:
    """Round-robin items into ``count`` columns by index (``index % count``)."""
    columns: list[list[T]] = [[] for _ in range(count)]
    for index, item in enumerate(items):
        columns[index % count].append(item)
    return columns

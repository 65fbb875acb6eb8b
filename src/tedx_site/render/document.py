"""In-memory HTML documents for page rendering.

Templates are parsed with BeautifulSoup and mutated through the helpers
below; renderers never touch the file system except through
``load_template`` and ``write_output``.
"""

import json
import logging
from pathlib import Path
from typing import Any

from bs4 import BeautifulSoup, Tag

from tedx_site.errors import TemplateMissingError

logger = logging.getLogger(__name__)

PARSER = "html.parser"


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, PARSER)


def load_template(path: Path) -> BeautifulSoup:
    """Read an HTML template into a document.

    Raises:
        TemplateMissingError: If the template file does not exist.
    """
    if not path.is_file():
        msg = f"Template not found: {path}"
        raise TemplateMissingError(msg)
    logger.debug("Loading template %s", path)
    return parse_html(path.read_text(encoding="utf-8"))


def by_id(document: BeautifulSoup, element_id: str) -> Tag | None:
    found = document.find(id=element_id)
    return found if isinstance(found, Tag) else None


def require_id(document: BeautifulSoup, element_id: str) -> Tag:
    """Like by_id, but a missing element is a template error."""
    element = by_id(document, element_id)
    if element is None:
        msg = f"Template is missing required element #{element_id}"
        raise TemplateMissingError(msg)
    return element


def set_text(document: BeautifulSoup, element_id: str, value: str | None) -> None:
    element = by_id(document, element_id)
    if element is not None:
        element.string = value or ""


def set_html(document: BeautifulSoup, element_id: str, markup: str | None) -> None:
    """Replace an element's children with parsed markup (CMS rich HTML)."""
    element = by_id(document, element_id)
    if element is not None:
        element.clear()
        append_html(element, markup or "")


def set_hidden(element: Tag, hidden: bool) -> None:
    """Toggle the ``hidden`` attribute (sections stay in the markup)."""
    if hidden:
        element["hidden"] = ""
    elif "hidden" in element.attrs:
        del element["hidden"]


def append_html(element: Tag, markup: str) -> None:
    """Parse a fragment and append its top-level nodes to ``element``."""
    fragment = parse_html(markup)
    for node in list(fragment.contents):
        element.append(node.extract())


def replace_children(element: Tag, fragments: list[str]) -> None:
    element.clear()
    for markup in fragments:
        append_html(element, markup)


def embed_json(document: BeautifulSoup, element_id: str, payload: Any) -> bool:
    """Serialize ``payload`` into a ``<script type="application/json">`` element.

    Returns False when the template has no such element.
    """
    element = by_id(document, element_id)
    if element is None:
        return False
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    element.string = text.replace("</", "<\\/")
    return True


def serialize(document: BeautifulSoup) -> str:
    return str(document)


def write_output(path: Path, document: BeautifulSoup) -> Path:
    """Serialize a document to ``path``, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(document), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path

"""Content pages that only need their static images resolved."""

import logging
from pathlib import Path

from tedx_site.paths import STATIC_PAGES
from tedx_site.render.context import BuildContext
from tedx_site.render.document import load_template, write_output

logger = logging.getLogger(__name__)


async def render_static_pages(context: BuildContext) -> list[Path]:
    """Render every static page whose template exists; missing ones are skipped."""
    written = []
    for relative in STATIC_PAGES:
        template = context.paths.template_path(relative)
        if not template.is_file():
            logger.info("Skipping %s (template not found)", relative)
            continue
        document = load_template(template)
        await context.assets.resolve(document)
        written.append(write_output(context.paths.output_path(relative), document))
    return written

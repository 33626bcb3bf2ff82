"""
Jinja2 rendering of the report page.

Each section partial is rendered against the view context first; the
results are handed to the page shell as markup, so a partial can use the
same names (date, time, list, ...) as the page itself.
"""

import logging
from typing import Any

from jinja2 import Environment, StrictUndefined, select_autoescape
from markupsafe import Markup

from .models import SECTION_NAMES, ReportError, TemplatePartials, TemplatesView

logger = logging.getLogger(__name__)


class ReportRenderer:
    """
    Merge a TemplatesView with the loaded template partials.

    Example:
        >>> partials = TemplatePartials(page="<p>{{ date }}</p>", meta="", footer="",
        ...                             files="", features="")
        >>> ReportRenderer(partials).render(TemplatesView(date="2019/10/20"))
        '<p>2019/10/20</p>'
    """

    def __init__(self, partials: TemplatePartials):
        self.partials = partials
        self.env = Environment(
            autoescape=select_autoescape(default_for_string=True, default=True),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, view: TemplatesView) -> str:
        """
        Render the full page.

        Raises:
            ReportError: If no page template is loaded
        """
        if self.partials.page is None:
            raise ReportError("Page template is not loaded")

        context = view.to_context()
        sections = self._section_sources(view)
        rendered: dict[str, Any] = {}
        for name in SECTION_NAMES:
            rendered[name] = Markup(self.render_string(sections[name], context))

        logger.debug(f"Rendering page with {len(view.list)} features")
        return self.render_string(self.partials.page, {**context, **rendered})

    def render_string(self, source: str, context: dict[str, Any]) -> str:
        return self.env.from_string(source).render(context)

    def _section_sources(self, view: TemplatesView) -> dict[str, str]:
        # meta and footer come from the view; the rest straight from the partials
        return {
            "meta": view.meta,
            "footer": view.footer,
            "files": self.partials.files or "",
            "features": self.partials.features or "",
        }

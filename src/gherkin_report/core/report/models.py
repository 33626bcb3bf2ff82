"""
Report data models.

TemplatePartials holds the raw HTML fragments loaded from the templates
folder. TemplatesView is the per-run view model they are rendered against.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from gherkin_report.core.gherkin.models import Gherkin

SECTION_NAMES = ("meta", "footer", "files", "features")
PAGE_TEMPLATE = "page"
TEMPLATE_NAMES = (*SECTION_NAMES, PAGE_TEMPLATE)
TEMPLATE_SUFFIX = ".html"


class ReportError(Exception):
    """Error from report assembly."""

    pass


class TemplatePartials(BaseModel):
    """Raw template strings, one per report section plus the page shell."""

    meta: str | None = Field(default=None, description="Content of the <head> block")
    footer: str | None = Field(default=None, description="Page footer")
    files: str | None = Field(default=None, description="List of analyzed files")
    features: str | None = Field(default=None, description="Feature/scenario/step details")
    page: str | None = Field(default=None, description="Page shell the sections go into")

    def missing(self) -> list[str]:
        """Names of the templates that have not been loaded."""
        return [name for name in TEMPLATE_NAMES if getattr(self, name) is None]


@dataclass
class TemplatesView:
    """
    View model for one report.

    `meta` and `footer` carry the partial strings so the renderer can
    place them in the page; `list` is the analyzed Gherkin sequence.
    """

    date: str = ""
    time: str = ""
    title: str = ""
    meta: str = ""
    footer: str = ""
    list: list[Gherkin] = field(default_factory=list)

    def to_context(self) -> dict[str, Any]:
        """Template context with the view fields as top-level names."""
        return {
            "date": self.date,
            "time": self.time,
            "title": self.title,
            "meta": self.meta,
            "footer": self.footer,
            "list": self.list,
        }

"""
HTML report assembly: view model, rendering and the run orchestrator.
"""

from .models import ReportError, TemplatePartials, TemplatesView
from .renderer import ReportRenderer
from .reporter import Reporter

__all__ = [
    "ReportError",
    "ReportRenderer",
    "Reporter",
    "TemplatePartials",
    "TemplatesView",
]

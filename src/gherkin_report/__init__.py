"""
gherkin-report - Gherkin feature files to static HTML

A CLI tool that reads a folder of .feature files and writes a browsable
report of their features, scenarios and steps.
"""

__version__ = "0.3.0"

# Re-export core models for convenience
from gherkin_report.core.gherkin.models import Gherkin, Scenario, Step, StepKeyword
from gherkin_report.core.report.reporter import Reporter

__all__ = ["Gherkin", "Reporter", "Scenario", "Step", "StepKeyword", "__version__"]

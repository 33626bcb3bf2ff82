"""
Gherkin feature file reading and analysis.
"""

from .analyzer import Analyzer, ParserState, match_step_keyword, split_table_row
from .models import Gherkin, Scenario, Step, StepKeyword
from .reader import Reader

__all__ = [
    "Analyzer",
    "Gherkin",
    "ParserState",
    "Reader",
    "Scenario",
    "Step",
    "StepKeyword",
    "match_step_keyword",
    "split_table_row",
]

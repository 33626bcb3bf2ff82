"""
Gherkin data models.

These models hold the structured form of a single feature file: the feature
itself, its scenarios and their steps. They are produced by the Analyzer
and consumed by the report templates.
"""

from enum import Enum

from pydantic import BaseModel, Field


class StepKeyword(str, Enum):
    """Step keywords, stored exactly as written in the feature file."""

    GIVEN = "Given"
    WHEN = "When"
    THEN = "Then"
    AND = "And"
    BUT = "But"


class Step(BaseModel):
    """
    A single step line of a scenario.

    Data tables and doc strings are the two kinds of step argument; a step
    has at most one of them in well-formed input, but both are kept if the
    file provides both.
    """

    keyword: StepKeyword = Field(description="Keyword the step starts with")
    text: str = Field(default="", description="Step text after the keyword")
    data_table: list[list[str]] | None = Field(
        default=None, description="Rows of the pipe-delimited table argument"
    )
    doc_string: str | None = Field(
        default=None, description="Multi-line string argument"
    )


class Scenario(BaseModel):
    """A scenario (or scenario outline, or background block) with its steps."""

    name: str = Field(default="", description="Scenario title")
    tags: list[str] = Field(default_factory=list, description="Tags on this scenario")
    steps: list[Step] = Field(default_factory=list, description="Steps in source order")
    outline: bool = Field(default=False, description="True for Scenario Outline blocks")
    examples: list[list[str]] = Field(
        default_factory=list, description="Examples table rows, header row first"
    )


class Gherkin(BaseModel):
    """
    Parsed representation of one feature file.

    `tags` is the union of every tag seen on the feature line and on its
    scenarios. `feature_tags` keeps only the feature-level ones, in order.
    """

    name: str = Field(default="", description="Feature title")
    path: str = Field(default="", description="Source file the feature came from")
    description: str = Field(default="", description="Free text under the Feature line")
    tags: set[str] = Field(default_factory=set, description="Feature and scenario tags")
    feature_tags: list[str] = Field(default_factory=list, description="Feature-level tags")
    background: Scenario | None = Field(default=None, description="Background block")
    scenarios: list[Scenario] = Field(
        default_factory=list, description="Scenarios in source order"
    )

    @property
    def step_count(self) -> int:
        """Total number of steps across all scenarios."""
        return sum(len(scenario.steps) for scenario in self.scenarios)

    @property
    def sorted_tags(self) -> list[str]:
        """Tags in a stable order for display."""
        return sorted(self.tags)

"""
Gherkin analyzer.

Turns the lines of a feature file into a Gherkin record with a single pass
over the input. The parser is an explicit state machine: one ParserState
value and one accumulator (_ParseContext) threaded through the loop, so
every transition is visible in one place.

Parsing is tolerant. Malformed or unexpected content never raises; it is
skipped and the result simply carries less structure. A file with no
Feature line yields an empty Gherkin.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .models import Gherkin, Scenario, Step, StepKeyword

logger = logging.getLogger(__name__)

FEATURE_PREFIX = "Feature:"
BACKGROUND_PREFIX = "Background:"
OUTLINE_PREFIX = "Scenario Outline:"
SCENARIO_PREFIX = "Scenario:"
EXAMPLES_PREFIX = "Examples:"
COMMENT_PREFIX = "#"
TAG_PREFIX = "@"
TABLE_DELIMITER = "|"
DOC_STRING_DELIMITERS = ('"""', "```")


class ParserState(str, Enum):
    """Where the parser is within the feature file."""

    SEEKING_FEATURE = "seeking_feature"
    IN_FEATURE = "in_feature"
    SEEKING_SCENARIO = "seeking_scenario"
    IN_SCENARIO = "in_scenario"
    IN_STEP = "in_step"
    IN_DATA_TABLE = "in_data_table"
    IN_EXAMPLES = "in_examples"
    IN_DOC_STRING = "in_doc_string"


@dataclass
class _ParseContext:
    """Accumulator carried through one parse."""

    gherkin: Gherkin
    state: ParserState = ParserState.SEEKING_FEATURE
    description: list[str] = field(default_factory=list)
    pending_tags: list[str] = field(default_factory=list)
    block: Scenario | None = None
    step: Step | None = None
    doc_delimiter: str = ""
    doc_indent: int = 0
    doc_lines: list[str] = field(default_factory=list)


def match_step_keyword(line: str) -> StepKeyword | None:
    """
    Return the step keyword a trimmed line starts with, if any.

    The keyword must be a whole word: "Given x" and "Given" match,
    "Givenchy" does not.
    """
    for keyword in StepKeyword:
        word = keyword.value
        if line.startswith(word) and (len(line) == len(word) or line[len(word)].isspace()):
            return keyword
    return None


def split_table_row(line: str) -> list[str]:
    """
    Split a `| a | b |` row into trimmed cells.

    Only the empty cells produced by the outer delimiters are dropped, so
    an intentionally empty cell inside the row survives.
    """
    cells = [cell.strip() for cell in line.split(TABLE_DELIMITER)]
    if cells and not cells[0]:
        cells = cells[1:]
    if cells and not cells[-1]:
        cells = cells[:-1]
    return cells


class Analyzer:
    """
    Convert feature-file lines into Gherkin records.

    Example:
        >>> analyzer = Analyzer()
        >>> gherkin = analyzer.parse(["Feature: Login", "Scenario: ok", "Given a user"])
        >>> gherkin.scenarios[0].steps[0].keyword
        <StepKeyword.GIVEN: 'Given'>
    """

    def get_gherkins(
        self,
        rows_per_file: Sequence[Sequence[str]],
        sources: Sequence[str] | None = None,
    ) -> list[Gherkin]:
        """
        Parse a batch of files, preserving file order.

        Args:
            rows_per_file: One line sequence per feature file
            sources: Optional file names, one per entry of rows_per_file

        Returns:
            One Gherkin per input file, in the same order
        """
        if sources is None:
            sources = [""] * len(rows_per_file)
        return [
            self.parse(rows, source)
            for rows, source in zip(rows_per_file, sources, strict=True)
        ]

    def parse(self, lines: Sequence[str], source: str = "") -> Gherkin:
        """
        Parse the lines of one feature file.

        Args:
            lines: File content split into lines, blank lines included
            source: Name of the file, recorded on the result

        Returns:
            The parsed Gherkin. Never raises on malformed content.
        """
        ctx = _ParseContext(gherkin=Gherkin(path=source))

        for raw in lines:
            if ctx.state is ParserState.IN_DOC_STRING:
                self._consume_doc_string(ctx, raw)
                continue

            line = raw.strip()
            if not line or line.startswith(COMMENT_PREFIX):
                continue

            if line.startswith(TAG_PREFIX):
                self._collect_tags(ctx, line)
            elif line.startswith(FEATURE_PREFIX):
                self._start_feature(ctx, line)
            elif ctx.state is ParserState.SEEKING_FEATURE:
                # Prose before the Feature line
                continue
            elif line.startswith(BACKGROUND_PREFIX):
                self._start_background(ctx, line)
            elif line.startswith((OUTLINE_PREFIX, SCENARIO_PREFIX)):
                self._start_scenario(ctx, line)
            elif line.startswith(EXAMPLES_PREFIX):
                self._start_examples(ctx)
            elif ctx.state is ParserState.IN_FEATURE:
                # Free text up to the first block, even if it looks like a step
                ctx.description.append(line)
            elif line.startswith(TABLE_DELIMITER):
                self._add_table_row(ctx, line)
            elif line.startswith(DOC_STRING_DELIMITERS):
                self._open_doc_string(ctx, raw, line)
            elif (keyword := match_step_keyword(line)) is not None:
                self._add_step(ctx, keyword, line)

        if ctx.state is ParserState.IN_DOC_STRING:
            logger.debug(f"Unterminated doc string in {source or '<lines>'}")
            self._close_doc_string(ctx)

        gherkin = ctx.gherkin
        gherkin.description = "\n".join(ctx.description)
        logger.debug(
            f"Parsed feature '{gherkin.name}' from {source or '<lines>'}: "
            f"{len(gherkin.scenarios)} scenarios, {gherkin.step_count} steps"
        )
        return gherkin

    def _collect_tags(self, ctx: _ParseContext, line: str) -> None:
        for token in line.split():
            if token.startswith(COMMENT_PREFIX):
                break
            if token.startswith(TAG_PREFIX):
                ctx.pending_tags.append(token)
        if ctx.state is ParserState.IN_FEATURE:
            ctx.state = ParserState.SEEKING_SCENARIO

    def _start_feature(self, ctx: _ParseContext, line: str) -> None:
        if ctx.state is not ParserState.SEEKING_FEATURE:
            logger.debug(f"Ignoring extra feature declaration: {line}")
            ctx.pending_tags = []
            return
        gherkin = ctx.gherkin
        gherkin.name = line[len(FEATURE_PREFIX):].strip()
        gherkin.feature_tags = ctx.pending_tags
        gherkin.tags.update(ctx.pending_tags)
        ctx.pending_tags = []
        ctx.state = ParserState.IN_FEATURE

    def _start_background(self, ctx: _ParseContext, line: str) -> None:
        background = Scenario(name=line[len(BACKGROUND_PREFIX):].strip())
        ctx.gherkin.background = background
        ctx.block = background
        ctx.step = None
        ctx.pending_tags = []
        ctx.state = ParserState.IN_SCENARIO

    def _start_scenario(self, ctx: _ParseContext, line: str) -> None:
        outline = line.startswith(OUTLINE_PREFIX)
        prefix = OUTLINE_PREFIX if outline else SCENARIO_PREFIX
        scenario = Scenario(
            name=line[len(prefix):].strip(),
            tags=ctx.pending_tags,
            outline=outline,
        )
        ctx.gherkin.scenarios.append(scenario)
        ctx.gherkin.tags.update(ctx.pending_tags)
        ctx.pending_tags = []
        ctx.block = scenario
        ctx.step = None
        ctx.state = ParserState.IN_SCENARIO

    def _start_examples(self, ctx: _ParseContext) -> None:
        # Tags on an Examples block are not carried anywhere
        ctx.pending_tags = []
        if ctx.block is None or ctx.block is ctx.gherkin.background:
            return
        ctx.step = None
        ctx.state = ParserState.IN_EXAMPLES

    def _add_table_row(self, ctx: _ParseContext, line: str) -> None:
        cells = split_table_row(line)
        if ctx.state is ParserState.IN_EXAMPLES and ctx.block is not None:
            ctx.block.examples.append(cells)
        elif ctx.step is not None and ctx.state in (
            ParserState.IN_STEP,
            ParserState.IN_DATA_TABLE,
        ):
            if ctx.step.data_table is None:
                ctx.step.data_table = []
            ctx.step.data_table.append(cells)
            ctx.state = ParserState.IN_DATA_TABLE

    def _add_step(self, ctx: _ParseContext, keyword: StepKeyword, line: str) -> None:
        if ctx.block is None:
            logger.debug(f"Ignoring step outside of a scenario: {line}")
            return
        step = Step(keyword=keyword, text=line[len(keyword.value):].strip())
        ctx.block.steps.append(step)
        ctx.step = step
        ctx.state = ParserState.IN_STEP

    def _open_doc_string(self, ctx: _ParseContext, raw: str, line: str) -> None:
        ctx.doc_delimiter = line[:3]
        ctx.doc_indent = len(raw) - len(raw.lstrip())
        ctx.doc_lines = []
        ctx.state = ParserState.IN_DOC_STRING

    def _consume_doc_string(self, ctx: _ParseContext, raw: str) -> None:
        if raw.strip() == ctx.doc_delimiter:
            self._close_doc_string(ctx)
            return
        indent = raw[: ctx.doc_indent]
        ctx.doc_lines.append(raw[ctx.doc_indent:] if not indent.strip() else raw.lstrip())

    def _close_doc_string(self, ctx: _ParseContext) -> None:
        if ctx.step is not None:
            ctx.step.doc_string = "\n".join(ctx.doc_lines)
            ctx.state = ParserState.IN_STEP
        elif ctx.block is not None:
            ctx.state = ParserState.IN_SCENARIO
        else:
            ctx.state = ParserState.SEEKING_SCENARIO
        ctx.doc_lines = []
        ctx.doc_delimiter = ""

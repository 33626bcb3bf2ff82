"""
gherkin-report CLI - generate and show commands.

`generate` writes the HTML report for a folder of feature files.
`show` prints the parsed structure of a single feature file.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from jinja2 import TemplateError
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from gherkin_report.core.config import load_config
from gherkin_report.core.gherkin import Analyzer, Gherkin, Reader
from gherkin_report.core.report import ReportError, Reporter

logger = logging.getLogger(__name__)

console = Console()


def generate(
    source: Annotated[
        Path,
        typer.Argument(help="Folder containing the .feature files"),
    ] = Path("./"),
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Folder to write the report to"),
    ] = None,
    templates: Annotated[
        Path | None,
        typer.Option("--templates", "-t", help="Folder with custom HTML templates"),
    ] = None,
    recursive: Annotated[
        bool | None,
        typer.Option("--recursive/--no-recursive", help="Include feature files in subfolders"),
    ] = None,
) -> None:
    """
    Generate an HTML report from a folder of feature files.

    The output folder is deleted and recreated on every run.

    Examples:
        gherkin-report generate                    # ./ into ./report
        gherkin-report generate features -o site   # features/ into ./site
        gherkin-report generate -t my-templates    # use custom templates
    """
    try:
        config = load_config()
        overrides: dict[str, object] = {}
        if output is not None:
            overrides["report_dir"] = str(output)
        if templates is not None:
            overrides["templates_dir"] = str(templates)
        if recursive is not None:
            overrides["recursive"] = recursive
        if overrides:
            config = config.model_validate({**config.model_dump(), **overrides})
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {escape(str(e))}")
        raise typer.Exit(1)

    reporter = Reporter(config)
    try:
        report_path = reporter.create_gherkins_report(source)
    except (OSError, ReportError, TemplateError) as e:
        logger.debug("Report generation failed", exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    gherkins = reporter.gherkins
    scenario_count = sum(len(g.scenarios) for g in gherkins)
    console.print(f"[green]Report written to {report_path}[/green]")
    console.print(f"[dim]{len(gherkins)} features, {scenario_count} scenarios[/dim]")


def build_tree(gherkin: Gherkin) -> Tree:
    """Build a Rich tree of feature -> scenarios -> steps."""
    label = escape(gherkin.name) or "(unnamed feature)"
    if gherkin.feature_tags:
        label = f"{label} [cyan]{' '.join(gherkin.feature_tags)}[/cyan]"
    tree = Tree(f"[bold]Feature:[/bold] {label}")

    blocks = [("Background", gherkin.background)] if gherkin.background else []
    for scenario in gherkin.scenarios:
        kind = "Scenario Outline" if scenario.outline else "Scenario"
        blocks.append((kind, scenario))

    for kind, block in blocks:
        tags = f" [cyan]{' '.join(block.tags)}[/cyan]" if block.tags else ""
        branch = tree.add(f"[bold]{kind}:[/bold] {escape(block.name)}{tags}")
        for step in block.steps:
            node = branch.add(f"[green]{step.keyword.value}[/green] {escape(step.text)}")
            for row in step.data_table or []:
                node.add(f"[dim]| {escape(' | '.join(row))} |[/dim]")
        if block.examples:
            examples = branch.add("[bold]Examples[/bold]")
            for row in block.examples:
                examples.add(f"[dim]| {escape(' | '.join(row))} |[/dim]")

    return tree


def show(
    feature_file: Annotated[Path, typer.Argument(help="Feature file to parse")],
) -> None:
    """
    Print the parsed structure of a single feature file.

    Examples:
        gherkin-report show features/login.feature
    """
    reader = Reader()
    try:
        text = reader.read_file_text(feature_file)
    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    gherkin = Analyzer().parse(reader.split_into_lines(text), str(feature_file))
    console.print(build_tree(gherkin))

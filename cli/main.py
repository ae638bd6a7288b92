"""
Pattern-Viz CLI

Command-line interface for the structural code analyzer.
Provides commands for analyzing a source file, running the bracket
pre-check, and computing diagram coordinates.

Commands:
    patternviz analyze <path>   Analyze a file and print its structure tree
    patternviz check <path>     Run the bracket balance pre-check
    patternviz layout <path>    Print diagram coordinates as JSON
    patternviz dialects         List supported dialects

Usage:
    $ patternviz analyze src/app.js
    $ patternviz analyze src/app.ts --format json
    $ cat snippet.js | patternviz analyze - --dialect javascript
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from patternviz import __version__, config
from patternviz.diagnostics import check_balance
from patternviz.errors import AnalyzerError, ParseError
from patternviz.export import result_to_dict, to_csv, to_json
from patternviz.layout import LayoutConfig, layout as compute_layout
from patternviz.models import EXTENSION_MAP, AnalysisResult, ClassifiedKind, Dialect
from patternviz.pipeline import analyze as run_analysis

# Initialize Typer app and Rich console
app = typer.Typer(
    name="patternviz",
    help="Pattern-Viz: structural analysis of JavaScript and TypeScript code",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

OUTPUT_FORMATS = ("tree", "json", "csv")

KIND_STYLES = {
    ClassifiedKind.FUNCTION: "bold blue",
    ClassifiedKind.VARIABLE: "green",
    ClassifiedKind.LOOP: "magenta",
    ClassifiedKind.CONDITIONAL: "yellow",
    ClassifiedKind.CLASS: "bold cyan",
    ClassifiedKind.IMPORT: "bright_black",
    ClassifiedKind.OTHER: "dim",
}


@app.command()
def analyze(
    path: str = typer.Argument(
        ...,
        help="Source file to analyze, or '-' to read from stdin",
    ),
    dialect: Optional[str] = typer.Option(
        None,
        "--dialect",
        "-l",
        help="Dialect (javascript, typescript, tsx); inferred from the extension if omitted",
    ),
    output_format: str = typer.Option(
        "tree",
        "--format",
        "-f",
        help="Output format: tree, json or csv",
    ),
    include_other: bool = typer.Option(
        False,
        "--include-other",
        help="Keep syntax nodes that fall outside the known categories",
    ),
    with_layout: bool = typer.Option(
        False,
        "--layout/--no-layout",
        help="Add diagram coordinates to json/csv output",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on unbalanced brackets without attempting a parse",
    ),
) -> None:
    """
    Analyze a source file and show its structure.

    This command:
    1. Runs the bracket balance pre-check
    2. Parses the source with the dialect's grammar
    3. Builds the tree of functions, classes, loops, conditionals,
       variables and imports
    """
    if output_format not in OUTPUT_FORMATS:
        err_console.print(
            f"[bold red]Error:[/bold red] unknown format {output_format!r} "
            f"(choose from {', '.join(OUTPUT_FORMATS)})"
        )
        raise typer.Exit(2)

    source = _read_source(path)
    resolved = _resolve_dialect(path, dialect)
    outcome = run_analysis(source, resolved, include_other=include_other, strict=strict)

    for warning in outcome.warnings:
        err_console.print(f"[yellow]⚠️  {escape(str(warning))}[/yellow]")

    if not outcome.ok:
        _print_error(outcome.error, as_json=output_format == "json")
        raise typer.Exit(1)

    result = outcome.result
    positions = compute_layout(result, config.default_layout_config()) if with_layout else None

    if output_format == "json":
        typer.echo(to_json(result, positions))
    elif output_format == "csv":
        typer.echo(to_csv(result, positions), nl=False)
    else:
        console.print(_render_tree(result))
        console.print()
        _print_stats(result)


@app.command()
def check(
    path: str = typer.Argument(
        ...,
        help="Source file to check, or '-' to read from stdin",
    ),
) -> None:
    """
    Run the bracket balance pre-check.

    Fast and independent from the parser: it does not understand strings
    or comments, so treat its findings as hints.
    """
    source = _read_source(path)
    error = check_balance(source)
    if error is None:
        console.print("[green]✓ Brackets are balanced[/green]")
        return
    err_console.print(f"[bold red]✗ {escape(str(error))}[/bold red]")
    raise typer.Exit(1)


@app.command()
def layout(
    path: str = typer.Argument(
        ...,
        help="Source file to lay out, or '-' to read from stdin",
    ),
    dialect: Optional[str] = typer.Option(
        None,
        "--dialect",
        "-l",
        help="Dialect (javascript, typescript, tsx); inferred from the extension if omitted",
    ),
    orientation: str = typer.Option(
        "vertical",
        "--orientation",
        "-o",
        help="vertical (depth on y) or horizontal (depth on x)",
    ),
) -> None:
    """
    Print diagram coordinates for every node as JSON.
    """
    source = _read_source(path)
    resolved = _resolve_dialect(path, dialect)
    outcome = run_analysis(source, resolved)
    if not outcome.ok:
        _print_error(outcome.error, as_json=True)
        raise typer.Exit(1)

    try:
        layout_config = LayoutConfig(
            node_spacing=config.NODE_SPACING,
            level_spacing=config.LEVEL_SPACING,
            orientation=orientation,
        )
    except ValueError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(2)

    positions = compute_layout(outcome.result, layout_config)
    payload = {
        node_id: {"x": p.x, "y": p.y, "depth": p.depth} for node_id, p in positions.items()
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def dialects() -> None:
    """
    List supported dialects and the file extensions mapped to them.
    """
    table = Table(title="Supported Dialects", box=box.ROUNDED)
    table.add_column("Dialect", style="cyan")
    table.add_column("Extensions")

    for dialect in Dialect:
        extensions = sorted(ext for ext, d in EXTENSION_MAP.items() if d is dialect)
        table.add_row(dialect.value, ", ".join(extensions))

    console.print(table)


# Helper functions for input and output

def _read_source(path: str) -> str:
    """Read source text from a file or stdin."""
    if path == "-":
        return sys.stdin.read()
    file_path = Path(path)
    if not file_path.is_file():
        err_console.print(f"[bold red]Error:[/bold red] file not found: {path}")
        raise typer.Exit(2)
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        err_console.print(f"[bold red]Error:[/bold red] {path} is not UTF-8 text: {e}")
        raise typer.Exit(2)


def _resolve_dialect(path: str, dialect: Optional[str]) -> str:
    """Pick the dialect from the option, the file extension, or the default."""
    if dialect is not None:
        return dialect
    if path != "-" and Path(path).suffix.lower() in EXTENSION_MAP:
        return Dialect.from_path(path).value
    return config.DEFAULT_DIALECT


def _print_error(error: Optional[AnalyzerError], as_json: bool = False) -> None:
    """Print an analysis failure, with position when there is one."""
    if error is None:
        return
    if as_json:
        typer.echo(json.dumps(error.to_dict()), err=True)
        return
    title = "Syntax Error" if isinstance(error, ParseError) else "Analysis Failed"
    err_console.print(
        Panel(Text(str(error)), title=f"[bold red]✗ {title}[/bold red]", border_style="red")
    )


def _render_tree(result: AnalysisResult) -> Tree:
    """Build a Rich tree mirroring the analysis tree."""
    branches: dict[str, Tree] = {}
    tree: Optional[Tree] = None
    parents = result.parent_map()

    for node, _depth in result.walk():
        style = KIND_STYLES[node.kind]
        text = f"[{style}]{escape(node.label)}[/{style}] [dim]{node.kind.value} · line {node.line}[/dim]"
        parent_id = parents[node.id]
        if parent_id is None:
            tree = Tree(f"[bold]{escape(node.label)}[/bold] [dim]({result.dialect.value})[/dim]")
            branches[node.id] = tree
        else:
            branches[node.id] = branches[parent_id].add(text)

    return tree


def _print_stats(result: AnalysisResult) -> None:
    """Print a summary panel of the run statistics."""
    stats = result_to_dict(result)["stats"]
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Nodes", str(stats["totalNodes"]))
    table.add_row("Functions", str(stats["functions"]))
    table.add_row("Classes", str(stats["classes"]))
    table.add_row("Variables", str(stats["variables"]))
    table.add_row("Loops", str(stats["loops"]))
    table.add_row("Conditionals", str(stats["conditionals"]))
    table.add_row("Imports", str(stats["imports"]))
    table.add_row("Complexity", str(stats["complexity"]))
    table.add_row("Lines", str(stats["linesOfCode"]))
    table.add_row("Parse time", f"{stats['parseTimeMs']:.2f}ms")

    panel = Panel(table, title="[bold green]✓ Analysis Complete[/bold green]", border_style="green")
    console.print(panel)


# Version and logging options
def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]Pattern-Viz[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable debug logging",
    ),
) -> None:
    """
    Pattern-Viz: structural analysis of JavaScript and TypeScript code.
    """
    logging.basicConfig(
        format=config.LOG_FORMAT,
        level=logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.WARNING),
    )


if __name__ == "__main__":
    app()

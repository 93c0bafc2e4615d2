import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler

from .. import config
from ..domain.errors import FormulaFmtError, UnformattableError
from ..domain.models import FormatOptions
from ..formatting.formatter import first_line_offset, format_formula, split_formula
from ..parsing.parser import parse_lines
from ..parsing.tokenizer import tokenize
from ..ui.progress import ProgressManager
from ..ui.report import describe_error, errors_table, tokens_table
from .config_commands import app as config_app

app = typer.Typer()
# formatted output goes to stdout; messages go to stderr
console = Console(stderr=True)
out_console = Console()

app.add_typer(config_app, name="config", help="Manage stored formatting preferences")

STDIN_NAME = "<stdin>"


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """format spreadsheet formulas."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _read_sources(paths: Optional[List[Path]]) -> List[Tuple[str, str]]:
    """returns (name, text) pairs; stdin when no paths are given."""
    if not paths:
        return [(STDIN_NAME, sys.stdin.read())]

    sources = []
    for path in paths:
        try:
            sources.append((str(path), path.read_text()))
        except (IOError, OSError) as e:
            raise FormulaFmtError(f"cannot read {path}: {e}") from e
    return sources


def _resolve_options(indent_width: Optional[int], line_width: Optional[int]) -> FormatOptions:
    """command-line values win over stored preferences."""
    preferences = config.load_preferences()
    return FormatOptions.create(
        indent_width=preferences.indent_width if indent_width is None else indent_width,
        line_width=preferences.line_width if line_width is None else line_width,
    )


@app.command()
def fmt(
    paths: Optional[List[Path]] = typer.Argument(None, help="Formula files; reads stdin when omitted"),
    indent_width: Optional[int] = typer.Option(None, "--indent-width", "-i", help="Spaces per indent"),
    line_width: Optional[int] = typer.Option(None, "--line-width", "-w", help="Maximum line width"),
    check: bool = typer.Option(False, "--check", help="Only report files that would be reformatted"),
    write: bool = typer.Option(False, "--write", help="Rewrite files in place"),
):
    """format formulas and print the result."""
    if check and write:
        console.print("[red]Error:[/red] --check and --write cannot be used together")
        raise typer.Exit(1)

    try:
        options = _resolve_options(indent_width, line_width)
        sources = _read_sources(paths)
    except FormulaFmtError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if write and not paths:
        console.print("[red]Error:[/red] --write needs at least one file")
        raise typer.Exit(1)

    failed = False
    changed = []
    progress_manager = ProgressManager(console)
    with progress_manager.task_progress("Formatting", total=len(sources)) as (progress, task_id):
        for name, text in sources:
            try:
                formatted = format_formula(text, options)
            except UnformattableError as e:
                failed = True
                console.print(f"[red]Error:[/red] cannot format {name}")
                offset = first_line_offset(text)
                console.print(errors_table(e.errors, title=name, first_line_offset=offset))
                progress.advance(task_id)
                continue

            if formatted != text.rstrip("\n"):
                changed.append(name)

            if write:
                if name in changed:
                    Path(name).write_text(formatted + "\n")
            elif not check:
                typer.echo(formatted)
            progress.advance(task_id)

    if check:
        for name in changed:
            console.print(f"would reformat [cyan]{name}[/cyan]")
        if not changed and not failed:
            console.print("[green]All formulas are formatted.[/green]")
    elif write:
        for name in changed:
            console.print(f"reformatted [cyan]{name}[/cyan]")

    if failed or (check and changed):
        raise typer.Exit(1)


@app.command("check")
def check_command(
    paths: Optional[List[Path]] = typer.Argument(None, help="Formula files; reads stdin when omitted"),
):
    """report tokenizer and parser errors."""
    try:
        sources = _read_sources(paths)
    except FormulaFmtError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    has_error = False
    for name, text in sources:
        result = parse_lines(split_formula(text))
        if result.has_error:
            has_error = True
            offset = first_line_offset(text)
            for token in result.errors:
                out_console.print(f"{name}: {describe_error(token, offset)}", markup=False, highlight=False)
            if not result.can_format_expression:
                out_console.print(f"[yellow]{name} cannot be formatted until these are fixed.[/yellow]")
        else:
            out_console.print(f"[green]{name}: no errors[/green]")

    if has_error:
        raise typer.Exit(1)


@app.command()
def tokens(
    path: Optional[Path] = typer.Argument(None, help="Formula file; reads stdin when omitted"),
):
    """print the token stream of a formula."""
    try:
        [(name, text)] = _read_sources([path] if path else None)
    except FormulaFmtError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    out_console.print(tokens_table(tokenize(split_formula(text)), title=name))


if __name__ == "__main__":
    app()

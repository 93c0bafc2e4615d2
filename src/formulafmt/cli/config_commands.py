import typer
from rich.console import Console
from rich.table import Table
from typing import Optional

from .. import config
from ..domain.errors import ConfigError
from ..domain.models import Preferences

app = typer.Typer()
console = Console()


@app.command("show")
def show_preferences():
    """show the stored formatting preferences."""
    preferences = config.load_preferences()

    table = Table(title="Preferences")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("indent width", str(preferences.indent_width))
    table.add_row("line width", str(preferences.line_width))

    console.print(table)
    console.print(f"[dim]{config.CONFIG_FILE}[/dim]")


@app.command("set")
def set_preferences(
    indent_width: Optional[int] = typer.Option(None, "--indent-width", "-i", help="Spaces per indent (1-8)"),
    line_width: Optional[int] = typer.Option(None, "--line-width", "-w", help="Maximum line width (at least 10)"),
):
    """
    update stored formatting preferences.

    settings that are not given keep their current value.
    """
    current = config.load_preferences()

    try:
        preferences = Preferences.create(
            indent_width=current.indent_width if indent_width is None else indent_width,
            line_width=current.line_width if line_width is None else line_width,
        )
        config.save_preferences(preferences)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Saved:[/green] indent width {preferences.indent_width}, "
        f"line width {preferences.line_width}"
    )


@app.command("reset")
def reset_preferences():
    """restore the default preferences."""
    try:
        config.reset_preferences()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    defaults = Preferences()
    console.print(
        f"[green]Reset:[/green] indent width {defaults.indent_width}, "
        f"line width {defaults.line_width}"
    )


if __name__ == "__main__":
    app()

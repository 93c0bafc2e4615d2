"""rich tables for diagnostics and token dumps."""
from typing import List

from rich.table import Table
from rich.text import Text

from ..parsing.tokenizer import Token
from ..utils.position import Position


def describe_position(position: Position, first_line_offset: int = 1) -> str:
    """
    one-based location in the source text.

    first_line_offset is the number of columns split off the first line
    before tokenizing, the leading '=' at minimum.
    """
    line_num = position.line_num + 1
    col_num = position.col_num + 1
    if line_num == 1:
        col_num += first_line_offset
    return f"Ln{line_num}, Col{col_num}"


def describe_error(token: Token, first_line_offset: int = 1) -> str:
    message = token.error or "error"
    return f"{describe_position(token.start_position, first_line_offset)}: {message}"


def errors_table(errors: List[Token], title: str = "Errors", first_line_offset: int = 1) -> Table:
    table = Table(title=title)
    table.add_column("Location", style="cyan", no_wrap=True)
    table.add_column("Token", style="white")
    table.add_column("Message", style="red")

    for token in errors:
        table.add_row(
            describe_position(token.start_position, first_line_offset),
            Text(token.content),
            token.error or "",
        )
    return table


def tokens_table(tokens: List[Token], title: str = "Tokens") -> Table:
    table = Table(title=title)
    table.add_column("Type", style="cyan")
    table.add_column("Content", style="white")
    table.add_column("Start", style="dim")
    table.add_column("End", style="dim")
    table.add_column("Error", style="red")

    for token in tokens:
        table.add_row(
            token.type.name,
            Text(token.content),
            f"{token.start_position.line_num}:{token.start_position.col_num}",
            f"{token.end_position.line_num}:{token.end_position.col_num}",
            token.error or "",
        )
    return table

from typing import NamedTuple


class Position(NamedTuple):
    """
    a position in multi-line text.

    both fields are zero-indexed. col_num points right after the cursor, so a
    token occupying the first character of a line starts at col_num 0.
    tuple comparison orders positions by line, then column.
    """
    line_num: int
    col_num: int

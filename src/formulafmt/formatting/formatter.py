import logging
from typing import List, Optional

from ..domain.errors import IncompleteFormulaError, UnformattableError
from ..domain.models import FormatOptions
from ..parsing.parser import ParseResult, parse_lines
from .nodes import build_document
from .renderer import render

logger = logging.getLogger(__name__)

FORMULA_PREFIX = "="


def format_lines(parse_result: ParseResult, options: Optional[FormatOptions] = None) -> List[str]:
    """
    formats a parse result into lines.

    raises UnformattableError when the source has an unclosed string or
    quoted name, since re-laying out those tokens would change the formula.
    """
    options = options or FormatOptions()
    if not parse_result.can_format_expression:
        fatal = [
            t for t in parse_result.errors
            if t.error_type is not None and t.error_type.is_fatal
        ]
        raise UnformattableError(fatal)

    document = build_document(parse_result)
    lines = render(document, options.indent_width, options.line_width)
    logger.debug(
        f"formatted {len(parse_result.tokens)} tokens into {len(lines)} lines "
        f"(flat width {document.width}, line width {options.line_width})"
    )
    return lines


def _prefix_length(first_line: str) -> int:
    stripped = first_line.lstrip()
    if stripped.startswith(FORMULA_PREFIX):
        return len(first_line) - len(stripped) + len(FORMULA_PREFIX)
    return 0


def split_formula(text: str) -> List[str]:
    """splits formula text into lines, dropping the leading '=' if present."""
    lines = text.splitlines() or [""]
    lines[0] = lines[0][_prefix_length(lines[0]):]
    return lines


def first_line_offset(text: str) -> int:
    """
    columns removed from the first line by split_formula.

    text without a leading '=' is treated as if it had one, so the result is
    never less than one.
    """
    lines = text.splitlines() or [""]
    return _prefix_length(lines[0]) or len(FORMULA_PREFIX)


def format_formula(text: str, options: Optional[FormatOptions] = None) -> str:
    """
    formats formula source text; the result always starts with '='.

    raises IncompleteFormulaError when the parser stopped before the end of
    the input, since the remaining tokens would be missing from the output.
    """
    parse_result = parse_lines(split_formula(text))
    lines = format_lines(parse_result, options)
    if parse_result.unconsumed_tokens:
        raise IncompleteFormulaError(
            [t for t in parse_result.unconsumed_tokens if t.is_error]
        )
    return FORMULA_PREFIX + "\n".join(lines)

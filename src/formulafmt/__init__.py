"""formatter for spreadsheet formulas."""
from .parsing.tokenizer import tokenize, Token, TokenType, ErrorType
from .parsing.parser import parse_lines, ParseResult
from .formatting.formatter import format_lines, format_formula
from .domain.models import FormatOptions
from .domain.errors import FormulaFmtError, UnformattableError, IncompleteFormulaError, ConfigError

parse = parse_lines
format = format_lines

__all__ = [
    "tokenize",
    "parse",
    "format",
    "parse_lines",
    "format_lines",
    "format_formula",
    "Token",
    "TokenType",
    "ErrorType",
    "ParseResult",
    "FormatOptions",
    "FormulaFmtError",
    "UnformattableError",
    "IncompleteFormulaError",
    "ConfigError",
]

"""tokenizer and parser for the formula language."""
from .tokenizer import FormulaTokenizer, Token, TokenType, ErrorType, tokenize
from .parser import FormulaParser, ParseResult, parse_lines

__all__ = [
    "FormulaTokenizer",
    "Token",
    "TokenType",
    "ErrorType",
    "tokenize",
    "FormulaParser",
    "ParseResult",
    "parse_lines",
]

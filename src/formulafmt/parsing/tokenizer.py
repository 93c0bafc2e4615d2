from enum import Enum, auto
from typing import Dict, List, Optional, Sequence
import re

from pydantic import BaseModel

from ..utils.position import Position


class TokenType(Enum):
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    XOR = auto()
    CONCAT = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    LESS = auto()
    GREATER = auto()
    LESS_OR_EQUAL = auto()
    GREATER_OR_EQUAL = auto()
    COMMA = auto()
    SEMICOLON = auto()
    L_PAREN = auto()
    R_PAREN = auto()
    L_BRACKET = auto()
    R_BRACKET = auto()
    LITERAL = auto()
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()
    RANGE = auto()
    ERROR = auto()


class ErrorType(Enum):
    """error kinds attached to tokens. the value is the human-readable message."""
    UNKNOWN_TOKEN = "unknown token"
    UNCLOSED_STRING = "unclosed string"
    UNCLOSED_QUOTES = "unclosed quoted name"
    UNCLOSED_ARRAY_LITERAL = "unclosed array literal"
    UNCLOSED_FUNCTION_CALL = "unclosed function call"
    UNCLOSED_PARENTHESES = "unclosed parentheses"
    UNEXPECTED_TOKEN = "unexpected token"
    INVALID_UNARY_OPERAND = "invalid unary operand"

    @property
    def message(self) -> str:
        return self.value

    @property
    def is_fatal(self) -> bool:
        """fatal errors make the token stream unsafe to reformat."""
        return self in (ErrorType.UNCLOSED_STRING, ErrorType.UNCLOSED_QUOTES)


UNARY_OPERATORS = frozenset({TokenType.PLUS, TokenType.MINUS})
OPERATORS = UNARY_OPERATORS | frozenset({
    TokenType.MULTIPLY,
    TokenType.DIVIDE,
    TokenType.XOR,
    TokenType.CONCAT,
    TokenType.EQUAL,
    TokenType.NOT_EQUAL,
    TokenType.LESS,
    TokenType.GREATER,
    TokenType.LESS_OR_EQUAL,
    TokenType.GREATER_OR_EQUAL,
})

# matched before SINGLE_CHAR_TOKENS
DOUBLE_CHAR_OPERATORS: Dict[str, TokenType] = {
    "<=": TokenType.LESS_OR_EQUAL,
    ">=": TokenType.GREATER_OR_EQUAL,
    "<>": TokenType.NOT_EQUAL,
}
SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "^": TokenType.XOR,
    "&": TokenType.CONCAT,
    "=": TokenType.EQUAL,
    "<": TokenType.LESS,
    ">": TokenType.GREATER,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.L_PAREN,
    ")": TokenType.R_PAREN,
    "{": TokenType.L_BRACKET,
    "}": TokenType.R_BRACKET,
}

LITERALS = frozenset({"true", "false", "#n/a"})
NUMBER_RE = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)(e\d+)?$", re.IGNORECASE)
IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_SHEET_NAME = r"([a-z0-9_]+|'.+')!"
_CELL_COL = r"\$?[a-z]+"
_CELL_ROW = r"\$?0*[1-9]\d*"
_OPEN_COL = _CELL_COL + f"({_CELL_ROW})?"
_OPEN_ROW = f"({_CELL_COL})?" + _CELL_ROW

RANGE_REF_RE = re.compile(
    f"^({_SHEET_NAME})?"
    f"({_CELL_COL}{_CELL_ROW}"
    f"|{_OPEN_COL}:{_OPEN_COL}"
    f"|{_OPEN_ROW}:{_OPEN_ROW})$",
    re.IGNORECASE,
)
# named ranges must be sheet-qualified to be told apart from identifiers
NAMED_RANGE_RE = re.compile(
    f"^{_SHEET_NAME}(?P<name>[a-z_][a-z0-9_]{{0,249}})$",
    re.IGNORECASE,
)


def is_range_reference(text: str) -> bool:
    """checks whether text is a cell, column, row, or named range reference."""
    if RANGE_REF_RE.match(text):
        return True
    match = NAMED_RANGE_RE.match(text)
    if match:
        return match.group("name").lower() not in ("true", "false")
    return False


class Token(BaseModel):
    type: TokenType
    content: str
    start_position: Position
    # inclusive
    end_position: Position
    error: Optional[str] = None
    error_type: Optional[ErrorType] = None

    @property
    def is_error(self) -> bool:
        return self.type == TokenType.ERROR or bool(self.error)

    def annotate(self, error_type: ErrorType) -> bool:
        """
        attaches an error unless the token already carries one.

        returns whether the annotation was applied.
        """
        if self.error:
            return False
        self.error = error_type.message
        self.error_type = error_type
        return True


def _make_token(
    token_type: TokenType,
    content: str,
    line_num: int,
    end_col: int,
    error_type: Optional[ErrorType] = None,
) -> Token:
    return Token(
        type=token_type,
        content=content,
        start_position=Position(line_num, end_col - len(content) + 1),
        end_position=Position(line_num, end_col),
        error=error_type.message if error_type else None,
        error_type=error_type,
    )


class FormulaTokenizer:
    """
    a tokenizer for spreadsheet formulas.

    lines are scanned independently. whitespace outside strings and quoted
    names separates tokens and is dropped; every other character ends up in
    exactly one token. lexically invalid content becomes an ERROR token and
    scanning carries on, so tokenize never fails.
    """

    def tokenize(self, lines: Sequence[str]) -> List[Token]:
        tokens: List[Token] = []
        for line_num, line in enumerate(lines):
            self._tokenize_line(line_num, line, tokens)

        tokens.sort(key=lambda t: t.start_position)
        return tokens

    def _tokenize_line(self, line_num: int, line: str, tokens: List[Token]):
        buffer: List[str] = []
        # double-quoted string literal
        in_string = False
        # single-quoted sheet name; the closing quote does not end the buffer
        in_quotes = False

        col = 0
        length = len(line)
        while col < length:
            c = line[col]
            next_c = line[col + 1] if col + 1 < length else ""

            if in_string:
                if c == '"':
                    if next_c == '"':
                        buffer.append('""')
                        col += 2
                        continue
                    in_string = False
                    buffer.append(c)
                    tokens.append(_make_token(TokenType.STRING, "".join(buffer), line_num, col))
                    buffer.clear()
                    col += 1
                    continue
                buffer.append(c)
                col += 1
                continue

            if in_quotes:
                if c == "'":
                    if next_c == "'":
                        buffer.append("''")
                        col += 2
                        continue
                    in_quotes = False
                buffer.append(c)
                col += 1
                continue

            if c.isspace():
                self._push_buffer(buffer, line_num, col, tokens)
                col += 1
                continue

            pair = c + next_c
            if pair in DOUBLE_CHAR_OPERATORS:
                self._push_buffer(buffer, line_num, col, tokens)
                tokens.append(_make_token(DOUBLE_CHAR_OPERATORS[pair], pair, line_num, col + 1))
                col += 2
                continue

            token_type = SINGLE_CHAR_TOKENS.get(c)
            if token_type is not None:
                self._push_buffer(buffer, line_num, col, tokens)
                tokens.append(_make_token(token_type, c, line_num, col))
                col += 1
                continue

            if c == '"':
                self._push_buffer(buffer, line_num, col, tokens)
                in_string = True
            elif c == "'":
                self._push_buffer(buffer, line_num, col, tokens)
                in_quotes = True
            buffer.append(c)
            col += 1

        if in_string or in_quotes:
            error_type = ErrorType.UNCLOSED_STRING if in_string else ErrorType.UNCLOSED_QUOTES
            tokens.append(
                _make_token(TokenType.ERROR, "".join(buffer), line_num, length - 1, error_type)
            )
            return

        self._push_buffer(buffer, line_num, length, tokens)

    def _push_buffer(self, buffer: List[str], line_num: int, col: int, tokens: List[Token]):
        """flushes the buffer as a classified token ending right before col."""
        content = "".join(buffer)
        buffer.clear()
        if not content:
            return

        end_col = col - 1
        if self._coalesce_not_available(content, line_num, end_col, tokens):
            return

        token_type = self._classify(content)
        if token_type is None:
            tokens.append(
                _make_token(TokenType.ERROR, content, line_num, end_col, ErrorType.UNKNOWN_TOKEN)
            )
        else:
            tokens.append(_make_token(token_type, content, line_num, end_col))

    def _classify(self, content: str) -> Optional[TokenType]:
        if content.lower() in LITERALS:
            return TokenType.LITERAL
        if NUMBER_RE.match(content):
            return TokenType.NUMBER
        if is_range_reference(content):
            return TokenType.RANGE
        # last, so that literals and ranges win
        if IDENTIFIER_RE.match(content):
            return TokenType.IDENTIFIER
        return None

    def _coalesce_not_available(
        self, content: str, line_num: int, end_col: int, tokens: List[Token]
    ) -> bool:
        """
        re-joins '#N' '/' 'A' into a single #N/A literal.

        the '/' is scanned as an operator, which splits the literal; the
        pieces are merged back when they are adjacent on the same line.
        """
        if content.lower() != "a" or len(tokens) < 2:
            return False
        prefix, slash = tokens[-2], tokens[-1]
        if prefix.content.lower() != "#n" or slash.type != TokenType.DIVIDE:
            return False
        if prefix.end_position != Position(line_num, end_col - 2):
            return False
        if slash.end_position != Position(line_num, end_col - 1):
            return False

        del tokens[-2:]
        tokens.append(
            _make_token(TokenType.LITERAL, prefix.content + "/" + content, line_num, end_col)
        )
        return True


def tokenize(lines: Sequence[str]) -> List[Token]:
    """tokenizes formula source lines."""
    return FormulaTokenizer().tokenize(lines)

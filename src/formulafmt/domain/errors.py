from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from ..parsing.tokenizer import Token


class FormulaFmtError(Exception):
    """base class for exceptions in formulafmt."""
    pass


class UnformattableError(FormulaFmtError):
    """raised when formatting is requested for input with fatal lexical errors."""
    def __init__(self, errors: List["Token"]):
        self.errors = errors
        messages = ", ".join(f"{t.error} at {t.content!r}" for t in errors)
        super().__init__(f"cannot format formula: {messages}")


class ConfigError(FormulaFmtError):
    """raised when formatting options or the preferences file are invalid."""
    pass


class IncompleteFormulaError(UnformattableError):
    """
    raised when the parser stopped before the end of the input.

    the tokens after that point are not part of the tree, so formatting would
    drop them from the output.
    """
    pass

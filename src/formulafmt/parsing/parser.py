import logging
from typing import Annotated, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from .tokenizer import (
    ErrorType,
    OPERATORS,
    Token,
    TokenType,
    UNARY_OPERATORS,
    tokenize,
)

logger = logging.getLogger(__name__)

LITERAL_TOKEN_TYPES = frozenset({
    TokenType.IDENTIFIER,
    TokenType.NUMBER,
    TokenType.STRING,
    TokenType.RANGE,
    TokenType.LITERAL,
    # unknown tokens and unclosed strings still occupy a term-shaped slot
    TokenType.ERROR,
})

UNARY_OPERAND_TOKEN_TYPES = frozenset({
    TokenType.LITERAL,
    TokenType.IDENTIFIER,
    TokenType.NUMBER,
    TokenType.RANGE,
})


class Expression(BaseModel):
    """a flat left-to-right chain of terms joined by binary operators."""
    terms: List["Term"]
    # len(operator_tokens) == len(terms) - 1
    operator_tokens: List[Token] = Field(default_factory=list)


class ExpressionList(BaseModel):
    """comma-separated expressions; None marks an elided entry as in f(,1)."""
    expressions: List[Optional[Expression]]
    # len(comma_tokens) == len(expressions) - 1
    comma_tokens: List[Token] = Field(default_factory=list)


class LiteralTerm(BaseModel):
    kind: Literal["literal"] = "literal"
    token: Token


class UnaryOpTerm(BaseModel):
    kind: Literal["unary_op"] = "unary_op"
    operator_token: Token
    operand: "Term"


class ArrayLiteralTerm(BaseModel):
    kind: Literal["array_literal"] = "array_literal"
    left_bracket_token: Token
    rows: List[ExpressionList]
    # len(semicolon_tokens) == len(rows) - 1
    semicolon_tokens: List[Token] = Field(default_factory=list)
    right_bracket_token: Optional[Token] = None


class CallTerm(BaseModel):
    kind: Literal["call"] = "call"
    function_token: Token
    left_paren_token: Token
    args: ExpressionList
    right_paren_token: Optional[Token] = None


class ParenthesizedTerm(BaseModel):
    kind: Literal["parenthesized"] = "parenthesized"
    left_paren_token: Token
    expression: Expression
    right_paren_token: Optional[Token] = None


Term = Annotated[
    Union[LiteralTerm, UnaryOpTerm, ArrayLiteralTerm, CallTerm, ParenthesizedTerm],
    Field(discriminator="kind"),
]

Expression.model_rebuild()
ExpressionList.model_rebuild()
UnaryOpTerm.model_rebuild()
ArrayLiteralTerm.model_rebuild()
CallTerm.model_rebuild()
ParenthesizedTerm.model_rebuild()


class ParseResult(BaseModel):
    tokens: List[Token]
    has_error: bool
    # tokens of type ERROR or carrying an error, in token order
    errors: List[Token]
    can_format_expression: bool
    # None only when the input is blank
    expression: Optional[Expression] = None
    # tokens after the point where the parser stopped; not part of the tree
    unconsumed_tokens: List[Token] = Field(default_factory=list)


class FormulaParser:
    """
    recursive descent parser over a token list.

    every production takes the index of its first token and returns either
    (next_index, node) or None when nothing matches there, which lets the
    caller try the next alternative. problems are recorded on the tokens
    and parsing always produces a tree.

    the parser annotates its own copies of the tokens; the list passed in is
    left untouched.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = [t.model_copy() for t in tokens]

    def parse(self) -> ParseResult:
        # formula := expression?
        end_index, expression = self._parse_expression_or_empty(0)
        if end_index < len(self.tokens):
            self.tokens[end_index].annotate(ErrorType.UNEXPECTED_TOKEN)

        errors = [t for t in self.tokens if t.is_error]
        can_format = not any(t.error_type is not None and t.error_type.is_fatal for t in errors)
        logger.debug(
            f"parsed {len(self.tokens)} tokens, {len(errors)} errors, formattable={can_format}"
        )
        return ParseResult(
            tokens=self.tokens,
            has_error=bool(errors),
            errors=errors,
            can_format_expression=can_format,
            expression=expression,
            unconsumed_tokens=self.tokens[end_index:],
        )

    def _peek_type(self, index: int) -> Optional[TokenType]:
        if index < len(self.tokens):
            return self.tokens[index].type
        return None

    def _parse_expression_or_empty(self, index: int) -> Tuple[int, Optional[Expression]]:
        result = self._parse_expression(index)
        if result is None:
            return index, None
        return result

    def _parse_expression(self, index: int) -> Optional[Tuple[int, Expression]]:
        # expression := term (operator term)*
        result = self._parse_term(index)
        if result is None:
            return None
        end_index, first_term = result

        terms = [first_term]
        operator_tokens: List[Token] = []
        while self._peek_type(end_index) in OPERATORS:
            next_term = self._parse_term(end_index + 1)
            if next_term is None:
                # leave the operator for the caller
                break
            operator_tokens.append(self.tokens[end_index])
            end_index, term = next_term
            terms.append(term)

        return end_index, Expression(terms=terms, operator_tokens=operator_tokens)

    def _parse_expression_list(self, index: int) -> Tuple[int, ExpressionList]:
        # expressionList := expression? (',' expression?)*
        end_index, first = self._parse_expression_or_empty(index)
        expressions = [first]
        comma_tokens: List[Token] = []
        while self._peek_type(end_index) == TokenType.COMMA:
            comma_tokens.append(self.tokens[end_index])
            end_index, expression = self._parse_expression_or_empty(end_index + 1)
            expressions.append(expression)

        return end_index, ExpressionList(expressions=expressions, comma_tokens=comma_tokens)

    def _parse_term(self, index: int) -> Optional[Tuple[int, "Term"]]:
        # term := arrayLiteral | call | '(' expression ')' | unaryOp | literal
        if index >= len(self.tokens):
            return None
        for production in (
            self._parse_array_literal,
            self._parse_call,
            self._parse_parenthesized,
            self._parse_unary_op,
            self._parse_literal,
        ):
            result = production(index)
            if result is not None:
                return result
        return None

    def _parse_array_literal(self, index: int) -> Optional[Tuple[int, ArrayLiteralTerm]]:
        # arrayLiteral := '{' expressionList (';' expressionList)* '}'
        left_bracket = self.tokens[index]
        if left_bracket.type != TokenType.L_BRACKET:
            return None

        end_index, first_row = self._parse_expression_list(index + 1)
        rows = [first_row]
        semicolon_tokens: List[Token] = []
        right_bracket = None
        while end_index < len(self.tokens):
            token = self.tokens[end_index]
            if token.type == TokenType.R_BRACKET:
                right_bracket = token
                end_index += 1
                break
            if token.type != TokenType.SEMICOLON:
                break
            semicolon_tokens.append(token)
            end_index, row = self._parse_expression_list(end_index + 1)
            rows.append(row)

        if right_bracket is None:
            left_bracket.annotate(ErrorType.UNCLOSED_ARRAY_LITERAL)

        return end_index, ArrayLiteralTerm(
            left_bracket_token=left_bracket,
            rows=rows,
            semicolon_tokens=semicolon_tokens,
            right_bracket_token=right_bracket,
        )

    def _parse_call(self, index: int) -> Optional[Tuple[int, CallTerm]]:
        # call := IDENTIFIER '(' expressionList ')'
        if self._peek_type(index) != TokenType.IDENTIFIER:
            return None
        if self._peek_type(index + 1) != TokenType.L_PAREN:
            return None

        left_paren = self.tokens[index + 1]
        end_index, args = self._parse_expression_list(index + 2)
        right_paren = None
        if self._peek_type(end_index) == TokenType.R_PAREN:
            right_paren = self.tokens[end_index]
            end_index += 1
        else:
            left_paren.annotate(ErrorType.UNCLOSED_FUNCTION_CALL)

        return end_index, CallTerm(
            function_token=self.tokens[index],
            left_paren_token=left_paren,
            args=args,
            right_paren_token=right_paren,
        )

    def _parse_parenthesized(self, index: int) -> Optional[Tuple[int, ParenthesizedTerm]]:
        left_paren = self.tokens[index]
        if left_paren.type != TokenType.L_PAREN:
            return None

        result = self._parse_expression(index + 1)
        if result is None:
            return None
        end_index, expression = result

        right_paren = None
        if self._peek_type(end_index) == TokenType.R_PAREN:
            right_paren = self.tokens[end_index]
            end_index += 1
        else:
            left_paren.annotate(ErrorType.UNCLOSED_PARENTHESES)

        return end_index, ParenthesizedTerm(
            left_paren_token=left_paren,
            expression=expression,
            right_paren_token=right_paren,
        )

    def _parse_unary_op(self, index: int) -> Optional[Tuple[int, UnaryOpTerm]]:
        # unaryOp := ('+' | '-') term
        operator = self.tokens[index]
        if operator.type not in UNARY_OPERATORS:
            return None

        result = self._parse_term(index + 1)
        if result is None:
            return None
        end_index, operand = result

        if not self._is_unary_operand(operand):
            operator.annotate(ErrorType.INVALID_UNARY_OPERAND)
            return None

        return end_index, UnaryOpTerm(operator_token=operator, operand=operand)

    def _is_unary_operand(self, term: "Term") -> bool:
        if isinstance(term, LiteralTerm):
            return term.token.type in UNARY_OPERAND_TOKEN_TYPES
        return isinstance(term, (CallTerm, ParenthesizedTerm))

    def _parse_literal(self, index: int) -> Optional[Tuple[int, LiteralTerm]]:
        token = self.tokens[index]
        if token.type not in LITERAL_TOKEN_TYPES:
            return None
        return index + 1, LiteralTerm(token=token)


def parse_lines(lines: Sequence[str]) -> ParseResult:
    """tokenizes and parses formula source lines."""
    return FormulaParser(tokenize(lines)).parse()

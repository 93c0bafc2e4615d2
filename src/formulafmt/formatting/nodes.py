"""
document tree for the pretty-printer, and the builder that maps a parsed
formula onto it.

each node knows its flat width, i.e. how many columns it takes when no
line breaks are rendered. the renderer uses that to decide, per group,
whether the group fits on the current line.
"""
from typing import List, Optional

from ..parsing.parser import (
    ArrayLiteralTerm,
    CallTerm,
    Expression,
    ExpressionList,
    LiteralTerm,
    ParenthesizedTerm,
    ParseResult,
    Term,
    UnaryOpTerm,
)
from ..parsing.tokenizer import Token


class FormatNode:
    width: int = 0


class Nodes(FormatNode):
    """a plain sequence of nodes."""

    def __init__(self, children: List[FormatNode]):
        self.children = children
        self.width = sum(child.width for child in children)

    def __repr__(self):
        return f"{type(self).__name__}({self.children!r})"


class Group(Nodes):
    """
    a sequence rendered flat if it fits the remaining line width; otherwise
    every line break directly inside it is rendered as a break.
    """


class Indent(Nodes):
    """a sequence indented one level when its enclosing group is broken."""


class Text(FormatNode):
    def __init__(self, text: str):
        self.text = text
        self.width = len(text)

    def __repr__(self):
        return f"Text({self.text!r})"


class SpaceOrLine(FormatNode):
    """a space when flat, a line break when broken."""
    width = 1

    def __repr__(self):
        return "SpaceOrLine()"


class Line(FormatNode):
    """nothing when flat, a line break when broken."""
    width = 0

    def __repr__(self):
        return "Line()"


def token_text(token: Token) -> Text:
    return Text(token.content)


def build_document(parse_result: ParseResult) -> FormatNode:
    """builds the document tree for a parse result."""
    if parse_result.expression is None:
        return Text("")
    return build_expression(parse_result.expression)


def build_expression(expression: Expression) -> Group:
    first, *rest = expression.terms
    children: List[FormatNode] = [build_term(first)]
    for operator, term in zip(expression.operator_tokens, rest):
        children.extend([Text(" "), token_text(operator), SpaceOrLine(), build_term(term)])
    return Group(children)


def build_expression_list(expression_list: ExpressionList) -> Group:
    first, *rest = expression_list.expressions
    children: List[FormatNode] = []
    if first is not None:
        children.append(build_expression(first))
    for comma, expression in zip(expression_list.comma_tokens, rest):
        children.append(token_text(comma))
        # an elided entry keeps its comma but gets no separator
        if expression is not None:
            children.extend([SpaceOrLine(), build_expression(expression)])
    return Group(children)


def build_term(term: Term) -> FormatNode:
    if isinstance(term, LiteralTerm):
        return Nodes([token_text(term.token)])
    elif isinstance(term, UnaryOpTerm):
        return Nodes([token_text(term.operator_token), build_term(term.operand)])
    elif isinstance(term, ArrayLiteralTerm):
        return _build_array_literal(term)
    elif isinstance(term, CallTerm):
        content = None
        if _has_content(term.args):
            content = build_expression_list(term.args)
        return _build_delimited(
            [token_text(term.function_token), token_text(term.left_paren_token)],
            content,
            term.right_paren_token,
        )
    elif isinstance(term, ParenthesizedTerm):
        return _build_delimited(
            [token_text(term.left_paren_token)],
            build_expression(term.expression),
            term.right_paren_token,
        )
    raise TypeError(f"unhandled term: {type(term).__name__}")


def _build_array_literal(term: ArrayLiteralTerm) -> Group:
    first, *rest = term.rows
    rows: List[FormatNode] = []
    if _has_content(first):
        rows.append(build_expression_list(first))
    for semicolon, row in zip(term.semicolon_tokens, rest):
        rows.append(token_text(semicolon))
        if _has_content(row):
            rows.extend([SpaceOrLine(), build_expression_list(row)])

    content = Nodes(rows) if rows else None
    return _build_delimited([token_text(term.left_bracket_token)], content, term.right_bracket_token)


def _build_delimited(
    opening: List[FormatNode],
    content: Optional[FormatNode],
    closing: Optional[Token],
) -> Group:
    """hugs the content when flat; breaks and indents it when wrapped."""
    children = list(opening)
    if content is not None:
        children.extend([Line(), Indent([content]), Line()])
    if closing is not None:
        children.append(token_text(closing))
    return Group(children)


def _has_content(expression_list: ExpressionList) -> bool:
    return bool(expression_list.comma_tokens) or any(
        e is not None for e in expression_list.expressions
    )

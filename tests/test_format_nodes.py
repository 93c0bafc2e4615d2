"""test suite for the document tree builder."""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from formulafmt.formatting.nodes import (
    Group,
    Indent,
    Line,
    Nodes,
    SpaceOrLine,
    Text,
    build_document,
)
from formulafmt.parsing.parser import parse_lines


def build(text):
    return build_document(parse_lines([text]))


class TestWidths:
    def test_leaf_widths(self):
        assert Text("abc").width == 3
        assert Text("").width == 0
        assert SpaceOrLine().width == 1
        assert Line().width == 0

    def test_container_widths_sum_children(self):
        node = Group([Text("ab"), SpaceOrLine(), Indent([Text("cd"), Line()])])
        assert node.width == 5
        assert Nodes([]).width == 0


class TestBuilder:
    def test_blank_input(self):
        document = build("   ")
        assert isinstance(document, Text)
        assert document.text == ""

    def test_expression_shape(self):
        document = build("A1+B2")
        assert isinstance(document, Group)
        first, space, operator, line, second = document.children
        assert isinstance(first, Nodes)
        assert isinstance(space, Text) and space.text == " "
        assert isinstance(operator, Text) and operator.text == "+"
        assert isinstance(line, SpaceOrLine)
        assert isinstance(second, Nodes)
        assert document.width == len("A1 + B2")

    def test_call_shape(self):
        document = build("SUM(1,2)")
        [call] = document.children
        assert isinstance(call, Group)
        name, paren, line, indent, closing_line, closing = call.children
        assert name.text == "SUM"
        assert paren.text == "("
        assert isinstance(line, Line)
        assert isinstance(indent, Indent)
        assert isinstance(closing_line, Line)
        assert closing.text == ")"
        assert call.width == len("SUM(1, 2)")

    def test_empty_call_has_no_lines(self):
        [call] = build("NOW()").children
        assert [child.text for child in call.children] == ["NOW", "(", ")"]

    def test_unclosed_call_omits_closing(self):
        [call] = build("foo(1").children
        assert not isinstance(call.children[-1], Text)
        assert call.width == len("foo(1")

    def test_elided_argument_has_no_separator(self):
        assert build("f(,1)").width == len("f(, 1)")
        assert build("f(1,)").width == len("f(1,)")

    def test_array_width(self):
        assert build("{1,2;3,4}").width == len("{1, 2; 3, 4}")

    def test_unary_has_no_space(self):
        assert build("- 1").width == len("-1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

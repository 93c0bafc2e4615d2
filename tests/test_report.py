"""test suite for diagnostics rendering."""
import pytest
import sys
from io import StringIO
from pathlib import Path

from rich.console import Console

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from formulafmt.parsing.parser import parse_lines
from formulafmt.parsing.tokenizer import tokenize
from formulafmt.ui.report import describe_error, describe_position, errors_table, tokens_table
from formulafmt.utils.position import Position


def render_table(table):
    console = Console(file=StringIO(), width=120)
    console.print(table)
    return console.file.getvalue()


class TestDescribe:
    def test_first_line_is_shifted_for_equals_sign(self):
        assert describe_position(Position(0, 0)) == "Ln1, Col2"

    def test_later_lines_are_not_shifted(self):
        assert describe_position(Position(2, 4)) == "Ln3, Col5"

    def test_describe_error(self):
        result = parse_lines(["1 2"])
        assert describe_error(result.errors[0]) == "Ln1, Col4: unexpected token"

    def test_first_line_offset_covers_stripped_prefix(self):
        assert describe_position(Position(0, 3), first_line_offset=3) == "Ln1, Col7"
        assert describe_position(Position(1, 3), first_line_offset=3) == "Ln2, Col4"

    def test_describe_error_with_offset(self):
        result = parse_lines(["A1 B"])
        assert describe_error(result.errors[0], first_line_offset=3) == "Ln1, Col7: unexpected token"

    def test_describe_lexical_error(self):
        result = parse_lines(["1+", '"abc'])
        assert describe_error(result.errors[0]) == "Ln2, Col1: unclosed string"


class TestTables:
    def test_errors_table(self):
        result = parse_lines(["SUM(1"])
        output = render_table(errors_table(result.errors))
        assert "unclosed function call" in output
        assert "Ln1, Col5" in output

    def test_errors_table_offset(self):
        result = parse_lines(["SUM(1"])
        output = render_table(errors_table(result.errors, first_line_offset=4))
        assert "Ln1, Col8" in output

    def test_tokens_table(self):
        output = render_table(tokens_table(tokenize(["A1+[x]"])))
        assert "RANGE" in output
        assert "PLUS" in output
        # token content is not treated as markup
        assert "[x]" in output


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

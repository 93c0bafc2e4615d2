"""test suite for formatting options."""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from formulafmt.domain.errors import ConfigError, FormulaFmtError
from formulafmt.domain.models import FormatOptions, Preferences


class TestFormatOptions:
    def test_defaults(self):
        options = FormatOptions()
        assert options.indent_width == 2
        assert options.line_width == 80

    def test_create_skips_missing_values(self):
        options = FormatOptions.create(indent_width=None, line_width=40)
        assert options.indent_width == 2
        assert options.line_width == 40

    @pytest.mark.parametrize("values", [
        {"indent_width": 0},
        {"line_width": -1},
        {"line_width": "wide"},
    ])
    def test_create_rejects_invalid(self, values):
        with pytest.raises(ConfigError) as exc_info:
            FormatOptions.create(**values)
        assert isinstance(exc_info.value, FormulaFmtError)
        assert "FormatOptions" in str(exc_info.value)

    def test_small_widths_allowed(self):
        options = FormatOptions.create(line_width=5)
        assert options.line_width == 5


class TestPreferences:
    def test_is_format_options(self):
        assert isinstance(Preferences(), FormatOptions)

    @pytest.mark.parametrize("values", [
        {"indent_width": 9},
        {"indent_width": 0},
        {"line_width": 9},
    ])
    def test_bounds(self, values):
        with pytest.raises(ConfigError):
            Preferences.create(**values)

    def test_create_returns_preferences(self):
        preferences = Preferences.create(indent_width=8, line_width=10)
        assert isinstance(preferences, Preferences)
        assert preferences.indent_width == 8


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

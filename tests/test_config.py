"""test suite for stored preferences."""
import logging
import pytest
import sys
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from formulafmt.config import (
    INDENT_WIDTH_KEY,
    LINE_WIDTH_KEY,
    load_preferences,
    reset_preferences,
    save_preferences,
)
from formulafmt.domain.errors import ConfigError
from formulafmt.domain.models import Preferences


class TestPreferencesFile:
    @pytest.fixture
    def config_file(self, tmp_path):
        return tmp_path / "formulafmt" / "config"

    def test_missing_file_gives_defaults(self, config_file):
        preferences = load_preferences(config_file)
        assert preferences == Preferences()

    def test_save_and_load(self, config_file):
        save_preferences(Preferences(indent_width=4, line_width=100), config_file)
        assert config_file.exists()
        preferences = load_preferences(config_file)
        assert preferences.indent_width == 4
        assert preferences.line_width == 100

    def test_file_format(self, config_file):
        save_preferences(Preferences(indent_width=3, line_width=60), config_file)
        lines = config_file.read_text().splitlines()
        assert f"{INDENT_WIDTH_KEY}=3" in lines
        assert f"{LINE_WIDTH_KEY}=60" in lines

    def test_save_preserves_other_keys(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("OTHER_KEY=value\n")
        save_preferences(Preferences(indent_width=4), config_file)
        assert "OTHER_KEY=value" in config_file.read_text().splitlines()

    def test_non_integer_value_falls_back(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(f"{INDENT_WIDTH_KEY}=wide\n{LINE_WIDTH_KEY}=50\n")
        with caplog.at_level(logging.WARNING, logger="formulafmt.config"):
            preferences = load_preferences(config_file)
        assert preferences.indent_width == 2
        assert preferences.line_width == 50
        assert "non-integer" in caplog.text

    def test_out_of_range_value_falls_back(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(f"{INDENT_WIDTH_KEY}=20\n{LINE_WIDTH_KEY}=3\n")
        with caplog.at_level(logging.WARNING, logger="formulafmt.config"):
            preferences = load_preferences(config_file)
        assert preferences == Preferences()
        assert "out-of-range" in caplog.text

    def test_reset(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(f"OTHER_KEY=value\n{INDENT_WIDTH_KEY}=4\n")
        reset_preferences(config_file)
        assert config_file.read_text().splitlines() == ["OTHER_KEY=value"]
        assert load_preferences(config_file) == Preferences()

    def test_reset_without_file(self, config_file):
        reset_preferences(config_file)
        assert not config_file.exists()

    def test_write_failure_raises_config_error(self, config_file):
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(ConfigError) as exc_info:
                save_preferences(Preferences(), config_file)
        assert "failed to write config file" in str(exc_info.value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

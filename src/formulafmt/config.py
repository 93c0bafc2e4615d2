import logging
import os
from pathlib import Path
from typing import Dict, Optional

from .domain.errors import ConfigError
from .domain.models import Preferences

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(os.environ.get("FORMULAFMT_CONFIG_DIR", Path.home() / ".formulafmt"))
CONFIG_FILE = CONFIG_DIR / "config"

INDENT_WIDTH_KEY = "FORMULAFMT_INDENT_WIDTH"
LINE_WIDTH_KEY = "FORMULAFMT_LINE_WIDTH"

_FIELDS = {
    INDENT_WIDTH_KEY: "indent_width",
    LINE_WIDTH_KEY: "line_width",
}


def _read_config(path: Path) -> Dict[str, str]:
    """read KEY=VALUE lines; an unreadable file reads as empty."""
    config: Dict[str, str] = {}
    if not path.exists():
        return config
    try:
        with open(path, "r") as f:
            for line in f:
                line = line.strip()
                if "=" in line:
                    key, value = line.split("=", 1)
                    config[key] = value
    except (IOError, PermissionError, OSError) as e:
        logger.warning(f"could not read config file {path}: {e}")
        return {}
    return config


def _write_config(path: Path, config: Dict[str, str]):
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            for key, value in config.items():
                f.write(f"{key}={value}\n")
    except (IOError, PermissionError, OSError) as e:
        raise ConfigError(f"failed to write config file: {e}") from e


def load_preferences(path: Optional[Path] = None) -> Preferences:
    """load stored preferences, falling back to defaults per key."""
    path = path or CONFIG_FILE
    config = _read_config(path)
    defaults = Preferences()

    values = {}
    for key, field in _FIELDS.items():
        if key not in config:
            continue
        try:
            values[field] = int(config[key])
        except ValueError:
            logger.warning(f"ignoring non-integer {key}={config[key]!r} in {path}")
            continue
        try:
            Preferences(**{field: values[field]})
        except ValueError:
            logger.warning(f"ignoring out-of-range {key}={config[key]!r} in {path}")
            values[field] = getattr(defaults, field)

    return Preferences(**values)


def save_preferences(preferences: Preferences, path: Optional[Path] = None):
    """save preferences, preserving other config values."""
    path = path or CONFIG_FILE
    config = _read_config(path)
    config[INDENT_WIDTH_KEY] = str(preferences.indent_width)
    config[LINE_WIDTH_KEY] = str(preferences.line_width)
    _write_config(path, config)
    logger.debug(f"saved preferences to {path}")


def reset_preferences(path: Optional[Path] = None):
    """drop stored preferences so the defaults apply again."""
    path = path or CONFIG_FILE
    config = _read_config(path)
    if not any(key in config for key in _FIELDS):
        return
    for key in _FIELDS:
        config.pop(key, None)
    _write_config(path, config)

# ltquiz/config.py
"""Application configuration for LtQuiz."""

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from ltquiz.errors import ConfigError

logger = logging.getLogger(__name__)

APP_DIR_NAME = ".ltquiz"
DEFAULT_THEME = "github-dark"

THEME_ENV_VAR = "LTQUIZ_THEME"
DB_ENV_VAR = "LTQUIZ_DB"


def get_app_dir():
    """Get the directory holding the config file and the database."""
    return Path.home() / APP_DIR_NAME


def get_config_path():
    return get_app_dir() / "config.toml"


@dataclass(frozen=True)
class Theme:
    """Syntax highlighting theme and where its value came from."""

    name: str
    kind: str = "default"

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Config:
    theme: Theme
    db_path: Path


def load_config(path=None, environ=None):
    """
    Load configuration from defaults, the config file and the environment.

    Later sources win: environment variables override the file, which
    overrides the defaults.

    Args:
        path (Path, optional): Config file to read; defaults to ~/.ltquiz/config.toml
        environ (dict, optional): Environment mapping; defaults to os.environ

    Returns:
        Config: The resolved configuration

    Raises:
        ConfigError: If the config file cannot be parsed or has invalid values
    """
    environ = os.environ if environ is None else environ
    path = Path(path) if path is not None else get_config_path()

    theme = Theme(DEFAULT_THEME)
    db_path = get_app_dir() / "questions.db"

    data = _read_config_file(path)
    if "theme" in data:
        theme = Theme(_expect_str(data, "theme"), kind="file")
    if "db_path" in data:
        db_path = Path(_expect_str(data, "db_path")).expanduser()

    if environ.get(THEME_ENV_VAR):
        theme = Theme(environ[THEME_ENV_VAR], kind="env")
    if environ.get(DB_ENV_VAR):
        db_path = Path(environ[DB_ENV_VAR]).expanduser()

    logger.debug("Using theme %s [%s], database %s", theme.name, theme.kind, db_path)
    return Config(theme=theme, db_path=db_path)


def _read_config_file(path):
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file '{path}': {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}") from e


def _expect_str(data, key):
    value = data[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"Config value '{key}' must be a non-empty string")
    return value

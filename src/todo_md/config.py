"""
Configuration file handling.

The config is a small TOML file:

    [path]
    todo_path = "/home/me"
    todo_filename = "todo.md"

    [format]
    checkbox_style = "md"

A missing or broken config never stops the tool: load_config falls back to
the defaults and logs why.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from .dialect import Dialect, get_dialect

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TODO_MD_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "todo-md" / "config.toml"

CONFIG_TEMPLATE = """\
[path]
todo_path = {todo_path}
todo_filename = {todo_filename}

[format]
checkbox_style = {checkbox_style}
"""


class PathSettings(BaseModel):
    todo_path: Path = Field(default_factory=Path.home)
    todo_filename: str = "todo.md"


class FormatSettings(BaseModel):
    # Kept as a plain string so an unknown style degrades to md with a warning
    checkbox_style: str = "md"


class Settings(BaseModel):
    path: PathSettings = Field(default_factory=PathSettings)
    format: FormatSettings = Field(default_factory=FormatSettings)

    @property
    def todo_file(self) -> Path:
        """Full path of the task file."""
        return self.path.todo_path.expanduser() / self.path.todo_filename

    @property
    def dialect(self) -> Dialect:
        return get_dialect(self.format.checkbox_style)


def config_file_path(override: Optional[str] = None) -> Path:
    """Config location: explicit override, then $TODO_MD_CONFIG, then the default."""
    if override:
        return Path(override).expanduser()
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config(path: Path) -> Settings:
    """
    Load settings from a TOML file.

    Args:
        path: Config file location

    Returns:
        Parsed settings, or the defaults if the file is missing or invalid
    """
    defaults = Settings()
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        log.info("No config at %s, using defaults", path)
        return defaults
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        log.warning("error in your config %s: %s", path, e)
        log.warning("using the following defaults: %s", defaults.model_dump())
        return defaults

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        log.warning("error in your config %s: %s", path, e)
        log.warning("using the following defaults: %s", defaults.model_dump())
        return defaults


def _toml_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def render_config(settings: Settings) -> str:
    """Render settings as TOML text."""
    return CONFIG_TEMPLATE.format(
        todo_path=_toml_string(str(settings.path.todo_path)),
        todo_filename=_toml_string(settings.path.todo_filename),
        checkbox_style=_toml_string(settings.format.checkbox_style),
    )


def write_config(path: Path, settings: Settings) -> None:
    """Write settings to path, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_config(settings), encoding="utf-8")
    log.info("Wrote config to %s", path)

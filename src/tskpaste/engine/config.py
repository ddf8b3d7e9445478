# src/tskpaste/engine/config.py

"""
User configuration.

Configuration lives in a small YAML file:

    base_url: omnifocus://x-callback-url/paste
    param: content
    opener: null        # command used to open URLs (auto-detected if null)
    log_level: WARNING

Lookup order: explicit path, $TSKPASTE_CONFIG, ~/.config/tskpaste/config.yml.
Every key is optional. A missing default file means "all defaults"; a
missing explicitly requested file is an error.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Optional

import yaml


# ---------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------

CONFIG_ENV_VAR: Final[str] = "TSKPASTE_CONFIG"
DEFAULT_CONFIG_PATH: Final[Path] = Path("~/.config/tskpaste/config.yml")

DEFAULT_BASE_URL: Final[str] = "omnifocus://x-callback-url/paste"
DEFAULT_PARAM: Final[str] = "content"
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConfigError(Exception):
    """
    Raised when the configuration file is unreadable or malformed.
    """

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


# ---------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Config:
    base_url: str = DEFAULT_BASE_URL
    param: str = DEFAULT_PARAM
    opener: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def resolve_config_path(explicit: Optional[str | Path] = None) -> tuple[Path, bool]:
    """
    Return (path, required).

    `required` is False only for the implicit default location.
    """
    if explicit:
        return Path(explicit).expanduser(), True

    env = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env:
        return Path(env).expanduser(), True

    return DEFAULT_CONFIG_PATH.expanduser(), False


def load_config(explicit: Optional[str | Path] = None) -> Config:
    path, required = resolve_config_path(explicit)

    if not path.exists():
        if required:
            raise ConfigError(str(path), "Config file does not exist")
        return Config()

    data = _read_yaml(path)
    return parse_config(str(path), data)


def parse_config(path: str, data: dict[str, Any]) -> Config:
    """
    Build a Config from an already-loaded mapping.
    """
    unknown = sorted(set(data) - {"base_url", "param", "opener", "log_level"})
    if unknown:
        raise ConfigError(path, f"Unknown key(s): {', '.join(unknown)}")

    base_url = _optional_str_field(path, data, "base_url") or DEFAULT_BASE_URL
    param = _optional_str_field(path, data, "param") or DEFAULT_PARAM
    opener = _optional_str_field(path, data, "opener")
    log_level = _parse_log_level(path, data)

    return Config(
        base_url=base_url,
        param=param,
        opener=opener,
        log_level=log_level,
    )


# ---------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------

def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(str(path), f"Cannot read file: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(str(path), f"Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(str(path), "YAML root must be a mapping/dictionary")

    return data


def _optional_str_field(path: str, data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None

    if not isinstance(value, str):
        raise ConfigError(path, f"YAML key '{key}' must be a string")

    return value.strip() or None


def _parse_log_level(path: str, data: dict[str, Any]) -> str:
    raw = _optional_str_field(path, data, "log_level")
    if raw is None:
        return DEFAULT_LOG_LEVEL

    level = raw.upper()
    if level not in _LOG_LEVELS:
        allowed = ", ".join(_LOG_LEVELS)
        raise ConfigError(path, f"Invalid log_level '{raw}' (allowed: {allowed})")

    return level

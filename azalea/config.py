"""Interpreter configuration and logging setup."""

from __future__ import annotations

import json
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .lang.keywords import MODULE_NAMES

__all__ = [
    "CONFIG_FILENAMES",
    "ENV_LOG_LEVEL",
    "ENV_MAX_CALL_DEPTH",
    "LOG_LEVELS",
    "InterpreterConfig",
    "configure_logging",
    "locate_config_file",
    "load_config",
]

CONFIG_FILENAMES = ("azalea.toml", ".azalearc")

ENV_LOG_LEVEL = "AZALEA_LOG_LEVEL"
ENV_MAX_CALL_DEPTH = "AZALEA_MAX_CALL_DEPTH"

LOG_LEVELS: Dict[str, int] = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class InterpreterConfig(BaseModel):
    """
    Settings for an :class:`~azalea.runtime.Interpreter`.

    Configuration:
        - extra="forbid": unknown keys are rejected
        - frozen=True: settings cannot change after validation
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    log_level: str = Field("warning", description="Level for the 'azalea' logger")
    max_call_depth: int = Field(64, ge=1, description="Maximum nesting of user function calls")
    modules: List[str] = Field(default_factory=list, description="Reference capability modules to register")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("modules")
    @classmethod
    def _check_modules(cls, value: List[str]) -> List[str]:
        unknown = [name for name in value if name not in MODULE_NAMES]
        if unknown:
            raise ValueError(
                f"unknown modules {', '.join(unknown)}; available: {', '.join(sorted(MODULE_NAMES))}"
            )
        return value


def configure_logging(level: str = "warning") -> logging.Logger:
    """Set the level of the ``azalea`` logger, adding a console handler once."""
    numeric_level = LOG_LEVELS.get(level.lower(), logging.WARNING)

    logger = logging.getLogger('azalea')
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        path = explicit if explicit.is_absolute() else root / explicit
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", path=str(path))
        return path
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.exists():
            return candidate
    return None


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        if path.suffix == ".toml":
            return _read_toml_config(path)
        return _read_json_config(path)
    except (OSError, json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read config: {exc}", path=str(path)) from exc


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    level = os.getenv(ENV_LOG_LEVEL)
    if level:
        overrides["log_level"] = level
    depth = os.getenv(ENV_MAX_CALL_DEPTH)
    if depth:
        overrides["max_call_depth"] = depth
    return overrides


def load_config(root: Optional[Path] = None, explicit: Optional[Path] = None) -> InterpreterConfig:
    """
    Load interpreter settings for ``root``.

    Reads the ``[interpreter]`` table of ``azalea.toml`` (or the
    ``interpreter`` object of a JSON ``.azalearc``), then applies the
    ``AZALEA_LOG_LEVEL`` and ``AZALEA_MAX_CALL_DEPTH`` environment
    variables.  Without a config file the defaults are used.

    Raises:
        ConfigError: If the file cannot be read or a value is invalid
    """
    root = Path(root) if root is not None else Path.cwd()
    path = locate_config_file(root, explicit)

    section: Dict[str, Any] = {}
    if path is not None:
        data = _read_config(path)
        raw_section = data.get("interpreter") or {}
        if not isinstance(raw_section, dict):
            raise ConfigError("The 'interpreter' section must be a table", path=str(path))
        section = dict(raw_section)

    section.update(_env_overrides())

    try:
        return InterpreterConfig(**section)
    except ValidationError as exc:
        raise ConfigError(
            f"Invalid interpreter config: {exc.errors()[0]['msg']}",
            path=str(path) if path is not None else None,
            hint="Check the [interpreter] table and AZALEA_* environment variables",
        ) from exc

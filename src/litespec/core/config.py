"""
Compiler configuration.

Options are read from ``litespec.toml`` (top-level keys) or from the
``[tool.litespec]`` table of ``pyproject.toml``::

    [tool.litespec]
    default_coercion = "legacy"
    require_condition_properties = true
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "litespec.toml"
PYPROJECT_FILENAME = "pyproject.toml"


class CompilerOptions(BaseModel):
    """
    Behaviour switches for a compilation run.

    Attributes:
        default_coercion: ``typed`` only turns numeric-looking ``@default``
            values into numbers on numeric fields; ``legacy`` does it for
            every field
        require_condition_properties: Emit ``required`` at each level of an
            ``@if`` property path so an absent property fails the condition
    """

    default_coercion: Literal["typed", "legacy"] = "typed"
    require_condition_properties: bool = False

    model_config = ConfigDict(frozen=True, extra="forbid")


def find_config(start: Path) -> Path | None:
    """
    Locate a configuration file in ``start`` (a directory or a file's parent).

    ``litespec.toml`` wins over a ``pyproject.toml`` carrying a
    ``[tool.litespec]`` table.
    """
    directory = start if start.is_dir() else start.parent
    candidate = directory / CONFIG_FILENAME
    if candidate.exists():
        return candidate
    pyproject = directory / PYPROJECT_FILENAME
    if pyproject.exists() and "litespec" in _read_toml(pyproject).get("tool", {}):
        return pyproject
    return None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Cannot read configuration {path}: {e}") from e


def load_options(path: Path | None = None) -> CompilerOptions:
    """
    Load compiler options from a TOML file.

    Args:
        path: ``litespec.toml`` or ``pyproject.toml``; None gives defaults

    Returns:
        CompilerOptions

    Raises:
        ConfigError: If the file is unreadable or holds invalid options
    """
    if path is None:
        return CompilerOptions()

    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        data = data.get("tool", {}).get("litespec", {})

    try:
        options = CompilerOptions(**data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.debug("Loaded compiler options from %s: %s", path, options)
    return options

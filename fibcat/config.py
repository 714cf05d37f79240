"""Configuration handling for fibcat."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from fibcat.errors import InvalidArgument
from fibcat.selector import Algorithm
from fibcat.types import frozen_slots


@frozen_slots
class Config:
    """Runtime configuration for a fibcat run."""

    algorithms: tuple[Algorithm, ...] = (Algorithm.DOUBLING,)
    output_format: str = "human"
    strict_binet: bool = False
    check: bool = False


class ConfigFileError(Exception):
    """Raised when pyproject.toml contains invalid fibcat configuration."""


_TOML_KEY_TO_FIELD: dict[str, str] = {
    "algorithms": "algorithms",
    "format": "output_format",
    "strict-binet": "strict_binet",
    "check": "check",
}

_TUPLE_FIELDS = frozenset({"algorithms"})
_BOOL_FIELDS = frozenset({"strict_binet", "check"})


def _convert_algorithms(toml_key: str, value: object) -> tuple[Algorithm, ...]:
    """Validate a list of algorithm names and resolve each to an Algorithm."""
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigFileError(f"[tool.fibcat] '{toml_key}' must be a list of strings")
    if not value:
        raise ConfigFileError(
            f"[tool.fibcat] '{toml_key}' must name at least one algorithm"
        )
    resolved: list[Algorithm] = []
    for name in value:
        try:
            member = Algorithm.from_name(name)
        except InvalidArgument as exc:
            raise ConfigFileError(f"[tool.fibcat] '{toml_key}': {exc}") from None
        if member not in resolved:
            resolved.append(member)
    return tuple(resolved)


def _convert_value(toml_key: str, field_name: str, value: object) -> object:
    """Validate and convert a single TOML value to its Config-compatible type."""
    if field_name == "algorithms":
        return _convert_algorithms(toml_key, value)

    if field_name == "output_format":
        if not isinstance(value, str):
            raise ConfigFileError(
                f"[tool.fibcat] '{toml_key}' must be a string, got {type(value).__name__}"
            )
        if value not in {"human", "json"}:
            raise ConfigFileError(
                f"[tool.fibcat] '{toml_key}' must be 'human' or 'json', got '{value}'"
            )
        return value

    if field_name in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigFileError(
                f"[tool.fibcat] '{toml_key}' must be a boolean, got {type(value).__name__}"
            )
        return value

    raise ConfigFileError(f"[tool.fibcat] unhandled field '{toml_key}'")


def _parse_toml_section(section: dict[str, Any]) -> dict[str, object]:
    """Validate and convert a [tool.fibcat] dict into Config-compatible fields."""
    result: dict[str, object] = {}
    for toml_key, value in section.items():
        field_name = _TOML_KEY_TO_FIELD.get(toml_key)
        if field_name is None:
            raise ConfigFileError(f"[tool.fibcat] unknown key '{toml_key}'")
        result[field_name] = _convert_value(toml_key, field_name, value)
    return result


def load_file_config(path: Path | None = None) -> dict[str, object]:
    """Read [tool.fibcat] from pyproject.toml, returning Config-compatible dict.

    Returns an empty dict if the file doesn't exist or has no [tool.fibcat] section.
    """
    if path is None:
        path = Path("pyproject.toml")
    if not path.is_file():
        return {}
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileError(f"Invalid TOML in {path}: {exc}") from None
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigFileError(f"'tool' in {path} must be a table")
    section = tool.get("fibcat")
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigFileError("[tool.fibcat] must be a table")
    return _parse_toml_section(section)


def build_config(
    cli_overrides: dict[str, object],
    file_config: dict[str, object],
) -> Config:
    """Merge file config and CLI overrides into a Config instance.

    CLI values always win. For the algorithms tuple, CLI values are
    appended to file values rather than replacing them, skipping repeats.
    """
    merged: dict[str, object] = {}
    merged.update(file_config)

    for key, cli_val in cli_overrides.items():
        if key in _TUPLE_FIELDS and key in file_config:
            file_val = file_config[key]
            assert isinstance(file_val, tuple)
            assert isinstance(cli_val, tuple)
            merged[key] = file_val + tuple(v for v in cli_val if v not in file_val)
        else:
            merged[key] = cli_val

    return Config(**merged)

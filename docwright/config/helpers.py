"""Utility helpers shared by the docwright configuration loader."""

from __future__ import annotations

import typing as typ

from docwright.errors import ConfigError

MIN_PORT = 1
MAX_PORT = 65535


def _optional_str(value: object | None) -> str:
    """Return a stripped string value, or an empty string when unset."""
    if value is None:
        return ""
    return str(value).strip()


def _require_str(value: object | None, key: str) -> str:
    """Return a stripped, non-empty string or raise :class:`ConfigError`."""
    text = _optional_str(value)
    if not text:
        msg = f"Your config is invalid: '{key}' is required."
        raise ConfigError(msg)
    return text


def _as_table(raw: typ.Mapping[str, typ.Any], key: str) -> dict[str, typ.Any]:
    """Return the sub-table at ``key``, an empty dict when absent."""
    value = raw.get(key)
    match value:
        case None:
            return {}
        case dict():
            return dict(value)
        case _:
            msg = f"Your config is invalid: '{key}' must be a table."
            raise ConfigError(msg)


def _parse_bool(value: object, key: str, *, default: bool) -> bool:
    """Return ``value`` as a boolean, ``default`` when unset."""
    if value is None:
        return default
    if not isinstance(value, bool):
        msg = f"Your config is invalid: '{key}' must be true or false."
        raise ConfigError(msg)
    return value


def _parse_port(value: object, key: str, *, default: int) -> int:
    """Return ``value`` as a TCP port number, ``default`` when unset."""
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"Your config is invalid: '{key}' must be an integer."
        raise ConfigError(msg)
    if not MIN_PORT <= value <= MAX_PORT:
        msg = f"Your config is invalid: '{key}' must be between {MIN_PORT} and {MAX_PORT}."
        raise ConfigError(msg)
    return value


__all__ = [
    "MAX_PORT",
    "MIN_PORT",
    "_as_table",
    "_optional_str",
    "_parse_bool",
    "_parse_port",
    "_require_str",
]

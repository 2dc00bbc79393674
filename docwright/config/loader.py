"""Load ``docwright.toml`` into typed dataclasses, creating it when absent."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError as TomlParseError

from docwright._constants import (
    CONFIG_FILENAME,
    DEFAULT_DESCRIPTION,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PORT,
    DEFAULT_SOURCE_DIR,
)
from docwright.errors import ConfigError

from .helpers import (
    _as_table,
    _optional_str,
    _parse_bool,
    _parse_port,
    _require_str,
)
from .models import (
    SOCIAL_KEYS,
    BuildConfig,
    OptionsConfig,
    ServeConfig,
    SiteConfig,
    SocialConfig,
)


def config_path(cwd: Path) -> Path:
    """Return the location of the config file for working directory ``cwd``."""
    return cwd / CONFIG_FILENAME


def load_site_config(cwd: Path) -> SiteConfig:
    """Read and validate ``docwright.toml`` from ``cwd``, creating it if needed.

    Parameters
    ----------
    cwd : Path
        Working directory holding the config file.

    Returns
    -------
    SiteConfig
        Validated configuration with defaults applied for optional keys.

    Raises
    ------
    ConfigError
        If the file cannot be read, written, or parsed, or a required field
        is missing or invalid.

    Examples
    --------
    >>> from pathlib import Path
    >>> from docwright.config import load_site_config
    >>> config = load_site_config(Path("."))  # doctest: +SKIP
    >>> config.build.source  # doctest: +SKIP
    'docs'
    """
    path = config_path(cwd)
    if not path.exists():
        name = cwd.resolve().name or "docs"
        write_default_config(path, name)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Could not read config file '{path}': {exc}"
        raise ConfigError(msg) from exc

    try:
        document = tomlkit.parse(text)
    except TomlParseError as exc:
        msg = f"Your config is invalid: {exc}"
        raise ConfigError(msg) from exc

    return build_site_config(document.unwrap())


def build_site_config(raw: typ.Mapping[str, typ.Any]) -> SiteConfig:
    """Validate an already-decoded config mapping into a :class:`SiteConfig`."""
    social_raw = _as_table(raw, "social")
    build_raw = _as_table(raw, "build")
    options_raw = _as_table(raw, "options")
    serve_raw = _as_table(raw, "serve")

    social = SocialConfig(
        **{key: _optional_str(social_raw.get(key)) for key in SOCIAL_KEYS}
    )
    build = BuildConfig(
        source=_require_str(build_raw.get("src"), "build.src"),
        output=_require_str(build_raw.get("out"), "build.out"),
    )
    options = OptionsConfig(
        ordering=_parse_bool(
            options_raw.get("ordering"), "options.ordering", default=True
        )
    )
    serve = ServeConfig(
        port=_parse_port(serve_raw.get("port"), "serve.port", default=DEFAULT_PORT)
    )

    return SiteConfig(
        name=_require_str(raw.get("name"), "name"),
        description=_optional_str(raw.get("description")),
        url=_optional_str(raw.get("url")),
        social=social,
        build=build,
        options=options,
        serve=serve,
    )


def write_default_config(path: Path, name: str) -> None:
    """Persist a default configuration for a site called ``name`` to ``path``.

    Raises
    ------
    ConfigError
        If the file cannot be written.
    """
    doc = tomlkit.document()
    doc["name"] = name
    doc["description"] = DEFAULT_DESCRIPTION
    doc["url"] = ""

    social_table = tomlkit.table()
    social_table.update(dict.fromkeys(SOCIAL_KEYS, ""))
    doc["social"] = social_table

    build_table = tomlkit.table()
    build_table.update({"src": DEFAULT_SOURCE_DIR, "out": DEFAULT_OUTPUT_DIR})
    doc["build"] = build_table

    options_table = tomlkit.table()
    options_table["ordering"] = True
    doc["options"] = options_table

    serve_table = tomlkit.table()
    serve_table["port"] = DEFAULT_PORT
    doc["serve"] = serve_table

    try:
        path.write_text(tomlkit.dumps(doc), encoding="utf-8")
    except OSError as exc:
        msg = f"Could not write file '{path}': {exc}"
        raise ConfigError(msg) from exc


__all__ = [
    "build_site_config",
    "config_path",
    "load_site_config",
    "write_default_config",
]

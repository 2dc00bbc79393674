"""Load and validate the ``docwright.toml`` site configuration.

This subpackage reads the config file from the working directory, synthesizes
and persists a default one when it is missing, applies defaults for optional
keys, and produces frozen dataclasses (:class:`SiteConfig` and friends) that
the build pipeline, dev loop and server consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from docwright.config import load_site_config
>>> site = load_site_config(Path("."))  # doctest: +SKIP
>>> site.serve.port  # doctest: +SKIP
7153
"""

from .loader import (
    build_site_config,
    config_path,
    load_site_config,
    write_default_config,
)
from .models import (
    BuildConfig,
    OptionsConfig,
    ServeConfig,
    SiteConfig,
    SocialConfig,
)

__all__ = [
    "BuildConfig",
    "OptionsConfig",
    "ServeConfig",
    "SiteConfig",
    "SocialConfig",
    "build_site_config",
    "config_path",
    "load_site_config",
    "write_default_config",
]

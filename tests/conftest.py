"""Shared fixtures for docwright tests.

Fixtures here write small source trees and configs into ``tmp_path`` so every
test builds a real site on disk without touching the repository.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from textwrap import dedent

import pytest

from docwright.config import BuildConfig, OptionsConfig, SiteConfig
from docwright.generator import SiteBuilder
from docwright.logs import configure_logging

if typ.TYPE_CHECKING:
    import logging
    from pathlib import Path


def _write_page(
    root: Path,
    relative: str,
    *,
    title: str | None,
    body: str = "Body text.",
    **extra: str,
) -> Path:
    """Write a Markdown page with frontmatter under ``root`` and return it."""
    lines = ["---"]
    if title is not None:
        lines.append(f"title: {title}")
    lines.extend(f"{key}: {value}" for key, value in extra.items())
    lines.append("---")
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n" + dedent(body) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def write_page() -> cabc.Callable[..., Path]:
    """Return a helper writing Markdown pages with frontmatter."""
    return _write_page


@pytest.fixture
def logger(tmp_path_factory: pytest.TempPathFactory) -> logging.Logger:
    """Return a logger writing to a throwaway log directory."""
    return configure_logging(
        verbose=False, log_dir=tmp_path_factory.mktemp("logs"), name="docwright.test"
    )


@pytest.fixture
def site_config() -> SiteConfig:
    """Return a minimal config building ``docs`` into ``dist``."""
    return SiteConfig(
        name="Handbook",
        description="Team handbook",
        url="https://example.com/handbook/",
        build=BuildConfig(source="docs", output="dist"),
        options=OptionsConfig(ordering=True),
    )


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Return an empty ``docs`` source directory inside ``tmp_path``."""
    path = tmp_path / "docs"
    path.mkdir()
    return path


@pytest.fixture
def builder(
    tmp_path: Path, site_config: SiteConfig, logger: logging.Logger, docs_dir: Path  # noqa: ARG001
) -> SiteBuilder:
    """Return a builder rooted at ``tmp_path``."""
    return SiteBuilder(site_config, tmp_path, logger=logger)

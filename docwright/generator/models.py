"""Shared dataclasses used by the site build pipeline."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import enum
from pathlib import Path  # noqa: TC003 - used for runtime type metadata

from docwright.errors import BuildError
from docwright.markdown_parser import Frontmatter  # noqa: TC001


class BuildState(enum.StrEnum):
    """Lifecycle of one :class:`~docwright.generator.SiteBuilder` run."""

    IDLE = "idle"
    SCANNING = "scanning"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


class RebuildOutcome(enum.StrEnum):
    """Result of attempting a single-file rebuild."""

    REBUILT = "rebuilt"
    NOT_FOUND = "not_found"
    NEEDS_FULL_BUILD = "needs_full_build"


@dc.dataclass(slots=True, frozen=True)
class DocFile:
    """One source Markdown file mapped to its rendered output page.

    Attributes
    ----------
    relative_path : str
        Public route of the page, starting with ``/`` and ending in ``.html``.
    output_path : Path
        Absolute destination of the rendered HTML document.
    source_path : Path
        Absolute location of the Markdown source.
    frontmatter : Frontmatter
        Metadata decoded from the source's leading block.
    rendered_html : str
        HTML fragment converted from the Markdown body.
    modified_time : datetime
        Last-write timestamp of the source file.
    """

    relative_path: str
    output_path: Path
    source_path: Path
    frontmatter: Frontmatter
    rendered_html: str
    modified_time: dt.datetime

    @property
    def title(self) -> str:
        """Return the page title declared in the frontmatter."""
        return self.frontmatter.title

    @property
    def section(self) -> str:
        """Return the navigation section declared in the frontmatter."""
        return self.frontmatter.section


@dc.dataclass(slots=True, frozen=True)
class NavPage:
    """Navigation entry linking to one page."""

    title: str
    href: str


@dc.dataclass(slots=True)
class NavSection:
    """Named group of navigation entries; the empty title is ungrouped."""

    title: str
    pages: list[NavPage] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class ScanResult:
    """Files and navigation discovered by walking the source tree."""

    files: list[DocFile]
    sections: list[NavSection]
    errors: list[Exception] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class BuildResult:
    """Outcome of a full build, including every per-file error."""

    files: list[DocFile]
    sections: list[NavSection]
    errors: list[Exception] = dc.field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when no file failed to scan or render."""
        return not self.errors

    @property
    def page_count(self) -> int:
        """Return the number of navigable pages across all sections."""
        return sum(len(section.pages) for section in self.sections)

    def raise_for_errors(self) -> None:
        """Raise a :class:`BuildError` grouping every collected error."""
        if self.errors:
            count = len(self.errors)
            noun = "file" if count == 1 else "files"
            msg = f"{count} {noun} failed to build"
            raise BuildError(msg, list(self.errors))


__all__ = [
    "BuildResult",
    "BuildState",
    "DocFile",
    "NavPage",
    "NavSection",
    "RebuildOutcome",
    "ScanResult",
]

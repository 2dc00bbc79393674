"""Compute output locations and public routes for source files.

Authors order siblings with numeric prefixes (``01-intro.md``,
``02-guides/``). With the ``ordering`` option enabled those prefixes are
removed from every generated directory and file name, so
``01-guide/02-install.md`` is published as ``/guide/install.html``.

Examples
--------
>>> from docwright.generator.paths import strip_ordering_prefix
>>> strip_ordering_prefix("01-intro")
'intro'
>>> strip_ordering_prefix(strip_ordering_prefix("01-intro"))
'intro'
>>> strip_ordering_prefix("intro")
'intro'
"""

from __future__ import annotations

import re
import typing as typ
from pathlib import Path, PurePosixPath

from docwright._constants import MARKDOWN_SUFFIXES

if typ.TYPE_CHECKING:
    from docwright.markdown_parser import Frontmatter

ORDERING_PREFIX_PATTERN = re.compile(r"^(?:\d+-)+")
HTML_SUFFIX = ".html"


def strip_ordering_prefix(name: str) -> str:
    """Remove leading ``<digits>-`` prefixes from a single path segment.

    A segment made only of prefixes (``"01-"``) is returned unchanged so no
    file or directory name becomes empty.
    """
    stripped = ORDERING_PREFIX_PATTERN.sub("", name, count=1)
    return stripped or name


def is_markdown(path: Path | PurePosixPath) -> bool:
    """Return ``True`` when ``path`` names a Markdown source file."""
    return path.suffix.lower() in MARKDOWN_SUFFIXES


def _publish_parts(relative: PurePosixPath, *, ordering: bool) -> list[str]:
    """Return output path segments for a Markdown source relative path."""
    directories = list(relative.parts[:-1])
    stem = relative.stem
    if ordering:
        directories = [strip_ordering_prefix(part) for part in directories]
        stem = strip_ordering_prefix(stem)
    return [*directories, f"{stem}{HTML_SUFFIX}"]


def compute_output_path(
    source_path: Path,
    source_dir: Path,
    output_dir: Path,
    matter: Frontmatter,
    *,
    ordering: bool,
) -> Path:
    """Return the HTML destination for the Markdown file at ``source_path``.

    Parameters
    ----------
    source_path : Path
        Markdown file inside ``source_dir``.
    source_dir : Path
        Root of the source tree.
    output_dir : Path
        Root of the output tree.
    matter : Frontmatter
        Metadata of the file; a non-empty ``path`` overrides the mirrored
        location and is used verbatim.
    ordering : bool
        Strip ordering prefixes from mirrored directory and file names.

    Returns
    -------
    Path
        Destination under ``output_dir``.
    """
    if matter.path:
        return output_dir.joinpath(*PurePosixPath(matter.path.lstrip("/")).parts)
    relative = PurePosixPath(source_path.relative_to(source_dir).as_posix())
    return output_dir.joinpath(*_publish_parts(relative, ordering=ordering))


def mirror_path(source_path: Path, source_dir: Path, output_dir: Path) -> Path:
    """Return the verbatim copy destination for a static file."""
    return output_dir / source_path.relative_to(source_dir)


def route_for(output_path: Path, output_dir: Path) -> str:
    """Return the public route of ``output_path``, always starting with ``/``."""
    relative = output_path.relative_to(output_dir).as_posix()
    return f"/{relative.lstrip('/')}"


def rewrite_markdown_target(target: str, *, ordering: bool) -> str:
    """Map a relative link to a Markdown source onto its generated page.

    ``../setup/02-install.md`` becomes ``../setup/install.html`` when
    ``ordering`` is on. ``.`` and ``..`` segments are preserved.
    """
    relative = PurePosixPath(target)
    directories = [
        strip_ordering_prefix(part) if ordering and part not in {".", ".."} else part
        for part in relative.parts[:-1]
    ]
    stem = strip_ordering_prefix(relative.stem) if ordering else relative.stem
    return "/".join([*directories, f"{stem}{HTML_SUFFIX}"])


__all__ = [
    "HTML_SUFFIX",
    "ORDERING_PREFIX_PATTERN",
    "compute_output_path",
    "is_markdown",
    "mirror_path",
    "rewrite_markdown_target",
    "route_for",
    "strip_ordering_prefix",
]

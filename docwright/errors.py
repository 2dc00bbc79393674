"""Exception types raised while loading, building and serving a docs site.

Configuration, directory-walk and server errors are fatal and abort the
command that raised them. Parse, validation and render errors belong to a
single source or output file; the build records them and carries on, then
reports them together as a :class:`BuildError`.

Examples
--------
>>> from pathlib import Path
>>> from docwright.errors import BuildError, ValidationError
>>> err = ValidationError("missing title", path=Path("docs/a.md"))
>>> str(err.path)
'docs/a.md'
>>> group = BuildError("1 file failed", [err])
>>> len(group.exceptions)
1
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path


class ConfigError(ValueError):
    """Raised when ``docwright.toml`` is unreadable, unparsable or incomplete."""


class _FileError:
    """Mixin recording the file an error belongs to."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ParseError(_FileError, ValueError):
    """Raised when a document's frontmatter block cannot be decoded."""


class ValidationError(_FileError, ValueError):
    """Raised when decoded frontmatter is missing a required field."""


class RenderError(_FileError, RuntimeError):
    """Raised when a page cannot be converted, templated or written to disk."""


class WalkError(RuntimeError):
    """Raised when the source tree cannot be read; aborts the whole build."""


class ServerError(RuntimeError):
    """Raised when the HTTP server cannot bind or listen."""


class BuildError(ExceptionGroup):
    """Aggregate of the per-file errors collected during one build."""


__all__ = [
    "BuildError",
    "ConfigError",
    "ParseError",
    "RenderError",
    "ServerError",
    "ValidationError",
    "WalkError",
]

"""Static documentation-site generator for Markdown trees.

This package exposes the CLI entry points used by the ``docwright`` console
script to build a sectioned HTML site from Markdown with frontmatter, serve
it locally, and rebuild it as sources change.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docwright import main
>>> main(["build"])  # doctest: +SKIP
>>> from docwright import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]

"""Helpers for rewriting relative Markdown links to generated page routes."""

from __future__ import annotations

import typing as typ
from pathlib import PurePosixPath
from urllib.parse import urlsplit

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from docwright._constants import MARKDOWN_SUFFIXES

from .paths import rewrite_markdown_target

if typ.TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from markdown import Markdown
else:  # pragma: no cover - type-checking fallback
    Markdown = typ.Any
    Element = typ.Any


class RelativeLinkExtension(Extension):
    """Rewrite links between Markdown sources to their generated HTML pages.

    Insert this extension into a ``markdown.Markdown`` instance so that an
    intra-site link such as ``../setup/02-install.md#flags`` points at the
    published ``../setup/install.html#flags`` instead of the source file.
    Absolute, scheme, protocol-relative and fragment-only links are left
    untouched, as are links to non-Markdown files.
    """

    def __init__(self, *, ordering: bool) -> None:
        super().__init__()
        self.ordering = ordering

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the relative-link treeprocessor on the Markdown instance."""
        processor = RelativeLinkTreeprocessor(md, ordering=self.ordering)
        md.treeprocessors.register(processor, "docwright_relative_links", 15)


class RelativeLinkTreeprocessor(Treeprocessor):
    """Point relative ``.md`` anchors at their ``.html`` counterparts."""

    def __init__(self, md: Markdown, *, ordering: bool) -> None:
        super().__init__(md)
        self.ordering = ordering

    def run(self, root: Element) -> Element:  # pragma: no cover - Markdown API
        """Rewrite relative anchors in the parsed markdown tree."""
        for element in root.iter():
            if element.tag == "a":
                rewritten = self.rewrite(element.get("href"))
                if rewritten:
                    element.set("href", rewritten)
        return root

    def rewrite(self, target: str | None) -> str | None:
        """Return the generated route for ``target`` or ``None`` to keep it."""
        if not target or target.startswith(("#", "//", "/")) or "://" in target:
            return None

        parsed = urlsplit(target)
        if parsed.scheme or parsed.netloc or not parsed.path:
            return None
        if PurePosixPath(parsed.path).suffix.lower() not in MARKDOWN_SUFFIXES:
            return None

        url = rewrite_markdown_target(parsed.path, ordering=self.ordering)
        if parsed.query:
            url = f"{url}?{parsed.query}"
        if parsed.fragment:
            url = f"{url}#{parsed.fragment}"
        return url


__all__ = ["RelativeLinkExtension", "RelativeLinkTreeprocessor"]

"""Group pages into navigation sections in the order they are discovered.

The builder always starts with an empty-titled section that collects pages
without a ``section`` in their frontmatter. Sections appear in first-seen
order and pages keep their discovery order; nothing is sorted here, so a
deterministic walk gives a deterministic menu.
"""

from __future__ import annotations

import typing as typ

from .models import DocFile, NavPage, NavSection

if typ.TYPE_CHECKING:
    from collections.abc import Iterable


class NavigationBuilder:
    """Accumulate :class:`NavSection` entries as pages are discovered."""

    def __init__(self) -> None:
        self._sections: list[NavSection] = [NavSection(title="")]

    @property
    def sections(self) -> list[NavSection]:
        """Return the sections built so far, placeholder first."""
        return self._sections

    def add(self, doc: DocFile) -> NavSection:
        """Append ``doc`` to its section, creating the section when unseen."""
        page = NavPage(title=doc.title, href=doc.relative_path)
        for section in self._sections:
            if section.title == doc.section:
                section.pages.append(page)
                return section
        section = NavSection(title=doc.section, pages=[page])
        self._sections.append(section)
        return section


def build_navigation(files: Iterable[DocFile]) -> list[NavSection]:
    """Return the navigation sections for ``files`` in iteration order."""
    builder = NavigationBuilder()
    for doc in files:
        builder.add(doc)
    return builder.sections


def rename_page(sections: list[NavSection], href: str, title: str) -> bool:
    """Replace the title of the page linked at ``href`` in place.

    Returns ``True`` when a matching entry was found.
    """
    for section in sections:
        for idx, page in enumerate(section.pages):
            if page.href == href:
                section.pages[idx] = NavPage(title=title, href=href)
                return True
    return False


def iter_pages(sections: Iterable[NavSection]) -> typ.Iterator[NavPage]:
    """Yield every page across ``sections`` in menu order."""
    for section in sections:
        yield from section.pages


__all__ = ["NavigationBuilder", "build_navigation", "iter_pages", "rename_page"]

"""Unit tests for navigation sections and prev/next linkage.

Usage
-----
Run ``pytest tests/test_navigation.py -v``.
"""

from __future__ import annotations

import datetime as dt
from pathlib import Path

from docwright.generator import NavPage, NavSection, build_navigation, neighbours
from docwright.generator.models import DocFile
from docwright.generator.navigation import NavigationBuilder, rename_page
from docwright.markdown_parser import Frontmatter


def _doc(name: str, section: str = "") -> DocFile:
    return DocFile(
        relative_path=f"/{name.lower()}.html",
        output_path=Path(f"/out/{name.lower()}.html"),
        source_path=Path(f"/src/{name.lower()}.md"),
        frontmatter=Frontmatter(title=name, section=section),
        rendered_html=f"<p>{name}</p>",
        modified_time=dt.datetime(2024, 1, 2, tzinfo=dt.UTC),
    )


def test_placeholder_section_always_exists_first() -> None:
    """The empty-titled section leads the list even when unused."""
    sections = build_navigation([_doc("A", "Guides")])
    assert [section.title for section in sections] == ["", "Guides"]
    assert sections[0].pages == []


def test_sections_keep_first_seen_order_and_page_order() -> None:
    """Sections appear in discovery order; pages keep discovery order."""
    docs = [
        _doc("A", "Guides"),
        _doc("B"),
        _doc("C", "Reference"),
        _doc("D", "Guides"),
        _doc("E"),
    ]
    sections = build_navigation(docs)
    assert sections == [
        NavSection("", [NavPage("B", "/b.html"), NavPage("E", "/e.html")]),
        NavSection("Guides", [NavPage("A", "/a.html"), NavPage("D", "/d.html")]),
        NavSection("Reference", [NavPage("C", "/c.html")]),
    ]


def test_navigation_is_deterministic() -> None:
    """Rebuilding from the same ordered files yields identical navigation."""
    docs = [_doc("A", "Guides"), _doc("B"), _doc("C", "Guides")]
    assert build_navigation(docs) == build_navigation(list(docs))


def test_section_titles_are_unique() -> None:
    """Pages with the same section share one entry."""
    builder = NavigationBuilder()
    first = builder.add(_doc("A", "Guides"))
    second = builder.add(_doc("B", "Guides"))
    assert first is second
    assert len(builder.sections) == 2


def test_rename_page_updates_title_in_place() -> None:
    """Single-file rebuilds rename the nav entry without reordering."""
    sections = build_navigation([_doc("A", "Guides"), _doc("B", "Guides")])
    assert rename_page(sections, "/a.html", "A2") is True
    assert sections[1].pages == [NavPage("A2", "/a.html"), NavPage("B", "/b.html")]
    assert rename_page(sections, "/missing.html", "X") is False


def test_single_file_links_to_itself() -> None:
    """For a one-page site prev and next are the page itself."""
    files = [_doc("A")]
    assert neighbours(files, 0) == (files[0], files[0])


def test_neighbours_use_array_adjacency_with_self_at_edges() -> None:
    """The first page is its own prev and the last page its own next."""
    files = [_doc("A"), _doc("B"), _doc("C")]
    assert neighbours(files, 0) == (files[0], files[1])
    assert neighbours(files, 1) == (files[0], files[2])
    assert neighbours(files, 2) == (files[1], files[2])


def test_two_file_site_edges() -> None:
    """With two pages each edge points at itself on the outer side."""
    files = [_doc("A"), _doc("B")]
    assert neighbours(files, 0) == (files[0], files[1])
    assert neighbours(files, 1) == (files[0], files[1])

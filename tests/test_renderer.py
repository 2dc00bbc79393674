"""Unit tests for Markdown conversion and relative link rewriting.

These tests exercise :class:`~docwright.generator.HtmlContentRenderer` with the
GitHub-flavoured extras enabled and the
:class:`~docwright.generator.RelativeLinkExtension` attached, asserting on the
HTML with BeautifulSoup.

Usage
-----
Run ``pytest tests/test_renderer.py -v``.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from docwright.generator import HtmlContentRenderer, RelativeLinkExtension


@pytest.fixture
def renderer() -> HtmlContentRenderer:
    """Return a renderer that rewrites links with ordering enabled."""
    return HtmlContentRenderer(link_extension=RelativeLinkExtension(ordering=True))


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_empty_body_renders_nothing(renderer: HtmlContentRenderer) -> None:
    """Whitespace-only bodies produce an empty fragment."""
    assert renderer.markdown("  \n\n") == ""


def test_tables_render(renderer: HtmlContentRenderer) -> None:
    """Pipe tables become HTML tables."""
    soup = _soup(renderer.markdown("| a | b |\n|---|---|\n| 1 | 2 |\n"))
    cells = [cell.get_text() for cell in soup.select("table td")]
    assert cells == ["1", "2"]


def test_strikethrough_renders(renderer: HtmlContentRenderer) -> None:
    """Double tildes strike text through."""
    soup = _soup(renderer.markdown("This is ~~gone~~ now.\n"))
    deleted = soup.find("del")
    assert deleted is not None, "expected a <del> element for ~~text~~"
    assert deleted.get_text() == "gone"


def test_bare_urls_are_autolinked(renderer: HtmlContentRenderer) -> None:
    """Bare URLs and email addresses become links."""
    soup = _soup(renderer.markdown("See https://example.com or mail me@example.com today\n"))
    hrefs = [anchor["href"] for anchor in soup.find_all("a")]
    assert "https://example.com" in hrefs
    assert "mailto:me@example.com" in hrefs


def test_task_lists_render_checkboxes(renderer: HtmlContentRenderer) -> None:
    """``- [x]`` items render as disabled checkboxes."""
    soup = _soup(renderer.markdown("- [x] done\n- [ ] todo\n"))
    boxes = soup.select("li.task-list-item input[type=checkbox]")
    assert len(boxes) == 2
    assert boxes[0].has_attr("checked")
    assert not boxes[1].has_attr("checked")


def test_fenced_code_is_highlighted_with_language(
    renderer: HtmlContentRenderer,
) -> None:
    """Fenced blocks are highlighted and tagged with their language."""
    soup = _soup(renderer.markdown("```python\nprint('hi')\n```\n"))
    block = soup.select_one("div.codehilite")
    assert block is not None, "expected a codehilite block"
    assert block.get("data-language") == "python"
    assert "print" in block.get_text()


def test_every_block_is_labelled_with_its_own_language(
    renderer: HtmlContentRenderer,
) -> None:
    """Indented, backtick and tilde blocks each carry their own language."""
    body = (
        "Intro\n\n"
        "    plain indented\n\n"
        "```python\nx = 1\n```\n\n"
        "~~~rust\nfn f() {}\n~~~\n"
    )
    soup = _soup(renderer.markdown(body))
    labels = [block.get("data-language") for block in soup.select("div.codehilite")]
    assert labels == ["text", "python", "rust"]


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("```\nraw\n```\n", "text"),
        ("```mermaid\ngraph TD\n```\n", "mermaid"),
        ("- item\n\n  ```rust,no_run\n  fn main() {}\n  ```\n", "rust"),
    ],
    ids=["unlabelled", "unknown-lexer", "info-string-extras"],
)
def test_fence_language_label(
    renderer: HtmlContentRenderer, body: str, expected: str
) -> None:
    """The label is the fence language, or ``text`` when none is given."""
    block = _soup(renderer.markdown(body)).select_one("div.codehilite")
    assert block is not None
    assert block.get("data-language") == expected


def test_stylesheet_targets_codehilite(renderer: HtmlContentRenderer) -> None:
    """The Pygments stylesheet is scoped to highlighted blocks."""
    assert ".codehilite" in renderer.stylesheet


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        ("../01-setup/02-install.md#flags", "../setup/install.html#flags"),
        ("03-faq.markdown", "faq.html"),
        ("https://example.com/readme.md", "https://example.com/readme.md"),
        ("/absolute/page.md", "/absolute/page.md"),
        ("#anchor", "#anchor"),
        ("diagram.png", "diagram.png"),
    ],
)
def test_relative_markdown_links_point_at_pages(
    renderer: HtmlContentRenderer, target: str, expected: str
) -> None:
    """Links to Markdown sources are rewritten; everything else is kept."""
    soup = _soup(renderer.markdown(f"[link]({target})\n"))
    anchor = soup.find("a")
    assert anchor is not None
    assert anchor["href"] == expected


def test_links_keep_prefixes_without_ordering() -> None:
    """With ordering disabled only the suffix changes."""
    renderer = HtmlContentRenderer(link_extension=RelativeLinkExtension(ordering=False))
    soup = _soup(renderer.markdown("[x](01-intro.md)\n"))
    assert soup.find("a")["href"] == "01-intro.html"

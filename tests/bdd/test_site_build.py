"""Behaviour tests for building a small site end to end.

The ``site_build.feature`` scenario writes two pages into a temporary source
tree, runs a full build and inspects the generated pages, navigation and
sitemap.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from docwright.config import BuildConfig, SiteConfig
from docwright.generator import BuildResult, SiteBuilder

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import logging

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "site_build.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given(parsers.parse('a site config building "{source}" into "{output}"'))
def given_config(
    tmp_path: Path, scenario_state: dict[str, object], source: str, output: str
) -> None:
    (tmp_path / source).mkdir()
    scenario_state["source_dir"] = tmp_path / source
    scenario_state["output_dir"] = tmp_path / output
    scenario_state["config"] = SiteConfig(
        name="Handbook",
        url="https://example.com",
        build=BuildConfig(source=source, output=output),
    )


@given(parsers.parse('a page "{name}" titled "{title}" in section "{section}"'))
def given_sectioned_page(
    scenario_state: dict[str, object],
    write_page: cabc.Callable[..., Path],
    name: str,
    title: str,
    section: str,
) -> None:
    write_page(
        typ.cast("Path", scenario_state["source_dir"]), name, title=title, section=section
    )


@given(parsers.parse('a page "{name}" titled "{title}" without a section'))
def given_plain_page(
    scenario_state: dict[str, object],
    write_page: cabc.Callable[..., Path],
    name: str,
    title: str,
) -> None:
    write_page(typ.cast("Path", scenario_state["source_dir"]), name, title=title)


@when("I build the site")
def when_build_site(
    tmp_path: Path, scenario_state: dict[str, object], logger: logging.Logger
) -> None:
    config = typ.cast("SiteConfig", scenario_state["config"])
    scenario_state["result"] = SiteBuilder(config, tmp_path, logger=logger).build()


@then("the build succeeds")
def then_build_succeeds(scenario_state: dict[str, object]) -> None:
    result = typ.cast("BuildResult", scenario_state["result"])
    assert result.ok, result.errors
    assert result.page_count == 2


@then(parsers.parse('the output contains "{first}" and "{second}"'))
def then_output_contains(
    scenario_state: dict[str, object], first: str, second: str
) -> None:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    assert (output_dir / first).is_file()
    assert (output_dir / second).is_file()


def _section_titles(scenario_state: dict[str, object], section: str) -> list[str]:
    result = typ.cast("BuildResult", scenario_state["result"])
    matches = [entry for entry in result.sections if entry.title == section]
    assert len(matches) == 1, f"expected exactly one section titled {section!r}"
    return [page.title for page in matches[0].pages]


@then(parsers.parse('the navigation has a "{section}" section listing "{title}"'))
def then_section_lists(
    scenario_state: dict[str, object], section: str, title: str
) -> None:
    assert _section_titles(scenario_state, section) == [title]
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    soup = BeautifulSoup(
        (output_dir / "b.html").read_text(encoding="utf-8"), "html.parser"
    )
    rendered = soup.select_one(f'section.nav-section[data-section="{section}"]')
    assert rendered is not None
    assert [link.get_text(strip=True) for link in rendered.select("a.nav-link")] == [
        title
    ]


@then(parsers.parse('the navigation has an untitled section listing "{title}"'))
def then_untitled_section_lists(scenario_state: dict[str, object], title: str) -> None:
    assert _section_titles(scenario_state, "") == [title]


@then(parsers.parse("the sitemap lists {count:d} URLs"))
def then_sitemap_lists(scenario_state: dict[str, object], count: int) -> None:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    soup = BeautifulSoup(
        (output_dir / "sitemap.xml").read_text(encoding="utf-8"), "html.parser"
    )
    locations = [loc.get_text() for loc in soup.find_all("loc")]
    assert len(locations) == count
    assert sorted(locations) == [
        "https://example.com/a.html",
        "https://example.com/b.html",
    ]

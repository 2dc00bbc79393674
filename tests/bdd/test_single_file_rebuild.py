"""Behaviour tests for single-page rebuilds in the development loop.

The ``single_file_rebuild.feature`` scenario builds a two-page site through a
:class:`~docwright.dev.DevSession`, edits one source and feeds a synthetic
``watchdog`` modification event to the change handler. Only the edited page
may be rewritten.
"""

from __future__ import annotations

import time
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when
from watchdog.events import FileModifiedEvent

from docwright.config import BuildConfig, SiteConfig
from docwright.dev import Debouncer, DevSession, SourceChangeHandler

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import logging

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "single_file_rebuild.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given(
    parsers.parse(
        'a dev session over pages "{first}" titled "{first_title}" '
        'and "{second}" titled "{second_title}"'
    )
)
def given_session(
    tmp_path: Path,
    scenario_state: dict[str, object],
    write_page: cabc.Callable[..., Path],
    logger: logging.Logger,
    first: str,
    first_title: str,
    second: str,
    second_title: str,
) -> None:
    source_dir = tmp_path / "docs"
    write_page(source_dir, first, title=first_title)
    write_page(source_dir, second, title=second_title)
    config = SiteConfig(name="Handbook", build=BuildConfig(source="docs", output="dist"))
    echoed: list[str] = []
    session = DevSession(
        config, tmp_path, logger=logger, debounce_seconds=0.01, echo=echoed.append
    )
    scenario_state.update(
        session=session,
        echoed=echoed,
        source_dir=source_dir,
        output_dir=tmp_path / "dist",
        write_page=write_page,
    )


@given("the site has been built once")
def given_built(scenario_state: dict[str, object]) -> None:
    session = typ.cast("DevSession", scenario_state["session"])
    session.initial_build().raise_for_errors()
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    scenario_state["mtimes"] = {
        path.name: path.stat().st_mtime_ns for path in output_dir.glob("*.html")
    }


@when(parsers.parse('"{name}" is retitled "{title}" and a write event fires'))
def when_retitled(scenario_state: dict[str, object], name: str, title: str) -> None:
    session = typ.cast("DevSession", scenario_state["session"])
    source_dir = typ.cast("Path", scenario_state["source_dir"])
    echoed = typ.cast("list[str]", scenario_state["echoed"])
    write_page = typ.cast("cabc.Callable[..., Path]", scenario_state["write_page"])
    path = write_page(source_dir, name, title=title)

    debouncer = Debouncer(0.01)
    handler = SourceChangeHandler(session, debouncer)
    handler.dispatch(FileModifiedEvent(str(path)))

    reported = len(echoed)
    deadline = time.monotonic() + 5
    while len(echoed) == reported or debouncer.pending:
        assert time.monotonic() < deadline, "rebuild did not run"
        time.sleep(0.01)


@then(parsers.parse('"{name}" shows the title "{title}"'))
def then_shows_title(scenario_state: dict[str, object], name: str, title: str) -> None:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    html = (output_dir / name).read_text(encoding="utf-8")
    assert f"<title>{title} | Handbook</title>" in html


@then(parsers.parse('"{name}" is left untouched'))
def then_untouched(scenario_state: dict[str, object], name: str) -> None:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    mtimes = typ.cast("dict[str, int]", scenario_state["mtimes"])
    assert (output_dir / name).stat().st_mtime_ns == mtimes[name]


@then(parsers.parse('the session reports "{message}"'))
def then_reports(scenario_state: dict[str, object], message: str) -> None:
    echoed = typ.cast("list[str]", scenario_state["echoed"])
    assert echoed[-1] == message

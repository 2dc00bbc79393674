"""Rebuild the site on source changes while serving it locally.

:class:`DevSession` runs one full build, serves the output directory from a
background thread and watches the source tree with ``watchdog``. Bursts of
filesystem events are coalesced by a :class:`Debouncer`; when the quiet
period ends the session either re-renders the single page whose Markdown was
modified or, for anything that can change the navigation (new, deleted or
moved files), rebuilds the whole site.

The current file list and navigation live in one :class:`SiteState` and are
only touched while holding its lock, so a single-file rebuild can never
observe a half-replaced full build.
"""

from __future__ import annotations

import contextlib
import os
import threading
import typing as typ
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from docwright.errors import ParseError, RenderError, ValidationError, WalkError
from docwright.generator import (
    BuildResult,
    DocFile,
    NavSection,
    RebuildOutcome,
    SiteBuilder,
)
from docwright.generator.paths import is_markdown
from docwright.server import create_server

if typ.TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Iterator

    from docwright.config import SiteConfig

DEFAULT_DEBOUNCE_SECONDS = 0.25
REBUILD_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}
)


class Debouncer:
    """Run only the last of a burst of callbacks, after a quiet period."""

    def __init__(self, delay: float = DEFAULT_DEBOUNCE_SECONDS) -> None:
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    def __call__(self, callback: Callable[[], object]) -> None:
        """Arm a timer for ``callback``, cancelling any timer already armed."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self.delay, callback)
            timer.daemon = True
            self._timer = timer
            timer.start()

    @property
    def pending(self) -> bool:
        """Return ``True`` while an armed timer has not fired yet."""
        with self._lock:
            return self._timer is not None and self._timer.is_alive()

    def cancel(self) -> None:
        """Disarm the pending timer, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class SiteState:
    """Owner of the latest file list and navigation shared by rebuilds."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._files: list[DocFile] = []
        self._sections: list[NavSection] = []

    @contextlib.contextmanager
    def locked(self) -> Iterator[tuple[list[DocFile], list[NavSection]]]:
        """Hold the lock and yield the live lists for in-place updates."""
        with self.lock:
            yield self._files, self._sections

    def replace(self, result: BuildResult) -> None:
        """Swap in the lists produced by a full build."""
        with self.lock:
            self._files = list(result.files)
            self._sections = result.sections

    def snapshot(self) -> tuple[list[DocFile], list[NavSection]]:
        """Return copies of the current lists, safe to read without the lock."""
        with self.lock:
            sections = [
                NavSection(title=section.title, pages=list(section.pages))
                for section in self._sections
            ]
            return list(self._files), sections


class SourceChangeHandler(FileSystemEventHandler):
    """Queue rebuilds for source-tree events and flush them once debounced."""

    def __init__(self, session: DevSession, debouncer: Debouncer) -> None:
        super().__init__()
        self.session = session
        self.debouncer = debouncer
        self._lock = threading.Lock()
        self._full_rebuild = False
        self._changed: dict[Path, None] = {}

    def on_any_event(self, event: FileSystemEvent) -> None:
        """Classify ``event`` and arm the debouncer when it needs a rebuild."""
        if event.is_directory or event.event_type not in REBUILD_EVENTS:
            return
        path = Path(os.fsdecode(event.src_path))
        self.session.logger.info(
            "File system event detected type=%s path=%s", event.event_type, path
        )
        with self._lock:
            if event.event_type == EVENT_TYPE_MODIFIED and is_markdown(path):
                self._changed[path] = None
            else:
                self._full_rebuild = True
        self.debouncer(self.flush)

    def flush(self) -> None:
        """Run the queued work: one full rebuild, or each single-file rebuild."""
        with self._lock:
            full_rebuild = self._full_rebuild
            changed = list(self._changed)
            self._full_rebuild = False
            self._changed.clear()
        if full_rebuild:
            self.session.full_rebuild()
            return
        for path in changed:
            self.session.rebuild_file(path)


class DevSession:
    """Build, serve and rebuild a site until the process is interrupted."""

    def __init__(
        self,
        config: SiteConfig,
        cwd: Path,
        *,
        logger: logging.Logger,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        builder: SiteBuilder | None = None,
        echo: Callable[[str], None] = print,
    ) -> None:
        """Initialize the session.

        Parameters
        ----------
        config : SiteConfig
            Validated site configuration.
        cwd : Path
            Working directory the configured directories are relative to.
        logger : logging.Logger
            Handle receiving diagnostics from every component.
        debounce_seconds : float, optional
            Quiet period before queued rebuilds run.
        builder : SiteBuilder, optional
            Builder to drive; one is created from ``config`` when omitted.
        echo : Callable[[str], None], optional
            Sink for operator-facing messages.
        """
        self.config = config
        self.logger = logger
        self.builder = builder or SiteBuilder(config, cwd, logger=logger)
        self.state = SiteState()
        self.debouncer = Debouncer(debounce_seconds)
        self.echo = echo
        self._stop = threading.Event()

    def initial_build(self) -> BuildResult:
        """Run the first full build; a walk failure propagates."""
        with self.state.locked():
            result = self.builder.build()
            self.state.replace(result)
        self._report(result)
        return result

    def full_rebuild(self) -> BuildResult | None:
        """Rebuild everything, replacing the shared state on success."""
        with self.state.locked():
            try:
                result = self.builder.build()
            except WalkError as exc:
                self.logger.error("Rebuild failed error=%s", exc)  # noqa: TRY400
                self.echo(f"Error building: {exc}")
                return None
            self.state.replace(result)
        self._report(result)
        return result

    def rebuild_file(self, path: Path) -> RebuildOutcome | None:
        """Re-render the page built from ``path``, falling back to a full build.

        Returns ``None`` when the changed file can no longer be built. The
        site is then rebuilt in full, which drops the page from the output and
        the navigation and reports the error.
        """
        with self.state.locked() as (files, sections):
            try:
                outcome = self.builder.rebuild_file(files, sections, path)
            except (ParseError, ValidationError, RenderError) as exc:
                self.logger.warning("Rebuild failed path=%s error=%s", path, exc)
                self.full_rebuild()
                return None
        if outcome is RebuildOutcome.REBUILT:
            self.echo(f"Rebuilt {path.name}")
        else:
            self.logger.info(
                "Falling back to full rebuild path=%s reason=%s", path, outcome
            )
            self.full_rebuild()
        return outcome

    def run(self, *, host: str = "") -> None:
        """Build, serve and watch until interrupted or :meth:`stop` is called.

        Raises
        ------
        WalkError
            If the initial build cannot read the source tree.
        ServerError
            If the HTTP server cannot bind its port.
        """
        self.initial_build()
        server = create_server(
            self.builder.output_dir,
            self.config.serve.port,
            base_path=self.config.base_path,
            logger=self.logger,
            host=host,
        )
        threading.Thread(
            target=server.serve_forever, name="docwright-server", daemon=True
        ).start()
        self.echo(
            f"Serving {self.config.build.output} at "
            f"http://localhost:{self.config.serve.port}{self.config.base_path}/"
        )

        observer = Observer()
        observer.daemon = True
        observer.schedule(
            SourceChangeHandler(self, self.debouncer),
            str(self.builder.source_dir),
            recursive=True,
        )
        observer.start()
        self.logger.info("Watching source dir=%s", self.builder.source_dir)

        try:
            self._stop.wait()
        except KeyboardInterrupt:
            self.echo("Shutting down server...")
        finally:
            self.debouncer.cancel()
            observer.stop()
            observer.join()
            server.shutdown()
            server.server_close()

    def stop(self) -> None:
        """Ask :meth:`run` to return."""
        self._stop.set()

    def _report(self, result: BuildResult) -> None:
        for error in result.errors:
            self.echo(f"Error building: {error}")
        if result.ok:
            self.echo("Docs built successfully")


__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "Debouncer",
    "DevSession",
    "SiteState",
    "SourceChangeHandler",
]

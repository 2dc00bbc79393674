"""High-level orchestration for building a documentation site.

This module walks the configured source tree, turns every Markdown file into
a :class:`~docwright.generator.models.DocFile`, copies every other file
verbatim, assembles the navigation menu as files are discovered, then renders
all pages concurrently through the shared ``page.jinja`` template and writes
``sitemap.xml``. Per-file failures are collected rather than raised so one
broken page never hides the rest of the site; only a failure to read the
source tree itself aborts the build.

Example
-------
>>> from pathlib import Path
>>> from docwright.config import load_site_config
>>> from docwright.generator import SiteBuilder
>>> from docwright.logs import configure_logging
>>> config = load_site_config(Path("."))  # doctest: +SKIP
>>> builder = SiteBuilder(config, Path("."), logger=configure_logging())  # doctest: +SKIP
>>> result = builder.build()  # doctest: +SKIP
>>> result.ok  # doctest: +SKIP
True
"""

from __future__ import annotations

import datetime as dt
import os
import shutil
import typing as typ
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from docwright._constants import ASSETS_DIRNAME, PAGE_TEMPLATE
from docwright.errors import ParseError, RenderError, ValidationError, WalkError
from docwright.markdown_parser import parse_document

from .link_rewriter import RelativeLinkExtension
from .models import (
    BuildResult,
    BuildState,
    DocFile,
    NavPage,
    NavSection,
    RebuildOutcome,
    ScanResult,
)
from .navigation import NavigationBuilder, rename_page
from .paths import compute_output_path, is_markdown, mirror_path, route_for
from .renderer import HtmlContentRenderer
from .sitemap import write_sitemap

if typ.TYPE_CHECKING:
    import logging

    from docwright.config import SiteConfig

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_TEMPLATES_DIR = PACKAGE_ROOT / "templates"
DEFAULT_ASSETS_DIR = PACKAGE_ROOT / "assets"


def format_long_date(value: dt.datetime | dt.date) -> str:
    """Format ``value`` as a long-form date such as ``Tuesday, 2 January 2006``."""
    return f"{value:%A}, {value.day} {value:%B %Y}"


def neighbours(files: list[DocFile], index: int) -> tuple[DocFile, DocFile]:
    """Return the previous and next pages of ``files[index]``.

    The first page is its own previous page and the last page is its own
    next page, so a single-page site links to itself in both directions.
    """
    current = files[index]
    prev_doc = files[index - 1] if index > 0 else current
    next_doc = files[index + 1] if index < len(files) - 1 else current
    return prev_doc, next_doc


def create_environment(templates_dir: Path) -> Environment:
    """Return the Jinja environment used for pages and the sitemap."""
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["long_date"] = format_long_date
    return env


class SiteBuilder:
    """Walk a source tree and emit the themed HTML site."""

    def __init__(
        self,
        config: SiteConfig,
        cwd: Path,
        *,
        logger: logging.Logger,
        templates_dir: Path | None = None,
        assets_dir: Path | None = None,
    ) -> None:
        """Initialize the builder with configuration and template context.

        Parameters
        ----------
        config : SiteConfig
            Validated site configuration.
        cwd : Path
            Working directory the configured source and output directories
            are relative to.
        logger : logging.Logger
            Handle receiving progress and per-file diagnostics.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        assets_dir : Path, optional
            Theme assets copied to ``<output>/assets``; defaults to the package assets.
        """
        self.config = config
        self.logger = logger
        root = cwd.resolve()
        self.source_dir = (root / config.build.source).resolve()
        self.output_dir = (root / config.build.output).resolve()
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.assets_dir = assets_dir or DEFAULT_ASSETS_DIR
        self.renderer = HtmlContentRenderer(
            link_extension=RelativeLinkExtension(ordering=config.options.ordering)
        )
        self.env = create_environment(self.templates_dir)
        self.template = self.env.get_template(PAGE_TEMPLATE)
        self.state = BuildState.IDLE

    def build(self, *, sitemap: bool = True) -> BuildResult:
        """Rebuild the whole site from scratch.

        Returns
        -------
        BuildResult
            Files, navigation and every per-file error. The sitemap is
            written even when some files failed.

        Raises
        ------
        WalkError
            If the output directory cannot be prepared or the source tree
            cannot be read.
        """
        self.logger.info(
            "Building docs src=%s out=%s", self.source_dir, self.output_dir
        )
        try:
            self._prepare_output()
            scan = self.scan()
        except WalkError:
            self.state = BuildState.FAILED
            raise

        errors: list[Exception] = list(scan.errors)
        errors.extend(self.render_all(scan.files, scan.sections))
        if sitemap:
            try:
                path = self.write_sitemap(scan.sections)
            except OSError as exc:
                errors.append(
                    RenderError(f"Error writing sitemap: {exc}", path=self.output_dir)
                )
            else:
                self.logger.info("Wrote sitemap path=%s", path)

        self.state = BuildState.FAILED if errors else BuildState.DONE
        self.logger.info(
            "Build finished state=%s pages=%d errors=%d",
            self.state,
            len(scan.files),
            len(errors),
        )
        return BuildResult(files=scan.files, sections=scan.sections, errors=errors)

    def scan(self) -> ScanResult:
        """Walk the source tree, recording pages and copying static files.

        Raises
        ------
        WalkError
            If the source directory is missing or a directory cannot be read.
        """
        self.state = BuildState.SCANNING
        files: list[DocFile] = []
        errors: list[Exception] = []
        navigation = NavigationBuilder()

        for path in self._walk():
            self.logger.info("Processing file in src directory path=%s", path)
            if is_markdown(path):
                try:
                    doc = self.create_doc_file(path)
                except (ParseError, ValidationError, RenderError) as exc:
                    self.logger.warning("Skipping page path=%s error=%s", path, exc)
                    errors.append(exc)
                    continue
                section = navigation.add(doc)
                self.logger.info(
                    "Adding page to section section=%r page=%r href=%s",
                    section.title,
                    doc.title,
                    doc.relative_path,
                )
                files.append(doc)
            else:
                try:
                    self._copy_static(path)
                except RenderError as exc:
                    self.logger.warning("Skipping file path=%s error=%s", path, exc)
                    errors.append(exc)

        return ScanResult(files=files, sections=navigation.sections, errors=errors)

    def create_doc_file(self, source_path: Path) -> DocFile:
        """Parse, validate and convert one Markdown source into a :class:`DocFile`.

        Raises
        ------
        ParseError
            If the file cannot be read or its frontmatter cannot be decoded.
        ValidationError
            If the frontmatter lacks a title or its explicit path leaves the
            output directory.
        RenderError
            If the Markdown body cannot be converted.
        """
        matter, body = parse_document(source_path)
        try:
            modified = source_path.stat().st_mtime
        except OSError as exc:
            msg = f"Could not stat file {source_path}: {exc}"
            raise ParseError(msg, path=source_path) from exc

        output_path = compute_output_path(
            source_path,
            self.source_dir,
            self.output_dir,
            matter,
            ordering=self.config.options.ordering,
        )
        if not output_path.resolve().is_relative_to(self.output_dir):
            msg = (
                f"The frontmatter is invalid in {source_path}: "
                f"path '{matter.path}' is outside the output directory"
            )
            raise ValidationError(msg, path=source_path)

        try:
            html = self.renderer.markdown(body)
        except Exception as exc:  # noqa: BLE001 - extensions raise arbitrary errors
            msg = f"Could not convert markdown to html in {source_path}: {exc}"
            raise RenderError(msg, path=source_path) from exc

        return DocFile(
            relative_path=route_for(output_path, self.output_dir),
            output_path=output_path,
            source_path=source_path,
            frontmatter=matter,
            rendered_html=html,
            modified_time=dt.datetime.fromtimestamp(modified, tz=dt.UTC),
        )

    def render_all(
        self, files: list[DocFile], sections: list[NavSection]
    ) -> list[Exception]:
        """Render every page concurrently, one worker per file.

        Returns
        -------
        list[Exception]
            Failures in file order; empty when every page was written.
        """
        self.state = BuildState.RENDERING
        if not files:
            return []
        self.logger.info("Writing html files count=%d", len(files))
        with ThreadPoolExecutor(
            max_workers=len(files), thread_name_prefix="docwright-render"
        ) as pool:
            futures = [
                pool.submit(self.render_file, files, sections, idx)
                for idx in range(len(files))
            ]
        errors: list[Exception] = []
        for future in futures:
            exc = future.exception()
            if exc is None:
                continue
            if not isinstance(exc, Exception):  # pragma: no cover - interpreter exit
                raise exc
            self.logger.warning("Render failed error=%s", exc)
            errors.append(exc)
        return errors

    def render_file(
        self, files: list[DocFile], sections: list[NavSection], index: int
    ) -> Path:
        """Render ``files[index]`` to its output path and return that path.

        Raises
        ------
        RenderError
            If the template fails or the output file cannot be written.
        """
        doc = files[index]
        prev_doc, next_doc = neighbours(files, index)
        self.logger.info(
            "Writing HTML file source=%s destination=%s",
            doc.source_path,
            doc.output_path,
        )
        context = {
            "site_name": self.config.name,
            "site_description": self.config.description,
            "title": doc.title,
            "description": doc.frontmatter.description or self.config.description,
            "canonical_url": f"{self.config.site_url}{doc.relative_path}",
            "base_path": self.config.base_path,
            "social": self.config.social.as_dict(),
            "nav_sections": sections,
            "path": doc.relative_path,
            "updated_at": doc.modified_time,
            "prev": NavPage(title=prev_doc.title, href=prev_doc.relative_path),
            "next": NavPage(title=next_doc.title, href=next_doc.relative_path),
            "pygments_css": self.renderer.stylesheet,
            "content": doc.rendered_html,
        }
        try:
            html = self.template.render(**context)
        except TemplateError as exc:
            msg = f"Could not execute template for {doc.output_path}: {exc}"
            raise RenderError(msg, path=doc.output_path) from exc

        try:
            doc.output_path.parent.mkdir(parents=True, exist_ok=True)
            doc.output_path.write_text(html, encoding="utf-8")
        except OSError as exc:
            msg = f"Could not create file {doc.output_path}: {exc}"
            raise RenderError(msg, path=doc.output_path) from exc
        return doc.output_path

    def rebuild_file(
        self,
        files: list[DocFile],
        sections: list[NavSection],
        changed_path: Path,
    ) -> RebuildOutcome:
        """Re-render only the page whose source is ``changed_path``.

        ``files`` and ``sections`` are updated in place, so callers sharing
        them across threads must hold their lock for the duration.

        Returns
        -------
        RebuildOutcome
            ``NOT_FOUND`` when ``changed_path`` is not a known page,
            ``NEEDS_FULL_BUILD`` when its route or section changed, otherwise
            ``REBUILT``.

        Raises
        ------
        ParseError, ValidationError, RenderError
            If the changed file can no longer be built.
        """
        candidates = {
            Path(os.path.abspath(changed_path)),  # noqa: PTH100
            changed_path.resolve(),
        }
        index = next(
            (idx for idx, doc in enumerate(files) if doc.source_path in candidates),
            None,
        )
        if index is None:
            return RebuildOutcome.NOT_FOUND

        current = files[index]
        updated = self.create_doc_file(current.source_path)
        if (
            updated.relative_path != current.relative_path
            or updated.section != current.section
        ):
            return RebuildOutcome.NEEDS_FULL_BUILD

        files[index] = updated
        rename_page(sections, updated.relative_path, updated.title)
        self.render_file(files, sections, index)
        self.logger.info("Rebuilt page path=%s", updated.output_path)
        return RebuildOutcome.REBUILT

    def write_sitemap(
        self, sections: list[NavSection], *, lastmod: dt.date | None = None
    ) -> Path:
        """Write ``sitemap.xml`` for ``sections`` into the output directory."""
        return write_sitemap(
            self.env, self.output_dir, self.config.site_url, sections, lastmod
        )

    def _walk(self) -> list[Path]:
        """Return every file below the source root, sorted by relative path."""
        if not self.source_dir.is_dir():
            msg = f"Could not walk src directory: {self.source_dir} is not a directory"
            raise WalkError(msg)

        def _raise(error: OSError) -> None:
            msg = f"Could not walk src directory: {error}"
            raise WalkError(msg) from error

        found: list[Path] = []
        for dirpath, _dirnames, filenames in os.walk(self.source_dir, onerror=_raise):
            base = Path(dirpath)
            found.extend(base / name for name in filenames)
        return sorted(
            found, key=lambda path: path.relative_to(self.source_dir).as_posix()
        )

    def _prepare_output(self) -> None:
        """Empty the output directory and copy in the bundled theme assets."""
        try:
            if self.output_dir.exists():
                shutil.rmtree(self.output_dir)
            self.output_dir.mkdir(parents=True, exist_ok=True)
            if self.assets_dir.is_dir():
                shutil.copytree(
                    self.assets_dir,
                    self.output_dir / ASSETS_DIRNAME,
                    dirs_exist_ok=True,
                )
        except OSError as exc:
            msg = f"Could not prepare output directory {self.output_dir}: {exc}"
            raise WalkError(msg) from exc

    def _copy_static(self, source_path: Path) -> Path:
        """Copy a non-Markdown file to its mirrored output location."""
        destination = mirror_path(source_path, self.source_dir, self.output_dir)
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source_path, destination)
        except OSError as exc:
            msg = f"Error copying file {source_path}: {exc}"
            raise RenderError(msg, path=destination) from exc
        return destination


__all__ = [
    "DEFAULT_ASSETS_DIR",
    "DEFAULT_TEMPLATES_DIR",
    "SiteBuilder",
    "create_environment",
    "format_long_date",
    "neighbours",
]

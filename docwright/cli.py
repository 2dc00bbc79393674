"""Cyclopts CLI entrypoint for building and serving docwright sites.

The ``docwright`` console script reads ``docwright.toml`` from the working
directory (creating a default one on first use), builds the Markdown tree it
points at into a static HTML site, serves that site locally, or runs a
development loop that rebuilds pages as their sources change.

Examples
--------
Build the site described by ``./docwright.toml``:

>>> from docwright.cli import main
>>> main(["build"])  # doctest: +SKIP

Serve another project's output with verbose logging:

>>> from docwright.cli import app
>>> app(["serve", "--cwd", "../handbook", "--verbose"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from pathlib import Path

from cyclopts import App, Parameter

from .config import SiteConfig, config_path, load_site_config
from .dev import DevSession
from .errors import ConfigError, ServerError, WalkError
from .generator import SiteBuilder
from .logs import configure_logging, log_path
from .server import run_server

if typ.TYPE_CHECKING:
    import logging

app = App(
    name="docwright",
    help="Generate simple documentation sites from Markdown.",
    version_flags=[],
)

Verbose = typ.Annotated[
    bool, Parameter(help="Echo diagnostic logs to stderr", negative=())
]
Cwd = typ.Annotated[
    Path | None,
    Parameter(help="Working directory holding docwright.toml (default: current)"),
]


def _package_version() -> str:
    """Return the installed distribution version, or ``dev`` from a checkout."""
    try:
        return distribution_version("docwright")
    except PackageNotFoundError:  # pragma: no cover - running from a checkout
        return "dev"


def _fail(message: str) -> typ.NoReturn:
    """Print ``message`` and exit with status 1."""
    print(message)
    raise SystemExit(1)


def _prepare(
    cwd: Path | None, *, verbose: bool
) -> tuple[Path, SiteConfig, logging.Logger]:
    """Resolve the working directory, configure logging and load the config."""
    root = (cwd or Path.cwd()).resolve()
    logger = configure_logging(verbose)
    logger.info("Starting docwright cwd=%s log=%s", root, log_path(logger))
    try:
        config = load_site_config(root)
    except ConfigError as exc:
        logger.error("Could not read or validate config error=%s", exc)  # noqa: TRY400
        _fail(f"Could not read or validate config: {exc}")
    return root, config, logger


@app.command(help="Print the version.")
def version() -> None:
    """Print the installed docwright version."""
    print(f"docwright {_package_version()}")


@app.command(help="Create a configuration file in the working directory.")
def init(*, verbose: Verbose = False, cwd: Cwd = None) -> None:
    """Write a default ``docwright.toml`` unless one already exists.

    Parameters
    ----------
    verbose : bool, optional
        Echo diagnostic logs to stderr.
    cwd : Path or None, optional
        Directory to initialize; defaults to the process working directory.
    """
    root, config, _logger = _prepare(cwd, verbose=verbose)
    print(
        f"A configuration has been generated at {config_path(root)}.\n\n"
        "You are now ready to build your documentation! Get started by "
        f"creating a markdown file in `./{config.build.source}/`."
    )


@app.command(help="Build the documentation using the configuration.")
def build(*, verbose: Verbose = False, cwd: Cwd = None) -> None:
    """Build every page, copy static files and write the sitemap.

    Parameters
    ----------
    verbose : bool, optional
        Echo diagnostic logs to stderr.
    cwd : Path or None, optional
        Directory holding ``docwright.toml``.

    Raises
    ------
    SystemExit
        With status 1 when the config is invalid, the source tree cannot be
        read, or any page failed to build.
    """
    root, config, logger = _prepare(cwd, verbose=verbose)
    print(f"Build docs in {config.build.source} to {config.build.output}")
    builder = SiteBuilder(config, root, logger=logger)
    try:
        result = builder.build()
    except WalkError as exc:
        _fail(f"Error building docs: {exc}")

    if not result.ok:
        for error in result.errors:
            print(f"Error building docs: {error}")
        _fail(f"{len(result.errors)} file(s) failed to build")
    print("Docs built successfully")


@app.command(help="Serve the built documentation.")
def serve(*, verbose: Verbose = False, cwd: Cwd = None) -> None:
    """Serve the output directory on the configured port until interrupted.

    Parameters
    ----------
    verbose : bool, optional
        Echo diagnostic logs to stderr.
    cwd : Path or None, optional
        Directory holding ``docwright.toml``.
    """
    root, config, logger = _prepare(cwd, verbose=verbose)
    output_dir = root / config.build.output
    print(
        f"Listening on http://localhost:{config.serve.port}{config.base_path} ..."
    )
    try:
        run_server(
            output_dir,
            config.serve.port,
            base_path=config.base_path,
            logger=logger,
        )
    except ServerError as exc:
        _fail(f"Error starting server: {exc}")
    except KeyboardInterrupt:
        print("Shutting down server...")


@app.command(help="Start a development server and rebuild on changes.")
def dev(*, verbose: Verbose = False, cwd: Cwd = None) -> None:
    """Build, serve and watch the source tree until interrupted.

    Parameters
    ----------
    verbose : bool, optional
        Echo diagnostic logs to stderr.
    cwd : Path or None, optional
        Directory holding ``docwright.toml``.
    """
    root, config, logger = _prepare(cwd, verbose=verbose)
    session = DevSession(config, root, logger=logger)
    try:
        session.run()
    except WalkError as exc:
        _fail(f"Error building docs: {exc}")
    except ServerError as exc:
        _fail(f"Error starting server: {exc}")


def main(tokens: list[str] | None = None) -> None:
    """Invoke the Cyclopts application that powers the `docwright` console command.

    Parameters
    ----------
    tokens : list[str] or None, optional
        Arguments to parse instead of ``sys.argv``.

    Examples
    --------
    >>> main(["version"])  # doctest: +SKIP
    """
    app(tokens)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()

"""Construct the logging handle shared by the build, dev and serve commands.

The CLI calls :func:`configure_logging` once per invocation and passes the
returned logger to :class:`~docwright.generator.SiteBuilder`,
:class:`~docwright.dev.DevSession` and the HTTP server. Every run writes to a
fresh ``docwright-*.log`` file; ``--verbose`` additionally echoes records to
stderr.

Examples
--------
>>> from docwright.logs import configure_logging
>>> logger = configure_logging(verbose=False)  # doctest: +SKIP
>>> logger.info("build started src=%s", "docs")  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import tempfile
import typing as typ

from ._constants import LOG_FILE_PREFIX, LOGGER_NAME

if typ.TYPE_CHECKING:
    from pathlib import Path

LOG_FORMAT = "time=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)s"


def configure_logging(
    verbose: bool = False,  # noqa: FBT001, FBT002 - mirrors the CLI flag
    *,
    log_dir: Path | None = None,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """Return a logger writing to a new temp log file and, optionally, stderr.

    Parameters
    ----------
    verbose : bool, optional
        Echo records to stderr as well as the log file.
    log_dir : Path, optional
        Directory for the log file; defaults to the system temp directory.
    name : str, optional
        Logger name; handlers already attached to it are replaced.

    Returns
    -------
    logging.Logger
        Configured logger at ``INFO`` level that does not propagate to root.
    """
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handle = tempfile.NamedTemporaryFile(  # noqa: SIM115 - owned by the handler
        prefix=LOG_FILE_PREFIX,
        suffix=".log",
        dir=log_dir,
        delete=False,
    )
    handle.close()

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = logging.FileHandler(handle.name, encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if verbose:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def log_path(logger: logging.Logger) -> str | None:
    """Return the file backing ``logger``'s first file handler, if any."""
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None


__all__ = ["LOG_FORMAT", "configure_logging", "log_path"]

"""Serve a built site over HTTP with docwright's route resolution.

Pages are published as ``.html`` files, but links and bookmarks use clean
routes: ``/guide/`` serves ``/guide/index.html`` and ``/guide/install``
serves ``/guide/install.html``. When the site URL carries a path
(``https://example.com/docs``) that prefix is stripped before resolution, so
the local server mirrors the deployed layout.

Examples
--------
>>> from docwright.server import resolve_request_path
>>> resolve_request_path("/docs/guide/install", "/docs")
'/guide/install.html'
>>> resolve_request_path("/docs/", "/docs")
'/index.html'
>>> resolve_request_path("/other", "/docs") is None
True
"""

from __future__ import annotations

import functools
import typing as typ
from http import HTTPStatus
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import quote, unquote, urlsplit

from docwright.errors import ServerError

if typ.TYPE_CHECKING:
    import logging
    from pathlib import Path


def resolve_request_path(request_path: str, base_path: str = "") -> str | None:
    """Map an incoming request path onto a file path below the output root.

    Parameters
    ----------
    request_path : str
        Raw request target, possibly with a query string.
    base_path : str, optional
        Prefix to strip, without a trailing slash.

    Returns
    -------
    str or None
        Slash-prefixed file path, or ``None`` when the request lies outside
        ``base_path``.
    """
    path = unquote(urlsplit(request_path).path)
    prefix = base_path.rstrip("/")
    if prefix:
        if path == prefix:
            path = ""
        elif path.startswith(f"{prefix}/"):
            path = path[len(prefix) :]
        else:
            return None

    if not path or path.endswith("/"):
        path = f"{path}index.html"
    elif "." not in path.rsplit("/", 1)[-1]:
        path = f"{path}.html"
    if not path.startswith("/"):
        path = f"/{path}"
    return path


class DocsRequestHandler(SimpleHTTPRequestHandler):
    """Static file handler that applies :func:`resolve_request_path`."""

    def __init__(
        self,
        *args: typ.Any,  # noqa: ANN401 - forwarded to the socketserver base
        base_path: str = "",
        logger: logging.Logger | None = None,
        **kwargs: typ.Any,  # noqa: ANN401
    ) -> None:
        self.base_path = base_path
        self.logger = logger
        super().__init__(*args, **kwargs)

    def send_head(self) -> typ.Any:  # noqa: ANN401 - mirrors the stdlib signature
        """Return 404 for requests outside the base path, else serve the file."""
        if resolve_request_path(self.path, self.base_path) is None:
            self.send_error(HTTPStatus.NOT_FOUND, "File not found")
            return None
        return super().send_head()

    def translate_path(self, path: str) -> str:
        """Resolve ``path`` against the output directory using docwright routes.

        The resolved path is already decoded, so it is quoted again before
        the base class decodes it.
        """
        resolved = resolve_request_path(path, self.base_path)
        if resolved is None:
            return super().translate_path(path)
        return super().translate_path(quote(resolved))

    def log_message(self, format: str, *args: typ.Any) -> None:  # noqa: A002, ANN401
        """Route request logs through the logging handle instead of stderr."""
        if self.logger is not None:
            self.logger.info(
                "Serving request client=%s %s", self.address_string(), format % args
            )


def create_server(
    output_dir: Path,
    port: int,
    *,
    base_path: str = "",
    logger: logging.Logger,
    host: str = "",
) -> ThreadingHTTPServer:
    """Bind a threading HTTP server serving ``output_dir``.

    Raises
    ------
    ServerError
        If the output directory is missing or the port cannot be bound.
    """
    if not output_dir.is_dir():
        msg = f"Output directory {output_dir} does not exist; run a build first."
        raise ServerError(msg)
    handler = functools.partial(
        DocsRequestHandler,
        directory=str(output_dir),
        base_path=base_path,
        logger=logger,
    )
    try:
        server = ThreadingHTTPServer((host, port), handler)
    except OSError as exc:
        msg = f"Could not listen on port {port}: {exc}"
        raise ServerError(msg) from exc
    logger.info(
        "Serving docs dir=%s port=%d base_path=%r", output_dir, port, base_path
    )
    return server


def run_server(
    output_dir: Path,
    port: int,
    *,
    base_path: str = "",
    logger: logging.Logger,
    host: str = "",
) -> None:
    """Serve ``output_dir`` until the process is interrupted."""
    server = create_server(
        output_dir, port, base_path=base_path, logger=logger, host=host
    )
    with server:
        server.serve_forever()


__all__ = [
    "DocsRequestHandler",
    "create_server",
    "resolve_request_path",
    "run_server",
]

"""Render ``sitemap.xml`` from the final navigation sections."""

from __future__ import annotations

import datetime as dt
import typing as typ

from docwright._constants import SITEMAP_FILENAME, SITEMAP_TEMPLATE

from .navigation import iter_pages

if typ.TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Environment

    from .models import NavSection


def sitemap_entries(
    site_url: str, sections: list[NavSection], lastmod: dt.date
) -> list[dict[str, str]]:
    """Return one ``loc``/``lastmod`` mapping per navigable page."""
    base = site_url.rstrip("/")
    stamp = lastmod.strftime("%Y-%m-%d")
    return [
        {"loc": f"{base}{page.href}", "lastmod": stamp}
        for page in iter_pages(sections)
    ]


def render_sitemap(
    env: Environment,
    site_url: str,
    sections: list[NavSection],
    lastmod: dt.date | None = None,
) -> str:
    """Return the sitemap XML listing every page in ``sections``.

    Parameters
    ----------
    env : Environment
        Jinja environment holding the ``sitemap.xml.jinja`` template.
    site_url : str
        Public site URL prefixed to every route; a trailing ``/`` is dropped.
    sections : list[NavSection]
        Navigation built for the site.
    lastmod : date, optional
        Date stamped on every entry; defaults to today.
    """
    stamp = lastmod or dt.datetime.now(dt.UTC).date()
    template = env.get_template(SITEMAP_TEMPLATE)
    return template.render(urls=sitemap_entries(site_url, sections, stamp))


def write_sitemap(
    env: Environment,
    output_dir: Path,
    site_url: str,
    sections: list[NavSection],
    lastmod: dt.date | None = None,
) -> Path:
    """Write ``sitemap.xml`` into ``output_dir`` and return its path."""
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / SITEMAP_FILENAME
    path.write_text(
        render_sitemap(env, site_url, sections, lastmod), encoding="utf-8"
    )
    return path


__all__ = ["render_sitemap", "sitemap_entries", "write_sitemap"]

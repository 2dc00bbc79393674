r"""Split Markdown documents into frontmatter metadata and body text.

Every source page starts with a ``---`` delimited YAML block describing its
title, description, explicit output path and navigation section. This module
separates that block from the Markdown body and decodes it into a
:class:`Frontmatter` record. Parsing and validation are separate steps: a
document may parse with an empty title, but :func:`validate_frontmatter`
rejects it so the build can skip the file.

Example
-------
>>> from docwright.markdown_parser import split_frontmatter
>>> matter, body = split_frontmatter("---\ntitle: Intro\n---\n# Hello\n")
>>> matter.title
'Intro'
>>> body
'# Hello'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from frontmatter.default_handlers import YAMLHandler
from ruamel.yaml import YAML
from ruamel.yaml.constructor import DuplicateKeyError
from ruamel.yaml.error import YAMLError

from docwright.errors import ParseError, ValidationError

if typ.TYPE_CHECKING:
    from pathlib import Path

FRONTMATTER_KEYS = ("title", "description", "path", "section")


@dc.dataclass(slots=True, frozen=True)
class Frontmatter:
    """Metadata declared at the top of a source document.

    Attributes
    ----------
    title : str
        Page title; required, but only enforced by validation.
    description : str
        Optional page description.
    path : str
        Explicit output path relative to the output root; empty when the
        path is derived from the source location.
    section : str
        Navigation section name; the empty string is the ungrouped section.
    """

    title: str = ""
    description: str = ""
    path: str = ""
    section: str = ""


class RuamelYAMLHandler(YAMLHandler):
    """Frontmatter handler that decodes the block with ``ruamel.yaml``."""

    def load(self, fm: str, **kwargs: object) -> object:  # noqa: ARG002
        """Decode ``fm`` as YAML 1.2 using the safe loader."""
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        return loader.load(fm)


_HANDLER = RuamelYAMLHandler()


def _coerce(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def split_frontmatter(
    text: str, *, source: Path | None = None
) -> tuple[Frontmatter, str]:
    """Separate the leading metadata block of ``text`` from its body.

    Parameters
    ----------
    text : str
        Full document text.
    source : Path, optional
        File the text came from, attached to raised errors.

    Returns
    -------
    tuple[Frontmatter, str]
        Decoded metadata and the remaining Markdown body. A document without
        a metadata block yields an empty :class:`Frontmatter` and its full
        text as the body.

    Raises
    ------
    ParseError
        If the block is unterminated, is not valid YAML, or does not decode
        to a mapping.
    """
    content = text.lstrip("\ufeff")
    if not _HANDLER.detect(content):
        return Frontmatter(), content

    try:
        raw_block, body = _HANDLER.split(content)
    except ValueError as exc:
        msg = f"Could not parse frontmatter in {source or '<string>'}: unterminated block"
        raise ParseError(msg, path=source) from exc

    try:
        loaded = _HANDLER.load(raw_block)
    except (YAMLError, DuplicateKeyError) as exc:
        msg = f"Could not parse frontmatter in {source or '<string>'}: {exc}"
        raise ParseError(msg, path=source) from exc

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = f"Could not parse frontmatter in {source or '<string>'}: expected a mapping"
        raise ParseError(msg, path=source)

    matter = Frontmatter(**{key: _coerce(loaded.get(key)) for key in FRONTMATTER_KEYS})
    return matter, body.strip("\n")


def validate_frontmatter(matter: Frontmatter, *, source: Path | None = None) -> None:
    """Raise :class:`ValidationError` when required fields are missing."""
    if not matter.title:
        msg = f"The frontmatter is invalid in {source or '<string>'}: 'title' is required"
        raise ValidationError(msg, path=source)


def parse_document(path: Path) -> tuple[Frontmatter, str]:
    """Read, split and validate the document at ``path``.

    Raises
    ------
    ParseError
        If the file cannot be read or its metadata block cannot be decoded.
    ValidationError
        If the decoded metadata lacks a title.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Could not open file {path}: {exc}"
        raise ParseError(msg, path=path) from exc
    matter, body = split_frontmatter(text, source=path)
    validate_frontmatter(matter, source=path)
    return matter, body


__all__ = [
    "FRONTMATTER_KEYS",
    "Frontmatter",
    "RuamelYAMLHandler",
    "parse_document",
    "split_frontmatter",
    "validate_frontmatter",
]

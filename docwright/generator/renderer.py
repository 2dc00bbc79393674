"""Convert Markdown page bodies into HTML fragments.

Bodies are rendered with Python-Markdown plus the GitHub-flavoured extras
authors expect: pipe tables, ``~~strikethrough~~``, bare URL and email
autolinks and ``- [x]`` task lists. Code blocks are highlighted by Pygments
through ``codehilite``; every highlighted block is wrapped in
``<div class="codehilite" data-language="...">`` so the theme can label it.

Examples
--------
>>> from docwright.generator.renderer import HtmlContentRenderer
>>> html = HtmlContentRenderer().markdown("~~~rust\\nfn main() {}\\n~~~\\n")
>>> 'data-language="rust"' in html
True
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

# Fences nested in list items are indented; codehilite only sees fences that
# start in column zero.
INDENTED_FENCE_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
# ``rust,no_run`` style info strings keep only the language name.
FENCE_INFO_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]*),[^\r\n]*$", re.MULTILINE
)
UNLABELLED_LANGUAGE = "text"

MARKDOWN_EXTENSIONS: tuple[str, ...] = (
    "fenced_code",
    "codehilite",
    "tables",
    "sane_lists",
    "pymdownx.tilde",
    "pymdownx.tasklist",
    "pymdownx.magiclink",
)


class LanguageHtmlFormatter(HtmlFormatter):
    """HTML formatter that records the block language on its wrapper div.

    ``codehilite`` instantiates the formatter once per block and passes the
    resolved language as ``lang_str``: the fence's info string, or the
    lexer alias (``text``) for indented blocks and unlabelled fences.
    """

    def __init__(self, lang_str: str = "", **options: typ.Any) -> None:  # noqa: ANN401
        super().__init__(**options)
        self.language = lang_str or UNLABELLED_LANGUAGE

    def _wrap_div(
        self, inner: cabc.Iterator[tuple[int, str]]
    ) -> cabc.Iterator[tuple[int, str]]:
        chunks = super()._wrap_div(inner)
        kind, opening = next(chunks)
        label = escape(self.language, quote=True)
        yield kind, f'{opening.removesuffix(">")} data-language="{label}">'
        yield from chunks


def normalize_fences(text: str) -> str:
    """Dedent list-nested fences and drop extra fence info after a comma."""
    dedented = INDENTED_FENCE_PATTERN.sub(r"\1", text)
    return FENCE_INFO_PATTERN.sub(r"\1\2", dedented)


class HtmlContentRenderer:
    """Render page bodies with highlighting and GitHub-flavoured extras."""

    def __init__(
        self, pygments_style: str = "monokai", link_extension: Extension | None = None
    ) -> None:
        """Initialize a renderer with optional pygments style and link extension.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for syntax highlighting. Defaults to
            ``"monokai"``.
        link_extension : Extension, optional
            Markdown extension used when rewriting links; pass ``None`` to skip
            link rewriting.
        """
        self.pygments_style = pygments_style
        self._link_extension = link_extension

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        formatter = HtmlFormatter(style=self.pygments_style, cssclass="codehilite")
        return formatter.get_style_defs(".codehilite")

    def markdown(self, text: str) -> str:
        """Render ``text`` into an HTML fragment.

        A fresh ``Markdown`` instance is built per call so one renderer can be
        shared between build worker threads.
        """
        source = normalize_fences(text)
        if not source.strip():
            return ""
        extensions: list[Extension | str] = list(MARKDOWN_EXTENSIONS)
        if self._link_extension:
            extensions.append(self._link_extension)
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "lang_prefix": "",
                    "pygments_style": self.pygments_style,
                    "pygments_formatter": LanguageHtmlFormatter,
                },
                "pymdownx.tasklist": {"custom_checkbox": False},
                "pymdownx.magiclink": {"hide_protocol": False},
            },
        )
        return md.convert(source)


__all__ = [
    "MARKDOWN_EXTENSIONS",
    "HtmlContentRenderer",
    "LanguageHtmlFormatter",
    "normalize_fences",
]

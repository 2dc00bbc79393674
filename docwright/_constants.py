"""Common literal values used across docwright.

These constants keep filenames and defaults centralized so the config loader,
the build pipeline, the dev loop and tests can import the same values without
drifting. Intended for internal use within the docwright package.

Examples
--------
>>> from docwright import _constants
>>> _constants.CONFIG_FILENAME
'docwright.toml'
>>> _constants.DEFAULT_PORT
7153
"""

CONFIG_FILENAME = "docwright.toml"
DEFAULT_PORT = 7153
DEFAULT_SOURCE_DIR = "docs"
DEFAULT_OUTPUT_DIR = "dist"
DEFAULT_DESCRIPTION = "A new docwright site"
SITEMAP_FILENAME = "sitemap.xml"
ASSETS_DIRNAME = "assets"
PAGE_TEMPLATE = "page.jinja"
SITEMAP_TEMPLATE = "sitemap.xml.jinja"
MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})
LOG_FILE_PREFIX = "docwright-"
LOGGER_NAME = "docwright"

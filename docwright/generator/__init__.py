"""Utilities for scanning, rendering, and navigating docwright sites."""

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
from .navigation import NavigationBuilder, build_navigation
from .page_generator import SiteBuilder, neighbours
from .paths import compute_output_path, route_for, strip_ordering_prefix
from .renderer import HtmlContentRenderer

__all__ = [
    "BuildResult",
    "BuildState",
    "DocFile",
    "HtmlContentRenderer",
    "NavPage",
    "NavSection",
    "NavigationBuilder",
    "RebuildOutcome",
    "RelativeLinkExtension",
    "ScanResult",
    "SiteBuilder",
    "build_navigation",
    "compute_output_path",
    "neighbours",
    "route_for",
    "strip_ordering_prefix",
]

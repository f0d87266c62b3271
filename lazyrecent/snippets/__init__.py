"""Public API surface for the snippet pipeline.

Places flow through deduplication, windowing, highlight remapping and
breadcrumb formatting; ``RecentLocationsModel`` caches the results per
category.
"""

from __future__ import annotations

from .breadcrumbs import (
    BREADCRUMB_MAX_LENGTH,
    BREADCRUMB_SEPARATOR,
    BreadcrumbResolver,
    breadcrumb_label,
    shorten_with_ellipsis,
)
from .dedup import dedupe_places, first_occurrences
from .highlighting import diagnostic_overlays, syntax_overlays, window_overlays
from .model import AnchorContractError, CellState, LazyCell, LocationSource, RecentLocationsModel
from .types import EMPTY_FILE_TEXT, HighlightOverlay, OverlayLayer, Snippet, SnippetView, SnippetWindow
from .window import DEFAULT_CONTEXT_LINES, build_window, lines_range, trimmed_range

__all__ = [
    "AnchorContractError",
    "BREADCRUMB_MAX_LENGTH",
    "BREADCRUMB_SEPARATOR",
    "BreadcrumbResolver",
    "CellState",
    "DEFAULT_CONTEXT_LINES",
    "EMPTY_FILE_TEXT",
    "HighlightOverlay",
    "LazyCell",
    "LocationSource",
    "OverlayLayer",
    "RecentLocationsModel",
    "Snippet",
    "SnippetView",
    "SnippetWindow",
    "breadcrumb_label",
    "build_window",
    "dedupe_places",
    "diagnostic_overlays",
    "first_occurrences",
    "lines_range",
    "shorten_with_ellipsis",
    "syntax_overlays",
    "trimmed_range",
    "window_overlays",
]

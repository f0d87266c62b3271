"""Remap syntax tokens and diagnostics into window-local overlays.

Only ranges that lie fully inside the window are kept. Tokens straddling the
window start are dropped rather than clipped, so a boundary token is never
shown partially.
"""

from __future__ import annotations

from pathlib import Path

from ..diagnostics import DiagnosticsProvider, Severity
from ..document import Document
from ..syntax import ColorScheme, Tokenizer
from .types import HighlightOverlay, OverlayLayer, SnippetWindow


def syntax_overlays(
    document: Document,
    path: Path,
    window: SnippetWindow,
    tokenizer: Tokenizer,
) -> list[HighlightOverlay]:
    start_offset = window.start_offset
    end_offset = window.end_offset
    prefix = document.text_range(0, end_offset)

    overlays: list[HighlightOverlay] = []
    for token in tokenizer.tokens(prefix, path, start_offset):
        if token.end > end_offset:
            break
        if token.start >= start_offset:
            overlays.append(
                HighlightOverlay(
                    token.start - start_offset,
                    token.end - start_offset,
                    OverlayLayer.BELOW_SYNTAX,
                    token.attributes,
                )
            )
    return overlays


def diagnostic_overlays(
    document: Document,
    window: SnippetWindow,
    diagnostics: DiagnosticsProvider,
    scheme: ColorScheme,
) -> list[HighlightOverlay]:
    start_offset = window.start_offset
    end_offset = window.end_offset

    overlays: list[HighlightOverlay] = []
    for diagnostic in diagnostics.query(document, start_offset, end_offset):
        if diagnostic.severity != Severity.INFORMATION:
            continue
        actual_start, actual_end = diagnostic.actual_range
        if actual_start < start_offset or actual_end > end_offset or actual_start > actual_end:
            continue
        overlays.append(
            HighlightOverlay(
                actual_start - start_offset,
                actual_end - start_offset,
                OverlayLayer.SYNTAX,
                scheme.attributes_for_key(diagnostic.key),
            )
        )
    return overlays


def window_overlays(
    document: Document,
    path: Path,
    window: SnippetWindow,
    tokenizer: Tokenizer,
    diagnostics: DiagnosticsProvider | None,
    scheme: ColorScheme,
) -> list[HighlightOverlay]:
    """Collect syntax then diagnostic overlays, in emission order."""
    if window.is_empty:
        return []
    overlays = syntax_overlays(document, path, window, tokenizer)
    if diagnostics is not None:
        overlays.extend(diagnostic_overlays(document, window, diagnostics, scheme))
    return overlays

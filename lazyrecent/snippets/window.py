"""Context windows around an anchor line.

A window spans up to ``2 * context + 1`` lines. When the anchor sits near
the start or end of the document, the budget unused on the clipped side is
donated to the other side. Blank lines at the window's edges are trimmed
afterwards, but the anchor line always survives.
"""

from __future__ import annotations

from ..document import Document
from .types import SnippetWindow

DEFAULT_CONTEXT_LINES = 2


def _check_context(context: int) -> None:
    if context < 0:
        raise ValueError(f"context must be >= 0, got {context}")


def anchor_line_range(document: Document, line: int) -> tuple[int, int]:
    return document.line_start_offset(line), document.line_end_offset(line)


def lines_range(document: Document, line: int, context: int = DEFAULT_CONTEXT_LINES) -> tuple[int, int]:
    """Return the untrimmed ``(start_offset, end_offset)`` window around ``line``."""
    _check_context(context)
    line_count = document.line_count
    if line_count == 0:
        return 0, 0

    before = min(context, line)
    after = min(context, line_count - line)

    lines_before = before + context - after
    lines_after = after + context - before

    start_line = max(line - lines_before, 0)
    end_line = min(line + lines_after, line_count - 1)

    start_offset = document.line_start_offset(start_line)
    end_offset = document.line_end_offset(end_line)
    if start_offset <= end_offset:
        return start_offset, end_offset
    return anchor_line_range(document, line)


def _count_blank_edge_lines(text: str) -> tuple[int, int]:
    """Return newline counts inside the leading and trailing whitespace."""
    stripped_leading = text.lstrip()
    leading = text[: len(text) - len(stripped_leading)]
    stripped_trailing = text.rstrip()
    trailing = text[len(stripped_trailing):]
    return leading.count("\n"), trailing.count("\n")


def trimmed_range(document: Document, line: int, context: int = DEFAULT_CONTEXT_LINES) -> tuple[int, int]:
    """Return the window offsets with blank edge lines removed."""
    start_offset, end_offset = lines_range(document, line, context)
    if document.line_count == 0:
        return start_offset, end_offset

    newlines_before, newlines_after = _count_blank_edge_lines(document.text_range(start_offset, end_offset))

    first_line = min(document.line_number(start_offset) + newlines_before, line)
    last_line = max(document.line_number(end_offset) - newlines_after, line)

    start_offset = document.line_start_offset(first_line)
    end_offset = document.line_end_offset(last_line)
    if start_offset > end_offset:
        return anchor_line_range(document, line)
    return start_offset, end_offset


def build_window(document: Document, line: int, context: int = DEFAULT_CONTEXT_LINES) -> SnippetWindow:
    start_offset, end_offset = trimmed_range(document, line, context)
    if document.line_count == 0:
        return SnippetWindow(0, 0, 0, 0, "")
    start_line = document.line_number(start_offset)
    end_line = document.line_number(end_offset) + 1
    return SnippetWindow(
        start_line=start_line,
        end_line=end_line,
        start_offset=start_offset,
        end_offset=end_offset,
        text=document.text_range(start_offset, end_offset),
    )

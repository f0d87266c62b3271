"""Shared snippet datatypes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from ..document import Document
from ..history import PlaceInfo
from ..syntax import TextAttributes

EMPTY_FILE_TEXT = "Empty file"


class OverlayLayer(IntEnum):
    """Paint order for overlays; higher layers win where ranges overlap."""

    BELOW_SYNTAX = 999
    SYNTAX = 1000


@dataclass(frozen=True)
class SnippetWindow:
    """Half-open line range ``[start_line, end_line)`` and its text."""

    start_line: int
    end_line: int
    start_offset: int
    end_offset: int
    text: str

    @property
    def is_empty(self) -> bool:
        return self.start_offset == self.end_offset

    @property
    def line_shift(self) -> int:
        return self.start_line

    @property
    def line_total(self) -> int:
        return self.end_line - self.start_line


@dataclass(frozen=True)
class HighlightOverlay:
    start: int
    end: int
    layer: OverlayLayer
    attributes: TextAttributes


class SnippetView:
    """Transient document holding a snippet's display text.

    Views are owned by the model that created them and released together.
    """

    def __init__(self, text: str, line_shift: int) -> None:
        self.document = Document(text)
        self.line_shift = line_shift
        self.released = False

    def display_line_number(self, index: int) -> int:
        """Map a 0-based view line to the 1-based line in the source file."""
        return index + self.line_shift + 1

    def release(self) -> None:
        if self.released:
            raise RuntimeError("snippet view released twice")
        self.released = True


@dataclass
class Snippet:
    place: PlaceInfo
    window: SnippetWindow
    view: SnippetView
    overlays: list[HighlightOverlay] = field(default_factory=list)

    @property
    def text(self) -> str:
        return self.view.document.text

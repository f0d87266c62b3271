"""In-memory documents with a line table, plus anchor resolution.

Documents normalize line separators on construction so every offset the
snippet pipeline computes refers to ``\\n``-separated text.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .history import PlaceInfo

logger = logging.getLogger(__name__)


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order.

    Attempts UTF-8, UTF-8 with BOM, then latin-1; as a final fallback decodes
    raw bytes with UTF-8 replacement semantics.
    """
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


class Document:
    """Immutable text with O(log n) offset-to-line lookup."""

    def __init__(self, text: str, path: Path | None = None) -> None:
        self.text = text.replace("\r\n", "\n").replace("\r", "\n")
        self.path = path
        self._line_starts = [0]
        for idx, ch in enumerate(self.text):
            if ch == "\n":
                self._line_starts.append(idx + 1)

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        if not self.text:
            return 0
        return len(self._line_starts)

    def line_start_offset(self, line: int) -> int:
        return self._line_starts[line]

    def line_end_offset(self, line: int) -> int:
        """Return the offset just before the line's newline (or text end)."""
        if line + 1 < len(self._line_starts):
            return self._line_starts[line + 1] - 1
        return len(self.text)

    def line_number(self, offset: int) -> int:
        if not 0 <= offset <= len(self.text):
            raise IndexError(f"offset {offset} outside document of length {len(self.text)}")
        return bisect_right(self._line_starts, offset) - 1

    def text_range(self, start: int, end: int) -> str:
        return self.text[start:end]


@dataclass(frozen=True)
class Anchor:
    """Resolved position of a place inside a document."""

    document: Document
    start: int
    end: int

    @property
    def is_zero_width(self) -> bool:
        return self.start == self.end


class AnchorResolver(Protocol):
    def resolve(self, place: PlaceInfo) -> Anchor | None:
        ...


class DocumentStore:
    """Load-once document cache keyed by resolved path."""

    def __init__(self) -> None:
        self._documents: dict[Path, Document | None] = {}

    def put(self, path: Path, text: str) -> Document:
        key = path.resolve()
        document = Document(text, key)
        self._documents[key] = document
        return document

    def get(self, path: Path) -> Document | None:
        key = path.resolve()
        if key in self._documents:
            return self._documents[key]
        try:
            document: Document | None = Document(read_text(key), key)
        except OSError as exc:
            logger.debug("cannot load %s: %s", key, exc)
            document = None
        self._documents[key] = document
        return document


class DocumentAnchorResolver:
    """Resolve places to zero-width anchors against a ``DocumentStore``."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def resolve(self, place: PlaceInfo) -> Anchor | None:
        document = self.store.get(place.path)
        if document is None:
            return None
        if not 0 <= place.offset <= len(document):
            return None
        return Anchor(document, place.offset, place.offset)

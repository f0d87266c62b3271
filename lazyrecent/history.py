"""Location history primitives: recorded places and their equivalence.

This module intentionally has no rendering concerns.
It provides the normalized place records consumed by the snippet pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

MAX_PLACE_HISTORY = 256


@dataclass(frozen=True)
class PlaceInfo:
    """One recorded caret position inside a file."""

    path: Path
    offset: int = 0

    def normalized(self) -> PlaceInfo:
        """Return a resolved, non-negative variant safe for history storage."""
        try:
            resolved = self.path.resolve()
        except Exception:
            resolved = self.path
        return PlaceInfo(path=resolved, offset=max(0, self.offset))

    @property
    def file_name(self) -> str:
        return self.path.name


def is_same_place(first: PlaceInfo, second: PlaceInfo) -> bool:
    """Return whether two places point at the same file and offset."""
    return first.path == second.path and first.offset == second.offset


class PlaceHistory:
    """Bounded navigation and change histories, oldest entry first.

    Adjacent duplicate places are suppressed; non-adjacent repeats are kept
    and left for the snippet pipeline to collapse.
    """

    def __init__(self, max_entries: int = MAX_PLACE_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self.back_places: list[PlaceInfo] = []
        self.change_places: list[PlaceInfo] = []

    def _append_unique(self, places: list[PlaceInfo], place: PlaceInfo) -> None:
        place = place.normalized()
        if places and is_same_place(places[-1], place):
            return
        places.append(place)
        overflow = len(places) - self.max_entries
        if overflow > 0:
            del places[:overflow]

    def record_navigation(self, place: PlaceInfo) -> None:
        self._append_unique(self.back_places, place)

    def record_change(self, place: PlaceInfo) -> None:
        self._append_unique(self.change_places, place)

    def places(self, changed: bool) -> list[PlaceInfo]:
        """Return a copy of one category, oldest first."""
        return list(self.change_places if changed else self.back_places)

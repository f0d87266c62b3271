"""First-occurrence filtering over an opaque equivalence predicate."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from ..history import PlaceInfo, is_same_place

T = TypeVar("T")


def first_occurrences(items: Iterable[T], same: Callable[[T, T], bool]) -> list[T]:
    """Keep the first item of each equivalence class, preserving order.

    Each candidate is compared against every item kept so far; history lists
    are short, so the quadratic scan is acceptable.
    """
    kept: list[T] = []
    for item in items:
        if not any(same(item, existing) for existing in kept):
            kept.append(item)
    return kept


def dedupe_places(places: Iterable[PlaceInfo]) -> list[PlaceInfo]:
    return first_occurrences(places, is_same_place)

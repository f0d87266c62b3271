"""Diagnostic records and a simple in-memory provider."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Protocol

from .document import Document


class Severity(IntEnum):
    INFORMATION = 10
    WEAK_WARNING = 200
    WARNING = 300
    ERROR = 400

    @classmethod
    def parse(cls, name: str) -> Severity:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown severity: {name!r}") from None


@dataclass(frozen=True)
class Diagnostic:
    """One analysis result over a document range.

    ``start``/``end`` is the range the diagnostic was reported for;
    ``actual_start``/``actual_end`` is the range it paints, which may differ
    (for example a whole-line highlight). Both default to the same range.
    """

    start: int
    end: int
    severity: Severity
    key: str | None = None
    actual_start: int | None = None
    actual_end: int | None = None

    @property
    def actual_range(self) -> tuple[int, int]:
        start = self.start if self.actual_start is None else self.actual_start
        end = self.end if self.actual_end is None else self.actual_end
        return start, end


class DiagnosticsProvider(Protocol):
    def query(self, document: Document, start: int, end: int) -> Iterable[Diagnostic]:
        ...


class DiagnosticsStore:
    """Diagnostics keyed by document path; queries return intersecting records."""

    def __init__(self) -> None:
        self._by_path: dict[Path, list[Diagnostic]] = {}

    def add(self, path: Path, diagnostic: Diagnostic) -> None:
        self._by_path.setdefault(path.resolve(), []).append(diagnostic)

    def query(self, document: Document, start: int, end: int) -> list[Diagnostic]:
        if document.path is None:
            return []
        return [
            diagnostic
            for diagnostic in self._by_path.get(document.path, [])
            if diagnostic.start <= end and diagnostic.end >= start
        ]

"""Compute-once snippet views over the navigation and change histories.

Each category is computed on first access from the history as it is at that
moment and never recomputed. Breadcrumb maps are derived lazily from the
cached snippets, so they can be deferred independently.

The model is meant for a single owner (for example a UI event loop); it does
no locking. ``LazyCell`` only protects against re-entrant computation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from typing import Generic, Protocol, TypeVar

from ..diagnostics import DiagnosticsProvider
from ..document import AnchorResolver
from ..history import PlaceInfo
from ..syntax import ColorScheme, Tokenizer
from .breadcrumbs import BreadcrumbResolver, breadcrumb_label
from .dedup import dedupe_places
from .highlighting import window_overlays
from .types import EMPTY_FILE_TEXT, Snippet, SnippetView
from .window import DEFAULT_CONTEXT_LINES, build_window

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AnchorContractError(AssertionError):
    """An anchor resolver returned a range where a position was required."""


class LocationSource(Protocol):
    def places(self, changed: bool) -> list[PlaceInfo]:
        ...


class CellState(Enum):
    UNINITIALIZED = "uninitialized"
    COMPUTING = "computing"
    COMPUTED = "computed"


class LazyCell(Generic[T]):
    """Value computed at most once, on first ``get``."""

    def __init__(self, compute: Callable[[], T]) -> None:
        self._compute = compute
        self._value: T | None = None
        self.state = CellState.UNINITIALIZED

    def get(self) -> T:
        if self.state is CellState.COMPUTED:
            return self._value  # type: ignore[return-value]
        if self.state is CellState.COMPUTING:
            raise RuntimeError("re-entrant access while value is being computed")

        self.state = CellState.COMPUTING
        try:
            value = self._compute()
        except BaseException:
            self.state = CellState.UNINITIALIZED
            raise
        self._value = value
        self.state = CellState.COMPUTED
        return value


class RecentLocationsModel:
    def __init__(
        self,
        source: LocationSource,
        resolver: AnchorResolver,
        tokenizer: Tokenizer,
        scheme: ColorScheme,
        diagnostics: DiagnosticsProvider | None = None,
        breadcrumb_resolver: BreadcrumbResolver | None = None,
        context_lines: int = DEFAULT_CONTEXT_LINES,
        view_factory: Callable[[str, int], SnippetView] = SnippetView,
    ) -> None:
        if context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {context_lines}")
        self.source = source
        self.resolver = resolver
        self.tokenizer = tokenizer
        self.scheme = scheme
        self.diagnostics = diagnostics
        self.breadcrumb_resolver = breadcrumb_resolver
        self.context_lines = context_lines
        self.view_factory = view_factory

        self.views_to_release: list[SnippetView] = []
        self.disposed = False
        self._snippets = {
            changed: LazyCell(lambda changed=changed: self._calculate_snippets(changed))
            for changed in (False, True)
        }
        self._breadcrumbs = {
            changed: LazyCell(lambda changed=changed: self._collect_breadcrumbs(changed))
            for changed in (False, True)
        }

    def snippets(self, changed: bool) -> list[Snippet]:
        return self._snippets[bool(changed)].get()

    def breadcrumbs(self, changed: bool) -> dict[PlaceInfo, str]:
        return self._breadcrumbs[bool(changed)].get()

    def dispose(self) -> None:
        """Release every view this model created. Later calls do nothing."""
        if self.disposed:
            return
        self.disposed = True
        views, self.views_to_release = self.views_to_release, []
        for view in views:
            view.release()

    def _calculate_snippets(self, changed: bool) -> list[Snippet]:
        if self.disposed:
            raise RuntimeError("model already disposed")

        places = dedupe_places(reversed(self.source.places(changed)))
        built: list[Snippet] = []
        try:
            for place in places:
                snippet = self._build_snippet(place)
                if snippet is not None:
                    built.append(snippet)
        except BaseException:
            for snippet in built:
                snippet.view.release()
            raise

        self.views_to_release.extend(snippet.view for snippet in built)
        logger.debug(
            "built %d snippets from %d %s places",
            len(built),
            len(places),
            "changed" if changed else "navigation",
        )
        return built

    def _build_snippet(self, place: PlaceInfo) -> Snippet | None:
        anchor = self.resolver.resolve(place)
        if anchor is None:
            logger.debug("skipping %s:%d, anchor does not resolve", place.path, place.offset)
            return None
        if not anchor.is_zero_width:
            raise AnchorContractError(
                f"expected a zero-width anchor for {place.path}:{place.offset}, "
                f"got [{anchor.start}, {anchor.end})"
            )

        document = anchor.document
        line = document.line_number(anchor.start) if document.line_count else 0
        window = build_window(document, line, self.context_lines)
        overlays = window_overlays(
            document,
            document.path or place.path,
            window,
            self.tokenizer,
            self.diagnostics,
            self.scheme,
        )
        text = EMPTY_FILE_TEXT if window.is_empty else window.text
        view = self.view_factory(text, window.line_shift)
        return Snippet(place=place, window=window, view=view, overlays=overlays)

    def _collect_breadcrumbs(self, changed: bool) -> dict[PlaceInfo, str]:
        labels: dict[PlaceInfo, str] = {}
        for snippet in self.snippets(changed):
            labels[snippet.place] = self._breadcrumb_for(snippet.place)
        return labels

    def _breadcrumb_for(self, place: PlaceInfo) -> str:
        file_name = Path(place.path).name
        anchor = self.resolver.resolve(place)
        if anchor is None:
            return file_name
        return breadcrumb_label(file_name, anchor.document, anchor.start, self.breadcrumb_resolver)

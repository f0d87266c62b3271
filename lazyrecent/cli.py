"""Command-line front door for lazyrecent.

Loads a recorded history file, builds the snippet model for the selected
category and prints it with syntax highlighting.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import config
from .diagnostics import Diagnostic, DiagnosticsStore, Severity
from .document import DocumentAnchorResolver, DocumentStore
from .history import PlaceHistory, PlaceInfo
from .render import render_snippet_list
from .search import filter_snippets
from .snippets import RecentLocationsModel
from .symbols import SymbolBreadcrumbs
from .syntax import ColorScheme, PygmentsTokenizer

logger = logging.getLogger(__name__)


def _nonnegative_int(value: str) -> int:
    """argparse type for non-negative integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _entry_path(base: Path, raw: object) -> Path:
    if not isinstance(raw, str) or not raw:
        raise ValueError(f"path must be a non-empty string, got {raw!r}")
    path = Path(raw).expanduser()
    return path if path.is_absolute() else base / path


def _entry_int(entry: dict, key: str) -> int:
    value = entry.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def load_history_file(path: Path) -> tuple[PlaceHistory, DiagnosticsStore]:
    """Parse a history JSON file into places and diagnostics.

    Relative paths resolve against the history file's directory. Raises
    ``ValueError`` on malformed content.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")

    base = path.resolve().parent
    history = PlaceHistory()
    for key, record in (("navigation", history.record_navigation), ("changed", history.record_change)):
        entries = data.get(key, [])
        if not isinstance(entries, list):
            raise ValueError(f"{path}: {key} must be a list")
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValueError(f"{path}: {key} entries must be objects")
            record(PlaceInfo(_entry_path(base, entry.get("path")), _entry_int(entry, "offset")))

    diagnostics = DiagnosticsStore()
    entries = data.get("diagnostics", [])
    if not isinstance(entries, list):
        raise ValueError(f"{path}: diagnostics must be a list")
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"{path}: diagnostics entries must be objects")
        diagnostics.add(
            _entry_path(base, entry.get("path")),
            Diagnostic(
                start=_entry_int(entry, "start"),
                end=_entry_int(entry, "end"),
                severity=Severity.parse(str(entry.get("severity", "information"))),
                key=entry.get("key"),
            ),
        )
    return history, diagnostics


def build_model(
    history: PlaceHistory,
    diagnostics: DiagnosticsStore,
    style: str,
    context_lines: int,
) -> RecentLocationsModel:
    scheme = ColorScheme(style)
    return RecentLocationsModel(
        source=history,
        resolver=DocumentAnchorResolver(DocumentStore()),
        tokenizer=PygmentsTokenizer(scheme),
        scheme=scheme,
        diagnostics=diagnostics,
        breadcrumb_resolver=SymbolBreadcrumbs(),
        context_lines=context_lines,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print the recent-locations list.

    ``--changed``/``--navigation`` and ``--context`` are saved to config and
    reused by later invocations that omit them.
    """
    parser = argparse.ArgumentParser(
        description="Show context snippets for recently visited or changed code locations."
    )
    parser.add_argument("history", help="History JSON file with navigation/changed places.")
    category = parser.add_mutually_exclusive_group()
    category.add_argument("--changed", dest="changed", action="store_true", default=None,
                          help="Show recently changed locations.")
    category.add_argument("--navigation", dest="changed", action="store_false",
                          help="Show recently visited locations.")
    parser.set_defaults(changed=None)
    parser.add_argument("--context", type=_nonnegative_int, default=None,
                        help="Lines of context before and after each location.")
    parser.add_argument("--style", default=None, help="Pygments style name.")
    parser.add_argument("--filter", default="", help="Only show snippets matching this query.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging.")
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    history_path = Path(args.history)
    if not history_path.is_file():
        raise SystemExit(f"History file not found: {history_path}")
    try:
        history, diagnostics = load_history_file(history_path)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    if args.changed is None:
        changed = config.load_show_changed()
    else:
        changed = args.changed
        config.save_show_changed(changed)
    if args.context is None:
        context_lines = config.load_context_lines()
    else:
        context_lines = args.context
        config.save_context_lines(context_lines)
    style = args.style or config.load_style_name()

    model = build_model(history, diagnostics, style, context_lines)
    try:
        snippets = model.snippets(changed)
        breadcrumbs = model.breadcrumbs(changed)
        if args.filter:
            snippets = filter_snippets(args.filter, snippets, breadcrumbs)
        no_color = args.no_color or not sys.stdout.isatty()
        sys.stdout.write(render_snippet_list(snippets, breadcrumbs, changed, no_color=no_color))
    finally:
        model.dispose()

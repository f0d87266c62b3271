"""Terminal rendering for snippet lists.

Overlays are painted in layer order, so a diagnostic overlay replaces the
syntax color underneath it. Snippet text is sanitized after styling is
resolved so escaped control bytes never shift overlay offsets.
"""

from __future__ import annotations

import re

from .history import PlaceInfo
from .snippets import HighlightOverlay, Snippet
from .syntax import TextAttributes, sanitize_terminal_text

RESET = "\033[0m"
TITLE_NAVIGATION = "Recent Locations"
TITLE_CHANGED = "Recently Changed Locations"
EMPTY_LIST_TEXT = "No recent locations"
_HEX_COLOR_RE = re.compile(r"^[0-9a-fA-F]{6}$")
_GUTTER_SGR = "2;38;5;245"
_HEADER_SGR = "1"
_FILE_NAME_SGR = "2"


def title_for(changed: bool) -> str:
    return TITLE_CHANGED if changed else TITLE_NAVIGATION


def _rgb(color: str) -> str:
    return ";".join(str(int(color[idx : idx + 2], 16)) for idx in (0, 2, 4))


def attributes_sgr(attributes: TextAttributes) -> str:
    """Return SGR parameters (without ``ESC[``/``m``) for ``attributes``."""
    params: list[str] = []
    if attributes.bold:
        params.append("1")
    if attributes.italic:
        params.append("3")
    if attributes.underline:
        params.append("4")
    if attributes.color and _HEX_COLOR_RE.match(attributes.color):
        params.append(f"38;2;{_rgb(attributes.color)}")
    if attributes.bgcolor and _HEX_COLOR_RE.match(attributes.bgcolor):
        params.append(f"48;2;{_rgb(attributes.bgcolor)}")
    return ";".join(params)


def paint_attributes(length: int, overlays: list[HighlightOverlay]) -> list[TextAttributes | None]:
    """Resolve the winning attributes for every character of the text."""
    painted: list[TextAttributes | None] = [None] * length
    for overlay in sorted(overlays, key=lambda item: item.layer):
        start = max(0, overlay.start)
        end = min(length, overlay.end)
        for idx in range(start, end):
            painted[idx] = overlay.attributes
    return painted


def colorize_text(text: str, overlays: list[HighlightOverlay]) -> str:
    painted = paint_attributes(len(text), overlays)
    out: list[str] = []
    idx = 0
    while idx < len(text):
        if text[idx] == "\n":
            out.append("\n")
            idx += 1
            continue
        attributes = painted[idx]
        run_end = idx + 1
        while run_end < len(text) and painted[run_end] == attributes and text[run_end] != "\n":
            run_end += 1
        segment = sanitize_terminal_text(text[idx:run_end])
        sgr = attributes_sgr(attributes) if attributes is not None else ""
        out.append(f"\033[{sgr}m{segment}{RESET}" if sgr else segment)
        idx = run_end
    return "".join(out)


def render_snippet(snippet: Snippet, breadcrumb: str, no_color: bool = False) -> list[str]:
    """Render one snippet as a header row plus gutter-numbered code rows."""
    file_name = snippet.place.file_name
    lines = snippet.text.split("\n")
    if no_color:
        body = sanitize_terminal_text(snippet.text).split("\n")
        header = f"{breadcrumb}  {file_name}" if breadcrumb != file_name else breadcrumb
    else:
        body = colorize_text(snippet.text, snippet.overlays).split("\n")
        header = f"\033[{_HEADER_SGR}m{sanitize_terminal_text(breadcrumb)}{RESET}"
        if breadcrumb != file_name:
            header += f"  \033[{_FILE_NAME_SGR}m{sanitize_terminal_text(file_name)}{RESET}"

    if snippet.window.is_empty:
        return [header, f"  {body[0]}"]

    gutter_width = len(str(snippet.view.display_line_number(len(lines) - 1)))
    rows = [header]
    for index, row in enumerate(body):
        number = f"{snippet.view.display_line_number(index):>{gutter_width}}"
        gutter = number if no_color else f"\033[{_GUTTER_SGR}m{number}{RESET}"
        rows.append(f"{gutter} │ {row}")
    return rows


def render_snippet_list(
    snippets: list[Snippet],
    breadcrumbs: dict[PlaceInfo, str],
    changed: bool,
    no_color: bool = False,
) -> str:
    title = title_for(changed)
    out = [title if no_color else f"\033[1m{title}{RESET}", ""]
    if not snippets:
        out.append(EMPTY_LIST_TEXT)
    for snippet in snippets:
        label = breadcrumbs.get(snippet.place, snippet.place.file_name)
        out.extend(render_snippet(snippet, label, no_color=no_color))
        out.append("")
    return "\n".join(out).rstrip("\n") + "\n"

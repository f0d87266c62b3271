"""Tests for terminal rendering of snippet lists."""

from __future__ import annotations

import re
import unittest
from pathlib import Path

from lazyrecent.history import PlaceInfo
from lazyrecent.render import (
    EMPTY_LIST_TEXT,
    TITLE_CHANGED,
    TITLE_NAVIGATION,
    attributes_sgr,
    colorize_text,
    render_snippet_list,
)
from lazyrecent.snippets import EMPTY_FILE_TEXT, HighlightOverlay, OverlayLayer, Snippet, SnippetView, SnippetWindow
from lazyrecent.syntax import TextAttributes

ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RED = TextAttributes(color="ff0000")
BLUE_BOLD = TextAttributes(color="0000ff", bold=True)


def make_snippet(text: str, start_line: int = 0, overlays: list[HighlightOverlay] | None = None) -> Snippet:
    window = SnippetWindow(start_line, start_line + text.count("\n") + 1, 0, len(text), text)
    return Snippet(
        place=PlaceInfo(Path("/tmp/app.py"), 0),
        window=window,
        view=SnippetView(text, start_line),
        overlays=overlays or [],
    )


class ColorizeTests(unittest.TestCase):
    def test_attributes_sgr_uses_truecolor(self) -> None:
        self.assertEqual(attributes_sgr(BLUE_BOLD), "1;38;2;0;0;255")
        self.assertEqual(attributes_sgr(TextAttributes(color="ansired")), "")

    def test_higher_layer_wins_on_overlap(self) -> None:
        overlays = [
            HighlightOverlay(0, 6, OverlayLayer.SYNTAX, BLUE_BOLD),
            HighlightOverlay(0, 6, OverlayLayer.BELOW_SYNTAX, RED),
        ]
        rendered = colorize_text("abcdef", overlays)
        self.assertEqual(rendered, "\033[1;38;2;0;0;255mabcdef\033[0m")

    def test_plain_text_survives_colorizing(self) -> None:
        text = "x = 1\n    y = 2"
        overlays = [HighlightOverlay(0, 1, OverlayLayer.BELOW_SYNTAX, RED)]
        self.assertEqual(ANSI_RE.sub("", colorize_text(text, overlays)), text)

    def test_control_bytes_are_escaped(self) -> None:
        self.assertEqual(colorize_text("a\x07b", []), "a\\x07b")


class RenderListTests(unittest.TestCase):
    def test_plain_rendering_has_title_header_and_gutter(self) -> None:
        snippet = make_snippet("def run():\n    pass", start_line=8)
        output = render_snippet_list([snippet], {snippet.place: "run()"}, changed=False, no_color=True)
        self.assertEqual(
            output,
            f"{TITLE_NAVIGATION}\n\nrun()  app.py\n 9 │ def run():\n10 │     pass\n",
        )

    def test_breadcrumb_equal_to_file_name_is_not_repeated(self) -> None:
        snippet = make_snippet("x = 1")
        output = render_snippet_list([snippet], {}, changed=True, no_color=True)
        self.assertEqual(output, f"{TITLE_CHANGED}\n\napp.py\n1 │ x = 1\n")

    def test_empty_window_shows_placeholder_without_gutter(self) -> None:
        snippet = Snippet(
            place=PlaceInfo(Path("/tmp/app.py"), 0),
            window=SnippetWindow(0, 0, 0, 0, ""),
            view=SnippetView(EMPTY_FILE_TEXT, 0),
        )
        output = render_snippet_list([snippet], {}, changed=False, no_color=True)
        self.assertIn(f"  {EMPTY_FILE_TEXT}", output)
        self.assertNotIn("│", output)

    def test_empty_list_message(self) -> None:
        output = render_snippet_list([], {}, changed=False, no_color=True)
        self.assertEqual(output, f"{TITLE_NAVIGATION}\n\n{EMPTY_LIST_TEXT}\n")

    def test_color_rendering_strips_back_to_plain(self) -> None:
        overlays = [HighlightOverlay(0, 3, OverlayLayer.BELOW_SYNTAX, RED)]
        snippet = make_snippet("def run():", overlays=overlays)
        colored = render_snippet_list([snippet], {snippet.place: "run()"}, changed=False)
        plain = render_snippet_list([snippet], {snippet.place: "run()"}, changed=False, no_color=True)
        self.assertIn("\033[38;2;255;0;0mdef\033[0m", colored)
        self.assertEqual(ANSI_RE.sub("", colored), plain)


if __name__ == "__main__":
    unittest.main()

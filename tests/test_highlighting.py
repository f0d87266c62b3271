"""Tests for remapping syntax tokens and diagnostics into snippet overlays."""

from __future__ import annotations

import unittest
from pathlib import Path

from pygments.token import Token

from lazyrecent.diagnostics import Diagnostic, Severity
from lazyrecent.document import Document
from lazyrecent.snippets import (
    OverlayLayer,
    build_window,
    diagnostic_overlays,
    syntax_overlays,
    window_overlays,
)
from lazyrecent.syntax import ColorScheme, PygmentsTokenizer, SyntaxToken, TextAttributes

RED = TextAttributes(color="ff0000")


class FakeTokenizer:
    def __init__(self, tokens: list[tuple[int, int]]) -> None:
        self._tokens = tokens
        self.seen_text = ""

    def tokens(self, text: str, path: Path, start_offset: int = 0):
        self.seen_text = text
        for start, end in self._tokens:
            if end > start_offset:
                yield SyntaxToken(start, end, RED)


class FakeDiagnostics:
    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self._diagnostics = diagnostics

    def query(self, document: Document, start: int, end: int):
        return iter(self._diagnostics)


def numbered_document() -> Document:
    # Each line is 6 characters plus a newline.
    return Document("\n".join(f"line {idx}" for idx in range(10)), Path("/virtual/numbers.txt"))


class SyntaxOverlayTests(unittest.TestCase):
    def setUp(self) -> None:
        self.document = numbered_document()
        self.window = build_window(self.document, 5, 2)

    def test_window_offsets(self) -> None:
        self.assertEqual((self.window.start_offset, self.window.end_offset), (21, 55))

    def test_tokens_are_shifted_to_window_coordinates(self) -> None:
        tokenizer = FakeTokenizer([(21, 25), (26, 27), (28, 34)])
        overlays = syntax_overlays(self.document, Path("numbers.txt"), self.window, tokenizer)
        self.assertEqual([(item.start, item.end) for item in overlays], [(0, 4), (5, 6), (7, 13)])
        self.assertTrue(all(item.layer == OverlayLayer.BELOW_SYNTAX for item in overlays))
        self.assertTrue(all(item.attributes == RED for item in overlays))

    def test_token_straddling_window_start_is_elided(self) -> None:
        tokenizer = FakeTokenizer([(18, 24), (24, 27)])
        overlays = syntax_overlays(self.document, Path("numbers.txt"), self.window, tokenizer)
        self.assertEqual([(item.start, item.end) for item in overlays], [(3, 6)])

    def test_iteration_stops_at_first_token_past_window_end(self) -> None:
        tokenizer = FakeTokenizer([(50, 55), (55, 60), (56, 57)])
        overlays = syntax_overlays(self.document, Path("numbers.txt"), self.window, tokenizer)
        self.assertEqual([(item.start, item.end) for item in overlays], [(29, 34)])

    def test_tokenizer_sees_prefix_through_window_end(self) -> None:
        tokenizer = FakeTokenizer([])
        syntax_overlays(self.document, Path("numbers.txt"), self.window, tokenizer)
        self.assertEqual(tokenizer.seen_text, self.document.text[:55])

    def test_pygments_overlays_stay_inside_snippet_text(self) -> None:
        source = (
            '"""Module docstring\nspanning lines."""\n\n'
            "import os\n\n\n"
            "def compute(value):\n"
            "    # comment\n"
            "    return os.path.join(value, 'x')\n"
            "\n"
            "class Widget:\n"
            "    pass\n"
        )
        document = Document(source, Path("/virtual/mod.py"))
        tokenizer = PygmentsTokenizer(ColorScheme("monokai"))
        for line in range(document.line_count):
            window = build_window(document, line, 2)
            overlays = syntax_overlays(document, Path("mod.py"), window, tokenizer)
            with self.subTest(line=line):
                for overlay in overlays:
                    self.assertLessEqual(0, overlay.start)
                    self.assertLessEqual(overlay.start, overlay.end)
                    self.assertLessEqual(overlay.end, len(window.text))

    def test_pygments_keyword_gets_a_color(self) -> None:
        document = Document("def compute():\n    return 1\n", Path("/virtual/mod.py"))
        window = build_window(document, 0, 2)
        overlays = syntax_overlays(document, Path("mod.py"), window, PygmentsTokenizer(ColorScheme("monokai")))
        keyword = next(item for item in overlays if window.text[item.start : item.end] == "def")
        self.assertIsNotNone(keyword.attributes.color)


class DiagnosticOverlayTests(unittest.TestCase):
    def setUp(self) -> None:
        self.document = numbered_document()
        self.window = build_window(self.document, 5, 2)
        self.scheme = ColorScheme("monokai")

    def test_only_contained_information_diagnostics_are_kept(self) -> None:
        diagnostics = FakeDiagnostics(
            [
                Diagnostic(21, 25, Severity.INFORMATION, "UNUSED_SYMBOL"),
                Diagnostic(28, 30, Severity.WARNING, "UNUSED_SYMBOL"),
                Diagnostic(18, 25, Severity.INFORMATION, "UNUSED_SYMBOL"),
                Diagnostic(50, 60, Severity.INFORMATION, "UNUSED_SYMBOL"),
                Diagnostic(35, 41, Severity.INFORMATION, "DEPRECATED"),
            ]
        )
        overlays = diagnostic_overlays(self.document, self.window, diagnostics, self.scheme)
        self.assertEqual([(item.start, item.end) for item in overlays], [(0, 4), (14, 20)])
        self.assertTrue(all(item.layer == OverlayLayer.SYNTAX for item in overlays))
        self.assertEqual(overlays[0].attributes, self.scheme.attributes_for_token(Token.Comment))

    def test_actual_range_decides_containment_and_position(self) -> None:
        diagnostics = FakeDiagnostics(
            [
                Diagnostic(30, 31, Severity.INFORMATION, None, actual_start=28, actual_end=34),
                Diagnostic(30, 31, Severity.INFORMATION, None, actual_start=10, actual_end=34),
            ]
        )
        overlays = diagnostic_overlays(self.document, self.window, diagnostics, self.scheme)
        self.assertEqual([(item.start, item.end) for item in overlays], [(7, 13)])
        self.assertTrue(overlays[0].attributes.is_empty)

    def test_window_overlays_emit_syntax_before_diagnostics(self) -> None:
        tokenizer = FakeTokenizer([(21, 25)])
        diagnostics = FakeDiagnostics([Diagnostic(21, 25, Severity.INFORMATION, "TYPO")])
        overlays = window_overlays(
            self.document, Path("numbers.txt"), self.window, tokenizer, diagnostics, self.scheme
        )
        self.assertEqual([item.layer for item in overlays], [OverlayLayer.BELOW_SYNTAX, OverlayLayer.SYNTAX])

    def test_empty_window_gets_no_overlays(self) -> None:
        document = Document("", Path("/virtual/empty.py"))
        window = build_window(document, 0, 2)
        tokenizer = FakeTokenizer([(0, 0)])
        diagnostics = FakeDiagnostics([Diagnostic(0, 0, Severity.INFORMATION, None)])
        self.assertEqual(window_overlays(document, Path("empty.py"), window, tokenizer, diagnostics, self.scheme), [])


if __name__ == "__main__":
    unittest.main()

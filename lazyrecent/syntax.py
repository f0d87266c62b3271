"""Pygments-backed tokenization and color-scheme lookups.

Tokens carry resolved ``TextAttributes`` so the snippet pipeline never needs
to know about Pygments token types. Style names are validated once and cached;
unknown names fall back to ``monokai``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.token import Token, _TokenType
from pygments.util import ClassNotFound

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_VALID_STYLES: set[str] = set()
_INVALID_STYLES: set[str] = set()

# Diagnostic keys are painted with the color of a related token type.
DEFAULT_DIAGNOSTIC_KEYS: dict[str, _TokenType] = {
    "UNUSED_SYMBOL": Token.Comment,
    "DEPRECATED": Token.Generic.Deleted,
    "TYPO": Token.Generic.Error,
    "INFO_ATTRIBUTES": Token.Generic.Emph,
    "IDENTIFIER_UNDER_CARET": Token.Generic.Strong,
}


@dataclass(frozen=True)
class TextAttributes:
    """Presentation attributes for one highlighted range."""

    color: str | None = None
    bgcolor: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def is_empty(self) -> bool:
        return self == _EMPTY_ATTRIBUTES


_EMPTY_ATTRIBUTES = TextAttributes()


@dataclass(frozen=True)
class SyntaxToken:
    start: int
    end: int
    attributes: TextAttributes


class Tokenizer(Protocol):
    def tokens(self, text: str, path: Path, start_offset: int = 0) -> Iterator[SyntaxToken]:
        ...


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str) -> str:
    """Validate/canonicalize requested style name with cache-backed checks."""
    if style in _VALID_STYLES:
        return style
    if style in _INVALID_STYLES:
        return DEFAULT_STYLE

    try:
        get_style_by_name(style)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style, DEFAULT_STYLE)
        _INVALID_STYLES.add(style)
        return DEFAULT_STYLE
    _VALID_STYLES.add(style)
    return style


def _color(value: str) -> str | None:
    value = (value or "").lstrip("#")
    return value or None


class ColorScheme:
    """Resolve token types and diagnostic keys to ``TextAttributes``."""

    def __init__(
        self,
        style: str = DEFAULT_STYLE,
        diagnostic_keys: dict[str, _TokenType] | None = None,
    ) -> None:
        self.style_name = normalize_style(style)
        self._style = get_style_by_name(self.style_name)
        self._diagnostic_keys = dict(DEFAULT_DIAGNOSTIC_KEYS)
        if diagnostic_keys:
            self._diagnostic_keys.update(diagnostic_keys)
        self._cache: dict[_TokenType, TextAttributes] = {}

    def attributes_for_token(self, ttype: _TokenType) -> TextAttributes:
        cached = self._cache.get(ttype)
        if cached is not None:
            return cached

        lookup = ttype
        while lookup not in self._style and lookup.parent is not None:
            lookup = lookup.parent
        raw = self._style.style_for_token(lookup)
        attributes = TextAttributes(
            color=_color(raw.get("color")),
            bgcolor=_color(raw.get("bgcolor")),
            bold=bool(raw.get("bold")),
            italic=bool(raw.get("italic")),
            underline=bool(raw.get("underline")),
        )
        self._cache[ttype] = attributes
        return attributes

    def attributes_for_key(self, key: str | None) -> TextAttributes:
        if key is None:
            return _EMPTY_ATTRIBUTES
        ttype = self._diagnostic_keys.get(key)
        if ttype is None:
            return _EMPTY_ATTRIBUTES
        return self.attributes_for_token(ttype)


def lexer_for_path(path: Path, text: str):
    """Pick a Pygments lexer by file name, falling back to plain text."""
    try:
        return get_lexer_for_filename(path.name, text)
    except ClassNotFound:
        return TextLexer()


class PygmentsTokenizer:
    """Tokenize document text with Pygments, resolving styles eagerly."""

    def __init__(self, scheme: ColorScheme) -> None:
        self.scheme = scheme

    def tokens(self, text: str, path: Path, start_offset: int = 0) -> Iterator[SyntaxToken]:
        """Yield tokens in document order, starting at the one covering ``start_offset``.

        The whole ``text`` is lexed so stateful lexers see a coherent prefix.
        """
        lexer = lexer_for_path(path, text)
        for index, ttype, value in lexer.get_tokens_unprocessed(text):
            if not value:
                continue
            end = index + len(value)
            if end <= start_offset:
                continue
            yield SyntaxToken(index, end, self.scheme.attributes_for_token(ttype))

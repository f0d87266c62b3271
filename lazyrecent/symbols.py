"""Symbol extraction and enclosing-scope chains for breadcrumbs.

Uses Tree-sitter grammars from ``tree_sitter_language_pack`` when a parser
loads, and per-language regex patterns otherwise. Scope boundaries are
inferred from indentation, which holds for both brace and offside languages
as long as the code is conventionally formatted.
"""

from __future__ import annotations

import logging
import re
from collections import OrderedDict
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from .document import Document
from .symbols_config import (
    CLASS_NODE_TYPES,
    FALLBACK_PATTERNS_BY_LANGUAGE,
    FUNCTION_NODE_TYPES,
    GENERIC_FALLBACK_PATTERNS,
    IDENTIFIER_NODE_TYPES,
    LANGUAGE_BY_SUFFIX,
    SYMBOL_CACHE_MAX,
)

logger = logging.getLogger(__name__)

_SCOPE_CLOSERS = ("}", ")", "]")

_SYMBOL_CACHE: OrderedDict[tuple[str, int, int], tuple[SymbolEntry, ...]] = OrderedDict()


@dataclass(frozen=True)
class SymbolEntry:
    """Class or function declaration found in a document."""

    kind: str
    name: str
    line: int
    column: int

    @property
    def crumb(self) -> str:
        return f"{self.name}()" if self.kind == "fn" else self.name


def _normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def language_for_path(path: Path | None) -> str | None:
    if path is None:
        return None
    return LANGUAGE_BY_SUFFIX.get(path.suffix.lower())


@lru_cache(maxsize=32)
def _load_parser(language_name: str):
    """Return ``(parser, error_message)`` for a Tree-sitter grammar."""
    try:
        from tree_sitter_language_pack import get_parser

        return get_parser(language_name), None
    except Exception as exc:
        return None, f"Failed to load Tree-sitter parser for {language_name}: {exc}"


def _node_text(source_bytes: bytes, node) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _name_from_node(source_bytes: bytes, node) -> str:
    for field_name in ("name", "declarator", "type"):
        child = node.child_by_field_name(field_name)
        if child is None:
            continue
        nested = child.child_by_field_name("name")
        if nested is not None:
            return _normalize_whitespace(_node_text(source_bytes, nested))
        return _normalize_whitespace(_node_text(source_bytes, child))

    for child in node.named_children:
        if child.type in IDENTIFIER_NODE_TYPES:
            return _normalize_whitespace(_node_text(source_bytes, child))
    return ""


def _symbol_kind(node_type: str) -> str | None:
    if node_type in FUNCTION_NODE_TYPES:
        return "fn"
    if node_type in CLASS_NODE_TYPES:
        return "class"
    return None


def _sort_key(item: SymbolEntry) -> tuple[int, int, str, str]:
    return (item.line, item.column, item.kind, item.name.casefold())


def collect_symbols_fallback(source: str, language_name: str | None) -> list[SymbolEntry]:
    """Collect symbols via language-specific regex patterns."""
    patterns = FALLBACK_PATTERNS_BY_LANGUAGE.get(language_name or "", GENERIC_FALLBACK_PATTERNS)
    symbols: list[SymbolEntry] = []
    for line_idx, line in enumerate(source.splitlines()):
        for kind, pattern in patterns:
            match = pattern.match(line)
            if match is None:
                continue
            name = _normalize_whitespace(match.group("name"))
            if name:
                symbols.append(SymbolEntry(kind, name, line_idx, int(match.start("name"))))
            break
    symbols.sort(key=_sort_key)
    return symbols


def collect_symbols(source: str, language_name: str) -> list[SymbolEntry]:
    """Collect class/function symbols, preferring Tree-sitter over regexes."""
    parser, parser_error = _load_parser(language_name)
    if parser is None:
        logger.debug("%s; using regex symbols", parser_error)
        return collect_symbols_fallback(source, language_name)

    source_bytes = source.encode("utf-8", errors="replace")
    symbols: list[SymbolEntry] = []

    def walk(node) -> None:
        kind = _symbol_kind(node.type)
        if kind is not None:
            name = _name_from_node(source_bytes, node)
            if name:
                line, column = node.start_point
                symbols.append(SymbolEntry(kind, name, int(line), int(column)))
        for child in node.named_children:
            walk(child)

    try:
        walk(parser.parse(source_bytes).root_node)
    except Exception as exc:
        logger.debug("Tree-sitter parse failed for %s: %s", language_name, exc)
        return collect_symbols_fallback(source, language_name)
    symbols.sort(key=_sort_key)
    return symbols


def _collect_symbols_cached(document: Document, language_name: str) -> list[SymbolEntry]:
    cache_key = (language_name, len(document.text), hash(document.text))
    cached = _SYMBOL_CACHE.get(cache_key)
    if cached is not None:
        _SYMBOL_CACHE.move_to_end(cache_key)
        return list(cached)

    symbols = collect_symbols(document.text, language_name)
    _SYMBOL_CACHE[cache_key] = tuple(symbols)
    while len(_SYMBOL_CACHE) > SYMBOL_CACHE_MAX:
        _SYMBOL_CACHE.popitem(last=False)
    return symbols


def clear_symbol_cache() -> None:
    _SYMBOL_CACHE.clear()


def leading_indent_columns(text: str) -> int:
    """Return leading indentation width where tabs count as four columns."""
    count = 0
    for ch in text:
        if ch == " ":
            count += 1
        elif ch == "\t":
            count += 4
        else:
            break
    return count


def _closes_block(stripped: str) -> bool:
    return stripped.startswith(_SCOPE_CLOSERS) or stripped == "end"


def _blank_line_exits_scope(lines: list[str], line: int, header_indent: int) -> bool:
    """Decide a blank line by the next nonblank line after it."""
    for text in lines[line + 1 :]:
        stripped = text.strip()
        if not stripped:
            continue
        if _closes_block(stripped):
            return False
        return leading_indent_columns(text) <= header_indent
    return True


def symbol_scope_contains(lines: list[str], symbol: SymbolEntry, line: int) -> bool:
    """Return whether ``line`` still lies inside the scope opened by ``symbol``.

    The scope ends at the first later nonblank line indented at or below the
    header, not counting lines that only close a bracket or block. A blank
    line belongs to the scope only if the code after it does.
    """
    if line < symbol.line or not 0 <= symbol.line < len(lines):
        return False
    if line == symbol.line:
        return True

    header_indent = leading_indent_columns(lines[symbol.line])
    for candidate in range(symbol.line + 1, min(line, len(lines) - 1) + 1):
        text = lines[candidate]
        stripped = text.strip()
        if not stripped or _closes_block(stripped):
            continue
        if leading_indent_columns(text) <= header_indent:
            return False

    if line < len(lines) and not lines[line].strip():
        return not _blank_line_exits_scope(lines, line, header_indent)
    return True


def enclosing_symbol_chain(symbols: list[SymbolEntry], lines: list[str], line: int) -> list[SymbolEntry]:
    """Return the outermost-first chain of symbols whose scope holds ``line``."""
    stack: list[tuple[SymbolEntry, int]] = []
    for symbol in symbols:
        if symbol.line > line or symbol.kind not in {"class", "fn"}:
            continue
        if not symbol_scope_contains(lines, symbol, line):
            continue
        indent = leading_indent_columns(lines[symbol.line])
        while stack and indent <= stack[-1][1]:
            stack.pop()
        stack.append((symbol, indent))
    return [symbol for symbol, _indent in stack]


class SymbolBreadcrumbs:
    """Breadcrumb resolver backed by extracted class/function symbols."""

    def crumbs(self, document: Document, offset: int) -> list[str] | None:
        language_name = language_for_path(document.path)
        if language_name is None or document.line_count == 0:
            return None
        symbols = _collect_symbols_cached(document, language_name)
        if not symbols:
            return None
        line = document.line_number(offset)
        chain = enclosing_symbol_chain(symbols, document.text.split("\n"), line)
        return [symbol.crumb for symbol in chain]

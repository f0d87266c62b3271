"""Language/grammar configuration for breadcrumb symbol extraction."""

from __future__ import annotations

import re

LANGUAGE_BY_SUFFIX: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
    ".js": "javascript",
    ".mjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".kt": "kotlin",
    ".rb": "ruby",
}

FUNCTION_NODE_TYPES = {
    "function_definition",
    "function_declaration",
    "function_item",
    "method_definition",
    "method_declaration",
}
CLASS_NODE_TYPES = {
    "class_definition",
    "class_declaration",
    "struct_item",
    "impl_item",
    "trait_item",
}
IDENTIFIER_NODE_TYPES = {
    "identifier",
    "type_identifier",
    "property_identifier",
    "field_identifier",
}

SYMBOL_CACHE_MAX = 64

_JS_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("class", re.compile(r"^\s*(?:export\s+)?(?:default\s+)?class\s+(?P<name>[A-Za-z_$][\w$]*)")),
    ("fn", re.compile(r"^\s*(?:export\s+)?(?:async\s+)?function\s*\*?\s+(?P<name>[A-Za-z_$][\w$]*)")),
    (
        "fn",
        re.compile(
            r"^\s*(?:export\s+)?(?:const|let|var)\s+(?P<name>[A-Za-z_$][\w$]*)\s*=\s*(?:async\s*)?\([^)]*\)\s*=>"
        ),
    ),
)

FALLBACK_PATTERNS_BY_LANGUAGE: dict[str, tuple[tuple[str, re.Pattern[str]], ...]] = {
    "python": (
        ("class", re.compile(r"^\s*class\s+(?P<name>[A-Za-z_]\w*)")),
        ("fn", re.compile(r"^\s*(?:async\s+)?def\s+(?P<name>[A-Za-z_]\w*)")),
    ),
    "javascript": _JS_PATTERNS,
    "typescript": _JS_PATTERNS,
    "tsx": _JS_PATTERNS,
    "go": (
        ("class", re.compile(r"^\s*type\s+(?P<name>[A-Za-z_]\w*)\s+(?:struct|interface)\b")),
        ("fn", re.compile(r"^\s*func\s+(?:\([^)]*\)\s*)?(?P<name>[A-Za-z_]\w*)\s*\(")),
    ),
    "rust": (
        ("class", re.compile(r"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:struct|enum|trait)\s+(?P<name>[A-Za-z_]\w*)")),
        ("class", re.compile(r"^\s*impl(?:<[^>]*>)?\s+(?:[\w:]+\s+for\s+)?(?P<name>[A-Za-z_]\w*)")),
        ("fn", re.compile(r"^\s*(?:pub(?:\([^)]*\))?\s+)?(?:async\s+)?fn\s+(?P<name>[A-Za-z_]\w*)")),
    ),
    "java": (
        ("class", re.compile(r"^\s*(?:(?:public|private|protected|abstract|final|static)\s+)*(?:class|interface|enum)\s+(?P<name>[A-Za-z_]\w*)")),
        (
            "fn",
            re.compile(
                r"^\s*(?:(?:public|private|protected|abstract|final|static|synchronized)\s+)+[\w<>\[\],\s]+?\s+(?P<name>[A-Za-z_]\w*)\s*\("
            ),
        ),
    ),
    "kotlin": (
        ("class", re.compile(r"^\s*(?:(?:public|private|internal|open|data|sealed)\s+)*(?:class|object|interface)\s+(?P<name>[A-Za-z_]\w*)")),
        ("fn", re.compile(r"^\s*(?:(?:public|private|internal|open|override|suspend)\s+)*fun\s+(?P<name>[A-Za-z_]\w*)")),
    ),
    "ruby": (
        ("class", re.compile(r"^\s*(?:class|module)\s+(?P<name>[A-Za-z_][\w:]*)")),
        ("fn", re.compile(r"^\s*def\s+(?:self\.)?(?P<name>[A-Za-z_][\w!?=]*)")),
    ),
}

GENERIC_FALLBACK_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("class", re.compile(r"^\s*(?:export\s+)?class\s+(?P<name>[A-Za-z_][\w$]*)")),
    ("fn", re.compile(r"^\s*(?:async\s+)?def\s+(?P<name>[A-Za-z_]\w*)")),
    ("fn", re.compile(r"^\s*(?:export\s+)?(?:async\s+)?function\s+(?P<name>[A-Za-z_$][\w$]*)")),
)

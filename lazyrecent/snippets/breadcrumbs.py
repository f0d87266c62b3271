"""Breadcrumb labels: enclosing scope names joined into one short string."""

from __future__ import annotations

from typing import Protocol

from ..document import Document

BREADCRUMB_SEPARATOR = " > "
BREADCRUMB_MAX_LENGTH = 50
ELLIPSIS = "..."


class BreadcrumbResolver(Protocol):
    def crumbs(self, document: Document, offset: int) -> list[str] | None:
        ...


def shorten_with_ellipsis(text: str, max_length: int = BREADCRUMB_MAX_LENGTH) -> str:
    """Cut ``text`` to ``max_length`` characters, ending in an ellipsis."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def breadcrumb_label(
    file_name: str,
    document: Document,
    offset: int,
    resolver: BreadcrumbResolver | None,
) -> str:
    if resolver is None:
        return file_name
    crumbs = resolver.crumbs(document, offset)
    if not crumbs:
        return file_name
    return shorten_with_ellipsis(BREADCRUMB_SEPARATOR.join(crumbs))

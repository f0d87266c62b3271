"""Speed-search filtering over built snippets."""

from __future__ import annotations

from .history import PlaceInfo
from .snippets import Snippet


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score an in-order subsequence match; ``None`` when ``query`` does not match."""
    if not query:
        return 0
    query_folded = query.casefold()
    candidate_folded = candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            run = 0
            score -= min(40, (idx - prev_idx - 1) * 2)
        if idx == 0 or candidate_folded[idx - 1] in "/_- .>":
            score += 35
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return score


def snippet_search_text(snippet: Snippet, breadcrumbs: dict[PlaceInfo, str]) -> str:
    """Text a snippet is matched against: breadcrumb, file name, then code."""
    breadcrumb = breadcrumbs.get(snippet.place, "")
    return f"{breadcrumb} {snippet.place.file_name} {snippet.text}"


def snippet_matches(query: str, snippet: Snippet, breadcrumbs: dict[PlaceInfo, str]) -> bool:
    words = query.split()
    if not words:
        return True
    haystack = snippet_search_text(snippet, breadcrumbs).casefold()
    if all(word.casefold() in haystack for word in words):
        return True
    label = f"{breadcrumbs.get(snippet.place, '')} {snippet.place.file_name}"
    return fuzzy_score("".join(words), label) is not None


def filter_snippets(query: str, snippets: list[Snippet], breadcrumbs: dict[PlaceInfo, str]) -> list[Snippet]:
    """Keep matching snippets in their original (most recent first) order."""
    return [snippet for snippet in snippets if snippet_matches(query, snippet, breadcrumbs)]

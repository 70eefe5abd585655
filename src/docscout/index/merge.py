"""Blend fuzzy and exact/partial hits into one ranked list."""

from __future__ import annotations

from typing import Dict, Iterable, List

from docscout.index.excerpt import extract_excerpt
from docscout.index.fuzzy import FuzzyHit
from docscout.models import SearchResult

FUZZY_SCALE = 10.0
EXACT_WEIGHT = 0.7
FUZZY_WEIGHT = 0.3


def fuzzy_score(distance: float) -> float:
    return (1.0 - distance) * FUZZY_SCALE


def merge_results(
    fuzzy_hits: Iterable[FuzzyHit],
    exact_hits: Iterable[SearchResult],
    query: str,
    *,
    excerpt_chars: int = 200,
) -> List[SearchResult]:
    """Merge hits keyed by path, best first.

    Exact/partial scores are never lowered by a fuzzy agreement, only raised.
    Equal scores keep insertion order: exact hits first, then fuzzy-only ones.
    """
    merged: Dict[str, SearchResult] = {}
    for result in exact_hits:
        merged.setdefault(result.path, result)

    for hit in fuzzy_hits:
        score = fuzzy_score(hit.distance)
        existing = merged.get(hit.document.path)
        if existing is not None:
            existing.score = max(existing.score, existing.score * EXACT_WEIGHT + score * FUZZY_WEIGHT)
            continue
        merged[hit.document.path] = SearchResult.from_document(
            hit.document,
            excerpt=extract_excerpt(hit.document.content, query, excerpt_chars),
            score=score,
        )

    # sorted() is stable, so ties stay in insertion order
    return sorted(merged.values(), key=lambda result: result.score, reverse=True)

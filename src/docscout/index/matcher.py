"""Literal and per-word scoring of documents against a query."""

from __future__ import annotations

from typing import Iterable, List

from docscout.index.excerpt import extract_excerpt
from docscout.models import IndexedDocument, SearchResult
from docscout.utils.text import code_blocks, count_occurrences, query_words

TITLE_EXACT = 20
TITLE_CONTAINS = 15
TITLE_WORD = 5
BODY_PHRASE = 3
BODY_PHRASE_CAP = 15
BODY_WORD_CAP = 3
CODE_PHRASE = 4
CODE_WORD = 2


def score_document(query: str, document: IndexedDocument) -> int:
    """Additive, case-insensitive relevance of one document. A blank query scores 0."""
    query_lower = query.strip().lower()
    if not query_lower:
        return 0
    words = query_words(query)
    title = document.title.lower()
    body = document.content.lower()
    score = 0

    if title == query_lower:
        score += TITLE_EXACT
    elif query_lower in title:
        score += TITLE_CONTAINS

    score += sum(TITLE_WORD for word in words if word in title)

    score += min(count_occurrences(body, query_lower) * BODY_PHRASE, BODY_PHRASE_CAP)
    score += sum(min(count_occurrences(body, word), BODY_WORD_CAP) for word in words)

    for block in code_blocks(document.content):
        block_lower = block.lower()
        if query_lower in block_lower:
            score += CODE_PHRASE
        else:
            score += sum(CODE_WORD for word in words if word in block_lower)

    return score


def score_documents(
    query: str,
    documents: Iterable[IndexedDocument],
    *,
    excerpt_chars: int = 200,
) -> List[SearchResult]:
    """Score every document, keeping those with a positive score in input order."""
    results: List[SearchResult] = []
    for document in documents:
        score = score_document(query, document)
        if score > 0:
            results.append(
                SearchResult.from_document(
                    document,
                    excerpt=extract_excerpt(document.content, query, excerpt_chars),
                    score=float(score),
                )
            )
    return results

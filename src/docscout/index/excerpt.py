"""Sentence-aligned excerpts with highlighted query terms."""

from __future__ import annotations

from docscout.utils.text import highlight, query_words, strip_code_blocks

CONTEXT_CHARS = 100
SENTENCE_SLACK = 50
ELLIPSIS = "..."


def _find_match(content_lower: str, query_lower: str, words: list[str]) -> tuple[int, int]:
    """Return (index, length) of the best anchor, or (-1, 0) when nothing matches."""
    if query_lower:
        index = content_lower.find(query_lower)
        if index != -1:
            return index, len(query_lower)
    for word in words:
        index = content_lower.find(word)
        if index != -1:
            return index, len(query_lower)
    return -1, 0


def extract_excerpt(content: str, query: str, max_length: int = 200) -> str:
    query_lower = query.strip().lower()
    words = query_words(query)
    index, length = _find_match(content.lower(), query_lower, words)

    if index == -1:
        return strip_code_blocks(content).strip()[:max_length] + ELLIPSIS

    start = max(0, index - CONTEXT_CHARS)
    end = min(len(content), index + length + CONTEXT_CHARS)

    # Snap to the sentence terminators just outside the window
    sentence_start = content.rfind(".", 0, start + 1)
    if sentence_start != -1 and sentence_start > start - SENTENCE_SLACK:
        start = sentence_start + 1

    sentence_end = content.find(".", end)
    if sentence_end != -1 and sentence_end < end + SENTENCE_SLACK:
        end = sentence_end + 1

    excerpt = highlight(content[start:end].strip(), [query_lower, *words])

    if start > 0:
        excerpt = ELLIPSIS + excerpt
    if end < len(content):
        excerpt = excerpt + ELLIPSIS
    return excerpt

"""Text helpers shared by the matchers and the excerpt extractor."""

from __future__ import annotations

import re
from typing import Iterable, List

CODE_BLOCK_RE = re.compile(r"```[\s\S]*?```")

MIN_WORD_LENGTH = 2


def query_words(query: str) -> List[str]:
    """Lower-cased whitespace tokens of a query, dropping single characters."""
    return [word for word in query.lower().split() if len(word) >= MIN_WORD_LENGTH]


def count_occurrences(text: str, needle: str) -> int:
    """Count non-overlapping literal occurrences of ``needle`` in ``text``."""
    if not needle:
        return 0
    return text.count(needle)


def code_blocks(text: str) -> List[str]:
    """Return the fenced code blocks of a Markdown body, fences included."""
    return CODE_BLOCK_RE.findall(text)


def strip_code_blocks(text: str) -> str:
    return CODE_BLOCK_RE.sub("", text)


def highlight(text: str, terms: Iterable[str], marker: str = "**") -> str:
    """Wrap every case-insensitive occurrence of any term in ``marker``.

    Longer terms win over their own substrings and each span is wrapped once.
    """
    unique = sorted({term for term in terms if term}, key=len, reverse=True)
    if not unique:
        return text
    pattern = re.compile("|".join(re.escape(term) for term in unique), re.IGNORECASE)
    return pattern.sub(lambda match: f"{marker}{match.group(0)}{marker}", text)

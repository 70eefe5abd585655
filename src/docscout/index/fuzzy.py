"""Field-weighted approximate matching over indexed documents.

Each query term is compared against every field of a document with
rapidfuzz's ``partial_ratio``, which scores the best aligned substring and so
ignores where in the field the match sits. A term counts as present in a
field when its similarity clears the threshold; a document is a hit only
when every term is present in at least one field. The hit distance is one
minus the field-weighted mean similarity, so 0 is a perfect match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence, Tuple

import numpy as np
from rapidfuzz import fuzz

from docscout.models import IndexedDocument

LOGGER = logging.getLogger(__name__)

DEFAULT_WEIGHTS: Mapping[str, float] = {
    "title": 0.4,
    "content": 0.3,
    "description": 0.2,
    "path": 0.1,
}
DEFAULT_THRESHOLD = 0.3
MIN_MATCH_LENGTH = 2


@dataclass(frozen=True, slots=True)
class FuzzyHit:
    document: IndexedDocument
    distance: float


def prepare_terms(query: str, *, min_match_length: int = MIN_MATCH_LENGTH) -> list[str]:
    """Split a query into the terms that must all approximately appear.

    Multi-word queries become one term per word; a single word is one term.
    """
    words = [word for word in query.lower().split() if len(word) >= min_match_length]
    if len(words) > 1:
        return words
    term = query.strip().lower()
    return [term] if len(term) >= min_match_length else []


def _field_texts(document: IndexedDocument, fields: Sequence[str]) -> Tuple[str, ...]:
    values = {
        "title": document.title,
        "content": document.content,
        "description": document.description,
        "path": document.path,
    }
    return tuple(values[name].lower() for name in fields)


@dataclass(frozen=True, eq=False)
class FuzzyIndex:
    documents: Tuple[IndexedDocument, ...]
    fields: Tuple[str, ...]
    texts: Tuple[Tuple[str, ...], ...]
    weights: np.ndarray
    threshold: float = DEFAULT_THRESHOLD
    min_match_length: int = MIN_MATCH_LENGTH

    def __len__(self) -> int:
        return len(self.documents)

    def _similarities(self, terms: Sequence[str], texts: Sequence[str]) -> np.ndarray:
        cutoff = (1.0 - self.threshold) * 100
        sims = np.zeros((len(terms), len(texts)), dtype="float64")
        for row, term in enumerate(terms):
            for col, text in enumerate(texts):
                if not text:
                    continue
                if term in text:
                    sims[row, col] = 1.0
                else:
                    sims[row, col] = fuzz.partial_ratio(term, text, score_cutoff=cutoff) / 100
        return sims

    def search(self, query: str) -> list[FuzzyHit]:
        """Return hits ordered by ascending distance, ties in index order."""
        terms = prepare_terms(query, min_match_length=self.min_match_length)
        if not terms or not self.documents:
            return []

        hits: list[FuzzyHit] = []
        for document, texts in zip(self.documents, self.texts):
            sims = self._similarities(terms, texts)
            if not bool(np.all(sims.max(axis=1) > 0)):
                continue
            similarity = float(np.average(sims.mean(axis=0), weights=self.weights))
            distance = min(max(1.0 - similarity, 0.0), 1.0)
            hits.append(FuzzyHit(document=document, distance=distance))

        hits.sort(key=lambda hit: hit.distance)
        LOGGER.debug("Fuzzy search for %r matched %d of %d documents", query, len(hits), len(self))
        return hits


def build_index(
    documents: Sequence[IndexedDocument],
    weights: Mapping[str, float] = DEFAULT_WEIGHTS,
    *,
    threshold: float = DEFAULT_THRESHOLD,
    min_match_length: int = MIN_MATCH_LENGTH,
) -> FuzzyIndex:
    """Build a new, independent index over ``documents``."""
    unknown = set(weights) - set(DEFAULT_WEIGHTS)
    if unknown:
        raise ValueError(f"Unknown fuzzy index fields: {sorted(unknown)}")
    fields = tuple(weights)
    docs = tuple(documents)
    return FuzzyIndex(
        documents=docs,
        fields=fields,
        texts=tuple(_field_texts(document, fields) for document in docs),
        weights=np.asarray([weights[name] for name in fields], dtype="float64"),
        threshold=threshold,
        min_match_length=min_match_length,
    )

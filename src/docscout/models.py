"""Core docscout data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# Front-matter values pass through untouched: scalars, lists and nested maps.
MetadataValue = Union[str, int, float, bool, None, List[Any], Dict[str, Any]]
Metadata = Dict[str, MetadataValue]


@dataclass(frozen=True, slots=True)
class IndexedDocument:
    """A corpus file with its front-matter split from the body."""

    path: str
    title: str
    content: str
    metadata: Metadata = field(default_factory=dict)
    section: Optional[str] = None
    version: Optional[str] = None

    @property
    def description(self) -> str:
        value = self.metadata.get("description")
        return str(value) if value is not None else ""


@dataclass(slots=True)
class SearchResult:
    path: str
    title: str
    excerpt: str
    score: float
    section: Optional[str] = None
    version: Optional[str] = None

    @classmethod
    def from_document(cls, document: IndexedDocument, *, excerpt: str, score: float) -> "SearchResult":
        return cls(
            path=document.path,
            title=document.title,
            excerpt=excerpt,
            score=score,
            section=document.section,
            version=document.version,
        )

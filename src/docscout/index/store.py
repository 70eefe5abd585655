"""In-memory document store built once from the corpus directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

import yaml

from docscout.errors import CorpusEmpty, IndexNotReady
from docscout.ingestion.markdown_loader import load_document
from docscout.models import IndexedDocument, Metadata
from docscout.utils.files import iter_doc_paths

LOGGER = logging.getLogger(__name__)

Acquire = Callable[[], None]


def find_docs(root: Path) -> list[Path]:
    """Find all documentation files under the corpus root."""
    if not root.is_dir():
        return []
    return list(iter_doc_paths([root]))


@dataclass(slots=True)
class LoadStats:
    loaded: int = 0
    failed: int = 0
    failed_files: list[Path] = field(default_factory=list)


class DocumentStore:
    """Owns the indexed documents for the process lifetime."""

    def __init__(self, root: Path, *, acquire: Optional[Acquire] = None) -> None:
        self.root = Path(root)
        self.acquire = acquire
        self._metadata: Dict[str, Metadata] | None = None
        self._documents: Tuple[IndexedDocument, ...] | None = None
        self._by_path: Dict[str, IndexedDocument] = {}
        self.stats = LoadStats()

    @property
    def loaded(self) -> bool:
        return self._documents is not None

    @property
    def documents(self) -> Tuple[IndexedDocument, ...]:
        if self._documents is None:
            raise IndexNotReady("Document store has not been loaded")
        return self._documents

    @property
    def metadata(self) -> Dict[str, Metadata]:
        if self._metadata is None:
            raise IndexNotReady("Document store has not been loaded")
        return self._metadata

    def mark_empty(self) -> None:
        """Settle the store as an empty corpus after a failed load."""
        self._metadata = {}
        self._documents = ()

    def load(self) -> Tuple[Dict[str, Metadata], Tuple[IndexedDocument, ...]]:
        """Read every documentation file once and return (path -> metadata, documents)."""
        if self._documents is not None:
            return self.metadata, self._documents

        paths = find_docs(self.root)
        if not paths and self.acquire is not None:
            LOGGER.info("No documentation found in %s, acquiring corpus", self.root)
            self.acquire()
            paths = find_docs(self.root)
        if not paths:
            raise CorpusEmpty(f"No documentation files found in {self.root}")

        metadata: Dict[str, Metadata] = {}
        documents: list[IndexedDocument] = []
        for path in paths:
            try:
                document = load_document(path, self.root)
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
                LOGGER.error("Failed to load %s: %s", path, exc)
                self.stats.failed += 1
                self.stats.failed_files.append(path)
                continue
            metadata[document.path] = document.metadata
            documents.append(document)
            self.stats.loaded += 1

        self._metadata = metadata
        self._documents = tuple(documents)
        self._by_path = {document.path: document for document in documents}
        LOGGER.info("Indexed %d documentation files from %s", len(documents), self.root)
        return self._metadata, self._documents

    def get(self, path: str) -> Optional[IndexedDocument]:
        if self._documents is None:
            raise IndexNotReady("Document store has not been loaded")
        return self._by_path.get(path)

"""Query operations over the documentation index.

``DocsService`` builds the index once per process. Every public operation
first awaits that build, then answers from the result cache or computes,
renders and caches its text.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from docscout.config import AppConfig
from docscout.errors import DocScoutError, DocumentNotFound, IndexNotReady, SearchFailed
from docscout.index.cache import ALL, LATEST, ResultCache, cache_key
from docscout.index.fuzzy import FuzzyIndex, build_index
from docscout.index.matcher import score_documents
from docscout.index.merge import merge_results
from docscout.index.resolver import PathResolver
from docscout.index.store import Acquire, DocumentStore
from docscout.ingestion.markdown_loader import read_document
from docscout.models import IndexedDocument, Metadata, SearchResult
from docscout.utils.files import DOC_EXTENSIONS, is_within

LOGGER = logging.getLogger(__name__)

QUICK_START_FALLBACK_QUERY = "getting started introduction"
GENERAL_SECTION = "general"


class IndexState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    BUILDING = "building"
    READY = "ready"
    FAILED = "failed"


def render_search(
    query: str,
    results: Sequence[SearchResult],
    section: Optional[str] = None,
    version: Optional[str] = None,
) -> str:
    lines = [f'# Search Results for "{query}"', ""]
    if not results:
        where = section or "all sections"
        suffix = f" (version: {version})" if version else ""
        lines.append(f"No results found in {where}{suffix}.")
        return "\n".join(lines)

    for result in results:
        lines.append(f"## {result.title}")
        if result.section:
            lines.append(f"**Section:** {result.section}")
        if result.version:
            lines.append(f"**Version:** {result.version}")
        lines.append(f"**Match Score:** {result.score:.2f}")
        lines.extend(["", result.excerpt, "", "---", ""])
    return "\n".join(lines)


def render_document(metadata: Metadata, body: str) -> str:
    """Title and description header from front-matter, then the full body."""
    header = ""
    if metadata.get("title"):
        header += f"# {metadata['title']}\n\n"
    if metadata.get("description"):
        header += f"> {metadata['description']}\n\n"
    return header + body


def render_sections(
    groups: Dict[str, List[str]],
    section: Optional[str] = None,
    version: Optional[str] = None,
    *,
    limit: int = 15,
) -> str:
    text = "# Available sections"
    if section:
        text += f" in {section}"
    if version:
        text += f" (version: {version})"
    text += "\n\n"

    for name, titles in groups.items():
        text += f"## {name}\n"
        for title in titles[:limit]:
            text += f"- {title}\n"
        if len(titles) > limit:
            text += f"- ... and {len(titles) - limit} more\n"
        text += "\n"
    return text


def _normalize_filters(
    section: Optional[str], version: Optional[str]
) -> Tuple[Optional[str], Optional[str]]:
    """Map the ``all`` section and the ``latest`` version to no filter at all."""
    if not section or section == ALL:
        section = None
    if not version or version == LATEST:
        version = None
    return section, version


@contextmanager
def _operation_failures(message: str, subject: object) -> Iterator[None]:
    """Re-raise domain errors unchanged, wrap anything else in ``SearchFailed``."""
    try:
        yield
    except DocScoutError:
        raise
    except Exception as exc:
        LOGGER.exception("%s for %r", message, subject)
        raise SearchFailed(f"{message}: {exc}") from exc


class DocsService:
    """Search, retrieval and listing over one corpus directory."""

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        acquire: Optional[Acquire] = None,
        base_dir: Path | None = None,
    ) -> None:
        self.config = config or AppConfig()
        root = self.config.resolve_corpus_root(base_dir if base_dir is not None else Path.cwd())
        self.store = DocumentStore(root, acquire=acquire)
        self.resolver = PathResolver(root)
        self.cache = ResultCache(ttl=self.config.cache_ttl, maxsize=self.config.cache_size)
        self.state = IndexState.UNINITIALIZED
        self._ready: asyncio.Event | None = None
        self._build_task: asyncio.Task | None = None
        self._index: FuzzyIndex | None = None

    @property
    def root(self) -> Path:
        return self.store.root

    def start(self) -> None:
        """Schedule the one-time index build on the running loop."""
        if self.state is not IndexState.UNINITIALIZED:
            return
        self.state = IndexState.BUILDING
        self._ready = asyncio.Event()
        self._build_task = asyncio.create_task(self._build(self._ready))

    async def _build(self, ready: asyncio.Event) -> None:
        try:
            _, documents = await asyncio.to_thread(self.store.load)
            self._index = await asyncio.to_thread(self._build_fuzzy, documents)
            self.state = IndexState.READY
        except Exception:
            LOGGER.exception("Failed to initialize docs index at %s", self.root)
            self.store.mark_empty()
            self._index = self._build_fuzzy(())
            self.state = IndexState.FAILED
        finally:
            ready.set()

    async def ensure_ready(self) -> None:
        self.start()
        if self._ready is None:
            raise IndexNotReady("Index build was not scheduled")
        await self._ready.wait()

    def _build_fuzzy(self, documents: Sequence[IndexedDocument]) -> FuzzyIndex:
        return build_index(documents, threshold=self.config.fuzzy_threshold)

    def _filter(
        self, section: Optional[str], version: Optional[str]
    ) -> Tuple[Tuple[IndexedDocument, ...], FuzzyIndex]:
        """Documents and fuzzy index for normalized section/version filters."""
        documents = self.store.documents
        if self._index is None:
            raise IndexNotReady("Fuzzy index has not been built")
        if not section and not version:
            return documents, self._index

        subset = tuple(
            document
            for document in documents
            if (not section or document.section == section)
            and (not version or document.version == version)
        )
        return subset, self._build_fuzzy(subset)

    async def search(
        self, query: str, section: Optional[str] = None, version: Optional[str] = None
    ) -> str:
        """Ranked results for ``query``. A blank query has no results."""
        await self.ensure_ready()
        query = query.strip()
        section, version = _normalize_filters(section, version)
        key = cache_key("search", query=query, section=section, version=version)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        if not query:
            return render_search(query, [], section, version)

        with _operation_failures("Search failed", query):
            documents, index = await asyncio.to_thread(self._filter, section, version)
            exact, fuzzy = await asyncio.gather(
                asyncio.to_thread(
                    score_documents, query, documents, excerpt_chars=self.config.excerpt_chars
                ),
                asyncio.to_thread(index.search, query),
            )
            results = merge_results(fuzzy, exact, query, excerpt_chars=self.config.excerpt_chars)
            text = render_search(query, results[: self.config.max_results], section, version)

        self.cache.set(key, text)
        return text

    def _read(self, stored_path: str) -> str:
        path = self.root / stored_path
        if (
            path.suffix.lower() not in DOC_EXTENSIONS
            or not path.is_file()
            or not is_within(path, self.root)
        ):
            raise DocumentNotFound(f"Document not found: {stored_path}")
        metadata, body = read_document(path)
        return render_document(metadata, body)

    async def get_content(self, stored_path: str) -> str:
        await self.ensure_ready()
        key = cache_key("content", path=stored_path)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        with _operation_failures("Failed to fetch content", stored_path):
            text = await asyncio.to_thread(self._read, stored_path)

        self.cache.set(key, text)
        return text

    async def get_by_path(self, fragment: Optional[str] = None, version: Optional[str] = None) -> str:
        await self.ensure_ready()
        with _operation_failures("Failed to find document", fragment):
            stored_path = await asyncio.to_thread(self.resolver.resolve, fragment, version)
        return await self.get_content(stored_path)

    def _group_titles(self, section: Optional[str], version: Optional[str]) -> Dict[str, List[str]]:
        groups: Dict[str, List[str]] = {}
        for document in self.store.documents:
            directories = document.path.split("/")[:-1]
            if section and section not in directories:
                continue
            if version and version not in directories:
                continue
            groups.setdefault(document.section or GENERAL_SECTION, []).append(document.title)
        return groups

    async def list_sections(self, section: Optional[str] = None, version: Optional[str] = None) -> str:
        await self.ensure_ready()
        section, version = _normalize_filters(section, version)
        key = cache_key("sections", section=section, version=version)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        with _operation_failures("Failed to list sections", section):
            groups = await asyncio.to_thread(self._group_titles, section, version)
            text = render_sections(groups, section, version, limit=self.config.listing_limit)

        self.cache.set(key, text)
        return text

    async def get_api_reference(self, module: str, version: Optional[str] = None) -> str:
        await self.ensure_ready()
        _, version = _normalize_filters(None, version)
        key = cache_key("api", module=module, version=version)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        with _operation_failures("Failed to get API reference", module):
            stored_path = await asyncio.to_thread(self.resolver.resolve_api_reference, module, version)
            text = await self.get_content(stored_path)

        self.cache.set(key, text)
        return text

    async def get_quick_start(self, platform: Optional[str] = None) -> str:
        await self.ensure_ready()
        if not platform or platform == ALL:
            platform = None
        key = cache_key("quickstart", platform=platform)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        with _operation_failures("Failed to get quick start", platform):
            stored_path = await asyncio.to_thread(self.resolver.resolve_quick_start, platform)
            if stored_path is None:
                LOGGER.info("No quick start page found, falling back to search")
                text = await self.search(QUICK_START_FALLBACK_QUERY, None, LATEST)
            else:
                text = await self.get_content(stored_path)

        self.cache.set(key, text)
        return text

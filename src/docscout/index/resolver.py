"""Glob-based resolution of user path fragments to stored documents.

Ambiguous fragments resolve to the first match in sorted traversal order.
There is no ranking between candidates, so a generic fragment can pick an
unrelated page.
"""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from docscout.errors import DocumentNotFound
from docscout.utils.files import DOC_EXTENSIONS, is_doc_file, is_within, relative_posix

LOGGER = logging.getLogger(__name__)

LATEST = "latest"

QUICK_START_PATTERNS = (
    "get-started/**/*",
    "tutorial/**/*",
    "**/introduction*",
    "**/getting-started*",
    "**/quickstart*",
)


def _clean_fragment(fragment: str) -> str:
    """Escape glob metacharacters and drop leading slashes and dot segments."""
    parts = [part for part in fragment.strip().split("/") if part and part not in (".", "..")]
    return "/".join(glob.escape(part) for part in parts)


def _version_prefix(version: Optional[str]) -> str:
    if version and version != LATEST:
        return f"**/{_clean_fragment(version)}/"
    return ""


def build_patterns(fragment: Optional[str] = None, version: Optional[str] = None) -> List[str]:
    """Glob patterns, one per documentation extension, for a fragment/version pair."""
    base = _version_prefix(version)
    cleaned = _clean_fragment(fragment) if fragment else ""
    base += f"**/*{cleaned}*" if cleaned else "**/*"
    return [base + extension for extension in DOC_EXTENSIONS]


class PathResolver:
    """Maps fragments to corpus-relative document paths under ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def glob(self, patterns: Iterable[str]) -> List[str]:
        """All stored documents matching any pattern, sorted, without duplicates."""
        if not self.root.is_dir():
            return []
        found = set()
        for pattern in patterns:
            for path in self.root.glob(pattern):
                if is_doc_file(path) and is_within(path, self.root):
                    found.add(relative_posix(path, self.root))
        return sorted(found)

    def resolve(self, fragment: Optional[str] = None, version: Optional[str] = None) -> str:
        matches = self.glob(build_patterns(fragment, version))
        if not matches:
            raise DocumentNotFound(f"Document not found: {fragment or '*'} (version: {version or LATEST})")
        if len(matches) > 1:
            LOGGER.debug("%d documents match %r, using %s", len(matches), fragment, matches[0])
        return matches[0]

    def resolve_api_reference(self, module: str, version: Optional[str] = None) -> str:
        prefix = _version_prefix(version)
        name = _clean_fragment(module)
        candidates = (
            f"**/*{name}*",
            f"**/reference/**/*{name}*",
            f"**/sdk/**/*{name}*",
        )
        for candidate in candidates:
            matches = self.glob(prefix + candidate + extension for extension in DOC_EXTENSIONS)
            if matches:
                return matches[0]
        raise DocumentNotFound(f"API reference for {module} not found")

    def resolve_quick_start(self, platform: Optional[str] = None) -> Optional[str]:
        """First quick-start page, preferring pages that mention ``platform``."""
        matches: List[str] = []
        for candidate in QUICK_START_PATTERNS:
            for path in self.glob(candidate + extension for extension in DOC_EXTENSIONS):
                if path not in matches:
                    matches.append(path)
        if not matches:
            return None
        if platform and platform != "all":
            for path in matches:
                if platform.lower() in path.lower():
                    return path
        return matches[0]

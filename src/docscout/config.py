"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

CORPUS_ENV_VAR = "DOCSCOUT_CORPUS"

# One week, in seconds
DEFAULT_CACHE_TTL = 7 * 24 * 60 * 60


def _get_default_corpus_root() -> Path:
    """Get the default corpus directory based on environment and working directory."""
    from_env = os.environ.get(CORPUS_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()

    # When running from a checkout, prefer a local data/ corpus if it exists
    local_corpus = Path("data/docs-cache")
    if local_corpus.exists():
        return local_corpus

    return Path.home() / "Documents" / "DocScout" / "docs-cache"


@dataclass(slots=True)
class AppConfig:
    corpus_root: Path | None = None
    cache_ttl: float = DEFAULT_CACHE_TTL
    cache_size: int = 4096
    max_results: int = 10
    excerpt_chars: int = 200
    fuzzy_threshold: float = 0.3
    listing_limit: int = 15

    def __post_init__(self) -> None:
        if self.corpus_root is None:
            self.corpus_root = _get_default_corpus_root()

    def resolve_corpus_root(self, base_dir: Path | None = None) -> Path:
        if self.corpus_root is None:
            self.corpus_root = _get_default_corpus_root()
        if Path(self.corpus_root).is_absolute() or base_dir is None:
            return Path(self.corpus_root)
        return base_dir / self.corpus_root

"""Utility helpers for working with corpus files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

DOC_EXTENSIONS = (".md", ".mdx")


def is_doc_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in DOC_EXTENSIONS


def iter_doc_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield documentation paths from input paths, descending into directories."""
    for item in inputs:
        if item.is_dir():
            yield from iter_doc_paths(sorted(child for child in item.rglob("*") if is_doc_file(child)))
        elif is_doc_file(item):
            yield item


def relative_posix(path: Path, root: Path) -> str:
    """Corpus-relative identifier for a file, always using forward slashes."""
    return path.relative_to(root).as_posix()


def is_within(path: Path, root: Path) -> bool:
    """Return True when ``path`` resolves to a location inside ``root``."""
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True

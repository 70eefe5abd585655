"""Markdown/MDX loading with YAML front-matter.

Front-matter is the YAML block fenced by ``---`` lines at the very start of
a file. Parsing uses PyYAML's ``safe_load``; anything that is not a mapping
is treated as absent metadata.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from pathlib import Path
from typing import Any, Tuple

import yaml

from docscout.index.classifier import classify_section, classify_version
from docscout.models import IndexedDocument, Metadata
from docscout.utils.files import relative_posix

LOGGER = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def _normalize_value(value: Any) -> Any:
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): _normalize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_value(item) for item in value]
    return value


def split_front_matter(text: str) -> Tuple[Metadata, str]:
    """Separate front-matter metadata from body text.

    Raises ``yaml.YAMLError`` when the fenced block is not valid YAML.
    """
    match = FRONT_MATTER_RE.match(text)
    if match is None:
        return {}, text

    data = yaml.safe_load(match.group(1) or "")
    body = text[match.end():]
    if not isinstance(data, dict):
        return {}, body
    return {str(key): _normalize_value(value) for key, value in data.items()}, body


def read_document(path: Path) -> Tuple[Metadata, str]:
    return split_front_matter(path.read_text(encoding="utf-8"))


def load_document(path: Path, root: Path) -> IndexedDocument:
    """Build an ``IndexedDocument`` for a corpus file."""
    relative = relative_posix(path, root)
    data, body = read_document(path)
    LOGGER.debug("Loaded %s (%d metadata keys)", relative, len(data))

    segments = relative.split("/")
    section = classify_section(segments)
    version = classify_version(segments, data)

    metadata: Metadata = dict(data)
    metadata["section"] = section or data.get("section")
    metadata["version"] = version or data.get("version")

    title = data.get("title")
    return IndexedDocument(
        path=relative,
        title=str(title) if title else path.stem,
        content=body,
        metadata=metadata,
        section=section,
        version=version,
    )

"""Derive a document's section and version from its corpus path."""

from __future__ import annotations

import re
from typing import Mapping, Optional, Sequence

SECTIONS = frozenset(
    {"guides", "reference", "eas", "versions", "home", "learn", "tutorial", "get-started"}
)
VERSION_SENTINELS = ("latest", "unversioned")
VERSION_RE = re.compile(r"^v?\d+\.\d+\.\d+")


def classify_section(segments: Sequence[str]) -> Optional[str]:
    """First path segment that names a known section, as written in the path."""
    for segment in segments:
        if segment.lower() in SECTIONS:
            return segment
    return None


def classify_version(segments: Sequence[str], metadata: Mapping[str, object]) -> Optional[str]:
    for segment in segments:
        if VERSION_RE.match(segment):
            return segment
    for segment in segments:
        if segment in VERSION_SENTINELS:
            return segment
    declared = metadata.get("version")
    if declared is None or declared == "":
        return None
    return str(declared)

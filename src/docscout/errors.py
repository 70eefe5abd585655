"""Exceptions raised by the docscout engine."""

from __future__ import annotations


class DocScoutError(Exception):
    """Base class for all docscout errors."""


class CorpusEmpty(DocScoutError):
    """No documentation files were found, even after acquisition."""


class DocumentNotFound(DocScoutError):
    """A path, API reference or quick-start lookup matched no file."""


class IndexNotReady(DocScoutError):
    """The document store was read before its one-time load finished."""


class SearchFailed(DocScoutError):
    """An unexpected failure while scoring, merging or rendering a query."""

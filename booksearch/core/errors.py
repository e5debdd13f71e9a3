"""
Error taxonomy shared by the ingestion, embedding and indexing layers.

None of these are retried here: each one ends the current operation and
no partial result is returned.
"""

from __future__ import annotations


class BookSearchError(Exception):
    """Base class for every error raised by booksearch."""


class EmbeddingError(BookSearchError):
    """The embedding provider failed or returned a malformed vector."""


class EmptyIndexError(BookSearchError, ValueError):
    """An index was built from zero vectors."""


class DimensionMismatchError(BookSearchError, ValueError):
    """A vector's dimension differs from the index dimension."""

    def __init__(self, expected: int, got: int, what: str = "vector") -> None:
        super().__init__(f"{what} dim {got} != index dim {expected}")
        self.expected = expected
        self.got = got


class MalformedRecordError(BookSearchError, ValueError):
    """A catalog line could not be parsed into a Book."""

    def __init__(self, line_no: int, reason: str) -> None:
        super().__init__(f"line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason


class IndexNotBuiltError(BookSearchError):
    """A search was issued before any catalog was indexed."""

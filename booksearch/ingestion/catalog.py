"""
Reader/writer for the book summary catalog.

Format: one record per line, tab-separated, no header:
article id, freebase id, title, author, publication date, genres, summary.
Quote characters are ordinary text (genres hold JSON), so fields are split
on tabs only.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import IO, Iterable, Iterator, List

from pydantic import ValidationError

from booksearch.core.errors import MalformedRecordError
from booksearch.models.book import Book

logger = logging.getLogger(__name__)

FIELDS = tuple(Book.model_fields)


def _reader(fh: IO[str]):
    return csv.reader(fh, delimiter="\t", quoting=csv.QUOTE_NONE, quotechar=None)


def iter_books(fh: IO[str]) -> Iterator[Book]:
    reader = _reader(fh)
    for fields in reader:
        line_no = reader.line_num
        if not fields:
            continue
        if len(fields) != len(FIELDS):
            raise MalformedRecordError(line_no, f"expected {len(FIELDS)} fields, got {len(fields)}")
        try:
            yield Book(**dict(zip(FIELDS, fields)))
        except ValidationError as e:
            raise MalformedRecordError(line_no, e.errors()[0]["msg"]) from e


def load_catalog(path: str | Path) -> List[Book]:
    with open(path, encoding="utf-8", newline="") as fh:
        books = list(iter_books(fh))
    logger.info(f"Loaded {len(books)} books from {path}")
    return books


def dump_catalog(books: Iterable[Book], fh: IO[str]) -> None:
    """Write books back in the same tab-separated layout, one LF-terminated line each."""
    writer = csv.writer(fh, delimiter="\t", quoting=csv.QUOTE_NONE, quotechar=None, lineterminator="\n")
    for b in books:
        row = b.model_dump()
        writer.writerow([row[f] for f in FIELDS])

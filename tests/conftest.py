"""
Shared fixtures: catalog records, a deterministic stub embedder, and a
sample catalog file in the tab-separated book summary layout.
"""
from typing import Dict, List, Sequence

import pytest

from booksearch.models.book import Book


def make_book(title: str, author: str = "", article_id: int = 1) -> Book:
    return Book(
        wikipedia_article_id=article_id,
        freebase_id=f"/m/{article_id:05d}",
        title=title,
        author=author,
        publication_date="",
        genres="",
        summary=f"Summary of {title}.",
    )


class StubProvider:
    """Looks titles up in a fixed table; records every batch it is asked for."""

    def __init__(self, table: Dict[str, List[float]]) -> None:
        self.table = table
        self.calls: List[List[str]] = []
        self.input_types: List[str] = []

    def embed_texts(self, texts: Sequence[str], *, input_type: str = "search_document") -> List[List[float]]:
        self.calls.append(list(texts))
        self.input_types.append(input_type)
        return [self.table[t] for t in texts]


SAMPLE_CATALOG = (
    "620\t/m/0hhy\tAnimal Farm\tGeorge Orwell\t1945-08-17\t"
    '{"/m/016lj8": "Roman \\u00e0 clef", "/m/06nbt": "Satire"}\t'
    'Old Major, the old boar on the Manor Farm, calls the animals to a meeting.\n'
    "843\t/m/0k36\tA Clockwork Orange\tAnthony Burgess\t1962\t"
    '{"/m/06n90": "Science Fiction"}\t'
    'Alex, a teenager living in near-future England, leads his gang on nightly "ultra-violence".\n'
    "986\t/m/0ldx\tThe Plague\tAlbert Camus\t1947\t\t"
    "The text of The Plague is divided into five parts.\n"
)

SAMPLE_VECTORS = {
    "Animal Farm": [1.0, 0.0, 0.0],
    "A Clockwork Orange": [0.0, 1.0, 0.0],
    "The Plague": [0.0, 0.0, 1.0],
    "farm animals": [0.9, 0.1, 0.0],
}


@pytest.fixture
def stub_provider():
    return StubProvider(dict(SAMPLE_VECTORS))


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "booksummaries.txt"
    path.write_text(SAMPLE_CATALOG, encoding="utf-8")
    return path

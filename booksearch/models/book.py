from __future__ import annotations
from pydantic import BaseModel, ConfigDict

from booksearch.indexing.base import LabeledVector


class Book(BaseModel):
    """
    One catalog record, fields in file order.
    - genres: raw JSON object text, e.g. {"/m/02xlf": "Fiction"} (may be empty)
    - publication_date: free text, may be empty or a bare year
    Text fields are kept exactly as read, so a record writes back unchanged
    apart from the article id, which is stored as an integer.
    """
    model_config = ConfigDict(frozen=True)

    wikipedia_article_id: int
    freebase_id: str
    title: str
    author: str
    publication_date: str
    genres: str
    summary: str

    def to_embedded(self, embedding) -> LabeledVector:
        return LabeledVector(title=self.title, author=self.author, embedding=embedding)

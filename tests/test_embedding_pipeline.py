"""
Tests for the embedding pipeline: ordering, batching, and fail-fast checks
on whatever the provider returns.
"""
import numpy as np
import pytest

from booksearch.adapters.embedding_providers import FunctionProvider
from booksearch.core.errors import EmbeddingError
from booksearch.services.embedding_pipeline import EmbeddingPipeline
from conftest import StubProvider, make_book


class TestEmbedBooks:
    """Test turning books into LabeledVectors."""

    def test_two_record_scenario(self):
        """Test X and Y come back in order, labelled with their titles."""
        provider = StubProvider({"X": [1.0, 0.0], "Y": [0.0, 1.0]})
        pipeline = EmbeddingPipeline(provider, dim=2)
        rows = pipeline.embed_books([make_book("X"), make_book("Y")])
        assert [r.title for r in rows] == ["X", "Y"]
        assert rows[0].embedding.tolist() == [1.0, 0.0]
        assert rows[1].embedding.tolist() == [0.0, 1.0]

    def test_author_carried_as_label(self):
        """Test the author travels with the vector."""
        provider = StubProvider({"X": [1.0, 0.0]})
        rows = EmbeddingPipeline(provider, dim=2).embed_books([make_book("X", author="Anon")])
        assert rows[0].author == "Anon"

    def test_batching_preserves_order(self):
        """Test that batch size does not change output order."""
        titles = [f"t{i}" for i in range(7)]
        table = {t: [float(i), 0.0] for i, t in enumerate(titles)}
        books = [make_book(t, article_id=i + 1) for i, t in enumerate(titles)]
        for batch_size in (1, 3, 7, 50):
            provider = StubProvider(table)
            rows = EmbeddingPipeline(provider, dim=2, batch_size=batch_size).embed_books(books)
            assert [r.title for r in rows] == titles
            assert [r.embedding[0] for r in rows] == [float(i) for i in range(7)]
            assert sum(len(c) for c in provider.calls) == 7
            assert max(len(c) for c in provider.calls) <= batch_size

    def test_titles_sent_as_documents(self):
        """Test catalog titles use the document input type."""
        provider = StubProvider({"X": [1.0, 0.0]})
        EmbeddingPipeline(provider, dim=2).embed_books([make_book("X")])
        assert provider.input_types == ["search_document"]

    def test_empty_input(self):
        """Test no books means no provider calls."""
        provider = StubProvider({})
        assert EmbeddingPipeline(provider, dim=2).embed_books([]) == []
        assert provider.calls == []

    def test_function_provider(self):
        """Test a single-text callable works as a provider."""
        pipeline = EmbeddingPipeline(FunctionProvider(lambda t: [float(len(t)), 1.0]), dim=2)
        rows = pipeline.embed_books([make_book("abc"), make_book("z")])
        assert [r.embedding.tolist() for r in rows] == [[3.0, 1.0], [1.0, 1.0]]

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            EmbeddingPipeline(StubProvider({}), dim=2, batch_size=-1)


class TestEmbeddingErrors:
    """Test that bad provider output fails fast."""

    def test_wrong_dimension(self):
        """Test a short vector is rejected, not padded."""
        provider = StubProvider({"X": [1.0, 0.0, 0.0]})
        with pytest.raises(EmbeddingError, match="shape"):
            EmbeddingPipeline(provider, dim=2).embed_books([make_book("X")])

    def test_wrong_count(self):
        """Test a provider returning too few vectors is rejected."""
        class Short:
            def embed_texts(self, texts, *, input_type="search_document"):
                return [[0.0, 0.0]]
        with pytest.raises(EmbeddingError, match="1 vectors for 2 texts"):
            EmbeddingPipeline(Short(), dim=2).embed_books([make_book("a"), make_book("b")])

    def test_provider_exception_wrapped(self):
        """Test arbitrary provider failures surface as EmbeddingError."""
        class Broken:
            def embed_texts(self, texts, *, input_type="search_document"):
                raise RuntimeError("model offline")
        with pytest.raises(EmbeddingError, match="model offline") as exc:
            EmbeddingPipeline(Broken(), dim=2).embed_books([make_book("a")])
        assert isinstance(exc.value.__cause__, RuntimeError)

    def test_non_finite(self):
        provider = StubProvider({"X": [float("inf"), 0.0]})
        with pytest.raises(EmbeddingError, match="non-finite"):
            EmbeddingPipeline(provider, dim=2).embed_books([make_book("X")])

    def test_non_numeric(self):
        provider = StubProvider({"X": ["a", "b"]})
        with pytest.raises(EmbeddingError):
            EmbeddingPipeline(provider, dim=2).embed_books([make_book("X")])


class TestEmbedQuery:
    """Test embedding a free-text query."""

    def test_query_vector(self):
        provider = StubProvider({"hello": [0.5, 0.5]})
        vec = EmbeddingPipeline(provider, dim=2).embed_query("hello")
        assert isinstance(vec, np.ndarray)
        assert vec.tolist() == [0.5, 0.5]
        assert provider.input_types == ["search_query"]

    def test_query_wrong_dimension(self):
        provider = StubProvider({"hello": [0.5]})
        with pytest.raises(EmbeddingError):
            EmbeddingPipeline(provider, dim=2).embed_query("hello")

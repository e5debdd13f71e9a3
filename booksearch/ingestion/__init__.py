from .catalog import dump_catalog, iter_books, load_catalog

__all__ = ["dump_catalog", "iter_books", "load_catalog"]

"""
Interactive search over the book catalog.
Prereqs:
- booksummaries.txt (or --catalog PATH)
- .env has COHERE_API_KEY, or EMBEDDING_PROVIDER=local with the `local` extra
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from booksearch.core.config import settings
from booksearch.core.errors import BookSearchError
from booksearch.services.search_service import SearchService

logger = logging.getLogger("booksearch")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="booksearch", description="Find books whose titles are nearest to a query.")
    p.add_argument("--catalog", default=settings.CATALOG_PATH, help="tab-separated book summaries file")
    p.add_argument("-k", "--top-k", type=int, default=settings.TOP_K, help="number of results")
    p.add_argument("--index", choices=["kd", "brute"], default=settings.INDEX)
    p.add_argument("--repeat", action="store_true", help="keep asking until an empty line")
    return p.parse_args(argv)


def print_hits(result: dict) -> None:
    for hit in result["hits"]:
        print(f'nearest: "{hit["title"]}"')
        print(f"distance: {hit['squared_distance']}")


def run(svc: SearchService, k: int, repeat: bool) -> None:
    print("Type your query below...\n")
    while True:
        try:
            query = input()
        except EOFError:
            break
        if not query.strip():
            break
        print(f"Querying: {query}")
        print_hits(svc.search(query_text=query, k=k))
        if not repeat:
            break


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    svc = SearchService(index=args.index)
    try:
        svc.load_catalog(args.catalog)
        run(svc, args.top_k, args.repeat)
    except (BookSearchError, OSError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

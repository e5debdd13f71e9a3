from __future__ import annotations
from typing import Any, Dict
from fastapi import APIRouter, HTTPException
from fastapi import status as http

from booksearch.core.config import settings
from booksearch.core.errors import EmbeddingError, IndexNotBuiltError
from booksearch.services.search_service import SearchService

router = APIRouter()


@router.get("/index")
def index_stats() -> Dict[str, Any]:
    return SearchService.instance().stats()


@router.post("/search")
def search(body: Dict[str, Any]):
    """
    Request JSON:
    {
      "query_text": "string" | null,
      "query_embedding": [float, ...] | null,
      "k": 10
    }
    Hits come back nearest first, each with its squared distance.
    """
    query_text = body.get("query_text")
    query_embedding = body.get("query_embedding")
    if not query_text and not query_embedding:
        raise HTTPException(http.HTTP_400_BAD_REQUEST, detail="Provide query_text or query_embedding")

    try:
        k = int(body.get("k", settings.TOP_K))
    except (TypeError, ValueError):
        raise HTTPException(http.HTTP_400_BAD_REQUEST, detail="k must be an integer")

    try:
        return SearchService.instance().search(
            query_text=query_text,
            query_embedding=query_embedding,
            k=k,
        )
    except IndexNotBuiltError as e:
        raise HTTPException(http.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except EmbeddingError as e:
        raise HTTPException(http.HTTP_502_BAD_GATEWAY, detail=str(e))
    except ValueError as e:
        raise HTTPException(http.HTTP_400_BAD_REQUEST, detail=str(e))

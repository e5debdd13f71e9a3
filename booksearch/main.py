import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from booksearch.api.routers.search import router as search_router
from booksearch.core.config import settings
from booksearch.services.search_service import SearchService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.LOAD_CATALOG_ON_STARTUP:
        if Path(settings.CATALOG_PATH).exists():
            SearchService.instance().load_catalog(settings.CATALOG_PATH)
        else:
            logger.warning(f"Catalog {settings.CATALOG_PATH} not found; search stays unavailable")
    yield


app = FastAPI(title="Book Search", lifespan=lifespan)

app.include_router(search_router, prefix="/books", tags=["search"])

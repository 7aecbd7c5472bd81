# donorlink/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from donorlink.core.config import settings
from donorlink.core.db import get_client
from donorlink.core.log import configure_logging
from donorlink.deps import get_repo
from donorlink.exceptions import register_exception_handlers
from donorlink.routers import matching as matching_router
from donorlink.routers import records as records_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    if settings.use_mongo:
        await get_repo().ensure_indexes()
        logger.info("Using MongoDB store %s/%s", settings.mongo_uri, settings.mongo_db)
    else:
        logger.info("Using in-memory store")

    yield

    if settings.use_mongo:
        get_client().close()


app = FastAPI(lifespan=lifespan, title="DonorLink Matching API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(matching_router.router)      # /api/matching
app.include_router(records_router.router)       # /api/donors, /api/organizations, /api/requests

# Health
@app.get("/health")
def health():
    return {"ok": True}

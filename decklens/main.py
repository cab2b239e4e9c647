import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from decklens.api import analyze_router, health_router
from decklens.config import settings
from decklens.services.card_index import get_card_index

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    if get_card_index() is None:
        logger.warning(
            "Card dataset unavailable at %s, analyses will run in stub mode",
            settings.card_index_path,
        )
    yield


app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    version=pkg_version("decklens"),
    lifespan=lifespan,
)

app.include_router(analyze_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

"""
Health check endpoints.

Provides liveness and readiness probes. Readiness reports whether the card
dataset is loaded; stub mode is still ready to serve.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from decklens.services.card_index import CardIndex, get_card_index

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    card_index: Literal["loaded", "stub"] | None = None
    card_count: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get("/ready", response_model=HealthResponse)
async def ready(
    index: Annotated[CardIndex | None, Depends(get_card_index)],
) -> HealthResponse:
    """
    Readiness probe.

    Reports whether analyses are backed by the card dataset.
    """
    if index is None:
        return HealthResponse(status="ready", card_index="stub", card_count=0)
    return HealthResponse(status="ready", card_index="loaded", card_count=len(index))

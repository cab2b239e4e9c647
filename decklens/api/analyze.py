"""
Deck analysis endpoint.

Thin pass-through: validates the request body and hands the decklist to the
analyzer. All statistics come from decklens.services.deck_analyzer.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from decklens.services.card_index import CardIndex, get_card_index
from decklens.services.deck_analyzer import DeckAnalyzer

router = APIRouter(prefix="/api", tags=["analyze"])

DECKLIST_REQUIRED = "Decklist is required."


class CamelModel(BaseModel):
    """Serializes fields in camelCase, matching the analyzer's JSON shape."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnalysisCardResponse(CamelModel):
    """One decklist line with its resolved card data."""

    name: str
    count: int
    mana_value: float | None = None
    type_line: str | None = None
    types: list[str] | None = None
    color_identity: list[str] = Field(default_factory=list)


class AnalyzeResponse(CamelModel):
    """Response model for a deck analysis."""

    total_cards: int
    avg_cmc: float | None = None
    colors: list[str] = Field(default_factory=list)
    commander: str | None = None
    source: Literal["full-index", "stub"] = Field(
        ...,
        description="full-index when the card dataset was available, stub otherwise",
    )
    cards: list[AnalysisCardResponse] = Field(default_factory=list)
    unresolved: list[str] = Field(
        default_factory=list,
        description="Decklist names not found in the card dataset",
    )


class ErrorResponse(BaseModel):
    """Error body for rejected requests."""

    error: str


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}},
)
async def analyze(
    request: Request,
    index: Annotated[CardIndex | None, Depends(get_card_index)],
) -> AnalyzeResponse | JSONResponse:
    """
    Analyze a pasted decklist.

    Expects {"decklist": "<text>"}. A missing, non-string or blank
    decklist returns 400. An unavailable card dataset is not an error:
    the response reports source "stub".
    """
    try:
        body = await request.json()
    except ValueError:
        body = None

    decklist = body.get("decklist") if isinstance(body, dict) else None
    if not isinstance(decklist, str) or not decklist.strip():
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": DECKLIST_REQUIRED},
        )

    analysis = DeckAnalyzer(index).analyze(decklist)
    return AnalyzeResponse.model_validate(analysis.to_dict())

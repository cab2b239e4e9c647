from decklens.models.card import COLOR_ORDER, CardRecord, sort_colors
from decklens.models.deck import (
    AnalysisSource,
    DeckAnalysis,
    DeckAnalysisCard,
    DecklistEntry,
)

__all__ = [
    "AnalysisSource",
    "COLOR_ORDER",
    "CardRecord",
    "DeckAnalysis",
    "DeckAnalysisCard",
    "DecklistEntry",
    "sort_colors",
]

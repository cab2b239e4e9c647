"""
DeckLens services.

Card index loading and decklist analysis.
"""

from decklens.services.card_index import (
    CardIndex,
    CardIndexCache,
    clear_card_index_cache,
    get_card_index,
    load_card_index,
    parse_card_index,
)
from decklens.services.deck_analyzer import DeckAnalyzer, analyze_decklist

__all__ = [
    "CardIndex",
    "CardIndexCache",
    "DeckAnalyzer",
    "analyze_decklist",
    "clear_card_index_cache",
    "get_card_index",
    "load_card_index",
    "parse_card_index",
]

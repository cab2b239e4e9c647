"""
Decklist analyzer.

Parses a decklist, resolves each entry against the card index, and folds
the results into deck-level statistics.
"""

import logging

from decklens.models.card import CardRecord, sort_colors
from decklens.models.deck import (
    AnalysisSource,
    DeckAnalysis,
    DeckAnalysisCard,
    DecklistEntry,
)
from decklens.parsers.decklist import parse_decklist
from decklens.services.card_index import CardIndex

logger = logging.getLogger(__name__)


class DeckAnalyzer:
    """
    Computes DeckAnalysis reports against one card index.

    The index is never modified. Passing None runs every analysis in
    stub mode: nothing resolves and derived fields stay empty.

    Usage:
        analyzer = DeckAnalyzer(get_card_index())
        report = analyzer.analyze("1 Sol Ring\\n1 Arcane Signet")
    """

    def __init__(self, index: CardIndex | None) -> None:
        self._index = index

    @property
    def source(self) -> AnalysisSource:
        return AnalysisSource.FULL_INDEX if self._index is not None else AnalysisSource.STUB

    def resolve(self, entry: DecklistEntry) -> CardRecord | None:
        if self._index is None:
            return None
        return self._index.lookup(entry.name)

    def analyze(self, text: str) -> DeckAnalysis:
        """
        Analyze raw decklist text.

        Args:
            text: Decklist text. Blank input yields an empty report

        Returns:
            DeckAnalysis for the parsed entries
        """
        return self.analyze_entries(parse_decklist(text))

    def analyze_entries(self, entries: list[DecklistEntry]) -> DeckAnalysis:
        total_cards = 0
        cmc_sum = 0.0
        cmc_weight = 0
        colors: set[str] = set()
        commander: str | None = None
        cards: list[DeckAnalysisCard] = []
        unresolved: list[str] = []

        for entry in entries:
            total_cards += entry.count
            record = self.resolve(entry)

            if record is not None:
                if record.mana_value is not None:
                    cmc_sum += record.mana_value * entry.count
                    cmc_weight += entry.count
                colors |= record.color_identity
                # First legendary creature in input order leads the deck
                if commander is None and record.is_legendary:
                    commander = record.name
            elif self._index is not None:
                unresolved.append(entry.name)

            cards.append(DeckAnalysisCard.from_entry(entry, record))

        avg_cmc = round(cmc_sum / cmc_weight, 2) if cmc_weight > 0 else None

        analysis = DeckAnalysis(
            total_cards=total_cards,
            avg_cmc=avg_cmc,
            colors=sort_colors(colors),
            commander=commander,
            source=self.source,
            cards=tuple(cards),
            unresolved=tuple(unresolved),
        )

        logger.debug(
            "DECK_ANALYZED",
            extra={
                "entries": len(entries),
                "total_cards": total_cards,
                "unresolved": len(unresolved),
                "source": analysis.source.value,
            },
        )
        return analysis


def analyze_decklist(text: str, index: CardIndex | None) -> DeckAnalysis:
    """
    Analyze a decklist against the given index.

    This is a convenience function that creates an analyzer and analyzes.
    """
    return DeckAnalyzer(index).analyze(text)

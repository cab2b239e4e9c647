from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from decklens.models.card import CardRecord, sort_colors


class AnalysisSource(str, Enum):
    """Whether an analysis was backed by the reference index."""

    FULL_INDEX = "full-index"
    STUB = "stub"


@dataclass(frozen=True, slots=True)
class DecklistEntry:
    """
    One parsed decklist line.

    Attributes:
        name: Card name as typed, trimmed but otherwise untouched
        count: Number of copies, 1 when the line has no leading count
    """

    name: str
    count: int = 1


@dataclass(frozen=True, slots=True)
class DeckAnalysisCard:
    """A decklist entry paired with whatever the index knows about it."""

    name: str
    count: int
    mana_value: float | None = None
    type_line: str | None = None
    types: tuple[str, ...] | None = None
    color_identity: tuple[str, ...] = ()

    @classmethod
    def from_entry(cls, entry: DecklistEntry, record: CardRecord | None) -> "DeckAnalysisCard":
        if record is None:
            return cls(name=entry.name, count=entry.count)
        return cls(
            name=entry.name,
            count=entry.count,
            mana_value=record.mana_value,
            type_line=record.display_type_line,
            types=record.types,
            color_identity=sort_colors(record.color_identity),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "manaValue": self.mana_value,
            "typeLine": self.type_line,
            "types": list(self.types) if self.types is not None else None,
            "colorIdentity": list(self.color_identity),
        }


@dataclass(frozen=True, slots=True)
class DeckAnalysis:
    """
    Deck-level statistics for one decklist.

    Attributes:
        total_cards: Sum of all entry counts, resolved or not
        avg_cmc: Count-weighted mean mana value over resolved entries,
            rounded to 2 decimals. None when nothing resolved
        colors: Union of resolved color identities in WUBRG order
        commander: Name of the first legendary creature in input order
        source: FULL_INDEX if the reference index was available, else STUB
        cards: One entry per decklist line, in input order
        unresolved: Names the index did not recognize (empty in stub mode)
    """

    total_cards: int
    avg_cmc: float | None
    colors: tuple[str, ...]
    commander: str | None
    source: AnalysisSource
    cards: tuple[DeckAnalysisCard, ...] = field(default_factory=tuple)
    unresolved: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Render the camelCase JSON shape served by the API."""
        return {
            "totalCards": self.total_cards,
            "avgCmc": self.avg_cmc,
            "colors": list(self.colors),
            "commander": self.commander,
            "source": self.source.value,
            "cards": [card.to_dict() for card in self.cards],
            "unresolved": list(self.unresolved),
        }

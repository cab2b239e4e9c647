from dataclasses import dataclass

# Canonical WUBRG ordering for color codes
COLOR_ORDER: tuple[str, ...] = ("W", "U", "B", "R", "G")


def sort_colors(colors: frozenset[str] | set[str]) -> tuple[str, ...]:
    """
    Order color codes as W, U, B, R, G.

    Unknown codes sort after the five colors, alphabetically.
    """
    return tuple(
        sorted(
            colors,
            key=lambda c: (COLOR_ORDER.index(c), c) if c in COLOR_ORDER else (len(COLOR_ORDER), c),
        )
    )


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    Static attributes of one card in the reference index.

    Attributes:
        name: Canonical card name, case preserved for display
        mana_value: Mana value, None for layouts that carry none
        color_identity: Color codes (W, U, B, R, G). Empty for colorless cards
        type_line: Full type line (e.g., "Legendary Creature — Angel Horror")
        types: Coarse type categories (e.g., ("Legendary", "Creature"))
    """

    name: str
    mana_value: float | None = None
    color_identity: frozenset[str] = frozenset()
    type_line: str | None = None
    types: tuple[str, ...] | None = None

    @property
    def is_legendary(self) -> bool:
        """True if this card can lead a Commander deck."""
        if self.type_line and "Legendary Creature" in self.type_line:
            return True
        return bool(self.types) and "Legendary" in self.types

    @property
    def display_type_line(self) -> str | None:
        """Type line, falling back to the joined coarse types."""
        if self.type_line is not None:
            return self.type_line
        if self.types is not None:
            return " ".join(self.types)
        return None

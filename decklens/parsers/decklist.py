"""
Parser for free-text decklists.

Format, one card per line:
    <count> <card name>
    <card name>

Example:
    1 Atraxa, Praetors' Voice
    2 Arcane Signet
    Sol Ring

Names are not validated here; resolution belongs to the analyzer.
"""

import re

from decklens.models.deck import DecklistEntry

# Pattern: "2 Arcane Signet"
# Groups: (count, card_name)
# A digits-only line does not match and is kept as a name.
# Counts are ASCII digits only; other scripts' digits stay part of the name.
COUNT_PREFIX_PATTERN = re.compile(r"^([0-9]+)\s+(.+)$")


def parse_decklist(text: str) -> list[DecklistEntry]:
    """
    Parse decklist text into entries.

    Args:
        text: Raw decklist, lines separated by newlines

    Returns:
        Entries in input order. Blank lines produce nothing, duplicates
        are kept as separate entries.
    """
    entries: list[DecklistEntry] = []

    for line in text.split("\n"):
        line = line.strip()

        if not line:
            continue

        match = COUNT_PREFIX_PATTERN.match(line)
        if match:
            count_str, name = match.groups()
            entries.append(DecklistEntry(name=name, count=int(count_str)))
        else:
            entries.append(DecklistEntry(name=line))

    return entries

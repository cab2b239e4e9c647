"""
MTGJSON AtomicCards trimmer.

Reduces AtomicCards.json to the small dataset read by the card index: one
record per card name with only the fields analysis and display need.

Input shape:
    {"meta": {...}, "data": {"<card name>": [<variant>, ...], ...}}

Output shape:
    {"meta": {generatedAt, commanderOnly, source, mtgjson}, "cards": [...]}
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Fields copied verbatim from a variant or face
_CARD_FIELDS = (
    "manaCost",
    "colors",
    "colorIdentity",
    "types",
    "supertypes",
    "subtypes",
    "keywords",
    "layout",
    "power",
    "toughness",
    "loyalty",
    "text",
    "type",
    "side",
)

_IDENTIFIER_FIELDS = (
    "scryfallId",
    "scryfallOracleId",
    "oracleId",
    "mtgjsonV4Id",
    "uuid",
)

COMMANDER_LEGAL = "Legal"


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in values.items() if v is not None}


def select_variant(variants: Any, commander_only: bool) -> dict[str, Any] | None:
    """
    Pick the variant that represents a card name.

    Args:
        variants: The AtomicCards list for one name
        commander_only: Only accept a variant that is Commander-legal

    Returns:
        The first variant, or under commander_only the first variant with
        legalities.commander == "Legal". None if nothing qualifies.
    """
    if not isinstance(variants, list) or not variants:
        return None
    if not commander_only:
        first = variants[0]
        return first if isinstance(first, dict) else None

    for variant in variants:
        if not isinstance(variant, dict):
            continue
        legalities = variant.get("legalities") or {}
        if legalities.get("commander") == COMMANDER_LEGAL:
            return variant
    return None


def _mana_value(card: dict[str, Any]) -> Any:
    """manaValue, or the legacy cmc field when manaValue is absent or null."""
    mana_value = card.get("manaValue")
    return mana_value if mana_value is not None else card.get("cmc")


def _trim_face(face: dict[str, Any]) -> dict[str, Any]:
    trimmed: dict[str, Any] = {
        "name": face.get("name") or face.get("faceName"),
        "manaValue": _mana_value(face),
    }
    trimmed.update({key: face.get(key) for key in _CARD_FIELDS})
    return _compact(trimmed)


def trim_card(name: str, card: dict[str, Any]) -> dict[str, Any]:
    """
    Reduce one AtomicCards variant to the trimmed record.

    The record name is the AtomicCards key, so split and double-faced
    cards keep their full "A // B" name.
    """
    trimmed: dict[str, Any] = {
        "name": name,
        "faceName": card.get("faceName"),
        "manaValue": _mana_value(card),
    }
    trimmed.update({key: card.get(key) for key in _CARD_FIELDS})

    legalities = card.get("legalities")
    if legalities is not None:
        trimmed["legalities"] = _compact({"commander": legalities.get("commander")})

    identifiers = card.get("identifiers")
    if identifiers is not None:
        trimmed["identifiers"] = _compact({key: identifiers.get(key) for key in _IDENTIFIER_FIELDS})

    faces = card.get("cardFaces")
    if faces is not None:
        trimmed["faces"] = [_trim_face(face) for face in faces]

    return _compact(trimmed)


def trim_atomic_data(
    atomic: dict[str, Any],
    *,
    commander_only: bool = False,
    source: str = "AtomicCards.json",
) -> dict[str, Any]:
    """
    Build the trimmed dataset document from decoded AtomicCards JSON.

    Raises:
        ValueError: If the document has no "data" object
    """
    data = atomic.get("data") if isinstance(atomic, dict) else None
    if not isinstance(data, dict):
        raise ValueError("AtomicCards input must be an object with a 'data' object")

    cards: list[dict[str, Any]] = []
    for name, variants in data.items():
        selected = select_variant(variants, commander_only)
        if selected is None:
            continue
        cards.append(trim_card(name, selected))

    return {
        "meta": {
            "generatedAt": datetime.now(UTC).isoformat(),
            "commanderOnly": commander_only,
            "source": source,
            "mtgjson": atomic.get("meta"),
        },
        "cards": cards,
    }


def trim_atomic_cards(input_path: Path, output_path: Path, *, commander_only: bool = False) -> int:
    """
    Trim an AtomicCards.json file.

    Args:
        input_path: MTGJSON AtomicCards.json
        output_path: Where to write the trimmed dataset
        commander_only: Keep only Commander-legal cards

    Returns:
        Number of cards written.

    Raises:
        FileNotFoundError: If input_path doesn't exist
        ValueError: If the input is not valid AtomicCards JSON
    """
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    with open(input_path, encoding="utf-8") as f:
        atomic = json.load(f)

    trimmed = trim_atomic_data(atomic, commander_only=commander_only, source=input_path.name)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(trimmed, f, ensure_ascii=False)

    kept = len(trimmed["cards"])
    logger.info("Trimmed %d cards -> %s", kept, output_path)
    return kept

"""
Card reference index.

Loads the trimmed MTGJSON dataset and answers case-insensitive lookups by
exact card name. A missing or unreadable dataset is not an error: loading
returns None and analysis runs in stub mode.
"""

import json
import logging
import math
from collections.abc import Iterable, Iterator
from pathlib import Path
from threading import Lock
from typing import Any

from decklens.config import settings
from decklens.models.card import CardRecord

logger = logging.getLogger(__name__)


class CardIndex:
    """
    Read-only mapping of card name to CardRecord.

    Keys are case-folded. When two records share a name, the first one wins.
    """

    def __init__(self, records: Iterable[CardRecord]) -> None:
        self._records: dict[str, CardRecord] = {}
        for record in records:
            key = record.name.casefold()
            if key not in self._records:
                self._records[key] = record

    def lookup(self, name: str) -> CardRecord | None:
        """Find a card by exact name, ignoring case."""
        return self._records.get(name.casefold())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CardRecord]:
        return iter(self._records.values())


def _optional_str_list(card: dict[str, Any], key: str) -> list[str] | None:
    value = card.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"Field '{key}' of {card.get('name')!r} must be a list of strings")
    return value


def card_record_from_json(card: dict[str, Any]) -> CardRecord:
    """
    Build a CardRecord from one trimmed dataset entry.

    Raises:
        ValueError: If the entry has no name or a field has the wrong type
    """
    if not isinstance(card, dict):
        raise ValueError(f"Card entry must be an object, got {type(card).__name__}")

    name = card.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError(f"Card entry without a name: {card!r:.200}")

    mana_value = card.get("manaValue")
    if mana_value is not None and (
        isinstance(mana_value, bool) or not isinstance(mana_value, int | float)
    ):
        raise ValueError(f"manaValue of {name!r} must be a number")
    if mana_value is not None and not math.isfinite(mana_value):
        raise ValueError(f"manaValue of {name!r} must be finite")

    type_line = card.get("type")
    if type_line is not None and not isinstance(type_line, str):
        raise ValueError(f"type of {name!r} must be a string")

    types = _optional_str_list(card, "types")
    color_identity = _optional_str_list(card, "colorIdentity") or []

    return CardRecord(
        name=name,
        mana_value=float(mana_value) if mana_value is not None else None,
        color_identity=frozenset(color_identity),
        type_line=type_line,
        types=tuple(types) if types is not None else None,
    )


def parse_card_index(data: Any) -> CardIndex:
    """
    Build an index from decoded dataset JSON.

    Raises:
        ValueError: If the document is not {"cards": [...]} or an entry is malformed
    """
    if not isinstance(data, dict) or not isinstance(data.get("cards"), list):
        raise ValueError("Dataset must be an object with a 'cards' array")

    return CardIndex(card_record_from_json(card) for card in data["cards"])


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


def load_card_index(path: Path | None = None) -> CardIndex | None:
    """
    Load the card index from a trimmed dataset file.

    Args:
        path: Path to JSON file. Defaults to settings.card_index_path

    Returns:
        The loaded index, or None if the file is missing or malformed.
        Malformed files are logged at ERROR level.
    """
    if path is None:
        path = settings.card_index_path

    if not path.exists():
        logger.info(
            "CARD_INDEX_MISSING",
            extra={"path": str(path)},
        )
        return None

    try:
        with open(path, encoding="utf-8") as f:
            # NaN and Infinity are not JSON
            data = json.load(f, parse_constant=_reject_constant)
        index = parse_card_index(data)
    except (OSError, ValueError):
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
        logger.exception(
            "CARD_INDEX_LOAD_FAILED",
            extra={"path": str(path)},
        )
        return None

    logger.info("Loaded %d cards from %s", len(index), path)
    return index


def _file_stamp(path: Path) -> tuple[int, int] | None:
    """(mtime_ns, size) of a file, or None if it can't be stat'ed."""
    try:
        stat = path.stat()
    except OSError:
        return None
    return stat.st_mtime_ns, stat.st_size


class CardIndexCache:
    """
    Process-wide slot holding the first successfully loaded index.

    Failed loads are not cached, so a dataset that appears later is picked
    up on the next call. A file that failed to load is not re-read until
    its mtime or size changes. Loading happens under a lock: concurrent
    first callers read the file once and never see a partial index.
    """

    def __init__(self) -> None:
        self._index: CardIndex | None = None
        self._failed: tuple[Path, tuple[int, int]] | None = None
        self._lock = Lock()

    def get(self, path: Path | None = None) -> CardIndex | None:
        index = self._index
        if index is not None:
            return index

        if path is None:
            path = settings.card_index_path

        with self._lock:
            if self._index is not None:
                return self._index

            stamp = _file_stamp(path)
            if stamp is not None and self._failed == (path, stamp):
                return None

            self._index = load_card_index(path)
            if self._index is None and stamp is not None:
                self._failed = (path, stamp)
            else:
                self._failed = None
            return self._index

    @property
    def loaded(self) -> bool:
        return self._index is not None

    def clear(self) -> None:
        """Drop the cached index. The next get() reloads from disk."""
        with self._lock:
            self._index = None
            self._failed = None


_cache = CardIndexCache()


def get_card_index() -> CardIndex | None:
    """
    Get the cached card index, loading it on first use.

    Returns:
        The index, or None when no usable dataset exists (stub mode).
    """
    return _cache.get()


def clear_card_index_cache() -> None:
    """Invalidate the process-wide card index."""
    _cache.clear()

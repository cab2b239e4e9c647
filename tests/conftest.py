import json
from pathlib import Path
from typing import Any

import pytest

from decklens.config import settings
from decklens.services.card_index import CardIndex, clear_card_index_cache, load_card_index


@pytest.fixture(autouse=True)
def reset_card_index_cache():
    """Clear the process-wide card index between tests.

    Tests load different datasets from tmp paths; a cached index from one
    test would otherwise leak into the next.
    """
    clear_card_index_cache()
    yield
    clear_card_index_cache()


@pytest.fixture
def sample_dataset() -> dict[str, Any]:
    """Trimmed MTGJSON dataset with three Commander staples."""
    return {
        "meta": {"commanderOnly": False, "source": "AtomicCards.json"},
        "cards": [
            {
                "name": "Atraxa, Praetors' Voice",
                "manaValue": 4,
                "colorIdentity": ["W", "U", "B", "G"],
                "type": "Legendary Creature — Angel Horror",
                "types": ["Legendary", "Creature"],
            },
            {
                "name": "Sol Ring",
                "manaValue": 1,
                "colorIdentity": [],
                "type": "Artifact",
                "types": ["Artifact"],
            },
            {
                "name": "Arcane Signet",
                "manaValue": 2,
                "colorIdentity": ["W", "U", "B", "G"],
                "type": "Artifact",
                "types": ["Artifact"],
            },
        ],
    }


@pytest.fixture
def dataset_file(sample_dataset: dict[str, Any], tmp_path: Path) -> Path:
    """Write the sample dataset to a temporary file."""
    path = tmp_path / "atomic-trimmed.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(sample_dataset, f)
    return path


@pytest.fixture
def card_index(dataset_file: Path) -> CardIndex:
    index = load_card_index(dataset_file)
    assert index is not None
    return index


@pytest.fixture
def configured_dataset(dataset_file: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point settings at the sample dataset."""
    monkeypatch.setattr(settings, "card_index_path", dataset_file)
    return dataset_file


@pytest.fixture
def missing_dataset(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point settings at a dataset path that doesn't exist."""
    path = tmp_path / "missing" / "atomic-trimmed.json"
    monkeypatch.setattr(settings, "card_index_path", path)
    return path


@pytest.fixture
def scenario_decklist() -> str:
    return "1 Atraxa, Praetors' Voice\n1 Sol Ring\n2 Arcane Signet\n1 Unknown Card"

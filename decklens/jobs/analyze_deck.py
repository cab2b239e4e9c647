"""
Analyze a decklist file from the command line.

Prints the same JSON report the API serves.

Usage:
    python -m decklens.jobs.analyze_deck my-deck.txt --dataset data/mtgjson/atomic-trimmed.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from decklens.config import settings
from decklens.models.deck import DeckAnalysis
from decklens.services.card_index import load_card_index
from decklens.services.deck_analyzer import analyze_decklist

logger = logging.getLogger(__name__)


def run_analysis(decklist_path: Path, dataset_path: Path) -> DeckAnalysis:
    """Analyze a decklist file against a dataset file."""
    text = decklist_path.read_text(encoding="utf-8-sig")
    index = load_card_index(dataset_path)
    if index is None:
        logger.warning("No card dataset at %s, running in stub mode", dataset_path)
    return analyze_decklist(text, index)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Analyze a Commander decklist")
    parser.add_argument("decklist", type=Path, help="Decklist text file, one card per line")
    parser.add_argument(
        "--dataset",
        type=Path,
        default=settings.card_index_path,
        help="Trimmed card dataset",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.decklist.exists():
        logger.error("Decklist not found: %s", args.decklist)
        return 1

    analysis = run_analysis(args.decklist, args.dataset)
    json.dump(analysis.to_dict(), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

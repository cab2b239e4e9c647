"""
Trim MTGJSON AtomicCards into the card index dataset.

Usage:
    python -m decklens.jobs.trim_cards --input data/mtgjson/AtomicCards.json \
        --output data/mtgjson/atomic-trimmed.json --commander-only
"""

import argparse
import logging
from pathlib import Path

from decklens.config import settings
from decklens.services.dataset_trimmer import trim_atomic_cards

logger = logging.getLogger(__name__)


def run_trim(input_path: Path, output_path: Path, *, commander_only: bool = False) -> int:
    """Trim AtomicCards and return the number of cards kept."""
    logger.info(
        "Trimming %s (commander_only=%s)...",
        input_path,
        commander_only,
    )

    try:
        return trim_atomic_cards(input_path, output_path, commander_only=commander_only)
    except (OSError, ValueError) as e:
        logger.error("Failed to trim card data: %s", e)
        raise


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Trim MTGJSON AtomicCards for DeckLens")
    parser.add_argument(
        "--input",
        type=Path,
        default=settings.mtgjson_data_dir / "AtomicCards.json",
        help="Path to AtomicCards.json",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.card_index_path,
        help="Output path for the trimmed dataset",
    )
    scope = parser.add_mutually_exclusive_group()
    scope.add_argument(
        "--commander-only",
        dest="commander_only",
        action="store_true",
        help="Keep only Commander-legal cards",
    )
    scope.add_argument(
        "--all",
        dest="commander_only",
        action="store_false",
        help="Keep all cards (default)",
    )
    parser.set_defaults(commander_only=False)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_trim(args.input, args.output, commander_only=args.commander_only)


if __name__ == "__main__":
    main()

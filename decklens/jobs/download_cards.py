"""
Download MTGJSON card data.

Run this job to fetch AtomicCards.json (verified against its published
sha256) before trimming it for the card index.

Usage:
    python -m decklens.jobs.download_cards --dataset atomic --dir data/mtgjson --force
"""

import argparse
import asyncio
import logging
from pathlib import Path

from decklens.config import settings
from decklens.services.mtgjson_download import DATASETS, download_dataset

logger = logging.getLogger(__name__)


async def run_download(dataset: str, data_dir: Path, *, force: bool = False) -> Path:
    """Download and verify one MTGJSON dataset."""
    logger.info("Fetching MTGJSON %s dataset...", dataset)

    try:
        path = await download_dataset(dataset, data_dir, force=force)
        logger.info("Card data ready at %s", path)
    except Exception as e:
        logger.error("Failed to download card data: %s", e)
        raise

    return path


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Download MTGJSON card data")
    parser.add_argument(
        "--dataset",
        choices=sorted(DATASETS),
        default="atomic",
        help="Dataset to fetch (default: atomic)",
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=settings.mtgjson_data_dir,
        help="Directory to store the file",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Download even if an existing file matches the checksum",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download(args.dataset, args.dir, force=args.force))


if __name__ == "__main__":
    main()

"""
MTGJSON dataset download.

Fetches MTGJSON files alongside their published sha256 and verifies the
download before reporting success. An existing file that already matches
the published checksum is not downloaded again.
"""

import hashlib
import logging
import re
from dataclasses import dataclass
from pathlib import Path

import httpx

from decklens.config import settings

logger = logging.getLogger(__name__)

_SHA256_PATTERN = re.compile(r"^[a-fA-F0-9]{64}$")
_CHUNK_SIZE = 8192


class DatasetFetchError(Exception):
    """Raised when an MTGJSON file or its checksum cannot be fetched."""

    pass


class ChecksumMismatchError(Exception):
    """Raised when a downloaded file does not match its published sha256."""

    def __init__(self, path: Path, expected: str, actual: str) -> None:
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(f"Checksum mismatch for {path}. Expected {expected}, got {actual}")


@dataclass(frozen=True, slots=True)
class MtgjsonDataset:
    """A downloadable MTGJSON file."""

    file_name: str

    def url(self, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/{self.file_name}"

    def sha256_url(self, base_url: str) -> str:
        return f"{self.url(base_url)}.sha256"


DATASETS: dict[str, MtgjsonDataset] = {
    "atomic": MtgjsonDataset(file_name="AtomicCards.json"),
    "all-printings": MtgjsonDataset(file_name="AllPrintings.json"),
}


def file_sha256(path: Path) -> str:
    """Hex sha256 digest of a file, read in chunks."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verify_checksum(path: Path, expected_sha256: str) -> bool:
    """True if the file's sha256 matches, ignoring hex case."""
    return file_sha256(path).lower() == expected_sha256.lower()


async def fetch_sha256(client: httpx.AsyncClient, url: str) -> str:
    """
    Fetch a published sha256 checksum.

    Raises:
        DatasetFetchError: If the request fails or the body is not a sha256 hex digest
    """
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise DatasetFetchError(
            f"Failed to fetch sha256 from {url}: HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise DatasetFetchError(f"Failed to fetch sha256 from {url}: {e}") from e

    text = response.text.strip()
    if not _SHA256_PATTERN.match(text):
        raise DatasetFetchError(f"Unexpected sha256 format from {url}: {text[:80]}")
    return text


async def download_dataset(
    dataset: str = "atomic",
    data_dir: Path | None = None,
    *,
    force: bool = False,
    base_url: str | None = None,
) -> Path:
    """
    Download an MTGJSON dataset and verify its checksum.

    Args:
        dataset: Dataset key ("atomic" or "all-printings")
        data_dir: Directory to store the file. Defaults to settings.mtgjson_data_dir
        force: If True, download even if an existing file matches
        base_url: MTGJSON API root. Defaults to settings.mtgjson_base_url

    Returns:
        Path to the verified file.

    Raises:
        ValueError: If dataset is not a known key
        DatasetFetchError: If the checksum or file cannot be fetched
        ChecksumMismatchError: If the downloaded file fails verification
    """
    if dataset not in DATASETS:
        raise ValueError(f"Invalid dataset: {dataset}. Must be one of: {sorted(DATASETS)}")

    info = DATASETS[dataset]
    data_dir = data_dir if data_dir is not None else settings.mtgjson_data_dir
    base_url = base_url if base_url is not None else settings.mtgjson_base_url

    data_dir.mkdir(parents=True, exist_ok=True)
    destination = data_dir / info.file_name
    # Downloads land here first; destination is only replaced once verified
    partial = destination.with_name(destination.name + ".part")

    async with httpx.AsyncClient(timeout=30.0) as client:
        expected = await fetch_sha256(client, info.sha256_url(base_url))

        if destination.exists() and not force and verify_checksum(destination, expected):
            logger.info("%s already up to date (sha256 match)", destination.name)
            return destination

        logger.info("Downloading %s to %s", info.file_name, destination)
        try:
            async with client.stream("GET", info.url(base_url), timeout=300.0) as response:
                response.raise_for_status()
                with open(partial, "wb") as f:
                    async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                        f.write(chunk)
        except httpx.HTTPStatusError as e:
            partial.unlink(missing_ok=True)
            raise DatasetFetchError(
                f"Failed to download {info.file_name}: HTTP {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            partial.unlink(missing_ok=True)
            raise DatasetFetchError(f"Failed to download {info.file_name}: {e}") from e

    actual = file_sha256(partial)
    if actual.lower() != expected.lower():
        partial.unlink()
        raise ChecksumMismatchError(destination, expected, actual)

    partial.replace(destination)

    logger.info("Downloaded and verified %s", destination)
    return destination

"""Tests for MTGJSON dataset download."""

import hashlib
from pathlib import Path

import httpx
import pytest
import respx

from decklens.services.mtgjson_download import (
    DATASETS,
    ChecksumMismatchError,
    DatasetFetchError,
    MtgjsonDataset,
    download_dataset,
    file_sha256,
    verify_checksum,
)

BASE_URL = "https://mtgjson.test/api/v5"
ATOMIC_URL = f"{BASE_URL}/AtomicCards.json"
SHA_URL = f"{ATOMIC_URL}.sha256"

PAYLOAD = b'{"meta": {}, "data": {}}'
PAYLOAD_SHA = hashlib.sha256(PAYLOAD).hexdigest()


class TestDatasets:
    def test_urls(self) -> None:
        atomic = DATASETS["atomic"]

        assert atomic.url(BASE_URL) == ATOMIC_URL
        assert atomic.sha256_url(BASE_URL + "/") == SHA_URL

    def test_all_printings(self) -> None:
        assert DATASETS["all-printings"].file_name == "AllPrintings.json"

    def test_dataset_is_identified_by_file_name(self) -> None:
        assert DATASETS["atomic"] == MtgjsonDataset(file_name="AtomicCards.json")


class TestChecksum:
    def test_file_sha256(self, tmp_path: Path) -> None:
        path = tmp_path / "file.json"
        path.write_bytes(PAYLOAD)

        assert file_sha256(path) == PAYLOAD_SHA

    def test_verify_ignores_case(self, tmp_path: Path) -> None:
        path = tmp_path / "file.json"
        path.write_bytes(PAYLOAD)

        assert verify_checksum(path, PAYLOAD_SHA.upper())
        assert not verify_checksum(path, "0" * 64)


class TestDownloadDataset:
    @respx.mock
    async def test_downloads_and_verifies(self, tmp_path: Path) -> None:
        respx.get(SHA_URL).mock(return_value=httpx.Response(200, text=PAYLOAD_SHA + "\n"))
        respx.get(ATOMIC_URL).mock(return_value=httpx.Response(200, content=PAYLOAD))

        path = await download_dataset("atomic", tmp_path, base_url=BASE_URL)

        assert path == tmp_path / "AtomicCards.json"
        assert path.read_bytes() == PAYLOAD
        assert not (tmp_path / "AtomicCards.json.part").exists()

    @respx.mock(assert_all_called=False)
    async def test_skips_up_to_date_file(self, tmp_path: Path, respx_mock: respx.MockRouter) -> None:
        (tmp_path / "AtomicCards.json").write_bytes(PAYLOAD)
        respx_mock.get(SHA_URL).mock(return_value=httpx.Response(200, text=PAYLOAD_SHA))
        file_route = respx_mock.get(ATOMIC_URL).mock(return_value=httpx.Response(200, content=PAYLOAD))

        await download_dataset("atomic", tmp_path, base_url=BASE_URL)

        assert not file_route.called

    @respx.mock
    async def test_force_redownloads(self, tmp_path: Path) -> None:
        (tmp_path / "AtomicCards.json").write_bytes(PAYLOAD)
        respx.get(SHA_URL).mock(return_value=httpx.Response(200, text=PAYLOAD_SHA))
        file_route = respx.get(ATOMIC_URL).mock(return_value=httpx.Response(200, content=PAYLOAD))

        await download_dataset("atomic", tmp_path, force=True, base_url=BASE_URL)

        assert file_route.called

    @respx.mock
    async def test_replaces_stale_file(self, tmp_path: Path) -> None:
        (tmp_path / "AtomicCards.json").write_bytes(b"stale")
        respx.get(SHA_URL).mock(return_value=httpx.Response(200, text=PAYLOAD_SHA))
        respx.get(ATOMIC_URL).mock(return_value=httpx.Response(200, content=PAYLOAD))

        path = await download_dataset("atomic", tmp_path, base_url=BASE_URL)

        assert path.read_bytes() == PAYLOAD

    @respx.mock
    async def test_checksum_mismatch_raises(self, tmp_path: Path) -> None:
        respx.get(SHA_URL).mock(return_value=httpx.Response(200, text="a" * 64))
        respx.get(ATOMIC_URL).mock(return_value=httpx.Response(200, content=PAYLOAD))

        with pytest.raises(ChecksumMismatchError, match="Checksum mismatch"):
            await download_dataset("atomic", tmp_path, base_url=BASE_URL)

    @respx.mock
    async def test_checksum_mismatch_keeps_previous_file(self, tmp_path: Path) -> None:
        (tmp_path / "AtomicCards.json").write_bytes(b"previous")
        respx.get(SHA_URL).mock(return_value=httpx.Response(200, text="a" * 64))
        respx.get(ATOMIC_URL).mock(return_value=httpx.Response(200, content=PAYLOAD))

        with pytest.raises(ChecksumMismatchError):
            await download_dataset("atomic", tmp_path, force=True, base_url=BASE_URL)

        assert (tmp_path / "AtomicCards.json").read_bytes() == b"previous"
        assert not (tmp_path / "AtomicCards.json.part").exists()

    @respx.mock
    async def test_malformed_checksum_raises(self, tmp_path: Path) -> None:
        respx.get(SHA_URL).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(DatasetFetchError, match="Unexpected sha256 format"):
            await download_dataset("atomic", tmp_path, base_url=BASE_URL)

    @respx.mock
    async def test_checksum_http_error_raises(self, tmp_path: Path) -> None:
        respx.get(SHA_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(DatasetFetchError, match="HTTP 404"):
            await download_dataset("atomic", tmp_path, base_url=BASE_URL)

    @respx.mock
    async def test_file_http_error_raises(self, tmp_path: Path) -> None:
        respx.get(SHA_URL).mock(return_value=httpx.Response(200, text=PAYLOAD_SHA))
        respx.get(ATOMIC_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(DatasetFetchError, match="Failed to download AtomicCards.json"):
            await download_dataset("atomic", tmp_path, base_url=BASE_URL)

    @respx.mock
    async def test_file_http_error_keeps_previous_file(self, tmp_path: Path) -> None:
        (tmp_path / "AtomicCards.json").write_bytes(b"previous")
        respx.get(SHA_URL).mock(return_value=httpx.Response(200, text=PAYLOAD_SHA))
        respx.get(ATOMIC_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(DatasetFetchError):
            await download_dataset("atomic", tmp_path, base_url=BASE_URL)

        assert (tmp_path / "AtomicCards.json").read_bytes() == b"previous"
        assert not (tmp_path / "AtomicCards.json.part").exists()

    async def test_invalid_dataset_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Invalid dataset"):
            await download_dataset("everything", tmp_path, base_url=BASE_URL)

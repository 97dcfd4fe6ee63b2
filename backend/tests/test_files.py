"""Tests for the file blob store and its eviction policy."""

import pytest

from bagrut_portal.storage import FileBlobStore, StorageQuotaError
from bagrut_portal.storage.files import decode_data_url, encode_data_url, file_timestamp

# "data:text/plain;base64," + base64 of 10 bytes = 23 + 16 chars
TEN_BYTES = b"0123456789"
BLOB_CHARS = len(encode_data_url(TEN_BYTES, "text/plain"))


async def test_store_and_resolve(store):
    files = FileBlobStore(store)

    url = await files.store_file(b"%PDF-1.4 exam", "application/pdf")

    assert url.startswith("local://file_")
    data_url = await files.get_file_data(url)
    assert decode_data_url(data_url) == ("application/pdf", b"%PDF-1.4 exam")


async def test_external_urls_pass_through(store):
    files = FileBlobStore(store)
    external = "https://example.com/math_2023.pdf"

    assert await files.get_file_data(external) == external
    await files.delete_file(external)
    await files.delete_file(None)


async def test_delete_removes_blob(store):
    files = FileBlobStore(store)
    url = await files.store_file(TEN_BYTES, "text/plain")

    await files.delete_file(url)

    assert await files.get_file_data(url) is None


async def test_locator_cannot_reach_collections(seeded_store):
    files = FileBlobStore(seeded_store)

    assert await files.get_file_data("local://bagrut_users") is None
    await files.delete_file("local://bagrut_users")
    assert await seeded_store.get_item("bagrut_users") is not None


async def test_evicts_oldest_files_first(make_store):
    store = make_store(quota_chars=BLOB_CHARS * 5)
    blob = encode_data_url(TEN_BYTES, "text/plain")
    for key in ("file_3000_ccccccc", "file_1000_aaaaaaa", "file_2000_bbbbbbb",
                "file_4000_ddddddd", "file_5000_eeeeeee"):
        await store.set_item(key, blob)
    files = FileBlobStore(store, eviction_fraction=0.2)

    url = await files.store_file(TEN_BYTES, "text/plain")

    keys = await store.keys("file_")
    assert "file_1000_aaaaaaa" not in keys
    assert len(keys) == 5
    assert url.removeprefix("local://") in keys


async def test_evicts_at_least_one_file(make_store):
    store = make_store(quota_chars=BLOB_CHARS * 2)
    blob = encode_data_url(TEN_BYTES, "text/plain")
    await store.set_item("file_1000_aaaaaaa", blob)
    await store.set_item("file_2000_bbbbbbb", blob)
    files = FileBlobStore(store, eviction_fraction=0.2)

    await files.store_file(TEN_BYTES, "text/plain")

    keys = await store.keys("file_")
    assert "file_1000_aaaaaaa" not in keys
    assert "file_2000_bbbbbbb" in keys


async def test_fails_without_partial_writes(make_store):
    store = make_store(quota_chars=BLOB_CHARS * 2)
    blob = encode_data_url(TEN_BYTES, "text/plain")
    await store.set_item("file_1000_aaaaaaa", blob)
    await store.set_item("file_2000_bbbbbbb", blob)
    files = FileBlobStore(store, eviction_fraction=0.2)

    with pytest.raises(StorageQuotaError, match="even after clearing space"):
        await files.store_file(TEN_BYTES * 10, "text/plain")

    # Evictions are rolled back along with the failed write
    assert await store.keys("file_") == ["file_1000_aaaaaaa", "file_2000_bbbbbbb"]


async def test_fails_when_nothing_to_evict(make_store):
    store = make_store(quota_chars=20)
    await store.set_item("bagrut_users", "[]")
    files = FileBlobStore(store)

    with pytest.raises(StorageQuotaError, match="no files to clear"):
        await files.store_file(TEN_BYTES, "text/plain")

    assert await store.keys("file_") == []


def test_file_timestamp():
    assert file_timestamp("file_1700000000000_abc1234") == 1700000000000
    assert file_timestamp("file_garbage") == 0


def test_decode_rejects_non_data_urls():
    with pytest.raises(ValueError):
        decode_data_url("https://example.com/a.pdf")
    with pytest.raises(ValueError):
        decode_data_url("data:text/plain,hello")

"""
File blob store.

Uploaded files are kept in the same local store as the collections, as
base64 data URLs under ``file_<millis>_<random>`` keys. Callers get back a
``local://<file id>`` locator; anything that does not carry that scheme is
an external URL and is passed through untouched.
"""

import base64
import binascii
import logging
import math
import secrets
import string
import time

from bagrut_portal.storage.local_store import LocalStore, QuotaExceededError, StoreTransaction

logger = logging.getLogger(__name__)

LOCAL_SCHEME = "local://"
FILE_KEY_PREFIX = "file_"

_ID_ALPHABET = string.ascii_lowercase + string.digits


class StorageQuotaError(Exception):
    """A file could not be stored, even after evicting older files."""


def is_local_url(url: str | None) -> bool:
    return bool(url) and url.startswith(LOCAL_SCHEME)


def file_id_from_url(url: str) -> str:
    return url[len(LOCAL_SCHEME):]


def new_file_id() -> str:
    """``file_<epoch millis>_<7 random base36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
    return f"{FILE_KEY_PREFIX}{int(time.time() * 1000)}_{suffix}"


def file_timestamp(file_id: str) -> int:
    """Timestamp embedded in a file id, 0 when it cannot be parsed."""
    parts = file_id.split("_")
    try:
        return int(parts[1])
    except (IndexError, ValueError):
        return 0


def encode_data_url(content: bytes, content_type: str) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    """
    Split a base64 data URL into (content_type, raw bytes).

    Raises ValueError on anything that is not a base64 data URL.
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")
    header, payload = data_url[len("data:"):].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Data URL is not base64 encoded")
    content_type = header[: -len(";base64")] or "application/octet-stream"
    try:
        return content_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


class FileBlobStore:
    """Stores, resolves and deletes files kept inside the local store."""

    def __init__(self, store: LocalStore, eviction_fraction: float = 0.2):
        self.store = store
        self.eviction_fraction = eviction_fraction

    async def store_file(self, content: bytes, content_type: str = "application/octet-stream") -> str:
        """
        Persist a file and return its ``local://`` locator.

        When the store is full, the oldest share of stored files is evicted
        and the write is retried once. If it still does not fit the whole
        attempt is rolled back, evictions included.
        """
        file_id = new_file_id()
        data_url = encode_data_url(content, content_type)

        async with self.store.transaction() as tx:
            try:
                await tx.set_item(file_id, data_url)
            except QuotaExceededError:
                logger.warning("Storage quota exceeded, trying to clear space for %s", file_id)
                evicted = await self._evict_oldest(tx)
                if not evicted:
                    raise StorageQuotaError("Storage quota exceeded and no files to clear")
                try:
                    await tx.set_item(file_id, data_url)
                except QuotaExceededError as e:
                    raise StorageQuotaError("Storage quota exceeded even after clearing space") from e

        logger.info("Stored file %s (%d bytes, %s)", file_id, len(content), content_type)
        return f"{LOCAL_SCHEME}{file_id}"

    async def get_file_data(self, url: str) -> str | None:
        """
        Resolve a locator to its data URL.

        External URLs come back unchanged; unknown locators give None.
        """
        if not is_local_url(url):
            return url
        file_id = file_id_from_url(url)
        if not file_id.startswith(FILE_KEY_PREFIX):
            return None
        return await self.store.get_item(file_id)

    async def delete_file(self, url: str | None) -> None:
        """Remove a locally stored file. External URLs are left alone."""
        if not is_local_url(url):
            return
        file_id = file_id_from_url(url)
        if not file_id.startswith(FILE_KEY_PREFIX):
            return
        await self.store.remove_item(file_id)
        logger.info("Deleted file %s", file_id)

    async def _evict_oldest(self, tx: StoreTransaction) -> list[str]:
        keys = await tx.keys(FILE_KEY_PREFIX)
        if not keys:
            return []
        keys.sort(key=file_timestamp)
        remove_count = max(1, math.floor(len(keys) * self.eviction_fraction))
        evicted = keys[:remove_count]
        for key in evicted:
            await tx.remove_item(key)
        logger.info("Evicted %d of %d stored files", len(evicted), len(keys))
        return evicted

"""Local key-value storage: collections, file blobs and fixtures."""

from functools import lru_cache

from bagrut_portal.config import get_settings
from bagrut_portal.storage.files import FileBlobStore, StorageQuotaError
from bagrut_portal.storage.local_store import LocalStore, QuotaExceededError, StoreTransaction


@lru_cache
def get_local_store() -> LocalStore:
    """Process-wide store bound to the configured database."""
    from bagrut_portal.db.session import AsyncSessionLocal

    return LocalStore(AsyncSessionLocal, quota_chars=get_settings().storage_quota_chars)


@lru_cache
def get_file_store() -> FileBlobStore:
    """Process-wide file blob store sharing the local store."""
    return FileBlobStore(get_local_store(), eviction_fraction=get_settings().file_eviction_fraction)


__all__ = [
    "FileBlobStore",
    "LocalStore",
    "QuotaExceededError",
    "StorageQuotaError",
    "StoreTransaction",
    "get_file_store",
    "get_local_store",
]

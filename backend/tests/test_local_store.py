"""Tests for the key-value store underneath every collection."""

import pytest

from bagrut_portal.storage import QuotaExceededError


async def test_set_get_remove(store):
    assert await store.get_item("bagrut_subjects") is None

    await store.set_item("bagrut_subjects", "[]")
    assert await store.get_item("bagrut_subjects") == "[]"

    await store.set_item("bagrut_subjects", '[{"id": "subject-1"}]')
    assert await store.get_item("bagrut_subjects") == '[{"id": "subject-1"}]'

    await store.remove_item("bagrut_subjects")
    assert await store.get_item("bagrut_subjects") is None


async def test_keys_filters_by_literal_prefix(store):
    await store.set_item("file_1_aaaaaaa", "x")
    await store.set_item("file_2_bbbbbbb", "y")
    await store.set_item("fileX", "z")
    await store.set_item("bagrut_users", "[]")

    assert await store.keys("file_") == ["file_1_aaaaaaa", "file_2_bbbbbbb"]
    assert len(await store.keys()) == 4


async def test_quota_counts_every_key(make_store):
    store = make_store(quota_chars=10)
    await store.set_item("a", "12345")
    await store.set_item("b", "12345")

    with pytest.raises(QuotaExceededError):
        await store.set_item("c", "1")

    assert await store.get_item("c") is None
    assert await store.used_chars() == 10


async def test_quota_ignores_value_being_replaced(make_store):
    store = make_store(quota_chars=10)
    await store.set_item("a", "1234567890")

    await store.set_item("a", "0987654321")

    assert await store.get_item("a") == "0987654321"


async def test_transaction_rolls_back_on_error(store):
    await store.set_item("bagrut_exams", "[]")

    with pytest.raises(RuntimeError):
        async with store.transaction() as tx:
            await tx.set_item("bagrut_exams", '[{"id": "exam-1"}]')
            await tx.remove_item("bagrut_exams")
            raise RuntimeError("boom")

    assert await store.get_item("bagrut_exams") == "[]"

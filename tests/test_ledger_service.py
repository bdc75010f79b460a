"""Ledger access layer against the in-memory store."""

import asyncio

import pytest

from mxpbot.core.exceptions import StoreUnavailable
from mxpbot.services import ledger

pytestmark = pytest.mark.asyncio


async def test_read_balance_creates_zero_record(store):
    assert await ledger.read_balance(store, "42") == 0
    assert store.records["42"].points == 0
    # Second read finds the record instead of inserting again
    assert await ledger.read_balance(store, "42") == 0
    assert store.calls.count("insert") == 1


async def test_read_balance_returns_existing_points(store):
    await ledger.adjust_balance(store, "7", "seven", 15)
    store.calls.clear()
    assert await ledger.read_balance(store, "7") == 15
    assert "insert" not in store.calls


async def test_concurrent_reads_create_one_record(store):
    results = await asyncio.gather(*(ledger.read_balance(store, "9") for _ in range(10)))
    assert results == [0] * 10
    assert list(store.records) == ["9"]


async def test_adjust_balance_upserts_and_sets_name(store):
    assert await ledger.adjust_balance(store, "5", "old", 10) == 10
    assert await ledger.adjust_balance(store, "5", "new", -4) == 6
    assert store.records["5"].user_name == "new"


async def test_adjust_balance_allows_negative(store):
    assert await ledger.adjust_balance(store, "5", "x", -5) == -5


async def test_concurrent_adjustments_sum(store):
    deltas = [3, -1, 7, 10, -4, 2, 2, -9, 5, 1] * 5
    await asyncio.gather(*(ledger.adjust_balance(store, "1", "u", d) for d in deltas))
    assert store.records["1"].points == sum(deltas)
    # One store call per adjustment, no separate read
    assert store.calls.count("find_one_and_update") == len(deltas)
    assert "find_one" not in store.calls


async def test_store_unavailable_propagates(store):
    store.unavailable = True
    with pytest.raises(StoreUnavailable):
        await ledger.read_balance(store, "1")
    with pytest.raises(StoreUnavailable):
        await ledger.adjust_balance(store, "1", "u", 1)


async def test_list_balances(store):
    assert await ledger.list_balances(store) == []
    await ledger.adjust_balance(store, "1", "a", 1)
    await ledger.adjust_balance(store, "2", "b", 2)
    assert sorted(r.points for r in await ledger.list_balances(store)) == [1, 2]

"""Ledger access layer: read-or-create and atomic adjust-and-upsert of MXP balances."""

from mxpbot.core.exceptions import DuplicateRecord
from mxpbot.core.logging import get_logger
from mxpbot.db.store import BalanceRecord, LedgerStore

log = get_logger(__name__)


async def read_balance(store: LedgerStore, user_id: str) -> int:
    """Return the user's points, creating a zero-balance record if none exists."""
    record = await store.find_one(user_id)
    if record:
        return record.points
    try:
        await store.insert(user_id)
    except DuplicateRecord:
        # Another message created it between our read and insert
        record = await store.find_one(user_id)
        return record.points if record else 0
    log.info("ledger_record_created", user_id=user_id)
    return 0


async def adjust_balance(store: LedgerStore, user_id: str, user_name: str | None, delta: int) -> int:
    """Add delta (may be negative) to the user's points and return the new total."""
    record = await store.find_one_and_update(user_id, delta, user_name)
    log.info("ledger_adjusted", user_id=user_id, delta=delta, points=record.points)
    return record.points


async def list_balances(store: LedgerStore) -> list[BalanceRecord]:
    return await store.find_all()

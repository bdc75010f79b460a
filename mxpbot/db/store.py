"""Store collaborator: the four MongoDB operations the ledger needs."""

from datetime import datetime
from typing import Protocol

from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from mxpbot.core.exceptions import DuplicateRecord, StoreUnavailable
from mxpbot.models.ledger_record import LedgerRecord


class BalanceRecord(Protocol):
    user_id: str
    user_name: str | None
    points: int


class LedgerStore(Protocol):
    async def find_one(self, user_id: str) -> BalanceRecord | None: ...

    async def insert(self, user_id: str, user_name: str | None = None) -> BalanceRecord: ...

    async def find_one_and_update(self, user_id: str, increment: int, user_name: str | None) -> BalanceRecord: ...

    async def find_all(self) -> list[BalanceRecord]: ...


class BeanieLedgerStore:
    """LedgerStore on the `users` collection. Requires init_db() to have run."""

    async def find_one(self, user_id: str) -> LedgerRecord | None:
        try:
            return await LedgerRecord.find_one(LedgerRecord.user_id == user_id)
        except ConnectionFailure as e:
            raise StoreUnavailable(str(e)) from e

    async def insert(self, user_id: str, user_name: str | None = None) -> LedgerRecord:
        record = LedgerRecord(user_id=user_id, user_name=user_name, points=0)
        try:
            await record.insert()
        except DuplicateKeyError as e:
            raise DuplicateRecord(details={"user_id": user_id}) from e
        except ConnectionFailure as e:
            raise StoreUnavailable(str(e)) from e
        return record

    async def find_one_and_update(self, user_id: str, increment: int, user_name: str | None) -> LedgerRecord:
        """Single find-and-modify with upsert; the server serializes concurrent increments."""
        now = datetime.utcnow()
        try:
            raw = await LedgerRecord.get_motor_collection().find_one_and_update(
                {"user_id": user_id},
                {
                    "$inc": {"points": increment},
                    "$set": {"user_name": user_name, "updated_at": now},
                    "$setOnInsert": {"created_at": now},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except ConnectionFailure as e:
            raise StoreUnavailable(str(e)) from e
        return LedgerRecord.model_validate(raw)

    async def find_all(self) -> list[LedgerRecord]:
        try:
            return await LedgerRecord.find_all().to_list()
        except ConnectionFailure as e:
            raise StoreUnavailable(str(e)) from e

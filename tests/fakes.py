"""In-memory stand-ins for the store and gateway collaborators."""

import asyncio
from dataclasses import dataclass

from mxpbot.bot.gateway import InboundMessage, MentionedUser, UserProfile
from mxpbot.core.exceptions import DuplicateRecord, ProfileLookupError, StoreUnavailable

MANAGER = "mxpManager"


@dataclass
class FakeRecord:
    user_id: str
    user_name: str | None = None
    points: int = 0


class FakeLedgerStore:
    """In-memory LedgerStore. find_one_and_update has no await between read and write."""

    def __init__(self):
        self.records: dict[str, FakeRecord] = {}
        self.unavailable = False
        self.calls: list[str] = []

    async def _enter(self, op: str) -> None:
        self.calls.append(op)
        # Yield so concurrent callers interleave
        await asyncio.sleep(0)
        if self.unavailable:
            raise StoreUnavailable("connection refused")

    async def find_one(self, user_id):
        await self._enter("find_one")
        return self.records.get(user_id)

    async def insert(self, user_id, user_name=None):
        await self._enter("insert")
        if user_id in self.records:
            raise DuplicateRecord(details={"user_id": user_id})
        record = FakeRecord(user_id=user_id, user_name=user_name)
        self.records[user_id] = record
        return record

    async def find_one_and_update(self, user_id, increment, user_name):
        await self._enter("find_one_and_update")
        record = self.records.setdefault(user_id, FakeRecord(user_id=user_id))
        record.points += increment
        record.user_name = user_name
        return FakeRecord(record.user_id, record.user_name, record.points)

    async def find_all(self):
        await self._enter("find_all")
        return list(self.records.values())


class FakeGateway:
    def __init__(self):
        self.sent: list[tuple[str, object]] = []
        self.profiles: dict[str, str] = {}
        self.lookup_fails = False
        self.failing_sends = 0

    async def send_reply(self, channel_id, reply):
        if self.failing_sends:
            self.failing_sends -= 1
            raise RuntimeError("400 Bad Request: embed size exceeds maximum size of 6000")
        self.sent.append((channel_id, reply))

    async def fetch_user_profile(self, user_id):
        if self.lookup_fails or user_id not in self.profiles:
            raise ProfileLookupError(user_id, f"Unknown User {user_id}")
        return UserProfile(username=self.profiles[user_id])


def make_message(
    content: str,
    author_id: str = "100",
    roles: tuple[str, ...] = (),
    mentions: tuple[MentionedUser, ...] = (),
    bot: bool = False,
    channel_id: str = "900",
) -> InboundMessage:
    return InboundMessage(
        author_id=author_id,
        author_is_bot=bot,
        content=content,
        channel_id=channel_id,
        mentioned_users=mentions,
        caller_roles=roles,
    )

import os
import random

import pytest

# Settings need both secrets present; tests never connect
os.environ.setdefault("DISCORD_TOKEN", "test-discord-token")
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB_NAME", "mxpbot_test")

from fakes import MANAGER, FakeGateway, FakeLedgerStore  # noqa: E402

from mxpbot.bot.router import CommandRouter  # noqa: E402


@pytest.fixture
def store() -> FakeLedgerStore:
    return FakeLedgerStore()


@pytest.fixture
def gateway() -> FakeGateway:
    gw = FakeGateway()
    gw.profiles.update({"100": "author", "200": "alice", "300": "bob"})
    return gw


@pytest.fixture
def router(store, gateway) -> CommandRouter:
    return CommandRouter(store, gateway, prefix="~", manager_role=MANAGER, rng=random.Random(1234))

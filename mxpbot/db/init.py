from typing import Any

import certifi
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from mxpbot.core.config import Settings, get_settings
from mxpbot.core.logging import get_logger
from mxpbot.models.ledger_record import LedgerRecord

log = get_logger(__name__)

APP_NAME = "mxpbot"

DOCUMENT_MODELS = [
    LedgerRecord,
]


def client_options(uri: str) -> dict[str, Any]:
    """Motor client options; Atlas (mongodb+srv or tls=true) URIs get the certifi CA bundle."""
    options: dict[str, Any] = {"appname": APP_NAME}
    if "mongodb+srv://" in uri or "tls=true" in uri.lower():
        # Atlas in Docker: tlsCAFile + tlsDisableOCSPEndpointCheck avoid TLSV1_ALERT_INTERNAL_ERROR
        options["tlsCAFile"] = certifi.where()
        options["tlsDisableOCSPEndpointCheck"] = True
    return options


async def init_db(settings: Settings | None = None) -> AsyncIOMotorClient:
    """Connect, verify the server answers, and bind the ledger documents to the database."""
    settings = settings or get_settings()
    client = AsyncIOMotorClient(settings.mongodb_uri, **client_options(settings.mongodb_uri))
    # A ping fails here rather than on the first command
    await client.admin.command("ping")
    await init_beanie(database=client[settings.mongodb_db_name], document_models=DOCUMENT_MODELS)
    log.info("db_connected", db=settings.mongodb_db_name)
    return client

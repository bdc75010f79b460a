"""Run the MXP bot. Usage: python -m mxpbot.main"""

import asyncio
import sys

import discord
import pydantic
from pymongo.errors import PyMongoError

from mxpbot.bot.gateway import DiscordGateway
from mxpbot.bot.router import CommandRouter
from mxpbot.core.config import Settings, get_settings
from mxpbot.core.logging import configure_logging, get_logger
from mxpbot.db.init import init_db
from mxpbot.db.store import BeanieLedgerStore

log = get_logger(__name__)


async def serve(settings: Settings) -> None:
    """Connect the store, then hold the gateway session until it closes."""
    client = await init_db(settings)
    gateway = DiscordGateway()
    router = CommandRouter(
        BeanieLedgerStore(),
        gateway,
        prefix=settings.command_prefix,
        manager_role=settings.manager_role_name,
    )
    gateway.on_message_handler(router.handle_message)
    try:
        async with gateway:
            await gateway.start(settings.discord_token)
    finally:
        client.close()


def main() -> None:
    try:
        settings = get_settings()
    except pydantic.ValidationError as e:
        configure_logging()
        missing = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        log.error("startup_failed", reason="invalid configuration", fields=missing)
        sys.exit(1)

    configure_logging(debug=settings.debug)
    if settings.sentry_dsn:
        import sentry_sdk
        sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.env, traces_sample_rate=0.1)
        log.info("startup", msg="Sentry enabled")

    try:
        asyncio.run(serve(settings))
    except PyMongoError as e:
        log.error("startup_failed", reason="database connection failed", error=str(e))
        sys.exit(1)
    except discord.DiscordException as e:
        log.error("startup_failed", reason="discord connection failed", error=str(e), error_type=type(e).__name__)
        sys.exit(1)
    except KeyboardInterrupt:
        log.info("shutdown")


if __name__ == "__main__":
    main()

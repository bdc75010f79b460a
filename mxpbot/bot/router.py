"""Command router: trigger check, privilege resolution, dispatch and the per-message error boundary."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from mxpbot.bot import handlers
from mxpbot.bot.gateway import Gateway, InboundMessage
from mxpbot.bot.handlers import CommandContext
from mxpbot.bot.parsing import parse_command
from mxpbot.bot.replies import Reply
from mxpbot.core.exceptions import ValidationError, reply_for_error
from mxpbot.core.logging import bind_message_context, get_logger
from mxpbot.core.security import DEFAULT_MANAGER_ROLE, is_privileged
from mxpbot.db.store import LedgerStore

log = get_logger(__name__)

DEFAULT_PREFIX = "~"


@dataclass(frozen=True)
class Command:
    handler: Callable[[CommandContext], Awaitable[Reply]]
    privileged: bool = False


COMMANDS: dict[str, Command] = {
    "addmxp": Command(handlers.add_mxp, privileged=True),
    "submxp": Command(handlers.sub_mxp, privileged=True),
    "getmxp": Command(handlers.get_mxp),
    "getstats": Command(handlers.get_stats, privileged=True),
    "coinflip": Command(handlers.coin_flip),
    "helpmxp": Command(handlers.help_mxp),
}


class CommandRouter:
    def __init__(
        self,
        store: LedgerStore,
        gateway: Gateway,
        prefix: str = DEFAULT_PREFIX,
        manager_role: str = DEFAULT_MANAGER_ROLE,
        rng: random.Random | None = None,
    ):
        self.store = store
        self.gateway = gateway
        self.prefix = prefix
        self.manager_role = manager_role
        self.rng = rng or random.Random()

    async def route(self, message: InboundMessage) -> Reply | None:
        """Return the reply for a message, or None when the message is not acted on.

        Unknown commands and manager-only commands from other callers fall
        through to None without a reply.
        """
        if message.author_is_bot:
            return None
        parsed = parse_command(message.content, self.prefix, message.mentioned_users)
        if parsed is None:
            return None
        privileged = is_privileged(message.caller_roles, self.manager_role)
        command = COMMANDS.get(parsed.name)
        if command is None or (command.privileged and not privileged):
            log.debug("command_ignored", command=parsed.name, author_id=message.author_id)
            return None

        bind_message_context(channel_id=message.channel_id, author_id=message.author_id, command=parsed.name)
        ctx = CommandContext(
            store=self.store,
            gateway=self.gateway,
            message=message,
            command=parsed,
            privileged=privileged,
            rng=self.rng,
            prefix=self.prefix,
        )
        log.info("command_dispatched", privileged=privileged)
        try:
            return await command.handler(ctx)
        except ValidationError as e:
            log.info("command_invalid", usage=e.usage)
            return reply_for_error(e)
        except Exception as e:
            log.exception("command_failed", reason=str(e))
            return reply_for_error(e)

    async def handle_message(self, message: InboundMessage) -> Reply | None:
        """Route a message and send the resulting reply to its channel.

        If the reply cannot be sent, a generic failure reply is tried once instead.
        """
        reply = await self.route(message)
        if reply is None:
            return None
        try:
            await self.gateway.send_reply(message.channel_id, reply)
        except Exception as e:
            log.exception("reply_send_failed", reason=str(e))
            reply = reply_for_error(e)
            await self.gateway.send_reply(message.channel_id, reply)
        return reply

"""The six MXP commands. Each takes a CommandContext and returns the Reply to send."""

import random
from dataclasses import dataclass

from mxpbot.bot import replies
from mxpbot.bot.gateway import Gateway, InboundMessage
from mxpbot.bot.parsing import ParsedCommand, parse_amount
from mxpbot.bot.replies import Reply
from mxpbot.core.exceptions import ValidationError
from mxpbot.db.store import LedgerStore
from mxpbot.services import ledger

# Amount is always read from this token index, whether or not the mention sits before it
AMOUNT_ARG_INDEX = 1


@dataclass(frozen=True)
class CommandContext:
    store: LedgerStore
    gateway: Gateway
    message: InboundMessage
    command: ParsedCommand
    privileged: bool
    rng: random.Random
    prefix: str = "~"

    def usage(self, rest: str) -> str:
        return f"{self.prefix}{self.command.name} {rest}"


async def _adjust(ctx: CommandContext, sign: int) -> Reply:
    target = ctx.command.first_target
    amount = parse_amount(ctx.command.arg(AMOUNT_ARG_INDEX))
    if target is None or amount is None:
        raise ValidationError(ctx.usage("@username amount"))
    points = await ledger.adjust_balance(ctx.store, target.id, target.username, sign * amount)
    return replies.balance_update(target.username, points)


async def add_mxp(ctx: CommandContext) -> Reply:
    return await _adjust(ctx, 1)


async def sub_mxp(ctx: CommandContext) -> Reply:
    return await _adjust(ctx, -1)


async def get_mxp(ctx: CommandContext) -> Reply:
    """Own balance; managers may name another user with a mention."""
    target_id = ctx.message.author_id
    if ctx.privileged and ctx.command.raw_args:
        target = ctx.command.first_target
        if target is None:
            raise ValidationError(ctx.usage("@username"))
        target_id = target.id
    points = await ledger.read_balance(ctx.store, target_id)
    profile = await ctx.gateway.fetch_user_profile(target_id)
    return replies.balance(profile.username, points)


async def get_stats(ctx: CommandContext) -> Reply:
    records = await ledger.list_balances(ctx.store)
    if not records:
        return replies.empty_stats()
    return replies.stats(records)


async def coin_flip(ctx: CommandContext) -> Reply:
    return replies.coin_flip("Heads" if ctx.rng.random() < 0.5 else "Tails")


async def help_mxp(ctx: CommandContext) -> Reply:
    return replies.help_reply(ctx.prefix)

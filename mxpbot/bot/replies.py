"""Reply construction. A Reply is rendered to a Discord embed by the gateway."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

SUCCESS_COLOR = 0x22C55E
ERROR_COLOR = 0xFF0000
STATS_COLOR = 0x00FF00
COIN_COLOR = 0xFFD700
HELP_COLOR = 0xFFA500

UNKNOWN_USER = "Unknown User"
UNIT = "***MXPs***"


@dataclass(frozen=True)
class ReplyField:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class Reply:
    title: str
    color: int
    description: str | None = None
    fields: tuple[ReplyField, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def balance_update(user_name: str, points: int) -> Reply:
    return Reply(
        title="MXP Update",
        color=SUCCESS_COLOR,
        description=f"{user_name} now has {points} {UNIT}.",
    )


def balance(user_name: str, points: int) -> Reply:
    return Reply(
        title="User MXP",
        color=SUCCESS_COLOR,
        description=f"{user_name} has {points} {UNIT}.",
    )


def validation_error(usage: str) -> Reply:
    return Reply(
        title="Error",
        color=ERROR_COLOR,
        description=f"Invalid command usage. Format: {usage}",
    )


def command_failure(message: str) -> Reply:
    return Reply(
        title="Error",
        color=ERROR_COLOR,
        description=f"An error occurred while executing the command: `{message}`",
    )


def empty_stats() -> Reply:
    return Reply(
        title="No Users Found",
        color=ERROR_COLOR,
        description="No users found in the database.",
    )


def stats(records) -> Reply:
    """One inline field per ledger record."""
    return Reply(
        title="User MXPs",
        color=STATS_COLOR,
        fields=tuple(
            ReplyField(name=r.user_name or UNKNOWN_USER, value=f"{r.points} {UNIT}", inline=True)
            for r in records
        ),
    )


def coin_flip(result: str) -> Reply:
    return Reply(
        title="Coin Flip Result",
        color=COIN_COLOR,
        description=f"You flipped a coin and got: **{result}**!",
    )


def help_reply(prefix: str = "~") -> Reply:
    admin_commands = [
        (f"{prefix}addmxp @username amount", "Add MXPs to a user (Admin only)"),
        (f"{prefix}submxp @username amount", "Subtract MXPs from a user (Admin only)"),
        (f"{prefix}getstats", "Get MXPs of all users (Admin only)"),
    ]
    general_commands = [
        (f"{prefix}getmxp", "Get your own MXPs"),
        (f"{prefix}getmxp @username", "Get MXPs of a mentioned user (Admin only)"),
        (f"{prefix}coinflip", "Flip a coin"),
    ]
    return Reply(
        title="Help - MXP Commands",
        color=HELP_COLOR,
        fields=(
            ReplyField(name="Admin Commands", value="\n".join(f"{u} - {d}" for u, d in admin_commands)),
            ReplyField(name="General Commands", value="\n".join(f"{u} - {d}" for u, d in general_commands)),
        ),
    )

"""Prefix command grammar: `<prefix><name> [arg ...]`, whitespace separated, no quoting."""

import re
from dataclasses import dataclass, field

from mxpbot.bot.gateway import MentionedUser

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class ParsedCommand:
    name: str
    mentioned_targets: tuple[MentionedUser, ...] = ()
    raw_args: tuple[str, ...] = field(default_factory=tuple)

    @property
    def first_target(self) -> MentionedUser | None:
        return self.mentioned_targets[0] if self.mentioned_targets else None

    def arg(self, index: int) -> str | None:
        """Positional argument by token index, counting mention tokens too."""
        return self.raw_args[index] if index < len(self.raw_args) else None


def parse_command(
    content: str,
    prefix: str,
    mentioned_users: list[MentionedUser] | tuple[MentionedUser, ...] = (),
) -> ParsedCommand | None:
    """Split a message into command name and arguments; None if it lacks the prefix."""
    if not content.startswith(prefix):
        return None
    tokens = content[len(prefix):].split()
    if not tokens:
        return ParsedCommand(name="", mentioned_targets=tuple(mentioned_users))
    return ParsedCommand(
        name=tokens[0].lower(),
        mentioned_targets=tuple(mentioned_users),
        raw_args=tuple(tokens[1:]),
    )


def parse_amount(token: str | None) -> int | None:
    """Leading-integer parse: "10" -> 10, "-3" -> -3, "10abc" -> 10, "abc" -> None."""
    if token is None:
        return None
    m = _LEADING_INT.match(token)
    return int(m.group(1)) if m else None

"""Gateway session: the Discord connection, inbound message events and outbound replies."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Protocol

import discord

from mxpbot.bot.replies import Reply
from mxpbot.core.exceptions import ProfileLookupError
from mxpbot.core.logging import get_logger

log = get_logger(__name__)

# Discord rejects embeds with more fields, and messages with more embeds or text
MAX_EMBED_FIELDS = 25
MAX_EMBEDS_PER_MESSAGE = 10
MAX_MESSAGE_CHARS = 6000


@dataclass(frozen=True)
class MentionedUser:
    id: str
    username: str


@dataclass(frozen=True)
class UserProfile:
    username: str


@dataclass(frozen=True)
class InboundMessage:
    author_id: str
    author_is_bot: bool
    content: str
    channel_id: str
    mentioned_users: tuple[MentionedUser, ...] = ()
    caller_roles: tuple[str, ...] = field(default_factory=tuple)


MessageHandler = Callable[[InboundMessage], Awaitable[object]]


class Gateway(Protocol):
    async def send_reply(self, channel_id: str, reply: Reply) -> None: ...

    async def fetch_user_profile(self, user_id: str) -> UserProfile: ...


def inbound_from_discord(message: discord.Message) -> InboundMessage:
    # Roles only exist for guild members; DMs carry a plain User
    roles = message.author.roles if isinstance(message.author, discord.Member) else []
    return InboundMessage(
        author_id=str(message.author.id),
        author_is_bot=message.author.bot,
        content=message.content,
        channel_id=str(message.channel.id),
        mentioned_users=tuple(MentionedUser(id=str(u.id), username=u.name) for u in message.mentions),
        caller_roles=tuple(role.name for role in roles),
    )


def _embed(reply: Reply, first: bool) -> discord.Embed:
    return discord.Embed(
        title=reply.title if first else None,
        description=reply.description if first else None,
        color=reply.color,
        timestamp=reply.timestamp,
    )


def to_messages(reply: Reply) -> list[list[discord.Embed]]:
    """Render a reply as one or more messages' worth of embeds.

    Fields continue in a new embed after MAX_EMBED_FIELDS and in a new message
    once the embeds would pass MAX_EMBEDS_PER_MESSAGE or MAX_MESSAGE_CHARS.
    """
    messages: list[list[discord.Embed]] = []
    current = [_embed(reply, first=True)]
    used = len(current[0])
    for f in reply.fields:
        size = len(f.name) + len(f.value)
        if used + size > MAX_MESSAGE_CHARS:
            messages.append(current)
            current = [_embed(reply, first=False)]
            used = 0
        elif len(current[-1].fields) >= MAX_EMBED_FIELDS:
            if len(current) >= MAX_EMBEDS_PER_MESSAGE:
                messages.append(current)
                current = []
                used = 0
            current.append(_embed(reply, first=False))
        current[-1].add_field(name=f.name, value=f.value, inline=f.inline)
        used += size
    messages.append(current)
    return messages


class DiscordGateway(discord.Client):
    def __init__(self, **options):
        intents = discord.Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        intents.message_content = True
        intents.members = True
        super().__init__(intents=intents, **options)
        self._message_handler: MessageHandler | None = None

    def on_message_handler(self, handler: MessageHandler) -> None:
        """Register the coroutine that receives every inbound message."""
        self._message_handler = handler

    async def on_ready(self) -> None:
        log.info("gateway_ready", user=str(self.user))

    async def on_message(self, message: discord.Message) -> None:
        if self._message_handler is None:
            return
        await self._message_handler(inbound_from_discord(message))

    async def on_error(self, event_method: str, /, *args, **kwargs) -> None:
        log.exception("gateway_event_failed", event=event_method)

    async def send_reply(self, channel_id: str, reply: Reply) -> None:
        channel = self.get_channel(int(channel_id)) or await self.fetch_channel(int(channel_id))
        for embeds in to_messages(reply):
            await channel.send(embeds=embeds)

    async def fetch_user_profile(self, user_id: str) -> UserProfile:
        try:
            user = await self.fetch_user(int(user_id))
        except (discord.HTTPException, ValueError) as e:
            raise ProfileLookupError(user_id, f"Could not fetch user {user_id}: {e}") from e
        return UserProfile(username=user.name)

import discord

from chatmirror.events import ReactionEvent
from chatmirror.session import Session
from .convert import channel_from_discord, user_from_discord

import logging
logger = logging.getLogger(__name__)


async def handle(
    client: discord.Client, session: Session, reaction: discord.Reaction, user: discord.User
):
    message = reaction.message
    emoji = reaction.emoji
    guild = getattr(message, "guild", None)
    event = ReactionEvent(
        message_id=message.id,
        emoji=emoji if isinstance(emoji, str) else getattr(emoji, "name", str(emoji)),
        user=user_from_discord(user),
        channel=channel_from_discord(message.channel),
        server=session.cache.server(guild.id) if guild is not None else None,
    )
    logger.debug(f"User {user.name} reacted with {event.emoji} in channel {event.channel.id}")
    session.dispatch(event)

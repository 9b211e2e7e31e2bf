import discord

from chatmirror.events import MessageEvent
from chatmirror.session import Session
from .convert import channel_from_discord, user_from_discord

import logging

logger = logging.getLogger(__name__)


async def handle(client: discord.Client, session: Session, message: discord.Message):
    """
    Record the author and offer the message to registered awaits.
    - client: Discord bot client instance
    - session: Session owning the cache and awaits
    - message: The incoming message object
    """
    author = user_from_discord(message.author)
    session.cache.add_user(author)

    guild = getattr(message, "guild", None)
    event = MessageEvent(
        message_id=message.id,
        content=message.content or "",
        author=author,
        channel=channel_from_discord(message.channel),
        server=session.cache.server(guild.id) if guild is not None else None,
    )

    fired = session.dispatch(event)
    if fired:
        logger.debug(f"Message {message.id} fired awaits: {fired}")

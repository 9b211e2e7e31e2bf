import discord

from chatmirror.session import Session
from .convert import server_from_discord, user_from_discord

import logging

logger = logging.getLogger(__name__)


async def handle(client: discord.Client, session: Session):
    """Seed the entity cache from every guild visible on ready."""
    logger.info(f"Logged in as {client.user.name} (ID: {client.user.id})")
    session.bot_user_id = client.user.id
    session.cache.add_user(user_from_discord(client.user))

    for guild in client.guilds:
        members = [user_from_discord(m) for m in getattr(guild, "members", [])]
        session.cache.add_server(server_from_discord(guild), members)

    logger.info(
        "Entity cache seeded with %d servers and %d users",
        len(session.cache.servers),
        len(session.cache.users),
    )

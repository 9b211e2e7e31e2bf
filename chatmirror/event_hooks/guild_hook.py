import discord

from chatmirror.session import Session
from .convert import server_from_discord, user_from_discord

import logging

logger = logging.getLogger(__name__)


async def handle_join(client: discord.Client, session: Session, guild: discord.Guild):
    members = [user_from_discord(m) for m in getattr(guild, "members", [])]
    session.cache.add_server(server_from_discord(guild), members)


async def handle_remove(client: discord.Client, session: Session, guild: discord.Guild):
    if session.cache.remove_server(guild.id) is not None:
        logger.info(f"Left server {guild.name} (ID: {guild.id})")

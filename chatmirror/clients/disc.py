"""Gateway client feeding a :class:`~chatmirror.session.Session`."""
import discord
from chatmirror.config import core
from chatmirror.event_hooks import guild_hook, message_hook, reaction_hook, ready_hook
from chatmirror.session import Session

import logging

logger = logging.getLogger(__name__)

# --- Intents --------------
intents = discord.Intents.default()
intents.members = True
intents.message_content = True


# --- Client --------------
class MirrorClient(discord.Client):
    def __init__(self, session: Session, **kwargs) -> None:
        super().__init__(intents=kwargs.pop("intents", intents), **kwargs)
        self.session = session

    async def on_ready(self):
        await ready_hook.handle(self, self.session)

    async def on_guild_join(self, guild: discord.Guild):
        await guild_hook.handle_join(self, self.session, guild)

    async def on_guild_remove(self, guild: discord.Guild):
        await guild_hook.handle_remove(self, self.session, guild)

    async def on_message(self, message: discord.Message):
        await message_hook.handle(self, self.session, message)

    async def on_reaction_add(self, reaction: discord.Reaction, user: discord.User):
        await reaction_hook.handle(self, self.session, reaction, user)

    async def close(self) -> None:
        await self.session.close()
        await super().close()


def run():
    """
    Start the Discord client with configured token.

    The token is validated when :mod:`chatmirror.config` is imported.
    """
    client = MirrorClient(Session.from_config())
    try:
        client.run(core.DISCORD_API_TOKEN, log_handler=None)
    except discord.LoginFailure as e:
        logger.error(f"Login failed: {e}")
    except Exception as e:
        logger.exception(f"Unexpected error while running client: {e}")

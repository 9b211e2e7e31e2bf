"""Per-bot session owning the entity cache and the await registry."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, List, Mapping

from chatmirror.awaits import Await, AwaitRegistry
from chatmirror.awaits import handlers
from chatmirror.clients import Transport
from chatmirror.clients.api import DiscordAPI
from chatmirror.config import core
from chatmirror.memory.cache import EntityCache

logger = logging.getLogger(__name__)


class Session:
    """
    State for one running bot: constructed at start-up, closed at shutdown.

    Components that need the cache or awaits receive the session (or its
    ``cache``/``awaits`` attributes) explicitly; nothing here is global.
    """

    def __init__(self, api: Transport, bot_user_id: int | None = None) -> None:
        self.api = api
        self.cache = EntityCache(api, bot_user_id)
        self.awaits = AwaitRegistry(self)

    @classmethod
    def from_config(cls) -> "Session":
        return cls(DiscordAPI(core.DISCORD_API_TOKEN), core.BOT_USER_ID or None)

    @property
    def bot_user_id(self) -> int | None:
        return self.cache.bot_user_id

    @bot_user_id.setter
    def bot_user_id(self, value: int | None) -> None:
        self.cache.bot_user_id = value

    # ------------------------------------------------------------------ #
    # Awaits
    # ------------------------------------------------------------------ #

    def handler_class(self, event_type: str) -> type:
        return handlers.handler_class(event_type)

    def add_await(
        self,
        key: Hashable | None,
        type: str,
        attributes: Mapping[str, Any] | None = None,
        callback: Callable[[Any], Any] | None = None,
    ) -> Await:
        return self.awaits.add(type, attributes, callback, key=key)

    def dispatch(self, event: Any) -> List[Hashable]:
        return self.awaits.dispatch(event)

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    async def close(self) -> None:
        logger.info(
            "Closing session (%d users, %d servers, %d awaits)",
            len(self.cache.users),
            len(self.cache.servers),
            len(self.awaits),
        )
        self.cache.reset()
        self.awaits.clear()
        await self.api.close()

    async def __aenter__(self) -> "Session":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

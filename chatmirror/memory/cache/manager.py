"""Entity cache deciding between local state and REST fetches."""

from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Any, List

from chatmirror.clients import Transport
from chatmirror.config import cache as cache_cfg
from chatmirror.errors import NoPermission
from chatmirror.ids import resolve_id
from chatmirror.models import Channel, Invite, Server, User

from .inflight import KeyedLocks
from .invites import resolve_invite_code as _resolve_invite_code
from .stores import EntityStore
from .utils import _describe

logger = logging.getLogger(__name__)


class EntityCache:
    """
    Lazily populated mirror of remote users, servers, channels and DMs.

    Users and servers are only ever known through :meth:`add_user` and
    :meth:`add_server` (the gateway ingestion path); looking them up never
    touches the network. Channels and private channels are fetched on a miss
    and memoized. Channels that fail with :class:`NoPermission` are
    blacklisted for the lifetime of the cache.

    The cache belongs to a single event loop and is not thread-safe.
    """

    def __init__(
        self,
        api: Transport,
        bot_user_id: int | None = None,
        *,
        serialize_fetches: bool | None = None,
    ) -> None:
        self._api = api
        self.bot_user_id = bot_user_id

        self._users: EntityStore[User] = EntityStore("user")
        self._servers: EntityStore[Server] = EntityStore("server")
        self._channels: EntityStore[Channel] = EntityStore("channel")
        # keyed by the peer's user id, not the channel id
        self._private_channels: EntityStore[Channel] = EntityStore("private channel")
        self._restricted_channels: set[int] = set()

        if serialize_fetches is None:
            serialize_fetches = cache_cfg.SERIALIZE_FETCHES
        self._locks: KeyedLocks | None = KeyedLocks() if serialize_fetches else None

    # ------------------------------------------------------------------ #
    # WRITE helpers (gateway ingestion)
    # ------------------------------------------------------------------ #

    def add_user(self, user: User) -> None:
        self._users.set(user.id, user)

    def remove_user(self, user_id: Any) -> User | None:
        return self._users.delete(resolve_id(user_id))

    def add_server(self, server: Server, members: List[User] | None = None) -> None:
        """Store ``server`` and any ``members`` observed alongside it."""

        self._servers.set(server.id, server)
        for member in members or []:
            self.add_user(member)
        logger.info(
            "Cached %s with %d channels", _describe(server), len(server.channels)
        )

    def remove_server(self, server_id: Any) -> Server | None:
        return self._servers.delete(resolve_id(server_id))

    def reset(self) -> None:
        """Forget every entity and every restriction."""

        for store in (self._users, self._servers, self._channels, self._private_channels):
            store.reset()
        self._restricted_channels.clear()

    # ------------------------------------------------------------------ #
    # FETCHING lookups
    # ------------------------------------------------------------------ #

    def _guard(self, kind: str, key: int):
        if self._locks is None:
            return nullcontext()
        return self._locks.hold((kind, key))

    def _cached_channel(self, channel_id: int) -> Channel | None:
        if channel_id in self._restricted_channels:
            raise NoPermission(f"Channel {channel_id} is restricted")
        return self._channels.get(channel_id)

    async def channel(self, id: Any) -> Channel:
        """
        Return the channel identified by ``id``, fetching it on a miss.

        :param id: Channel id or any object exposing one.
        :raises NoPermission: the channel is restricted (no request is made) or
            the fetch was refused, in which case it is restricted from now on.
        """
        channel_id = resolve_id(id)

        logger.debug("Obtaining data for channel with id %s", channel_id)
        cached = self._cached_channel(channel_id)
        if cached is not None:
            return cached

        async with self._guard("channel", channel_id):
            # Another coroutine may have finished the same fetch while we waited.
            cached = self._cached_channel(channel_id)
            if cached is not None:
                return cached

            try:
                payload = await self._api.fetch_channel(channel_id)
            except NoPermission:
                logger.info(
                    "Tried to get access to restricted channel %s, blacklisting it",
                    channel_id,
                )
                self._restricted_channels.add(channel_id)
                raise

            channel = Channel.from_payload(payload)
            self._channels.set(channel_id, channel)
            logger.debug("Fetched %s", _describe(channel))
            return channel

    async def private_channel(self, id: Any) -> Channel:
        """
        Return the private channel with user ``id``, creating it on a miss.

        :raises RuntimeError: the bot's own user id is not known yet.
        """
        peer_id = resolve_id(id)

        logger.debug("Obtaining private channel with user id %s", peer_id)
        cached = self._private_channels.get(peer_id)
        if cached is not None:
            return cached

        if self.bot_user_id is None:
            raise RuntimeError("Bot user id is unknown; cannot open a private channel")

        async with self._guard("private", peer_id):
            cached = self._private_channels.get(peer_id)
            if cached is not None:
                return cached

            logger.info("Creating private channel with user id %s", peer_id)
            payload = await self._api.create_private_channel(self.bot_user_id, peer_id)
            channel = Channel.from_payload(payload)
            self._private_channels.set(peer_id, channel)
            return channel

    @staticmethod
    def resolve_invite_code(invite: Any) -> str:
        return _resolve_invite_code(invite)

    async def invite(self, invite: Any) -> Invite:
        """Fetch metadata for ``invite`` (code, URL or invite object). Never cached."""

        code = _resolve_invite_code(invite)
        payload = await self._api.resolve_invite(code)
        return Invite.from_payload(payload)

    # ------------------------------------------------------------------ #
    # LOCAL lookups
    # ------------------------------------------------------------------ #

    def user(self, id: Any) -> User | None:
        """Return a user the bot has observed, or ``None``."""

        return self._users.get(resolve_id(id))

    def server(self, id: Any) -> Server | None:
        """Return a server the bot is in, or ``None``."""

        return self._servers.get(resolve_id(id))

    def is_restricted(self, id: Any) -> bool:
        return resolve_id(id) in self._restricted_channels

    @property
    def users(self) -> List[User]:
        return self._users.values()

    @property
    def servers(self) -> List[Server]:
        return self._servers.values()

    def find_channel(
        self, channel_name: str, server_name: str | None = None
    ) -> List[Channel]:
        """
        Find channels named ``channel_name`` across known servers.

        :param server_name: Only search the server(s) with this name.
        :returns: Matches ordered by server, then channel, insertion order.
        """
        results = []
        for server in self._servers.values():
            if server_name is not None and server.name != server_name:
                continue
            for channel in server.channels:
                if channel.name == channel_name:
                    results.append(channel)
        return results

    def find_user(self, username: str) -> List[User]:
        """Return every known user whose username is ``username``."""

        return [u for u in self._users.values() if u.username == username]

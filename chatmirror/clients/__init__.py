"""
Network clients.

``api``
    :class:`~chatmirror.clients.api.DiscordAPI`, the ``aiohttp`` REST transport
    the entity cache fetches through.
``disc``
    The ``discord.py`` gateway client that feeds observed entities and events
    into a :class:`~chatmirror.session.Session`.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol


class Transport(Protocol):
    """REST calls the entity cache depends on. Implementations hold the token."""

    async def fetch_channel(self, channel_id: int) -> Dict[str, Any]:
        """Return the raw channel payload.

        :raises NoPermission: the bot cannot see the channel.
        :raises NetworkError: any other failure.
        """

    async def create_private_channel(
        self, self_user_id: int, peer_user_id: int
    ) -> Dict[str, Any]:
        """Open (or reopen) a DM with ``peer_user_id`` and return its payload."""

    async def resolve_invite(self, code: str) -> Dict[str, Any]:
        """Return invite metadata for ``code``.

        :raises NotFound: the invite is unknown or expired.
        """

    async def close(self) -> None:
        """Release network resources."""


__all__ = ["Transport"]

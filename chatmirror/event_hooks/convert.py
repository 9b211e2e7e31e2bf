"""
Conversion from ``discord.py`` objects to :mod:`chatmirror.models`.

Only attributes are read, so tests can pass ``SimpleNamespace`` stand-ins.
"""

from __future__ import annotations

from typing import Any

from chatmirror.models import PRIVATE_CHANNEL_TYPES, Channel, Server, User


def user_from_discord(user: Any) -> User:
    discriminator = getattr(user, "discriminator", None)
    return User(
        id=user.id,
        username=user.name,
        # discord.py reports "0" for users migrated to unique usernames
        discriminator=None if discriminator in (None, "0") else str(discriminator),
        bot=bool(getattr(user, "bot", False)),
    )


def _channel_type(channel: Any) -> int:
    raw = getattr(channel, "type", 0)
    value = getattr(raw, "value", raw)
    return value if isinstance(value, int) else 0


def channel_from_discord(channel: Any) -> Channel:
    guild = getattr(channel, "guild", None)
    ctype = _channel_type(channel)
    recipient = getattr(channel, "recipient", None)
    return Channel(
        id=channel.id,
        name=getattr(channel, "name", None),
        type=ctype,
        server_id=guild.id if guild is not None else None,
        topic=getattr(channel, "topic", None),
        recipient=user_from_discord(recipient)
        if recipient is not None and ctype in PRIVATE_CHANNEL_TYPES
        else None,
    )


def server_from_discord(guild: Any) -> Server:
    return Server(
        id=guild.id,
        name=guild.name,
        channels=[channel_from_discord(c) for c in getattr(guild, "channels", [])],
    )

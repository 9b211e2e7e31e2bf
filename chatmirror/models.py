"""Dataclass models for mirrored Discord entities.

Each model is decoded from the JSON payload Discord's REST API returns:

```
User    {"id": "80351110224678912", "username": "nelly", "discriminator": "1337", "bot": false}
Channel {"id": "41771983423143937", "type": 0, "name": "general", "guild_id": "4177...", "topic": "..."}
        {"id": "31982309...", "type": 1, "recipients": [<User>]}
Server  {"id": "41771983423143937", "name": "Discord Developers", "channels": [<Channel>, ...]}
Invite  {"code": "0vCdhLbwjZZTWZLD", "guild": {...}, "channel": {...}, "inviter": <User>}
```

Identifiers are converted to ``int`` on decode. Missing required keys raise
``KeyError``; callers treat that as a decoding failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .ids import resolve_id

# DM and group DM
PRIVATE_CHANNEL_TYPES = frozenset({1, 3})


def _optional_id(raw: Any) -> Optional[int]:
    return None if raw is None else resolve_id(raw)


@dataclass(slots=True)
class User:
    """A user the bot has observed."""

    id: int
    username: str
    discriminator: Optional[str] = None
    bot: bool = False

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=resolve_id(data["id"]),
            username=data["username"],
            discriminator=data.get("discriminator"),
            bot=bool(data.get("bot", False)),
        )


@dataclass(slots=True)
class Channel:
    """A server channel or a private (DM) channel."""

    id: int
    name: Optional[str]
    type: int = 0
    server_id: Optional[int] = None
    topic: Optional[str] = None
    recipient: Optional[User] = None

    @property
    def is_private(self) -> bool:
        return self.type in PRIVATE_CHANNEL_TYPES

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Channel":
        recipients = data.get("recipients") or []
        return cls(
            id=resolve_id(data["id"]),
            name=data.get("name"),
            type=int(data.get("type", 0)),
            server_id=_optional_id(data.get("guild_id")),
            topic=data.get("topic"),
            recipient=User.from_payload(recipients[0]) if recipients else None,
        )


@dataclass(slots=True)
class Server:
    """A server (guild) the bot is a member of."""

    id: int
    name: str
    channels: List[Channel] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Server":
        server_id = resolve_id(data["id"])
        channels = []
        for raw in data.get("channels") or []:
            channel = Channel.from_payload(raw)
            if channel.server_id is None:
                channel.server_id = server_id
            channels.append(channel)
        return cls(id=server_id, name=data["name"], channels=channels)


@dataclass(slots=True)
class Invite:
    """Metadata describing an invite code. Never cached."""

    code: str
    server_id: Optional[int] = None
    server_name: Optional[str] = None
    channel_id: Optional[int] = None
    channel_name: Optional[str] = None
    inviter: Optional[User] = None

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "Invite":
        guild = data.get("guild") or {}
        channel = data.get("channel") or {}
        inviter = data.get("inviter")
        return cls(
            code=data["code"],
            server_id=_optional_id(guild.get("id")),
            server_name=guild.get("name"),
            channel_id=_optional_id(channel.get("id")),
            channel_name=channel.get("name"),
            inviter=User.from_payload(inviter) if inviter else None,
        )

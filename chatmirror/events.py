"""Gateway event value objects handed to awaits and their callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import Channel, Server, User


@dataclass(frozen=True, slots=True)
class MessageEvent:
    """A message was created in a channel the bot can see."""

    message_id: int
    content: str
    author: User
    channel: Channel
    server: Optional[Server] = None


@dataclass(frozen=True, slots=True)
class ReactionEvent:
    """A reaction was added to a message."""

    message_id: int
    emoji: str
    user: User
    channel: Channel
    server: Optional[Server] = None


__all__ = ["MessageEvent", "ReactionEvent"]

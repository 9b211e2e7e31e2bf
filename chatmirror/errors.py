"""Error types raised by the transport, the cache, and await matching."""

from __future__ import annotations


class ChatMirrorError(Exception):
    """Base class for every error raised by this package."""


class NoPermission(ChatMirrorError):
    """The bot is not allowed to access the requested resource."""


class NotFound(ChatMirrorError):
    """The requested resource does not exist."""


class NetworkError(ChatMirrorError):
    """A request failed for a reason other than permissions or absence."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class UnknownEventType(ChatMirrorError, LookupError):
    """No predicate evaluator is registered for an await's type tag."""


__all__ = [
    "ChatMirrorError",
    "NoPermission",
    "NotFound",
    "NetworkError",
    "UnknownEventType",
]

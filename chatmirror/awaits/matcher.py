"""A single registered wait condition."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Hashable, Mapping, Protocol


class HandlerFactory(Protocol):
    def handler_class(self, event_type: str) -> type: ...


def _noop(event: Any) -> None:
    return None


class Await:
    """
    One-shot condition waiting for a matching event.

    An ``Await`` never changes after construction and never removes itself;
    the owning registry deregisters it once :meth:`match` returns its key.
    """

    __slots__ = ("_bot", "key", "type", "attributes", "_callback")

    def __init__(
        self,
        bot: HandlerFactory,
        key: Hashable,
        type: str,
        attributes: Mapping[str, Any],
        callback: Callable[[Any], Any] | None = None,
    ) -> None:
        if key is None:
            raise ValueError("Await key must not be None")
        self._bot = bot
        self.key = key
        self.type = type
        self.attributes = MappingProxyType(dict(attributes))
        self._callback = callback

    def match(self, event: Any) -> Hashable | None:
        """
        Test ``event``; on a match run the callback and return the key.

        :returns: ``None`` when ``event`` does not satisfy the condition.
        :raises UnknownEventType: ``type`` has no registered handler.
        """
        handler = self._bot.handler_class(self.type)(self.attributes, _noop)
        if not handler.matches(event):
            return None

        if self._callback is not None:
            self._callback(event)
        return self.key

    def __repr__(self) -> str:
        return f"Await(key={self.key!r}, type={self.type!r}, attributes={dict(self.attributes)!r})"

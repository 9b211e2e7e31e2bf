"""
Await registry driven by inbound gateway events.

Every dispatched event is offered to each live :class:`Await` in registration
order; those that report their key are deregistered. Several awaits may fire
on the same event.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Callable, Dict, Hashable, List, Mapping

from .matcher import Await, HandlerFactory

logger = logging.getLogger(__name__)


class AwaitRegistry:
    """Owns the live awaits of one session."""

    def __init__(self, bot: HandlerFactory) -> None:
        self._bot = bot
        self._awaits: Dict[Hashable, Await] = {}

    def add(
        self,
        type: str,
        attributes: Mapping[str, Any] | None = None,
        callback: Callable[[Any], Any] | None = None,
        key: Hashable | None = None,
    ) -> Await:
        """Register an await; a missing ``key`` is generated. Same key replaces."""

        # reject an unknown type or attribute before it is stored
        self._bot.handler_class(type)(attributes or {})
        if key is None:
            key = uuid.uuid4().hex
        entry = Await(self._bot, key, type, attributes or {}, callback)
        if key in self._awaits:
            logger.debug("Replacing await %r", key)
            # re-insert so the replacement is evaluated in its new position
            del self._awaits[key]
        self._awaits[key] = entry
        logger.debug("Registered %r", entry)
        return entry

    def remove(self, key: Hashable) -> Await | None:
        return self._awaits.pop(key, None)

    def clear(self) -> None:
        self._awaits.clear()

    def dispatch(self, event: Any) -> List[Hashable]:
        """Offer ``event`` to every await and return the keys that fired."""

        fired: List[Hashable] = []
        for entry in list(self._awaits.values()):
            key = entry.match(event)
            if key is None:
                continue
            fired.append(key)
            # the callback may already have replaced or removed this key
            if self._awaits.get(key) is entry:
                del self._awaits[key]

        if fired:
            logger.info("Event %s fired %d await(s)", type(event).__name__, len(fired))
        return fired

    async def wait_for(
        self,
        type: str,
        attributes: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """
        Wait until an event matching ``type``/``attributes`` is dispatched.

        :raises asyncio.TimeoutError: nothing matched within ``timeout`` seconds.
        """
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        def _resolve(event: Any) -> None:
            if not future.done():
                future.set_result(event)

        entry = self.add(type, attributes, _resolve)
        try:
            return await asyncio.wait_for(future, timeout)
        finally:
            if self._awaits.get(entry.key) is entry:
                del self._awaits[entry.key]

    def __len__(self) -> int:
        return len(self._awaits)

    def __contains__(self, key: object) -> bool:
        return key in self._awaits

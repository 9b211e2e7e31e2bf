"""
MessageHandler
==============
Matches :class:`~chatmirror.events.MessageEvent` against:

* ``content``    - exact message text
* ``start_with`` - text prefix
* ``end_with``   - text suffix
* ``contains``   - substring
* ``in``         - channel id, name (``#general`` or ``general``) or channel
* ``from``       - author id, username or user
* ``private``    - ``True`` for DMs only, ``False`` for server channels only
"""

from __future__ import annotations

from typing import Any, Mapping

from chatmirror.events import MessageEvent

from . import Action, check_attributes, matches_entity, register


@register
class MessageHandler:
    event_type = "message"
    attribute_names = frozenset(
        {"content", "start_with", "end_with", "contains", "in", "from", "private"}
    )

    def __init__(self, attributes: Mapping[str, Any], action: Action | None = None) -> None:
        self.attributes = check_attributes(type(self), attributes)
        self.action = action

    def matches(self, event: Any) -> bool:
        if not isinstance(event, MessageEvent):
            return False

        attrs = self.attributes
        text = event.content or ""

        if "content" in attrs and text != attrs["content"]:
            return False
        if "start_with" in attrs and not text.startswith(attrs["start_with"]):
            return False
        if "end_with" in attrs and not text.endswith(attrs["end_with"]):
            return False
        if "contains" in attrs and attrs["contains"] not in text:
            return False
        if "private" in attrs and event.channel.is_private != bool(attrs["private"]):
            return False

        return matches_entity(attrs.get("in"), event.channel, "name") and matches_entity(
            attrs.get("from"), event.author, "username"
        )

    def call(self, event: Any) -> bool:
        if not self.matches(event):
            return False
        if self.action is not None:
            self.action(event)
        return True

"""
ReactionAddHandler
==================
Matches :class:`~chatmirror.events.ReactionEvent` on ``emoji`` (the unicode
emoji or custom emoji name), ``from`` (reacting user), ``in`` (channel) and
``message`` (message id or any object exposing one).
"""

from __future__ import annotations

from typing import Any, Mapping

from chatmirror.events import ReactionEvent
from chatmirror.ids import resolve_id

from . import Action, check_attributes, matches_entity, register


@register
class ReactionAddHandler:
    event_type = "reaction_add"
    attribute_names = frozenset({"emoji", "from", "in", "message"})

    def __init__(self, attributes: Mapping[str, Any], action: Action | None = None) -> None:
        self.attributes = check_attributes(type(self), attributes)
        self.action = action

    def matches(self, event: Any) -> bool:
        if not isinstance(event, ReactionEvent):
            return False

        attrs = self.attributes
        if "emoji" in attrs and event.emoji != attrs["emoji"]:
            return False
        if "message" in attrs and resolve_id(attrs["message"]) != event.message_id:
            return False

        return matches_entity(attrs.get("in"), event.channel, "name") and matches_entity(
            attrs.get("from"), event.user, "username"
        )

    def call(self, event: Any) -> bool:
        if not self.matches(event):
            return False
        if self.action is not None:
            self.action(event)
        return True

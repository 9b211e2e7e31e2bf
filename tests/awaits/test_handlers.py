import pytest

from chatmirror.awaits import handlers
from chatmirror.awaits.handlers.message import MessageHandler
from chatmirror.awaits.handlers.reaction import ReactionAddHandler
from chatmirror.errors import UnknownEventType
from chatmirror.events import MessageEvent, ReactionEvent
from chatmirror.models import Channel, User

ALICE = User(id=100, username="alice")
GENERAL = Channel(id=11, name="general", server_id=1)
DM = Channel(id=50, name=None, type=1)


def _message(content="hello world", author=ALICE, channel=GENERAL):
    return MessageEvent(message_id=1, content=content, author=author, channel=channel)


def test_registry_discovers_sibling_handlers():
    assert handlers.get("message") is MessageHandler
    assert handlers.handler_class("reaction_add") is ReactionAddHandler
    assert {"message", "reaction_add"} <= set(handlers.all_event_types())
    assert handlers.get("nope") is None


def test_unknown_event_type_raises():
    with pytest.raises(UnknownEventType):
        handlers.handler_class("nope")


def test_unknown_attribute_is_rejected():
    with pytest.raises(ValueError, match="colour"):
        MessageHandler({"colour": "red"})


def test_empty_attributes_match_every_message():
    assert MessageHandler({}).matches(_message())


@pytest.mark.parametrize(
    "attrs, expected",
    [
        ({"content": "hello world"}, True),
        ({"content": "hello"}, False),
        ({"start_with": "hello"}, True),
        ({"start_with": "world"}, False),
        ({"end_with": "world"}, True),
        ({"contains": "o w"}, True),
        ({"contains": "xyz"}, False),
        ({"in": "#general"}, True),
        ({"in": "general"}, True),
        ({"in": 11}, True),
        ({"in": "11"}, True),
        ({"in": GENERAL}, True),
        ({"in": "random"}, False),
        ({"from": "alice"}, True),
        ({"from": 100}, True),
        ({"from": ALICE}, True),
        ({"from": "bob"}, False),
        ({"private": False}, True),
        ({"private": True}, False),
        ({"start_with": "hello", "from": "alice", "in": "general"}, True),
        ({"start_with": "hello", "from": "bob"}, False),
    ],
)
def test_message_attributes(attrs, expected):
    assert MessageHandler(attrs).matches(_message()) is expected


def test_private_messages():
    assert MessageHandler({"private": True}).matches(_message(channel=DM))


def test_handlers_ignore_other_event_types():
    reaction = ReactionEvent(message_id=1, emoji="👍", user=ALICE, channel=GENERAL)

    assert not MessageHandler({}).matches(reaction)
    assert not ReactionAddHandler({}).matches(_message())


def test_reaction_attributes():
    event = ReactionEvent(message_id=77, emoji="👍", user=ALICE, channel=GENERAL)

    assert ReactionAddHandler({"emoji": "👍", "message": 77, "from": "alice"}).matches(event)
    assert not ReactionAddHandler({"emoji": "👎"}).matches(event)
    assert not ReactionAddHandler({"message": 78}).matches(event)
    assert not ReactionAddHandler({"in": "random"}).matches(event)


def test_call_runs_action_only_on_match():
    seen = []
    handler = MessageHandler({"contains": "hello"}, seen.append)

    assert handler.call(_message()) is True
    assert handler.call(_message("bye")) is False
    assert len(seen) == 1

import asyncio
from types import SimpleNamespace

import pytest

from chatmirror.errors import NetworkError, NoPermission, NotFound
from chatmirror.memory.cache import EntityCache
from chatmirror.models import Channel, Server, User


def _channel_payload(cid, name="general"):
    return {"id": str(cid), "type": 0, "name": name}


class FakeAPI:
    def __init__(self, channels=None, invites=None, errors=None, gate=None):
        self.channels = channels or {}
        self.invites = invites or {}
        self.errors = errors or {}
        self.gate = gate
        self.calls = []

    async def fetch_channel(self, channel_id):
        self.calls.append(("channel", channel_id))
        if self.gate is not None:
            await self.gate.wait()
        if channel_id in self.errors:
            raise self.errors[channel_id]
        return self.channels[channel_id]

    async def create_private_channel(self, self_user_id, peer_user_id):
        self.calls.append(("private", self_user_id, peer_user_id))
        return {
            "id": str(1000 + peer_user_id),
            "type": 1,
            "recipients": [{"id": str(peer_user_id), "username": "peer"}],
        }

    async def resolve_invite(self, code):
        self.calls.append(("invite", code))
        if code not in self.invites:
            raise NotFound(code)
        return self.invites[code]

    async def close(self):
        pass


# ------------------------------------------------------------------ #
# channel()
# ------------------------------------------------------------------ #


def test_channel_is_fetched_once_then_served_from_cache():
    api = FakeAPI(channels={5: _channel_payload(5)})
    cache = EntityCache(api)

    first = asyncio.run(cache.channel(5))
    second = asyncio.run(cache.channel(SimpleNamespace(id=5)))

    assert first is second
    assert first.name == "general"
    assert api.calls == [("channel", 5)]


def test_forbidden_channel_is_blacklisted_and_never_refetched():
    api = FakeAPI(errors={6: NoPermission("nope")})
    cache = EntityCache(api)

    with pytest.raises(NoPermission):
        asyncio.run(cache.channel(6))
    assert cache.is_restricted(6)

    for _ in range(3):
        with pytest.raises(NoPermission):
            asyncio.run(cache.channel("6"))

    assert api.calls == [("channel", 6)]


def test_other_failures_leave_cache_untouched():
    api = FakeAPI(errors={7: NetworkError("boom", status=500)})
    cache = EntityCache(api)

    with pytest.raises(NetworkError):
        asyncio.run(cache.channel(7))

    assert not cache.is_restricted(7)
    api.errors.clear()
    api.channels[7] = _channel_payload(7, "later")
    assert asyncio.run(cache.channel(7)).name == "later"
    assert api.calls == [("channel", 7), ("channel", 7)]


def test_concurrent_misses_issue_a_single_fetch():
    async def scenario():
        gate = asyncio.Event()
        api = FakeAPI(channels={5: _channel_payload(5)}, gate=gate)
        cache = EntityCache(api, serialize_fetches=True)

        first = asyncio.create_task(cache.channel(5))
        second = asyncio.create_task(cache.channel(5))
        await asyncio.sleep(0)
        gate.set()
        a, b = await asyncio.gather(first, second)
        return api, cache, a, b

    api, cache, a, b = asyncio.run(scenario())

    assert a is b
    assert api.calls == [("channel", 5)]
    assert len(cache._locks) == 0


def test_concurrent_misses_race_when_serialization_is_off():
    async def scenario():
        gate = asyncio.Event()
        api = FakeAPI(channels={5: _channel_payload(5)}, gate=gate)
        cache = EntityCache(api, serialize_fetches=False)

        tasks = [asyncio.create_task(cache.channel(5)) for _ in range(2)]
        await asyncio.sleep(0)
        gate.set()
        await asyncio.gather(*tasks)
        return api, cache

    api, cache = asyncio.run(scenario())

    assert api.calls == [("channel", 5), ("channel", 5)]
    assert asyncio.run(cache.channel(5)).id == 5


def test_concurrent_forbidden_waiter_sees_blacklist():
    async def scenario():
        gate = asyncio.Event()
        api = FakeAPI(errors={6: NoPermission("nope")}, gate=gate)
        cache = EntityCache(api, serialize_fetches=True)

        tasks = [asyncio.create_task(cache.channel(6)) for _ in range(2)]
        await asyncio.sleep(0)
        gate.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)
        return api, results

    api, results = asyncio.run(scenario())

    assert all(isinstance(r, NoPermission) for r in results)
    assert api.calls == [("channel", 6)]


# ------------------------------------------------------------------ #
# private_channel()
# ------------------------------------------------------------------ #


def test_private_channel_is_created_once_per_peer():
    api = FakeAPI()
    cache = EntityCache(api, bot_user_id=1)

    first = asyncio.run(cache.private_channel(8))
    second = asyncio.run(cache.private_channel(User(id=8, username="peer")))

    assert first is second
    assert first.is_private
    assert first.recipient.id == 8
    assert api.calls == [("private", 1, 8)]


def test_private_channel_requires_bot_user_id():
    cache = EntityCache(FakeAPI())

    with pytest.raises(RuntimeError):
        asyncio.run(cache.private_channel(8))


# ------------------------------------------------------------------ #
# invite()
# ------------------------------------------------------------------ #


def test_invite_resolves_code_and_is_never_cached():
    api = FakeAPI(invites={"abc123": {"code": "abc123", "guild": {"id": "1", "name": "g"}}})
    cache = EntityCache(api)

    invite = asyncio.run(cache.invite("https://discord.gg/abc123"))
    again = asyncio.run(cache.invite(invite))

    assert invite.code == "abc123"
    assert invite.server_name == "g"
    assert again is not invite
    assert api.calls == [("invite", "abc123"), ("invite", "abc123")]


def test_unknown_invite_propagates_not_found():
    with pytest.raises(NotFound):
        asyncio.run(EntityCache(FakeAPI()).invite("missing"))


# ------------------------------------------------------------------ #
# Local lookups
# ------------------------------------------------------------------ #


def _seeded_cache():
    api = FakeAPI()
    cache = EntityCache(api)
    alpha = Server(
        id=1,
        name="alpha",
        channels=[Channel(id=11, name="general"), Channel(id=12, name="random")],
    )
    beta = Server(id=2, name="beta", channels=[Channel(id=21, name="general")])
    cache.add_server(alpha, [User(id=100, username="alice"), User(id=101, username="bob")])
    cache.add_server(beta, [User(id=102, username="bob")])
    return api, cache


def test_user_and_server_lookups_never_fetch():
    api, cache = _seeded_cache()

    assert cache.user(100).username == "alice"
    assert cache.user("999") is None
    assert cache.server(SimpleNamespace(id=2)).name == "beta"
    assert cache.server(3) is None
    assert api.calls == []


def test_find_channel_with_and_without_server_filter():
    _, cache = _seeded_cache()

    assert [c.id for c in cache.find_channel("general")] == [11, 21]
    assert [c.id for c in cache.find_channel("general", "beta")] == [21]
    assert cache.find_channel("general", "gamma") == []
    assert cache.find_channel("nope") == []


def test_find_user_returns_every_match_or_empty_list():
    _, cache = _seeded_cache()

    assert [u.id for u in cache.find_user("bob")] == [101, 102]
    assert cache.find_user("alice")[0].id == 100
    assert EntityCache(FakeAPI()).find_user("alice") == []


def test_remove_and_reset():
    api = FakeAPI(errors={6: NoPermission("nope")})
    _, cache = _seeded_cache()
    cache._api = api

    assert cache.remove_server(2).name == "beta"
    assert cache.remove_user(100).username == "alice"
    assert cache.remove_user(100) is None

    with pytest.raises(NoPermission):
        asyncio.run(cache.channel(6))

    cache.reset()
    assert cache.users == [] and cache.servers == []
    assert not cache.is_restricted(6)

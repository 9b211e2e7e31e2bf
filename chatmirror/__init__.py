"""
Client-side state layer for a Discord bot.

``chatmirror`` keeps a lazily populated, in-memory mirror of remote entities
(users, servers, channels, invites) and lets code register one-shot "awaits"
that fire the first time a matching gateway event is observed.

Entry points
============

``chatmirror.session.Session``
    Owns one :class:`~chatmirror.memory.cache.EntityCache` and one
    :class:`~chatmirror.awaits.AwaitRegistry` for a running bot.
``chatmirror.clients.disc``
    ``discord.py`` client that feeds gateway events into a session.
"""

"""
Entity resolution cache package.

Modules
=======

``manager``
    Defines :class:`~chatmirror.memory.cache.manager.EntityCache`, the owned,
    per-session cache that decides when to trust local state and when to fetch
    from the REST transport.
``stores``
    Provides :class:`~chatmirror.memory.cache.stores.EntityStore`, the
    insertion-ordered id -> entity mapping backing each entity collection.
``inflight``
    Per-key ``asyncio`` locks used to serialize concurrent cache misses.
``invites``
    Pure helpers for extracting invite codes from URLs and invite objects.
``utils``
    Internal logging helpers used by :mod:`manager` to describe entities.
"""

from .invites import resolve_invite_code
from .manager import EntityCache

__all__ = ["EntityCache", "resolve_invite_code"]

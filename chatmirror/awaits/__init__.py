"""
One-shot event awaits.

``matcher``
    :class:`~chatmirror.awaits.matcher.Await`, a single immutable wait
    condition evaluated against one event at a time.
``registry``
    :class:`~chatmirror.awaits.registry.AwaitRegistry`, which offers every
    inbound event to the live awaits and deregisters those that fire.
``handlers``
    Tag-indexed table of predicate evaluators the awaits are built from.
"""

from .matcher import Await
from .registry import AwaitRegistry

__all__ = ["Await", "AwaitRegistry"]

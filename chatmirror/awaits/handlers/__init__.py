"""
Auto-discovery & registry for await predicate evaluators.

Any file inside ``awaits/handlers/`` that defines::

    from . import register

    @register
    class MyHandler:
        event_type = "typing"
        attribute_names = frozenset({"from", "in"})
        def __init__(self, attributes, action=None): ...
        def matches(self, event) -> bool: ...

is picked up automatically at import-time.

NOTE: If adding a new handler, ensure:
1. It has a unique ``event_type`` string.
2. It implements the EventHandler protocol (see below).
3. It is placed in this directory (awaits/handlers/).
"""

from __future__ import annotations

from importlib import import_module
from pathlib import Path
from pkgutil import iter_modules
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Mapping, Protocol

from chatmirror.errors import UnknownEventType
from chatmirror.ids import resolve_id

Action = Callable[[Any], Any]

# ------------------------------------------------------------------ #
# 1.  Registry contract + decorator
# ------------------------------------------------------------------ #


class EventHandler(Protocol):
    """Disposable predicate built from an await's attribute bag."""

    event_type: ClassVar[str]
    attribute_names: ClassVar[FrozenSet[str]]

    def __init__(self, attributes: Mapping[str, Any], action: Action | None = None) -> None:
        ...

    def matches(self, event: Any) -> bool:
        """Return ``True`` when ``event`` satisfies every configured attribute."""

    def call(self, event: Any) -> bool:
        """Run the action if ``event`` matches; return whether it matched."""


_REGISTRY: Dict[str, type[EventHandler]] = {}


def register(cls):
    """
    Decorator that stores the handler class in the global registry.

    :param cls: Handler class to register.
    :returns: The class unchanged.
    """
    _REGISTRY[cls.event_type] = cls
    return cls


def get(event_type: str) -> type[EventHandler] | None:
    """Return handler class for ``event_type`` or ``None``."""
    return _REGISTRY.get(event_type)


def handler_class(event_type: str) -> type[EventHandler]:
    """Return handler class for ``event_type``.

    :raises UnknownEventType: nothing is registered under ``event_type``.
    """
    cls = _REGISTRY.get(event_type)
    if cls is None:
        known = ", ".join(sorted(_REGISTRY)) or "none"
        raise UnknownEventType(f"No await handler for event type {event_type!r} (known: {known})")
    return cls


def all_event_types() -> Dict[str, type[EventHandler]]:
    """Return copy of the handler registry."""
    return dict(_REGISTRY)


# ------------------------------------------------------------------ #
# 2.  Shared attribute helpers
# ------------------------------------------------------------------ #


def check_attributes(cls, attributes: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``attributes`` as a dict, rejecting names ``cls`` does not know."""

    unknown = set(attributes) - cls.attribute_names
    if unknown:
        raise ValueError(
            f"Unknown attribute(s) for {cls.event_type!r} await: {', '.join(sorted(unknown))}"
        )
    return dict(attributes)


def matches_entity(expected: Any, entity: Any, name_attr: str) -> bool:
    """
    Compare an attribute value against ``entity``.

    Strings match the entity's name (a leading ``#`` is ignored for channels);
    anything else is resolved to an id and compared with ``entity.id``.
    """
    if expected is None:
        return True
    if entity is None:
        return False
    if isinstance(expected, str) and not expected.strip().isdigit():
        return getattr(entity, name_attr, None) == expected.lstrip("#")
    return resolve_id(expected) == entity.id


# ------------------------------------------------------------------ #
# 3.  Auto-import every sibling module (plug-n-play)
# ------------------------------------------------------------------ #

_pkg_path = Path(__file__).resolve().parent
for _, modname, _ in iter_modules([str(_pkg_path)]):
    if modname != "__init__":
        import_module(f"{__name__}.{modname}")

"""Coercion of identifier-like values into canonical integer ids."""

from __future__ import annotations

from typing import Any


def resolve_id(value: Any) -> int:
    """
    Return the integer identifier for ``value``.

    Accepts a non-negative ``int``, a decimal string (Discord snowflakes arrive
    as strings in payloads), or any object exposing an ``id`` attribute holding
    one of those.

    :raises TypeError: ``value`` is not identifier-like.
    :raises ValueError: ``value`` is negative or not a decimal string.
    """
    # bool is an int subclass; True is never a meaningful id
    if isinstance(value, bool):
        raise TypeError("bool is not a valid identifier")

    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Identifier must be non-negative, got {value}")
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise ValueError(f"Identifier string must be decimal digits, got {value!r}")
        return int(text)

    inner = getattr(value, "id", None)
    if inner is None or inner is value:
        raise TypeError(f"Cannot resolve an identifier from {type(value).__name__}")
    return resolve_id(inner)

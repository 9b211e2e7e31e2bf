"""Invite code extraction."""

from __future__ import annotations

from typing import Any

_URL_PREFIXES = ("http", "discord.gg")


def resolve_invite_code(invite: Any) -> str:
    """
    Return only the code part of ``invite``.

    Accepted formats:

    * an invite object (anything exposing ``code``)
    * the bare code, e.g. ``0A37aN7fasF7n83q``
    * a full URL, e.g. ``https://discordapp.com/invite/0A37aN7fasF7n83q``
    * a short URL with or without protocol, e.g. ``discord.gg/0A37aN7fasF7n83q``

    Anything else is returned unchanged. No network I/O, never raises.
    """
    if not isinstance(invite, str):
        code = getattr(invite, "code", None)
        invite = code if code is not None else str(invite)

    if invite.startswith(_URL_PREFIXES):
        # Everything after the final "/"; a prefix without "/" is kept whole.
        invite = invite[invite.rfind("/") + 1 :]
    return invite

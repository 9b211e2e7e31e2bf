"""``aiohttp`` transport for the Discord REST endpoints used by the cache."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict

import aiohttp

from chatmirror.config import core
from chatmirror.errors import NetworkError, NoPermission, NotFound

logger = logging.getLogger(__name__)


class DiscordAPI:
    """Authenticated REST client sharing one ``aiohttp.ClientSession``."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._token = token
        self._base_url = (base_url or core.API_BASE_URL).rstrip("/")
        self._timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else core.HTTP_TIMEOUT
        )
        self._session = session

    # ------------------------------------------------------------------ #
    # Session lifecycle
    # ------------------------------------------------------------------ #

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "DiscordAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # ------------------------------------------------------------------ #
    # Request plumbing
    # ------------------------------------------------------------------ #

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bot {self._token}",
            "User-Agent": "chatmirror (https://github.com/chatmirror, 0.1)",
        }

    async def _request(
        self, method: str, path: str, *, json: Dict[str, Any] | None = None
    ) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        session = self._get_session()
        logger.debug("%s %s", method, url)
        try:
            async with session.request(
                method, url, json=json, headers=self._headers
            ) as resp:
                if resp.status == 403:
                    raise NoPermission(f"{method} {path} is forbidden")
                if resp.status == 404:
                    raise NotFound(f"{method} {path} was not found")
                if resp.status >= 400:
                    body = await resp.text()
                    raise NetworkError(
                        f"{method} {path} failed with HTTP {resp.status}: {body[:200]}",
                        status=resp.status,
                    )
                try:
                    return await resp.json()
                except ValueError as exc:
                    raise NetworkError(
                        f"{method} {path} returned an undecodable body: {exc}",
                        status=resp.status,
                    ) from exc
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc

    # ------------------------------------------------------------------ #
    # Endpoints
    # ------------------------------------------------------------------ #

    async def fetch_channel(self, channel_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/channels/{channel_id}")

    async def create_private_channel(
        self, self_user_id: int, peer_user_id: int
    ) -> Dict[str, Any]:
        # Bots may only open DMs for themselves; the API addresses that as @me.
        logger.debug("Opening DM from %s to %s", self_user_id, peer_user_id)
        return await self._request(
            "POST", "/users/@me/channels", json={"recipient_id": str(peer_user_id)}
        )

    async def resolve_invite(self, code: str) -> Dict[str, Any]:
        return await self._request("GET", f"/invites/{code}")

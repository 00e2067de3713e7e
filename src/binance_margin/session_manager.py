"""
Session management for the Binance margin client.

One client instance sends every call through a single aiohttp session; its
``ClientTimeout`` is the only request deadline.
"""

from typing import Optional

import aiohttp

from .constants import MAX_CONNECTIONS_PER_HOST, SESSION_HEADERS
from .models.config import ConnectionConfig


class SessionManager:
    """Opens the client's session on first use and closes it on shutdown."""

    def __init__(self, config: ConnectionConfig):
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def create_session(self) -> aiohttp.ClientSession:
        """Return the open session, opening a new one if there is none."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(limit_per_host=MAX_CONNECTIONS_PER_HOST),
                timeout=self._timeout,
                headers=SESSION_HEADERS,
            )
        return self._session

    async def close_session(self) -> None:
        """Close the session if one is open."""
        session, self._session = self._session, None
        if session is not None and not session.closed:
            await session.close()

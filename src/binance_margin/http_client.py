"""
HTTP client for the Binance margin API.

Handles authentication, request execution and raw response capture.
Status classification and payload decoding live in ``responses``; this
module only reports what came back over the wire.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import aiohttp
from aiohttp import ClientSession
from yarl import URL

from .auth import ApiCredentials, MarginSigner, canonical_query
from .exceptions import TransportError
from .models.config import ConnectionConfig

logger = logging.getLogger(__name__)

BODY_METHODS = ("POST", "PUT", "DELETE")


@dataclass(frozen=True)
class RawResponse:
    """Status and fully-read body of a completed HTTP exchange."""
    status: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


class HttpClient:
    """HTTP client specialized for Binance SAPI interactions."""

    def __init__(self, config: ConnectionConfig, signer: Optional[MarginSigner] = None):
        """Initialize HTTP client with configuration."""
        self._config = config
        self._signer = signer or MarginSigner(
            ApiCredentials(config.api_key, config.api_secret),
            recv_window=config.recv_window,
        )

    async def request(
        self,
        session: ClientSession,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, str]] = None,
        needs_api_key: bool = False,
        needs_signature: bool = False,
    ) -> RawResponse:
        """
        Send one request and return the raw response.

        Any completed HTTP exchange is returned regardless of status code.
        Connection failures, timeouts and body read errors raise
        ``TransportError``.
        """
        method = method.upper()
        url = f"{self._config.base_url}{endpoint}"

        request_params = dict(params or {})
        headers: Dict[str, str] = {}

        if needs_signature:
            request_params = self._signer.sign_params(request_params)
        if needs_api_key or needs_signature:
            headers.update(self._signer.get_auth_headers())

        # Sent exactly as signed: sorted keys, signature last
        payload = canonical_query(request_params)

        request_kwargs = {"method": method, "headers": headers}
        if method in BODY_METHODS:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
            request_kwargs["data"] = payload
        elif payload:
            url = f"{url}?{payload}"
        # Already percent-encoded; yarl must not encode it again
        request_kwargs["url"] = URL(url, encoded=True)

        logger.debug(f"{method} {endpoint} (signed={needs_signature})")

        try:
            async with session.request(**request_kwargs) as response:
                body = await response.read()
                logger.debug(f"{method} {endpoint} -> {response.status}")
                return RawResponse(
                    status=response.status,
                    body=body,
                    headers=dict(response.headers),
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{method} {endpoint} failed: {e!r}") from e

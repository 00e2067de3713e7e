"""
Binance margin client - main orchestration module.

The client coordinates the pieces of the margin pipeline:
- Data models are immutable structures in models/
- Request parameters are built in params.py
- Signing and HTTP transport are handled by auth.py and http_client.py
- Status classification and payload decoding are in responses.py
- Endpoint methods are implemented in api_methods.py
- Session lifecycle is handled by session_manager.py
"""

import asyncio
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .api_methods import APIMethods
from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    MARGIN_ACCOUNT_ENDPOINT,
    MARGIN_ASSET_ENDPOINT,
    MARGIN_LOAN_ENDPOINT,
    MARGIN_ORDER_ENDPOINT,
    MARGIN_REPAY_ENDPOINT,
)
from .http_client import HttpClient
from .models import (
    AccountRequest,
    BorrowRequest,
    ConnectionConfig,
    ExecutedOrder,
    MarginAccount,
    MarginAsset,
    MarginAssetRequest,
    MarginTransaction,
    NewOrderRequest,
    ProcessedOrder,
    QueryOrderRequest,
)
from .monitoring import CallMonitor, CallOutcome, Statistics
from .session_manager import SessionManager

logger = logging.getLogger(__name__)


class MarginClient:
    """
    Main margin client orchestrator.

    Every call is one request and one response; nothing is retried and every
    failure is raised as a ``MarginClientError`` subclass.
    """

    def __init__(self, config: ConnectionConfig):
        """Initialize margin client with configuration."""
        self._config = config
        self._session_manager = SessionManager(config)
        self._http_client = HttpClient(config)
        self._api_methods = APIMethods(self._http_client)
        self._monitor = CallMonitor()
        self._closed = False
        logger.info(f"Margin client initialized for {config.base_url}")

    @classmethod
    def from_env(cls) -> "MarginClient":
        """Create client from environment variables (a .env file is honoured)."""
        load_dotenv()

        recv_window = os.getenv("BINANCE_RECV_WINDOW")
        config = ConnectionConfig(
            api_key=os.getenv("BINANCE_API_KEY", ""),
            api_secret=os.getenv("BINANCE_API_SECRET", ""),
            base_url=os.getenv("BINANCE_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("BINANCE_TIMEOUT", str(DEFAULT_TIMEOUT))),
            recv_window=int(recv_window) if recv_window else None,
        )

        return cls(config)

    # Loans
    async def borrow(self, request: BorrowRequest) -> MarginTransaction:
        """Borrow ``request.amount`` of ``request.asset`` into the margin account."""
        return await self._execute_with_monitoring(
            self._api_methods.borrow, "POST", MARGIN_LOAN_ENDPOINT, request
        )

    async def repay(self, request: BorrowRequest) -> MarginTransaction:
        """Repay a margin loan."""
        return await self._execute_with_monitoring(
            self._api_methods.repay, "POST", MARGIN_REPAY_ENDPOINT, request
        )

    # Account
    async def get_margin_account(
        self, request: Optional[AccountRequest] = None
    ) -> MarginAccount:
        """Get the margin account snapshot."""
        return await self._execute_with_monitoring(
            self._api_methods.get_margin_account,
            "GET",
            MARGIN_ACCOUNT_ENDPOINT,
            request or AccountRequest(),
        )

    async def get_margin_asset(self, request: MarginAssetRequest) -> MarginAsset:
        """Get borrowing details for one margin asset."""
        return await self._execute_with_monitoring(
            self._api_methods.get_margin_asset, "GET", MARGIN_ASSET_ENDPOINT, request
        )

    # Orders
    async def new_order(self, request: NewOrderRequest) -> ProcessedOrder:
        """Place a margin order."""
        return await self._execute_with_monitoring(
            self._api_methods.new_order, "POST", MARGIN_ORDER_ENDPOINT, request
        )

    async def query_order(self, request: QueryOrderRequest) -> ExecutedOrder:
        """Look up a margin order."""
        return await self._execute_with_monitoring(
            self._api_methods.query_order, "GET", MARGIN_ORDER_ENDPOINT, request
        )

    # Monitoring
    def get_statistics(self) -> Statistics:
        """Get call outcome statistics."""
        return self._monitor.statistics

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            await self._session_manager.close_session()
            self._closed = True
            logger.info("Margin client closed")

    async def _execute_with_monitoring(
        self, api_method, method: str, endpoint: str, *args, **kwargs
    ):
        """Execute API method and record its outcome."""
        if self._closed:
            raise RuntimeError("Client is closed")

        loop = asyncio.get_running_loop()
        start_time = loop.time()
        session = await self._session_manager.create_session()

        try:
            result = await api_method(session, *args, **kwargs)
        except Exception as e:
            duration_ms = (loop.time() - start_time) * 1000
            self._monitor.record(endpoint, method, CallOutcome.from_exception(e), duration_ms)
            raise

        duration_ms = (loop.time() - start_time) * 1000
        self._monitor.record(endpoint, method, CallOutcome.SUCCEEDED, duration_ms)
        return result

    # Context manager support
    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def create_margin_client(
    api_key: str,
    api_secret: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    recv_window: Optional[int] = None,
) -> MarginClient:
    """
    Factory function to create a margin client.

    Args:
        api_key: API key for authentication
        api_secret: API secret for signing
        base_url: Base URL for API endpoints
        timeout: Total request timeout in seconds
        recv_window: Default recvWindow in milliseconds for signed requests

    Returns:
        Configured MarginClient instance
    """
    config = ConnectionConfig(
        api_key=api_key,
        api_secret=api_secret,
        base_url=base_url,
        timeout=timeout,
        recv_window=recv_window,
    )
    return MarginClient(config)

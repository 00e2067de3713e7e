"""
API method implementations for the Binance margin client.

Each method runs the same pipeline: build parameters, send one signed
request, classify the status and decode the payload.
"""

import logging
from typing import Any, Callable, Dict, TypeVar

from aiohttp import ClientSession

from .constants import (
    MARGIN_ACCOUNT_ENDPOINT,
    MARGIN_ASSET_ENDPOINT,
    MARGIN_LOAN_ENDPOINT,
    MARGIN_ORDER_ENDPOINT,
    MARGIN_REPAY_ENDPOINT,
)
from .http_client import HttpClient
from .models.account import (
    AccountRequest,
    BorrowRequest,
    MarginAccount,
    MarginAsset,
    MarginAssetRequest,
    MarginTransaction,
)
from .models.orders import ExecutedOrder, NewOrderRequest, ProcessedOrder, QueryOrderRequest
from .params import build_params
from .responses import (
    decode_executed_order,
    decode_margin_account,
    decode_margin_asset,
    decode_processed_order,
    decode_response,
    decode_transaction,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class APIMethods:
    """Container for margin endpoint implementations."""

    def __init__(self, http_client: HttpClient):
        """Initialize API methods with HTTP client."""
        self._http_client = http_client

    async def _call(
        self,
        session: ClientSession,
        method: str,
        endpoint: str,
        params: Dict[str, str],
        decoder: Callable[[Any], T],
        needs_api_key: bool = True,
        needs_signature: bool = True,
    ) -> T:
        raw = await self._http_client.request(
            session,
            method,
            endpoint,
            params=params,
            needs_api_key=needs_api_key,
            needs_signature=needs_signature,
        )
        logger.debug(f"Decoding {method} {endpoint} response (status {raw.status})")
        return decode_response(raw, decoder)

    async def borrow(self, session: ClientSession, request: BorrowRequest) -> MarginTransaction:
        """Margin account borrow (POST /sapi/v1/margin/loan)."""
        params = build_params(request)
        return await self._call(session, "POST", MARGIN_LOAN_ENDPOINT, params, decode_transaction)

    async def repay(self, session: ClientSession, request: BorrowRequest) -> MarginTransaction:
        """Repay a margin loan (POST /sapi/v1/margin/repay)."""
        params = build_params(request)
        return await self._call(session, "POST", MARGIN_REPAY_ENDPOINT, params, decode_transaction)

    async def get_margin_account(
        self, session: ClientSession, request: AccountRequest
    ) -> MarginAccount:
        """Query margin account details (GET /sapi/v1/margin/account)."""
        params = build_params(request)
        return await self._call(
            session, "GET", MARGIN_ACCOUNT_ENDPOINT, params, decode_margin_account
        )

    async def new_order(self, session: ClientSession, request: NewOrderRequest) -> ProcessedOrder:
        """Place a margin order (POST /sapi/v1/margin/order)."""
        params = build_params(request)
        return await self._call(
            session, "POST", MARGIN_ORDER_ENDPOINT, params, decode_processed_order
        )

    async def query_order(
        self, session: ClientSession, request: QueryOrderRequest
    ) -> ExecutedOrder:
        """Query a margin order (GET /sapi/v1/margin/order)."""
        params = build_params(request)
        return await self._call(
            session, "GET", MARGIN_ORDER_ENDPOINT, params, decode_executed_order
        )

    async def get_margin_asset(
        self, session: ClientSession, request: MarginAssetRequest
    ) -> MarginAsset:
        """Query margin asset (GET /sapi/v1/margin/asset). API key only, unsigned."""
        params = build_params(request)
        return await self._call(
            session,
            "GET",
            MARGIN_ASSET_ENDPOINT,
            params,
            decode_margin_asset,
            needs_signature=False,
        )

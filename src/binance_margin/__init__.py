"""
Binance Margin Client - typed async client for Binance margin endpoints.

This package provides a client for borrowing, repaying, querying the margin
account and placing margin orders, with exact decimal handling of amounts.
"""

from .margin_client import MarginClient, create_margin_client
from .exceptions import (
    ApiError,
    InvalidRequest,
    InvalidTimestamp,
    MalformedNumber,
    MarginClientError,
    ResponseDecodeError,
    TransportError,
)
from .models import (
    # Configuration
    ConnectionConfig,
    # Requests
    AccountRequest,
    BorrowRequest,
    MarginAssetRequest,
    NewOrderRequest,
    QueryOrderRequest,
    RepayRequest,
    OrderSide,
    OrderType,
    TimeInForce,
    # Results
    ExecutedOrder,
    MarginAccount,
    MarginAsset,
    MarginTransaction,
    ProcessedOrder,
    UserAsset,
)
from .utils import decode_decimal, encode_decimal, encode_fixed

__all__ = [
    # Main Client
    "MarginClient",
    "create_margin_client",
    "ConnectionConfig",
    # Requests
    "AccountRequest",
    "BorrowRequest",
    "RepayRequest",
    "MarginAssetRequest",
    "NewOrderRequest",
    "QueryOrderRequest",
    "OrderSide",
    "OrderType",
    "TimeInForce",
    # Results
    "MarginAccount",
    "UserAsset",
    "MarginAsset",
    "MarginTransaction",
    "ProcessedOrder",
    "ExecutedOrder",
    # Errors
    "MarginClientError",
    "InvalidRequest",
    "MalformedNumber",
    "InvalidTimestamp",
    "TransportError",
    "ApiError",
    "ResponseDecodeError",
    # Decimal codec
    "decode_decimal",
    "encode_decimal",
    "encode_fixed",
]

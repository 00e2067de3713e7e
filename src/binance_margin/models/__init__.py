"""
Data models for the Binance margin client.

This package contains all data structures used throughout the client,
following the state-first principle with immutable data structures.
"""

from .config import ConnectionConfig
from .orders import (
    ExecutedOrder,
    NewOrderRequest,
    OrderSide,
    OrderType,
    ProcessedOrder,
    QueryOrderRequest,
    TimeInForce,
)
from .account import (
    AccountRequest,
    BorrowRequest,
    MarginAccount,
    MarginAsset,
    MarginAssetRequest,
    MarginTransaction,
    RepayRequest,
    UserAsset,
)

__all__ = [
    # Configuration
    "ConnectionConfig",
    # Orders
    "NewOrderRequest",
    "QueryOrderRequest",
    "OrderSide",
    "OrderType",
    "TimeInForce",
    "ProcessedOrder",
    "ExecutedOrder",
    # Account
    "BorrowRequest",
    "RepayRequest",
    "AccountRequest",
    "MarginAssetRequest",
    "MarginTransaction",
    "MarginAccount",
    "MarginAsset",
    "UserAsset",
]

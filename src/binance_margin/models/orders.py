"""
Order-related models for the Binance margin client.

Immutable data structures for margin order placement and lookup.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class OrderSide(str, Enum):
    """Order side enumeration."""
    BUY = "BUY"
    SELL = "SELL"


class OrderType(str, Enum):
    """Order type enumeration."""
    LIMIT = "LIMIT"
    MARKET = "MARKET"
    STOP_LOSS = "STOP_LOSS"
    STOP_LOSS_LIMIT = "STOP_LOSS_LIMIT"
    TAKE_PROFIT = "TAKE_PROFIT"
    TAKE_PROFIT_LIMIT = "TAKE_PROFIT_LIMIT"
    LIMIT_MAKER = "LIMIT_MAKER"

    @property
    def requires_price(self) -> bool:
        return self in (
            OrderType.LIMIT,
            OrderType.STOP_LOSS_LIMIT,
            OrderType.TAKE_PROFIT_LIMIT,
            OrderType.LIMIT_MAKER,
        )


class TimeInForce(str, Enum):
    """Time in force enumeration."""
    GTC = "GTC"
    IOC = "IOC"
    FOK = "FOK"


@dataclass(frozen=True)
class NewOrderRequest:
    """Margin order request data structure."""
    symbol: str
    side: OrderSide
    order_type: OrderType
    quantity: Decimal
    price: Optional[Decimal] = None  # never sent for MARKET orders
    time_in_force: Optional[TimeInForce] = None
    new_client_order_id: Optional[str] = None
    stop_price: Optional[Decimal] = None
    iceberg_qty: Optional[Decimal] = None
    recv_window: Optional[int] = None
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class QueryOrderRequest:
    """Margin order lookup by exchange id or original client id."""
    symbol: str
    order_id: Optional[int] = None
    orig_client_order_id: Optional[str] = None
    recv_window: Optional[int] = None
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class ProcessedOrder:
    """Acknowledgement of a newly placed margin order."""
    symbol: str
    order_id: int
    client_order_id: str
    transact_time: datetime


@dataclass(frozen=True)
class ExecutedOrder:
    """Margin order state as returned by the order lookup endpoint."""
    symbol: str
    order_id: int
    client_order_id: str
    price: Decimal
    orig_qty: Decimal
    executed_qty: Decimal
    status: str
    time_in_force: str
    order_type: str
    side: str
    stop_price: Decimal
    iceberg_qty: Decimal
    time: datetime

    @property
    def remaining_qty(self) -> Decimal:
        return self.orig_qty - self.executed_qty

"""
Request parameter builders for margin endpoints.

Turns a typed request into the flat ``Dict[str, str]`` the exchange expects.
Pure functions: no I/O, no clock reads other than defaulting the timestamp.
"""

from enum import Enum
from functools import singledispatch
from typing import Any, Dict, Optional, Type, TypeVar

from .constants import ORDER_PRICE_PRECISION
from .exceptions import InvalidRequest
from .models.account import AccountRequest, BorrowRequest, MarginAssetRequest
from .models.orders import NewOrderRequest, OrderSide, OrderType, QueryOrderRequest, TimeInForce
from .utils import encode_decimal, encode_fixed, is_unset, to_decimal, to_unix_millis

E = TypeVar("E", bound=Enum)

MAX_RECV_WINDOW = 60000


@singledispatch
def build_params(request: Any) -> Dict[str, str]:
    """Build the parameter set for a margin request."""
    raise TypeError(f"Unsupported request type: {type(request).__name__}")


@build_params.register
def _(request: BorrowRequest) -> Dict[str, str]:
    params = {
        "asset": _require_text(request.asset, "asset"),
        "amount": encode_decimal(_require_positive(request.amount, "amount")),
    }
    _add_recv_window(params, request.recv_window)
    params["timestamp"] = str(to_unix_millis(request.timestamp))
    return params


@build_params.register
def _(request: AccountRequest) -> Dict[str, str]:
    params = {"timestamp": str(to_unix_millis(request.timestamp))}
    _add_recv_window(params, request.recv_window)
    return params


@build_params.register
def _(request: MarginAssetRequest) -> Dict[str, str]:
    return {"asset": _require_text(request.asset, "asset")}


@build_params.register
def _(request: NewOrderRequest) -> Dict[str, str]:
    order_type = _require_enum(OrderType, request.order_type, "order_type")
    params = {
        "symbol": _require_text(request.symbol, "symbol"),
        "side": _require_enum(OrderSide, request.side, "side").value,
        "type": order_type.value,
        "quantity": _encode_order_amount(request.quantity, "quantity"),
    }

    if order_type.requires_price or (
        order_type is not OrderType.MARKET and not is_unset(request.price)
    ):
        params["price"] = _encode_order_amount(request.price, "price")

    params["timestamp"] = str(to_unix_millis(request.timestamp))

    if not is_unset(request.new_client_order_id):
        params["newClientOrderId"] = request.new_client_order_id
    if not is_unset(request.time_in_force):
        params["timeInForce"] = _require_enum(TimeInForce, request.time_in_force, "time_in_force").value
    if not is_unset(request.stop_price):
        params["stopPrice"] = encode_decimal(_require_positive(request.stop_price, "stop_price"))
    if not is_unset(request.iceberg_qty):
        params["icebergQty"] = encode_decimal(_require_positive(request.iceberg_qty, "iceberg_qty"))

    _add_recv_window(params, request.recv_window)
    return params


@build_params.register
def _(request: QueryOrderRequest) -> Dict[str, str]:
    params = {"symbol": _require_text(request.symbol, "symbol")}

    if not is_unset(request.order_id):
        if isinstance(request.order_id, bool) or not isinstance(request.order_id, int):
            raise InvalidRequest("order_id must be an integer", "order_id")
        params["orderId"] = str(request.order_id)
    elif not is_unset(request.orig_client_order_id):
        params["origClientOrderId"] = request.orig_client_order_id
    else:
        raise InvalidRequest("Either order_id or orig_client_order_id is required", "order_id")

    params["timestamp"] = str(to_unix_millis(request.timestamp))
    _add_recv_window(params, request.recv_window)
    return params


def _require_text(value: Optional[str], field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequest(f"{field} is required", field)
    return value


def _require_positive(value, field: str):
    if value is None or value == "":
        raise InvalidRequest(f"{field} is required", field)
    if to_decimal(value) <= 0:
        raise InvalidRequest(f"{field} must be positive, got {value}", field)
    return value


def _encode_order_amount(value, field: str) -> str:
    encoded = encode_fixed(_require_positive(value, field), ORDER_PRICE_PRECISION)
    if to_decimal(encoded) == 0:
        raise InvalidRequest(
            f"{field} rounds to zero at {ORDER_PRICE_PRECISION} decimals, got {value}", field
        )
    return encoded


def _require_enum(enum_type: Type[E], value, field: str) -> E:
    if is_unset(value):
        raise InvalidRequest(f"{field} is required", field)
    try:
        return enum_type(value)
    except ValueError as e:
        raise InvalidRequest(f"Invalid {field}: {value!r}", field) from e


def _add_recv_window(params: Dict[str, str], recv_window: Optional[int]) -> None:
    if is_unset(recv_window):
        return
    if isinstance(recv_window, bool) or not isinstance(recv_window, int):
        raise InvalidRequest("recv_window must be an integer number of milliseconds", "recv_window")
    if not 0 < recv_window <= MAX_RECV_WINDOW:
        raise InvalidRequest(
            f"recv_window must be between 1 and {MAX_RECV_WINDOW} ms, got {recv_window}",
            "recv_window",
        )
    params["recvWindow"] = str(recv_window)

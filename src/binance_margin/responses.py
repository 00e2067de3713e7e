"""
Response classification and decoding for margin endpoints.

A completed HTTP exchange is either a success (status 200, endpoint payload)
or a failure (any other status, ``{"code": ..., "msg": ...}`` body). Payload
decoders are pure functions from parsed JSON to immutable models; any shape
mismatch raises ``ResponseDecodeError`` rather than defaulting a field.
"""

import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, Tuple, Type, TypeVar, Union

from .constants import SUCCESS_STATUS_CODE
from .exceptions import ApiError, MalformedNumber, ResponseDecodeError
from .http_client import RawResponse
from .models.account import MarginAccount, MarginAsset, MarginTransaction, UserAsset
from .models.orders import ExecutedOrder, ProcessedOrder
from .utils import decode_decimal, time_from_unix_millis

T = TypeVar("T")


@dataclass(frozen=True)
class Success:
    body: bytes


@dataclass(frozen=True)
class Failure:
    status: int
    body: bytes


def classify(status: int, body: bytes) -> Union[Success, Failure]:
    """Status 200 is the only success."""
    if status == SUCCESS_STATUS_CODE:
        return Success(body)
    return Failure(status, body)


def parse_json(body: bytes, status: int) -> Any:
    try:
        return json.loads(body)
    except ValueError as e:
        snippet = body[:200].decode("utf-8", errors="replace")
        raise ResponseDecodeError(
            f"Invalid JSON response (Status {status}): {snippet}",
            status_code=status,
            body=body,
        ) from e


def handle_error(status: int, body: bytes) -> ApiError:
    """Map a non-200 ``{code, msg}`` body to an ``ApiError``."""
    data = parse_json(body, status)

    code = data.get("code") if isinstance(data, dict) else None
    msg = data.get("msg") if isinstance(data, dict) else None
    if isinstance(code, bool) or not isinstance(code, int) or not isinstance(msg, str):
        raise ResponseDecodeError(
            f"Malformed error body (Status {status}): {data!r}",
            status_code=status,
            body=body,
        )

    return ApiError(code, msg, status_code=status)


def decode_response(raw: RawResponse, decoder: Callable[[Any], T]) -> T:
    """Classify a raw response and decode it, raising on any failure."""
    outcome = classify(raw.status, raw.body)
    if isinstance(outcome, Failure):
        raise handle_error(outcome.status, outcome.body)

    data = parse_json(outcome.body, raw.status)
    try:
        return decoder(data)
    except ResponseDecodeError as e:
        e.status_code = raw.status
        e.body = raw.body
        raise


# Field accessors

def _object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ResponseDecodeError(f"{what}: expected a JSON object, got {type(data).__name__}")
    return data


def _field(data: Dict[str, Any], key: str, types: Union[Type, Tuple[Type, ...]], what: str) -> Any:
    if key not in data:
        raise ResponseDecodeError(f"{what}: missing field {key!r}")

    value = data[key]
    # bool is an int subclass; only accept it where bool is asked for
    if isinstance(value, bool) and types is not bool:
        raise ResponseDecodeError(f"{what}: field {key!r} has unexpected type bool")
    if not isinstance(value, types):
        raise ResponseDecodeError(
            f"{what}: field {key!r} has unexpected type {type(value).__name__}"
        )
    return value


def _decimal(data: Dict[str, Any], key: str, what: str) -> Decimal:
    value = _field(data, key, (str, int), what)
    try:
        return decode_decimal(value)
    except MalformedNumber as e:
        raise ResponseDecodeError(f"{what}: field {key!r} is not a decimal: {value!r}") from e


# Endpoint decoders

def decode_transaction(data: Any) -> MarginTransaction:
    """Decode the borrow/repay response ``{"tranId": ...}``."""
    obj = _object(data, "transaction")
    return MarginTransaction(tran_id=_field(obj, "tranId", int, "transaction"))


def decode_user_asset(data: Any) -> UserAsset:
    obj = _object(data, "userAsset")
    return UserAsset(
        asset=_field(obj, "asset", str, "userAsset"),
        free=_decimal(obj, "free", "userAsset"),
        locked=_decimal(obj, "locked", "userAsset"),
        borrowed=_decimal(obj, "borrowed", "userAsset"),
        interest=_decimal(obj, "interest", "userAsset"),
        net_asset=_decimal(obj, "netAsset", "userAsset"),
    )


def decode_margin_account(data: Any) -> MarginAccount:
    """Decode the margin account snapshot."""
    what = "marginAccount"
    obj = _object(data, what)
    user_assets = _field(obj, "userAssets", list, what)

    return MarginAccount(
        borrow_enabled=_field(obj, "borrowEnabled", bool, what),
        trade_enabled=_field(obj, "tradeEnabled", bool, what),
        transfer_enabled=_field(obj, "transferEnabled", bool, what),
        margin_level=_decimal(obj, "marginLevel", what),
        total_asset_of_btc=_decimal(obj, "totalAssetOfBtc", what),
        total_liability_of_btc=_decimal(obj, "totalLiabilityOfBtc", what),
        total_net_asset_of_btc=_decimal(obj, "totalNetAssetOfBtc", what),
        user_assets=tuple(decode_user_asset(item) for item in user_assets),
    )


def decode_processed_order(data: Any) -> ProcessedOrder:
    """Decode the new order acknowledgement."""
    what = "order"
    obj = _object(data, what)
    return ProcessedOrder(
        symbol=_field(obj, "symbol", str, what),
        order_id=_field(obj, "orderId", int, what),
        client_order_id=_field(obj, "clientOrderId", str, what),
        transact_time=time_from_unix_millis(_field(obj, "transactTime", (int, float), what)),
    )


def decode_margin_asset(data: Any) -> MarginAsset:
    what = "marginAsset"
    obj = _object(data, what)
    return MarginAsset(
        asset_full_name=_field(obj, "assetFullName", str, what),
        asset_name=_field(obj, "assetName", str, what),
        is_borrowable=_field(obj, "isBorrowable", bool, what),
        is_mortgageable=_field(obj, "isMortgageable", bool, what),
        user_min_borrow=_decimal(obj, "userMinBorrow", what),
        user_min_repay=_decimal(obj, "userMinRepay", what),
    )


def decode_executed_order(data: Any) -> ExecutedOrder:
    what = "executedOrder"
    obj = _object(data, what)
    return ExecutedOrder(
        symbol=_field(obj, "symbol", str, what),
        order_id=_field(obj, "orderId", int, what),
        client_order_id=_field(obj, "clientOrderId", str, what),
        price=_decimal(obj, "price", what),
        orig_qty=_decimal(obj, "origQty", what),
        executed_qty=_decimal(obj, "executedQty", what),
        status=_field(obj, "status", str, what),
        time_in_force=_field(obj, "timeInForce", str, what),
        order_type=_field(obj, "type", str, what),
        side=_field(obj, "side", str, what),
        stop_price=_decimal(obj, "stopPrice", what),
        iceberg_qty=_decimal(obj, "icebergQty", what),
        time=time_from_unix_millis(_field(obj, "time", (int, float), what)),
    )

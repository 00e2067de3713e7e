"""
Tests for response classification, error mapping and payload decoding.
"""

import json
import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from binance_margin.exceptions import (
    ApiError,
    InvalidTimestamp,
    MalformedNumber,
    ResponseDecodeError,
)
from binance_margin.http_client import RawResponse
from binance_margin.models import MarginAccount, ProcessedOrder
from binance_margin.responses import (
    Failure,
    Success,
    classify,
    decode_executed_order,
    decode_margin_account,
    decode_margin_asset,
    decode_processed_order,
    decode_response,
    decode_transaction,
    handle_error,
)
from binance_margin.utils import EPOCH


def raw(status, payload) -> RawResponse:
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
    return RawResponse(status=status, body=body)


class TestClassify:

    def test_200_is_success(self):
        assert classify(200, b"{}") == Success(b"{}")

    @pytest.mark.parametrize("status", [201, 204, 400, 401, 418, 429, 500, 503])
    def test_anything_else_is_failure(self, status):
        assert classify(status, b"{}") == Failure(status, b"{}")


class TestHandleError:

    def test_structured_error(self):
        error = handle_error(418, b'{"code":-1021,"msg":"Timestamp outside recvWindow"}')

        assert isinstance(error, ApiError)
        assert error.code == -1021
        assert error.msg == "Timestamp outside recvWindow"
        assert error.status_code == 418

    @pytest.mark.parametrize("body", [
        b"<html>502 Bad Gateway</html>",
        b"",
        b"[]",
        b'{"msg":"no code"}',
        b'{"code":"-1021","msg":"string code"}',
        b'{"code":true,"msg":"bool code"}',
        b'{"code":-1021}',
    ])
    def test_malformed_error_body(self, body):
        with pytest.raises(ResponseDecodeError) as exc_info:
            handle_error(502, body)
        assert exc_info.value.status_code == 502


class TestDecodeResponse:
    """Test the success / failure split end to end."""

    def test_rejected(self):
        with pytest.raises(ApiError) as exc_info:
            decode_response(
                raw(418, {"code": -1021, "msg": "Timestamp outside recvWindow"}),
                decode_margin_account,
            )

        assert exc_info.value == ApiError(-1021, "Timestamp outside recvWindow", status_code=418)

    def test_invalid_json_success_body(self):
        with pytest.raises(ResponseDecodeError) as exc_info:
            decode_response(raw(200, b"not json"), decode_margin_account)

        assert exc_info.value.status_code == 200
        assert exc_info.value.body == b"not json"

    def test_shape_error_carries_response(self):
        with pytest.raises(ResponseDecodeError) as exc_info:
            decode_response(raw(200, {"unexpected": True}), decode_transaction)

        assert exc_info.value.status_code == 200
        assert b"unexpected" in exc_info.value.body

    def test_success(self, margin_account_response_data):
        account = decode_response(raw(200, margin_account_response_data), decode_margin_account)
        assert isinstance(account, MarginAccount)


class TestDecodeMarginAccount:

    def test_decodes_flags_and_decimals(self, margin_account_response_data):
        account = decode_margin_account(margin_account_response_data)

        assert account.borrow_enabled is True
        assert account.trade_enabled is False
        assert account.transfer_enabled is True
        assert account.margin_level == Decimal("1.5")
        assert account.total_asset_of_btc == Decimal("10.12345678")
        assert account.total_liability_of_btc == Decimal("2")
        assert account.total_net_asset_of_btc == Decimal("8.12345678")

    def test_decodes_user_assets(self, margin_account_response_data):
        account = decode_margin_account(margin_account_response_data)

        assert len(account.user_assets) == 1
        btc = account.user_assets[0]
        assert btc.asset == "BTC"
        assert btc.free == Decimal("0.5")
        assert btc.locked == Decimal("0.1")
        assert btc.borrowed == Decimal("0")
        assert btc.interest == Decimal("0")
        assert btc.net_asset == Decimal("0.4")
        assert account.get_asset("BTC") is btc
        assert account.get_asset("ETH") is None

    def test_user_assets_keep_order(self, margin_account_response_data):
        base = margin_account_response_data["userAssets"][0]
        margin_account_response_data["userAssets"] = [
            dict(base, asset=name) for name in ("ETH", "BTC", "BNB")
        ]

        account = decode_margin_account(margin_account_response_data)

        assert [a.asset for a in account.user_assets] == ["ETH", "BTC", "BNB"]

    def test_malformed_decimal_is_decode_error(self, margin_account_response_data):
        margin_account_response_data["marginLevel"] = "1.5x"

        with pytest.raises(ResponseDecodeError) as exc_info:
            decode_margin_account(margin_account_response_data)

        assert isinstance(exc_info.value.__cause__, MalformedNumber)

    def test_malformed_user_asset_decimal(self, margin_account_response_data):
        margin_account_response_data["userAssets"][0]["free"] = ""

        with pytest.raises(ResponseDecodeError):
            decode_margin_account(margin_account_response_data)

    def test_float_decimal_rejected(self, margin_account_response_data):
        margin_account_response_data["marginLevel"] = 1.5

        with pytest.raises(ResponseDecodeError):
            decode_margin_account(margin_account_response_data)

    @pytest.mark.parametrize("key", [
        "borrowEnabled", "marginLevel", "totalNetAssetOfBtc", "userAssets",
    ])
    def test_missing_field(self, margin_account_response_data, key):
        del margin_account_response_data[key]

        with pytest.raises(ResponseDecodeError, match=key):
            decode_margin_account(margin_account_response_data)

    def test_flag_must_be_bool(self, margin_account_response_data):
        margin_account_response_data["tradeEnabled"] = "false"

        with pytest.raises(ResponseDecodeError):
            decode_margin_account(margin_account_response_data)

    def test_not_an_object(self):
        with pytest.raises(ResponseDecodeError):
            decode_margin_account([])


class TestDecodeProcessedOrder:

    def test_decodes_order(self, new_order_response_data):
        order = decode_processed_order(new_order_response_data)

        assert order == ProcessedOrder(
            symbol="BTCUSDT",
            order_id=28,
            client_order_id="6gCrw2kRUAF9CvJDGP16IP",
            transact_time=EPOCH + timedelta(milliseconds=1609459200123),
        )

    def test_integer_transact_time(self, new_order_response_data):
        new_order_response_data["transactTime"] = 1609459200123

        order = decode_processed_order(new_order_response_data)

        assert order.transact_time == datetime(2021, 1, 1, 0, 0, 0, 123000, tzinfo=timezone.utc)

    def test_negative_transact_time(self, new_order_response_data):
        new_order_response_data["transactTime"] = -1.0

        with pytest.raises(InvalidTimestamp):
            decode_processed_order(new_order_response_data)

    def test_string_transact_time(self, new_order_response_data):
        new_order_response_data["transactTime"] = "1609459200123"

        with pytest.raises(ResponseDecodeError):
            decode_processed_order(new_order_response_data)

    def test_order_id_must_be_int(self, new_order_response_data):
        new_order_response_data["orderId"] = "28"

        with pytest.raises(ResponseDecodeError):
            decode_processed_order(new_order_response_data)


class TestDecodeOtherPayloads:

    def test_transaction(self):
        assert decode_transaction({"tranId": 100000001}).tran_id == 100000001

    def test_transaction_id_not_bool(self):
        with pytest.raises(ResponseDecodeError):
            decode_transaction({"tranId": True})

    def test_margin_asset(self, margin_asset_response_data):
        asset = decode_margin_asset(margin_asset_response_data)

        assert asset.asset_name == "BNB"
        assert asset.asset_full_name == "Binance Coin"
        assert asset.is_borrowable is False
        assert asset.is_mortgageable is True
        assert asset.user_min_borrow == Decimal("0")

    def test_executed_order(self, executed_order_response_data):
        order = decode_executed_order(executed_order_response_data)

        assert order.order_id == 213205622
        assert order.price == Decimal("0.0001")
        assert order.orig_qty == Decimal("100")
        assert order.executed_qty == Decimal("25")
        assert order.remaining_qty == Decimal("75")
        assert order.order_type == "LIMIT"
        assert order.status == "PARTIALLY_FILLED"
        assert order.time == EPOCH + timedelta(milliseconds=1562133008725)

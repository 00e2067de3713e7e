# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing the Binance margin client.
"""

import json
import pytest
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl

from binance_margin.http_client import HttpClient
from binance_margin.models import ConnectionConfig


TEST_API_KEY = "vmPUZE6mv9SD5VNHk4HlWFsOr6aKE2zvsw0MuIgwCIPy6utIco14y7Ju91duEh8A"
TEST_API_SECRET = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"
FIXED_TIME = datetime(2021, 1, 1, 0, 0, 0, 123000, tzinfo=timezone.utc)
FIXED_MILLIS = "1609459200123"


class FakeResponse:
    """Stands in for an aiohttp response used as ``async with``."""

    def __init__(
        self,
        status: int = 200,
        body: Any = b"",
        enter_error: Optional[BaseException] = None,
        read_error: Optional[BaseException] = None,
    ):
        self.status = status
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self._body = body
        self._enter_error = enter_error
        self._read_error = read_error
        self.headers = {"Content-Type": "application/json"}
        self.read_count = 0
        self.released = False

    async def __aenter__(self):
        if self._enter_error is not None:
            raise self._enter_error
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.released = True
        return False

    async def read(self) -> bytes:
        self.read_count += 1
        if self._read_error is not None:
            raise self._read_error
        return self._body


class FakeSession:
    """Records ``request`` calls and replays queued responses in order."""

    def __init__(self, *responses: FakeResponse):
        self.responses: List[FakeResponse] = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, response: FakeResponse) -> None:
        self.responses.append(response)

    def request(self, **kwargs) -> FakeResponse:
        self.calls.append(kwargs)
        return self.responses.pop(0)

    async def close(self) -> None:
        self.closed = True

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]


def sent_params(call: Dict[str, Any]) -> Dict[str, str]:
    """Decode the query string or form body of a recorded request."""
    payload = call.get("data") or call["url"].raw_query_string
    return dict(parse_qsl(payload, keep_blank_values=True))


@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Connection config pointing at a test host."""
    return ConnectionConfig(
        api_key=TEST_API_KEY,
        api_secret=TEST_API_SECRET,
        base_url="https://test-api.example.com",
        timeout=10.0,
    )


@pytest.fixture
def http_client(connection_config) -> HttpClient:
    return HttpClient(connection_config)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def margin_account_response_data() -> Dict[str, Any]:
    """Margin account body with string-encoded decimals."""
    return {
        "borrowEnabled": True,
        "marginLevel": "1.5",
        "totalAssetOfBtc": "10.12345678",
        "totalLiabilityOfBtc": "2.00000000",
        "totalNetAssetOfBtc": "8.12345678",
        "tradeEnabled": False,
        "transferEnabled": True,
        "userAssets": [
            {
                "asset": "BTC",
                "borrowed": "0",
                "free": "0.5",
                "interest": "0",
                "locked": "0.1",
                "netAsset": "0.4",
            }
        ],
    }


@pytest.fixture
def new_order_response_data() -> Dict[str, Any]:
    return {
        "symbol": "BTCUSDT",
        "orderId": 28,
        "clientOrderId": "6gCrw2kRUAF9CvJDGP16IP",
        "transactTime": 1609459200123.0,
    }


@pytest.fixture
def executed_order_response_data() -> Dict[str, Any]:
    return {
        "symbol": "BNBBTC",
        "orderId": 213205622,
        "clientOrderId": "ZwfQzuDIGpceVhKW5DvCmO",
        "price": "0.00010000",
        "origQty": "100.00000000",
        "executedQty": "25.00000000",
        "status": "PARTIALLY_FILLED",
        "timeInForce": "GTC",
        "type": "LIMIT",
        "side": "SELL",
        "stopPrice": "0.00000000",
        "icebergQty": "0.00000000",
        "time": 1562133008725,
    }


@pytest.fixture
def margin_asset_response_data() -> Dict[str, Any]:
    return {
        "assetFullName": "Binance Coin",
        "assetName": "BNB",
        "isBorrowable": False,
        "isMortgageable": True,
        "userMinBorrow": "0.00000000",
        "userMinRepay": "0.00000000",
    }

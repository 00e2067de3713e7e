"""
Tests for request signing.
"""

import hashlib
import hmac

from binance_margin.auth import ApiCredentials, MarginSigner, canonical_items, canonical_query

from conftest import TEST_API_KEY, TEST_API_SECRET


def expected_signature(query: str) -> str:
    return hmac.new(TEST_API_SECRET.encode(), query.encode(), hashlib.sha256).hexdigest()


class TestCanonicalQuery:

    def test_sorted_keys(self):
        assert canonical_query({"symbol": "BTCUSDT", "amount": "1", "asset": "BTC"}) == (
            "amount=1&asset=BTC&symbol=BTCUSDT"
        )

    def test_signature_last(self):
        items = canonical_items({"signature": "abc", "asset": "BTC", "timestamp": "1"})
        assert items == [("asset", "BTC"), ("timestamp", "1"), ("signature", "abc")]

    def test_values_are_url_encoded(self):
        assert canonical_query({"newClientOrderId": "a b/c"}) == "newClientOrderId=a+b%2Fc"


class TestMarginSigner:

    def setup_method(self):
        self.signer = MarginSigner(ApiCredentials(TEST_API_KEY, TEST_API_SECRET))

    def test_signature_over_sorted_params(self):
        params = {"asset": "BTC", "amount": "1.5", "timestamp": "1609459200123"}
        signed = self.signer.sign_params(params)

        assert signed["signature"] == expected_signature(
            "amount=1.5&asset=BTC&timestamp=1609459200123"
        )

    def test_original_params_not_mutated(self):
        params = {"asset": "BTC", "timestamp": "1609459200123"}
        self.signer.sign_params(params)
        assert params == {"asset": "BTC", "timestamp": "1609459200123"}

    def test_timestamp_added_when_missing(self):
        signed = self.signer.sign_params({"asset": "BTC"})
        assert signed["timestamp"].isdigit()

    def test_request_timestamp_kept(self):
        signed = self.signer.sign_params({"timestamp": "1609459200123"})
        assert signed["timestamp"] == "1609459200123"

    def test_no_default_recv_window(self):
        signed = self.signer.sign_params({"timestamp": "1"})
        assert "recvWindow" not in signed

    def test_configured_recv_window_is_a_default(self):
        signer = MarginSigner(ApiCredentials(TEST_API_KEY, TEST_API_SECRET), recv_window=5000)

        assert signer.sign_params({"timestamp": "1"})["recvWindow"] == "5000"
        assert signer.sign_params({"timestamp": "1", "recvWindow": "10000"})["recvWindow"] == "10000"

    def test_recv_window_is_signed(self):
        signer = MarginSigner(ApiCredentials(TEST_API_KEY, TEST_API_SECRET), recv_window=5000)
        signed = signer.sign_params({"timestamp": "1"})
        assert signed["signature"] == expected_signature("recvWindow=5000&timestamp=1")

    def test_stale_signature_replaced(self):
        signed = self.signer.sign_params({"timestamp": "1", "signature": "stale"})
        assert signed["signature"] == expected_signature("timestamp=1")

    def test_auth_headers(self):
        assert self.signer.get_auth_headers() == {"X-MBX-APIKEY": TEST_API_KEY}

    def test_credentials_hidden_in_repr(self):
        assert TEST_API_SECRET not in repr(self.signer.credentials)

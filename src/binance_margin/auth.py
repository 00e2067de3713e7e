"""
Authentication and signing utilities for the Binance margin API.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import hashlib
import hmac
from urllib.parse import urlencode

from .constants import API_KEY_HEADER
from .utils import to_unix_millis


@dataclass(frozen=True)
class ApiCredentials:
    """Container for API credentials"""
    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return "ApiCredentials(api_key='***', api_secret='***')"


def canonical_items(params: Dict[str, str]) -> List[Tuple[str, str]]:
    """
    Order parameters the way they are signed and sent.

    Keys are sorted; ``signature`` always goes last.
    """
    items = sorted((k, v) for k, v in params.items() if k != "signature")
    if "signature" in params:
        items.append(("signature", params["signature"]))
    return items


def canonical_query(params: Dict[str, str]) -> str:
    """Canonical query string for a parameter set."""
    return urlencode(canonical_items(params))


class MarginSigner:
    """
    Handles request signing for Binance SAPI authentication.

    Uses HMAC-SHA256 over the sorted, url-encoded parameter set.
    """

    def __init__(self, credentials: ApiCredentials, recv_window: Optional[int] = None):
        """
        Initialize the signer with API credentials.

        Args:
            credentials: API credentials containing key and secret
            recv_window: Default receive window in milliseconds, applied only
                when a request does not carry its own
        """
        self.credentials = credentials
        self.recv_window = recv_window

    def sign_params(self, params: Optional[Dict[str, str]]) -> Dict[str, str]:
        """
        Add timestamp, recvWindow and signature to request parameters.

        Args:
            params: Parameters produced by the parameter builder

        Returns:
            New dictionary with ``signature`` added
        """
        signed_params = dict(params or {})
        signed_params.pop("signature", None)

        signed_params.setdefault("timestamp", str(to_unix_millis()))
        if self.recv_window:
            signed_params.setdefault("recvWindow", str(self.recv_window))

        signed_params["signature"] = self._generate_signature(signed_params)
        return signed_params

    def _generate_signature(self, params: Dict[str, str]) -> str:
        """
        Generate HMAC-SHA256 signature for the given parameters.

        Returns:
            Hex-encoded HMAC-SHA256 signature
        """
        query_string = canonical_query(params)

        return hmac.new(
            self.credentials.api_secret.encode("utf-8"),
            query_string.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

    def get_auth_headers(self) -> Dict[str, str]:
        """Headers carrying the API key."""
        return {API_KEY_HEADER: self.credentials.api_key}

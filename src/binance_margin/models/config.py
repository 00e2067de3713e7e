"""
Configuration models for the Binance margin client.

Immutable configuration structures; a client instance never mutates its
configuration while requests are in flight.
"""

from dataclasses import dataclass
from typing import Optional

from ..constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from ..utils import validate_url


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for the margin client connection."""
    api_key: str
    api_secret: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    recv_window: Optional[int] = None  # default recvWindow (ms) for signed calls

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_api_key()
        self._validate_api_secret()
        self._validate_base_url()

        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

        if self.recv_window is not None and not 0 < self.recv_window <= 60000:
            raise ValueError(
                f"recv_window must be between 1 and 60000 ms, got {self.recv_window}"
            )

    def _validate_api_key(self):
        """Validate API key format."""
        if not self.api_key:
            raise ValueError("API key cannot be empty")

        if len(self.api_key) > 128:
            raise ValueError(
                f"API key appears to be too long (expected max 128 characters, got {len(self.api_key)})"
            )

    def _validate_api_secret(self):
        """Validate API secret format."""
        if not self.api_secret:
            raise ValueError("API secret cannot be empty")

        if len(self.api_secret) > 128:
            raise ValueError(
                f"API secret appears to be too long (expected max 128 characters, got {len(self.api_secret)})"
            )

    def _validate_base_url(self):
        if not validate_url(self.base_url):
            raise ValueError("Base URL must be a valid HTTP/HTTPS URL")

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(api_key='***', api_secret='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, recv_window={self.recv_window!r})"
        )

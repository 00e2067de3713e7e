"""
Exception hierarchy for the Binance margin client.

Every failure of a margin call is raised as one of these types so callers
can tell a local validation problem, a transport failure, an exchange
rejection and an unreadable response apart.
"""

from typing import Any, Optional


class MarginClientError(Exception):
    """Base exception for all margin client errors."""


class InvalidRequest(MarginClientError, ValueError):
    """A mandatory request field is missing or empty. Never sent."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class MalformedNumber(MarginClientError, ValueError):
    """A value could not be encoded or parsed as a finite decimal."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class InvalidTimestamp(MarginClientError, ValueError):
    """An epoch value is negative, non-finite or not a number."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class TransportError(MarginClientError):
    """The exchange could not be reached or the response body could not be read."""


class ApiError(MarginClientError):
    """The exchange rejected the request with a structured ``{code, msg}`` body."""

    def __init__(self, code: int, msg: str, status_code: Optional[int] = None):
        super().__init__(f"API error {code}: {msg}")
        self.code = code
        self.msg = msg
        self.status_code = status_code

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return (self.code, self.msg, self.status_code) == (other.code, other.msg, other.status_code)

    def __hash__(self) -> int:
        return hash((self.code, self.msg, self.status_code))


class ResponseDecodeError(MarginClientError):
    """The response payload (success or error body) did not have the expected shape."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[bytes] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

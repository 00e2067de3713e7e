"""
Call outcome monitoring for the Binance margin client.

Records how each client call ended. Observability only: nothing here feeds
back into a call's result.
"""

import time
from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Dict, List

from .exceptions import (
    ApiError,
    InvalidRequest,
    InvalidTimestamp,
    MalformedNumber,
    ResponseDecodeError,
    TransportError,
)


class CallOutcome(Enum):
    """Terminal state of a margin call."""
    SUCCEEDED = "succeeded"
    API_REJECTED = "api_rejected"
    TRANSPORT_FAILED = "transport_failed"
    DECODE_FAILED = "decode_failed"
    INVALID_REQUEST = "invalid_request"
    UNEXPECTED_ERROR = "unexpected_error"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "CallOutcome":
        if isinstance(exc, ApiError):
            return cls.API_REJECTED
        if isinstance(exc, TransportError):
            return cls.TRANSPORT_FAILED
        # MalformedNumber here can only come from encoding the request
        if isinstance(exc, (InvalidRequest, MalformedNumber)):
            return cls.INVALID_REQUEST
        if isinstance(exc, (ResponseDecodeError, InvalidTimestamp)):
            return cls.DECODE_FAILED
        return cls.UNEXPECTED_ERROR


@dataclass(frozen=True)
class CallRecord:
    """Outcome of a single call."""
    endpoint: str
    method: str
    outcome: CallOutcome
    duration_ms: float
    timestamp: float


@dataclass
class Statistics:
    """Aggregated call outcomes."""
    total_calls: int = 0
    total_duration_ms: float = 0.0
    outcomes: Dict[CallOutcome, int] = field(default_factory=lambda: defaultdict(int))

    @property
    def succeeded(self) -> int:
        return self.outcomes[CallOutcome.SUCCEEDED]

    @property
    def failed(self) -> int:
        return self.total_calls - self.succeeded

    @property
    def avg_duration_ms(self) -> float:
        if not self.total_calls:
            return 0.0
        return self.total_duration_ms / self.total_calls

    def update(self, record: CallRecord) -> None:
        self.total_calls += 1
        self.total_duration_ms += record.duration_ms
        self.outcomes[record.outcome] += 1


class CallMonitor:
    """Tracks call outcomes per endpoint."""

    def __init__(self, max_history: int = 1000):
        self._max_history = max_history
        self._statistics = Statistics()
        self._history: Deque[CallRecord] = deque(maxlen=max_history)

    def record(
        self,
        endpoint: str,
        method: str,
        outcome: CallOutcome,
        duration_ms: float,
    ) -> CallRecord:
        """Record the outcome of a finished call."""
        record = CallRecord(
            endpoint=endpoint,
            method=method,
            outcome=outcome,
            duration_ms=duration_ms,
            timestamp=time.time(),
        )
        self._statistics.update(record)
        self._history.append(record)
        return record

    @property
    def statistics(self) -> Statistics:
        return self._statistics

    def get_endpoint_outcomes(self, endpoint: str, method: str) -> Dict[CallOutcome, int]:
        """Outcome counts for one endpoint within the retained history."""
        counts: Dict[CallOutcome, int] = defaultdict(int)
        for record in self._history:
            if record.endpoint == endpoint and record.method == method:
                counts[record.outcome] += 1
        return dict(counts)

    def get_recent_calls(self, count: int = 10) -> List[CallRecord]:
        return list(self._history)[-count:]

    def reset(self) -> None:
        self._statistics = Statistics()
        self._history.clear()

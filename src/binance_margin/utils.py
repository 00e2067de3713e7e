"""
Utility functions for the Binance margin client.

Decimal codec and timestamp helpers. Exchange amounts travel as decimal
strings, so everything here works on ``Decimal`` and never on binary floats.
"""

import math
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN
from typing import Optional, Union

from .exceptions import InvalidTimestamp, MalformedNumber

Number = Union[Decimal, int, float, str]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_DECIMAL_LITERAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def decode_decimal(text: Union[str, int]) -> Decimal:
    """Parse a wire decimal string into a ``Decimal``."""
    if isinstance(text, bool) or not isinstance(text, (str, int)):
        raise MalformedNumber(f"Expected a decimal string, got {type(text).__name__}", text)

    if isinstance(text, str) and not _DECIMAL_LITERAL.fullmatch(text):
        raise MalformedNumber(f"Not a decimal literal: {text!r}", text)

    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise MalformedNumber(f"Not a decimal literal: {text!r}", text) from e

    if not value.is_finite():
        raise MalformedNumber(f"Not a finite decimal: {text!r}", text)
    return value


def to_decimal(value: Number) -> Decimal:
    """Coerce a numeric value into a finite ``Decimal``."""
    if isinstance(value, bool):
        raise MalformedNumber(f"Invalid decimal value: {value!r}", value)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # repr gives the shortest text that round-trips, not the binary expansion
        result = Decimal(repr(value))
    elif isinstance(value, str):
        return decode_decimal(value)
    else:
        raise MalformedNumber(f"Invalid decimal value: {value!r}", value)

    if not result.is_finite():
        raise MalformedNumber(f"Not a finite decimal: {value!r}", value)
    return result


def encode_decimal(value: Number) -> str:
    """Encode a value as the minimal exact decimal string (no exponent, no padding)."""
    decimal_value = to_decimal(value)
    if decimal_value == 0:
        return "0"

    text = format(decimal_value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def encode_fixed(value: Number, places: int) -> str:
    """Encode a value with exactly ``places`` fractional digits."""
    decimal_value = to_decimal(value)
    quantizer = Decimal(1).scaleb(-places)
    try:
        quantized = decimal_value.quantize(quantizer, rounding=ROUND_HALF_EVEN)
    except InvalidOperation as e:
        raise MalformedNumber(f"Cannot represent {value!r} with {places} decimals", value) from e
    return format(quantized, "f")


def is_unset(value) -> bool:
    """True for the zero value of an optional request field."""
    return value is None or value == "" or value == 0


def to_unix_millis(moment: Optional[datetime] = None) -> int:
    """Milliseconds since epoch for ``moment`` (now when omitted, naive means UTC)."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // timedelta(milliseconds=1)


def time_from_unix_millis(value: Union[int, float]) -> datetime:
    """Convert epoch milliseconds (possibly fractional) to an aware UTC datetime."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidTimestamp(f"Timestamp must be a number, got {type(value).__name__}", value)

    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidTimestamp(f"Timestamp is not finite: {value!r}", value)

    if value < 0:
        raise InvalidTimestamp(f"Timestamp is negative: {value!r}", value)

    millis = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    micros = int((millis * 1000).to_integral_value(rounding=ROUND_HALF_EVEN))

    try:
        return EPOCH + timedelta(microseconds=micros)
    except OverflowError as e:
        raise InvalidTimestamp(f"Timestamp out of range: {value!r}", value) from e


def validate_url(url: str) -> bool:
    """Validate URL format."""
    if not url or not isinstance(url, str):
        return False
    return url.startswith(("http://", "https://")) and "." in url

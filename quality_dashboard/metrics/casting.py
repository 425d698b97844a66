"""
Raw measure string -> typed value.
"""
import math
import re
from typing import Any, Optional, Union

from quality_dashboard.data.schema import MetricKind


Number = Union[int, float]

# Numeric text the service's JavaScript clients accept; Python-only forms
# such as "1_000", "inf" or "nan" are not numbers here.
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
INFINITY_PATTERN = re.compile(r"([+-]?)Infinity")
RADIX_PATTERN = re.compile(r"0([xXoObB])([0-9a-fA-F]+)")
RADIX_BASES = {"x": 16, "o": 8, "b": 2}

# Integers beyond this lose precision as floats, so they stay floats
MAX_SAFE_INTEGER = 2 ** 53 - 1


def _parse_text(text: str) -> float:
    if DECIMAL_PATTERN.fullmatch(text):
        return float(text)

    match = INFINITY_PATTERN.fullmatch(text)
    if match:
        return float("-inf") if match.group(1) == "-" else float("inf")

    match = RADIX_PATTERN.fullmatch(text)
    if match:
        try:
            digits = int(match.group(2), RADIX_BASES[match.group(1).lower()])
        except ValueError:
            return float("nan")
        try:
            return float(digits)
        except OverflowError:
            return float("inf")

    return float("nan")


def _parse_number(raw: Any) -> Number:
    """Parse a raw measure as a number; anything non-numeric is NaN."""
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            value = math.inf if raw > 0 else -math.inf
    else:
        text = str(raw).strip()
        if not text:
            return 0
        value = _parse_text(text)

    if math.isfinite(value) and value.is_integer() and abs(value) <= MAX_SAFE_INTEGER:
        return int(value)
    return value


def cast_value(raw_value: Any, kind: Optional[Union[MetricKind, str]]) -> Any:
    """
    Cast a raw measure value according to its metric kind.

    Numeric kinds parse the value as a number. Falsy raw values (None, "")
    pass through unchanged rather than becoming zero. Non-numeric text
    becomes NaN. String and unknown kinds return the raw value as is.
    Never raises.
    """
    if kind is None:
        return raw_value
    kind = kind if isinstance(kind, MetricKind) else MetricKind.parse(kind)

    if not kind.is_numeric:
        return raw_value
    if not raw_value:
        return raw_value
    return _parse_number(raw_value)

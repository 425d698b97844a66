"""
Consistent number and date display formatting.
"""
import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Optional, Union

import numpy as np
import pandas as pd

from quality_dashboard.config import (
    FORMAT_INT, FORMAT_FLOAT, FORMAT_PERCENT, FORMAT_ABSOLUTE_DATE,
)
from quality_dashboard.data.catalog import MetricCatalog
from quality_dashboard.data.schema import MetricKind
from quality_dashboard.metrics.recency import to_timestamp, now_utc


NAN_TEXT = "NaN"
INFINITY_TEXT = "Infinity"
MISSING_DATE = "-"

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS


# =============================================================================
# NUMBER FORMATTERS
# =============================================================================

def _non_finite_text(value: Any) -> Optional[str]:
    """Display text for NaN and infinities; None for finite numbers."""
    if not isinstance(value, (float, np.floating)) or math.isfinite(value):
        return None
    if math.isnan(value):
        return NAN_TEXT
    return INFINITY_TEXT if value > 0 else f"-{INFINITY_TEXT}"


def _format_half_up(template: str, value: Union[int, float], decimals: int) -> str:
    """Round half away from zero, then format; str() keeps 2.675 from becoming 2.67499..."""
    exact = Decimal(str(value))
    exponent = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        return template.format(exact.quantize(exponent, rounding=ROUND_HALF_UP))


def fmt_int(value: Union[float, int]) -> str:
    """Format count: 1,234"""
    text = _non_finite_text(value)
    if text is not None:
        return text
    return _format_half_up(FORMAT_INT, value, 0)


def fmt_float(value: Union[float, int]) -> str:
    """Format decimal: 3.1"""
    text = _non_finite_text(value)
    if text is not None:
        return text
    return _format_half_up(FORMAT_FLOAT, value, 1)


def fmt_percent(value: Union[float, int]) -> str:
    """Format percentage: 12.3%"""
    text = _non_finite_text(value)
    if text is not None:
        return text
    return _format_half_up(FORMAT_PERCENT, value, 1)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, np.number)) and not isinstance(value, bool)


def format_metric(catalog: MetricCatalog, metric_key: str, value: Any) -> Optional[str]:
    """
    Format a typed metric value for a table cell.

    Returns None only when value is None. The key must be in the catalog;
    ColumnBuilder never asks for a key the catalog does not have.

    INT -> "1,234", FLOAT -> "3.1", PERCENT -> "12.3%", anything else is
    stringified unchanged. Non-numeric values of a numeric kind (a falsy
    raw value passed through the caster) are stringified as well.
    """
    if value is None:
        return None

    kind = catalog.get(metric_key).kind
    if _is_number(value):
        if kind is MetricKind.INT:
            return fmt_int(value)
        elif kind is MetricKind.FLOAT:
            return fmt_float(value)
        elif kind is MetricKind.PERCENT:
            return fmt_percent(value)

    return _non_finite_text(value) or str(value)


# =============================================================================
# DATE FORMATTERS
# =============================================================================

def fmt_absolute_date(ts: pd.Timestamp) -> str:
    """Short day-month-year date, e.g. 19-10-2026."""
    return FORMAT_ABSOLUTE_DATE.format(day=ts.day, month=ts.month, year=ts.year)


def format_relative(timestamp: Any, now: Optional[datetime] = None) -> str:
    """
    Render the age of a timestamp as "N seconds/minutes/hours/days ago".

    Ages of a week or more fall back to the absolute date. Each bucket
    floors, never rounds. A missing timestamp renders as "-".
    """
    then = to_timestamp(timestamp)
    if then is None:
        return MISSING_DATE

    now = to_timestamp(now) if now is not None else now_utc()
    delta = (now - then) // pd.Timedelta(milliseconds=1)

    if delta < MINUTE_MS:
        return f"{delta // SECOND_MS} seconds ago"
    elif delta < HOUR_MS:
        return f"{delta // MINUTE_MS} minutes ago"
    elif delta < DAY_MS:
        return f"{delta // HOUR_MS} hours ago"
    elif delta < WEEK_MS:
        return f"{delta // DAY_MS} days ago"
    return fmt_absolute_date(then)

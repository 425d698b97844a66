"""
Recency filter: keep projects analyzed within a trailing window.
"""
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional

import pandas as pd

from quality_dashboard.config import config
from quality_dashboard.data.schema import Project


def to_timestamp(value: Any) -> Optional[pd.Timestamp]:
    """
    Parse a date value into a UTC-aware Timestamp.

    Accepts datetimes, ISO strings and epoch milliseconds. Naive values are
    taken as UTC. Returns None for missing or unparseable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        ts = pd.to_datetime(value, unit="ms", utc=True, errors="coerce")
    else:
        ts = pd.to_datetime(value, utc=True, errors="coerce")
    if pd.isna(ts):
        return None
    return ts


def now_utc() -> pd.Timestamp:
    return pd.Timestamp.now(tz="UTC")


def cutoff_date(now: Optional[datetime] = None, days: Optional[int] = None) -> pd.Timestamp:
    """Start of the recency window: now minus the configured number of days."""
    now = to_timestamp(now) if now is not None else now_utc()
    if days is None:
        days = config.recency_days
    return now - timedelta(days=days)


def is_recent(project: Project, cutoff: datetime) -> bool:
    """True iff the project was analyzed strictly after the cutoff."""
    analysed = to_timestamp(project.analysis_date)
    if analysed is None:
        return False
    return analysed > to_timestamp(cutoff)


def filter_recent(projects: Iterable[Project], cutoff: datetime) -> List[Project]:
    """Projects analyzed after the cutoff, in their original order."""
    cutoff = to_timestamp(cutoff)
    return [p for p in projects if is_recent(p, cutoff)]

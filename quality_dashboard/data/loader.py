"""
Data loading utilities with Streamlit caching.

Each loader returns a FetchResult so the page can tell "still empty"
from "failed" and show an error instead of a silently blank table.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

import streamlit as st

from quality_dashboard.config import config, METRIC_KEYS
from quality_dashboard.data.catalog import MetricCatalog
from quality_dashboard.data.client import SonarClient, FetchError
from quality_dashboard.data.schema import Project, SchemaValidationError, check_optional_fields


logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchState(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of one fetch: a value, an error message, or neither yet."""
    state: FetchState
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def pending(cls) -> "FetchResult":
        return cls(FetchState.PENDING)

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(FetchState.SUCCESS, value=value)

    @classmethod
    def failure(cls, error: str) -> "FetchResult":
        return cls(FetchState.FAILURE, error=error)

    @property
    def ok(self) -> bool:
        return self.state is FetchState.SUCCESS

    def value_or(self, default: T) -> T:
        return self.value if self.ok else default


def parse_projects(records: Sequence[Any]) -> List[Project]:
    """Build projects from raw records, skipping malformed ones."""
    projects = []
    for i, record in enumerate(records):
        try:
            project = Project.from_dict(record)
        except SchemaValidationError as e:
            logger.warning("Skipping project record %d: %s", i, e)
            continue

        missing = check_optional_fields(record, "project")
        if missing:
            logger.debug("Project %s has no %s", project.key, ", ".join(missing))
        projects.append(project)
    return projects


def load_catalog(fetch_metrics: Callable[[], Any]) -> FetchResult:
    """Fetch and parse the metric catalog."""
    try:
        return FetchResult.success(MetricCatalog.from_dict(fetch_metrics()))
    except FetchError as e:
        logger.error("Could not load metric catalog: %s", e)
        return FetchResult.failure(str(e))


def load_projects(fetch_projects: Callable[[Sequence[str]], Any],
                  metric_keys: Sequence[str]) -> FetchResult:
    """Fetch and parse the project list for the given metrics."""
    try:
        return FetchResult.success(parse_projects(fetch_projects(metric_keys)))
    except FetchError as e:
        logger.error("Could not load projects: %s", e)
        return FetchResult.failure(str(e))


# Failures raise, so st.cache_data only ever keeps successful payloads.

@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def fetch_metrics_payload(api_url: str) -> dict:
    """Raw catalog payload, cached per API URL."""
    return SonarClient(api_url).fetch_metrics()


@st.cache_data(ttl=config.cache_ttl_seconds, show_spinner=False)
def fetch_projects_payload(api_url: str, metric_keys: Tuple[str, ...]) -> list:
    """Raw project payload, cached per API URL and metric selection."""
    return SonarClient(api_url).fetch_projects(metric_keys)


def load_dashboard_data(api_url: Optional[str] = None,
                        metric_keys: Sequence[str] = METRIC_KEYS) -> Tuple[FetchResult, FetchResult]:
    """Load both slices independently; one failing never blocks the other."""
    api_url = api_url or config.api_url
    catalog = load_catalog(lambda: fetch_metrics_payload(api_url))
    projects = load_projects(lambda keys: fetch_projects_payload(api_url, tuple(keys)), metric_keys)
    return catalog, projects

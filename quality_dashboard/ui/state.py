"""
Session state management for Streamlit app.

The catalog and the project list are two independent slices. Each is
replaced wholesale when its fetch resolves and they are only combined at
render time.
"""
import streamlit as st
from typing import Any, List

from quality_dashboard.config import config
from quality_dashboard.data.catalog import MetricCatalog
from quality_dashboard.data.loader import FetchResult
from quality_dashboard.data.schema import Project


# =============================================================================
# DEFAULT VALUES
# =============================================================================

DEFAULTS = {
    "catalog": MetricCatalog(),
    "projects": [],
    "catalog_fetch": FetchResult.pending(),
    "projects_fetch": FetchResult.pending(),
    "recency_days": config.recency_days,
    "show_all_projects": False,
}


# =============================================================================
# STATE HELPERS
# =============================================================================

def init_state():
    """Initialize all session state keys with defaults."""
    for key, default in DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = default


def get_state(key: str) -> Any:
    """Get state value with default fallback."""
    init_state()
    return st.session_state.get(key, DEFAULTS.get(key))


def set_state(key: str, value: Any):
    """Set state value."""
    st.session_state[key] = value


def reset_state():
    """Reset all state to defaults."""
    for key, default in DEFAULTS.items():
        st.session_state[key] = default


# =============================================================================
# DATA SLICES
# =============================================================================

def set_catalog_result(result: FetchResult):
    """Record a catalog fetch; only a success replaces the catalog."""
    set_state("catalog_fetch", result)
    if result.ok:
        set_state("catalog", result.value)


def set_projects_result(result: FetchResult):
    """Record a projects fetch; only a success replaces the project list."""
    set_state("projects_fetch", result)
    if result.ok:
        set_state("projects", list(result.value))


def get_catalog() -> MetricCatalog:
    return get_state("catalog")


def get_projects() -> List[Project]:
    return get_state("projects")


def get_fetch_errors() -> List[str]:
    """Error messages from failed fetches, catalog first."""
    errors = []
    for key, label in (("catalog_fetch", "metric catalog"), ("projects_fetch", "projects")):
        result = get_state(key)
        if result.error:
            errors.append(f"Could not load {label}: {result.error}")
    return errors

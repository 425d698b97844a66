"""
Layout components: header, table styles, error banners, summary.
"""
import streamlit as st
from typing import List, Sequence

from quality_dashboard.data.loader import fetch_metrics_payload, fetch_projects_payload
from quality_dashboard.data.schema import Project
from quality_dashboard.metrics.status import status_counts
from quality_dashboard.ui.state import get_state, set_state, reset_state


TABLE_CSS = """
<style>
    .pure-table { border-collapse: collapse; width: 100%; font-size: 0.9rem; }
    .pure-table th, .pure-table td { padding: 0.4em 0.8em; text-align: right; border-bottom: 1px solid #e5e7eb; }
    .pure-table th:nth-child(2), .pure-table td:nth-child(2) { text-align: left; }
    .pure-table-odd td { background-color: #f2f2f2; }
    .metric-warn { color: #e69500; font-weight: 600; }
    .metric-error { color: #dc3545; font-weight: 600; }
</style>
"""


# =============================================================================
# HEADER
# =============================================================================

def render_header():
    """Render app header with title and recency window."""
    col1, col2 = st.columns([3, 1])

    with col1:
        st.title("Code Quality Dashboard")

    with col2:
        if get_state("show_all_projects"):
            st.caption("Showing all projects")
        else:
            st.caption(f"Analyzed in the last {get_state('recency_days')} days")


def inject_table_css():
    st.markdown(TABLE_CSS, unsafe_allow_html=True)


# =============================================================================
# SIDEBAR FILTERS
# =============================================================================

def render_sidebar_filters():
    """Render sidebar with recency controls."""
    st.sidebar.header("Filters")

    days = st.sidebar.number_input(
        "Recency window (days)",
        min_value=1,
        max_value=3650,
        value=int(get_state("recency_days")),
        step=1,
        key="filter_recency_days",
    )
    set_state("recency_days", int(days))

    show_all = st.sidebar.checkbox(
        "Include stale projects",
        value=get_state("show_all_projects"),
        key="filter_show_all",
    )
    set_state("show_all_projects", show_all)

    st.sidebar.divider()

    if st.sidebar.button("Reload data", key="reload_data"):
        reload_data()


def reload_data():
    """Drop cached payloads and session slices, then rerun from scratch."""
    fetch_metrics_payload.clear()
    fetch_projects_payload.clear()
    reset_state()
    st.rerun()


# =============================================================================
# STATUS
# =============================================================================

def render_fetch_errors(errors: List[str]):
    """Show one error banner per failed fetch."""
    for message in errors:
        st.error(message)


def render_summary(shown: Sequence[Project], total: int):
    """KPI row: projects shown and gate status counts."""
    counts = status_counts(shown)
    c1, c2, c3, c4 = st.columns(4)

    with c1:
        st.metric("Projects", f"{len(shown):,}", help=f"{total:,} projects returned by the service")
    with c2:
        st.metric("Passing", f"{counts['OK']:,}")
    with c3:
        st.metric("Warning", f"{counts['WARN']:,}")
    with c4:
        st.metric("Failing", f"{counts['ERROR']:,}")

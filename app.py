"""
Code Quality Dashboard

Main entry point for Streamlit app.
"""
import logging
import streamlit as st
from pathlib import Path

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Code Quality Dashboard",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Add repo root to path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from quality_dashboard.config import config, configure_logging, METRIC_KEYS
from quality_dashboard.data.loader import load_dashboard_data
from quality_dashboard.metrics.recency import cutoff_date, filter_recent
from quality_dashboard.ui.charts import status_breakdown_chart
from quality_dashboard.ui.layout import (
    render_header, render_sidebar_filters, render_fetch_errors,
    render_summary, inject_table_css,
)
from quality_dashboard.ui.state import (
    init_state, get_state, get_catalog, get_projects, get_fetch_errors,
    set_catalog_result, set_projects_result,
)
from quality_dashboard.ui.tables import build_columns, render_table_html


configure_logging()
logger = logging.getLogger(__name__)


def main():
    """Main app entry point."""

    # Initialize session state
    init_state()
    render_sidebar_filters()
    render_header()

    # Load both slices; either may fail on its own
    with st.spinner("Loading metrics..."):
        catalog_result, projects_result = load_dashboard_data(config.api_url, METRIC_KEYS)
    set_catalog_result(catalog_result)
    set_projects_result(projects_result)
    render_fetch_errors(get_fetch_errors())

    catalog = get_catalog()
    projects = get_projects()

    # One cutoff per render pass
    if get_state("show_all_projects"):
        shown = list(projects)
    else:
        shown = filter_recent(projects, cutoff_date(days=get_state("recency_days")))
    logger.debug("Showing %d of %d projects", len(shown), len(projects))

    render_summary(shown, len(projects))

    st.markdown("---")

    columns = build_columns(catalog, METRIC_KEYS)
    inject_table_css()
    st.markdown(render_table_html(shown, columns), unsafe_allow_html=True)

    if shown:
        with st.expander("Quality gate breakdown", expanded=False):
            st.plotly_chart(status_breakdown_chart(shown), use_container_width=True)


if __name__ == "__main__":
    main()

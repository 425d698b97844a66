"""
Standard chart wrappers using Plotly.
"""
import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import Sequence

from quality_dashboard.data.schema import Project
from quality_dashboard.metrics.status import status_counts


# =============================================================================
# CHART THEME
# =============================================================================

CHART_COLORS = {
    "success": "#28a745",
    "warning": "#ffc107",
    "danger": "#dc3545",
    "neutral": "#6c757d",
}

STATUS_COLORS = {
    "OK": CHART_COLORS["success"],
    "WARN": CHART_COLORS["warning"],
    "ERROR": CHART_COLORS["danger"],
    "NONE": CHART_COLORS["neutral"],
}

CHART_TEMPLATE = "plotly_white"

DEFAULT_LAYOUT = {
    "template": CHART_TEMPLATE,
    "font": {"family": "Arial, sans-serif", "size": 12},
    "margin": {"l": 50, "r": 30, "t": 40, "b": 50},
    "hoverlabel": {"bgcolor": "white"},
}


def apply_layout(fig: go.Figure, **kwargs) -> go.Figure:
    """Apply standard layout to figure."""
    layout = {**DEFAULT_LAYOUT, **kwargs}
    fig.update_layout(**layout)
    return fig


def status_breakdown_frame(projects: Sequence[Project]) -> pd.DataFrame:
    counts = status_counts(projects)
    return pd.DataFrame({"status": list(counts), "projects": list(counts.values())})


def status_breakdown_chart(projects: Sequence[Project], title: str = "Quality Gate") -> go.Figure:
    """
    Horizontal bar of project counts per gate status.
    """
    df = status_breakdown_frame(projects)
    fig = px.bar(
        df, x="projects", y="status", orientation="h",
        title=title,
        color="status",
        color_discrete_map=STATUS_COLORS,
        text="projects",
    )
    fig.update_traces(textposition="outside")
    fig.update_layout(showlegend=False, yaxis={"categoryorder": "array", "categoryarray": list(df["status"])[::-1]})

    return apply_layout(fig, height=220)

"""
Project table: column definitions and rendering.

Columns are plain descriptors. Each one knows how to pull a value out of a
project (accessor) and how to turn that value into an HTML cell (render),
so the same definitions feed the Streamlit page and the export script.
"""
from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Any, Callable, List, Optional, Sequence
from urllib.parse import quote

import pandas as pd

from quality_dashboard.config import config, STATUS_ICONS
from quality_dashboard.data.catalog import MetricCatalog
from quality_dashboard.data.schema import Project
from quality_dashboard.metrics.casting import cast_value
from quality_dashboard.metrics.recency import to_timestamp
from quality_dashboard.metrics.status import (
    QualityGateStatus, project_status, metric_class,
)
from quality_dashboard.ui.formatting import format_metric, format_relative


# Characters encodeURI leaves alone besides the unreserved set
URI_SAFE_CHARS = ";,/?:@&=+$!*'()#"

STATUS_COLUMN = "status"
NAME_COLUMN = "name"
DATE_COLUMN = "date"

TABLE_CLASS = "pure-table"
ODD_ROW_CLASS = "pure-table-odd"


@dataclass(frozen=True)
class Column:
    """Table column descriptor."""
    id: str
    header: str
    accessor: Callable[[Project], Any]
    render: Callable[[Any, Project], str]
    sort: Optional[str] = None


# =============================================================================
# CELL RENDERERS
# =============================================================================

def status_glyph(status: Any, icon_base_url: Optional[str] = None) -> str:
    """Gate status icon; an empty span for NONE or anything unrecognized."""
    gate = QualityGateStatus.parse(status)
    icon = STATUS_ICONS.get(gate.value)
    if icon is None:
        return "<span></span>"

    base = (icon_base_url if icon_base_url is not None else config.icon_base_url).rstrip("/")
    src = f"{base}/{icon}" if base else icon
    return (
        f'<img class="status-glyph" src="{escape(src)}" alt="{gate.value}" '
        f'style="max-width: 1.1em; vertical-align: middle;">'
    )


def project_link(project: Project, dashboard_url: Optional[str] = None) -> str:
    """External dashboard URL for a project."""
    base = dashboard_url if dashboard_url is not None else config.dashboard_url
    return base + quote(project.key, safe=URI_SAFE_CHARS)


def metric_cell(catalog: MetricCatalog, project: Project, metric_key: str, value: Any) -> str:
    css_class = metric_class(project, metric_key)
    text = format_metric(catalog, metric_key, value) if metric_key in catalog else None
    return f'<span class="{css_class}">{escape(text or "")}</span>'


# =============================================================================
# COLUMN BUILDER
# =============================================================================

def metric_accessor(catalog: MetricCatalog, metric_key: str) -> Callable[[Project], Any]:
    """Typed value of a project's measure, or None if either side is missing."""
    def accessor(project: Project) -> Any:
        measure = project.measure_for(metric_key)
        kind = catalog.kind_for(metric_key)
        if measure is None or kind is None:
            return None
        return cast_value(measure.raw_value, kind)
    return accessor


def build_columns(catalog: MetricCatalog,
                  metric_keys: Optional[Sequence[str]] = None,
                  dashboard_url: Optional[str] = None,
                  icon_base_url: Optional[str] = None,
                  now: Optional[datetime] = None) -> List[Column]:
    """
    Build the ordered column list: status, name, one per metric, date.

    Args:
        catalog: Metric catalog; may be empty while it is still loading
        metric_keys: Metric columns in display order (None = catalog order)
        dashboard_url: Base URL the project key is appended to
        icon_base_url: Where the status glyphs are served from
        now: Reference time for the relative date column (None = wall clock)
    """
    if metric_keys is None:
        metric_keys = list(catalog)

    columns = [
        Column(
            id=STATUS_COLUMN,
            header="",
            accessor=project_status,
            render=lambda value, row: status_glyph(value, icon_base_url),
        ),
        Column(
            id=NAME_COLUMN,
            header="Name",
            accessor=lambda project: project.name,
            render=lambda value, row: (
                f'<a href="{escape(project_link(row, dashboard_url))}">{escape(value or "")}</a>'
            ),
        ),
    ]

    for key in metric_keys:
        columns.append(Column(
            id=key,
            header=catalog.name_for(key),
            accessor=metric_accessor(catalog, key),
            render=lambda value, row, key=key: metric_cell(catalog, row, key, value),
        ))

    columns.append(Column(
        id=DATE_COLUMN,
        header="Last Analysis",
        accessor=lambda project: to_timestamp(project.analysis_date),
        render=lambda value, row: f"<span>{format_relative(value, now)}</span>",
        sort="desc",
    ))
    return columns


# =============================================================================
# TABLE ASSEMBLY
# =============================================================================

def _default_sort(columns: Sequence[Column]) -> Optional[Column]:
    return next((c for c in columns if c.sort), None)


def sort_projects(projects: Sequence[Project], columns: Sequence[Column]) -> List[Project]:
    """Order rows by the first column with a default sort; missing values last."""
    projects = list(projects)
    column = _default_sort(columns)
    if column is None:
        return projects

    present = [p for p in projects if column.accessor(p) is not None]
    missing = [p for p in projects if column.accessor(p) is None]
    present.sort(key=column.accessor, reverse=column.sort == "desc")
    return present + missing


def build_table_frame(projects: Sequence[Project], columns: Sequence[Column]) -> pd.DataFrame:
    """Accessor values as a DataFrame, one column per id, default-sorted."""
    rows = sort_projects(projects, columns)
    data = {c.id: [c.accessor(p) for p in rows] for c in columns}
    df = pd.DataFrame(data, columns=[c.id for c in columns], dtype=object)
    df.index = [p.key for p in rows]
    return df


def render_table_html(projects: Sequence[Project], columns: Sequence[Column]) -> str:
    """Full HTML table with striped rows, in default sort order."""
    header_cells = "".join(f"<th>{escape(c.header)}</th>" for c in columns)
    body_rows = []
    for i, project in enumerate(sort_projects(projects, columns)):
        cells = "".join(f"<td>{c.render(c.accessor(project), project)}</td>" for c in columns)
        row_class = f' class="{ODD_ROW_CLASS}"' if i % 2 == 0 else ""
        body_rows.append(f"<tr{row_class}>{cells}</tr>")

    return (
        f'<table class="{TABLE_CLASS}">'
        f"<thead><tr>{header_cells}</tr></thead>"
        f"<tbody>{''.join(body_rows)}</tbody>"
        f"</table>"
    )

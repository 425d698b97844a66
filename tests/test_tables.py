"""
Tests for column assembly and table rendering.
"""
import sys
from pathlib import Path

import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from quality_dashboard.config import METRIC_KEYS
from quality_dashboard.data.catalog import MetricCatalog
from quality_dashboard.data.schema import Project
from quality_dashboard.ui.tables import (
    build_columns, build_table_frame, render_table_html,
    project_link, status_glyph,
)


NOW = pd.Timestamp("2026-10-19T12:00:00Z")
DASHBOARD_URL = "https://sonar.example.com/dashboard?id="


@pytest.fixture
def catalog():
    return MetricCatalog.from_dict({
        "ncloc": {"name": "Lines", "type": "INT"},
        "coverage": {"name": "Coverage", "type": "PERCENT"},
    })


def make_project(key="p1", name="Proj", analysed=NOW, measures=None, status=None):
    data = {"key": key, "name": name, "measures": measures or []}
    if analysed is not None:
        data["analysisDate"] = analysed.isoformat()
    if status is not None:
        data["status"] = status
    return Project.from_dict(data)


def cells(columns, project):
    return {c.id: c.render(c.accessor(project), project) for c in columns}


class TestBuildColumns:
    """Column order, ids and headers."""

    def test_order(self, catalog):
        columns = build_columns(catalog)
        assert [c.id for c in columns] == ["status", "name", "ncloc", "coverage", "date"]

    def test_explicit_metric_order(self, catalog):
        columns = build_columns(catalog, ["coverage", "ncloc"])
        assert [c.id for c in columns] == ["status", "name", "coverage", "ncloc", "date"]

    def test_headers(self, catalog):
        columns = build_columns(catalog, ["ncloc", "coverage"])
        assert [c.header for c in columns] == ["", "Name", "Lines", "Coverage", "Last Analysis"]

    def test_date_sorts_descending(self, catalog):
        columns = build_columns(catalog)
        assert columns[-1].sort == "desc"
        assert all(c.sort is None for c in columns[:-1])

    def test_empty_catalog(self):
        """Catalog not loaded yet: blank headers, blank cells, no crash."""
        columns = build_columns(MetricCatalog(), METRIC_KEYS)
        project = make_project(measures=[{"metric": "ncloc", "value": "1234"}])

        assert [c.header for c in columns[2:-1]] == [""] * len(METRIC_KEYS)
        rendered = cells(columns, project)
        assert rendered["ncloc"] == '<span class=""></span>'


class TestEndToEnd:
    """Catalog + project through to rendered cells."""

    def test_single_project(self):
        catalog = MetricCatalog.from_dict({"ncloc": {"name": "Lines", "type": "INT"}})
        project = make_project(
            analysed=NOW - pd.Timedelta(seconds=3),
            measures=[{"metric": "ncloc", "value": "1234"}],
            status={"status": "OK", "conditions": []},
        )
        columns = build_columns(catalog, dashboard_url=DASHBOARD_URL, icon_base_url="static", now=NOW)
        rendered = cells(columns, project)

        assert 'alt="OK"' in rendered["status"]
        assert 'src="static/icon_green.png"' in rendered["status"]
        assert rendered["name"] == f'<a href="{DASHBOARD_URL}p1">Proj</a>'
        assert rendered["ncloc"] == '<span class="">1,234</span>'
        assert rendered["date"] == "<span>3 seconds ago</span>"

    def test_accessor_values(self, catalog):
        project = make_project(
            measures=[{"metric": "ncloc", "value": "1234"}, {"metric": "coverage", "value": "81.5"}],
            status={"status": "ERROR", "conditions": [{"metricKey": "coverage", "status": "ERROR"}]},
        )
        columns = build_columns(catalog)
        values = {c.id: c.accessor(project) for c in columns}

        assert values["status"] == "ERROR"
        assert values["name"] == "Proj"
        assert values["ncloc"] == 1234
        assert values["coverage"] == 81.5
        assert values["date"] == NOW

    def test_condition_classes(self, catalog):
        project = make_project(
            measures=[{"metric": "ncloc", "value": "1234"}, {"metric": "coverage", "value": "41.25"}],
            status={"status": "WARN", "conditions": [
                {"metricKey": "coverage", "status": "WARN"},
                {"metricKey": "ncloc", "status": "OK"},
            ]},
        )
        rendered = cells(build_columns(catalog), project)
        assert rendered["coverage"] == '<span class="metric-warn">41.3%</span>'
        assert rendered["ncloc"] == '<span class="">1,234</span>'


class TestDegradation:
    """Missing data renders blank instead of failing."""

    def test_missing_measure(self, catalog):
        project = make_project(measures=[])
        columns = build_columns(catalog)
        assert columns[2].accessor(project) is None
        assert cells(columns, project)["ncloc"] == '<span class=""></span>'

    def test_metric_missing_from_catalog(self, catalog):
        """A measure for an unknown metric is never cast or formatted."""
        project = make_project(
            measures=[{"metric": "bugs", "value": "12"}],
            status={"status": "ERROR", "conditions": [{"metricKey": "bugs", "status": "ERROR"}]},
        )
        columns = build_columns(catalog, ["bugs"])
        bugs = columns[2]

        assert bugs.header == ""
        assert bugs.accessor(project) is None
        assert bugs.render(bugs.accessor(project), project) == '<span class="metric-error"></span>'

    def test_missing_analysis_date(self, catalog):
        project = make_project(analysed=None)
        date = build_columns(catalog)[-1]
        assert date.accessor(project) is None
        assert date.render(None, project) == "<span>-</span>"

    def test_non_numeric_value(self, catalog):
        project = make_project(measures=[{"metric": "ncloc", "value": "lots"}])
        assert cells(build_columns(catalog), project)["ncloc"] == '<span class="">NaN</span>'

    def test_missing_status(self, catalog):
        project = make_project(status=None)
        assert cells(build_columns(catalog), project)["status"] == "<span></span>"


class TestStatusGlyph:
    """Status to glyph mapping."""

    @pytest.mark.parametrize("status, icon", [
        ("OK", "icon_green.png"),
        ("WARN", "icon_orange.png"),
        ("ERROR", "icon_red.png"),
    ])
    def test_known(self, status, icon):
        html = status_glyph(status, "static")
        assert f'src="static/{icon}"' in html
        assert f'alt="{status}"' in html

    @pytest.mark.parametrize("status", ["NONE", "PENDING", "", None, "ok"])
    def test_unknown(self, status):
        assert status_glyph(status, "static") == "<span></span>"


class TestProjectLink:
    """External dashboard URL."""

    def test_plain_key(self):
        assert project_link(make_project(key="p1"), DASHBOARD_URL) == DASHBOARD_URL + "p1"

    def test_encodes_like_encode_uri(self):
        project = make_project(key="org.acme:my project/é")
        assert project_link(project, DASHBOARD_URL) == DASHBOARD_URL + "org.acme:my%20project/%C3%A9"

    def test_link_is_html_escaped(self, catalog):
        project = make_project(key="a&b", name="<Proj>")
        rendered = cells(build_columns(catalog, dashboard_url=DASHBOARD_URL), project)
        assert rendered["name"] == f'<a href="{DASHBOARD_URL}a&amp;b">&lt;Proj&gt;</a>'


class TestTableAssembly:
    """Frame and HTML table output."""

    def test_frame_sorted_by_date_desc(self, catalog):
        projects = [
            make_project(key="old", analysed=NOW - pd.Timedelta(days=5)),
            make_project(key="none", analysed=None),
            make_project(key="new", analysed=NOW - pd.Timedelta(hours=1)),
        ]
        df = build_table_frame(projects, build_columns(catalog))
        assert list(df.index) == ["new", "old", "none"]
        assert list(df.columns) == ["status", "name", "ncloc", "coverage", "date"]

    def test_empty_frame(self, catalog):
        df = build_table_frame([], build_columns(catalog))
        assert len(df) == 0
        assert list(df.columns) == ["status", "name", "ncloc", "coverage", "date"]

    def test_empty_table_body(self, catalog):
        html = render_table_html([], build_columns(catalog))
        assert "<tbody></tbody>" in html
        assert "<th>Lines</th>" in html

    def test_striped_rows(self, catalog):
        projects = [
            make_project(key="a", analysed=NOW - pd.Timedelta(hours=1)),
            make_project(key="b", analysed=NOW - pd.Timedelta(hours=2)),
        ]
        html = render_table_html(projects, build_columns(catalog, now=NOW))
        assert html.count('<tr class="pure-table-odd">') == 1
        assert html.index("id=a") < html.index("id=b")

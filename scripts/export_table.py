#!/usr/bin/env python
"""
Export the project quality table without the Streamlit UI.

Usage:
    python scripts/export_table.py
    python scripts/export_table.py --format html --output table.html
    python scripts/export_table.py --api-url https://sonar.example.com/api/dashboard --days 14
"""
import argparse
import logging
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from quality_dashboard.config import config, configure_logging, METRIC_KEYS
from quality_dashboard.data.catalog import MetricCatalog
from quality_dashboard.data.client import SonarClient
from quality_dashboard.data.loader import load_catalog, load_projects
from quality_dashboard.metrics.recency import cutoff_date, filter_recent
from quality_dashboard.ui.tables import build_columns, build_table_frame, render_table_html


logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Export the project quality table")
    parser.add_argument(
        "--api-url",
        type=str,
        default=None,
        help="Override service API URL"
    )
    parser.add_argument(
        "--days",
        type=int,
        default=config.recency_days,
        help="Recency window in days (default: %(default)s)"
    )
    parser.add_argument(
        "--format",
        choices=["csv", "html"],
        default="csv",
        help="Output format"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write to file instead of stdout"
    )

    args = parser.parse_args()
    configure_logging()

    client = SonarClient(args.api_url)
    catalog_result = load_catalog(client.fetch_metrics)
    projects_result = load_projects(client.fetch_projects, METRIC_KEYS)

    failed = [r.error for r in (catalog_result, projects_result) if r.error]
    for err in failed:
        print(f"✗ Error: {err}", file=sys.stderr)
    if not projects_result.ok:
        sys.exit(1)

    projects = filter_recent(projects_result.value, cutoff_date(days=args.days))
    columns = build_columns(catalog_result.value_or(MetricCatalog()), METRIC_KEYS)
    logger.info("Exporting %d of %d projects", len(projects), len(projects_result.value))

    if args.format == "html":
        content = render_table_html(projects, columns)
    else:
        df = build_table_frame(projects, columns)
        df.index.name = "key"
        content = df.to_csv()

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        print(f"✓ Wrote {len(projects):,} projects to {args.output}")
    else:
        sys.stdout.write(content)

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()

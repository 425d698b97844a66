"""
Quality gate status classification.

A project's overall gate status comes straight from the service. The
per-metric classification looks up the gate condition for a metric and
maps WARN/ERROR to a CSS class used to highlight the cell.
"""
from enum import Enum
from typing import Any

from quality_dashboard.config import METRIC_CLASSES
from quality_dashboard.data.schema import Project


NO_STATUS = "NONE"
NEUTRAL_CLASS = ""


class QualityGateStatus(str, Enum):
    OK = "OK"
    WARN = "WARN"
    ERROR = "ERROR"
    NONE = NO_STATUS

    @classmethod
    def parse(cls, value: Any) -> "QualityGateStatus":
        """Exact match on the status string; anything else is NONE."""
        try:
            return cls(value)
        except ValueError:
            return cls.NONE


def project_status(project: Project) -> str:
    """Overall quality gate status, or "NONE" when the project has none."""
    if project.status is not None and project.status.status:
        return project.status.status
    return NO_STATUS


def metric_class(project: Project, metric_key: str) -> str:
    """CSS class for a metric cell based on its gate condition."""
    condition = project.condition_for(metric_key)
    if condition is None:
        return NEUTRAL_CLASS
    return METRIC_CLASSES.get(condition.status, NEUTRAL_CLASS)


def status_counts(projects) -> dict:
    """Count projects per gate status, all statuses present (zero if unused)."""
    counts = {status.value: 0 for status in QualityGateStatus}
    for project in projects:
        counts[QualityGateStatus.parse(project_status(project)).value] += 1
    return counts

"""
Typed records for metric catalog and project payloads.

The service returns loosely-shaped JSON. Everything here is built once from
that JSON and never mutated afterwards; each fetch replaces the records
wholesale.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class SchemaValidationError(Exception):
    """Raised when a payload record is missing required fields or is malformed."""
    pass


# Required fields per payload record type (hard fail if missing)
REQUIRED_FIELDS = {
    "project": ["key"],
}

# Optional fields (degrade gracefully if missing)
OPTIONAL_FIELDS = {
    "project": ["name", "analysisDate", "measures", "status"],
}


def _record_list(value: Any, field_name: str) -> List[Any]:
    """A list-valued payload field; None is empty, anything else but a list is malformed."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise SchemaValidationError(f"Expected a list for {field_name}, got {type(value).__name__}")
    return list(value)


class MetricKind(str, Enum):
    """Value kind of a metric as reported by the catalog."""
    INT = "INT"
    FLOAT = "FLOAT"
    PERCENT = "PERCENT"
    MILLISEC = "MILLISEC"
    STRING = "STRING"

    @classmethod
    def parse(cls, value: Any) -> "MetricKind":
        """Map a raw type string to a kind; unknown types are STRING."""
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.STRING

    @property
    def is_numeric(self) -> bool:
        return self is not MetricKind.STRING


@dataclass(frozen=True)
class MetricDefinition:
    key: str
    name: str
    kind: MetricKind = MetricKind.STRING

    @classmethod
    def from_dict(cls, key: str, data: Mapping[str, Any]) -> "MetricDefinition":
        return cls(
            key=key,
            name=str(data.get("name") or ""),
            kind=MetricKind.parse(data.get("type")),
        )


@dataclass(frozen=True)
class Measure:
    metric_key: str
    raw_value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Measure":
        key = data.get("metric", data.get("metricKey"))
        value = data.get("value", data.get("rawValue"))
        return cls(metric_key=str(key), raw_value=value)


@dataclass(frozen=True)
class Condition:
    metric_key: str
    status: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Condition":
        return cls(metric_key=str(data.get("metricKey")), status=str(data.get("status") or ""))


@dataclass(frozen=True)
class ProjectStatus:
    status: Optional[str] = None
    conditions: Optional[Tuple[Condition, ...]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectStatus":
        raw_conditions = data.get("conditions")
        conditions = None
        if raw_conditions is not None:
            conditions = tuple(
                Condition.from_dict(c) for c in _record_list(raw_conditions, "conditions") if isinstance(c, Mapping)
            )
        return cls(status=data.get("status") or None, conditions=conditions)


@dataclass(frozen=True)
class Project:
    """
    A project row as returned by the projects endpoint.

    Measure and condition lookups are indexed by metric key at construction.
    When a key repeats, the first entry wins.
    """
    key: str
    name: str = ""
    analysis_date: Optional[str] = None
    measures: Tuple[Measure, ...] = ()
    status: Optional[ProjectStatus] = None
    _measure_index: Dict[str, Measure] = field(default_factory=dict, init=False, repr=False, compare=False)
    _condition_index: Dict[str, Condition] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        for measure in self.measures:
            self._measure_index.setdefault(measure.metric_key, measure)
        if self.status is not None and self.status.conditions:
            for condition in self.status.conditions:
                self._condition_index.setdefault(condition.metric_key, condition)

    def measure_for(self, metric_key: str) -> Optional[Measure]:
        """Measure for a metric key, or None if the project has none."""
        return self._measure_index.get(metric_key)

    def condition_for(self, metric_key: str) -> Optional[Condition]:
        """First gate condition for a metric key, or None."""
        return self._condition_index.get(metric_key)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Project":
        validate_record(data, "project")
        status = data.get("status")
        return cls(
            key=str(data["key"]),
            name=str(data.get("name") or ""),
            analysis_date=data.get("analysisDate") or None,
            measures=tuple(
                Measure.from_dict(m) for m in _record_list(data.get("measures"), "measures") if isinstance(m, Mapping)
            ),
            status=ProjectStatus.from_dict(status) if isinstance(status, Mapping) else None,
        )


def validate_required_fields(data: Any, record_type: str) -> Tuple[bool, List[str]]:
    """
    Validate that required fields exist in a payload record.
    Returns (is_valid, missing_fields).
    """
    if not isinstance(data, Mapping):
        return False, list(REQUIRED_FIELDS.get(record_type, []))

    if record_type not in REQUIRED_FIELDS:
        return True, []

    missing = [f for f in REQUIRED_FIELDS[record_type] if data.get(f) in (None, "")]
    return len(missing) == 0, missing


def check_optional_fields(data: Mapping[str, Any], record_type: str) -> List[str]:
    """Return the optional fields a record does not carry."""
    if record_type not in OPTIONAL_FIELDS:
        return []
    return [f for f in OPTIONAL_FIELDS[record_type] if f not in data]


def validate_record(data: Any, record_type: str):
    """Raise SchemaValidationError if a record lacks required fields."""
    is_valid, missing = validate_required_fields(data, record_type)
    if not is_valid:
        raise SchemaValidationError(f"Missing required fields in {record_type}: {missing}")

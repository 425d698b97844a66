"""
Tests for payload parsing and record validation.
"""
import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from quality_dashboard.data.catalog import MetricCatalog
from quality_dashboard.data.schema import (
    MetricKind,
    Project,
    validate_required_fields,
    check_optional_fields,
    validate_record,
    SchemaValidationError,
)


class TestValidateRequiredFields:
    """Tests for required field validation."""

    def test_all_fields_present(self):
        is_valid, missing = validate_required_fields({"key": "p1", "name": "Proj"}, "project")

        assert is_valid is True
        assert missing == []

    def test_missing_key(self):
        is_valid, missing = validate_required_fields({"name": "Proj"}, "project")

        assert is_valid is False
        assert missing == ["key"]

    def test_blank_key(self):
        is_valid, missing = validate_required_fields({"key": ""}, "project")

        assert is_valid is False

    def test_not_a_mapping(self):
        is_valid, missing = validate_required_fields(["p1"], "project")

        assert is_valid is False
        assert missing == ["key"]

    def test_unknown_record_type(self):
        """Unknown record types have no requirements."""
        is_valid, missing = validate_required_fields({"any": 1}, "unknown")

        assert is_valid is True
        assert missing == []

    def test_validate_record_raises(self):
        with pytest.raises(SchemaValidationError):
            validate_record({"name": "Proj"}, "project")


class TestCheckOptionalFields:
    """Tests for optional field checking."""

    def test_returns_missing_optional(self):
        missing = check_optional_fields({"key": "p1"}, "project")

        assert "analysisDate" in missing
        assert "status" in missing

    def test_empty_for_unknown_type(self):
        assert check_optional_fields({"key": "p1"}, "unknown") == []


class TestProjectFromDict:
    """Tests for project parsing."""

    def test_full_record(self):
        project = Project.from_dict({
            "key": "p1",
            "name": "Proj",
            "analysisDate": "2026-10-19T12:00:00+0000",
            "measures": [{"metric": "ncloc", "value": "1234"}],
            "status": {"status": "OK", "conditions": [{"metricKey": "coverage", "status": "WARN"}]},
        })

        assert project.key == "p1"
        assert project.measure_for("ncloc").raw_value == "1234"
        assert project.condition_for("coverage").status == "WARN"
        assert project.status.status == "OK"

    def test_minimal_record(self):
        project = Project.from_dict({"key": "p1"})

        assert project.name == ""
        assert project.analysis_date is None
        assert project.measures == ()
        assert project.status is None
        assert project.measure_for("ncloc") is None

    def test_measure_aliases(self):
        project = Project.from_dict({"key": "p1", "measures": [{"metricKey": "ncloc", "rawValue": "10"}]})

        assert project.measure_for("ncloc").raw_value == "10"

    def test_first_duplicate_measure_wins(self):
        project = Project.from_dict({"key": "p1", "measures": [
            {"metric": "ncloc", "value": "1"},
            {"metric": "ncloc", "value": "2"},
        ]})

        assert project.measure_for("ncloc").raw_value == "1"

    def test_absent_conditions(self):
        project = Project.from_dict({"key": "p1", "status": {"status": "OK"}})

        assert project.status.conditions is None
        assert project.condition_for("ncloc") is None

    def test_null_lists_are_empty(self):
        project = Project.from_dict({"key": "p1", "measures": None, "status": {"conditions": None}})

        assert project.measures == ()
        assert project.status.conditions is None

    def test_wrongly_typed_measures(self):
        with pytest.raises(SchemaValidationError, match="measures"):
            Project.from_dict({"key": "p1", "measures": 5})

    def test_wrongly_typed_conditions(self):
        with pytest.raises(SchemaValidationError, match="conditions"):
            Project.from_dict({"key": "p1", "status": {"status": "ERROR", "conditions": {"metricKey": "ncloc"}}})

    def test_equality_ignores_indexes(self):
        data = {"key": "p1", "measures": [{"metric": "ncloc", "value": "1"}]}

        assert Project.from_dict(data) == Project.from_dict(data)


class TestMetricCatalog:
    """Tests for catalog parsing."""

    def test_from_dict_keeps_order(self):
        catalog = MetricCatalog.from_dict({
            "ncloc": {"name": "Lines", "type": "INT"},
            "coverage": {"name": "Coverage", "type": "PERCENT"},
        })

        assert list(catalog) == ["ncloc", "coverage"]
        assert catalog.name_for("coverage") == "Coverage"
        assert catalog.kind_for("ncloc") is MetricKind.INT

    def test_unknown_type_is_string(self):
        catalog = MetricCatalog.from_dict({"alert_status": {"name": "Gate", "type": "LEVEL"}})

        assert catalog.kind_for("alert_status") is MetricKind.STRING

    def test_missing_key(self):
        catalog = MetricCatalog.from_dict({})

        assert "ncloc" not in catalog
        assert catalog.get("ncloc") is None
        assert catalog.name_for("ncloc") == ""
        assert catalog.kind_for("ncloc") is None

    def test_none_payload(self):
        assert len(MetricCatalog.from_dict(None)) == 0

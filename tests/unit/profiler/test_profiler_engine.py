"""
End-to-end tests for TabularProfiler over both declared formats.
"""

import json

import pytest

from inspection_framework import profile
from inspection_framework.core.config import InspectionConfig
from inspection_framework.core.exceptions import EmptyInputError, MalformedInputError
from inspection_framework.profiler.engine import TabularProfiler
from inspection_framework.profiler.type_inferrer import TypeTag
from inspection_framework.utils.json_utils import safe_json_dumps


ORDERS_JSON = json.dumps([
    {"id": 1, "customer": {"name": "Ann", "email": "ann@example.com"}, "total": 10.5,
     "items": [{"sku": "X1", "qty": 2}], "shipped": True},
    {"id": 2, "customer": {"name": "Bo", "email": ""}, "total": 7,
     "items": [], "shipped": False},
    {"id": 3, "customer": {"name": "Cy"}, "total": None, "items": [{"sku": "X2"}]},
])


@pytest.fixture
def profiler():
    return TabularProfiler()


class TestDelimitedProfile:
    """Profiles of delimited-text input."""

    def test_two_column_example(self, profiler):
        result = profiler.profile("a,b\n1,2\n3,\n", "delimited-text")

        assert result.fields == ["a", "b"]
        assert result.record_count == 2
        assert result.columns["b"].empty_rate == 50.0
        assert result.columns["a"].dominant_type == TypeTag.INTEGER_TEXT
        assert result.gate_results == {"a": True, "b": False}
        assert result.failed_fields == ["b"]
        assert not result.passed_all

    def test_numeric_summary_skips_text(self, profiler):
        result = profiler.profile("v\n1\n2\nx\n", "delimited-text")
        numeric = result.columns["v"].numeric

        assert numeric.count == 2
        assert numeric.mean == 1.5

    def test_delimiter_override(self, profiler):
        result = profiler.profile("a\tb\n1\t2\n", "delimited-text", delimiter="\t")

        assert result.fields == ["a", "b"]

    def test_configured_threshold_and_sample_size(self):
        config = InspectionConfig({"profiler": {"quality_threshold": 50, "sample_size": 1}})
        result = TabularProfiler(config).profile("a,b\n1,2\n3,\n", "delimited-text")

        assert result.gate_results["b"] is True
        assert result.quality_threshold == 50
        assert result.columns["a"].samples == ["1"]

    def test_header_only_profiles_empty_columns(self, profiler):
        result = profiler.profile("a,b\n", "delimited-text")

        assert result.record_count == 0
        assert result.columns["a"].total_count == 0
        assert result.passed_all

    def test_profile_is_deterministic(self, profiler):
        text = "name,age\nAnn,30\nBo,\nCy,41\n"

        first = profiler.profile(text, "delimited-text").to_dict()
        second = profiler.profile(text, "delimited-text").to_dict()

        assert first == second


class TestNestedProfile:
    """Profiles of nested-object input."""

    def test_fields_and_types(self, profiler):
        result = profiler.profile(ORDERS_JSON, "nested-object", source_name="orders.json")

        assert result.fields == ["id", "customer.name", "customer.email", "total", "items", "shipped"]
        assert result.columns["id"].dominant_type == TypeTag.INTEGER
        assert result.columns["total"].dominant_type == TypeTag.FLOAT
        assert result.columns["items"].dominant_type == TypeTag.ARRAY
        assert result.columns["shipped"].dominant_type == TypeTag.BOOLEAN

    def test_missing_keys_are_empty(self, profiler):
        result = profiler.profile(ORDERS_JSON, "nested-object")

        assert result.columns["customer.email"].empty_count == 2
        assert result.columns["shipped"].empty_rate == 33.3
        assert result.columns["items"].empty_count == 0

    def test_structure_lists_array_children(self, profiler):
        result = profiler.profile(ORDERS_JSON, "nested-object")
        paths = [entry.path for entry in result.structure]

        assert "items[].sku" in paths
        assert "items[].sku" not in result.fields

    def test_preview_fills_missing_fields(self, profiler):
        result = profiler.profile(ORDERS_JSON, "nested-object")
        preview = result.preview(limit=2)

        assert len(preview) == 2
        assert list(preview[0]) == result.fields
        assert result.preview()[2]["shipped"] is None

    def test_to_dict_is_json_serializable(self, profiler):
        result = profiler.profile(ORDERS_JSON, "nested-object", source_name="orders.json")

        data = json.loads(safe_json_dumps(result.to_dict()))

        assert data["source_name"] == "orders.json"
        assert data["record_count"] == 3
        assert data["gate_results"]["id"] == "GO"
        assert data["columns"][0]["dominant_type"] == "integer"


class TestSummaryFrame:

    def test_one_row_per_field(self, profiler):
        result = profiler.profile("a,b\n1,x\n3,\n", "delimited-text")
        frame = result.summary_frame()

        assert list(frame.columns) == ["field", "type", "empty_rate", "unique", "min", "max", "mean", "gate"]
        assert frame["field"].tolist() == ["a", "b"]
        assert frame.loc[0, "mean"] == 2.0
        assert frame["gate"].tolist() == ["GO", "NG"]


class TestProfileErrors:
    """No partial results on parse errors."""

    def test_empty_input(self, profiler):
        with pytest.raises(EmptyInputError):
            profiler.profile("", "delimited-text")

    def test_malformed_json(self, profiler):
        with pytest.raises(MalformedInputError):
            profiler.profile("{oops", "nested-object")

    def test_module_level_profile(self):
        result = profile("a\n1\n", "delimited-text", source_name="one.csv")

        assert result.source_name == "one.csv"
        assert result.columns["a"].numeric.max_value == 1.0

"""
Unit tests for StatisticsCalculator and the numeric helpers.
"""

import pytest

from inspection_framework.profiler.statistics_calculator import (
    StatisticsCalculator,
    canonical_string,
    coerce_number,
)
from inspection_framework.profiler.type_inferrer import TypeTag


@pytest.fixture
def calculator():
    return StatisticsCalculator()


class TestCoerceNumber:
    """Best-effort numeric coercion never raises."""

    @pytest.mark.parametrize("value,expected", [
        (3, 3.0),
        (2.5, 2.5),
        ("42", 42.0),
        (" -1.5 ", -1.5),
        ("12kg", 12.0),
        ("2024-01-15", 2024.0),
        (".5", 0.5),
        ("1e3", 1000.0),
    ])
    def test_coerces(self, value, expected):
        assert coerce_number(value) == expected

    @pytest.mark.parametrize("value", ["x", "", "kg12", True, None, [1], {"a": 1}, float("inf"), "1e999"])
    def test_does_not_coerce(self, value):
        assert coerce_number(value) is None


class TestCanonicalString:

    def test_whole_float_drops_fraction(self):
        assert canonical_string(2.0) == "2"

    def test_booleans_lower_case(self):
        assert canonical_string(True) == "true"

    def test_containers_sorted_json(self):
        assert canonical_string({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'

    def test_text_unchanged(self):
        assert canonical_string(" x ") == " x "


class TestColumnCounts:
    """Counts, empty rate and uniqueness."""

    def test_empty_rate(self, calculator):
        profile = calculator.calculate_statistics("b", ["2", ""])

        assert profile.total_count == 2
        assert profile.empty_count == 1
        assert profile.empty_rate == 50.0
        assert profile.non_empty_rate == 50.0

    def test_empty_rate_rounded_to_one_decimal(self, calculator):
        profile = calculator.calculate_statistics("c", ["", "1", "2"])

        assert profile.empty_rate == 33.3
        assert profile.empty_rate + profile.non_empty_rate == pytest.approx(100.0)

    def test_counts_add_up(self, calculator):
        profile = calculator.calculate_statistics("c", ["a", None, " ", "b", float("nan")])

        assert profile.empty_count + profile.non_empty_count == profile.total_count
        assert profile.empty_count == 3

    def test_all_empty(self, calculator):
        profile = calculator.calculate_statistics("c", [None, ""])

        assert profile.empty_rate == 100.0
        assert profile.dominant_type == TypeTag.EMPTY
        assert profile.numeric is None
        assert profile.lengths is None
        assert profile.samples == []

    def test_no_values(self, calculator):
        profile = calculator.calculate_statistics("c", [])

        assert profile.total_count == 0
        assert profile.empty_rate == 0.0
        assert profile.dominant_type == TypeTag.UNKNOWN

    def test_unique_by_canonical_form(self, calculator):
        profile = calculator.calculate_statistics("c", [1, 1.0, "1", "a", "a", None])

        assert profile.unique_count == 2

    def test_samples_limited(self):
        profile = StatisticsCalculator(sample_size=2).calculate_statistics("c", ["", "a", "b", "c"])

        assert profile.samples == ["a", "b"]


class TestTypeStats:

    def test_dominant_type(self, calculator):
        profile = calculator.calculate_statistics("c", ["1", "2", "x"])

        assert profile.dominant_type == TypeTag.INTEGER_TEXT
        assert profile.type_distribution == {TypeTag.INTEGER_TEXT: 2, TypeTag.STRING: 1}

    def test_tie_goes_to_first_seen(self, calculator):
        profile = calculator.calculate_statistics("c", ["x", "1", "1", "y"])

        assert profile.dominant_type == TypeTag.STRING

    def test_histogram_in_first_seen_order(self, calculator):
        profile = calculator.calculate_statistics("c", [None, "a@b.io", "1.5"])

        assert list(profile.type_distribution) == [TypeTag.EMPTY, TypeTag.EMAIL, TypeTag.FLOAT_TEXT]


class TestNumericSummary:

    def test_non_numeric_values_excluded(self, calculator):
        profile = calculator.calculate_statistics("c", ["1", "2", "x"])

        assert profile.numeric.count == 2
        assert profile.numeric.min_value == 1.0
        assert profile.numeric.max_value == 2.0
        assert profile.numeric.mean == 1.5
        assert profile.numeric.std_dev == pytest.approx(0.5)

    def test_single_number_has_no_std_dev(self, calculator):
        profile = calculator.calculate_statistics("c", ["7", "x"])

        assert profile.numeric.mean == 7.0
        assert profile.numeric.std_dev is None

    def test_absent_without_numbers(self, calculator):
        profile = calculator.calculate_statistics("c", ["x", "y", True])

        assert profile.numeric is None

    def test_bounds_hold(self, calculator):
        profile = calculator.calculate_statistics("c", [3, "10", 4.5, "-2"])
        numeric = profile.numeric

        assert numeric.min_value <= numeric.mean <= numeric.max_value
        assert numeric.std_dev >= 0

    def test_to_dict_rounds(self, calculator):
        profile = calculator.calculate_statistics("c", ["1", "2", "2"])

        assert profile.numeric.to_dict()["mean"] == 1.67
        assert profile.numeric.to_dict()["std_dev"] == 0.47


class TestLengthSummary:

    def test_lengths_over_text_and_numbers(self, calculator):
        profile = calculator.calculate_statistics("c", ["ab", "abcd", 2.0, None])

        assert profile.lengths.min_length == 1
        assert profile.lengths.max_length == 4

    def test_absent_for_containers_and_booleans(self, calculator):
        profile = calculator.calculate_statistics("c", [[1, 2], True, {"a": 1}])

        assert profile.lengths is None

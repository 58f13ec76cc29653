"""
Statistics Calculator - Column Statistics for Quick-Look Profiling.

This module aggregates the raw values of one field into a ColumnProfile:
counts, empty rate, uniqueness, type histogram, samples, and optional
numeric and length summaries.

Architecture:
    StatisticsCalculator is responsible for:
    1. Counts (total, empty, empty rate, unique by canonical string form)
    2. Type histogram and dominant type (via TypeInferrer)
    3. Sample values (first N non-empty)
    4. Numeric summary (min, max, mean, population std)
    5. Length summary (min/max character length)

Design Decisions:
    - Numeric coercion is independent of type inference: any non-empty string
      or number whose leading characters form a number is counted
      ("12kg" -> 12, "2024-01-15" -> 2024). This is deliberately permissive
      for quick-look statistics, not validation.
    - Values that fail coercion, and non-finite results, are silently left
      out of the numeric summary; they never abort the column.
    - Standard deviation uses the population formula (ddof=0) and is omitted
      for fewer than 2 numeric values.
    - Dominant type ties are broken by first-encountered type.

Usage:
    calculator = StatisticsCalculator(sample_size=3)
    profile = calculator.calculate_statistics("price", ["1", "2", "x"])
"""

import json
import math
import re
from collections import Counter
from typing import Any, List, Optional

import numpy as np

from inspection_framework.core.constants import DEFAULT_SAMPLE_SIZE, EMPTY_RATE_PRECISION
from inspection_framework.core.logging_config import get_logger
from inspection_framework.profiler.profile_result import (
    ColumnProfile,
    LengthSummary,
    NumericSummary,
)
from inspection_framework.profiler.type_inferrer import TypeInferrer, TypeTag, is_empty_value

logger = get_logger(__name__)

# Leading numeric prefix: optional sign, digits with optional fraction, optional exponent
LEADING_NUMBER_PATTERN = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def coerce_number(value: Any) -> Optional[float]:
    """
    Parse a value as a finite number, or return None.

    Numbers pass through; strings are parsed from their leading numeric
    prefix. Booleans, containers and everything else do not coerce.
    """
    if isinstance(value, (bool, np.bool_)):
        return None

    if isinstance(value, (int, float, np.integer, np.floating)):
        number = float(value)
        return number if math.isfinite(number) else None

    if isinstance(value, str):
        match = LEADING_NUMBER_PATTERN.match(value)
        if not match:
            return None
        try:
            number = float(match.group(1))
        except (ValueError, OverflowError):
            return None
        return number if math.isfinite(number) else None

    return None


def canonical_string(value: Any) -> str:
    """
    Canonical string form used for uniqueness and lengths.

    Whole floats print without a fraction ("2.0" value -> "2"), booleans are
    lower-case, containers are compact JSON with sorted keys.
    """
    if isinstance(value, (bool, np.bool_)):
        return "true" if value else "false"
    if isinstance(value, (float, np.floating)) and math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)
    return str(value)


class StatisticsCalculator:
    """
    Aggregates one field's raw values into a ColumnProfile.

    Attributes:
        sample_size: Number of non-empty sample values kept per column

    Example:
        >>> calculator = StatisticsCalculator()
        >>> profile = calculator.calculate_statistics("b", ["2", ""])
        >>> profile.empty_rate
        50.0
    """

    def __init__(self, sample_size: int = DEFAULT_SAMPLE_SIZE, type_inferrer: Optional[TypeInferrer] = None):
        """
        Initialize the statistics calculator.

        Args:
            sample_size: Number of sample values to keep
            type_inferrer: Inferrer used for the type histogram
        """
        self.sample_size = sample_size
        self.type_inferrer = type_inferrer or TypeInferrer()

    def calculate_statistics(self, name: str, values: List[Any]) -> ColumnProfile:
        """
        Calculate the profile for one field.

        Args:
            name: Field name
            values: Raw values of the field, one per record, in record order

        Returns:
            ColumnProfile for the field
        """
        profile = ColumnProfile(name=name)
        profile.total_count = len(values)

        non_empty = [v for v in values if not is_empty_value(v)]
        profile.empty_count = profile.total_count - len(non_empty)
        if profile.total_count:
            profile.empty_rate = round(
                100.0 * profile.empty_count / profile.total_count, EMPTY_RATE_PRECISION
            )

        profile.unique_count = len({canonical_string(v) for v in non_empty})
        profile.samples = non_empty[:self.sample_size]

        self._calculate_type_stats(profile, values)
        profile.numeric = self._calculate_numeric_stats(non_empty)
        profile.lengths = self._calculate_length_stats(non_empty)

        logger.debug(
            f"Column '{name}': {profile.total_count} values, {profile.empty_count} empty, "
            f"dominant type {profile.dominant_type.value}"
        )
        return profile

    def _calculate_type_stats(self, profile: ColumnProfile, values: List[Any]) -> None:
        """Fill type histogram and dominant type in place."""
        # Counter keeps first-insertion order, so max() returns the first-seen type on ties
        histogram = Counter(self.type_inferrer.detect_type(v) for v in values)
        profile.type_distribution = dict(histogram)
        if histogram:
            profile.dominant_type = max(histogram, key=histogram.get)
        else:
            profile.dominant_type = TypeTag.UNKNOWN

    @staticmethod
    def _calculate_numeric_stats(non_empty: List[Any]) -> Optional[NumericSummary]:
        numbers = [n for n in (coerce_number(v) for v in non_empty) if n is not None]
        if not numbers:
            return None

        numeric_array = np.array(numbers, dtype=np.float64)
        return NumericSummary(
            count=len(numbers),
            min_value=float(np.min(numeric_array)),
            max_value=float(np.max(numeric_array)),
            mean=float(np.mean(numeric_array)),
            std_dev=float(np.std(numeric_array)) if len(numbers) > 1 else None
        )

    @staticmethod
    def _calculate_length_stats(non_empty: List[Any]) -> Optional[LengthSummary]:
        lengths = [
            len(canonical_string(v))
            for v in non_empty
            if isinstance(v, (str, int, float, np.integer, np.floating))
            and not isinstance(v, (bool, np.bool_))
        ]
        if not lengths:
            return None
        return LengthSummary(min_length=min(lengths), max_length=max(lengths))

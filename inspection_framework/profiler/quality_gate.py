"""
Quality Gate - pass/fail decision on a column's empty rate.

A column passes when its empty rate is at or below the threshold
percentage. The threshold is configuration (profiler.quality_threshold),
defaulting to DEFAULT_QUALITY_THRESHOLD.
"""

from typing import Dict, Mapping

from inspection_framework.core.constants import (
    DEFAULT_QUALITY_THRESHOLD,
    GATE_PASS_LABEL,
    GATE_FAIL_LABEL,
)
from inspection_framework.core.exceptions import ConfigValidationError
from inspection_framework.profiler.profile_result import ColumnProfile


class QualityGate:
    """
    Empty-rate gate for column profiles.

    Example:
        >>> gate = QualityGate(threshold=10)
        >>> gate.passes(profile)   # profile.empty_rate == 50.0
        False
    """

    def __init__(self, threshold: float = DEFAULT_QUALITY_THRESHOLD):
        if not 0 <= threshold <= 100:
            raise ConfigValidationError(
                f"Quality threshold must be a percentage between 0 and 100, got {threshold}",
                field="profiler.quality_threshold",
                expected="0-100",
                actual=str(threshold)
            )
        self.threshold = threshold

    def passes(self, profile: ColumnProfile) -> bool:
        """True iff the column's empty rate is at or below the threshold."""
        return profile.empty_rate <= self.threshold

    def evaluate(self, profiles: Mapping[str, ColumnProfile]) -> Dict[str, bool]:
        """Gate result for every profile, keyed by field name."""
        return {name: self.passes(profile) for name, profile in profiles.items()}

    @staticmethod
    def label(passed: bool) -> str:
        """GO / NG label for a gate result."""
        return GATE_PASS_LABEL if passed else GATE_FAIL_LABEL


def passes_gate(profile: ColumnProfile, threshold: float = DEFAULT_QUALITY_THRESHOLD) -> bool:
    """Functional shortcut for QualityGate(threshold).passes(profile)."""
    return QualityGate(threshold).passes(profile)

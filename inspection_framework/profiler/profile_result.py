"""
Data structures for storing profiling results.

Contains classes for holding the per-column profile, the nested-structure
view and the complete tabular profile of one artifact.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

import pandas as pd

from inspection_framework.core.constants import GATE_PASS_LABEL, GATE_FAIL_LABEL
from inspection_framework.profiler.type_inferrer import TypeTag


@dataclass
class FieldStructure:
    """
    One entry of the nested-structure view of an artifact.

    Attributes:
        path: Dotted field path ('items[].sku' for fields inside array elements)
        type_tag: Type of the sample value
        sample: First value seen for the path
        is_array: True when the value is an array
        element_type: Type of the array's first element (arrays only)
        in_array: True when the path lives inside an array element; such paths
            are shown in the structure view but are not profiled columns
    """
    path: str
    type_tag: TypeTag
    sample: Any = None
    is_array: bool = False
    element_type: Optional[TypeTag] = None
    in_array: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "path": self.path,
            "type": self.type_tag.value,
            "sample": self.sample,
            "is_array": self.is_array,
            "element_type": self.element_type.value if self.element_type else None,
            "in_array": self.in_array,
        }


@dataclass
class NumericSummary:
    """Summary of values that coerced to finite numbers."""
    count: int
    min_value: float
    max_value: float
    mean: float
    std_dev: Optional[float] = None  # population std, None for fewer than 2 values

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "min": self.min_value,
            "max": self.max_value,
            "mean": round(self.mean, 2),
            "std_dev": round(self.std_dev, 2) if self.std_dev is not None else None,
        }


@dataclass
class LengthSummary:
    """Character length range of string-coercible values."""
    min_length: int
    max_length: int

    def to_dict(self) -> Dict[str, Any]:
        return {"min_length": self.min_length, "max_length": self.max_length}


@dataclass
class ColumnProfile:
    """
    Aggregated statistics for one field.

    Attributes:
        name: Field name or dotted path
        total_count: Number of values (one per record)
        empty_count: Number of empty values
        empty_rate: Percentage of empty values, rounded to one decimal
        unique_count: Distinct non-empty values by canonical string form
        dominant_type: Most frequent TypeTag (ties go to the first seen)
        type_distribution: TypeTag frequencies in first-seen order
        samples: First non-empty values
        numeric: Numeric summary, present iff a value coerced to a finite number
        lengths: Length summary, present iff a string or number value exists
    """
    name: str
    total_count: int = 0
    empty_count: int = 0
    empty_rate: float = 0.0
    unique_count: int = 0
    dominant_type: TypeTag = TypeTag.UNKNOWN
    type_distribution: Dict[TypeTag, int] = field(default_factory=dict)
    samples: List[Any] = field(default_factory=list)
    numeric: Optional[NumericSummary] = None
    lengths: Optional[LengthSummary] = None

    @property
    def non_empty_count(self) -> int:
        """Number of non-empty values."""
        return self.total_count - self.empty_count

    @property
    def non_empty_rate(self) -> float:
        """Percentage of non-empty values (complements empty_rate to 100)."""
        return round(100.0 - self.empty_rate, 1) if self.total_count else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "total_count": self.total_count,
            "empty_count": self.empty_count,
            "empty_rate": self.empty_rate,
            "unique_count": self.unique_count,
            "dominant_type": self.dominant_type.value,
            "type_distribution": {tag.value: count for tag, count in self.type_distribution.items()},
            "samples": list(self.samples),
            "numeric": self.numeric.to_dict() if self.numeric else None,
            "lengths": self.lengths.to_dict() if self.lengths else None,
        }


@dataclass
class TabularProfile:
    """
    Complete profile of one tabular or nested artifact.

    Attributes:
        source_name: Name of the profiled artifact
        declared_format: 'delimited-text' or 'nested-object'
        fields: Ordered field names / dotted paths
        records: Flattened records in input order
        structure: Nested-structure view (one entry per discovered path)
        columns: ColumnProfile per field, in field order
        gate_results: Quality gate outcome per field
        quality_threshold: Empty-rate threshold the gate used
    """
    source_name: str
    declared_format: str
    fields: List[str] = field(default_factory=list)
    records: List[Dict[str, Any]] = field(default_factory=list)
    structure: List[FieldStructure] = field(default_factory=list)
    columns: Dict[str, ColumnProfile] = field(default_factory=dict)
    gate_results: Dict[str, bool] = field(default_factory=dict)
    quality_threshold: float = 10.0

    @property
    def record_count(self) -> int:
        return len(self.records)

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def passed_all(self) -> bool:
        """True when every field passes the quality gate."""
        return all(self.gate_results.values())

    @property
    def failed_fields(self) -> List[str]:
        return [name for name in self.fields if not self.gate_results.get(name, False)]

    def preview(self, limit: int = 10) -> List[Dict[str, Any]]:
        """First `limit` records, with every field present (missing -> None)."""
        return [
            {name: record.get(name) for name in self.fields}
            for record in self.records[:limit]
        ]

    def summary_frame(self) -> pd.DataFrame:
        """
        One row per field with the headline statistics.

        Columns: field, type, empty_rate, unique, min, max, mean, gate
        """
        rows = []
        for name in self.fields:
            column = self.columns[name]
            numeric = column.numeric
            rows.append({
                "field": name,
                "type": column.dominant_type.value,
                "empty_rate": column.empty_rate,
                "unique": column.unique_count,
                "min": numeric.min_value if numeric else None,
                "max": numeric.max_value if numeric else None,
                "mean": round(numeric.mean, 2) if numeric else None,
                "gate": GATE_PASS_LABEL if self.gate_results.get(name) else GATE_FAIL_LABEL,
            })
        return pd.DataFrame(
            rows,
            columns=["field", "type", "empty_rate", "unique", "min", "max", "mean", "gate"]
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation for JSON export."""
        return {
            "source_name": self.source_name,
            "declared_format": self.declared_format,
            "record_count": self.record_count,
            "field_count": self.field_count,
            "fields": list(self.fields),
            "quality_threshold": self.quality_threshold,
            "passed_all": self.passed_all,
            "structure": [entry.to_dict() for entry in self.structure],
            "columns": [self.columns[name].to_dict() for name in self.fields],
            "gate_results": {
                name: GATE_PASS_LABEL if passed else GATE_FAIL_LABEL
                for name, passed in self.gate_results.items()
            },
        }

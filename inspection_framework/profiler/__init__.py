"""
Tabular Profiler

Key Components:
- StructureParser: delimited-text / nested-object parsing into records
- TypeInferrer: TypeTag classification of single values
- StatisticsCalculator: per-field ColumnProfile aggregation
- QualityGate: GO/NG decision on a field's empty rate
- TabularProfiler: the parse -> profile -> gate pipeline
"""

from .type_inferrer import TypeTag, TypeInferrer, infer_type
from .profile_result import ColumnProfile, FieldStructure, NumericSummary, LengthSummary, TabularProfile
from .structure_parser import StructureParser, parse_structure, detect_format
from .statistics_calculator import StatisticsCalculator
from .quality_gate import QualityGate, passes_gate
from .engine import TabularProfiler

__all__ = [
    'TypeTag',
    'TypeInferrer',
    'infer_type',
    'ColumnProfile',
    'FieldStructure',
    'NumericSummary',
    'LengthSummary',
    'TabularProfile',
    'StructureParser',
    'parse_structure',
    'detect_format',
    'StatisticsCalculator',
    'QualityGate',
    'passes_gate',
    'TabularProfiler',
]

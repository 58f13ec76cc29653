"""
Tabular profiler entry point.

Runs the full profiling pipeline over decoded text:

    parse -> flatten -> infer types -> aggregate statistics -> quality gate

The profiler performs no file or network access; callers hand it the text.
"""

import time
from typing import Optional

from inspection_framework.core.config import InspectionConfig
from inspection_framework.core.logging_config import get_logger
from inspection_framework.profiler.profile_result import TabularProfile
from inspection_framework.profiler.quality_gate import QualityGate
from inspection_framework.profiler.statistics_calculator import StatisticsCalculator
from inspection_framework.profiler.structure_parser import StructureParser

logger = get_logger(__name__)


class TabularProfiler:
    """
    Profile delimited-text or nested-object artifacts.

    Example:
        >>> profiler = TabularProfiler()
        >>> result = profiler.profile("a,b\\n1,2\\n3,\\n", "delimited-text")
        >>> result.columns["b"].empty_rate
        50.0
        >>> result.gate_results["b"]
        False
    """

    def __init__(self, config: Optional[InspectionConfig] = None):
        """
        Args:
            config: Inspection configuration (defaults used when None)
        """
        self.config = config or InspectionConfig()
        self.parser = StructureParser(delimiter=self.config.delimiter)
        self.calculator = StatisticsCalculator(sample_size=self.config.sample_size)
        self.gate = QualityGate(threshold=self.config.quality_threshold)

    def profile(
        self,
        raw_text: str,
        declared_format: str,
        source_name: str = "input",
        delimiter: Optional[str] = None
    ) -> TabularProfile:
        """
        Profile raw text in the declared format.

        Args:
            raw_text: Decoded artifact content
            declared_format: 'delimited-text' or 'nested-object'
            source_name: Artifact name for reporting
            delimiter: Override of the configured delimiter for this call

        Returns:
            TabularProfile with per-field profiles and gate results

        Raises:
            ParseError: Empty or unparseable input (no partial result)
        """
        start_time = time.time()
        parser = StructureParser(delimiter=delimiter) if delimiter else self.parser
        artifact = parser.parse(raw_text, declared_format, source_name=source_name)

        columns = {}
        for name in artifact.fields:
            values = [record.get(name) for record in artifact.records]
            columns[name] = self.calculator.calculate_statistics(name, values)

        result = TabularProfile(
            source_name=source_name,
            declared_format=artifact.declared_format,
            fields=artifact.fields,
            records=artifact.records,
            structure=artifact.structure,
            columns=columns,
            gate_results=self.gate.evaluate(columns),
            quality_threshold=self.gate.threshold
        )

        logger.info(
            f"Profiled {source_name}: {result.record_count} records, {result.field_count} fields, "
            f"{len(result.failed_fields)} below quality gate ({time.time() - start_time:.3f}s)"
        )
        return result


def profile(raw_text: str, declared_format: str, source_name: str = "input",
            config: Optional[InspectionConfig] = None) -> TabularProfile:
    """Profile raw text with an optional configuration."""
    return TabularProfiler(config).profile(raw_text, declared_format, source_name=source_name)

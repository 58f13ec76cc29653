"""
I/O Analyzer

Entry point of the source I/O extractor:

    scan (pattern library) -> classify direction/format -> deduplicate

Never raises on arbitrary text; unrecognised constructs produce no matches.
"""

import time
from typing import Optional

from inspection_framework.core.config import InspectionConfig
from inspection_framework.core.logging_config import get_logger
from inspection_framework.io_scanner.classifier import classify_direction, guess_format
from inspection_framework.io_scanner.deduplicator import deduplicate
from inspection_framework.io_scanner.models import AnalysisResult, IOUsage, RawMatch
from inspection_framework.io_scanner.patterns import PatternLibrary
from inspection_framework.io_scanner.scanner import MatchScanner, extract_imports

logger = get_logger(__name__)


class IOAnalyzer:
    """
    Enumerates the I/O operations of a Python source text.

    Example:
        >>> result = IOAnalyzer().analyze('with open("in.csv", "r") as f:\\n    pass\\n')
        >>> [(u.path, u.mode, u.direction.value, u.format) for u in result.usages]
        [('in.csv', 'r', 'input', 'CSV')]
    """

    def __init__(self, library: Optional[PatternLibrary] = None):
        """
        Args:
            library: Rules to apply (built-in rules when None)
        """
        self.scanner = MatchScanner(library or PatternLibrary.default())

    @classmethod
    def from_config(cls, config: InspectionConfig) -> "IOAnalyzer":
        """Analyzer using built-in rules plus rules declared in configuration."""
        return cls(PatternLibrary.from_definitions(config.extra_patterns))

    def analyze(self, source_text: str, source_name: Optional[str] = None) -> AnalysisResult:
        """
        Analyse source text.

        Args:
            source_text: Program text
            source_name: Artifact name carried into the result

        Returns:
            AnalysisResult with line-sorted, deduplicated usages and imports
        """
        start_time = time.time()
        source_text = source_text or ""

        raw_matches = self.scanner.scan(source_text)
        usages = deduplicate(self.classify(match) for match in raw_matches)

        result = AnalysisResult(
            usages=usages,
            imports=extract_imports(source_text),
            source_name=source_name
        )
        logger.info(
            f"Analyzed {source_name or 'source'}: {len(raw_matches)} matches, {len(usages)} unique usages "
            f"({time.time() - start_time:.3f}s)"
        )
        return result

    @staticmethod
    def classify(match: RawMatch) -> IOUsage:
        """Attach direction and format to a raw match."""
        extraction = match.extraction
        return IOUsage(
            path=extraction.path,
            mode=extraction.mode,
            line=match.line,
            method=extraction.method,
            format=extraction.format or guess_format(extraction.path),
            raw=match.raw,
            direction=classify_direction(extraction.mode),
            category=match.category,
            encoding=extraction.encoding,
            is_symbolic=extraction.is_symbolic
        )


def analyze(source_text: str, source_name: Optional[str] = None,
            config: Optional[InspectionConfig] = None) -> AnalysisResult:
    """Analyse source text with built-in (and optionally configured) rules."""
    analyzer = IOAnalyzer.from_config(config) if config else IOAnalyzer()
    return analyzer.analyze(source_text, source_name=source_name)

"""
Source I/O Extractor

Key Components:
- PatternLibrary / IOPattern: ordered recognition rules
- MatchScanner: applies every rule to source text
- classify_direction / guess_format: direction and format of a match
- deduplicate: (path, mode, line) deduplication and line ordering
- IOAnalyzer: the scan -> classify -> deduplicate pipeline
- render_spec: spec document rendering
"""

from .models import Direction, PatternCategory, IOUsage, AnalysisResult
from .patterns import IOPattern, PatternLibrary
from .scanner import MatchScanner, extract_imports
from .classifier import classify_direction, guess_format
from .deduplicator import deduplicate
from .analyzer import IOAnalyzer
from .spec_generator import SpecDocumentGenerator, render_spec

__all__ = [
    'Direction',
    'PatternCategory',
    'IOUsage',
    'AnalysisResult',
    'IOPattern',
    'PatternLibrary',
    'MatchScanner',
    'extract_imports',
    'classify_direction',
    'guess_format',
    'deduplicate',
    'IOAnalyzer',
    'SpecDocumentGenerator',
    'render_spec',
]

"""
Inspection Framework

Two independent pipelines over decoded text:

- Tabular profiler: field types, column statistics and a quality gate for
  delimited-text and nested-object (JSON) data
- Source I/O extractor: file, argument and environment operations of
  Python source text, rendered as a spec document
"""

__version__ = "0.1.0"

from .profiler.engine import TabularProfiler, profile
from .io_scanner.analyzer import IOAnalyzer, analyze
from .io_scanner.spec_generator import render_spec

__all__ = [
    '__version__',
    'TabularProfiler',
    'IOAnalyzer',
    'profile',
    'analyze',
    'render_spec',
]

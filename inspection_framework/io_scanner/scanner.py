"""
Match Scanner

Applies every rule of a PatternLibrary to a source text and reports raw
matches with their 1-based line numbers. Also lists imported modules.

Each scan uses re.finditer, which always starts at position 0, so repeated
scans of the same text give the same result regardless of rule order or of
earlier scans.
"""

import re
from typing import List, Optional

from inspection_framework.core.logging_config import get_logger
from inspection_framework.io_scanner.models import RawMatch
from inspection_framework.io_scanner.patterns import PatternLibrary

logger = get_logger(__name__)

IMPORT_PATTERN = re.compile(r'^(?:import|from)\s+(\w+)', re.MULTILINE)


def line_number(text: str, offset: int) -> int:
    """1-based line of a character offset: newlines before it, plus one."""
    return text.count("\n", 0, offset) + 1


def extract_imports(text: str) -> List[str]:
    """
    Top-level module names of import statements, unique, in first-seen order.

    Only statements starting at the beginning of a line are considered.

    >>> extract_imports("import os\\nfrom pathlib import Path\\nimport os.path\\n")
    ['os', 'pathlib']
    """
    return list(dict.fromkeys(IMPORT_PATTERN.findall(text)))


class MatchScanner:
    """
    Runs a PatternLibrary over source text.

    Example:
        >>> scanner = MatchScanner()
        >>> [m.pattern_name for m in scanner.scan('df.to_json("out.json")')]
        ['pandas_to_json']
    """

    def __init__(self, library: Optional[PatternLibrary] = None):
        self.library = library or PatternLibrary.default()

    def scan(self, text: str) -> List[RawMatch]:
        """
        Collect matches of every rule, in rule order then text order.

        Args:
            text: Source text

        Returns:
            Raw matches; the list is not deduplicated or sorted by line
        """
        matches: List[RawMatch] = []
        for pattern in self.library:
            for match in pattern.regex.finditer(text):
                matches.append(RawMatch(
                    pattern_name=pattern.name,
                    category=pattern.category,
                    line=line_number(text, match.start()),
                    raw=match.group(0),
                    extraction=pattern.extract(match)
                ))

        logger.debug(f"Scanned {len(text)} characters with {len(self.library)} rules: {len(matches)} raw matches")
        return matches

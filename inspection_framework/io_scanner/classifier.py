"""
Direction and format classification for detected I/O operations.

Both functions are pure and total: every mode maps to a Direction and every
path maps to a format label.
"""

from typing import Optional

from inspection_framework.io_scanner.models import Direction

ARGUMENT_MODE = "arg"
ENVIRONMENT_MODE = "env"

READ_MARKER = "r"
WRITE_MARKER = "w"
OUTPUT_MARKERS = frozenset("wa+")

# Checked in order; the first substring found in the lower-cased path wins
FORMAT_HINTS = [
    ((".csv",), "CSV"),
    ((".json",), "JSON"),
    ((".xlsx", ".xls"), "Excel"),
    ((".yaml", ".yml"), "YAML"),
    ((".txt",), "Text"),
    ((".pkl", ".pickle"), "Pickle"),
    ((".db", ".sqlite"), "SQLite"),
    ((".xml",), "XML"),
    ((".html",), "HTML"),
    ((".log",), "Log"),
]


def classify_direction(mode: str) -> Direction:
    """
    Map an access mode to a usage direction.

    'arg' and 'env' are checked first. Otherwise a mode holding both 'r' and
    'w' is bidirectional, a mode holding any of 'w', 'a' or '+' is output,
    and anything else is input ('r+' is output, 'x' is input).

    >>> classify_direction("rb")
    <Direction.INPUT: 'input'>
    >>> classify_direction("a")
    <Direction.OUTPUT: 'output'>
    >>> classify_direction("rw")
    <Direction.BIDIRECTIONAL: 'bidirectional'>
    """
    if mode == ARGUMENT_MODE:
        return Direction.ARGUMENT
    if mode == ENVIRONMENT_MODE:
        return Direction.ENVIRONMENT

    markers = set(mode or "")
    if READ_MARKER in markers and WRITE_MARKER in markers:
        return Direction.BIDIRECTIONAL
    if markers & OUTPUT_MARKERS:
        return Direction.OUTPUT
    return Direction.INPUT


def guess_format(path: Optional[str]) -> str:
    """
    Guess a format label from a path or placeholder.

    >>> guess_format("out/report.CSV")
    'CSV'
    >>> guess_format("{path}")
    'File'
    """
    if not path:
        return "Unknown"
    lower = path.lower()
    for suffixes, label in FORMAT_HINTS:
        if any(suffix in lower for suffix in suffixes):
            return label
    return "File"

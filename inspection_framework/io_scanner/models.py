"""
I/O Scanner Data Models

Defines data classes and enums for detected input/output operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class PatternCategory(Enum):
    """Kind of operation a pattern recognises."""
    FILE = "file"
    CSV = "csv"
    JSON = "json"
    EXCEL = "excel"
    PICKLE = "pickle"
    YAML = "yaml"
    DATABASE = "database"
    ARGUMENT = "argument"
    ENVIRONMENT = "environment"


class Direction(Enum):
    """
    Usage direction of a detected operation.

    INPUT: data read by the program
    OUTPUT: data written or appended by the program
    BIDIRECTIONAL: opened for both reading and writing
    ARGUMENT: command-line argument
    ENVIRONMENT: environment variable
    """
    INPUT = "input"
    OUTPUT = "output"
    BIDIRECTIONAL = "bidirectional"
    ARGUMENT = "argument"
    ENVIRONMENT = "environment"

    @property
    def display_name(self) -> str:
        """Human-readable direction name."""
        names = {
            Direction.INPUT: "Input",
            Direction.OUTPUT: "Output",
            Direction.BIDIRECTIONAL: "Read/Write",
            Direction.ARGUMENT: "Argument",
            Direction.ENVIRONMENT: "Environment",
        }
        return names.get(self, self.value)


@dataclass(frozen=True)
class Extraction:
    """
    Structured fields an extractor pulls out of one regex match.

    Attributes:
        path: Literal path, or a symbolic placeholder such as '{path}' or '{from f}'
        mode: Access mode ('r', 'w', 'rb', 'rw', 'arg', 'env', ...)
        method: Originating API label ('open()', 'pd.read_csv()', ...)
        format: Format when statically known from the API, else None
        encoding: Encoding argument when present
        is_symbolic: True when path is a placeholder for a program symbol
    """
    path: str
    mode: str
    method: str
    format: Optional[str] = None
    encoding: str = "default"
    is_symbolic: bool = False


@dataclass
class RawMatch:
    """
    One regex match produced by the scanner, before classification.

    Attributes:
        pattern_name: Name of the originating pattern
        category: Category of the originating pattern
        line: 1-based source line of the match start
        raw: Full matched text
        extraction: Fields pulled out by the pattern's extractor
    """
    pattern_name: str
    category: PatternCategory
    line: int
    raw: str
    extraction: Extraction


@dataclass(frozen=True)
class IOUsage:
    """
    A single detected I/O operation.

    Attributes:
        path: Artifact path or symbolic placeholder
        mode: Access mode
        line: 1-based source line
        method: Originating API label
        format: Inferred format ('CSV', 'JSON', ...)
        raw: Raw matched text
        direction: Usage direction derived from the mode
        category: Category of the pattern that found it
        encoding: Encoding argument, 'default' when absent
        is_symbolic: True when path is a placeholder
    """
    path: str
    mode: str
    line: int
    method: str
    format: str
    raw: str
    direction: Direction
    category: PatternCategory
    encoding: str = "default"
    is_symbolic: bool = False

    @property
    def dedup_key(self):
        """Identity used for deduplication: (path, mode, line)."""
        return (self.path, self.mode, self.line)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "path": self.path,
            "mode": self.mode,
            "line": self.line,
            "method": self.method,
            "format": self.format,
            "raw": self.raw,
            "direction": self.direction.value,
            "category": self.category.value,
            "encoding": self.encoding,
            "is_symbolic": self.is_symbolic,
        }


@dataclass
class AnalysisResult:
    """
    Result of analysing one source text.

    Attributes:
        usages: Deduplicated usages sorted by source line
        imports: Imported top-level module names in first-seen order
        source_name: Name of the analysed artifact, if known
    """
    usages: List[IOUsage] = field(default_factory=list)
    imports: List[str] = field(default_factory=list)
    source_name: Optional[str] = None

    def by_direction(self, direction: Direction) -> List[IOUsage]:
        """Usages with the given direction, in line order."""
        return [usage for usage in self.usages if usage.direction == direction]

    @property
    def inputs(self) -> List[IOUsage]:
        return self.by_direction(Direction.INPUT)

    @property
    def outputs(self) -> List[IOUsage]:
        return self.by_direction(Direction.OUTPUT)

    @property
    def bidirectional(self) -> List[IOUsage]:
        return self.by_direction(Direction.BIDIRECTIONAL)

    @property
    def arguments(self) -> List[IOUsage]:
        return self.by_direction(Direction.ARGUMENT)

    @property
    def environment(self) -> List[IOUsage]:
        return self.by_direction(Direction.ENVIRONMENT)

    @property
    def is_empty(self) -> bool:
        """True when no I/O operation was found."""
        return not self.usages

    def counts(self) -> Dict[str, int]:
        """Number of usages per direction."""
        return {direction.value: len(self.by_direction(direction)) for direction in Direction}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation for JSON export."""
        return {
            "source_name": self.source_name,
            "imports": list(self.imports),
            "counts": self.counts(),
            "usages": [usage.to_dict() for usage in self.usages],
        }

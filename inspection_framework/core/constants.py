"""
Inspection Framework Constants.

This module defines configuration defaults and constants used throughout the
framework. Every default here can be overridden through InspectionConfig.
"""

# ============================================================================
# Configuration Security Limits
# ============================================================================

# Maximum YAML configuration file size (1MB)
MAX_YAML_FILE_SIZE: int = 1 * 1024 * 1024

# Maximum YAML nesting depth
MAX_YAML_NESTING_DEPTH: int = 20

# Maximum number of keys/items in a YAML document
MAX_YAML_KEY_COUNT: int = 10_000

# Maximum length of a single YAML string value
MAX_STRING_LENGTH: int = 1024 * 1024


# ============================================================================
# Profiler Defaults
# ============================================================================

# Empty-rate percentage at or below which a column passes the quality gate
DEFAULT_QUALITY_THRESHOLD: float = 10.0

# Number of non-empty sample values kept per column
DEFAULT_SAMPLE_SIZE: int = 3

# Delimiter for delimited-text input
DEFAULT_DELIMITER: str = ","

# Number of records shown in a data preview
DEFAULT_PREVIEW_ROWS: int = 10

# Decimal places used for the empty rate
EMPTY_RATE_PRECISION: int = 1

# Gate labels
GATE_PASS_LABEL: str = "GO"
GATE_FAIL_LABEL: str = "NG"


# ============================================================================
# Declared Formats
# ============================================================================

FORMAT_DELIMITED: str = "delimited-text"
FORMAT_NESTED: str = "nested-object"

SUPPORTED_FORMATS: list = [FORMAT_DELIMITED, FORMAT_NESTED]

# File extension to declared format
FILE_EXTENSION_MAP: dict = {
    ".csv": FORMAT_DELIMITED,
    ".tsv": FORMAT_DELIMITED,
    ".txt": FORMAT_DELIMITED,
    ".json": FORMAT_NESTED,
}

# Extension-implied delimiters
EXTENSION_DELIMITERS: dict = {
    ".tsv": "\t",
}


# ============================================================================
# I/O Extractor Defaults
# ============================================================================

# Artifact name used when the analysed source has no name
DEFAULT_ARTIFACT_NAME: str = "untitled.py"

# Marker rendered under an empty spec section
EMPTY_SECTION_MARKER: str = "[]"


# ============================================================================
# Logging Constants
# ============================================================================

LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

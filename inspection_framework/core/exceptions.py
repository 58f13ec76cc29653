"""
Inspection Framework Exception Hierarchy.

This module defines the exception hierarchy for the inspection framework,
providing clear categorization of errors and standardized error handling
across the tabular profiler and the source I/O extractor.

Exception Severity Levels:
    - FATAL: Stop all processing immediately (bad configuration)
    - CRITICAL: Stop processing the current artifact (unparseable input)
    - RECOVERABLE: Log error, continue processing
    - WARNING: Log warning, processing continues

The I/O extractor never raises on arbitrary source text; an analysis with
zero findings is a valid result, not an error.
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorSeverity(Enum):
    """
    Classify error severity for handling decisions.

    Attributes:
        FATAL: Unrecoverable error, stop all processing
        CRITICAL: Artifact-level error, stop processing this artifact
        RECOVERABLE: Operation-level error, continue with other work
        WARNING: Non-critical issue, log and continue
    """
    FATAL = "fatal"
    CRITICAL = "critical"
    RECOVERABLE = "recoverable"
    WARNING = "warning"


class InspectionException(Exception):
    """
    Base exception for all inspection framework errors.

    Provides:
    - Severity classification for handling decisions
    - Structured details dictionary for logging/reporting
    - Original exception preservation for debugging
    - Serialization support for JSON/dict output

    Attributes:
        message (str): Human-readable error message
        severity (ErrorSeverity): Error severity level
        details (Dict[str, Any]): Additional context (source name, line, etc.)
        original_exception (Optional[Exception]): Original exception if wrapping

    Example:
        >>> try:
        ...     records = json.loads(text)
        ... except ValueError as e:
        ...     raise InspectionException(
        ...         "Could not decode artifact",
        ...         severity=ErrorSeverity.CRITICAL,
        ...         details={'source': 'orders.json'},
        ...         original_exception=e
        ...     )
    """

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.RECOVERABLE,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        """
        Initialize inspection exception.

        Args:
            message: Human-readable error description
            severity: Error severity level (default: RECOVERABLE)
            details: Additional context dictionary
            original_exception: Original exception if this wraps another error
        """
        super().__init__(message)
        self.message = message
        self.severity = severity
        self.details = details or {}
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize exception to dictionary for logging/reporting.

        Returns:
            Dictionary containing exception details suitable for JSON serialization
        """
        return {
            'type': self.__class__.__name__,
            'message': self.message,
            'severity': self.severity.value,
            'details': self.details,
            'original_error': str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors (Fatal)
# ============================================================================

class ConfigError(InspectionException):
    """
    Configuration file errors (fatal - stop all processing).

    Raised when:
    - Configuration file not found
    - Invalid YAML syntax
    - Invalid configuration structure

    Attributes:
        field (Optional[str]): Specific config field that caused error
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            severity=ErrorSeverity.FATAL,
            details={'field': field} if field else {}
        )
        self.field = field


class YAMLSizeError(ConfigError):
    """
    YAML file too large.

    Raised when a configuration file exceeds the maximum allowed size.
    """

    def __init__(self, message: str, file_size: Optional[int] = None, max_size: Optional[int] = None):
        super().__init__(message)
        self.details.update({
            'file_size': file_size,
            'max_size': max_size
        })


class ConfigValidationError(ConfigError):
    """
    Configuration value is structurally valid YAML but has a bad value.

    Example:
        >>> raise ConfigValidationError(
        ...     "quality_threshold must be between 0 and 100",
        ...     field="profiler.quality_threshold",
        ...     expected="0-100",
        ...     actual="150"
        ... )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None
    ):
        super().__init__(message, field=field)
        self.details.update({
            'expected': expected,
            'actual': actual
        })


class PatternDefinitionError(ConfigValidationError):
    """
    A user-declared I/O pattern could not be built.

    Raised for a missing regex, an uncompilable regex, an unknown category
    or a path group that does not exist in the regex.
    """

    def __init__(self, message: str, pattern_name: Optional[str] = None, original_exception: Optional[Exception] = None):
        super().__init__(message, field="io_scanner.extra_patterns")
        self.details['pattern_name'] = pattern_name
        self.original_exception = original_exception


# ============================================================================
# Parse Errors (Critical - artifact level)
# ============================================================================

class ParseError(InspectionException):
    """
    Tabular input could not be turned into fields and records.

    No partial result accompanies a ParseError: the profiler fails fast and
    atomically on empty or unparseable input.

    Attributes:
        source_name (Optional[str]): Name of the artifact being parsed
        declared_format (Optional[str]): Format the caller declared
    """

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        declared_format: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        details = {}
        if source_name:
            details['source_name'] = source_name
        if declared_format:
            details['declared_format'] = declared_format

        super().__init__(
            message,
            severity=ErrorSeverity.CRITICAL,
            details=details,
            original_exception=original_exception
        )
        self.source_name = source_name
        self.declared_format = declared_format


class EmptyInputError(ParseError):
    """Input text is empty, blank, or holds no records."""
    pass


class MalformedInputError(ParseError):
    """
    Input is present but structurally invalid.

    Covers undecodable nested notation, a root value that is not an object or
    array of objects, and duplicate field names in a delimited header.
    """

    def __init__(
        self,
        message: str,
        source_name: Optional[str] = None,
        declared_format: Optional[str] = None,
        line: Optional[int] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            message,
            source_name=source_name,
            declared_format=declared_format,
            original_exception=original_exception
        )
        self.line = line
        if line is not None:
            self.details['line'] = line


class UnsupportedFormatError(ParseError):
    """
    Declared format is not one of the supported formats.

    Example:
        >>> raise UnsupportedFormatError("xml", ["delimited-text", "nested-object"])
    """

    def __init__(self, declared_format: str, supported_formats: List[str]):
        super().__init__(
            f"Unsupported format '{declared_format}'. "
            f"Supported formats: {', '.join(supported_formats)}",
            declared_format=declared_format
        )
        self.details['supported_formats'] = supported_formats

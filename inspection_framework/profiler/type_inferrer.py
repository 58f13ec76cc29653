"""
Type Inferrer - Heuristic Type Detection for Raw Values.

This module classifies single values into a closed set of semantic types
(TypeTag). Values coming from delimited text are always strings, so the
interesting work happens on text: numeric-looking strings, ISO-date-prefixed
strings and email-shaped strings are recognised by their lexical shape.

Architecture:
    TypeInferrer follows a fixed decision order:
    1. Empty check (None, NaN, blank string)
    2. Direct type checking (bool before number, since bool is an int)
    3. Containers (array / object)
    4. Lexical shape of text (numeric literal, ISO date prefix, email)
    5. Fallback to 'unknown' for anything else

Design Decisions:
    - Array-like values are checked BEFORE pd.isna() to avoid the pandas
      "ambiguous truth value" error on lists and arrays
    - Numeric-looking text is never reclassified as date or email
    - integer-as-text vs float-as-text depends on a '.' in the literal,
      not on the numeric value ("1.0" is float-as-text, "1e3" integer-as-text)
    - detect_type is total: it never raises and always returns a TypeTag

Usage:
    inferrer = TypeInferrer()
    inferrer.detect_type("2024-01-15")   # TypeTag.DATE
    inferrer.detect_type("42")           # TypeTag.INTEGER_TEXT
"""

import math
import re
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd


class TypeTag(Enum):
    """Semantic type assigned to a single value."""
    EMPTY = "empty"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    INTEGER_TEXT = "integer-as-text"
    FLOAT_TEXT = "float-as-text"
    DATE = "date"
    EMAIL = "email"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


# Whole-string numeric literal (after trimming)
NUMERIC_LITERAL_PATTERN = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')

# ISO-like date prefix: 2024-01-15, 2024-01-15T10:00:00Z, 2024-01-15 extra
ISO_DATE_PREFIX_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}')

# Single '@' with a dotted domain
EMAIL_PATTERN = re.compile(r'^[\w.-]+@[\w.-]+\.\w+$', re.ASCII)


def is_empty_value(value: Any) -> bool:
    """
    True for values that count as missing.

    None, NaN/NA scalars and strings that are empty after trimming are empty.
    Containers are never empty values, even when they hold no items.
    """
    if isinstance(value, (list, tuple, dict, np.ndarray)):
        return False
    if isinstance(value, str):
        return value.strip() == ""
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def is_numeric_text(text: str) -> bool:
    """True when the whole trimmed string is a numeric literal."""
    return bool(NUMERIC_LITERAL_PATTERN.match(text.strip()))


class TypeInferrer:
    """
    Deterministic, total type detection for single values.

    Example:
        >>> inferrer = TypeInferrer()
        >>> inferrer.detect_type(42)
        <TypeTag.INTEGER: 'integer'>
        >>> inferrer.detect_type("3.50")
        <TypeTag.FLOAT_TEXT: 'float-as-text'>
        >>> inferrer.detect_type([1, 2, 3])
        <TypeTag.ARRAY: 'array'>
    """

    def detect_type(self, value: Any) -> TypeTag:
        """
        Detect the type of a single value.

        Args:
            value: Raw value from a record (string, number, bool, None, list, dict)

        Returns:
            TypeTag for the value; never raises
        """
        if is_empty_value(value):
            return TypeTag.EMPTY

        if isinstance(value, (bool, np.bool_)):
            return TypeTag.BOOLEAN

        if isinstance(value, (int, float, np.integer, np.floating)):
            return self._number_type(value)

        if isinstance(value, (list, tuple, np.ndarray)):
            return TypeTag.ARRAY

        if isinstance(value, dict):
            return TypeTag.OBJECT

        if isinstance(value, str):
            return self._text_type(value)

        return TypeTag.UNKNOWN

    @staticmethod
    def _number_type(value: Any) -> TypeTag:
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return TypeTag.INTEGER
        return TypeTag.FLOAT

    @staticmethod
    def _text_type(value: str) -> TypeTag:
        text = value.strip()

        # Numeric shape wins over every other text shape
        if is_numeric_text(text):
            return TypeTag.FLOAT_TEXT if "." in text else TypeTag.INTEGER_TEXT

        if ISO_DATE_PREFIX_PATTERN.match(text):
            return TypeTag.DATE

        if EMAIL_PATTERN.match(text):
            return TypeTag.EMAIL

        return TypeTag.STRING


_default_inferrer = TypeInferrer()


def infer_type(value: Any) -> TypeTag:
    """Module-level shortcut for TypeInferrer().detect_type(value)."""
    return _default_inferrer.detect_type(value)

"""
Structure Parser - raw text to fields and records.

Turns decoded artifact text into an ordered field list and a sequence of
records. Two declared formats are supported:

- delimited-text: first line is the header, later lines are split on the
  delimiter and zipped positionally with the header. Quoted delimiters and
  multi-line cells are not supported.
- nested-object: JSON. A root array holds one record per element, a root
  object is a single record. Nested objects become dotted paths; an array is
  a single field whose element type is taken from its first element.

Failures raise ParseError subclasses carrying a human-readable cause; no
partial result is ever returned.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from inspection_framework.core.constants import (
    DEFAULT_DELIMITER,
    EXTENSION_DELIMITERS,
    FILE_EXTENSION_MAP,
    FORMAT_DELIMITED,
    FORMAT_NESTED,
    SUPPORTED_FORMATS,
)
from inspection_framework.core.exceptions import (
    EmptyInputError,
    MalformedInputError,
    UnsupportedFormatError,
)
from inspection_framework.core.logging_config import get_logger
from inspection_framework.profiler.flattener import flatten_record, join_path
from inspection_framework.profiler.profile_result import FieldStructure
from inspection_framework.profiler.type_inferrer import TypeTag, infer_type

logger = get_logger(__name__)


@dataclass
class ParsedArtifact:
    """Fields, flattened records and structure view of one artifact."""
    declared_format: str
    fields: List[str] = field(default_factory=list)
    records: List[Dict[str, Any]] = field(default_factory=list)
    structure: List[FieldStructure] = field(default_factory=list)
    short_row_count: int = 0


def detect_format(file_name: str) -> Tuple[str, Optional[str]]:
    """
    Suggest a declared format (and delimiter) from a file name.

    Returns:
        (declared_format, delimiter) where delimiter is None when the
        extension implies no particular delimiter
    """
    suffix = Path(file_name).suffix.lower()
    return FILE_EXTENSION_MAP.get(suffix, FORMAT_DELIMITED), EXTENSION_DELIMITERS.get(suffix)


def _strip_quotes(token: str) -> str:
    """Trim a cell and drop one pair of surrounding double quotes."""
    token = token.strip()
    if token.startswith('"'):
        token = token[1:]
    if token.endswith('"'):
        token = token[:-1]
    return token


class StructureParser:
    """
    Parse raw text in a declared format.

    Example:
        >>> parser = StructureParser()
        >>> artifact = parser.parse("a,b\\n1,2\\n3,\\n", "delimited-text")
        >>> artifact.fields
        ['a', 'b']
        >>> artifact.records[1]
        {'a': '3', 'b': ''}
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER):
        """
        Args:
            delimiter: Field delimiter for delimited-text input
        """
        self.delimiter = delimiter

    def parse(self, raw_text: str, declared_format: str, source_name: Optional[str] = None) -> ParsedArtifact:
        """
        Parse raw text into a ParsedArtifact.

        Args:
            raw_text: Decoded artifact content
            declared_format: 'delimited-text' or 'nested-object'
            source_name: Artifact name used in error details

        Raises:
            UnsupportedFormatError: Unknown declared format
            EmptyInputError: Blank input or no records
            MalformedInputError: Undecodable or structurally invalid input
        """
        if declared_format not in SUPPORTED_FORMATS:
            raise UnsupportedFormatError(declared_format, SUPPORTED_FORMATS)

        if raw_text is None or not raw_text.strip():
            raise EmptyInputError(
                "Input is empty", source_name=source_name, declared_format=declared_format
            )

        if declared_format == FORMAT_NESTED:
            return self._parse_nested(raw_text, source_name)
        return self._parse_delimited(raw_text, source_name)

    # ------------------------------------------------------------------
    # Delimited text
    # ------------------------------------------------------------------

    def _parse_delimited(self, raw_text: str, source_name: Optional[str]) -> ParsedArtifact:
        lines = raw_text.strip("\r\n").splitlines()
        header = [_strip_quotes(name) for name in lines[0].split(self.delimiter)]

        seen = set()
        for name in header:
            if name in seen:
                raise MalformedInputError(
                    f"Duplicate field name in header: '{name}'",
                    source_name=source_name,
                    declared_format=FORMAT_DELIMITED,
                    line=1
                )
            seen.add(name)

        records = []
        short_rows = 0
        for line in lines[1:]:
            values = [_strip_quotes(value) for value in line.split(self.delimiter)]
            if len(values) < len(header):
                short_rows += 1
            records.append({
                name: values[i] if i < len(values) else None
                for i, name in enumerate(header)
            })

        if short_rows:
            logger.warning(
                f"{short_rows} row(s) in {source_name or 'input'} have fewer values than "
                f"the {len(header)} header fields; missing values are treated as empty"
            )

        structure = [
            FieldStructure(
                path=name,
                type_tag=infer_type(records[0][name]) if records else TypeTag.EMPTY,
                sample=records[0][name] if records else None
            )
            for name in header
        ]

        logger.debug(f"Parsed delimited text: {len(header)} fields, {len(records)} records")
        return ParsedArtifact(
            declared_format=FORMAT_DELIMITED,
            fields=header,
            records=records,
            structure=structure,
            short_row_count=short_rows
        )

    # ------------------------------------------------------------------
    # Nested objects
    # ------------------------------------------------------------------

    def _parse_nested(self, raw_text: str, source_name: Optional[str]) -> ParsedArtifact:
        try:
            document = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise MalformedInputError(
                f"Invalid nested-object notation: {e.msg} (line {e.lineno}, column {e.colno})",
                source_name=source_name,
                declared_format=FORMAT_NESTED,
                line=e.lineno,
                original_exception=e
            )

        if isinstance(document, dict):
            raw_records = [document]
        elif isinstance(document, list):
            raw_records = document
        else:
            raise MalformedInputError(
                f"Root value must be an object or an array of objects, got {type(document).__name__}",
                source_name=source_name,
                declared_format=FORMAT_NESTED
            )

        if not raw_records:
            raise EmptyInputError(
                "Document contains no records", source_name=source_name, declared_format=FORMAT_NESTED
            )

        for index, record in enumerate(raw_records):
            if not isinstance(record, dict):
                raise MalformedInputError(
                    f"Record {index} is {type(record).__name__}, expected an object",
                    source_name=source_name,
                    declared_format=FORMAT_NESTED
                )

        structure: List[FieldStructure] = []
        known_paths = set()
        for record in raw_records:
            for entry in discover_structure(record):
                if entry.path not in known_paths:
                    known_paths.add(entry.path)
                    structure.append(entry)

        fields = [entry.path for entry in structure if not entry.in_array]
        records = [flatten_record(record) for record in raw_records]

        logger.debug(f"Parsed nested document: {len(fields)} fields, {len(records)} records")
        return ParsedArtifact(
            declared_format=FORMAT_NESTED,
            fields=fields,
            records=records,
            structure=structure
        )


def discover_structure(value: Dict[str, Any], prefix: str = "", in_array: bool = False) -> List[FieldStructure]:
    """
    Walk one object and describe every leaf path.

    Nested objects are descended into. Arrays produce one entry typed by
    their first element only; when that element is an object its own paths
    are listed below 'path[]' and flagged as in_array.

    Args:
        value: Object to describe
        prefix: Dotted path of the object
        in_array: True when the object is (inside) an array element

    Returns:
        Structure entries in key order
    """
    entries: List[FieldStructure] = []
    for key, child in value.items():
        path = join_path(prefix, key)
        if isinstance(child, dict) and child:
            entries.extend(discover_structure(child, path, in_array))
        elif isinstance(child, list):
            first = child[0] if child else None
            entries.append(FieldStructure(
                path=path,
                type_tag=TypeTag.ARRAY,
                sample=child,
                is_array=True,
                element_type=infer_type(first) if child else TypeTag.EMPTY,
                in_array=in_array
            ))
            if isinstance(first, dict):
                entries.extend(discover_structure(first, f"{path}[]", in_array=True))
        else:
            entries.append(FieldStructure(
                path=path,
                type_tag=infer_type(child),
                sample=child,
                in_array=in_array
            ))
    return entries


def parse_structure(
    raw_text: str,
    declared_format: str,
    delimiter: str = DEFAULT_DELIMITER,
    source_name: Optional[str] = None
) -> ParsedArtifact:
    """Functional shortcut for StructureParser(delimiter).parse(...)."""
    return StructureParser(delimiter=delimiter).parse(raw_text, declared_format, source_name)

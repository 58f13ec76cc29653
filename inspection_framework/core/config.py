"""Configuration parsing and validation."""

import yaml
import os
from typing import Dict, Any, List, Optional
from pathlib import Path
from inspection_framework.core.exceptions import (
    ConfigError,
    YAMLSizeError,
    ConfigValidationError
)
from inspection_framework.core.constants import (
    MAX_YAML_FILE_SIZE,
    MAX_YAML_NESTING_DEPTH,
    MAX_YAML_KEY_COUNT,
    MAX_STRING_LENGTH,
    DEFAULT_QUALITY_THRESHOLD,
    DEFAULT_SAMPLE_SIZE,
    DEFAULT_DELIMITER,
    DEFAULT_PREVIEW_ROWS,
)


class InspectionConfig:
    """
    Configuration for profiling and I/O extraction runs.

    Example YAML:

        profiler:
          quality_threshold: 5
          sample_size: 3
          delimiter: ";"
          preview_rows: 10
        io_scanner:
          extra_patterns:
            - name: boto3 download
              regex: "download_file\\([^,]+,\\s*['\\"]([^'\\"]+)['\\"]"
              category: file
              mode: r
              method: s3.download_file()
    """

    MAX_YAML_FILE_SIZE = MAX_YAML_FILE_SIZE
    MAX_YAML_NESTING_DEPTH = MAX_YAML_NESTING_DEPTH
    MAX_YAML_KEYS = MAX_YAML_KEY_COUNT

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None):
        """
        Initialize from configuration dictionary.

        Args:
            config_dict: Configuration dictionary (None for all defaults)
        """
        self.raw_config = config_dict or {}
        self._parse_config()

    @classmethod
    def from_yaml(cls, config_path: str) -> "InspectionConfig":
        """
        Load configuration from YAML file with structural limits.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            InspectionConfig instance

        Raises:
            ConfigError: If file not found or invalid
            YAMLSizeError: If file exceeds size limit
            ConfigValidationError: If YAML structure is too complex or values are invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        file_size = os.path.getsize(config_file)
        if file_size > cls.MAX_YAML_FILE_SIZE:
            raise YAMLSizeError(
                f"Configuration file too large: {file_size:,} bytes. "
                f"Maximum allowed: {cls.MAX_YAML_FILE_SIZE:,} bytes",
                file_size=file_size,
                max_size=cls.MAX_YAML_FILE_SIZE
            )

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML file: {str(e)}")
        except UnicodeDecodeError as e:
            raise ConfigError(f"Invalid file encoding (expected UTF-8): {str(e)}")

        if config_dict is not None:
            if not isinstance(config_dict, dict):
                raise ConfigError("Configuration root must be a mapping")
            cls._validate_yaml_structure(config_dict)

        return cls(config_dict)

    @classmethod
    def _validate_yaml_structure(cls, obj: Any, current_depth: int = 0, total_keys: List[int] = None) -> None:
        """
        Reject YAML documents that are too deep, too wide or hold huge strings.

        Args:
            obj: Object to validate (dict, list, or primitive)
            current_depth: Current nesting depth
            total_keys: Mutable list with single element tracking total key count

        Raises:
            ConfigValidationError: If structure is too complex
        """
        if total_keys is None:
            total_keys = [0]

        if current_depth > cls.MAX_YAML_NESTING_DEPTH:
            raise ConfigValidationError(
                f"YAML nesting depth exceeds maximum of {cls.MAX_YAML_NESTING_DEPTH} levels."
            )

        if isinstance(obj, dict):
            total_keys[0] += len(obj)
            if total_keys[0] > cls.MAX_YAML_KEYS:
                raise ConfigValidationError(
                    f"YAML structure contains more than {cls.MAX_YAML_KEYS:,} keys/items."
                )
            for key, value in obj.items():
                if isinstance(key, str) and len(key) > 1000:
                    raise ConfigValidationError(
                        f"YAML key exceeds maximum length of 1000 characters: '{key[:50]}...'"
                    )
                cls._validate_yaml_structure(value, current_depth + 1, total_keys)

        elif isinstance(obj, list):
            total_keys[0] += len(obj)
            if total_keys[0] > cls.MAX_YAML_KEYS:
                raise ConfigValidationError(
                    f"YAML structure contains more than {cls.MAX_YAML_KEYS:,} keys/items."
                )
            for item in obj:
                cls._validate_yaml_structure(item, current_depth + 1, total_keys)

        elif isinstance(obj, str):
            if len(obj) > MAX_STRING_LENGTH:
                raise ConfigValidationError(
                    f"YAML contains string exceeding maximum length ({MAX_STRING_LENGTH:,} bytes): '{obj[:50]}...'"
                )

    def _parse_config(self) -> None:
        """Parse and validate configuration."""
        profiler = self._section("profiler")

        self.quality_threshold: float = self._parse_number(
            profiler.get("quality_threshold", DEFAULT_QUALITY_THRESHOLD),
            "profiler.quality_threshold", minimum=0, maximum=100
        )
        self.sample_size: int = int(self._parse_number(
            profiler.get("sample_size", DEFAULT_SAMPLE_SIZE),
            "profiler.sample_size", minimum=0, integer=True
        ))
        self.preview_rows: int = int(self._parse_number(
            profiler.get("preview_rows", DEFAULT_PREVIEW_ROWS),
            "profiler.preview_rows", minimum=0, integer=True
        ))

        delimiter = profiler.get("delimiter", DEFAULT_DELIMITER)
        if not isinstance(delimiter, str) or not delimiter:
            raise ConfigValidationError(
                "Delimiter must be a non-empty string",
                field="profiler.delimiter",
                expected="non-empty string",
                actual=repr(delimiter)
            )
        self.delimiter: str = delimiter

        io_scanner = self._section("io_scanner")
        extra_patterns = io_scanner.get("extra_patterns", []) or []
        if not isinstance(extra_patterns, list) or not all(isinstance(p, dict) for p in extra_patterns):
            raise ConfigValidationError(
                "extra_patterns must be a list of mappings",
                field="io_scanner.extra_patterns",
                expected="list of mappings",
                actual=type(extra_patterns).__name__
            )
        self.extra_patterns: List[Dict[str, Any]] = extra_patterns

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.raw_config.get(name, {}) or {}
        if not isinstance(section, dict):
            raise ConfigValidationError(
                f"Configuration section '{name}' must be a mapping",
                field=name,
                expected="mapping",
                actual=type(section).__name__
            )
        return section

    @staticmethod
    def _parse_number(
        value: Any,
        field: str,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        integer: bool = False
    ) -> float:
        """Validate a numeric setting and return it."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigValidationError(
                f"'{field}' must be a number",
                field=field,
                expected="integer" if integer else "number",
                actual=repr(value)
            )
        if integer and int(value) != value:
            raise ConfigValidationError(
                f"'{field}' must be a whole number",
                field=field,
                expected="integer",
                actual=repr(value)
            )
        if (minimum is not None and value < minimum) or (maximum is not None and value > maximum):
            bounds = f"{minimum if minimum is not None else '-inf'}..{maximum if maximum is not None else 'inf'}"
            raise ConfigValidationError(
                f"'{field}' out of range: {value} (allowed {bounds})",
                field=field,
                expected=bounds,
                actual=repr(value)
            )
        return float(value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "profiler": {
                "quality_threshold": self.quality_threshold,
                "sample_size": self.sample_size,
                "delimiter": self.delimiter,
                "preview_rows": self.preview_rows,
            },
            "io_scanner": {
                "extra_patterns": [p.get("name", "unnamed") for p in self.extra_patterns],
            },
        }

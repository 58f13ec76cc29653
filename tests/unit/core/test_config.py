"""
Unit tests for InspectionConfig.

Covers defaults, value validation and YAML loading limits.
"""

import pytest
import yaml

from inspection_framework.core.config import InspectionConfig
from inspection_framework.core.exceptions import (
    ConfigError,
    ConfigValidationError,
    YAMLSizeError,
)


class TestDefaults:
    """Configuration without any settings."""

    def test_empty_config_uses_defaults(self):
        config = InspectionConfig()

        assert config.quality_threshold == 10.0
        assert config.sample_size == 3
        assert config.preview_rows == 10
        assert config.delimiter == ","
        assert config.extra_patterns == []

    def test_null_sections_use_defaults(self):
        """A YAML section left blank parses as None and is treated as empty."""
        config = InspectionConfig({"profiler": None, "io_scanner": None})

        assert config.sample_size == 3
        assert config.extra_patterns == []

    def test_to_dict(self):
        config = InspectionConfig({
            "profiler": {"quality_threshold": 5, "delimiter": ";"},
            "io_scanner": {"extra_patterns": [{"name": "s3", "regex": "x"}]},
        })

        result = config.to_dict()

        assert result["profiler"]["quality_threshold"] == 5.0
        assert result["profiler"]["delimiter"] == ";"
        assert result["io_scanner"]["extra_patterns"] == ["s3"]


class TestValidation:
    """Invalid values raise ConfigValidationError naming the field."""

    @pytest.mark.parametrize("threshold", [-1, 100.5, "10", True])
    def test_bad_threshold(self, threshold):
        with pytest.raises(ConfigValidationError) as exc_info:
            InspectionConfig({"profiler": {"quality_threshold": threshold}})

        assert exc_info.value.field == "profiler.quality_threshold"

    def test_threshold_bounds_inclusive(self):
        assert InspectionConfig({"profiler": {"quality_threshold": 0}}).quality_threshold == 0
        assert InspectionConfig({"profiler": {"quality_threshold": 100}}).quality_threshold == 100

    @pytest.mark.parametrize("sample_size", [-1, 2.5])
    def test_bad_sample_size(self, sample_size):
        with pytest.raises(ConfigValidationError) as exc_info:
            InspectionConfig({"profiler": {"sample_size": sample_size}})

        assert exc_info.value.field == "profiler.sample_size"

    def test_zero_sample_size_allowed(self):
        assert InspectionConfig({"profiler": {"sample_size": 0}}).sample_size == 0

    def test_empty_delimiter(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            InspectionConfig({"profiler": {"delimiter": ""}})

        assert exc_info.value.field == "profiler.delimiter"

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigValidationError):
            InspectionConfig({"profiler": ["quality_threshold"]})

    def test_extra_patterns_must_be_list_of_mappings(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            InspectionConfig({"io_scanner": {"extra_patterns": ["open"]}})

        assert exc_info.value.field == "io_scanner.extra_patterns"


class TestFromYaml:
    """Loading configuration files."""

    def test_load_yaml(self, tmp_path):
        config_file = tmp_path / "inspect.yaml"
        config_file.write_text(yaml.safe_dump({
            "profiler": {"quality_threshold": 25, "sample_size": 5},
            "io_scanner": {
                "extra_patterns": [
                    {"name": "s3_download", "regex": r"download_file\(([^)]+)\)", "mode": "r"}
                ]
            },
        }))

        config = InspectionConfig.from_yaml(str(config_file))

        assert config.quality_threshold == 25.0
        assert config.sample_size == 5
        assert config.extra_patterns[0]["name"] == "s3_download"

    def test_empty_yaml_file_gives_defaults(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        config = InspectionConfig.from_yaml(str(config_file))

        assert config.quality_threshold == 10.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            InspectionConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("profiler: [unclosed")

        with pytest.raises(ConfigError, match="Failed to parse YAML"):
            InspectionConfig.from_yaml(str(config_file))

    def test_root_must_be_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            InspectionConfig.from_yaml(str(config_file))

    def test_file_too_large(self, tmp_path, monkeypatch):
        config_file = tmp_path / "big.yaml"
        config_file.write_text("profiler:\n  sample_size: 3\n")
        monkeypatch.setattr(InspectionConfig, "MAX_YAML_FILE_SIZE", 10)

        with pytest.raises(YAMLSizeError):
            InspectionConfig.from_yaml(str(config_file))

    def test_nesting_too_deep(self, tmp_path, monkeypatch):
        config_file = tmp_path / "deep.yaml"
        config_file.write_text("a:\n  b:\n    c:\n      d: 1\n")
        monkeypatch.setattr(InspectionConfig, "MAX_YAML_NESTING_DEPTH", 2)

        with pytest.raises(ConfigValidationError, match="nesting depth"):
            InspectionConfig.from_yaml(str(config_file))

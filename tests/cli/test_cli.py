"""
Integration tests for the scope-inspect command line.

Runs the click commands in-process with CliRunner against small files in
a temporary directory.
"""

import json

import pandas as pd
import pytest
import yaml
from click.testing import CliRunner

from inspection_framework import __version__
from inspection_framework.cli import cli


pytestmark = pytest.mark.integration


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("name,age,email\nAnn,30,ann@example.com\nBo,,\nCy,41,cy@example.com\n")
    return path


@pytest.fixture
def json_file(tmp_path):
    path = tmp_path / "orders.json"
    path.write_text(json.dumps([
        {"id": 1, "items": [{"sku": "X1"}], "customer": {"name": "Ann"}},
        {"id": 2, "items": [], "customer": {"name": "Bo"}},
    ]))
    return path


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "etl.py"
    path.write_text(
        "import pandas as pd\n"
        "import os\n"
        'df = pd.read_csv("in.csv")\n'
        'df.to_json("out.json")\n'
        'home = os.getenv("HOME")\n'
    )
    return path


class TestProfileCommand:
    """scope-inspect profile"""

    def test_profile_csv(self, runner, csv_file):
        result = runner.invoke(cli, ["profile", str(csv_file)])

        assert result.exit_code == 0
        assert "Profile: people.csv" in result.output
        assert "integer-as-text" in result.output
        assert "NG" in result.output

    def test_fail_on_gate(self, runner, csv_file):
        result = runner.invoke(cli, ["profile", str(csv_file), "--fail-on-gate"])

        assert result.exit_code == 1
        assert "Quality gate failed for: age, email" in result.output

    def test_threshold_override(self, runner, csv_file):
        result = runner.invoke(cli, ["profile", str(csv_file), "-t", "50", "--fail-on-gate"])

        assert result.exit_code == 0

    def test_json_output(self, runner, csv_file, tmp_path):
        output = tmp_path / "profile.json"

        result = runner.invoke(cli, ["profile", str(csv_file), "-j", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data["fields"] == ["name", "age", "email"]
        assert data["gate_results"] == {"name": "GO", "age": "NG", "email": "NG"}

    def test_csv_output(self, runner, csv_file, tmp_path):
        output = tmp_path / "summary.csv"

        result = runner.invoke(cli, ["profile", str(csv_file), "--csv-output", str(output), "--no-preview"])

        assert result.exit_code == 0
        frame = pd.read_csv(output)
        assert frame["field"].tolist() == ["name", "age", "email"]
        assert frame.loc[1, "empty_rate"] == pytest.approx(33.3)

    def test_profile_json_shows_structure(self, runner, json_file):
        result = runner.invoke(cli, ["profile", str(json_file)])

        assert result.exit_code == 0
        assert "Structure" in result.output
        assert "items[].sku" in result.output
        assert "customer.name" in result.output

    def test_tab_delimiter_option(self, runner, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("a\tb\n1\t2\n")

        result = runner.invoke(cli, ["profile", str(path), "-d", "\\t", "-j", str(tmp_path / "out.json")])

        assert result.exit_code == 0
        assert json.loads((tmp_path / "out.json").read_text())["fields"] == ["a", "b"]

    def test_empty_file(self, runner, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("")

        result = runner.invoke(cli, ["profile", str(path)])

        assert result.exit_code == 1
        assert "Could not parse" in result.output

    def test_malformed_json(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        result = runner.invoke(cli, ["profile", str(path)])

        assert result.exit_code == 1

    def test_invalid_config(self, runner, csv_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text(yaml.safe_dump({"profiler": {"quality_threshold": 500}}))

        result = runner.invoke(cli, ["profile", str(csv_file), "-c", str(config)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["profile", str(tmp_path / "nope.csv")])

        assert result.exit_code == 2


class TestAnalyzeCommand:
    """scope-inspect analyze"""

    def test_summary_table(self, runner, source_file):
        result = runner.invoke(cli, ["analyze", str(source_file)])

        assert result.exit_code == 0
        assert "I/O Analysis: etl.py" in result.output
        assert "in.csv" in result.output
        assert "out.json" in result.output
        assert "$HOME" in result.output

    def test_show_spec(self, runner, source_file):
        result = runner.invoke(cli, ["analyze", str(source_file), "--show-spec", "-n", "job.py"])

        assert result.exit_code == 0
        assert "name:\n  job.py\n" in result.output
        assert "  - file: in.csv\n    format: CSV\n" in result.output

    def test_spec_and_json_output(self, runner, source_file, tmp_path):
        spec_path = tmp_path / "etl.spec"
        json_path = tmp_path / "etl.json"

        result = runner.invoke(cli, ["analyze", str(source_file), "-s", str(spec_path), "-j", str(json_path)])

        assert result.exit_code == 0
        spec_text = spec_path.read_text()
        assert spec_text.startswith("# I/O specification")
        assert "name:\n  etl.py\n" in spec_text
        data = json.loads(json_path.read_text())
        assert data["imports"] == ["pandas", "os"]
        assert data["counts"]["environment"] == 1

    def test_no_operations(self, runner, tmp_path):
        path = tmp_path / "hello.py"
        path.write_text("print('hello')\n")

        result = runner.invoke(cli, ["analyze", str(path)])

        assert result.exit_code == 0
        assert "No I/O operations detected" in result.output

    def test_config_patterns(self, runner, tmp_path):
        path = tmp_path / "sync.py"
        path.write_text('client.fetch_blob("raw/events.json")\n')
        config = tmp_path / "config.yaml"
        config.write_text(yaml.safe_dump({
            "io_scanner": {"extra_patterns": [
                {"name": "blob_fetch", "regex": "fetch_blob\\(\"([^\"]+)\"", "method": "fetch_blob()"}
            ]}
        }))

        result = runner.invoke(cli, ["analyze", str(path), "-c", str(config), "--show-spec"])

        assert result.exit_code == 0
        assert "  - file: raw/events.json\n    format: JSON\n    method: fetch_blob()\n" in result.output

    def test_invalid_pattern_config(self, runner, source_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text(yaml.safe_dump({"io_scanner": {"extra_patterns": [{"name": "broken", "regex": "("}]}}))

        result = runner.invoke(cli, ["analyze", str(source_file), "-c", str(config)])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestVersion:

    def test_version_command(self, runner):
        result = runner.invoke(cli, ["version"])

        assert result.exit_code == 0
        assert f"Scope Inspect v{__version__}" in result.output

    def test_version_option(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

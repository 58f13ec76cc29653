"""
Command-line interface for the inspection framework.

Provides commands for:
- Profiling delimited-text and JSON data files
- Extracting the I/O operations of Python source files
"""

import sys
import time
from pathlib import Path

import click

from inspection_framework import __version__
from inspection_framework.core.config import InspectionConfig
from inspection_framework.core.constants import SUPPORTED_FORMATS, FORMAT_NESTED
from inspection_framework.core.exceptions import ConfigError, ParseError
from inspection_framework.core.logging_config import setup_logging, get_logger
from inspection_framework.core.pretty_output import PrettyOutput as po

logger = get_logger(__name__)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR']


def read_text(file_path: str) -> str:
    """
    Read a file as text.

    Tries UTF-8 (with and without BOM) first, then cp1252 and latin-1.
    """
    raw = Path(file_path).read_bytes()
    for encoding in ['utf-8-sig', 'cp1252']:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    # latin-1 decodes any byte sequence
    return raw.decode('latin-1')


def load_config(config_path):
    """InspectionConfig from a YAML file, or defaults when no path is given."""
    if config_path:
        return InspectionConfig.from_yaml(config_path)
    return InspectionConfig()


def _display(value, width=24):
    text = "" if value is None else str(value)
    return text if len(text) <= width else text[:width - 3] + "..."


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    Scope Inspect - shape and quality profiles for data and source files.

    Profiles delimited-text and JSON data (types, statistics, quality gate)
    and lists the file, argument and environment I/O of Python programs.
    """
    pass


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--format', '-f', 'declared_format', type=click.Choice(SUPPORTED_FORMATS),
              default=None, help='Declared format (default: detected from the file extension)')
@click.option('--delimiter', '-d', default=None, help='Column delimiter (overrides config). Use "\\t" for tab.')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file')
@click.option('--threshold', '-t', type=float, default=None,
              help='Quality gate empty-rate threshold in percent (overrides config)')
@click.option('--json-output', '-j', help='Path for JSON profile output')
@click.option('--csv-output', help='Path for CSV field summary output')
@click.option('--preview/--no-preview', default=True, help='Show the first records of the file')
@click.option('--fail-on-gate', is_flag=True, help='Exit with status 1 when any field fails the quality gate')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default='WARNING', help='Logging level (default: WARNING)')
@click.option('--log-file', type=click.Path(), help='Optional log file path')
def profile(file_path, declared_format, delimiter, config_path, threshold, json_output, csv_output,
            preview, fail_on_gate, log_level, log_file):
    """
    Profile a data file: field types, statistics and quality gate.

    FILE_PATH: Delimited-text (.csv, .tsv, .txt) or JSON (.json) file

    Examples:

    \b
    # Profile a CSV file
    scope-inspect profile data/customers.csv

    \b
    # Semicolon-separated file, stricter gate, JSON output
    scope-inspect profile data.txt -d ";" -t 5 -j profile.json
    """
    from inspection_framework.profiler.engine import TabularProfiler
    from inspection_framework.profiler.structure_parser import detect_format

    setup_logging(level=log_level, log_file=log_file)

    try:
        config = load_config(config_path)
        if threshold is not None:
            config = InspectionConfig({
                **config.raw_config,
                "profiler": {**(config.raw_config.get("profiler") or {}), "quality_threshold": threshold}
            })

        detected_format, detected_delimiter = detect_format(file_path)
        declared_format = declared_format or detected_format
        if delimiter:
            delimiter = delimiter.replace('\\t', '\t')
        else:
            delimiter = detected_delimiter

        start_time = time.time()
        result = TabularProfiler(config).profile(
            read_text(file_path), declared_format, source_name=Path(file_path).name, delimiter=delimiter
        )
        duration = time.time() - start_time

        po.header(f"Profile: {result.source_name}")
        po.key_value("Format", result.declared_format)
        po.key_value("Records", f"{result.record_count:,}")
        po.key_value("Fields", result.field_count)
        po.key_value("Quality threshold", f"{result.quality_threshold:g}% empty")

        if result.declared_format == FORMAT_NESTED and result.structure:
            po.subsection("Structure")
            po.compact_table(
                ["Path", "Type", "Sample"],
                [
                    (entry.path, entry.type_tag.value, _display(entry.sample))
                    for entry in result.structure
                ]
            )

        po.subsection("Fields")
        rows = []
        for name in result.fields:
            column = result.columns[name]
            numeric = column.numeric
            rows.append((
                _display(name),
                column.dominant_type.value,
                f"{column.empty_rate:.1f}%",
                column.unique_count,
                _display(numeric.min_value if numeric else "", 12),
                _display(numeric.max_value if numeric else "", 12),
                f"{numeric.mean:.2f}" if numeric else "",
                po.gate_badge(result.gate_results[name]),
            ))
        po.compact_table(["Field", "Type", "Empty", "Unique", "Min", "Max", "Mean", "Gate"], rows)

        if preview and result.records:
            po.subsection(f"Preview (first {min(config.preview_rows, result.record_count)} records)")
            records = result.preview(config.preview_rows)
            po.compact_table(
                [_display(name, 16) for name in result.fields],
                [tuple(_display(record[name], 16) for name in result.fields) for record in records]
            )

        po.profile_summary(result.record_count, result.field_count, len(result.failed_fields), duration)

        if json_output or csv_output:
            po.blank_line()
            po.subsection("Output Files")
        if json_output:
            from inspection_framework.utils.json_utils import safe_json_dump
            with open(json_output, 'w', encoding='utf-8') as f:
                safe_json_dump(result.to_dict(), f)
            po.output_file("JSON", json_output)
        if csv_output:
            result.summary_frame().to_csv(csv_output, index=False)
            po.output_file("CSV", csv_output)

        po.blank_line()
        if fail_on_gate and not result.passed_all:
            po.error(f"Quality gate failed for: {', '.join(result.failed_fields)}")
            sys.exit(1)
        sys.exit(0)

    except ConfigError as e:
        po.error(f"Configuration error: {e.message}")
        sys.exit(1)

    except ParseError as e:
        po.error(f"Could not parse {file_path}:")
        click.echo(f"   {e.message}", err=True)
        if e.declared_format != FORMAT_NESTED and not delimiter:
            po.info("Tip: Try specifying the delimiter with -d option")
        sys.exit(1)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML configuration file with extra I/O patterns')
@click.option('--name', '-n', 'artifact_name', default=None,
              help='Artifact name shown in the spec (default: the file name)')
@click.option('--spec-output', '-s', help='Path for the generated spec document')
@click.option('--json-output', '-j', help='Path for JSON analysis output')
@click.option('--show-spec', is_flag=True, help='Print the spec document after the summary')
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default='WARNING', help='Logging level (default: WARNING)')
@click.option('--log-file', type=click.Path(), help='Optional log file path')
def analyze(file_path, config_path, artifact_name, spec_output, json_output, show_spec, log_level, log_file):
    """
    List the inputs, outputs, arguments and environment of a Python file.

    FILE_PATH: Python source file

    Examples:

    \b
    # Summary table
    scope-inspect analyze etl/load_orders.py

    \b
    # Write the spec document
    scope-inspect analyze etl/load_orders.py -s load_orders.spec
    """
    from inspection_framework.io_scanner.analyzer import IOAnalyzer
    from inspection_framework.io_scanner.spec_generator import render_spec

    setup_logging(level=log_level, log_file=log_file)

    try:
        config = load_config(config_path)
        analyzer = IOAnalyzer.from_config(config)
    except ConfigError as e:
        po.error(f"Configuration error: {e.message}")
        sys.exit(1)

    source_name = Path(file_path).name
    result = analyzer.analyze(read_text(file_path), source_name=source_name)
    spec_text = render_spec(result, artifact_name or source_name)

    po.header(f"I/O Analysis: {source_name}")
    if result.imports:
        po.key_value("Imports", ", ".join(result.imports))

    if result.is_empty:
        po.warning("No I/O operations detected")
    else:
        po.subsection("Operations")
        po.compact_table(
            ["Line", "Direction", "Path", "Format", "Method"],
            [
                (usage.line, usage.direction.display_name, _display(usage.path, 40), usage.format, usage.method)
                for usage in result.usages
            ]
        )
    po.analysis_summary(result.counts(), len(result.imports))

    if spec_output or json_output:
        po.blank_line()
        po.subsection("Output Files")
    if spec_output:
        with open(spec_output, 'w', encoding='utf-8') as f:
            f.write(spec_text)
        po.output_file("Spec", spec_output)
    if json_output:
        from inspection_framework.utils.json_utils import safe_json_dump
        with open(json_output, 'w', encoding='utf-8') as f:
            safe_json_dump(result.to_dict(), f)
        po.output_file("JSON", json_output)

    if show_spec:
        po.blank_line()
        click.echo(spec_text, nl=False)


@cli.command()
def version():
    """Display version information."""
    click.echo(f"Scope Inspect v{__version__}")
    click.echo("Data profiling and source I/O extraction")


if __name__ == '__main__':
    cli()

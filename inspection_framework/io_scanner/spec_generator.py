"""
Spec Document Generator

Renders an AnalysisResult as a line-oriented, indentation-structured spec:

    # I/O specification (auto-generated)
    # Generated by scope-inspect
    name:
      etl.py
    imports:
      - pandas
    inputs:
      - file: in.csv
        format: CSV
        method: pd.read_csv()
    outputs:
      []
    ...

Every section is always present; an empty section shows the '[]' marker.
Rendering only; no classification happens here.
"""

from typing import List, Optional

from inspection_framework.core.constants import DEFAULT_ARTIFACT_NAME, EMPTY_SECTION_MARKER
from inspection_framework.io_scanner.models import AnalysisResult, IOUsage

INDENT = "  "

HEADER_LINES = [
    "# I/O specification (auto-generated)",
    "# Generated by scope-inspect",
]


class SpecDocumentGenerator:
    """Render AnalysisResult objects as spec documents."""

    def generate(self, result: AnalysisResult, artifact_name: Optional[str] = None) -> str:
        """
        Render the spec document.

        Args:
            result: Analysis result to render
            artifact_name: Name shown under 'name:' (default: result.source_name,
                then 'untitled.py')

        Returns:
            Spec text ending with a newline
        """
        name = artifact_name or result.source_name or DEFAULT_ARTIFACT_NAME

        lines: List[str] = list(HEADER_LINES)
        lines.append("name:")
        lines.append(f"{INDENT}{name}")

        lines.append("imports:")
        if result.imports:
            lines.extend(f"{INDENT}- {module}" for module in result.imports)
        else:
            lines.append(f"{INDENT}{EMPTY_SECTION_MARKER}")

        sections = [
            ("inputs", result.inputs),
            ("outputs", result.outputs),
            ("bidirectional", result.bidirectional),
            ("arguments", result.arguments),
            ("environment", result.environment),
        ]
        for label, usages in sections:
            lines.append(f"{label}:")
            lines.extend(self._render_usages(usages))

        return "\n".join(lines) + "\n"

    @staticmethod
    def _render_usages(usages: List[IOUsage]) -> List[str]:
        if not usages:
            return [f"{INDENT}{EMPTY_SECTION_MARKER}"]
        lines = []
        for usage in usages:
            lines.append(f"{INDENT}- file: {usage.path}")
            lines.append(f"{INDENT}  format: {usage.format}")
            lines.append(f"{INDENT}  method: {usage.method}")
        return lines


def render_spec(result: AnalysisResult, artifact_name: Optional[str] = None) -> str:
    """Functional shortcut for SpecDocumentGenerator().generate(...)."""
    return SpecDocumentGenerator().generate(result, artifact_name)

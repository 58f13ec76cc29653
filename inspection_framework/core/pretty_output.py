"""
Pretty output formatting for the CLI.

Terminal rendering of tabular profiles and I/O analyses: headers, status
messages, GO/NG badges and compact tables.
"""

import os

from colorama import Fore, Style, Back

from inspection_framework.core.constants import GATE_PASS_LABEL, GATE_FAIL_LABEL


class PrettyOutput:
    """
    Terminal formatter shared by the profile and analyze commands.

    All methods are static; callers usually import the class as ``po``.
    """

    # Color scheme
    PRIMARY = Fore.CYAN
    SUCCESS = Fore.GREEN
    WARNING = Fore.YELLOW
    ERROR = Fore.RED
    INFO = Fore.BLUE
    HEADER = Fore.WHITE + Style.BRIGHT
    DIM = Style.DIM
    RESET = Style.RESET_ALL

    # Symbols
    CHECK = "✓"
    CROSS = "✗"
    ARROW = "→"
    WARN = "⚠"
    INFO_SYMBOL = "ℹ"

    @staticmethod
    def get_terminal_width():
        """Get terminal width, default to 80 if cannot determine."""
        try:
            return os.get_terminal_size().columns
        except OSError:
            return 80

    @staticmethod
    def header(text, width=None):
        """
        Print a major header with box drawing.

        Args:
            text: Header text
            width: Box width (default: terminal width, at most 80)
        """
        if width is None:
            width = min(PrettyOutput.get_terminal_width(), 80)

        padding = (width - len(text) - 2) // 2
        line = "═" * width

        print(f"\n{PrettyOutput.PRIMARY}╔{line}╗")
        print(f"║{' ' * padding}{text}{' ' * (width - len(text) - padding)}║")
        print(f"╚{line}╝{PrettyOutput.RESET}\n")

    @staticmethod
    def subsection(text):
        """Print a subsection header."""
        print(f"\n{PrettyOutput.HEADER}{text}:{PrettyOutput.RESET}")

    @staticmethod
    def error(message, indent=0):
        """Print an error message with cross."""
        spaces = " " * indent
        print(f"{spaces}{PrettyOutput.ERROR}{PrettyOutput.CROSS}{PrettyOutput.RESET} {message}")

    @staticmethod
    def warning(message, indent=0):
        spaces = " " * indent
        print(f"{spaces}{PrettyOutput.WARNING}{PrettyOutput.WARN}{PrettyOutput.RESET} {message}")

    @staticmethod
    def info(message, indent=0):
        spaces = " " * indent
        print(f"{spaces}{PrettyOutput.INFO}{PrettyOutput.INFO_SYMBOL}{PrettyOutput.RESET} {message}")

    @staticmethod
    def key_value(key, value, indent=0, value_color=None):
        """
        Print a key-value pair.

        Args:
            key: Key text
            value: Value text
            indent: Indentation level
            value_color: Optional color for value
        """
        spaces = " " * indent
        if value_color:
            print(f"{spaces}{PrettyOutput.DIM}{key}:{PrettyOutput.RESET} {value_color}{value}{PrettyOutput.RESET}")
        else:
            print(f"{spaces}{PrettyOutput.DIM}{key}:{PrettyOutput.RESET} {value}")

    @staticmethod
    def status_badge(status_text, passed=True):
        """
        Return a colored status badge.

        Args:
            status_text: Badge text
            passed: True for success style, False for error style
        """
        bg = Back.GREEN if passed else Back.RED
        return f"{bg}{Fore.BLACK} {status_text} {PrettyOutput.RESET}"

    @staticmethod
    def gate_badge(passed):
        """GO / NG badge for a quality gate outcome."""
        return PrettyOutput.status_badge(GATE_PASS_LABEL if passed else GATE_FAIL_LABEL, passed)

    @staticmethod
    def output_file(label, path, indent=2):
        """
        Print an output file path.

        Args:
            label: File type label (e.g., "JSON", "CSV")
            path: File path
            indent: Indentation spaces
        """
        spaces = " " * indent
        print(f"{spaces}{PrettyOutput.ARROW} {PrettyOutput.DIM}{label}:{PrettyOutput.RESET} {path}")

    @staticmethod
    def blank_line():
        print()

    @staticmethod
    def compact_table(headers, rows, col_widths=None):
        """
        Print a compact table.

        Args:
            headers: List of header strings
            rows: List of row tuples
            col_widths: Optional list of column widths
        """
        if not col_widths:
            col_widths = [max(len(str(h)), max(len(str(r[i])) for r in rows) if rows else 0)
                          for i, h in enumerate(headers)]

        header_str = "  ".join(f"{h:<{col_widths[i]}}" for i, h in enumerate(headers))
        print(f"  {PrettyOutput.HEADER}{header_str}{PrettyOutput.RESET}")
        print(f"  {PrettyOutput.DIM}{'─' * len(header_str)}{PrettyOutput.RESET}")

        for row in rows:
            row_str = "  ".join(f"{str(v):<{col_widths[i]}}" for i, v in enumerate(row))
            print(f"  {row_str}")

    @staticmethod
    def profile_summary(records, fields, failed, duration):
        """
        Print a one-line profile summary.

        Args:
            records: Number of records
            fields: Number of fields
            failed: Number of fields below the quality gate
            duration: Processing time in seconds
        """
        gate_color = PrettyOutput.ERROR if failed else PrettyOutput.SUCCESS
        parts = [
            f"{PrettyOutput.PRIMARY}{records:,}{PrettyOutput.RESET} records",
            f"{PrettyOutput.PRIMARY}{fields}{PrettyOutput.RESET} fields",
            f"{gate_color}{fields - failed}/{fields}{PrettyOutput.RESET} pass gate",
            f"{PrettyOutput.DIM}{duration:.2f}s{PrettyOutput.RESET}"
        ]
        print(f"\n{PrettyOutput.CHECK} {' │ '.join(parts)}")

    @staticmethod
    def analysis_summary(counts, import_count):
        """
        Print a one-line I/O analysis summary.

        Args:
            counts: Mapping of direction value to usage count
            import_count: Number of imported modules
        """
        parts = [
            f"{PrettyOutput.PRIMARY}{count}{PrettyOutput.RESET} {direction}"
            for direction, count in counts.items()
        ]
        parts.append(f"{PrettyOutput.PRIMARY}{import_count}{PrettyOutput.RESET} imports")
        print(f"\n{PrettyOutput.CHECK} {' │ '.join(parts)}")

"""
I/O Pattern Library

An ordered set of rules that recognise input/output operations in Python
source text. Each rule pairs a compiled regex with an extractor that turns a
match into an Extraction (path, mode, method, format).

Rules are evaluated independently against the whole text; one line may be
matched by several rules (e.g. 'with open("a.csv")' is seen by both the
generic open() rule and the with-open rule). Conflicts are resolved later by
deduplication on (path, mode, line), never by rule precedence.

When the accessed path is a program symbol rather than a string literal the
extractor emits a placeholder: '{name}' for a variable path, '{from f}' for
data read from a handle, '{to f}' for data written to a handle.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Match, Optional, Pattern

from inspection_framework.core.exceptions import PatternDefinitionError
from inspection_framework.core.logging_config import get_logger
from inspection_framework.io_scanner.models import Extraction, PatternCategory

logger = get_logger(__name__)

Extractor = Callable[[Match], Extraction]

ARGUMENT_FORMAT = "CLI argument"
ENVIRONMENT_FORMAT = "Environment variable"


def symbol_placeholder(symbol: str, marker: Optional[str] = None) -> str:
    """
    Placeholder for a symbolic path.

    >>> symbol_placeholder("path")
    '{path}'
    >>> symbol_placeholder("f", "from")
    '{from f}'
    """
    symbol = symbol.strip()
    return f"{{{marker} {symbol}}}" if marker else f"{{{symbol}}}"


def _path_or_placeholder(match: Match) -> Dict[str, Any]:
    """Literal path when the 'path' group was quoted, placeholder otherwise."""
    token = match.group("path").strip()
    if match.group("q"):
        return {"path": token, "is_symbolic": False}
    return {"path": symbol_placeholder(token), "is_symbolic": True}


@dataclass(frozen=True)
class IOPattern:
    """
    One recognition rule.

    Attributes:
        name: Unique rule name
        regex: Compiled recognizer (MULTILINE)
        category: Kind of operation recognised
        extractor: Pure function from a match to an Extraction
    """
    name: str
    regex: Pattern
    category: PatternCategory
    extractor: Extractor

    def extract(self, match: Match) -> Extraction:
        return self.extractor(match)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IOPattern":
        """
        Build a rule from a configuration mapping.

        Keys:
            name: rule name (required)
            regex: regular expression (required)
            category: one of PatternCategory values (default 'file')
            mode: access mode (default 'r')
            method: API label (default: the rule name)
            format: format label (optional, guessed from the path when absent)
            path_group: group number or name holding the path (default 1)
            symbolic: wrap the captured text as a placeholder (default False)

        Raises:
            PatternDefinitionError: missing keys, bad regex, unknown category
                or a path group the regex does not define
        """
        name = data.get("name")
        if not name:
            raise PatternDefinitionError("Pattern definition requires a 'name'")

        source = data.get("regex")
        if not source:
            raise PatternDefinitionError(f"Pattern '{name}' requires a 'regex'", pattern_name=name)
        try:
            regex = re.compile(source, re.MULTILINE)
        except re.error as e:
            raise PatternDefinitionError(
                f"Pattern '{name}' has an invalid regex: {e}", pattern_name=name, original_exception=e
            )

        try:
            category = PatternCategory(data.get("category", PatternCategory.FILE.value))
        except ValueError:
            valid = ", ".join(c.value for c in PatternCategory)
            raise PatternDefinitionError(
                f"Pattern '{name}' has unknown category '{data.get('category')}' (valid: {valid})",
                pattern_name=name
            )

        path_group = data.get("path_group", 1)
        if isinstance(path_group, int):
            if not 0 <= path_group <= regex.groups:
                raise PatternDefinitionError(
                    f"Pattern '{name}' has no group {path_group}", pattern_name=name
                )
        elif path_group not in regex.groupindex:
            raise PatternDefinitionError(
                f"Pattern '{name}' has no group named '{path_group}'", pattern_name=name
            )

        mode = str(data.get("mode", "r"))
        method = str(data.get("method", name))
        file_format = data.get("format")
        symbolic = bool(data.get("symbolic", False))

        def extract(match: Match) -> Extraction:
            captured = (match.group(path_group) or "").strip()
            return Extraction(
                path=symbol_placeholder(captured) if symbolic else captured,
                mode=mode,
                method=method,
                format=file_format,
                is_symbolic=symbolic
            )

        return cls(name=name, regex=regex, category=category, extractor=extract)


def _rule(name: str, source: str, category: PatternCategory, extractor: Extractor) -> IOPattern:
    return IOPattern(name=name, regex=re.compile(source, re.MULTILINE), category=category, extractor=extractor)


# ----------------------------------------------------------------------
# Extractor factories
# ----------------------------------------------------------------------

def _open_call(method: str) -> Extractor:
    def extract(match: Match) -> Extraction:
        return Extraction(
            mode=match.group("mode") or "r",
            method=method,
            encoding=match.group("enc") or "default",
            **_path_or_placeholder(match)
        )
    return extract


def _open_variable(match: Match) -> Extraction:
    return Extraction(
        path=symbol_placeholder(match.group("var")),
        mode=match.group("mode") or "r",
        method="open()",
        encoding=match.group("enc") or "default",
        is_symbolic=True
    )


def _path_call(mode: str, method: str, file_format: Optional[str]) -> Extractor:
    """Call whose first argument is a literal path or a path variable."""
    def extract(match: Match) -> Extraction:
        return Extraction(mode=mode, method=method, format=file_format, **_path_or_placeholder(match))
    return extract


def _handle_call(marker: str, mode: str, method: str, file_format: str) -> Extractor:
    """Call that reads from / writes to an already open handle."""
    def extract(match: Match) -> Extraction:
        return Extraction(
            path=symbol_placeholder(match.group("var"), marker),
            mode=mode,
            method=method,
            format=file_format,
            is_symbolic=True
        )
    return extract


def _literal_call(mode: str, method: str, file_format: str) -> Extractor:
    def extract(match: Match) -> Extraction:
        return Extraction(path=match.group("path"), mode=mode, method=method, format=file_format)
    return extract


def _argparse_argument(match: Match) -> Extraction:
    return Extraction(path=match.group("flag"), mode="arg", method="argparse", format=ARGUMENT_FORMAT)


def _sys_argv(match: Match) -> Extraction:
    return Extraction(
        path=f"sys.argv[{match.group('index')}]", mode="arg", method="sys.argv", format=ARGUMENT_FORMAT
    )


def _environment(match: Match) -> Extraction:
    return Extraction(
        path=f"${match.group('var')}", mode="env", method="os.environ", format=ENVIRONMENT_FORMAT
    )


# ----------------------------------------------------------------------
# Regex building blocks
# ----------------------------------------------------------------------

# Optional mode and encoding arguments of open(); both must be quoted literals
_MODE_ARG = r"""(?:,\s*(?:mode\s*=\s*)?(?P<mq>['"])(?P<mode>[\w+]+)(?P=mq))?"""
_ENCODING_ARG = r"""(?:,\s*encoding\s*=\s*(?P<eq>['"])(?P<enc>[\w-]+)(?P=eq))?"""

# String literal prefix (r, b, f, u and pairs), only directly before a quote
_STRING_PREFIX = r"""(?:[rRbBfFuU]{1,2}(?=['"]))?"""

# First argument: quoted literal or bare expression, up to ',' or ')'
_FIRST_ARG = _STRING_PREFIX + r"""(?P<q>['"]?)(?P<path>[^'"\n,)]+)(?P=q)"""


def _first_arg_call(call: str) -> str:
    return call + r"""\s*\(\s*""" + _FIRST_ARG


def _handle_first_call(call: str) -> str:
    """call(handle ...)"""
    return call + r"""\s*\(\s*(?P<var>\w+)"""


def _handle_second_call(call: str) -> str:
    """call(obj, handle ...)"""
    return call + r"""\s*\(\s*\w+\s*,\s*(?P<var>\w+)"""


def default_patterns() -> List[IOPattern]:
    """The built-in rules, in evaluation order."""
    C = PatternCategory
    return [
        _rule(
            "open_literal",
            r"""\bopen\s*\(\s*""" + _STRING_PREFIX + r"""(?P<q>['"])(?P<path>[^'"\n]*)(?P=q)\s*""" + _MODE_ARG + r"""\s*""" + _ENCODING_ARG + r"""\s*\)""",
            C.FILE, _open_call("open()")
        ),
        _rule(
            "with_open",
            r"""\bwith\s+open\s*\(\s*(?P<q>['"]?)(?P<path>[^'"\n,]+)(?P=q)\s*""" + _MODE_ARG + r"""\s*""" + _ENCODING_ARG + r"""\s*\)""",
            C.FILE, _open_call("with open()")
        ),
        _rule(
            "open_variable",
            r"""\bopen\s*\(\s*(?P<var>\w+)\s*(?:,\s*(?:mode\s*=\s*)?(?P<mq>['"])(?P<mode>[\w+]+)(?P=mq))?\s*""" + _ENCODING_ARG + r"""\s*\)""",
            C.FILE, _open_variable
        ),
        _rule("pandas_read_csv", _first_arg_call(r"pd\.read_csv"), C.CSV, _path_call("r", "pd.read_csv()", "CSV")),
        _rule("pandas_to_csv", _first_arg_call(r"\.to_csv"), C.CSV, _path_call("w", "df.to_csv()", "CSV")),
        _rule("pandas_read_json", _first_arg_call(r"pd\.read_json"), C.JSON, _path_call("r", "pd.read_json()", "JSON")),
        _rule("pandas_to_json", _first_arg_call(r"\.to_json"), C.JSON, _path_call("w", "df.to_json()", "JSON")),
        _rule("pandas_read_excel", _first_arg_call(r"pd\.read_excel"), C.EXCEL, _path_call("r", "pd.read_excel()", "Excel")),
        _rule("pandas_to_excel", _first_arg_call(r"\.to_excel"), C.EXCEL, _path_call("w", "df.to_excel()", "Excel")),
        _rule("pandas_read_pickle", _first_arg_call(r"pd\.read_pickle"), C.PICKLE, _path_call("rb", "pd.read_pickle()", "Pickle")),
        _rule("pandas_to_pickle", _first_arg_call(r"\.to_pickle"), C.PICKLE, _path_call("wb", "df.to_pickle()", "Pickle")),
        _rule("json_load", r"""json\.load\s*\(\s*(?P<var>\w+)\s*\)""", C.JSON, _handle_call("from", "r", "json.load()", "JSON")),
        _rule("json_dump", _handle_second_call(r"json\.dump"), C.JSON, _handle_call("to", "w", "json.dump()", "JSON")),
        _rule("csv_reader", _handle_first_call(r"csv\.reader"), C.CSV, _handle_call("from", "r", "csv.reader()", "CSV")),
        _rule("csv_writer", _handle_first_call(r"csv\.writer"), C.CSV, _handle_call("to", "w", "csv.writer()", "CSV")),
        _rule("csv_dict_reader", _handle_first_call(r"csv\.DictReader"), C.CSV, _handle_call("from", "r", "csv.DictReader()", "CSV (Dict)")),
        _rule("csv_dict_writer", _handle_first_call(r"csv\.DictWriter"), C.CSV, _handle_call("to", "w", "csv.DictWriter()", "CSV (Dict)")),
        _rule("pickle_load", r"""pickle\.load\s*\(\s*(?P<var>\w+)\s*\)""", C.PICKLE, _handle_call("from", "rb", "pickle.load()", "Pickle")),
        _rule("pickle_dump", _handle_second_call(r"pickle\.dump"), C.PICKLE, _handle_call("to", "wb", "pickle.dump()", "Pickle")),
        _rule("yaml_load", _handle_first_call(r"yaml\.(?:safe_)?load"), C.YAML, _handle_call("from", "r", "yaml.load()", "YAML")),
        _rule("yaml_dump", _handle_second_call(r"yaml\.(?:safe_)?dump"), C.YAML, _handle_call("to", "w", "yaml.dump()", "YAML")),
        _rule(
            "sqlite_connect",
            r"""sqlite3\.connect\s*\(\s*(?P<q>['"])(?P<path>[^'"\n]+)(?P=q)""",
            C.DATABASE, _literal_call("rw", "sqlite3.connect()", "SQLite")
        ),
        _rule(
            "path_read_text",
            r"""Path\s*\(\s*(?P<q>['"])(?P<path>[^'"\n]+)(?P=q)\s*\)\.read_text\s*\(""",
            C.FILE, _literal_call("r", "Path.read_text()", "Text")
        ),
        _rule(
            "path_write_text",
            r"""Path\s*\(\s*(?P<q>['"])(?P<path>[^'"\n]+)(?P=q)\s*\)\.write_text\s*\(""",
            C.FILE, _literal_call("w", "Path.write_text()", "Text")
        ),
        _rule(
            "argparse_argument",
            r"""add_argument\s*\(\s*(?P<q>['"])(?P<flag>-{1,2}[^'"]+)(?P=q)[^)]*type\s*=\s*(?:str|open|argparse\.FileType)""",
            C.ARGUMENT, _argparse_argument
        ),
        _rule("sys_argv", r"""sys\.argv\[(?P<index>\d+)\]""", C.ARGUMENT, _sys_argv),
        _rule(
            "environment_variable",
            r"""os\.(?:environ\s*(?:\[|\.get\s*\()|getenv\s*\()\s*(?P<q>['"])(?P<var>[^'"\n]+)(?P=q)""",
            C.ENVIRONMENT, _environment
        ),
    ]


class PatternLibrary:
    """
    Ordered collection of IOPattern rules.

    Example:
        >>> library = PatternLibrary.default()
        >>> library.add(IOPattern.from_dict({
        ...     "name": "s3_download",
        ...     "regex": r"download_file\\([^,]+,\\s*['\\"]([^'\\"]+)['\\"]",
        ...     "category": "file",
        ... }))
        >>> library.names[-1]
        's3_download'
    """

    def __init__(self, patterns: Optional[List[IOPattern]] = None):
        self._patterns: List[IOPattern] = []
        for pattern in patterns or []:
            self.add(pattern)

    @classmethod
    def default(cls) -> "PatternLibrary":
        """Library holding the built-in rules."""
        return cls(default_patterns())

    @classmethod
    def from_definitions(cls, definitions: List[Dict[str, Any]]) -> "PatternLibrary":
        """Built-in rules followed by rules declared in configuration."""
        library = cls.default()
        for definition in definitions:
            library.add(IOPattern.from_dict(definition))
        if definitions:
            logger.debug(f"Added {len(definitions)} configured I/O pattern(s)")
        return library

    def add(self, pattern: IOPattern) -> None:
        """Append a rule; names must be unique."""
        if pattern.name in self.names:
            raise PatternDefinitionError(
                f"Duplicate pattern name '{pattern.name}'", pattern_name=pattern.name
            )
        self._patterns.append(pattern)

    @property
    def names(self) -> List[str]:
        return [pattern.name for pattern in self._patterns]

    def __iter__(self) -> Iterator[IOPattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

"""
Unit tests for usage deduplication.
"""

from inspection_framework.io_scanner.deduplicator import deduplicate
from inspection_framework.io_scanner.models import Direction, IOUsage, PatternCategory


def usage(path, mode, line, method="open()"):
    return IOUsage(
        path=path,
        mode=mode,
        line=line,
        method=method,
        format="CSV",
        raw=f'open("{path}")',
        direction=Direction.INPUT,
        category=PatternCategory.FILE,
    )


class TestDeduplicate:

    def test_same_path_mode_line_collapses(self):
        result = deduplicate([usage("a.csv", "r", 3, "open()"), usage("a.csv", "r", 3, "with open()")])

        assert len(result) == 1
        assert result[0].method == "open()"

    def test_different_line_kept(self):
        result = deduplicate([usage("a.csv", "r", 3), usage("a.csv", "r", 7)])

        assert [u.line for u in result] == [3, 7]

    def test_different_mode_kept(self):
        result = deduplicate([usage("a.csv", "r", 3), usage("a.csv", "w", 3)])

        assert len(result) == 2

    def test_sorted_by_line_stable(self):
        result = deduplicate([
            usage("z.csv", "r", 5),
            usage("b.csv", "r", 1),
            usage("a.csv", "r", 5),
        ])

        assert [(u.line, u.path) for u in result] == [(1, "b.csv"), (5, "z.csv"), (5, "a.csv")]

    def test_idempotent(self):
        usages = [usage("a.csv", "r", 2), usage("a.csv", "r", 2), usage("b.csv", "w", 1)]
        once = deduplicate(usages)

        assert deduplicate(once) == once

    def test_accepts_iterables(self):
        assert deduplicate(iter([usage("a.csv", "r", 1)]))[0].path == "a.csv"

    def test_empty(self):
        assert deduplicate([]) == []

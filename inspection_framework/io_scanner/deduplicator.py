"""
Deduplication of classified I/O usages.

Several rules can report the same operation on the same line. Usages are
considered the same when (path, mode, line) coincide; the first one in
input order is kept. The survivors are then stably sorted by line, so ties
keep the order established by rule evaluation.
"""

from typing import Iterable, List

from inspection_framework.io_scanner.models import IOUsage


def deduplicate(usages: Iterable[IOUsage]) -> List[IOUsage]:
    """
    Drop repeated (path, mode, line) usages and sort by line.

    Idempotent: deduplicate(deduplicate(x)) == deduplicate(x).
    """
    seen = set()
    unique: List[IOUsage] = []
    for usage in usages:
        if usage.dedup_key in seen:
            continue
        seen.add(usage.dedup_key)
        unique.append(usage)

    # sorted() is stable
    return sorted(unique, key=lambda usage: usage.line)

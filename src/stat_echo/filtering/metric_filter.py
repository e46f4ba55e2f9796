"""
Project: StatEcho
File Name: filtering/metric_filter.py
Description:
    Allow-list of comparable metrics.
    Each entry names a subtree of the metric namespace: a key is comparable
    when any of its dotted prefixes (the key itself included) is listed.
      "serverStatus.mem.resident"        -> listed
      "serverStatus.mem.resident.extra"  -> ancestor listed
      "serverStatus.uptime"              -> not comparable
"""

from __future__ import annotations

from collections.abc import Set
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stat_echo.core.models import Stats


COMPARABLE_METRICS: frozenset[str] = frozenset({
    "end",
    "start",
    "serverStatus.start",
    "serverStatus.end",
    "serverStatus.asserts",
    "serverStatus.mem.mapped",
    "serverStatus.mem.mappedWithJournal",
    "serverStatus.mem.resident",
    "serverStatus.mem.supported",
    "serverStatus.mem.virtual",
    "serverStatus.metrics.commands",
    "serverStatus.metrics.cursor.open",
    "serverStatus.metrics.document",
    "serverStatus.metrics.operation",
    "serverStatus.metrics.queryExecutor",
    "serverStatus.metrics.record",
    "serverStatus.metrics.repl",
    "serverStatus.metrics.storage",
    "serverStatus.metrics.ttl",
    "serverStatus.opcounters",
    "serverStatus.opcountersRepl",
    "serverStatus.wiredTiger.LSM",
    "serverStatus.wiredTiger.async",
    "serverStatus.wiredTiger.block-manager",
    "serverStatus.wiredTiger.cache",
    "serverStatus.wiredTiger.concurrentTransactions",
    "serverStatus.wiredTiger.data-handle",
    "serverStatus.wiredTiger.reconciliation",
    "serverStatus.wiredTiger.session",
    "serverStatus.writeBacksQueued",
})


def is_comparable_metric(key: str, allow_list: Set[str] = COMPARABLE_METRICS) -> bool:
    """Return True if ``key`` or any of its dotted ancestors is allow-listed.

    Prefixes are tried shortest first (``a``, ``a.b``, ``a.b.c`` ...).
    """
    segments = key.split(".")
    for i in range(1, len(segments) + 1):
        if ".".join(segments[:i]) in allow_list:
            return True
    return False


def comparable_keys(
    a: Stats,
    b: Stats,
    allow_list: Set[str] = COMPARABLE_METRICS,
) -> list[str]:
    """Keys present in both snapshots that pass the filter, sorted."""
    return sorted(
        key for key in a.metrics
        if key in b.metrics and is_comparable_metric(key, allow_list)
    )

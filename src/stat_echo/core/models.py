"""
Project: StatEcho
File Name: core/models.py
Description:
    Data models for sampled diagnostic snapshots.
    A snapshot holds the number of samples captured and, per metric key,
    the median and median absolute deviation (MAD) of that metric's
    time series. Both are produced upstream; this package only reads them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MetricSummary:
    """Summary statistics of one metric's time series."""

    median: float
    mad: float  # median absolute deviation


@dataclass(frozen=True)
class Stats:
    """A diagnostic snapshot — sample count plus per-metric summaries.

    Metric keys are dot-separated paths, e.g. ``serverStatus.mem.resident``.
    """

    n_samples: int
    metrics: Mapping[str, MetricSummary] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls,
        n_samples: int,
        metrics: Mapping[str, tuple[float, float]],
    ) -> Stats:
        """Build a snapshot from ``{key: (median, mad)}`` pairs."""
        return cls(
            n_samples=n_samples,
            metrics={key: MetricSummary(median=med, mad=mad) for key, (med, mad) in metrics.items()},
        )

"""
StatEcho — proximity scoring for repeated diagnostic captures.

Usage::

    from stat_echo import Stats, proximal

    a = Stats.from_mapping(100, {"serverStatus.mem.resident": (50, 2)})
    b = Stats.from_mapping(100, {"serverStatus.mem.resident": (52, 2)})
    message, score, ok = proximal(a, b)
"""

from importlib.metadata import version
__version__ = version("stat-echo")

# Core models
from stat_echo.core.config import DEFAULT_CONFIG, ComparisonConfig
from stat_echo.core.models import MetricSummary, Stats

# Filtering
from stat_echo.filtering.metric_filter import (
    COMPARABLE_METRICS,
    comparable_keys,
    is_comparable_metric,
)

# Scoring
from stat_echo.scoring.metric_score import ScoredMetric, compare_metric
from stat_echo.scoring.proximity import ProximityReport, compare_stats, proximal

__all__ = [
    # Core
    "ComparisonConfig",
    "DEFAULT_CONFIG",
    "MetricSummary",
    "Stats",
    # Filtering
    "COMPARABLE_METRICS",
    "comparable_keys",
    "is_comparable_metric",
    # Scoring
    "ProximityReport",
    "ScoredMetric",
    "compare_metric",
    "compare_stats",
    "proximal",
]

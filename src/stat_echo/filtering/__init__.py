"""
Project: StatEcho
File Name: filtering/__init__.py
Description:
    Metric-key filtering — which metrics take part in a comparison.
"""

from stat_echo.filtering.metric_filter import (
    COMPARABLE_METRICS,
    comparable_keys,
    is_comparable_metric,
)

__all__ = ["COMPARABLE_METRICS", "comparable_keys", "is_comparable_metric"]

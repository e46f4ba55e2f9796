"""
Project: StatEcho
File Name: scoring/__init__.py
Description:
    Scoring modules — per-metric deviation and aggregate proximity.
"""

from stat_echo.scoring.metric_score import ScoredMetric, compare_metric
from stat_echo.scoring.proximity import ProximityReport, compare_stats, proximal

__all__ = ["ProximityReport", "ScoredMetric", "compare_metric", "compare_stats", "proximal"]

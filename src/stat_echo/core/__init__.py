"""Core data models and configuration."""

from stat_echo.core.config import DEFAULT_CONFIG, ComparisonConfig
from stat_echo.core.models import MetricSummary, Stats

__all__ = ["ComparisonConfig", "DEFAULT_CONFIG", "MetricSummary", "Stats"]

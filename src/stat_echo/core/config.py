"""
Project: StatEcho
File Name: core/config.py
Description:
    Comparison configuration.
    The threshold is the maximum tolerated relative deviation before a
    metric (or the whole comparison) is flagged as not proximal.
    Configs are immutable and passed explicitly to every comparison.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from stat_echo.filtering.metric_filter import COMPARABLE_METRICS


@dataclass(frozen=True)
class ComparisonConfig:
    """Tunable parameters for a proximity comparison.

    Raises:
        ValueError: If ``threshold`` is outside (0, 1) or
            ``sample_count_penalty`` is positive.
    """

    threshold: float = 0.2
    sample_count_penalty: float = -0.1  # accumulator seed when sample counts diverge
    comparable_metrics: frozenset[str] = COMPARABLE_METRICS

    def __post_init__(self) -> None:
        if not 0.0 < self.threshold < 1.0:
            raise ValueError(f"threshold must be in (0, 1), got {self.threshold}")
        if self.sample_count_penalty > 0.0:
            raise ValueError(
                f"sample_count_penalty must be <= 0, got {self.sample_count_penalty}"
            )

    @property
    def threshold_percent(self) -> int:
        """Threshold as a whole percentage, as shown in diagnostic messages."""
        return round(self.threshold * 100)

    def with_threshold(self, threshold: float) -> ComparisonConfig:
        """Copy of this config with a different threshold."""
        return replace(self, threshold=threshold)


# Default config — used when no overrides are supplied.
DEFAULT_CONFIG = ComparisonConfig()

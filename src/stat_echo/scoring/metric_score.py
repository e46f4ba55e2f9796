"""
Project: StatEcho
File Name: scoring/metric_score.py
Description:
    Per-metric deviation score.
    Score = (1 − rel_median) × (1 − rel_mad)
    where rel_x = |a.x − b.x| / max(|a.x|, |b.x|).

    Range: ≤ 1.0 (1.0 = identical). Not clamped below: a relative deviation
    above 1 makes the score negative and drags the aggregate down.

    Short-circuits to 1.0 when:
    - the medians are exactly equal (MAD is not inspected), or
    - either the larger |median| or the larger |MAD| is zero.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from stat_echo.core.config import DEFAULT_CONFIG, ComparisonConfig
from stat_echo.core.models import Stats

logger = logging.getLogger(__name__)

PERFECT_SCORE = 1.0


@dataclass(frozen=True)
class ScoredMetric:
    """Score for one metric key, plus any diagnostic lines it produced."""

    key: str
    score: float
    message: str = ""

    @property
    def is_proximal(self) -> bool:
        return not self.message


def relative_deviation(x: float, y: float) -> float:
    """|x − y| divided by the larger magnitude. Caller guarantees it is non-zero."""
    return abs(x - y) / max(abs(x), abs(y))


def _fmt(value: float) -> str:
    """Exact rendering; integral values print without a fractional part."""
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return f"{value:.0f}"
    return repr(float(value))


def compare_metric(
    a: Stats,
    b: Stats,
    key: str,
    config: ComparisonConfig = DEFAULT_CONFIG,
) -> ScoredMetric:
    """Score how close metric ``key`` is between two snapshots.

    Only called for keys present in both snapshots and accepted by the
    metric filter; a missing key raises ``KeyError``.
    """
    am = a.metrics[key]
    bm = b.metrics[key]

    if am.median == bm.median:
        return ScoredMetric(key=key, score=PERFECT_SCORE)

    max_mad = max(abs(am.mad), abs(bm.mad))
    max_median = max(abs(am.median), abs(bm.median))
    if max_mad == 0 or max_median == 0:
        return ScoredMetric(key=key, score=PERFECT_SCORE)

    rel_mad = relative_deviation(am.mad, bm.mad)
    rel_median = relative_deviation(am.median, bm.median)
    score = (1.0 - rel_median) * (1.0 - rel_mad)

    pct = config.threshold_percent
    lines: list[str] = []
    if rel_mad > config.threshold:
        lines.append(
            f"metric '{key}' not proximal: deviations ({_fmt(am.mad)}, {_fmt(bm.mad)}) "
            f"are not within threshold ({pct}%)\n"
        )
    if rel_median > config.threshold:
        lines.append(
            f"metric '{key}' not proximal: medians ({_fmt(am.median)}, {_fmt(bm.median)}) "
            f"are not within threshold ({pct}%)\n"
        )

    logger.debug(
        "metric %s: rel_median=%.4f rel_mad=%.4f score=%.4f",
        key, rel_median, rel_mad, score,
    )
    return ScoredMetric(key=key, score=score, message="".join(lines))

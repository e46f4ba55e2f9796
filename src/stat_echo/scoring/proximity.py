"""
Project: StatEcho
File Name: scoring/proximity.py
Description:
    Proximity score — aggregates per-metric scores into one verdict.

    acc   = penalty                      # −0.1 if sample counts diverge, else 0
          + Σ score_i × w_i              # scores sorted worst → best
    w     = 1/2, 1/4, …, 1/2^(n−1), 1/2^(n−1)
    score = sign(acc) × √|acc|
    ok    = score ≥ 1 − threshold

    The weights 1/2, 1/4, 1/8 … let the worst metric dominate. The tail
    of the geometric series (2^−n) is folded into the best score, so the
    weights sum to 1 and a perfect match scores exactly 1.0.
    Scores accumulate quadratically; the square root linearizes them
    before the threshold check. A negative accumulator (heavy penalty
    or strongly divergent metrics) maps to a negative score through the
    signed root, which keeps the mapping monotonic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import numpy as np

from stat_echo.core.config import DEFAULT_CONFIG, ComparisonConfig
from stat_echo.core.models import Stats
from stat_echo.filtering.metric_filter import comparable_keys
from stat_echo.scoring.metric_score import ScoredMetric, compare_metric

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProximityReport:
    """Outcome of comparing two snapshots.

    Unpacks as ``message, score, ok``.
    """

    message: str
    score: float
    ok: bool
    penalty: float = 0.0
    accumulator: float = 0.0  # pre-root weighted sum, penalty included
    metrics: list[ScoredMetric] = field(default_factory=list)  # worst first

    def __iter__(self) -> Iterator[str | float | bool]:
        return iter((self.message, self.score, self.ok))

    @property
    def worst_metric(self) -> ScoredMetric | None:
        return self.metrics[0] if self.metrics else None

    @property
    def failing_metrics(self) -> list[ScoredMetric]:
        """Metrics that produced at least one diagnostic line."""
        return [m for m in self.metrics if not m.is_proximal]


def sample_count_deviation(a: Stats, b: Stats) -> float:
    """Relative difference of the sample counts; 0.0 when both are zero."""
    max_count = max(a.n_samples, b.n_samples)
    if max_count == 0:
        return 0.0
    return abs(a.n_samples - b.n_samples) / max_count


def rank_weights(n: int) -> np.ndarray:
    """Weights 1/2, 1/4, 1/8 … for ``n`` ranks; the best rank also takes the 2^−n tail."""
    weights = np.power(2.0, -np.arange(1, n + 1))
    if n:
        weights[-1] *= 2.0
    return weights


def rank_weighted_sum(scores: Sequence[float]) -> float:
    """Sum of sorted scores weighted 1/2, 1/4, 1/8 … from worst to best."""
    if len(scores) == 0:
        return 0.0
    arr = np.sort(np.asarray(scores, dtype=float))
    weights = rank_weights(len(arr))
    return float(np.dot(arr, weights))


def linearize(accumulator: float) -> float:
    """Signed square root of the quadratic accumulator."""
    return float(np.sign(accumulator) * np.sqrt(np.abs(accumulator)))


def compare_stats(
    a: Stats,
    b: Stats,
    config: ComparisonConfig = DEFAULT_CONFIG,
) -> ProximityReport:
    """Compare two snapshots and return the full report.

    Metrics missing from either side, or rejected by the metric filter,
    are skipped rather than counted as mismatches.
    """
    pct = config.threshold_percent
    message = ""
    penalty = 0.0

    if a.n_samples == 0 and b.n_samples == 0:
        logger.warning("Both snapshots report zero samples; skipping sample-count check")
    elif sample_count_deviation(a, b) > config.threshold:
        message += (
            f"sample count not proximal: ({a.n_samples}, {b.n_samples}) "
            f"are not within threshold ({pct}%)\n"
        )
        penalty = config.sample_count_penalty

    keys = comparable_keys(a, b, config.comparable_metrics)
    if not keys:
        logger.warning("No comparable metrics shared between snapshots")

    # Worst first; key breaks ties
    scored = sorted(
        (compare_metric(a, b, key, config) for key in keys),
        key=lambda m: (m.score, m.key),
    )

    accumulator = penalty + rank_weighted_sum([m.score for m in scored])
    if accumulator < 0:
        logger.warning("Negative score accumulator %.4f; score will be negative", accumulator)
    score = linearize(accumulator)

    message += "".join(m.message for m in scored)
    ok = score >= 1.0 - config.threshold

    logger.debug("accumulator=%.4f over %d metrics (penalty %.2f)", accumulator, len(scored), penalty)
    logger.info(
        "Proximity score %.4f (%s, threshold %d%%)",
        score, "proximal" if ok else "not proximal", pct,
    )

    return ProximityReport(
        message=message,
        score=score,
        ok=ok,
        penalty=penalty,
        accumulator=accumulator,
        metrics=scored,
    )


def proximal(
    a: Stats,
    b: Stats,
    config: ComparisonConfig = DEFAULT_CONFIG,
) -> tuple[str, float, bool]:
    """Return ``(message, score, ok)`` for two snapshots.

    ``message`` lists every non-proximal finding, worst metric first;
    ``score`` is 1.0 for a perfect match; ``ok`` tells whether the score
    clears ``1 - config.threshold``.
    """
    report = compare_stats(a, b, config)
    return report.message, report.score, report.ok

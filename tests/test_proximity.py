"""
Project: StatEcho
File Name: test_proximity.py
Description:
    Tests for the aggregate proximity score and verdict.
"""

import logging
import math

import pytest

from stat_echo.core.config import DEFAULT_CONFIG, ComparisonConfig
from stat_echo.core.models import Stats
from stat_echo.scoring.proximity import (
    compare_stats,
    linearize,
    proximal,
    rank_weighted_sum,
    rank_weights,
    sample_count_deviation,
)

RESIDENT = "serverStatus.mem.resident"


def _stats(n: int = 100) -> Stats:
    return Stats(n_samples=n)


def _stats_pairs(stats: Stats):
    return ((k, (m.median, m.mad)) for k, m in stats.metrics.items())


def _workload(n: int = 100) -> Stats:
    return Stats.from_mapping(n, {
        RESIDENT: (512, 12),
        "serverStatus.mem.virtual": (2048, 30),
        "serverStatus.opcounters.insert": (1200, 80),
        "serverStatus.opcounters.query": (300, 25),
        "serverStatus.wiredTiger.cache.bytes currently in the cache": (1.5e9, 2e7),
        "serverStatus.uptime": (3600, 10),
    })


class TestRankWeightedSum:
    def test_worst_gets_half(self):
        total = rank_weighted_sum([1.0, 0.5, 0.8])
        assert math.isclose(total, 0.5 / 2 + 0.8 / 4 + 1.0 / 4)

    def test_worst_weight_is_half_of_total(self):
        for n in range(2, 12):
            weights = rank_weights(n)
            assert weights[0] == pytest.approx(weights.sum() / 2)

    def test_worst_share_of_three(self):
        total = rank_weighted_sum([0.5, 0.8, 1.0])
        assert total == pytest.approx(0.70)
        assert 0.5 * rank_weights(3)[0] == pytest.approx(0.25)

    def test_weights_halve_then_fold_tail(self):
        assert list(rank_weights(1)) == [1.0]
        assert list(rank_weights(3)) == [0.5, 0.25, 0.25]
        assert rank_weights(10).sum() == pytest.approx(1.0)
        assert len(rank_weights(0)) == 0

    def test_input_order_irrelevant(self):
        assert rank_weighted_sum([0.1, 0.9, 0.4]) == rank_weighted_sum([0.9, 0.4, 0.1])

    def test_empty(self):
        assert rank_weighted_sum([]) == 0.0

    def test_all_perfect(self):
        assert rank_weighted_sum([1.0]) == 1.0
        assert rank_weighted_sum([1.0] * 7) == pytest.approx(1.0)


class TestLinearize:
    def test_positive(self):
        assert linearize(0.25) == 0.5

    def test_zero(self):
        assert linearize(0.0) == 0.0

    def test_negative_is_signed_root(self):
        assert linearize(-0.04) == pytest.approx(-0.2)


class TestSampleCountDeviation:
    def test_both_zero(self):
        assert sample_count_deviation(_stats(0), _stats(0)) == 0.0

    def test_ratio_to_larger(self):
        assert sample_count_deviation(_stats(100), _stats(130)) == pytest.approx(30 / 130)


class TestProximal:
    def test_identical_single_metric(self):
        a = Stats.from_mapping(100, {RESIDENT: (50, 2)})
        b = Stats.from_mapping(100, {RESIDENT: (50, 2)})
        message, score, ok = proximal(a, b)
        assert message == ""
        assert ok
        assert score == 1.0

    def test_self_comparison(self):
        stats = _workload()
        report = compare_stats(stats, stats)
        assert report.message == ""
        assert report.ok
        assert report.score == pytest.approx(1.0)
        assert all(m.score == 1.0 for m in report.metrics)
        # uptime is not in the allow-list
        assert len(report.metrics) == 5

    def test_median_divergence(self):
        a = Stats.from_mapping(100, {RESIDENT: (50, 2)})
        b = Stats.from_mapping(100, {RESIDENT: (100, 2)})
        message, score, ok = proximal(a, b)
        assert not ok
        assert score < 0.8
        assert "medians (50, 100)" in message
        assert "(20%)" in message

    def test_sample_count_penalty(self):
        a = _workload(100)
        b = _workload(130)
        report = compare_stats(a, b)
        assert report.message.startswith(
            "sample count not proximal: (100, 130) are not within threshold (20%)\n"
        )
        assert report.penalty == -0.1
        assert report.accumulator == pytest.approx(-0.1 + rank_weighted_sum([1.0] * 5))

    def test_sample_counts_within_threshold(self):
        report = compare_stats(_workload(100), _workload(85))
        assert report.penalty == 0.0
        assert report.message == ""

    def test_zero_sample_counts(self, caplog):
        a = Stats.from_mapping(0, {RESIDENT: (50, 2)})
        b = Stats.from_mapping(0, {RESIDENT: (50, 2)})
        with caplog.at_level(logging.WARNING, logger="stat_echo"):
            report = compare_stats(a, b)
        assert report.penalty == 0.0
        assert report.message == ""
        assert "zero samples" in caplog.text

    def test_messages_worst_first(self):
        a = Stats.from_mapping(100, {
            "serverStatus.opcounters.insert": (100, 10),
            "serverStatus.opcounters.query": (100, 10),
        })
        b = Stats.from_mapping(100, {
            "serverStatus.opcounters.insert": (70, 10),   # score 0.7
            "serverStatus.opcounters.query": (40, 10),    # score 0.4
        })
        report = compare_stats(a, b)
        lines = report.message.splitlines()
        assert "opcounters.query" in lines[0]
        assert "opcounters.insert" in lines[1]
        assert report.worst_metric.key == "serverStatus.opcounters.query"
        assert [m.key for m in report.failing_metrics] == [
            "serverStatus.opcounters.query",
            "serverStatus.opcounters.insert",
        ]

    def test_sample_message_precedes_metric_messages(self):
        a = Stats.from_mapping(100, {RESIDENT: (50, 2)})
        b = Stats.from_mapping(200, {RESIDENT: (100, 2)})
        lines = proximal(a, b)[0].splitlines()
        assert lines[0].startswith("sample count not proximal")
        assert "medians (50, 100)" in lines[1]

    def test_missing_and_filtered_keys_skipped(self):
        a = Stats.from_mapping(100, {RESIDENT: (50, 2), "serverStatus.uptime": (1, 1)})
        b = Stats.from_mapping(100, {
            "serverStatus.uptime": (1000, 50),
            "serverStatus.mem.virtual": (1, 1),
        })
        report = compare_stats(a, b)
        assert report.metrics == []
        assert report.message == ""
        assert report.score == 0.0
        assert not report.ok

    def test_negative_accumulator(self):
        a = Stats.from_mapping(100, {RESIDENT: (-50, 2)})
        b = Stats.from_mapping(300, {RESIDENT: (50, 2)})
        report = compare_stats(a, b)
        # -0.1 + (-1.0 * 1)
        assert report.accumulator == pytest.approx(-1.1)
        assert report.score == pytest.approx(-math.sqrt(1.1))
        assert not report.ok

    def test_report_unpacks_like_tuple(self):
        report = compare_stats(_workload(), _workload())
        message, score, ok = report
        assert (message, score, ok) == proximal(_workload(), _workload())

    def test_does_not_mutate_inputs(self):
        a, b = _workload(100), _workload(140)
        before = (dict(a.metrics), dict(b.metrics))
        compare_stats(a, b)
        assert (dict(a.metrics), dict(b.metrics)) == before


class TestThresholdMonotonicity:
    @pytest.mark.parametrize("median_b", [45, 60, 80, 120, 200])
    def test_looser_threshold_never_fails_more(self, median_b):
        a = _workload(100)
        b = Stats.from_mapping(120, {**dict(_stats_pairs(a)), RESIDENT: (median_b, 14)})
        previous_ok = False
        for t in (0.05, 0.1, 0.2, 0.3, 0.5, 0.9):
            _, _, ok = proximal(a, b, ComparisonConfig(threshold=t))
            assert ok or not previous_ok
            previous_ok = ok

    def test_default_config_used(self):
        a, b = _workload(), _workload()
        assert proximal(a, b) == proximal(a, b, DEFAULT_CONFIG)


"""StatEcho Demo — Compare two captures of the same workload.

Usage:
    uv run python demo.py
"""

import logging

from stat_echo import ComparisonConfig, Stats, compare_stats


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Two captures of the same insert-heavy workload
    baseline = Stats.from_mapping(1200, {
        "serverStatus.mem.resident": (1536, 24),
        "serverStatus.mem.virtual": (4096, 40),
        "serverStatus.opcounters.insert": (5400, 310),
        "serverStatus.opcounters.query": (820, 65),
        "serverStatus.wiredTiger.cache.bytes read into cache": (2.1e8, 1.4e7),
        "serverStatus.uptime": (7200, 0),
    })
    rerun = Stats.from_mapping(1150, {
        "serverStatus.mem.resident": (1580, 26),
        "serverStatus.mem.virtual": (4096, 42),
        "serverStatus.opcounters.insert": (3900, 290),
        "serverStatus.opcounters.query": (805, 61),
        "serverStatus.wiredTiger.cache.bytes read into cache": (2.0e8, 1.5e7),
        "serverStatus.uptime": (9000, 0),
    })

    for threshold in (0.2, 0.3):
        report = compare_stats(baseline, rerun, ComparisonConfig(threshold=threshold))

        print("=" * 60)
        print(f"THRESHOLD {threshold:.0%} — score {report.score:.4f} "
              f"({'proximal' if report.ok else 'NOT proximal'})")
        print("=" * 60)
        for i, metric in enumerate(report.metrics, 1):
            print(f"  {i}. {metric.key:<55} {metric.score:.3f}")
        if report.message:
            print("\n" + report.message)


if __name__ == "__main__":
    main()

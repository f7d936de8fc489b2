"""
Prometheus text exposition rendering for Playwright metrics.

The metric names, their order and the TYPE/HELP lines are fixed; downstream
dashboards scrape these exact names from the Pushgateway.
"""

import math
from typing import List, Tuple

from metrics_aggregator import MetricsSnapshot


# (metric name, snapshot attribute, help text) in exposition order
PLAYWRIGHT_GAUGES: List[Tuple[str, str, str]] = [
    ("playwright_test_total", "total",
     "Total number of Playwright tests."),
    ("playwright_test_passed", "passed",
     "Number of Playwright tests that passed."),
    ("playwright_test_failed", "failed",
     "Number of Playwright tests that failed."),
    ("playwright_test_skipped", "skipped",
     "Number of Playwright tests that were skipped."),
    ("playwright_test_duration_milliseconds", "duration_ms",
     "Total duration of all Playwright tests in milliseconds."),
]


def format_prometheus_metrics(snapshot: MetricsSnapshot) -> str:
    """
    Render a snapshot as Prometheus text exposition.

    Args:
        snapshot: Aggregated metrics

    Returns:
        Payload with one TYPE, HELP and sample line per gauge, newline-terminated
    """
    lines = []

    for name, attribute, help_text in PLAYWRIGHT_GAUGES:
        value = getattr(snapshot, attribute)
        if isinstance(value, float):
            # halves round up
            value = math.floor(value + 0.5)
        lines.append(f"# TYPE {name} gauge")
        lines.append(f"# HELP {name} {help_text}")
        lines.append(f"{name} {value}")

    return "\n".join(lines) + "\n"

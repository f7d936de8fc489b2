"""
Aggregation of Playwright results into a metrics snapshot.
"""

from dataclasses import dataclass
from typing import Union

from results_parser import ResultsDocument


PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass
class MetricsSnapshot:
    """Counts and cumulative duration for one test run."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    other: int = 0  # timedOut, interrupted, missing status; not exported
    duration_ms: Union[int, float] = 0


def aggregate_results(document: ResultsDocument) -> MetricsSnapshot:
    """
    Tally tests across all suites and specs.

    Only the first result of each test is inspected. A test with no result,
    or with a status other than passed/failed/skipped, is counted in the
    total and the other bucket.

    Args:
        document: Parsed results document

    Returns:
        MetricsSnapshot for the run
    """
    snapshot = MetricsSnapshot()

    for suite in document.suites:
        for spec in suite.specs:
            for test in spec.tests:
                snapshot.total += 1

                result = test.first_result
                if result is None:
                    snapshot.other += 1
                    continue

                if result.duration is not None:
                    snapshot.duration_ms += result.duration

                if result.status == PASSED:
                    snapshot.passed += 1
                elif result.status == FAILED:
                    snapshot.failed += 1
                elif result.status == SKIPPED:
                    snapshot.skipped += 1
                else:
                    snapshot.other += 1

    return snapshot

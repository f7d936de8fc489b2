"""
Property-based tests for results aggregation.

These tests verify that counts and durations are tallied correctly from the
suite -> spec -> test nesting across a wide range of generated reports.
"""

import pytest
from hypothesis import given, strategies as st, settings

from results_parser import parse_results_document
from metrics_aggregator import MetricsSnapshot, aggregate_results


# Hypothesis strategies for generating test data

@st.composite
def valid_status(draw):
    """Generate a Playwright result status, including ones with no named counter."""
    return draw(st.sampled_from([
        'passed',
        'failed',
        'skipped',
        'timedOut',
        'interrupted'
    ]))


@st.composite
def valid_result(draw):
    """Generate a single result entry, sometimes missing fields."""
    result = {}
    if draw(st.booleans()):
        result['status'] = draw(valid_status())
    if draw(st.booleans()):
        result['duration'] = draw(st.integers(min_value=0, max_value=600000))
    return result


@st.composite
def valid_test(draw):
    """Generate a test with 0-3 results (retries)."""
    return {'results': draw(st.lists(valid_result(), min_size=0, max_size=3))}


@st.composite
def valid_spec(draw):
    return {
        'title': draw(st.text(min_size=1, max_size=20)),
        'tests': draw(st.lists(valid_test(), min_size=0, max_size=4))
    }


@st.composite
def valid_suite(draw):
    return {
        'title': draw(st.text(min_size=1, max_size=20)),
        'specs': draw(st.lists(valid_spec(), min_size=0, max_size=4))
    }


@st.composite
def valid_report(draw):
    """Generate a Playwright JSON report."""
    return {'suites': draw(st.lists(valid_suite(), min_size=0, max_size=4))}


def iter_tests(report):
    for suite in report['suites']:
        for spec in suite['specs']:
            for test in spec['tests']:
                yield test


# Feature: playwright-metrics-push, Property 1: Total equals bucket sum
@settings(max_examples=100)
@given(report=valid_report())
def test_property_1_total_equals_bucket_sum(report):
    """
    Property 1: Total equals bucket sum

    For any report, total should equal passed + failed + skipped + other,
    including tests that have no results at all.
    """
    snapshot = aggregate_results(parse_results_document(report))

    assert snapshot.total == len(list(iter_tests(report)))
    assert snapshot.total == (
        snapshot.passed + snapshot.failed + snapshot.skipped + snapshot.other
    )


# Feature: playwright-metrics-push, Property 2: Duration uses first result only
@settings(max_examples=100)
@given(report=valid_report())
def test_property_2_duration_uses_first_result_only(report):
    """
    Property 2: Duration uses first result only

    For any report, the duration should be the sum of each test's first
    result duration, with missing durations counted as zero.
    """
    expected = 0
    for test in iter_tests(report):
        if test['results']:
            expected += test['results'][0].get('duration', 0)

    snapshot = aggregate_results(parse_results_document(report))

    assert snapshot.duration_ms == expected


# Feature: playwright-metrics-push, Property 3: Status counters follow first result
@settings(max_examples=100)
@given(report=valid_report())
def test_property_3_status_counters_follow_first_result(report):
    """
    Property 3: Status counters follow first result

    For any report, each named counter should equal the number of tests
    whose first result has that status.
    """
    first_statuses = [
        test['results'][0].get('status') if test['results'] else None
        for test in iter_tests(report)
    ]

    snapshot = aggregate_results(parse_results_document(report))

    assert snapshot.passed == first_statuses.count('passed')
    assert snapshot.failed == first_statuses.count('failed')
    assert snapshot.skipped == first_statuses.count('skipped')


# Feature: playwright-metrics-push, Property 4: Document order does not matter
@settings(max_examples=50)
@given(report=valid_report())
def test_property_4_suite_order_does_not_change_aggregate(report):
    """
    Property 4: Document order does not matter

    Reversing the suites should produce the same snapshot.
    """
    reversed_report = {'suites': list(reversed(report['suites']))}

    assert aggregate_results(parse_results_document(report)) == \
        aggregate_results(parse_results_document(reversed_report))


def test_two_suites_passed_and_failed():
    """Two suites with one passed (100ms) and one failed (250ms) test."""
    report = {
        'suites': [
            {'specs': [{'tests': [{'results': [{'status': 'passed', 'duration': 100}]}]}]},
            {'specs': [{'tests': [{'results': [{'status': 'failed', 'duration': 250}]}]}]},
        ]
    }

    snapshot = aggregate_results(parse_results_document(report))

    assert snapshot == MetricsSnapshot(
        total=2, passed=1, failed=1, skipped=0, other=0, duration_ms=350
    )


def test_empty_suites_produce_zero_snapshot():
    """An empty suites list yields all-zero counters."""
    snapshot = aggregate_results(parse_results_document({'suites': []}))

    assert snapshot == MetricsSnapshot()


def test_timed_out_counts_in_total_and_duration_only():
    """A timedOut test adds to total and duration but no named counter."""
    report = {
        'suites': [
            {'specs': [{'tests': [{'results': [{'status': 'timedOut', 'duration': 30000}]}]}]}
        ]
    }

    snapshot = aggregate_results(parse_results_document(report))

    assert snapshot.total == 1
    assert snapshot.duration_ms == 30000
    assert snapshot.passed == 0
    assert snapshot.failed == 0
    assert snapshot.skipped == 0
    assert snapshot.other == 1


def test_retried_test_counts_first_attempt():
    """A flaky test that failed then passed counts as failed."""
    report = {
        'suites': [
            {'specs': [{'tests': [{'results': [
                {'status': 'failed', 'duration': 400},
                {'status': 'passed', 'duration': 350},
            ]}]}]}
        ]
    }

    snapshot = aggregate_results(parse_results_document(report))

    assert snapshot.failed == 1
    assert snapshot.passed == 0
    assert snapshot.duration_ms == 400


def test_test_without_results_counts_as_other():
    """A test with an empty results list counts in total only."""
    report = {'suites': [{'specs': [{'tests': [{'results': []}, {}]}]}]}

    snapshot = aggregate_results(parse_results_document(report))

    assert snapshot.total == 2
    assert snapshot.other == 2
    assert snapshot.duration_ms == 0


def test_fractional_durations_are_summed():
    report = {
        'suites': [
            {'specs': [{'tests': [
                {'results': [{'status': 'passed', 'duration': 10.5}]},
                {'results': [{'status': 'passed', 'duration': 0.25}]},
            ]}]}
        ]
    }

    snapshot = aggregate_results(parse_results_document(report))

    assert snapshot.duration_ms == pytest.approx(10.75)

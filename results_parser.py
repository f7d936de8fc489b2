"""
Results parser for Playwright JSON reports.

This module loads a Playwright JSON reporter file and converts the
suite -> spec -> test -> result nesting into dataclasses. Field access is
best-effort: missing or mistyped fields degrade to empty values instead of
failing the run.
"""

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class InputError(Exception):
    """Exception raised when the results file cannot be read or parsed."""
    pass


@dataclass
class TestResult:
    """Outcome of a single execution attempt of a test."""
    __test__ = False

    status: Optional[str] = None  # "passed", "failed", "skipped", "timedOut", ...
    duration: Optional[Union[int, float]] = None  # milliseconds


@dataclass
class TestCase:
    """A test with its ordered execution attempts."""
    __test__ = False

    results: List[TestResult] = field(default_factory=list)

    @property
    def first_result(self) -> Optional[TestResult]:
        """The first attempt; retries are never consulted."""
        return self.results[0] if self.results else None


@dataclass
class Spec:
    """A spec holding an ordered list of tests."""
    tests: List[TestCase] = field(default_factory=list)


@dataclass
class Suite:
    """A suite holding an ordered list of specs."""
    specs: List[Spec] = field(default_factory=list)


@dataclass
class ResultsDocument:
    """Root of a Playwright results report."""
    suites: List[Suite] = field(default_factory=list)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _parse_result(data: Any) -> TestResult:
    data = _as_dict(data)

    status = data.get('status')
    if not isinstance(status, str):
        status = None

    duration = data.get('duration')
    # bool is an int subclass
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        duration = None
    elif not math.isfinite(duration):
        duration = None

    return TestResult(status=status, duration=duration)


def _parse_test(data: Any) -> TestCase:
    data = _as_dict(data)
    return TestCase(results=[_parse_result(r) for r in _as_list(data.get('results'))])


def _parse_spec(data: Any) -> Spec:
    data = _as_dict(data)
    return Spec(tests=[_parse_test(t) for t in _as_list(data.get('tests'))])


def _parse_suite(data: Any) -> Suite:
    data = _as_dict(data)
    return Suite(specs=[_parse_spec(s) for s in _as_list(data.get('specs'))])


def parse_results_document(data: Dict[str, Any]) -> ResultsDocument:
    """
    Convert a decoded Playwright report into a ResultsDocument.

    Args:
        data: Decoded JSON object

    Returns:
        ResultsDocument with suites, specs, tests and results in document order

    Raises:
        InputError: If the root is not a JSON object or has no suites list
    """
    if not isinstance(data, dict):
        raise InputError(
            f"Results document must be a JSON object, got {type(data).__name__}"
        )

    suites = data.get('suites')
    if not isinstance(suites, list):
        raise InputError("Results document has no 'suites' list")

    return ResultsDocument(suites=[_parse_suite(s) for s in suites])


def load_results_document(results_path: str) -> ResultsDocument:
    """
    Read and parse a Playwright results file.

    Args:
        results_path: Path to the JSON results file

    Returns:
        Parsed ResultsDocument

    Raises:
        InputError: If the file is missing, unreadable or not valid JSON
    """
    results_file = Path(results_path)
    if not results_file.exists():
        raise InputError(f"Results file not found: {results_path}")

    try:
        with open(results_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in results file {results_path}: {str(e)}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Failed to read results file {results_path}: {str(e)}") from e

    return parse_results_document(data)

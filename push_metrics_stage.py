#!/usr/bin/env python3
"""
Metrics push stage for Playwright test runs.

This script runs after the Playwright suite in CI:
- Resolve the Pushgateway configuration
- Read the Playwright JSON results file
- Aggregate pass/fail/skip counts and durations
- Push the metrics to the Pushgateway

Any failure exits with a non-zero status code so the workflow step fails.
"""

import sys
import argparse
from typing import List, Optional

from push_config import PushConfig, ConfigError, load_push_config
from results_parser import InputError, load_results_document
from metrics_aggregator import MetricsSnapshot, aggregate_results
from prometheus_format import format_prometheus_metrics
from pushgateway_client import PushgatewayClient, TransportError


class PushMetricsStage:
    """Handles the metrics push stage."""

    def __init__(
        self,
        config: PushConfig,
        client: Optional[PushgatewayClient] = None,
        dry_run: bool = False
    ):
        """
        Initialize the metrics push stage.

        Args:
            config: Resolved push configuration
            client: Optional Pushgateway client for testing
            dry_run: Render the payload without pushing it
        """
        self.config = config
        self.dry_run = dry_run
        self.client = client or PushgatewayClient(
            endpoint=config.endpoint,
            timeout_seconds=config.timeout_seconds
        )

    def print_summary(self, snapshot: MetricsSnapshot) -> None:
        """Print a summary of the aggregated results."""
        print(f"\n{'='*80}")
        print("Playwright Test Metrics")
        print(f"{'='*80}")
        print(f"Results file: {self.config.results_path}")
        print(f"Run ID: {self.config.run_id}")
        print(f"Total tests: {snapshot.total}")
        print(f"Passed: {snapshot.passed}")
        print(f"Failed: {snapshot.failed}")
        print(f"Skipped: {snapshot.skipped}")
        if snapshot.other:
            print(f"Other (timed out, interrupted, unknown): {snapshot.other}")
        print(f"Total duration: {snapshot.duration_ms} ms")
        print(f"{'='*80}\n")

    def run(self) -> MetricsSnapshot:
        """
        Execute the complete metrics push stage.

        Returns:
            MetricsSnapshot that was pushed

        Raises:
            InputError: If the results file cannot be read
            TransportError: If the push fails
        """
        document = load_results_document(self.config.results_path)
        snapshot = aggregate_results(document)
        payload = format_prometheus_metrics(snapshot)

        self.print_summary(snapshot)

        if self.dry_run:
            print("Dry run, not pushing. Payload:")
            print(payload, end="")
            return snapshot

        print("Attempting to push metrics to Pushgateway...")
        print(f"URL: {self.client.build_push_url(self.config.job_name, self.config.run_id)}")
        status_code = self.client.push_metrics(
            payload,
            job_name=self.config.job_name,
            instance=self.config.run_id
        )
        print(f"✓ Metrics pushed successfully! (HTTP {status_code})")

        return snapshot


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the command-line parser for the stage."""
    parser = argparse.ArgumentParser(
        description='Push Playwright test result metrics to a Prometheus Pushgateway'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to an optional YAML configuration file'
    )
    parser.add_argument(
        '--results',
        type=str,
        help='Path to the Playwright JSON results file (default: test-results.json)'
    )
    parser.add_argument(
        '--endpoint',
        type=str,
        help='Pushgateway base URL (default: $PUSHGATEWAY_URL)'
    )
    parser.add_argument(
        '--run-id',
        type=str,
        help='Instance label for this run (default: $GITHUB_RUN_ID or local_run)'
    )
    parser.add_argument(
        '--job-name',
        type=str,
        help='Job label for the push (default: playwright_tests)'
    )
    parser.add_argument(
        '--timeout',
        type=float,
        help='HTTP timeout in seconds (default: none)'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the metrics payload without pushing it'
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """
    Main entry point for the metrics push stage script.

    Expected environment variables:
    - PUSHGATEWAY_URL: Pushgateway base URL (required unless --endpoint or --config sets it)
    - GITHUB_RUN_ID: (Optional) Instance label, defaults to local_run
    """
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_push_config(
            config_path=args.config,
            overrides={
                'endpoint': args.endpoint,
                'run_id': args.run_id,
                'job_name': args.job_name,
                'results_path': args.results,
                'timeout_seconds': args.timeout,
            }
        )
    except ConfigError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    stage = PushMetricsStage(config=config, dry_run=args.dry_run)

    try:
        stage.run()
        sys.exit(0)
    except InputError as e:
        print(f"\n✗ Error processing test results: {str(e)}", file=sys.stderr)
        sys.exit(1)
    except TransportError as e:
        print(f"\n✗ Error pushing to Pushgateway: {str(e)}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\nUnexpected error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

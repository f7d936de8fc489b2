"""
Pushgateway client for submitting metrics from short-lived CI jobs.
"""

from typing import Optional

import requests


class TransportError(Exception):
    """Exception raised when pushing metrics to the Pushgateway fails."""
    pass


class PushgatewayClient:
    """Pushes Prometheus text payloads to a Pushgateway."""

    def __init__(
        self,
        endpoint: str,
        timeout_seconds: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the Pushgateway client.

        Args:
            endpoint: Pushgateway base URL, without trailing slash
            timeout_seconds: Optional request timeout. If None, requests waits indefinitely.
            session: Optional requests session for testing
        """
        self.endpoint = endpoint.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def build_push_url(self, job_name: str, instance: str) -> str:
        """Build the grouping-key URL. The instance is not escaped."""
        return f"{self.endpoint}/metrics/job/{job_name}/instance/{instance}"

    def push_metrics(self, payload: str, job_name: str, instance: str) -> int:
        """
        POST a metrics payload once. There is no retry and redirects are not followed.

        Args:
            payload: Prometheus text exposition
            job_name: Value of the job grouping label
            instance: Value of the instance grouping label

        Returns:
            HTTP status code of the response

        Raises:
            TransportError: On connection failure, timeout or non-2xx response, including 3xx
        """
        url = self.build_push_url(job_name, instance)

        try:
            response = self.session.post(
                url,
                data=payload.encode('utf-8'),
                headers={'Content-Type': 'text/plain'},
                timeout=self.timeout_seconds,
                allow_redirects=False
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Failed to push metrics to {url}: {str(e)}") from e

        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"Pushgateway at {url} responded with HTTP {response.status_code}"
            )

        return response.status_code

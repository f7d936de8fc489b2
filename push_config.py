"""
Configuration loader for the Playwright metrics push stage.

This module resolves the push configuration from built-in defaults, the CI
environment, an optional YAML file and command-line overrides, and validates
the merged result against a JSON schema.
"""

import os
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from jsonschema import validate, ValidationError


DEFAULT_RUN_ID = "local_run"
DEFAULT_JOB_NAME = "playwright_tests"
DEFAULT_RESULTS_PATH = "test-results.json"

ENDPOINT_ENV_VAR = "PUSHGATEWAY_URL"
RUN_ID_ENV_VAR = "GITHUB_RUN_ID"

PUSH_CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["endpoint", "run_id", "job_name", "results_path"],
    "additionalProperties": False,
    "properties": {
        "endpoint": {"type": "string", "pattern": r"^https?://\S+$"},
        "run_id": {"type": "string", "minLength": 1},
        "job_name": {"type": "string", "minLength": 1},
        "results_path": {"type": "string", "minLength": 1},
        "timeout_seconds": {
            "type": ["number", "null"],
            "exclusiveMinimum": 0,
        },
    },
}


class ConfigError(Exception):
    """Exception raised when the push configuration is missing or invalid."""
    pass


@dataclass
class PushConfig:
    """Resolved configuration for one metrics push."""
    endpoint: str
    run_id: str = DEFAULT_RUN_ID
    job_name: str = DEFAULT_JOB_NAME
    results_path: str = DEFAULT_RESULTS_PATH
    timeout_seconds: Optional[float] = None


def _read_config_file(config_path: str) -> Dict[str, Any]:
    """Load the optional YAML config file into a dict."""
    config_file = Path(config_path)
    if not config_file.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read configuration file {config_path}: {str(e)}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {config_path} must contain a mapping")
    return data


def _drop_empty(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None and value != ""}


def load_push_config(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None
) -> PushConfig:
    """
    Resolve and validate the push configuration.

    Later sources win: defaults, then environment, then the YAML file, then
    overrides. Empty values never replace an earlier one.

    Args:
        environ: Environment mapping. If None, uses os.environ.
        config_path: Optional path to a YAML configuration file
        overrides: Optional values from the command line

    Returns:
        Validated PushConfig object

    Raises:
        ConfigError: If the endpoint is missing or any value is invalid
    """
    if environ is None:
        environ = os.environ

    merged: Dict[str, Any] = {
        "run_id": DEFAULT_RUN_ID,
        "job_name": DEFAULT_JOB_NAME,
        "results_path": DEFAULT_RESULTS_PATH,
    }

    merged.update(_drop_empty({
        "endpoint": (environ.get(ENDPOINT_ENV_VAR) or "").strip(),
        "run_id": (environ.get(RUN_ID_ENV_VAR) or "").strip(),
    }))

    if config_path:
        merged.update(_drop_empty(_read_config_file(config_path)))

    if overrides:
        merged.update(_drop_empty(overrides))

    if not merged.get("endpoint"):
        raise ConfigError(f"{ENDPOINT_ENV_VAR} environment variable is not set.")

    try:
        validate(instance=merged, schema=PUSH_CONFIG_SCHEMA)
    except ValidationError as e:
        field = ".".join(str(part) for part in e.path) or "configuration"
        raise ConfigError(f"Invalid {field}: {e.message}") from e

    return PushConfig(
        endpoint=merged["endpoint"].rstrip("/"),
        run_id=merged["run_id"],
        job_name=merged["job_name"],
        results_path=merged["results_path"],
        timeout_seconds=merged.get("timeout_seconds"),
    )

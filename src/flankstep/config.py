"""
Step configuration read from environment variables.
"""

import os
from dataclasses import dataclass, fields
from typing import List, Mapping, Optional

from flankstep.constants import (
    DEFAULT_RESULTS_DIR,
    ENV_COMMAND_FLAGS,
    ENV_CONFIG_PATH,
    ENV_DEPLOY_DIR,
    ENV_RESULTS_DIR,
    ENV_SERVICE_ACCOUNT_JSON,
    ENV_VERSION,
    SECRET_MASK,
)
from flankstep.exceptions import ConfigValidationError

SECRET_FIELDS = frozenset({"service_account_json"})


@dataclass(frozen=True)
class StepConfig:
    """Typed step inputs."""

    service_account_json: str
    config_path: str
    version: str
    deploy_dir: str
    command_flags: str = ""
    results_dir: str = DEFAULT_RESULTS_DIR

    def __repr__(self) -> str:
        return "StepConfig(" + ", ".join(format_config(self)) + ")"


def _required(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name, "").strip()
    if not value:
        raise ConfigValidationError(
            f"Issue with input: {name} is required", field=name
        )
    return value


def load_config(
    environ: Optional[Mapping[str, str]] = None,
    results_dir: Optional[str] = None,
    deploy_dir: Optional[str] = None,
) -> StepConfig:
    """
    Build a StepConfig from step inputs.

    Parameters:
        environ: Mapping to read inputs from; defaults to ``os.environ``.
        results_dir: Overrides the ``results_dir`` input when given.
        deploy_dir: Overrides ``BITRISE_DEPLOY_DIR`` when given.

    Raises:
        ConfigValidationError: A required input is missing or ``config_path``
            does not point to a file.
    """
    if environ is None:
        environ = os.environ

    service_account_json = _required(environ, ENV_SERVICE_ACCOUNT_JSON)
    config_path = _required(environ, ENV_CONFIG_PATH)
    if not os.path.isfile(config_path):
        raise ConfigValidationError(
            f"Issue with input: {ENV_CONFIG_PATH} does not exist",
            field=ENV_CONFIG_PATH,
            value=config_path,
        )
    version = _required(environ, ENV_VERSION)
    deploy_dir = deploy_dir or _required(environ, ENV_DEPLOY_DIR)
    results_dir = (
        results_dir or environ.get(ENV_RESULTS_DIR, "").strip() or DEFAULT_RESULTS_DIR
    )

    return StepConfig(
        service_account_json=service_account_json,
        config_path=config_path,
        version=version,
        deploy_dir=deploy_dir,
        command_flags=environ.get(ENV_COMMAND_FLAGS, ""),
        results_dir=results_dir,
    )


def format_config(config: StepConfig) -> List[str]:
    """Return ``name: value`` lines for display, with secrets masked."""
    lines = []
    for f in fields(config):
        value = getattr(config, f.name)
        if f.name in SECRET_FIELDS and value:
            value = SECRET_MASK
        lines.append(f"{f.name}: {value}")
    return lines

from pathlib import Path

import platformdirs
import pytest
import requests

from flankstep.constants import (
    ENV_COMMAND_FLAGS,
    ENV_CONFIG_PATH,
    ENV_DEPLOY_DIR,
    ENV_RESULTS_DIR,
    ENV_SERVICE_ACCOUNT_JSON,
    ENV_VERSION,
    LOG_LEVEL_ENV_VAR,
)

_NETWORK_BLOCK_MSG = (
    "Network access is blocked during tests. Mock requests.* or Session.request."
)

STEP_INPUT_VARS = (
    ENV_SERVICE_ACCOUNT_JSON,
    ENV_CONFIG_PATH,
    ENV_VERSION,
    ENV_COMMAND_FLAGS,
    ENV_RESULTS_DIR,
    ENV_DEPLOY_DIR,
    LOG_LEVEL_ENV_VAR,
)


def _block_network(*_args, **_kwargs):
    """
    Prevent network calls in tests by raising a RuntimeError.

    Raises:
        RuntimeError: with `_NETWORK_BLOCK_MSG` indicating that network access is blocked during tests.
    """
    raise RuntimeError(_NETWORK_BLOCK_MSG)


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Clear step inputs from the environment and point platformdirs at a temp log dir.
    """
    for name in STEP_INPUT_VARS:
        monkeypatch.delenv(name, raising=False)

    log_dir = tmp_path_factory.mktemp("flankstep") / "log"
    log_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setattr(
        platformdirs, "user_log_dir", lambda *_args, **_kwargs: str(log_dir)
    )


def pytest_runtest_setup():
    """
    Prevent real network requests during tests by replacing HTTP entry points with blocking callables.
    """
    requests.get = _block_network
    requests.post = _block_network
    requests.head = _block_network
    requests.Session.request = _block_network


@pytest.fixture
def flank_config(tmp_path: Path) -> Path:
    """An android flank config file."""
    path = tmp_path / "flank.yml"
    path.write_text("gcloud:\n  app: ./app.apk\n  test: ./test.apk\n")
    return path


@pytest.fixture
def step_env(tmp_path: Path, flank_config: Path) -> dict:
    """A complete set of step inputs."""
    deploy_dir = tmp_path / "deploy"
    deploy_dir.mkdir()
    return {
        ENV_SERVICE_ACCOUNT_JSON: '{"type": "service_account"}',
        ENV_CONFIG_PATH: str(flank_config),
        ENV_VERSION: "latest",
        ENV_COMMAND_FLAGS: "--dry",
        ENV_DEPLOY_DIR: str(deploy_dir),
    }

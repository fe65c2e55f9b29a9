"""
End-to-end tests for the flankstep command line entry point.
"""

import os
from pathlib import Path

import pytest

from flankstep import cli
from flankstep.constants import ENV_VERSION
from flankstep.exceptions import (
    DownloadResolutionError,
    NetworkError,
    RemoteListingError,
)

DOWNLOAD_URL = "https://github.com/TestArmada/flank/releases/download/v1.1.0/flank.jar"


@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    root = tmp_path / "results"
    run_dir = root / "2024-01-01_10-00-00.000000_abcd"
    (run_dir / "matrix_0").mkdir(parents=True)
    (run_dir / "JUnitReport.xml").write_text("<testsuites/>")
    (run_dir / "matrix_0" / "test_result_0.xml").write_text("<nested/>")
    return root


@pytest.fixture
def step(monkeypatch, mocker, step_env, tmp_path):
    """Configure the environment and mock the network and process collaborators."""
    for name, value in step_env.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)

    mocks = {
        "resolve": mocker.patch.object(
            cli, "resolve_download_url", return_value=DOWNLOAD_URL
        ),
        "download": mocker.patch.object(
            cli, "download_binary", return_value=str(tmp_path / "flank.jar")
        ),
        "store": mocker.patch.object(
            cli, "store_credentials", return_value=str(tmp_path / "cred.json")
        ),
        "run": mocker.patch.object(cli, "run_flank", return_value=0),
    }
    mocks["env"] = step_env
    return mocks


def test_main_runs_flank_and_exports(step, results_dir):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--results-dir", str(results_dir)])

    assert exc_info.value.code == 0
    step["resolve"].assert_called_once_with(
        "https://github.com/TestArmada/flank", "latest"
    )
    step["download"].assert_called_once_with(DOWNLOAD_URL)

    command, env = step["run"].call_args[0]
    assert command[:7] == [
        "java",
        "-jar",
        step["download"].return_value,
        "android",
        "run",
        "-c",
        step["env"]["config_path"],
    ]
    assert command[7:] == ["--dry"]
    assert env["GOOGLE_APPLICATION_CREDENTIALS"] == step["store"].return_value
    assert "GOOGLE_APPLICATION_CREDENTIALS" not in os.environ

    deploy_dir = Path(step["env"]["BITRISE_DEPLOY_DIR"])
    assert os.listdir(deploy_dir) == ["JUnitReport.xml"]


def test_main_exits_with_flank_status(step, results_dir):
    step["run"].return_value = 10

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--results-dir", str(results_dir)])

    assert exc_info.value.code == 10
    assert os.listdir(step["env"]["BITRISE_DEPLOY_DIR"]) == ["JUnitReport.xml"]


def test_main_fails_on_missing_input(step, monkeypatch):
    monkeypatch.delenv(ENV_VERSION)

    with pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 1
    step["resolve"].assert_not_called()


def test_main_fails_when_latest_cannot_be_resolved(step):
    step["resolve"].side_effect = DownloadResolutionError(
        "latest", RemoteListingError("git failed")
    )

    with pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 1
    step["download"].assert_not_called()


def test_main_fails_when_download_fails(step):
    step["download"].side_effect = NetworkError("refused", url=DOWNLOAD_URL)

    with pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 1
    step["run"].assert_not_called()


def test_main_fails_when_no_results(step, tmp_path):
    empty = tmp_path / "empty-results"
    empty.mkdir()

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--results-dir", str(empty)])

    assert exc_info.value.code == 1
    step["run"].assert_called_once()


def test_deploy_dir_override(step, results_dir, tmp_path):
    override = tmp_path / "override"
    override.mkdir()

    with pytest.raises(SystemExit):
        cli.main(["--results-dir", str(results_dir), "--deploy-dir", str(override)])

    assert os.listdir(override) == ["JUnitReport.xml"]
    assert os.listdir(step["env"]["BITRISE_DEPLOY_DIR"]) == []


def test_log_file_option(step, results_dir, mocker):
    add_file_logging = mocker.patch.object(cli.log_utils, "add_file_logging")

    with pytest.raises(SystemExit):
        cli.main(["--results-dir", str(results_dir), "--log-file"])

    add_file_logging.assert_called_once()

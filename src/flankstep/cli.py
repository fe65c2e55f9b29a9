# src/flankstep/cli.py

import argparse
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import platformdirs

from flankstep import log_utils
from flankstep.artifacts import LoggingObserver, export_latest_artifacts
from flankstep.config import format_config, load_config
from flankstep.constants import FLANK_REPOSITORY_URL, LOGGER_NAME
from flankstep.credentials import credential_environment, store_credentials
from flankstep.download import download_binary, resolve_download_url
from flankstep.exceptions import FlankStepError
from flankstep.platform_detect import detect_platform
from flankstep.runner import (
    build_flank_command,
    exit_status,
    explain_exit_code,
    printable_command,
    run_flank,
)


def failf(message: str) -> NoReturn:
    """Log an error and terminate with status 1."""
    log_utils.logger.error(message)
    sys.exit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flankstep",
        description="Download flank, run it and export the latest results.",
    )
    parser.add_argument(
        "--results-dir",
        help="Directory holding flank run directories (default: ./results or $results_dir)",
    )
    parser.add_argument(
        "--deploy-dir",
        help="Directory to export artifacts to (default: $BITRISE_DEPLOY_DIR)",
    )
    parser.add_argument(
        "--log-level",
        help="Console log level, e.g. DEBUG or INFO",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a rotating log file to the user log directory",
    )
    parser.add_argument(
        "--repository-url",
        default=FLANK_REPOSITORY_URL,
        help=argparse.SUPPRESS,
    )
    return parser


def main(argv: Optional[List[str]] = None) -> NoReturn:
    args = _build_parser().parse_args(argv)

    if args.log_level:
        log_utils.set_log_level(args.log_level)
    if args.log_file:
        log_utils.add_file_logging(
            Path(platformdirs.user_log_dir(LOGGER_NAME)), args.log_level or "INFO"
        )

    #
    # configuration
    try:
        cfg = load_config(results_dir=args.results_dir, deploy_dir=args.deploy_dir)
    except FlankStepError as e:
        failf(str(e))
    log_utils.logger.info("Configs:")
    for line in format_config(cfg):
        log_utils.logger.info(f"- {line}")

    #
    # tool setup
    log_utils.logger.info("Downloading binary")
    try:
        download_url = resolve_download_url(args.repository_url, cfg.version)
    except FlankStepError as e:
        failf(f"Failed to get download URL, error: {e}")
    log_utils.logger.debug(f"Download URL: {download_url}")

    try:
        binary_path = download_binary(download_url)
    except FlankStepError as e:
        failf(f"Failed to download binary, error: {e}")
    log_utils.logger.info("- Done")

    try:
        credential_path = store_credentials(cfg.service_account_json)
    except FlankStepError as e:
        failf(f"Failed to store credential file, error: {e}")

    #
    # running the tool
    log_utils.logger.info("Running test")
    try:
        platform = detect_platform(cfg.config_path)
    except FlankStepError as e:
        failf(f"Failed to detect platform, error: {e}")
    log_utils.logger.info(f"- Detected platform: {platform}")

    try:
        command = build_flank_command(
            binary_path, platform, cfg.config_path, cfg.command_flags
        )
    except FlankStepError as e:
        failf(f"Failed to split command flags, error: {e}")

    log_utils.logger.info(f"$ {printable_command(command)}")
    try:
        returncode = run_flank(command, credential_environment(credential_path))
    except FlankStepError as e:
        failf(f"Failed to run flank, error: {e}")

    #
    # exporting generated artifacts
    log_utils.logger.info("Exporting artifacts")
    try:
        run_dir, copied = export_latest_artifacts(
            cfg.results_dir, cfg.deploy_dir, LoggingObserver(log_utils.logger)
        )
    except FlankStepError as e:
        failf(f"Failed to export artifacts, error: {e}")
    log_utils.logger.debug(f"Exported {len(copied)} file(s) from {run_dir}")
    log_utils.logger.info("- Done")

    status = exit_status(returncode)
    if status == 0:
        log_utils.logger.info(explain_exit_code(status))
    else:
        log_utils.logger.error(
            f"Flank exited with status {status}: {explain_exit_code(status)}"
        )
    sys.exit(status)


if __name__ == "__main__":
    main()

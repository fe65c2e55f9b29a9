"""
Flank process invocation and exit status reporting.
"""

import shlex
import subprocess
from typing import List, Mapping

from flankstep.constants import (
    ENV_COMMAND_FLAGS,
    FLANK_EXIT_CODES,
    FLANK_UNKNOWN_EXIT_MESSAGE,
)
from flankstep.exceptions import ConfigValidationError, RunnerError


def build_flank_command(
    binary_path: str, platform: str, config_path: str, command_flags: str = ""
) -> List[str]:
    """
    Build ``java -jar <binary> <platform> run -c <config> [flags...]``.

    Raises:
        ConfigValidationError: ``command_flags`` is not valid shell quoting.
    """
    try:
        extra = shlex.split(command_flags or "")
    except ValueError as e:
        raise ConfigValidationError(
            "Failed to split command flags",
            field=ENV_COMMAND_FLAGS,
            value=command_flags,
            details=str(e),
        ) from e
    return ["java", "-jar", binary_path, platform, "run", "-c", config_path, *extra]


def printable_command(command: List[str]) -> str:
    return shlex.join(command)


def run_flank(command: List[str], env: Mapping[str, str]) -> int:
    """
    Run flank attached to the current stdin/stdout/stderr.

    Returns:
        int: The raw return code (negative when killed by a signal).

    Raises:
        RunnerError: The command could not be started.
    """
    try:
        completed = subprocess.run(command, env=dict(env), check=False)
    except OSError as e:
        raise RunnerError(f"Failed to start {command[0]}", details=str(e)) from e
    return completed.returncode


def exit_status(returncode: int) -> int:
    """Map a subprocess return code to a process exit status."""
    return returncode if returncode >= 0 else 1


def explain_exit_code(code: int) -> str:
    """Return a human-readable explanation of a flank exit code."""
    return FLANK_EXIT_CODES.get(code, f"{FLANK_UNKNOWN_EXIT_MESSAGE} ({code})")

"""
Service account credential handling.

The credential is written to a private temp file and its path is handed to
the flank process through an explicit environment mapping.
"""

import os
import tempfile
from typing import Dict, Mapping, Optional

from flankstep.constants import (
    CREDENTIAL_FILE_NAME,
    CREDENTIAL_FILE_PERMISSIONS,
    CREDENTIAL_TEMP_PREFIX,
    CREDENTIALS_ENV_VAR,
)
from flankstep.exceptions import FileSystemError


def store_credentials(content: str, target_dir: Optional[str] = None) -> str:
    """
    Write the service account JSON to ``cred.json`` and return its path.

    Raises:
        FileSystemError: The file could not be created or written.
    """
    try:
        if target_dir is None:
            target_dir = tempfile.mkdtemp(prefix=CREDENTIAL_TEMP_PREFIX)
        path = os.path.join(target_dir, CREDENTIAL_FILE_NAME)
        fd = os.open(
            path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CREDENTIAL_FILE_PERMISSIONS
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise FileSystemError(
            "Failed to store credential file", path=target_dir, details=str(e)
        ) from e
    return path


def credential_environment(
    credential_path: str, base_env: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Return a copy of ``base_env`` (default ``os.environ``) pointing gcloud at the credential."""
    env = dict(os.environ if base_env is None else base_env)
    env[CREDENTIALS_ENV_VAR] = credential_path
    return env

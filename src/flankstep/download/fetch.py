"""
Binary download for the flank release asset.
"""

import os
import tempfile
import time
from typing import Optional

import requests

from flankstep.constants import (
    BINARY_TEMP_PREFIX,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_REQUEST_TIMEOUT,
    FLANK_BINARY_NAME,
)
from flankstep.exceptions import DownloadError, HTTPError, NetworkError
from flankstep.log_utils import logger


def download_binary(url: str, target_dir: Optional[str] = None) -> str:
    """
    Download the flank binary and return its local path.

    The body is streamed to a temporary file next to the destination and moved
    into place once complete, so a failed download never leaves a truncated
    ``flank.jar`` behind.

    Parameters:
        url (str): Release asset URL.
        target_dir (Optional[str]): Directory to store the binary in; a fresh
            temporary directory is created when omitted.

    Returns:
        str: Path of the downloaded ``flank.jar``.

    Raises:
        HTTPError: The server answered with a status other than 200.
        NetworkError: The request failed below the HTTP layer.
        DownloadError: The binary could not be written to disk.
    """
    if target_dir is None:
        target_dir = tempfile.mkdtemp(prefix=BINARY_TEMP_PREFIX)
    binary_path = os.path.join(target_dir, FLANK_BINARY_NAME)
    temp_path = f"{binary_path}.tmp.{os.getpid()}.{int(time.time() * 1000)}"

    logger.debug(f"Downloading {url} to {binary_path}")
    try:
        with requests.get(url, stream=True, timeout=DEFAULT_REQUEST_TIMEOUT) as response:
            if response.status_code != 200:
                raise HTTPError(
                    f"Unsuccessful status code: {response.status_code}",
                    status_code=response.status_code,
                    url=url,
                )
            os.makedirs(target_dir, exist_ok=True)
            with open(temp_path, "wb") as f:
                for chunk in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        os.replace(temp_path, binary_path)
    except requests.RequestException as e:
        raise NetworkError(f"Failed to download {url}", url=url, details=str(e)) from e
    except OSError as e:
        raise DownloadError(
            f"Failed to write {binary_path}", url=url, details=str(e)
        ) from e
    finally:
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError:
                pass

    logger.debug(f"Downloaded {os.path.getsize(binary_path)} bytes")
    return binary_path

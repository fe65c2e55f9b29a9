"""
flankstep Download Subsystem

Resolves which flank release to fetch and downloads it.

Core Components:
- version: tag parsing and latest-version resolution
- locator: download URL construction
- fetch: binary download
"""

from .fetch import download_binary
from .locator import build_release_url, resolve_download_url
from .version import (
    ResolvedVersion,
    SemanticVersion,
    find_latest_version,
    get_latest_version,
    list_remote_tags,
    normalize_version,
    parse_git_tags,
)

__all__ = [
    "ResolvedVersion",
    "SemanticVersion",
    "parse_git_tags",
    "normalize_version",
    "find_latest_version",
    "list_remote_tags",
    "get_latest_version",
    "build_release_url",
    "resolve_download_url",
    "download_binary",
]

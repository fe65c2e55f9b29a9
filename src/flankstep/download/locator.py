"""
Download URL construction for flank releases.
"""

from flankstep.constants import (
    FLANK_BINARY_NAME,
    LATEST_VERSION_TOKEN,
    RELEASE_DOWNLOAD_PATH,
    RESOLVED_VERSION_PREFIX,
)
from flankstep.exceptions import DownloadResolutionError, VersionResolutionError

from .version import TagLister, get_latest_version, list_remote_tags


def build_release_url(repo_url: str, release_tag: str) -> str:
    """Compose ``<repo>/releases/download/<tag>/flank.jar``."""
    return (
        f"{repo_url.rstrip('/')}/{RELEASE_DOWNLOAD_PATH}/"
        f"{release_tag}/{FLANK_BINARY_NAME}"
    )


def resolve_download_url(
    repo_url: str, version: str, list_tags: TagLister = list_remote_tags
) -> str:
    """
    Return the flank.jar download URL for a requested version.

    "latest" is resolved against the repository's tags and gets the "v" tag
    prefix. Any other token (a tag, a branch-like name such as "pre-release")
    is used verbatim, without validation or prefixing.

    Parameters:
        repo_url (str): Repository base URL; tags are listed from it as well.
        version (str): "latest" or an explicit release tag.
        list_tags (TagLister): Tag listing collaborator used for "latest".

    Raises:
        DownloadResolutionError: "latest" could not be resolved; ``cause`` holds
            the RemoteListingError or NoValidVersionError.
    """
    if version != LATEST_VERSION_TOKEN:
        return build_release_url(repo_url, version)

    try:
        latest = get_latest_version(repo_url, list_tags=list_tags)
    except VersionResolutionError as e:
        raise DownloadResolutionError(version, e) from e
    return build_release_url(repo_url, f"{RESOLVED_VERSION_PREFIX}{latest}")

"""
Version Resolution for the flank release repository

This module turns the output of ``git ls-remote --tags`` into candidate tag
names and picks the greatest one under semantic versioning precedence.
"""

import re
import subprocess
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from packaging.version import InvalidVersion, Version

from flankstep.constants import GIT_TAG_REF_PREFIX
from flankstep.exceptions import NoValidVersionError, RemoteListingError

TagLister = Callable[[str], str]

# MAJOR[.MINOR[.PATCH]][-PRE][+BUILD]; a pre-release without "-" starts with a letter
SEMVER_RX = re.compile(
    r"^(?P<release>\d+(?:\.\d+)*)"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)"
    r"|(?P<bare_pre>[A-Za-z][0-9A-Za-z-]*(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def _identifier_key(identifier: str) -> Tuple[int, int, str]:
    # numeric identifiers sort numerically and below alphanumeric ones
    if identifier.isdigit():
        return (0, int(identifier), "")
    return (1, 0, identifier)


@dataclass(frozen=True)
class SemanticVersion:
    """
    A parsed ``major.minor.patch[-pre][+build]`` version.

    ``release`` holds the numeric core; missing minor and patch segments
    count as zero. Build metadata is kept for display only.
    """

    release: Version
    prerelease: Tuple[str, ...] = ()
    build: Tuple[str, ...] = ()

    @property
    def precedence(self) -> tuple:
        """Sort key: release, then pre-release identifiers; build is ignored."""
        if not self.prerelease:
            return (self.release, 1, ())
        return (
            self.release,
            0,
            tuple(_identifier_key(part) for part in self.prerelease),
        )

    def __str__(self) -> str:
        segments = list(self.release.release)
        segments += [0] * (3 - len(segments))
        text = ".".join(str(segment) for segment in segments)
        if self.prerelease:
            text += "-" + ".".join(self.prerelease)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


@dataclass(frozen=True, order=True)
class ResolvedVersion:
    """A tag that parsed as a version, ordered by version precedence."""

    precedence: tuple = field(repr=False)
    canonical: str
    version: SemanticVersion = field(compare=False)
    tag: str = field(compare=False)

    @classmethod
    def from_version(cls, version: SemanticVersion, tag: str) -> "ResolvedVersion":
        return cls(version.precedence, str(version), version, tag)

    def __str__(self) -> str:
        return self.canonical


def _strip_v_prefix(tag: str) -> str:
    return tag[1:] if tag[:1] in ("v", "V") else tag


def parse_git_tags(git_output: str) -> List[str]:
    """
    Extract tag names from ``git ls-remote --tags`` output.

    Every line of the form ``<hash>\\t<ref>`` contributes its ref with the
    ``refs/tags/`` prefix removed. Lines that do not split into exactly two
    tab-separated fields are noise (warnings, banners) and are skipped.

    Parameters:
        git_output (str): Raw multi-line listing.

    Returns:
        List[str]: Tag names in input order; not validated as versions.
    """
    tags = []
    for line in git_output.split("\n"):
        ref = line.split("\t")
        if len(ref) == 2:
            name = ref[1]
            if name.startswith(GIT_TAG_REF_PREFIX):
                name = name[len(GIT_TAG_REF_PREFIX) :]
            tags.append(name)
    return tags


def normalize_version(tag: Optional[str]) -> Optional[SemanticVersion]:
    """
    Parse a tag name into a SemanticVersion.

    A single leading "v" is accepted. Any suffix after ``-`` is a pre-release
    (``1.2.0-1``, ``1.2.0-SNAPSHOT``) and ranks below the release; a
    pre-release starting with a letter may omit the dash (``1.2.0rc1``).

    Returns:
        Optional[SemanticVersion]: The parsed version, or None for empty or
        unparsable tags.
    """
    if tag is None:
        return None

    m = SEMVER_RX.match(_strip_v_prefix(tag.strip()))
    if not m:
        return None

    try:
        release = Version(m.group("release"))
    except InvalidVersion:
        return None

    prerelease = m.group("pre") or m.group("bare_pre")
    build = m.group("build")
    return SemanticVersion(
        release,
        tuple(prerelease.split(".")) if prerelease else (),
        tuple(build.split(".")) if build else (),
    )


def find_latest_version(tags: Iterable[str]) -> Optional[ResolvedVersion]:
    """
    Return the greatest tag that parses as a version.

    Unparsable tags like "pre-release" are ignored. Versions of equal
    precedence ("1.0.0+a" and "1.0.0+b") are ordered by their text so the
    result does not depend on the order of ``tags``.

    Returns:
        Optional[ResolvedVersion]: The latest version, or None if no tag parses.
    """
    latest: Optional[ResolvedVersion] = None
    for tag in tags:
        version = normalize_version(tag)
        if version is None:
            continue
        candidate = ResolvedVersion.from_version(version, tag)
        if latest is None or candidate > latest:
            latest = candidate
    return latest


def list_remote_tags(repo_url: str) -> str:
    """
    List the tags of a remote repository with ``git ls-remote``.

    Returns:
        str: The trimmed combined stdout/stderr of the command.

    Raises:
        RemoteListingError: If git is missing or exits with a non-zero status.
    """
    try:
        result = subprocess.run(
            ["git", "ls-remote", "--tags", "--quiet", repo_url],
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            check=False,
        )
    except OSError as e:
        raise RemoteListingError(
            f"Failed to run git command: {e}", repo_url=repo_url
        ) from e

    output = result.stdout.strip()
    if result.returncode != 0:
        raise RemoteListingError(
            f"Failed to run git command, exit status {result.returncode}",
            repo_url=repo_url,
            output=output,
        )
    return output


def get_latest_version(
    repo_url: str, list_tags: TagLister = list_remote_tags
) -> ResolvedVersion:
    """
    Resolve the latest released version of a remote repository.

    Parameters:
        repo_url (str): Repository URL (or local path) understood by ``list_tags``.
        list_tags (TagLister): Returns the raw tag listing for a repository.

    Raises:
        RemoteListingError: The tag listing could not be obtained.
        NoValidVersionError: The listing holds no tag that parses as a version.
    """
    latest = find_latest_version(parse_git_tags(list_tags(repo_url)))
    if latest is None:
        raise NoValidVersionError(repo_url)
    return latest

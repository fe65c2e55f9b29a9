"""
Artifact export for flank run results.

Flank writes each run into its own timestamped directory under the results
root. This module picks the most recently modified run directory and copies
its top-level files into the deploy directory.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from flankstep.exceptions import CopyError, DirectoryListingError

RunCandidate = Tuple[str, int]
CopiedArtifact = Tuple[str, str]


class ArtifactObserver(ABC):
    """Receives a notification for every artifact copied during export."""

    @abstractmethod
    def copied(self, source: str, destination: str) -> None:
        """Called once per file, after it has been written to ``destination``."""


class NullObserver(ArtifactObserver):
    """Observer that ignores notifications."""

    def copied(self, source: str, destination: str) -> None:
        pass


NULL_OBSERVER = NullObserver()


class LoggingObserver(ArtifactObserver):
    """Observer that reports each copy on a logger."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def copied(self, source: str, destination: str) -> None:
        self.logger.info(f"- copied: {source} -> {destination}")


def _scan(directory: str) -> List[os.DirEntry]:
    try:
        with os.scandir(directory) as iterator:
            return list(iterator)
    except OSError as e:
        raise DirectoryListingError(
            f"Failed to list directory {directory}", path=directory, details=str(e)
        ) from e


def pick_latest_run_directory(candidates: Iterable[RunCandidate]) -> Optional[str]:
    """
    Pick the most recently modified directory from ``(path, mtime)`` pairs.

    A candidate replaces the current pick when its mtime is not earlier than
    the current one, so on equal mtimes the candidate seen last wins.

    Returns:
        Optional[str]: The chosen path, or None if there are no candidates.
    """
    latest_dir: Optional[str] = None
    latest_mtime: Optional[int] = None
    for path, mtime in candidates:
        if latest_mtime is None or not mtime < latest_mtime:
            latest_dir, latest_mtime = path, mtime
    return latest_dir


def select_latest_run_directory(results_root: str) -> str:
    """
    Return the run directory under ``results_root`` with the newest mtime.

    Only immediate subdirectories are considered (symlinks are not followed);
    they are visited in the order the filesystem lists them.

    Raises:
        DirectoryListingError: ``results_root`` cannot be listed or holds no
            run directory.
    """
    candidates = [
        (
            os.path.join(results_root, entry.name),
            entry.stat(follow_symlinks=False).st_mtime_ns,
        )
        for entry in _scan(results_root)
        if entry.is_dir(follow_symlinks=False)
    ]
    latest_dir = pick_latest_run_directory(candidates)
    if latest_dir is None:
        raise DirectoryListingError(
            f"No run directory found in {results_root}", path=results_root
        )
    return latest_dir


def export_artifacts(
    run_dir: str,
    destination_dir: str,
    observer: ArtifactObserver = NULL_OBSERVER,
) -> List[CopiedArtifact]:
    """
    Copy the top-level files of ``run_dir`` into ``destination_dir``.

    Subdirectories are skipped, never traversed. File contents are copied
    byte for byte under the same name, replacing existing files. The first
    failure aborts the export; files already copied stay in place.

    Parameters:
        run_dir (str): The selected run directory.
        destination_dir (str): Existing directory to copy into.
        observer (ArtifactObserver): Notified after each successful copy.

    Returns:
        List[CopiedArtifact]: ``(source, destination)`` for every copied file.

    Raises:
        DirectoryListingError: ``run_dir`` cannot be listed.
        CopyError: A file could not be read or written.
    """
    copied: List[CopiedArtifact] = []
    for entry in _scan(run_dir):
        if entry.is_dir(follow_symlinks=False):
            continue

        source = os.path.join(run_dir, entry.name)
        destination = os.path.join(destination_dir, entry.name)
        try:
            with open(source, "rb") as src:
                data = src.read()
        except OSError as e:
            raise CopyError(
                f"Failed to read {source}", path=source, details=str(e)
            ) from e
        try:
            with open(destination, "wb") as dest:
                dest.write(data)
        except OSError as e:
            raise CopyError(
                f"Failed to write {destination}", path=destination, details=str(e)
            ) from e

        observer.copied(source, destination)
        copied.append((source, destination))
    return copied


def export_latest_artifacts(
    results_root: str,
    destination_dir: str,
    observer: ArtifactObserver = NULL_OBSERVER,
) -> Tuple[str, List[CopiedArtifact]]:
    """Select the latest run directory and export its files; returns ``(run_dir, copied)``."""
    run_dir = select_latest_run_directory(results_root)
    return run_dir, export_artifacts(run_dir, destination_dir, observer)

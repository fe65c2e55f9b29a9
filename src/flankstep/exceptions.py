"""
Custom exceptions for flankstep.

This module defines domain-specific exceptions so callers can tell a broken
remote apart from a repository without releases, and a missing results
directory apart from a failed copy.
"""

from typing import Optional


class FlankStepError(Exception):
    """
    Base exception for all flankstep errors.

    All custom exceptions in flankstep inherit from this class so the CLI
    can catch every step failure in one place.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: The primary error message.
            details: Optional additional context about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(FlankStepError):
    """
    Exception raised when step configuration is invalid or missing.

    This includes:
    - Missing required step inputs
    - Invalid input values
    - Flank configuration file parsing errors
    """

    pass


class ConfigFileError(ConfigurationError):
    """Exception raised when the flank configuration file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path


class ConfigValidationError(ConfigurationError):
    """
    Exception raised when a step input fails validation.

    Attributes:
        field: The name of the input that failed validation.
        value: The offending value, if it is safe to show.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value


# =============================================================================
# Version Resolution Errors
# =============================================================================


class VersionResolutionError(FlankStepError):
    """
    Base exception for failures while resolving the latest release.

    Attributes:
        repo_url: The repository whose tags were being resolved.
    """

    def __init__(
        self,
        message: str,
        repo_url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.repo_url = repo_url


class RemoteListingError(VersionResolutionError):
    """
    Exception raised when listing the remote tags fails.

    Covers network, authentication and transport failures of
    ``git ls-remote`` as well as a missing git executable.

    Attributes:
        output: Combined output of the failed listing command.
    """

    def __init__(
        self,
        message: str,
        repo_url: Optional[str] = None,
        output: Optional[str] = None,
    ) -> None:
        super().__init__(
            message, repo_url, details=f"output: {output}" if output else None
        )
        self.output = output


class NoValidVersionError(VersionResolutionError):
    """Exception raised when the remote lists no tag that parses as a version."""

    def __init__(self, repo_url: Optional[str] = None) -> None:
        super().__init__(
            "Unable to find latest version",
            repo_url,
            details=f"no valid version tags in {repo_url}" if repo_url else None,
        )


class DownloadResolutionError(FlankStepError):
    """
    Exception raised when a version token cannot be turned into a download URL.

    Attributes:
        version: The requested version token.
        cause: The underlying RemoteListingError or NoValidVersionError.
    """

    def __init__(self, version: str, cause: VersionResolutionError) -> None:
        super().__init__(
            f"Failed to resolve download URL for version '{version}'",
            details=str(cause),
        )
        self.version = version
        self.cause = cause


# =============================================================================
# Download Errors
# =============================================================================


class DownloadError(FlankStepError):
    """
    Base exception for binary download errors.

    Attributes:
        url: The URL that was being downloaded when the error occurred.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url


class NetworkError(DownloadError):
    """
    Exception raised for network-related download failures.

    This includes:
    - Connection timeouts
    - DNS resolution failures
    - Connection refused errors
    - SSL/TLS errors
    """

    pass


class HTTPError(DownloadError):
    """
    Exception raised when the release server answers with a non-200 status.

    Attributes:
        status_code: The HTTP status code returned by the server.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, url, details)
        self.status_code = status_code


# =============================================================================
# File System Errors
# =============================================================================


class FileSystemError(FlankStepError):
    """
    Exception raised for file system-related errors.

    Attributes:
        path: The file path that caused the error.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path


class DirectoryListingError(FileSystemError):
    """
    Exception raised when a results or run directory cannot be enumerated.

    A missing directory, a permission problem and a results root without any
    run directory all end up here.
    """

    pass


class CopyError(FileSystemError):
    """Exception raised when reading or writing an artifact fails during export."""

    pass


# =============================================================================
# Runner Errors
# =============================================================================


class RunnerError(FlankStepError):
    """Exception raised when the flank process cannot be started."""

    pass

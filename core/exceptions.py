"""Exception hierarchy for the instance launcher."""

from typing import Optional


class LauncherError(Exception):
    """Base exception for the instance launcher."""
    pass


class ConfigurationError(LauncherError):
    """Service or launch configuration is missing or invalid."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []


class ManifestError(LauncherError):
    """Base class for manifest staging problems."""
    pass


class ManifestNotFoundError(ManifestError):
    """Manifest source file does not exist."""

    def __init__(self, path: str):
        super().__init__(f"Manifest not found: {path}")
        self.path = path


class ManifestReadError(ManifestError):
    """Staged manifest could not be read."""
    pass


class ServiceError(LauncherError):
    """Remote service call failed.

    Raised by service facade implementations. The status poller never
    retries these; they terminate the run.
    """
    pass


class InvalidCredentialsError(ServiceError):
    """Configured credentials were rejected."""
    pass


class NotAuthorizedError(ServiceError):
    """Credentials are valid but lack permission for the operation."""
    pass


class ResourceNotFoundError(ServiceError):
    """Requested application, environment or instance does not exist."""
    pass


class RunInterruptedError(LauncherError):
    """Run was cancelled while waiting."""
    pass

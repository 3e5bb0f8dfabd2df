"""Exception classes for release-sentinel operations."""


class ReleaseSentinelError(Exception):
    """Base exception for release-sentinel operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the product, locale or URL involved.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class MalformedVersionError(ReleaseSentinelError, ValueError):
    """Raised when a version string does not match the version grammar."""

    error_prefix = "Malformed version"


class FetchFailedError(ReleaseSentinelError):
    """Raised when a network fetch fails, times out or returns bad status."""

    error_prefix = "Fetch failed"

    def __init__(
        self,
        message: str,
        target: str | None = None,
        status: int | None = None,
    ) -> None:
        """Initialize fetch error.

        Args:
            message: Error message describing the failure.
            target: URL that was requested.
            status: HTTP status code, if a response was received.

        """
        super().__init__(message, target)
        self.status = status


class DiscoveryError(ReleaseSentinelError):
    """Raised when no published version could be discovered."""

    error_prefix = "Version discovery failed"


class ChecksumNotFoundError(ReleaseSentinelError):
    """Raised when a manifest has no line for an arch/locale/version."""

    error_prefix = "Checksum not found"


class InvariantViolationError(ReleaseSentinelError):
    """Raised when known-good release data breaks a structural invariant."""

    error_prefix = "Invariant violated"


class UnknownLocaleError(ReleaseSentinelError, ValueError):
    """Raised when a locale is not known for a product."""

    error_prefix = "Unknown locale"


class CatalogError(ReleaseSentinelError):
    """Raised when a catalog entry is missing or invalid."""

    error_prefix = "Catalog error"


class ConfigurationError(ReleaseSentinelError):
    """Raised when configuration or logging setup fails."""

    error_prefix = "Configuration error"

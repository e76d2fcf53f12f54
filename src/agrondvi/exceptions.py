"""AgroNDVI exception hierarchy.

All exceptions follow a three-part message pattern: what failed,
likely cause, and suggested fix. Each class also carries a
machine-readable ``code`` and the ``http_status`` an API boundary
should answer with.
"""

from __future__ import annotations

from typing import Any


class AgroNdviError(Exception):
    """Base exception for all AgroNDVI errors.

    Args:
        what: Description of what failed.
        cause: Likely cause of the failure.
        fix: Suggested action to resolve the issue.

    Example:
        >>> raise AgroNdviError(
        ...     what="Operation failed",
        ...     cause="Unexpected internal state",
        ...     fix="Please report this issue",
        ... )
    """

    code: str = "agrondvi_error"
    http_status: int = 500

    def __init__(
        self,
        what: str,
        cause: str = "",
        fix: str = "",
    ) -> None:
        """Initialize with structured error context.

        Args:
            what: Description of what failed.
            cause: Likely cause of the failure.
            fix: Suggested action to resolve the issue.
        """
        self.what = what
        self.cause = cause
        self.fix = fix
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Build the multi-line error message from parts.

        Returns:
            Formatted message with optional Cause and Fix lines.
        """
        parts = [self.what]
        if self.cause:
            parts.append(f"Cause: {self.cause}")
        if self.fix:
            parts.append(f"Fix: {self.fix}")
        return "\n".join(parts)

    def error_body(self) -> dict[str, Any]:
        """Return the JSON error body for an API response.

        Returns:
            Dictionary with ``error``, ``code`` and ``details`` keys.

        Example:
            >>> NoValidPixelsError(what="No valid pixels").error_body()["code"]
            'no_valid_pixels'
        """
        return {
            "error": self.what,
            "code": self.code,
            "details": str(self),
        }


class ConfigurationError(AgroNdviError):
    """Raised for configuration and credential errors.

    Example:
        >>> raise ConfigurationError(
        ...     what="Cannot read credentials file",
        ...     cause="File not found: ~/.agrondvi/credentials.json",
        ...     fix="Create the file or set AGRONDVI_CREDENTIALS",
        ... )
    """

    code = "configuration_error"


class InvalidCoordinatesError(ConfigurationError):
    """Raised when request coordinates are malformed or out of range."""

    code = "invalid_coordinates"
    http_status = 400


class ProviderError(AgroNdviError):
    """Raised for band supplier failures after retries exhausted.

    Example:
        >>> raise ProviderError(
        ...     what="Raster download failed",
        ...     cause="HTTP 503 after 3 retries",
        ...     fix="Check the storage bucket status",
        ... )
    """

    code = "provider_error"
    http_status = 502


class ComputationError(AgroNdviError):
    """Raised when NDVI reduction cannot produce a trustworthy result.

    No partial ``NdviResult`` is ever returned alongside this error.
    """

    code = "computation_failed"


class InputShapeError(ComputationError):
    """Raised when a band is missing or empty before reduction."""

    code = "input_shape"


class NoValidPixelsError(ComputationError):
    """Raised when every processed pixel had a zero denominator.

    The mean NDVI is undefined (0/0) in that case.
    """

    code = "no_valid_pixels"

"""Error types raised by the MoltBook bridge."""

from __future__ import annotations


class MoltbookError(Exception):
    """Base class for all bridge failures."""


class UnsafeEndpointError(MoltbookError):
    """Configured API base is outside the trusted prefix."""


class MissingCredentialError(MoltbookError):
    """No API key in plugin config or environment."""


class InvalidArgumentError(MoltbookError, ValueError):
    """Tool arguments failed validation before any request was made."""


class BridgeTimeoutError(MoltbookError, TimeoutError):
    """Outbound request exceeded its deadline and was cancelled."""

    def __init__(self, path: str, timeout_ms: int) -> None:
        self.path = path
        self.timeout_ms = timeout_ms
        super().__init__(f"MoltBook API request to {path} timed out after {timeout_ms}ms")


class BridgeConnectionError(MoltbookError):
    """Transport failed before a response was received."""


class UpstreamError(MoltbookError):
    """MoltBook answered with a non-success status.

    ``retry_after`` is the raw ``retry-after`` header so callers can back off;
    it is ``None`` when the header was absent.
    """

    def __init__(self, status: int, detail: str, retry_after: str | None = None) -> None:
        self.status = status
        self.detail = detail
        self.retry_after = retry_after
        message = f"MoltBook API {status}: {detail}"
        if retry_after:
            message += f" (retry-after={retry_after}s)"
        super().__init__(message)

    @property
    def retry_after_seconds(self) -> float | None:
        """Retry hint as seconds, or None if absent or not numeric."""
        if self.retry_after is None:
            return None
        try:
            return float(self.retry_after)
        except ValueError:
            return None

"""Custom exception hierarchy for the auth bridge.

Every error maps to exactly one HTTP status and is rendered to the client as
``{"error": message}``.
"""


class BridgeError(Exception):
    """Base exception for all bridge errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(BridgeError):
    """Request body is malformed or lacks a required field."""

    status_code = 400


class MethodNotAllowed(BridgeError):
    """Endpoint only accepts POST (and OPTIONS preflight)."""

    status_code = 405


class ServerMisconfigured(BridgeError):
    """Required upstream credentials are absent from the configuration."""

    status_code = 503


class UpstreamError(BridgeError):
    """Raised when an upstream provider call fails.

    Attributes:
        message: Error message
        provider: Upstream provider name (e.g., 'deezer', 'lastfm')
    """

    status_code = 502

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class UpstreamUnreachable(UpstreamError):
    """Raised when unable to connect to an upstream provider."""


class UpstreamTimeoutError(UpstreamUnreachable):
    """Raised when an upstream provider request times out."""


class UpstreamRejected(UpstreamError):
    """Upstream reported a business error, e.g. an invalid authorization code."""

    status_code = 400


class UpstreamProtocolError(UpstreamError):
    """Upstream replied without a field it must provide, or unparseably."""


class RequestTooLarge(BridgeError):
    """Request body exceeds size limit."""

    status_code = 413

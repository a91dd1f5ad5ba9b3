"""Error types raised by the resource commands."""

from __future__ import annotations

MISSING_FIELD_MESSAGE = "mandatory field is missing"


class ResourceError(RuntimeError):
    """Base class for failures that abort a check/in invocation."""


class MissingFieldError(ResourceError, ValueError):
    """Raised when a mandatory source field is empty or absent."""

    def __init__(self, message: str = MISSING_FIELD_MESSAGE):
        super().__init__(message)


class RequestDecodeError(ResourceError):
    """Raised when the request envelope on stdin is not valid JSON."""


class ResultSourceError(ResourceError):
    """Raised when the analysis service could not be queried."""


class TransportError(ResultSourceError):
    """Raised when the service is unreachable (DNS, connect, timeout, bad URL)."""


class RemoteStatusError(ResultSourceError):
    """Raised when the service answers with anything but HTTP 200."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Status {status_code} : {body}")


class UnauthorizedError(RemoteStatusError):
    """Raised on HTTP 401; the token was rejected."""


class TimelineDecodeError(ResourceError):
    """Raised when the analysis timeline body cannot be decoded."""


class MaterializeError(ResourceError):
    """Raised when the measurement snapshot cannot be written locally."""

"""Error taxonomy surfaced by the JSON client."""

from __future__ import annotations

from enum import Enum
from typing import Optional

DEFAULT_TIMEOUT_MESSAGE = "Request timed out"
DEFAULT_NETWORK_MESSAGE = "Network error occurred"


class ErrorKind(str, Enum):
    """Classification of a failed call."""

    TIMEOUT = "timeout"
    HTTP = "http"
    NETWORK = "network"
    UNCLASSIFIED = "unclassified"


class ClientError(Exception):
    """Base class for classified client failures."""

    kind: ErrorKind = ErrorKind.UNCLASSIFIED

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class RequestTimeoutError(ClientError, TimeoutError):
    """Raised when the caller's cancellation signal fires before a response."""

    kind = ErrorKind.TIMEOUT
    __match_args__ = ("message",)

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or DEFAULT_TIMEOUT_MESSAGE)


class NetworkError(ClientError):
    """Raised when the transport cannot reach the remote host."""

    kind = ErrorKind.NETWORK
    __match_args__ = ("message",)

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or DEFAULT_NETWORK_MESSAGE)


class HttpError(ClientError):
    """Raised when the server answers with a non-2xx status."""

    kind = ErrorKind.HTTP
    __match_args__ = ("status", "message")

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        super().__init__(message or self.default_message(status))

    def __reduce__(self):
        return (type(self), (self.status, self.message))

    @staticmethod
    def default_message(status: int) -> str:
        if 400 <= status < 500:
            return f"Client error: {status}"
        if 500 <= status < 600:
            return f"Server error: {status}"
        return f"HTTP error: {status}"

    def __repr__(self) -> str:
        return f"HttpError({self.status}, {self.message!r})"


def classify(exc: BaseException) -> ErrorKind:
    """Return the error kind for any exception raised by a client call."""
    if isinstance(exc, ClientError):
        return exc.kind
    return ErrorKind.UNCLASSIFIED

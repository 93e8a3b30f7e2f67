from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    INVALID_URL = "INVALID_URL"
    NOT_FOUND = "TWEET_NOT_FOUND"
    TIMEOUT = "TIMEOUT"
    API_ERROR = "API_ERROR"


class TweetError(Exception):
    kind: ErrorKind = ErrorKind.API_ERROR
    default_message = "Tweet request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message}


class InvalidURLError(TweetError):
    kind = ErrorKind.INVALID_URL
    default_message = "Invalid tweet URL"


class TweetNotFoundError(TweetError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Tweet not found or unavailable"


class NetworkTimeoutError(TweetError):
    kind = ErrorKind.TIMEOUT
    default_message = "Request timeout"

    def __init__(self, message: Optional[str] = None, timeout_ms: Optional[int] = None):
        if message is None and timeout_ms is not None:
            message = f"Request exceeded timeout of {timeout_ms}ms"
        super().__init__(message)
        self.timeout_ms = timeout_ms


class ApiError(TweetError):
    kind = ErrorKind.API_ERROR
    default_message = "API request failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["statusCode"] = self.status_code
        return payload


class CacheError(Exception):
    """Failure inside a cache backend. Never surfaced past the retriever."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Cache error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


def status_for_error(error: BaseException) -> int:
    if not isinstance(error, TweetError):
        return 500
    if error.kind is ErrorKind.INVALID_URL:
        return 400
    if error.kind is ErrorKind.NOT_FOUND:
        return 404
    if error.kind is ErrorKind.TIMEOUT:
        return 504
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int) and 400 <= status_code < 600:
        return status_code
    return 500

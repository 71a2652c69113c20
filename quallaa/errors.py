"""Typed failures raised by the ROI tracking engine."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional


class QuallaaError(Exception):
    """Base class for every error the engine raises on purpose."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code
        self.timestamp = datetime.now(tz=timezone.utc).isoformat()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "timestamp": self.timestamp,
        }


class ValidationError(QuallaaError):
    """An input is missing, non-numeric, or outside its domain."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class NotFoundError(QuallaaError):
    """A record the operation depends on has not been persisted."""

    def __init__(self, message: str):
        super().__init__(message, "NOT_FOUND")


class BaselineNotFoundError(NotFoundError):
    pass


class InsufficientDataError(QuallaaError):
    def __init__(self, message: str):
        super().__init__(message, "INSUFFICIENT_DATA")


class ConfigurationError(QuallaaError):
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}", "CONFIG_ERROR")


class StorageError(QuallaaError):
    """Persisted content exists but cannot be decoded.

    OS-level failures (permission denied, disk full) are not wrapped; they
    reach the caller as the original ``OSError``.
    """

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message, "STORAGE_ERROR")
        self.key = key

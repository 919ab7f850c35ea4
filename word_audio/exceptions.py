"""Custom exceptions for the word audio application"""

from typing import Any


class WordAudioError(Exception):
    """Base exception class for all application errors"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ConfigurationError(WordAudioError):
    """Raised when configuration is invalid or missing"""

    def __init__(self, setting: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for '{setting}': {reason}",
            {"setting": setting, "value": value, "reason": reason},
        )
        self.setting = setting
        self.value = value
        self.reason = reason


class StorageError(WordAudioError):
    """Raised when a storage operation fails"""

    def __init__(
        self,
        operation: str,
        path: str,
        original_error: Exception | None = None,
    ):
        super().__init__(
            f"Storage operation '{operation}' failed for '{path}'",
            {
                "operation": operation,
                "path": path,
                "original_error": str(original_error) if original_error else None,
            },
        )
        self.operation = operation
        self.path = path
        self.original_error = original_error


class TransportError(WordAudioError):
    """Raised when an HTTP request cannot be completed"""

    def __init__(self, url: str, original_error: Exception | None = None):
        super().__init__(
            f"Request to {url} failed",
            {
                "url": url,
                "original_error": str(original_error) if original_error else None,
            },
        )
        self.url = url
        self.original_error = original_error


class HTTPStatusError(TransportError):
    """Raised when a download answers with a non-success status"""

    def __init__(self, url: str, status: int):
        WordAudioError.__init__(
            self,
            f"Request to {url} returned HTTP {status}",
            {"url": url, "status": status},
        )
        self.url = url
        self.original_error = None
        self.status = status

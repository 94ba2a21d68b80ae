"""Custom exception classes for consistent error handling across the gateway."""

from dataclasses import dataclass, field


@dataclass
class AppError(Exception):
    """Base exception for all gateway errors."""

    code: str = "app_error"
    message: str = "An application error occurred"
    status_code: int = 400
    headers: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:  # pyright: ignore[reportImplicitOverride]
        return self.message


@dataclass
class InvalidRequestError(AppError):
    """Raised when the request body or its fields cannot be used."""

    code: str = "invalid_request"
    message: str = "Invalid request"
    status_code: int = 400


@dataclass
class MethodNotAllowedError(AppError):
    """Raised for any method other than POST on the upload route."""

    code: str = "method_not_allowed"
    message: str = "Method not allowed"
    status_code: int = 405
    headers: dict[str, str] = field(default_factory=lambda: {"Allow": "POST"})


@dataclass
class ConfigurationError(AppError):
    """Raised when the deployment is missing required configuration."""

    code: str = "configuration_error"
    message: str = "Gateway is not configured"
    status_code: int = 500


@dataclass
class BackendError(AppError):
    """Raised when the storage backend rejects a login or an upload."""

    code: str = "backend_error"
    message: str = "Storage backend error"
    status_code: int = 500


@dataclass
class UploadTimeoutError(AppError):
    """Raised when the upload does not finish within its deadline."""

    code: str = "upload_timeout"
    message: str = "Upload timed out"
    status_code: int = 504

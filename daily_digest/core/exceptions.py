"""Core custom exceptions for the application."""


class DigestError(Exception):
    """Base exception for every failure surfaced to the user-facing layer."""


class ConfigurationError(DigestError):
    """Exception for configuration-related errors (e.g., missing API keys or OAuth client settings)."""


class ValidationError(DigestError):
    """Raised when an upload is rejected (unsupported media type, empty, oversized)."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServiceError(DigestError):
    """Base exception for content-generation service failures."""


class TransientServiceError(ServiceError):
    """Retryable overload signal from the content-generation service."""


class TerminalServiceError(ServiceError):
    """Non-retryable failure, or retries exhausted."""


class FormatError(DigestError):
    """The service returned data that violates its own declared response schema."""


class AuthRequiredError(DigestError):
    """A spreadsheet write was attempted without an established authorization session."""


class SheetsSyncError(DigestError):
    """Raised when the spreadsheet append call fails"""


class ExportError(DigestError):
    """Raised when rendering an export document fails"""

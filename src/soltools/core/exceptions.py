"""SOL Tools exception hierarchy.

This module defines the base exception class and specialized exceptions
for the failure modes of the Helius client and the transaction views.
"""


class SolToolsError(Exception):
    """Base exception for all SOL Tools errors.

    All custom exceptions in SOL Tools inherit from this class
    so callers can catch every application failure in one place.
    """

    pass


class ConfigurationError(SolToolsError):
    """Raised when configuration is invalid or missing.

    Example:
        raise ConfigurationError("Helius API key is empty")
    """

    pass


class ExternalServiceError(SolToolsError):
    """Raised when an external service call fails.

    Attributes:
        service: Name of the external service that failed.
        status_code: HTTP status code if available, None otherwise.

    Example:
        raise ExternalServiceError(service="Helius", message="Bad gateway", status_code=502)
    """

    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")


class NetworkError(ExternalServiceError):
    """Raised on transport-level failure talking to the provider.

    Covers connection errors, timeouts and non-2xx responses.
    """

    pass


class DecodeError(SolToolsError):
    """Raised when a provider response is not valid JSON of the expected shape.

    Example:
        raise DecodeError("Expected a JSON array, got dict")
    """

    pass


class MissingFieldError(DecodeError):
    """Raised when an otherwise valid document lacks an expected key.

    Attributes:
        field: Dotted location of the missing field, if known.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field

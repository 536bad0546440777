"""Domain-specific exceptions with user-ready messages."""


class ConfigurationError(Exception):
    """Raised when application configuration is invalid."""

    pass


class BusinessLogicException(Exception):
    """Base exception class for business logic errors."""

    def __init__(self, message: str, error_code: str) -> None:
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class FetchException(BusinessLogicException):
    """Base exception for failures while fetching prices from the provider."""

    pass


class UpstreamTransportException(FetchException):
    """Exception raised when the provider cannot be reached or rejects the request."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="UPSTREAM_TRANSPORT")


class UpstreamDecodeException(FetchException):
    """Exception raised when the provider's response cannot be decoded."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="UPSTREAM_DECODE")

"""Custom exception hierarchy for the Airtable proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors.

    Attributes:
        status_code: HTTP status the error maps to in the outbound response
    """

    status_code = 500


class MethodNotAllowed(ProxyError):
    """Raised for inbound methods other than OPTIONS, GET and POST."""

    status_code = 405

    def __init__(self, message: str = "Method not allowed") -> None:
        super().__init__(message)


class ConfigurationError(ProxyError):
    """Raised when the Airtable credential is missing or empty."""

    def __init__(self, message: str = "API key not configured") -> None:
        super().__init__(message)


class EnvelopeError(ProxyError):
    """Raised when the client envelope does not name an upstream URL."""

    status_code = 400

    def __init__(self, message: str = "URL required") -> None:
        super().__init__(message)


class UpstreamError(ProxyError):
    """Raised when the upstream call fails before a response is read.

    Attributes:
        message: Error message
        url: Upstream URL that was being called (optional)
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream request times out."""


class UpstreamConnectionError(UpstreamError):
    """Raised when unable to connect to the upstream host."""


def error_message(exc: BaseException) -> str:
    """Human-readable description of an exception, never empty."""
    return str(exc) or type(exc).__name__

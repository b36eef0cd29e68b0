"""
Custom Exceptions.

Client-side exception classes. Every failure a command can hit maps to one
of these; the CLI runner prints it and exits with status 1.
"""


class QuiltError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, code: str = "CLI_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class UsageError(QuiltError):
    """Raised when command arguments are invalid. Detected before any request."""

    def __init__(self, message: str, usage: str | None = None) -> None:
        self.usage = usage
        super().__init__(message, code="CLI_USAGE_ERROR")


class ConfigError(QuiltError):
    """Raised when the settings file is missing or invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="CLI_CONFIG_ERROR")


class AuthenticationError(QuiltError):
    """Raised when no credentials are configured."""

    def __init__(
        self,
        message: str = "No authentication configured. Set QUILT_TOKEN or QUILT_API_KEY.",
    ) -> None:
        super().__init__(message, code="AUTH_NOT_CONFIGURED")


class TransportError(QuiltError):
    """Raised when the HTTP call itself fails (connect, DNS, protocol)."""

    def __init__(self, method: str, url: str, reason: str) -> None:
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(
            f"Request failed calling {method} {url}: {reason}",
            code="NET_TRANSPORT_ERROR",
        )


class APIError(QuiltError):
    """Raised when the API answers with a status code >= 400."""

    def __init__(self, status_code: int, method: str, path: str, body: str) -> None:
        self.status_code = status_code
        self.method = method
        self.path = path
        self.body = body
        super().__init__(
            f"API request failed (HTTP {status_code}): {method} {path}",
            code="API_REQUEST_FAILED",
        )


class ResponseFormatError(QuiltError):
    """Raised when a successful response lacks a field the client needs."""

    def __init__(self, message: str = "Unexpected response from API") -> None:
        super().__init__(message, code="API_BAD_RESPONSE")

"""
oauth-http Exceptions
"""

from typing import Optional


class OAuthHttpError(Exception):
    """Base exception for oauth-http"""

    pass


class InvalidArgumentError(OAuthHttpError, ValueError):
    """
    Caller-contract violation.

    Raised before any network I/O, e.g. when a body is attached to a GET
    request or an endpoint is not an absolute URI.
    """

    pass


class ConfigurationError(OAuthHttpError):
    """Client configuration error"""

    pass


class TokenResponseError(OAuthHttpError):
    """
    Uniform failure for a request that could not be completed.

    ``status_code`` is the best-known HTTP status, 0 when no response was
    ever received.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"TokenResponseError(message={self.message!r}, "
            f"status_code={self.status_code}, "
            f"error_code={self.error_code!r})"
        )


class TransportFailure(OAuthHttpError):
    """
    Raised by transports when the exchange failed at the I/O level.

    Translated into TokenResponseError by the executor.
    """

    def __init__(
        self,
        message: str = "",
        error_code: Optional[str] = None,
        status_code: int = 0,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code

"""
oauth-http
Pluggable HTTP transport for OAuth token exchange and protected resource calls
"""

from oauth_http.client import AbstractClient, HttpRequestExecutor
from oauth_http.http import RequestsTransport, Transport, TransportRequest
from oauth_http.models import ClientConfig, TransportOption
from oauth_http.uri import Uri
from oauth_http.exceptions import (
    OAuthHttpError,
    InvalidArgumentError,
    ConfigurationError,
    TokenResponseError,
    TransportFailure,
)
from oauth_http.__version__ import __version__

__all__ = [
    "AbstractClient",
    "HttpRequestExecutor",
    "RequestsTransport",
    "Transport",
    "TransportRequest",
    "ClientConfig",
    "TransportOption",
    "Uri",
    "OAuthHttpError",
    "InvalidArgumentError",
    "ConfigurationError",
    "TokenResponseError",
    "TransportFailure",
    "__version__",
]

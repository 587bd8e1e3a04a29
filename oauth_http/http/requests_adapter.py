"""
Requests-based transport (synchronous).
"""

import logging
import ssl
from typing import Any, Callable, Dict, Optional, Tuple, Type

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.ssl_ import create_urllib3_context

from .adapter import Transport, TransportRequest
from ..exceptions import TransportFailure

logger = logging.getLogger("oauth_http.http")

# Most specific first: ConnectTimeout is both a ConnectionError and a Timeout
ERROR_CODES: Tuple[Tuple[Type[Exception], str], ...] = (
    (requests.exceptions.ConnectTimeout, "connect_timeout"),
    (requests.exceptions.ReadTimeout, "read_timeout"),
    (requests.exceptions.Timeout, "timeout"),
    (requests.exceptions.SSLError, "ssl_error"),
    (requests.exceptions.ProxyError, "proxy_error"),
    (requests.exceptions.ConnectionError, "connection_error"),
    (requests.exceptions.TooManyRedirects, "too_many_redirects"),
    (requests.exceptions.InvalidURL, "invalid_url"),
    (requests.exceptions.MissingSchema, "invalid_url"),
    (requests.exceptions.InvalidSchema, "invalid_url"),
    (requests.exceptions.InvalidHeader, "invalid_header"),
    (requests.exceptions.ContentDecodingError, "content_decoding_error"),
    (requests.exceptions.ChunkedEncodingError, "chunked_encoding_error"),
)


def error_code_for(exc: Exception) -> str:
    """Map a requests exception to a stable transport error code"""
    for exc_type, code in ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    return "request_error"


def legacy_ssl_context() -> ssl.SSLContext:
    """
    SSL context pinned to SSLv3.

    Raises:
        ValueError: If the linked OpenSSL has no SSLv3 support
    """
    context = create_urllib3_context()
    context.minimum_version = ssl.TLSVersion.SSLv3
    context.maximum_version = ssl.TLSVersion.SSLv3
    return context


class LegacySSLAdapter(HTTPAdapter):
    """HTTPS adapter negotiating SSLv3 only"""

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["ssl_context"] = legacy_ssl_context()
        super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, proxy: str, **proxy_kwargs: Any) -> Any:
        proxy_kwargs["ssl_context"] = legacy_ssl_context()
        return super().proxy_manager_for(proxy, **proxy_kwargs)


class RequestsTransport(Transport):
    """
    Synchronous transport using the requests library.

    Features:
    - One fresh session per call, always closed afterwards
    - Redirect policy and timeout taken from the prepared request
    - No retries, no connection reuse
    """

    def __init__(self, session_factory: Optional[Callable[[], requests.Session]] = None):
        """
        Initialize requests transport.

        Args:
            session_factory: Optional callable returning a new requests.Session
        """
        self.session_factory = session_factory or requests.Session

    def _request_kwargs(self, request: TransportRequest) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "method": request.method,
            "url": request.url,
            "headers": request.headers,
            "timeout": request.timeout,
            "allow_redirects": request.follow_redirects,
        }
        if request.body is not None:
            kwargs["data"] = request.body

        # Raw options go last so they can override anything above
        kwargs.update(request.extra)
        return kwargs

    def send(self, request: TransportRequest) -> str:
        """
        Send request using requests library.

        Args:
            request: Prepared request

        Returns:
            Response body text

        Raises:
            TransportFailure: On any requests-level failure
        """
        session = self.session_factory()
        try:
            # requests compares history against max_redirects even when not following
            if request.follow_redirects:
                session.max_redirects = request.max_redirects

            if request.force_ssl3:
                logger.warning("Forcing SSLv3 for %s; this protocol is insecure", request.url)
                try:
                    session.mount("https://", LegacySSLAdapter())
                except (ValueError, ssl.SSLError) as e:
                    raise TransportFailure(
                        f"SSLv3 is not available: {e}", error_code="ssl_error"
                    ) from e

            response = session.request(**self._request_kwargs(request))
            try:
                logger.debug(
                    "%s %s -> %s",
                    request.method,
                    request.url,
                    response.status_code,
                    extra={
                        "method": request.method,
                        "url": request.url,
                        "status_code": response.status_code,
                    },
                )
                return response.text
            finally:
                response.close()

        except requests.exceptions.RequestException as e:
            status_code = e.response.status_code if e.response is not None else 0
            raise TransportFailure(
                str(e), error_code=error_code_for(e), status_code=status_code
            ) from e

        finally:
            session.close()

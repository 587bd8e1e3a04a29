"""
oauth-http Client

HttpRequestExecutor turns an endpoint, a body, header overrides and a
method into one outgoing request, runs it through a Transport and returns
the raw response body.
"""

import copy
import dataclasses
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Union

from oauth_http.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    TokenResponseError,
    TransportFailure,
)
from oauth_http.http.adapter import Body, Transport, TransportRequest
from oauth_http.http.requests_adapter import RequestsTransport
from oauth_http.logging_setup import sanitize_headers
from oauth_http.metrics import metrics_request
from oauth_http.models import ClientConfig
from oauth_http.uri import EndpointLike, as_endpoint

logger = logging.getLogger("oauth_http.client")

BODY_METHODS = ("POST", "PUT")
GENERIC_FAILURE_MESSAGE = "Failed to request resource."

# Fields that raw transport options may replace directly
REQUEST_FIELDS = frozenset(f.name for f in dataclasses.fields(TransportRequest)) - {"extra"}


def normalize_header_name(name: str) -> str:
    """
    Canonical header name, e.g. ``content-TYPE`` -> ``Content-Type``

    Every header comparison in this package goes through this function.
    """
    return "-".join(part.capitalize() for part in name.strip().split("-"))


def _is_empty(body: Body) -> bool:
    return body is None or len(body) == 0


def _copy_option(value: Any) -> Any:
    # containers are copied per call, other values are opaque and shared
    if isinstance(value, (dict, list, set)):
        return copy.copy(value)
    return value


class AbstractClient(ABC):
    """
    Configuration handling shared by HTTP clients

    The configuration object is immutable; setters swap in an updated copy
    and return the client so calls can be chained:

        >>> client = HttpRequestExecutor().set_timeout(5).set_max_redirects(0)
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        self.config = config or ClientConfig()

    def _update_config(self, **changes: Any) -> "AbstractClient":
        try:
            self.config = ClientConfig(**{**self.config.model_dump(), **changes})
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        return self

    def set_max_redirects(self, redirects: int) -> "AbstractClient":
        return self._update_config(max_redirects=redirects)

    def set_timeout(self, timeout: float) -> "AbstractClient":
        return self._update_config(timeout=timeout)

    def set_user_agent(self, user_agent: str) -> "AbstractClient":
        return self._update_config(user_agent=user_agent)

    def set_transport_options(self, options: Mapping[Any, Any]) -> "AbstractClient":
        """
        Replace the raw transport options.

        Options are applied after every computed option and are not
        validated; a bad option can produce an invalid request.
        """
        return self._update_config(transport_options=dict(options))

    def set_force_ssl3(self, force: bool) -> "AbstractClient":
        return self._update_config(force_ssl3=force)

    def normalize_headers(self, headers: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """
        Copy of ``headers`` with canonical names and string values

        Later entries win when two names differ only by case.
        """
        if not headers:
            return {}
        return {normalize_header_name(name): str(value) for name, value in headers.items()}

    @abstractmethod
    def retrieve_response(
        self,
        endpoint: Union[EndpointLike, str],
        body: Body,
        extra_headers: Optional[Mapping[str, Any]] = None,
        method: str = "POST",
    ) -> str:
        """
        Send a request to ``endpoint`` and return the response body.

        Raises:
            InvalidArgumentError: On caller-contract violations, before any I/O
            TokenResponseError: If the request could not be completed
        """
        raise NotImplementedError


class HttpRequestExecutor(AbstractClient):
    """
    Single-shot HTTP executor for OAuth token and resource requests

    Features:
    - Method-specific body and header rules
    - Forced ``Host`` and ``Connection: close`` headers
    - Configurable redirects, timeout and user agent
    - Raw transport options applied last
    - Transport failures reported as TokenResponseError

    Non-2xx responses are not errors here; their bodies are returned as-is.
    Safe to share between threads: each call builds and releases its own
    transport session.

    Example:
        >>> executor = HttpRequestExecutor(ClientConfig(timeout=10))
        >>> body = executor.retrieve_response(
        ...     "https://api.example.com/token",
        ...     {"grant_type": "client_credentials"},
        ... )
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize executor

        Args:
            config: Client configuration, defaults to ClientConfig()
            transport: Transport used for I/O, defaults to RequestsTransport()
        """
        super().__init__(config)
        self.transport = transport or RequestsTransport()

    def prepare(
        self,
        endpoint: Union[EndpointLike, str],
        body: Body,
        extra_headers: Optional[Mapping[str, Any]] = None,
        method: str = "POST",
    ) -> TransportRequest:
        """
        Build the outgoing request without sending it

        Args:
            endpoint: Target endpoint or absolute URL
            body: Raw payload, form field mapping, or None
            extra_headers: Header overrides, names matched case-insensitively
            method: HTTP verb, any case

        Returns:
            TransportRequest ready for a Transport

        Raises:
            InvalidArgumentError: If a GET request carries a body, the body is
                not str, bytes or a mapping, a header cannot be encoded for
                the wire, or the endpoint is not absolute
        """
        endpoint = as_endpoint(endpoint)
        method = method.upper()
        caller_headers = self.normalize_headers(extra_headers)

        if body is not None and not isinstance(body, (str, bytes, Mapping)):
            raise InvalidArgumentError(
                f"Request body must be str, bytes or a mapping, got {type(body).__name__}"
            )

        for name, value in caller_headers.items():
            try:
                name.encode("ascii")
                value.encode("latin-1")
            except UnicodeEncodeError as e:
                raise InvalidArgumentError(f"Header {name!r} cannot be sent as HTTP: {e}") from e

        if method == "GET" and not _is_empty(body):
            raise InvalidArgumentError('No body expected for "GET" request.')

        headers: Dict[str, str] = {"User-Agent": self.config.user_agent}
        headers.update(caller_headers)

        is_form = isinstance(body, Mapping)
        if method in BODY_METHODS and not is_form:
            headers.setdefault("Content-Type", "application/json")

        headers["Host"] = getattr(endpoint, "authority", None) or endpoint.host
        headers["Connection"] = "close"

        payload: Body = None
        if method in BODY_METHODS:
            payload = body
            if isinstance(payload, str):
                payload = payload.encode("utf-8")
            if not _is_empty(payload) and not is_form:
                headers["Content-Length"] = str(len(payload))
            else:
                # the transport computes the length of encoded form bodies
                headers.pop("Content-Length", None)
        elif not _is_empty(body):
            logger.debug("Dropping request body for %s request", method)

        follow = self.config.max_redirects > 0
        request = TransportRequest(
            method=method,
            url=endpoint.absolute_uri,
            headers=headers,
            body=payload,
            follow_redirects=follow,
            max_redirects=self.config.max_redirects if follow else 0,
            timeout=self.config.timeout,
            force_ssl3=self.config.force_ssl3,
        )

        options = self.config.transport_options
        if options:
            options = {key: _copy_option(value) for key, value in options.items()}
            replaced = {key: value for key, value in options.items() if key in REQUEST_FIELDS}
            extra = {key: value for key, value in options.items() if key not in REQUEST_FIELDS}
            request = dataclasses.replace(request, extra=extra, **replaced)

        return request

    def retrieve_response(
        self,
        endpoint: Union[EndpointLike, str],
        body: Body,
        extra_headers: Optional[Mapping[str, Any]] = None,
        method: str = "POST",
    ) -> str:
        """
        Send one request and return the buffered response body

        Args:
            endpoint: Target endpoint or absolute URL
            body: Raw payload, form field mapping, or None
            extra_headers: Header overrides
            method: HTTP verb, any case

        Returns:
            Response body, for any HTTP status

        Raises:
            InvalidArgumentError: If the request is malformed (no I/O happened)
            TokenResponseError: If the transport failed
        """
        request = self.prepare(endpoint, body, extra_headers, method)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "%s %s headers=%s",
                request.method,
                request.url,
                sanitize_headers(request.headers),
                extra={"method": request.method, "url": request.url},
            )

        start = time.time()
        try:
            response_body = self.transport.send(request)
        except TransportFailure as e:
            metrics_request(request.method, "transport_error", time.time() - start)
            logger.debug(
                "Transport failure for %s %s: %s (status %s)",
                request.method,
                request.url,
                e.error_code,
                e.status_code,
                extra={
                    "method": request.method,
                    "url": request.url,
                    "status_code": e.status_code,
                },
            )
            raise self._token_response_error(e) from e

        metrics_request(request.method, "success", time.time() - start)
        return response_body

    @staticmethod
    def _token_response_error(failure: TransportFailure) -> TokenResponseError:
        if not failure.message:
            return TokenResponseError(
                GENERIC_FAILURE_MESSAGE, failure.status_code, failure.error_code
            )

        prefix = "Transport error"
        if failure.error_code:
            prefix = f"{prefix} #{failure.error_code}"
        return TokenResponseError(
            f"{prefix}: {failure.message}", failure.status_code, failure.error_code
        )

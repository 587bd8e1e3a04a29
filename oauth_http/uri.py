"""
Endpoint value object

A parsed, immutable absolute URI. Callers may also pass any object that
exposes ``absolute_uri`` and ``host`` (see EndpointLike).
"""

from typing import Optional, Protocol, Union
from urllib.parse import urlsplit, urlunsplit

from oauth_http.exceptions import InvalidArgumentError

DEFAULT_PORTS = {"http": 80, "https": 443}


class EndpointLike(Protocol):
    """Anything the executor can send a request to"""

    @property
    def absolute_uri(self) -> str: ...

    @property
    def host(self) -> str: ...


class Uri:
    """
    Absolute URI with an accessible host component

    Example:
        >>> uri = Uri("https://api.example.com/oauth/token?x=1")
        >>> uri.host
        'api.example.com'
        >>> uri.absolute_uri
        'https://api.example.com/oauth/token?x=1'
    """

    __slots__ = ("_scheme", "_host", "_port", "_path", "_query", "_fragment", "_userinfo")

    def __init__(self, uri: str):
        parts = urlsplit(uri.strip() if isinstance(uri, str) else "")
        if not parts.scheme or not parts.hostname:
            raise InvalidArgumentError(f"Invalid URI, expected an absolute URI: {uri!r}")

        try:
            port = parts.port
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid port in URI: {uri!r}") from e

        userinfo = ""
        if "@" in parts.netloc:
            userinfo = parts.netloc.rsplit("@", 1)[0]

        self._scheme = parts.scheme.lower()
        self._host = parts.hostname
        self._port = port
        self._path = parts.path or "/"
        self._query = parts.query
        self._fragment = parts.fragment
        self._userinfo = userinfo

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> Optional[int]:
        """Explicit port, None when absent or equal to the scheme default"""
        if self._port is None or DEFAULT_PORTS.get(self._scheme) == self._port:
            return None
        return self._port

    @property
    def path(self) -> str:
        return self._path

    @property
    def query(self) -> str:
        return self._query

    @property
    def fragment(self) -> str:
        return self._fragment

    @property
    def authority(self) -> str:
        """Host plus non-default port, as sent in the Host header"""
        host = f"[{self._host}]" if ":" in self._host else self._host
        if self.port is not None:
            return f"{host}:{self.port}"
        return host

    @property
    def absolute_uri(self) -> str:
        netloc = self.authority
        if self._userinfo:
            netloc = f"{self._userinfo}@{netloc}"
        return urlunsplit((self._scheme, netloc, self._path, self._query, self._fragment))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Uri):
            return NotImplemented
        return self.absolute_uri == other.absolute_uri

    def __hash__(self) -> int:
        return hash(self.absolute_uri)

    def __str__(self) -> str:
        return self.absolute_uri

    def __repr__(self) -> str:
        return f"Uri({self.absolute_uri!r})"


def as_endpoint(endpoint: Union[EndpointLike, str, None]) -> EndpointLike:
    """
    Coerce a caller-supplied endpoint

    Args:
        endpoint: Uri, any EndpointLike, or an absolute URL string

    Returns:
        An object exposing ``absolute_uri`` and ``host``

    Raises:
        InvalidArgumentError: If endpoint is missing or not absolute
    """
    if endpoint is None:
        raise InvalidArgumentError("An endpoint is required")
    if isinstance(endpoint, str):
        return Uri(endpoint)
    return endpoint

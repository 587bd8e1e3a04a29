"""
Base transport interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

Body = Union[str, bytes, Mapping[str, Any], None]


@dataclass
class TransportRequest:
    """
    A fully-specified outgoing request.

    Built by HttpRequestExecutor.prepare(); transports execute it as-is.
    ``body`` is None for requests that must not carry a payload.
    """

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Body = None
    follow_redirects: bool = False
    max_redirects: int = 0
    timeout: float = 15.0
    force_ssl3: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)


class Transport(ABC):
    """
    Abstract base class for transports.

    Allows pluggable HTTP libraries behind the executor.
    """

    @abstractmethod
    def send(self, request: TransportRequest) -> str:
        """
        Execute a request once.

        Args:
            request: Prepared request

        Returns:
            The fully buffered response body, whatever the status code

        Raises:
            TransportFailure: On connection, DNS, TLS, timeout or redirect failures
        """
        raise NotImplementedError

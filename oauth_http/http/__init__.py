"""
Transports for oauth-http.
"""

from .adapter import Body, Transport, TransportRequest
from .requests_adapter import RequestsTransport

__all__ = ["Body", "Transport", "TransportRequest", "RequestsTransport"]

"""
oauth-http Data Models
"""

import os
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from oauth_http.__version__ import __version__
from oauth_http.exceptions import ConfigurationError

DEFAULT_USER_AGENT = f"oauth-http-python/{__version__}"


class TransportOption(str, Enum):
    """
    Known low-level transport option identifiers

    Options naming a TransportRequest field replace that field; the rest are
    passed verbatim to ``requests.Session.request``. Plain strings are
    accepted too, for anything not listed here.
    """

    URL = "url"
    METHOD = "method"
    HEADERS = "headers"
    BODY = "body"
    FOLLOW_REDIRECTS = "follow_redirects"
    MAX_REDIRECTS = "max_redirects"
    TIMEOUT = "timeout"
    FORCE_SSL3 = "force_ssl3"
    VERIFY = "verify"
    CERT = "cert"
    PROXIES = "proxies"
    AUTH = "auth"
    COOKIES = "cookies"
    PARAMS = "params"


class ClientConfig(BaseModel):
    """
    HTTP client configuration

    Frozen after construction, transport_options included, so one instance
    can be shared by concurrent calls. Build a new instance to change it.
    """

    model_config = ConfigDict(frozen=True)

    max_redirects: int = Field(5, description="Redirects to follow, 0 disables following")
    timeout: float = Field(15.0, description="Request timeout in seconds")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header value")
    transport_options: Mapping[str, Any] = Field(
        default_factory=lambda: MappingProxyType({}),
        description="Raw transport options, applied after all computed options",
    )
    force_ssl3: bool = Field(False, description="Force legacy SSLv3 negotiation (discouraged)")

    @field_validator("max_redirects")
    @classmethod
    def validate_max_redirects(cls, v):
        if v < 0:
            raise ValueError("max_redirects must not be negative")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("transport_options", mode="before")
    @classmethod
    def normalize_option_keys(cls, v):
        if v is None:
            return {}
        return {
            (key.value if isinstance(key, TransportOption) else str(key)): value
            for key, value in dict(v).items()
        }

    @field_validator("transport_options")
    @classmethod
    def freeze_options(cls, v):
        return MappingProxyType(dict(v))

    @field_serializer("transport_options")
    def serialize_options(self, v):
        return dict(v)

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """
        Build configuration from environment variables

        Supported variables:
        - OAUTH_HTTP_MAX_REDIRECTS
        - OAUTH_HTTP_TIMEOUT
        - OAUTH_HTTP_USER_AGENT
        - OAUTH_HTTP_FORCE_SSL3 ("1", "true", "yes")

        Args:
            **overrides: Explicit values, taking precedence over the environment

        Returns:
            ClientConfig

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        values: Dict[str, Any] = {}

        max_redirects = os.getenv("OAUTH_HTTP_MAX_REDIRECTS")
        if max_redirects:
            values["max_redirects"] = max_redirects

        timeout = os.getenv("OAUTH_HTTP_TIMEOUT")
        if timeout:
            values["timeout"] = timeout

        user_agent = os.getenv("OAUTH_HTTP_USER_AGENT")
        if user_agent:
            values["user_agent"] = user_agent

        force_ssl3: Optional[str] = os.getenv("OAUTH_HTTP_FORCE_SSL3")
        if force_ssl3:
            values["force_ssl3"] = force_ssl3.strip().lower() in ("1", "true", "yes")

        values.update(overrides)
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

"""
Tests for client configuration
"""

import pytest
from pydantic import ValidationError

from oauth_http import ClientConfig, HttpRequestExecutor, TransportOption
from oauth_http.exceptions import ConfigurationError
from oauth_http.models import DEFAULT_USER_AGENT


class TestClientConfig:
    """Test configuration model."""

    def test_defaults(self):
        config = ClientConfig()

        assert config.max_redirects == 5
        assert config.timeout == 15.0
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.transport_options == {}
        assert config.force_ssl3 is False

    def test_frozen(self):
        config = ClientConfig()

        with pytest.raises(ValidationError):
            config.timeout = 1

    def test_negative_redirects_rejected(self):
        with pytest.raises(ValidationError, match="max_redirects must not be negative"):
            ClientConfig(max_redirects=-1)

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValidationError, match="timeout must be positive"):
            ClientConfig(timeout=0)

    def test_option_keys_normalized(self):
        config = ClientConfig(
            transport_options={TransportOption.VERIFY: False, "cert": "/tmp/c.pem"}
        )

        assert config.transport_options == {"verify": False, "cert": "/tmp/c.pem"}

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OAUTH_HTTP_MAX_REDIRECTS", "0")
        monkeypatch.setenv("OAUTH_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("OAUTH_HTTP_USER_AGENT", "env-agent/1.0")
        monkeypatch.setenv("OAUTH_HTTP_FORCE_SSL3", "true")

        config = ClientConfig.from_env()

        assert config.max_redirects == 0
        assert config.timeout == 2.5
        assert config.user_agent == "env-agent/1.0"
        assert config.force_ssl3 is True

    def test_transport_options_cannot_be_mutated(self):
        config = ClientConfig(transport_options={"verify": True})

        with pytest.raises(TypeError):
            config.transport_options["verify"] = False

        assert config.transport_options == {"verify": True}

    def test_transport_options_detached_from_input(self):
        options = {"verify": True}
        config = ClientConfig(transport_options=options)

        options["verify"] = False

        assert config.transport_options["verify"] is True

    def test_model_dump_returns_plain_dict(self):
        dumped = ClientConfig(transport_options={"verify": False}).model_dump()

        assert type(dumped["transport_options"]) is dict
        assert dumped["transport_options"] == {"verify": False}

    def test_from_env_invalid_value(self, monkeypatch):
        monkeypatch.setenv("OAUTH_HTTP_MAX_REDIRECTS", "abc")

        with pytest.raises(ConfigurationError, match="max_redirects"):
            ClientConfig.from_env()

    def test_from_env_overrides_win(self, monkeypatch):
        monkeypatch.setenv("OAUTH_HTTP_TIMEOUT", "2.5")

        config = ClientConfig.from_env(timeout=9)

        assert config.timeout == 9.0

    def test_from_env_without_variables(self, monkeypatch):
        for name in (
            "OAUTH_HTTP_MAX_REDIRECTS",
            "OAUTH_HTTP_TIMEOUT",
            "OAUTH_HTTP_USER_AGENT",
            "OAUTH_HTTP_FORCE_SSL3",
        ):
            monkeypatch.delenv(name, raising=False)

        assert ClientConfig.from_env() == ClientConfig()


class TestSetters:
    """Test fluent configuration setters."""

    def test_setters_chain_and_replace_config(self):
        client = HttpRequestExecutor()
        original = client.config

        result = (
            client.set_max_redirects(0)
            .set_timeout(3)
            .set_user_agent("chained/1.0")
            .set_transport_options({TransportOption.PROXIES: {"https": "http://proxy:3128"}})
            .set_force_ssl3(True)
        )

        assert result is client
        assert client.config is not original
        assert original.max_redirects == 5
        assert client.config.max_redirects == 0
        assert client.config.timeout == 3.0
        assert client.config.user_agent == "chained/1.0"
        assert client.config.transport_options == {"proxies": {"https": "http://proxy:3128"}}
        assert client.config.force_ssl3 is True

    def test_invalid_setter_value(self):
        client = HttpRequestExecutor()

        with pytest.raises(ConfigurationError):
            client.set_timeout(-1)

        with pytest.raises(ConfigurationError):
            client.set_max_redirects(-5)

        assert client.config == ClientConfig()

    def test_normalize_headers(self):
        client = HttpRequestExecutor()

        assert client.normalize_headers({"content-type": "a", "X-API-key": 1}) == {
            "Content-Type": "a",
            "X-Api-Key": "1",
        }
        assert client.normalize_headers(None) == {}

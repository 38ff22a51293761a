"""Tests for Yars connection configuration."""

import json

import httpx
import pytest

from active_rdf.adapter.config import (
    DEFAULT_PORT,
    TransportConfig,
    YarsConfig,
    validate_proxy,
)
from active_rdf.errors import ConfigurationError


# ========== Proxy Tests ==========

class TestValidateProxy:
    def test_http_url(self):
        assert validate_proxy("http://proxy.local:3128") == "http://proxy.local:3128"

    def test_https_url(self):
        assert validate_proxy("https://proxy.local") == "https://proxy.local"

    def test_httpx_proxy(self):
        proxy = httpx.Proxy("http://proxy.local:3128")
        assert validate_proxy(proxy) is proxy

    @pytest.mark.parametrize("proxy", ["", "proxy.local:3128", "ftp://proxy.local", 3128, object()])
    def test_invalid(self, proxy):
        with pytest.raises(ConfigurationError):
            validate_proxy(proxy)


# ========== TransportConfig Tests ==========

class TestTransportConfig:
    def test_defaults(self):
        config = TransportConfig()
        assert config.timeout is None
        assert config.retries == 0
        assert config.pooled is False

    def test_to_dict(self):
        d = TransportConfig(timeout=5.0, retries=2).to_dict()
        assert d["timeout"] == 5.0
        assert d["retries"] == 2

    def test_from_dict(self):
        config = TransportConfig.from_dict({"pooled": True})
        assert config.pooled is True
        assert config.retries == 0

    @pytest.mark.parametrize("kwargs", [{"timeout": 0}, {"retries": -1}, {"backoff_seconds": -1}])
    def test_invalid(self, kwargs):
        with pytest.raises(ConfigurationError):
            TransportConfig(**kwargs)

    @pytest.mark.parametrize("kwargs", [
        {"timeout": "5"},
        {"timeout": True},
        {"retries": "3"},
        {"retries": 1.5},
        {"retries": True},
        {"backoff_seconds": "1"},
        {"pooled": "yes"},
    ])
    def test_wrong_type(self, kwargs):
        """Values of the wrong type are configuration errors, not TypeErrors."""
        with pytest.raises(ConfigurationError):
            TransportConfig(**kwargs)

    def test_integer_timeout(self):
        assert TransportConfig(timeout=5, backoff_seconds=0).timeout == 5


# ========== YarsConfig Tests ==========

class TestYarsConfig:
    def test_defaults(self):
        config = YarsConfig.from_dict({"host": "yars.test"})
        assert config.port == DEFAULT_PORT == 8080
        assert config.context == ""
        assert config.proxy is None
        assert config.query_language == "n3"
        assert config.base_url == "http://yars.test:8080"
        assert config.path == "/"

    def test_context_path(self):
        config = YarsConfig(host="yars.test", context="/people/")
        assert config.context == "people"
        assert config.path == "/people"

    def test_none_values_use_defaults(self):
        config = YarsConfig.from_dict({"host": "yars.test", "port": None, "context": None})
        assert config.port == 8080
        assert config.context == ""

    def test_immutable(self):
        config = YarsConfig(host="yars.test")
        with pytest.raises(AttributeError):
            config.port = 9090

    def test_nil_params(self):
        with pytest.raises(ConfigurationError):
            YarsConfig.from_dict(None)

    def test_not_a_mapping(self):
        with pytest.raises(ConfigurationError):
            YarsConfig.from_dict(["yars.test"])

    def test_missing_host(self):
        with pytest.raises(ConfigurationError):
            YarsConfig.from_dict({"port": 8080})

    @pytest.mark.parametrize("port", [0, 70000, "8080", True])
    def test_invalid_port(self, port):
        with pytest.raises(ConfigurationError):
            YarsConfig(host="yars.test", port=port)

    def test_invalid_proxy(self):
        with pytest.raises(ConfigurationError):
            YarsConfig.from_dict({"host": "yars.test", "proxy": "not a proxy"})

    def test_nested_transport(self):
        config = YarsConfig.from_dict({"host": "yars.test", "transport": {"timeout": 2.5, "retries": 1}})
        assert config.transport.timeout == 2.5
        assert config.transport.retries == 1

    def test_invalid_transport(self):
        with pytest.raises(ConfigurationError):
            YarsConfig.from_dict({"host": "yars.test", "transport": 5})

    def test_transport_value_from_string(self):
        with pytest.raises(ConfigurationError):
            YarsConfig.from_dict({"host": "yars.test", "transport": {"retries": "3"}})

    def test_to_dict_from_dict(self):
        config = YarsConfig(host="yars.test", port=9000, context="ctx", proxy="http://proxy.local:3128")
        restored = YarsConfig.from_dict(config.to_dict())
        assert restored == config

    def test_save_load(self, tmp_path):
        path = tmp_path / "conf" / "yars.json"
        config = YarsConfig(host="yars.test", context="ctx", transport=TransportConfig(pooled=True))
        config.save(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["host"] == "yars.test"
        assert data["transport"]["pooled"] is True

        assert YarsConfig.load(path) == config

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            YarsConfig.load(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            YarsConfig.load(path)

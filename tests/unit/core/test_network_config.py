"""
Tests for NetworkConfig and the process-wide default config.
"""

import pytest

import src.quickfire.core.config as config_module
from src.quickfire.core.config import (
    DEFAULT_TIMEOUT,
    NetworkConfig,
    get_default_config,
    set_base_url,
    set_default_config,
)
from src.quickfire.utils.user_agent import default_user_agent


@pytest.fixture(autouse=True)
def reset_default_config(monkeypatch):
    monkeypatch.setattr(config_module, "_default_config", None)


class TestNetworkConfig:
    """Tests for NetworkConfig."""

    def test_defaults(self):
        config = NetworkConfig()

        assert config.base_url == ""
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.debug is False
        assert config.callback_executor is None
        assert config.user_agent == default_user_agent()

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="timeout"):
            NetworkConfig(timeout=0)

    def test_trailing_slashes_stripped(self):
        assert NetworkConfig(base_url="https://api.example.com//").base_url == "https://api.example.com"

    def test_is_frozen(self):
        config = NetworkConfig()

        with pytest.raises(AttributeError):
            config.base_url = "https://other.example.com"

    def test_headers_are_read_only(self):
        headers = {"X-App": "shop"}
        config = NetworkConfig(headers=headers)
        headers["X-App"] = "changed"

        assert config.headers["X-App"] == "shop"
        with pytest.raises(TypeError):
            config.headers["X-New"] = "1"

    def test_default_headers(self):
        config = NetworkConfig(user_agent="shop/2.1", headers={"Accept-Language": "en"})

        assert config.default_headers() == {"User-Agent": "shop/2.1", "Accept-Language": "en"}

    def test_with_methods_return_copies(self):
        config = NetworkConfig(base_url="https://a.example.com", user_agent="t")

        staging = config.with_base_url("https://b.example.com/")
        slower = config.with_timeout(60)
        tagged = config.with_headers({"X-App": "shop"})

        assert config.base_url == "https://a.example.com"
        assert staging.base_url == "https://b.example.com"
        assert slower.timeout == 60
        assert tagged.headers["X-App"] == "shop"
        assert tagged.user_agent == "t"


class TestDefaultConfig:
    """Tests for the process-wide default."""

    def test_lazily_created(self):
        config = get_default_config()

        assert config is get_default_config()
        assert config.base_url == ""

    def test_set_default_config(self):
        config = NetworkConfig(base_url="https://www.example.com")

        set_default_config(config)

        assert get_default_config() is config

    def test_set_base_url(self):
        set_base_url("https://www.example.com/")

        assert get_default_config().base_url == "https://www.example.com"

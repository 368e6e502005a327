"""
Tests for User-Agent assembly.
"""

from importlib.metadata import PackageNotFoundError

import src.quickfire.utils.user_agent as user_agent
from src.quickfire.utils.user_agent import (
    DEFAULT_USER_AGENT,
    AppInfo,
    build_user_agent,
)


def shop_info(**overrides):
    values = dict(
        executable="shop", version="2.1", build="77",
        platform="arm64", os_name="Darwin", os_version="23.1.0",
    )
    values.update(overrides)
    return AppInfo(**values)


class TestBuildUserAgent:
    def test_format(self):
        assert build_user_agent(shop_info()) == "shop/2.1 (arm64; Darwin 23.1.0; build:77;)"

    def test_fallback(self):
        assert build_user_agent(None) == DEFAULT_USER_AGENT


class TestAppInfoDetect:
    def test_unknown_distribution(self, monkeypatch):
        def missing(name):
            raise PackageNotFoundError(name)

        monkeypatch.setattr(user_agent, "metadata", missing)

        assert AppInfo.detect("no-such-app") is None

    def test_from_metadata(self, monkeypatch):
        monkeypatch.setattr(
            user_agent, "metadata", lambda name: {"Name": "shop", "Version": "2.1.0+77"}
        )

        info = AppInfo.detect("shop")

        assert info.executable == "shop"
        assert info.version == "2.1.0+77"
        assert info.build == "77"
        assert info.user_agent.startswith("shop/2.1.0+77 (")

    def test_build_defaults_to_version(self, monkeypatch):
        monkeypatch.setattr(user_agent, "metadata", lambda name: {"Name": "shop", "Version": "3.0"})

        assert AppInfo.detect("shop").build == "3.0"

    def test_missing_version(self, monkeypatch):
        monkeypatch.setattr(user_agent, "metadata", lambda name: {"Name": "shop"})

        assert AppInfo.detect("shop") is None

    def test_script_name_used_when_not_given(self, monkeypatch):
        seen = []

        def fake_metadata(name):
            seen.append(name)
            raise PackageNotFoundError(name)

        monkeypatch.setattr(user_agent, "metadata", fake_metadata)
        monkeypatch.setattr(user_agent.sys, "argv", ["/usr/local/bin/shop-cli"])

        AppInfo.detect()

        assert seen == ["shop-cli"]

"""Unit tests for configuration loading"""
import argparse
import logging
import os
from unittest.mock import patch

import pytest

from modelboard.core.config import DashboardConfig


@pytest.fixture(autouse=True)
def no_dotenv():
    """Keep a developer's .env file out of the tests."""
    with patch("modelboard.core.config.load_dotenv"):
        yield


def args(**overrides):
    values = {"api_url": None, "log_level": None, "admin": False}
    values.update(overrides)
    return argparse.Namespace(**values)


class TestDashboardConfig:

    def test_missing_file_uses_defaults(self, tmp_path):
        with patch.dict(os.environ, {}, clear=True):
            config = DashboardConfig.from_file(tmp_path / "missing.yaml")

        assert config.api_url == "http://localhost:3000"
        assert config.is_admin is False
        assert config.discard_stale_fetches is True
        assert config.session_cookie is None

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_url: https://models.example.com\nis_admin: true\ntimeout: 5\n")

        with patch.dict(os.environ, {}, clear=True):
            config = DashboardConfig.from_file(path)

        assert config.api_url == "https://models.example.com"
        assert config.is_admin is True
        assert config.timeout == 5

    def test_unknown_keys_are_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_url: http://a\nrefresh_color: blue\n")

        with patch.dict(os.environ, {}, clear=True):
            config = DashboardConfig.from_file(path)

        assert config.api_url == "http://a"
        assert not hasattr(config, "refresh_color")

    def test_invalid_yaml_falls_back(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_url: [unclosed\n")

        with patch.dict(os.environ, {}, clear=True):
            config = DashboardConfig.from_file(path)

        assert config.api_url == "http://localhost:3000"

    def test_lower_case_log_level_is_normalized(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("log_level: info\n")

        with patch.dict(os.environ, {}, clear=True):
            config = DashboardConfig.from_file(path)

        assert config.log_level == "INFO"
        assert isinstance(getattr(logging, config.log_level), int)

    def test_unknown_log_level_falls_back_to_info(self):
        assert DashboardConfig(log_level="chatty").log_level == "INFO"

    def test_environment_fills_missing_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("timeout: 3\n")
        env = {"MODELBOARD_API_URL": "http://env:4000", "MODELBOARD_SESSION_COOKIE": "sid=abc"}

        with patch.dict(os.environ, env, clear=True):
            config = DashboardConfig.from_file(path)

        assert config.api_url == "http://env:4000"
        assert config.session_cookie == "sid=abc"

    def test_file_wins_over_environment(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api_url: http://file\n")

        with patch.dict(os.environ, {"MODELBOARD_API_URL": "http://env"}, clear=True):
            config = DashboardConfig.from_file(path)

        assert config.api_url == "http://file"

    def test_override_with_args_only_when_given(self):
        config = DashboardConfig(api_url="http://file", log_level="WARNING")

        config.override_with_args(args(log_level="DEBUG"))

        assert config.api_url == "http://file"
        assert config.log_level == "DEBUG"
        assert config.is_admin is False

    def test_admin_flag_enables_admin(self):
        config = DashboardConfig().override_with_args(args(admin=True))

        assert config.is_admin is True

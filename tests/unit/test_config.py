"""
Unit tests for server configuration.
"""

import os

import pytest

from simplewebserver.config import ServerConfig


class TestServerConfig:
    """Tests for ServerConfig."""

    def test_defaults(self):
        config = ServerConfig()

        assert config.host == "0.0.0.0"
        assert config.port == 8080
        assert config.root_dir is None
        assert config.log_level == "INFO"
        config.validate()

    def test_document_root_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert ServerConfig().document_root == os.getcwd()

    def test_document_root_explicit(self):
        assert ServerConfig(root_dir="/srv/www").document_root == "/srv/www"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("WEB_HOST", "127.0.0.1")
        monkeypatch.setenv("WEB_PORT", "3000")
        monkeypatch.setenv("WEB_ROOT", "/tmp/www")
        monkeypatch.setenv("WEB_READ_TIMEOUT", "2.5")
        monkeypatch.setenv("WEB_LOG_LEVEL", "DEBUG")

        config = ServerConfig.from_env()

        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.root_dir == "/tmp/www"
        assert config.read_timeout == 2.5
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("WEB_HOST", "WEB_PORT", "WEB_ROOT", "WEB_READ_TIMEOUT", "WEB_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        assert ServerConfig.from_env() == ServerConfig()

    @pytest.mark.parametrize("kwargs", [
        {"port": -1},
        {"port": 65536},
        {"backlog": 0},
        {"read_timeout": 0},
        {"accept_timeout": -1.0},
    ])
    def test_validate_rejects(self, kwargs):
        with pytest.raises(ValueError):
            ServerConfig(**kwargs).validate()

    def test_port_zero_allowed(self):
        ServerConfig(port=0).validate()

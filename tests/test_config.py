"""Tests for server configuration and Salesforce settings."""

import pytest

from salesforce_mcp.config import (
    DEFAULT_API_VERSION,
    DEFAULT_LOGIN_URL,
    MCPConfig,
    SalesforceSettings,
)
from salesforce_mcp.errors import ConfigurationError


class TestMCPConfig:
    """Test MCPConfig loading and precedence."""

    def test_defaults_when_file_missing(self, tmp_path):
        """Missing config file falls back to defaults."""
        config = MCPConfig.load(tmp_path / "salesforce-mcp.yaml")
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.transport == "stdio"
        assert config.connect_on_startup is True
        assert config.log_level == "INFO"

    def test_load_from_yaml(self, tmp_path):
        """Values in the YAML file are applied."""
        config_file = tmp_path / "salesforce-mcp.yaml"
        config_file.write_text(
            "transport: http\nhost: 0.0.0.0\nport: 9001\nconnect_on_startup: false\n"
        )
        config = MCPConfig.load(config_file)
        assert config.transport == "http"
        assert config.host == "0.0.0.0"
        assert config.port == 9001
        assert config.connect_on_startup is False

    def test_default_file_in_working_directory(self, tmp_path, monkeypatch):
        """Without an explicit path the file is read from the working directory."""
        (tmp_path / "salesforce-mcp.yaml").write_text("port: 8123\n")
        monkeypatch.chdir(tmp_path)
        assert MCPConfig.load().port == 8123

    def test_unknown_keys_ignored(self, tmp_path):
        config_file = tmp_path / "salesforce-mcp.yaml"
        config_file.write_text("port: 8001\nsomething_else: true\n")
        assert MCPConfig.load(config_file).port == 8001

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """SALESFORCE_MCP_* variables win over the file."""
        config_file = tmp_path / "salesforce-mcp.yaml"
        config_file.write_text("transport: stdio\nport: 9001\n")
        monkeypatch.setenv("SALESFORCE_MCP_TRANSPORT", "sse")
        monkeypatch.setenv("SALESFORCE_MCP_PORT", "9100")
        monkeypatch.setenv("SALESFORCE_MCP_HOST", "10.0.0.5")

        config = MCPConfig.load(config_file)
        assert config.transport == "sse"
        assert config.port == 9100
        assert config.host == "10.0.0.5"

    def test_invalid_port_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SALESFORCE_MCP_PORT", "not-a-number")
        with pytest.raises(ValueError, match="Invalid SALESFORCE_MCP_PORT"):
            MCPConfig.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "salesforce-mcp.yaml"
        config_file.write_text("port: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid salesforce-mcp.yaml"):
            MCPConfig.load(config_file)

    def test_non_mapping_yaml(self, tmp_path):
        config_file = tmp_path / "salesforce-mcp.yaml"
        config_file.write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="expected a mapping"):
            MCPConfig.load(config_file)

    def test_invalid_transport(self, tmp_path):
        config_file = tmp_path / "salesforce-mcp.yaml"
        config_file.write_text("transport: carrier-pigeon\n")
        with pytest.raises(ValueError, match="Invalid transport"):
            MCPConfig.load(config_file)

    def test_non_integer_port_in_file(self, tmp_path):
        config_file = tmp_path / "salesforce-mcp.yaml"
        config_file.write_text("port: eighty\n")
        with pytest.raises(ValueError, match="Invalid port"):
            MCPConfig.load(config_file)


class TestSalesforceSettings:
    """Test credential loading from the environment."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SALESFORCE_USERNAME", "user@example.com")
        monkeypatch.setenv("SALESFORCE_PASSWORD", "secret")
        monkeypatch.setenv("SALESFORCE_SECURITY_TOKEN", "TOKEN")
        monkeypatch.setenv("SALESFORCE_LOGIN_URL", "https://test.salesforce.com/")

        settings = SalesforceSettings.from_env()
        assert settings.username == "user@example.com"
        assert settings.security_token == "TOKEN"
        assert settings.domain == "test"
        assert settings.login_url == "https://test.salesforce.com"
        assert settings.api_version == DEFAULT_API_VERSION

    def test_defaults(self, monkeypatch):
        """Login URL and security token are optional."""
        monkeypatch.setenv("SALESFORCE_USERNAME", "user@example.com")
        monkeypatch.setenv("SALESFORCE_PASSWORD", "secret")

        settings = SalesforceSettings.from_env()
        assert settings.login_url == DEFAULT_LOGIN_URL
        assert settings.security_token == ""
        assert settings.domain == "login"

    def test_api_version_override(self, monkeypatch):
        monkeypatch.setenv("SALESFORCE_USERNAME", "user@example.com")
        monkeypatch.setenv("SALESFORCE_PASSWORD", "secret")
        monkeypatch.setenv("SALESFORCE_API_VERSION", "61.0")
        assert SalesforceSettings.from_env().api_version == "61.0"

    @pytest.mark.parametrize("missing", ["SALESFORCE_USERNAME", "SALESFORCE_PASSWORD"])
    def test_missing_credentials(self, monkeypatch, missing):
        """Username and password are both required."""
        monkeypatch.setenv("SALESFORCE_USERNAME", "user@example.com")
        monkeypatch.setenv("SALESFORCE_PASSWORD", "secret")
        monkeypatch.delenv(missing)

        with pytest.raises(ConfigurationError) as exc_info:
            SalesforceSettings.from_env()
        assert exc_info.value.message == (
            "SALESFORCE_USERNAME and SALESFORCE_PASSWORD must be set"
        )
        assert exc_info.value.kind == "InternalError"

    @pytest.mark.parametrize("url", [
        "login.salesforce.com",
        "ftp://login.salesforce.com",
        "http://login.salesforce.com",
        "https://login.example.com",
    ])
    def test_invalid_login_url(self, monkeypatch, url):
        monkeypatch.setenv("SALESFORCE_USERNAME", "user@example.com")
        monkeypatch.setenv("SALESFORCE_PASSWORD", "secret")
        monkeypatch.setenv("SALESFORCE_LOGIN_URL", url)

        with pytest.raises(ConfigurationError, match="Invalid SALESFORCE_LOGIN_URL"):
            SalesforceSettings.from_env()

    def test_my_domain_login_url(self, monkeypatch):
        """A My Domain URL logs in through its own prefix."""
        monkeypatch.setenv("SALESFORCE_USERNAME", "user@example.com")
        monkeypatch.setenv("SALESFORCE_PASSWORD", "secret")
        monkeypatch.setenv("SALESFORCE_LOGIN_URL", "https://acme.my.salesforce.com")

        assert SalesforceSettings.from_env().domain == "acme.my"

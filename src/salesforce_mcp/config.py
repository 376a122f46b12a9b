"""
Server and Salesforce connection configuration.

Server settings are loaded from an optional YAML file (salesforce-mcp.yaml)
with environment variable overrides. Salesforce credentials are read from the
environment only and are never written to disk.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional
from urllib.parse import urlparse

import yaml

from salesforce_mcp.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "salesforce-mcp.yaml"
DEFAULT_LOGIN_URL = "https://login.salesforce.com"
DEFAULT_API_VERSION = "59.0"
SALESFORCE_HOST_SUFFIX = ".salesforce.com"

VALID_TRANSPORTS = ("stdio", "sse", "http")


@dataclass
class MCPConfig:
    """
    MCP server configuration loaded from salesforce-mcp.yaml.

    Attributes:
        host: Server bind address (default: "127.0.0.1", sse/http only)
        port: Server port (default: 8000, sse/http only)
        transport: Transport mode ("stdio", "sse" or "http", default: "stdio")
        connect_on_startup: Log in to Salesforce before accepting invocations
        log_level: Logging level name for the server process
    """

    host: str = "127.0.0.1"
    port: int = 8000
    transport: Literal["stdio", "sse", "http"] = "stdio"
    connect_on_startup: bool = True
    log_level: str = "INFO"

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "MCPConfig":
        """
        Load MCP configuration from a YAML file.

        Falls back to defaults if the file doesn't exist. Environment variables
        override config file values.

        Args:
            config_file: Path to the YAML file (default: ./salesforce-mcp.yaml)

        Returns:
            MCPConfig instance with loaded/default values

        Raises:
            ValueError: If the config file or an override has an invalid format
        """
        config_file = config_file or Path.cwd() / DEFAULT_CONFIG_FILE
        config_dict = {}

        if config_file.exists():
            try:
                with open(config_file) as f:
                    config_dict = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid {config_file.name}: {e}") from e
            if not isinstance(config_dict, dict):
                raise ValueError(f"Invalid {config_file.name}: expected a mapping")

        # Environment variables override config file
        if "SALESFORCE_MCP_HOST" in os.environ:
            config_dict["host"] = os.environ["SALESFORCE_MCP_HOST"]

        if "SALESFORCE_MCP_PORT" in os.environ:
            try:
                config_dict["port"] = int(os.environ["SALESFORCE_MCP_PORT"])
            except ValueError:
                raise ValueError(
                    f"Invalid SALESFORCE_MCP_PORT: {os.environ['SALESFORCE_MCP_PORT']}. "
                    "Must be an integer."
                )

        if "SALESFORCE_MCP_TRANSPORT" in os.environ:
            config_dict["transport"] = os.environ["SALESFORCE_MCP_TRANSPORT"]

        config = cls(**{k: v for k, v in config_dict.items() if k in cls.__annotations__})
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ValueError for an unknown transport or a non-integer port."""
        if self.transport not in VALID_TRANSPORTS:
            raise ValueError(
                f"Invalid transport '{self.transport}'. "
                f"Must be one of: {', '.join(VALID_TRANSPORTS)}."
            )
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValueError(f"Invalid port: {self.port!r}. Must be an integer.")


@dataclass(frozen=True)
class SalesforceSettings:
    """Credentials and endpoint used to log in to Salesforce."""

    username: str
    password: str
    security_token: str = ""
    login_url: str = DEFAULT_LOGIN_URL
    api_version: str = DEFAULT_API_VERSION

    @classmethod
    def from_env(cls) -> "SalesforceSettings":
        """
        Read connection settings from SALESFORCE_* environment variables.

        Raises:
            ConfigurationError: If username or password is missing, or the
                login URL is not an https URL on a salesforce.com host
        """
        username = os.environ.get("SALESFORCE_USERNAME")
        password = os.environ.get("SALESFORCE_PASSWORD")
        if not username or not password:
            raise ConfigurationError(
                "SALESFORCE_USERNAME and SALESFORCE_PASSWORD must be set"
            )

        login_url = os.environ.get("SALESFORCE_LOGIN_URL") or DEFAULT_LOGIN_URL
        parsed = urlparse(login_url)
        host = parsed.hostname or ""
        if parsed.scheme != "https" or not host.endswith(SALESFORCE_HOST_SUFFIX):
            raise ConfigurationError(f"Invalid SALESFORCE_LOGIN_URL: {login_url}")

        return cls(
            username=username,
            password=password,
            security_token=os.environ.get("SALESFORCE_SECURITY_TOKEN", ""),
            login_url=login_url.rstrip("/"),
            api_version=os.environ.get("SALESFORCE_API_VERSION") or DEFAULT_API_VERSION,
        )

    @property
    def domain(self) -> str:
        """
        Login domain in the form simple_salesforce expects.

        ``https://login.salesforce.com`` gives ``login``, a sandbox gives
        ``test`` and a My Domain URL gives its prefix, e.g. ``acme.my``.
        """
        host = urlparse(self.login_url).hostname or ""
        return host[: -len(SALESFORCE_HOST_SUFFIX)]

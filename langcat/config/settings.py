"""Centralized configuration for the catalog client.

Configuration can be loaded from a YAML file and is validated at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

import yaml

from langcat.utils.result import ConfigError, Err, Ok, Result

API_URL_ENV = "LANGCAT_API_URL"


@dataclass
class ApiConfig:
    """Catalog API connection settings."""

    base_url: str = "http://localhost:8080/api"
    timeout: float = 10.0
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class PageConfig:
    """Page machine behavior."""

    loading_on_list: bool = False
    history_limit: int = 50


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class ClientConfig:
    """
    Complete client configuration.

    This is the single source of truth for all configuration values.
    """

    api: ApiConfig = field(default_factory=ApiConfig)
    page: PageConfig = field(default_factory=PageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> Result["ClientConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        if not isinstance(data, dict):
            return Err(ConfigError(
                field="yaml",
                message="Top level of the configuration must be a mapping",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["ClientConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Result with loaded config or error
        """
        try:
            api_data = data.get("api", {})
            api = ApiConfig(
                base_url=str(api_data.get("base_url", "http://localhost:8080/api")),
                timeout=float(api_data.get("timeout", 10.0)),
                headers={str(k): str(v) for k, v in (api_data.get("headers") or {}).items()},
            )

            page_data = data.get("page", {})
            page = PageConfig(
                loading_on_list=bool(page_data.get("loading_on_list", False)),
                history_limit=int(page_data.get("history_limit", 50)),
            )

            logging_data = data.get("logging", {})
            logging_config = LoggingConfig(
                level=logging_data.get("level", "info"),
                format=logging_data.get("format", "json"),
            )

            return Ok(cls(api=api, page=page, logging=logging_config))

        except (AttributeError, TypeError, ValueError) as e:
            return Err(ConfigError(
                field="unknown",
                message=f"Failed to parse configuration: {e}",
            ))

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        parsed = urlparse(self.api.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return Err(ConfigError(
                field="api.base_url",
                message=f"Must be an http(s) URL, got {self.api.base_url!r}",
            ))

        if self.api.timeout <= 0:
            return Err(ConfigError(
                field="api.timeout",
                message=f"Must be positive, got {self.api.timeout}",
            ))

        if self.page.history_limit < 1:
            return Err(ConfigError(
                field="page.history_limit",
                message=f"Must be at least 1, got {self.page.history_limit}",
            ))

        if self.logging.format not in ("json", "text"):
            return Err(ConfigError(
                field="logging.format",
                message=f"Must be 'json' or 'text', got {self.logging.format!r}",
            ))

        return Ok(None)

    def with_api_url(self, base_url: str) -> "ClientConfig":
        """Return a new config pointing at another API root."""
        return replace(self, api=replace(self.api, base_url=base_url))


def load_config(path: Optional[Path] = None) -> Result[ClientConfig, ConfigError]:
    """
    Load configuration from the standard location.

    Reads the YAML file if it exists, then applies the LANGCAT_API_URL
    environment override and validates the result.

    Args:
        path: Configuration file (defaults to ./langcat.yaml)

    Returns:
        Result with loaded config or error
    """
    if path is None:
        path = Path("./langcat.yaml")

    path = Path(path)

    if path.exists():
        result = ClientConfig.from_yaml(path)
        if result.is_err():
            return result
        config = result.unwrap()
    else:
        config = ClientConfig()

    api_url = get_env_api_url()
    if api_url:
        config = config.with_api_url(api_url)

    validation_result = config.validate()
    if validation_result.is_err():
        return Err(validation_result.unwrap_err())

    return Ok(config)


def get_env_api_url() -> Optional[str]:
    """Get the catalog API URL override from environment."""
    return os.environ.get(API_URL_ENV)

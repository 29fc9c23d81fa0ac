"""Configuration module for langcat."""

from langcat.config.settings import ClientConfig, load_config

__all__ = ["ClientConfig", "load_config"]

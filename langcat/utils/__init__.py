"""Utility modules for langcat."""

from langcat.utils.logging import (
    configure_logging,
    get_logger,
    set_dispatch_id,
)
from langcat.utils.result import ConfigError, Err, ExitCode, Ok, Result, ResultError

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "set_dispatch_id",
    # Result
    "Ok",
    "Err",
    "Result",
    "ResultError",
    "ConfigError",
    "ExitCode",
]

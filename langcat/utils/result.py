"""Result type for explicit error handling.

Transport calls, validation and configuration loading all return a Result
instead of raising, so every caller has to look at the failure branch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


class ResultError(Exception):
    """Raised when unwrapping a Result fails."""

    pass


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful result."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the success value. Safe to call since this is Ok."""
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Get the error value. Raises since this is Ok."""
        raise ResultError(f"Called unwrap_err on Ok value: {self.value}")

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents an error result."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Get the success value. Raises since this is Err."""
        raise ResultError(f"Called unwrap on Err value: {self.error}")

    def unwrap_err(self) -> E:
        """Get the error value. Safe to call since this is Err."""
        return self.error

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Union[Ok[T], Err[E]]


@dataclass(frozen=True)
class ConfigError:
    """Error in configuration."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"Config error in '{self.field}': {self.message}"


# Exit codes
class ExitCode:
    """Exit codes for CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1

    # Configuration (10-19)
    CONFIG_ERROR = 10

    # Page outcomes (20-29)
    PAGE_ERROR = 20
    VALIDATION_FAILED = 21

# ABOUTME: Typed error hierarchy for ccswitch
# ABOUTME: Every I/O, parse, lookup and validation failure surfaces as an AppError subclass
from pathlib import Path


class AppError(Exception):
    """Base class for all ccswitch errors."""


class ConfigIOError(AppError):
    """File could not be read or written.

    ABOUTME: Wraps the underlying OSError (permission denied, missing dir, ...)
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class ParseError(AppError, ValueError):
    """Malformed JSON/TOML, or data that doesn't match the expected schema."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class NotFoundError(AppError, LookupError):
    """Referenced provider or server id does not exist."""


class ValidationError(AppError, ValueError):
    """Config is well-formed but semantically invalid."""

"""Public error types for projconf."""

from __future__ import annotations

from pathlib import Path


class ProjConfError(Exception):
    """Base class for all projconf errors."""


class ConfigParseError(ProjConfError, ValueError):
    """Raised when a configuration file cannot be parsed into key/value pairs."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot parse configuration file {path}: {reason}")
        self.path = path
        self.reason = reason


class RootResolutionError(ProjConfError):
    """Raised when the server root cannot be derived from the anchor package."""

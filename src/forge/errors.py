"""Exception hierarchy shared by the template store, registry and scaffolder."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ConfigError",
    "DestinationExists",
    "EditorError",
    "ForgeError",
    "IoError",
    "KeyNotFound",
    "ValidationError",
    "VcsError",
]


class ForgeError(RuntimeError):
    """Base class for every error surfaced to forge callers."""


class ConfigError(ForgeError):
    """Raised when a template document or the user config location is unusable."""


class ValidationError(ForgeError):
    """Raised when a template declares an unsafe path."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class DestinationExists(ForgeError):
    """Raised when a scaffold target is already populated and ``force`` is off."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"destination '{path}' already exists and is not empty (use --force)")
        self.path = path


class IoError(ForgeError):
    """Raised when a filesystem operation fails; carries the offending path."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{reason}: {path}")
        self.path = path
        self.reason = reason


class KeyNotFound(ForgeError, LookupError):
    """Raised when an architecture key is absent from the resolved set."""

    def __init__(self, key: str) -> None:
        super().__init__(f"template not found: {key}")
        self.key = key


class EditorError(ForgeError):
    """Raised when no editor could be launched for a template file."""


class VcsError(ForgeError):
    """Raised when version control initialization fails."""

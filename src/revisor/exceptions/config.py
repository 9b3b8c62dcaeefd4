"""Configuration exceptions: paths, settings, detector availability."""

from pathlib import Path
from typing import Any

from .base import RevisorError


class ConfigurationError(RevisorError):
    """Base class for configuration-related errors."""

    pass


class InvalidPathError(ConfigurationError):
    """Raised when a provided path is invalid."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class NoDetectorsError(ConfigurationError):
    """Raised when no detector is enabled or available for a language."""

    def __init__(self, language: str):
        super().__init__(
            f"No detectors enabled for language: {language}",
            details={"language": language},
        )
        self.language = language

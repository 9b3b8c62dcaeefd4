"""Exception hierarchy for Revisor."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    IssueBuildError,
    ParsingError,
    ReportError,
    UnsupportedLanguageError,
)
from .base import RevisorError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    NoDetectorsError,
)

__all__ = [
    "RevisorError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "UnsupportedLanguageError",
    "IssueBuildError",
    "ReportError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "NoDetectorsError",
]

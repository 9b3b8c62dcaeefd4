"""Configuration loading and management for Revisor.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig / DEFAULT_THRESHOLDS)
    2. Global config (~/.revisor.toml)
    3. Project config (revisor.toml or .revisor.toml in the project directory)
    4. Explicit config file
    5. Environment variables (REVISOR_* prefix)
    6. CLI overrides (passed as kwargs)

A config file that cannot be read or parsed is logged and ignored. Inside a
readable file, malformed values fall back to their default one field at a
time, so one bad threshold never discards the rest of the file.

Example TOML:

    [detectors.complexity]
    enabled = true
    thresholds = { function = 12, file = 25 }

    [detectors.naming]
    thresholds = { minLength = 2 }
    patterns = { constants = false }

    [analysis]
    exclude_patterns = ["node_modules/**", "**/*.min.js"]

    [performance]
    max_concurrent_files = 20
    timeout_seconds = 10

Example:
    >>> config = load_config(max_concurrent_files=4)
    >>> config.max_concurrent_files
    4
"""

from __future__ import annotations

import math
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .exceptions import ConfigurationError, InvalidConfigError
from .logging_config import get_logger

logger = get_logger(__name__)

PROJECT_CONFIG_FILES = ("revisor.toml", ".revisor.toml")
GLOBAL_CONFIG_FILE = ".revisor.toml"

SUPPORTED_LANGUAGES = ("javascript", "typescript")

# Detector name -> threshold key -> default value.
DEFAULT_THRESHOLDS: dict[str, dict[str, float]] = {
    "complexity": {"function": 10, "file": 20},
    "naming": {"minLength": 3, "maxLength": 30},
    "size": {
        "fileLines": 300,
        "functionLines": 50,
        "functionParameters": 5,
        "classLines": 200,
        "methodLines": 30,
    },
    "duplication": {"minLines": 6, "minTokens": 50, "similarityThreshold": 0.85},
}

# Accepted (min, max) per threshold; anything outside falls back to the default.
THRESHOLD_RANGES: dict[str, dict[str, tuple[float, float]]] = {
    "complexity": {"function": (1, 50), "file": (1, 100)},
    "naming": {"minLength": (1, 10), "maxLength": (5, 100)},
    "size": {
        "fileLines": (50, 2000),
        "functionLines": (10, 500),
        "functionParameters": (2, 20),
        "classLines": (50, 1000),
        "methodLines": (5, 200),
    },
    "duplication": {
        "minLines": (3, 50),
        "minTokens": (10, 500),
        "similarityThreshold": (0.5, 1.0),
    },
}

NAMING_PATTERN_KEYS = ("camelCase", "constants", "functions", "variables")

DEFAULT_INCLUDE_PATTERNS = ("**/*.js", "**/*.jsx", "**/*.ts", "**/*.tsx")
DEFAULT_EXCLUDE_PATTERNS = (
    "node_modules/**",
    "dist/**",
    "build/**",
    "**/*.test.*",
    "**/*.spec.*",
    "coverage/**",
    ".git/**",
    "**/*.min.js",
    "**/*.bundle.js",
)

# Field -> (min, max) for the [performance] / [security] sections.
_LIMIT_RANGES: dict[str, tuple[float, float]] = {
    "max_concurrent_files": (1, 50),
    "timeout_seconds": (1, 300),
    "max_file_size_bytes": (1024, 100 * 1024 * 1024),
}


@dataclass(frozen=True)
class DetectorConfig:
    """Settings for one detector.

    Attributes:
        enabled: Disabled detectors report nothing
        thresholds: Numeric limits keyed by name (e.g. "function", "minLength")
        options: Detector-specific extras (e.g. naming "patterns")
    """

    enabled: bool = True
    thresholds: Mapping[str, float] = field(default_factory=dict)
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only views so a shared config cannot be mutated by a detector
        object.__setattr__(self, "thresholds", MappingProxyType(dict(self.thresholds)))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))


def default_detector_configs() -> dict[str, DetectorConfig]:
    return {
        name: DetectorConfig(enabled=True, thresholds=dict(defaults))
        for name, defaults in DEFAULT_THRESHOLDS.items()
    }


@dataclass(frozen=True)
class AnalysisConfig:
    """Validated analysis settings.

    Attributes:
        detectors: Detector name -> DetectorConfig
        language: Language the run targets ("javascript" or "typescript")
        include_patterns: Globs a file must match (relative to the target)
        exclude_patterns: Globs that remove a file from the run
        max_concurrent_files: Files loaded per batch
        timeout_seconds: Per-file read + parse time limit
        max_file_size_bytes: Larger files are skipped
    """

    detectors: Mapping[str, DetectorConfig] = field(default_factory=default_detector_configs)
    language: str = "javascript"
    include_patterns: tuple[str, ...] = DEFAULT_INCLUDE_PATTERNS
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    max_concurrent_files: int = 10
    timeout_seconds: float = 30.0
    max_file_size_bytes: int = 5 * 1024 * 1024

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_concurrent_files < 1:
            raise ValueError("max_concurrent_files must be at least 1")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if self.max_file_size_bytes <= 0:
            raise ValueError("max_file_size_bytes must be positive")
        if not self.language:
            raise ValueError("language must not be empty")

        object.__setattr__(self, "include_patterns", tuple(self.include_patterns))
        object.__setattr__(self, "exclude_patterns", tuple(self.exclude_patterns))

    def detector_config(self, name: str) -> DetectorConfig:
        """Configuration for ``name``; unknown detectors get an enabled default."""
        config = self.detectors.get(name)
        if config is None:
            return DetectorConfig(thresholds=dict(DEFAULT_THRESHOLDS.get(name, {})))
        return config


def load_config(
    config_file: Optional[Path] = None,
    project_dir: Optional[Path] = None,
    **overrides: Any,
) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        project_dir: Where to look for revisor.toml (defaults to the cwd)
        **overrides: Direct overrides (typically from CLI flags); None values
            are ignored

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigurationError: If an explicit config file does not exist
        InvalidConfigError: If an override is unsupported or out of range
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / GLOBAL_CONFIG_FILE
    if global_config.is_file():
        _deep_merge(merged, _read_config_file(global_config))

    project_root = project_dir or Path.cwd()
    for name in PROJECT_CONFIG_FILES:
        project_config = project_root / name
        if project_config.is_file() and project_config != global_config:
            logger.info(f"Using config file {project_config}")
            _deep_merge(merged, _read_config_file(project_config))
            break

    if config_file is not None:
        if not config_file.is_file():
            raise ConfigurationError(f"Config file not found: {config_file}")
        logger.info(f"Using config file {config_file}")
        _deep_merge(merged, _read_config_file(config_file))

    values = _sanitize(merged)
    values.update(_load_env_vars())
    for key, value in overrides.items():
        if value is None:
            continue
        _check_override(key, value)
        values[key] = value

    try:
        return AnalysisConfig(**values)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _read_config_file(path: Path) -> dict[str, Any]:
    """Parse a TOML file; an unreadable or invalid file yields no settings."""
    try:
        return _load_toml_file(path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.error(f"Invalid config file '{path}': {e}; falling back to defaults")
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


def _sanitize(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Turn raw TOML data into AnalysisConfig keyword arguments."""
    values: dict[str, Any] = {"detectors": _sanitize_detectors(raw.get("detectors", {}))}

    analysis = _section(raw, "analysis")
    language = analysis.get("language")
    if language is not None:
        if language in SUPPORTED_LANGUAGES:
            values["language"] = language
        else:
            logger.warning(f"Ignoring unsupported analysis.language {language!r}")
    for key in ("include_patterns", "exclude_patterns"):
        patterns = analysis.get(key)
        if patterns is None:
            continue
        if isinstance(patterns, list) and all(isinstance(p, str) for p in patterns):
            values[key] = tuple(patterns)
        else:
            logger.warning(f"Ignoring analysis.{key}: expected a list of strings")

    for section_name in ("performance", "security"):
        section = _section(raw, section_name)
        for key, value in section.items():
            if key not in _LIMIT_RANGES:
                logger.warning(f"Ignoring unknown setting {section_name}.{key}")
                continue
            low, high = _LIMIT_RANGES[key]
            if _valid_number(value, low, high):
                values[key] = int(value) if key != "timeout_seconds" else float(value)
            else:
                logger.warning(
                    f"Ignoring {section_name}.{key}={value!r}: expected a number in [{low}, {high}]"
                )

    return values


def _sanitize_detectors(raw: Any) -> dict[str, DetectorConfig]:
    if not isinstance(raw, dict):
        logger.warning("Ignoring [detectors]: expected a table")
        raw = {}

    for name in raw:
        if name not in DEFAULT_THRESHOLDS:
            logger.warning(f"Ignoring settings for unknown detector {name!r}")

    configs: dict[str, DetectorConfig] = {}
    for name, defaults in DEFAULT_THRESHOLDS.items():
        section = raw.get(name, {})
        if not isinstance(section, dict):
            logger.warning(f"Ignoring [detectors.{name}]: expected a table")
            section = {}

        enabled = section.get("enabled", True)
        if not isinstance(enabled, bool):
            logger.warning(f"Ignoring detectors.{name}.enabled={enabled!r}: expected a boolean")
            enabled = True

        configs[name] = DetectorConfig(
            enabled=enabled,
            thresholds=_sanitize_thresholds(name, section.get("thresholds", {}), defaults),
            options=_sanitize_options(name, section),
        )
    return configs


def _sanitize_thresholds(
    detector: str, raw: Any, defaults: Mapping[str, float]
) -> dict[str, float]:
    if not isinstance(raw, dict):
        logger.warning(f"Ignoring detectors.{detector}.thresholds: expected a table")
        raw = {}

    thresholds = dict(defaults)
    for key, value in raw.items():
        if key not in defaults:
            logger.warning(f"Ignoring unknown threshold detectors.{detector}.{key}")
            continue
        low, high = THRESHOLD_RANGES[detector][key]
        if _valid_number(value, low, high):
            thresholds[key] = value
        else:
            logger.warning(
                f"Threshold detectors.{detector}.{key}={value!r} is outside [{low}, {high}]; "
                f"using default {defaults[key]}"
            )
    return thresholds


def _sanitize_options(detector: str, section: Mapping[str, Any]) -> dict[str, Any]:
    options = {k: v for k, v in section.items() if k not in ("enabled", "thresholds")}
    if detector != "naming":
        return options

    patterns = options.get("patterns")
    if patterns is not None:
        if not isinstance(patterns, dict):
            logger.warning("Ignoring detectors.naming.patterns: expected a table")
            options.pop("patterns")
        else:
            options["patterns"] = {
                key: value
                for key, value in patterns.items()
                if key in NAMING_PATTERN_KEYS and isinstance(value, bool)
            }
    for key in ("generic_words", "abbreviations"):
        words = options.get(key)
        if words is not None and not (
            isinstance(words, list) and all(isinstance(w, str) for w in words)
        ):
            logger.warning(f"Ignoring detectors.naming.{key}: expected a list of strings")
            options.pop(key)
    return options


def _load_env_vars() -> dict[str, Any]:
    """Load overrides from REVISOR_* environment variables.

    Supported environment variables:
        REVISOR_LANGUAGE: javascript/typescript
        REVISOR_MAX_CONCURRENT_FILES: int
        REVISOR_TIMEOUT_SECONDS: float
        REVISOR_MAX_FILE_SIZE_BYTES: int
    """
    result: dict[str, Any] = {}

    language = os.environ.get("REVISOR_LANGUAGE")
    if language:
        if language in SUPPORTED_LANGUAGES:
            result["language"] = language
        else:
            logger.warning(f"Ignoring REVISOR_LANGUAGE={language!r}")

    for config_field in fields(AnalysisConfig):
        if config_field.name not in _LIMIT_RANGES:
            continue
        env_key = f"REVISOR_{config_field.name.upper()}"
        raw = os.environ.get(env_key)
        if raw is None:
            continue
        try:
            value = float(raw)
        except ValueError:
            logger.warning(f"Ignoring {env_key}={raw!r}: not a number")
            continue
        low, high = _LIMIT_RANGES[config_field.name]
        if not _valid_number(value, low, high):
            logger.warning(f"Ignoring {env_key}={raw!r}: expected a number in [{low}, {high}]")
            continue
        result[config_field.name] = value if config_field.name == "timeout_seconds" else int(value)

    return result


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name, {})
    if not isinstance(section, dict):
        logger.warning(f"Ignoring [{name}]: expected a table")
        return {}
    return section


def _valid_number(value: Any, low: float, high: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if math.isnan(value):
        return False
    return low <= value <= high


def _check_override(key: str, value: Any) -> None:
    if key == "language":
        if value not in SUPPORTED_LANGUAGES:
            raise InvalidConfigError(key, value, f"expected one of {', '.join(SUPPORTED_LANGUAGES)}")
    elif key in _LIMIT_RANGES:
        low, high = _LIMIT_RANGES[key]
        if not _valid_number(value, low, high):
            raise InvalidConfigError(key, value, f"expected a number in [{low}, {high}]")

"""Detector registry: name -> detector class, and per-language availability.

Usage:
    detectors = create_detectors_for_language("javascript", config.detectors)
"""

from __future__ import annotations

from typing import Mapping, Optional

from ..config import DetectorConfig
from ..exceptions import UnsupportedLanguageError
from .base import BaseDetector
from .complexity import ComplexityDetector
from .duplication import DuplicationDetector
from .naming import NamingDetector
from .size import SizeDetector

DETECTORS: dict[str, type[BaseDetector]] = {
    "complexity": ComplexityDetector,
    "naming": NamingDetector,
    "size": SizeDetector,
    "duplication": DuplicationDetector,
}

LANGUAGE_DETECTORS: dict[str, tuple[str, ...]] = {
    "javascript": ("complexity", "naming", "size", "duplication"),
    "typescript": ("complexity", "naming", "size", "duplication"),
}


def get_supported_languages() -> list[str]:
    return list(LANGUAGE_DETECTORS)


def get_available_detectors(language: str) -> list[str]:
    """Detector names usable for ``language`` (empty if the language is unknown)."""
    return list(LANGUAGE_DETECTORS.get(language, ()))


def create_detector(name: str, config: Optional[DetectorConfig] = None) -> BaseDetector:
    """Instantiate one detector by name.

    Raises:
        ValueError: If name is not recognized
    """
    cls = DETECTORS.get(name)
    if cls is None:
        raise ValueError(f"Unknown detector: {name!r}. Choose from: {', '.join(sorted(DETECTORS))}")
    return cls(config)


def create_detectors_for_language(
    language: str, configs: Optional[Mapping[str, DetectorConfig]] = None
) -> list[BaseDetector]:
    """Instantiate every enabled detector available for ``language``.

    Each call returns fresh instances, so the caller owns the lifetime of
    stateful detectors.

    Raises:
        UnsupportedLanguageError: If no detectors are registered for the language
    """
    if language not in LANGUAGE_DETECTORS:
        raise UnsupportedLanguageError(language, get_supported_languages())

    configs = configs or {}
    detectors = []
    for name in LANGUAGE_DETECTORS[language]:
        config = configs.get(name)
        if config is not None and not config.enabled:
            continue
        detectors.append(create_detector(name, config))
    return detectors

"""Base formatter interface for Revisor report rendering."""

from abc import ABC, abstractmethod

from ..models.report import Report


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, report: Report) -> None:
        """Write the report to the terminal."""

    @abstractmethod
    def format(self, report: Report) -> str:
        """Return formatted string representation of the report."""

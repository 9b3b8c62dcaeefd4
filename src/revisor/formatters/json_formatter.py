"""JSON formatter for Revisor."""

import json

from ..models.report import Report
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render reports as JSON."""

    def render(self, report: Report) -> None:
        print(self.format(report))

    def format(self, report: Report) -> str:
        return json.dumps(report.to_dict(), indent=2)

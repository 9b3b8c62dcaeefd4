"""Shared test fixtures for Revisor tests."""

import textwrap
from pathlib import Path

import pytest

from revisor.scanning.parser import SourceParser


@pytest.fixture(scope="session")
def source_parser():
    """One parser for the whole session; grammars load once."""
    return SourceParser()


@pytest.fixture
def parse_js(source_parser):
    """Parse a dedented JavaScript snippet into a ParsedFile."""

    def _parse(code: str, path: str = "sample.js"):
        return source_parser.parse_content(textwrap.dedent(code).lstrip("\n"), path)

    return _parse


@pytest.fixture
def write_files(tmp_path):
    """Write {relative path: source} into tmp_path and return the root."""

    def _write(files: dict) -> Path:
        for rel_path, content in files.items():
            target = tmp_path / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return tmp_path

    return _write


SUMMARIZE_ORDERS = """
function summarize(orders) {
  let total = 0;
  let count = 0;
  for (const order of orders) {
    if (order.status === "paid" && order.amount > 0) {
      total += order.amount;
      count += 1;
    }
  }
  const average = count > 0 ? total / count : 0;
  return { total: total, count: count, average: average };
}
"""

# Same structure as SUMMARIZE_ORDERS with every identifier renamed.
SUMMARIZE_RENAMED = """
function collect(entries) {
  let sum = 0;
  let seen = 0;
  for (const entry of entries) {
    if (entry.state === "done" && entry.value > 10) {
      sum += entry.value;
      seen += 2;
    }
  }
  const mean = seen > 0 ? sum / seen : 0;
  return { sum: sum, seen: seen, mean: mean };
}
"""


@pytest.fixture
def summarize_source():
    return SUMMARIZE_ORDERS


@pytest.fixture
def renamed_source():
    return SUMMARIZE_RENAMED

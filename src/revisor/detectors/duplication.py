"""Cross-file duplicate code detection.

The detector is stateful for the length of one run: every file's code
blocks are kept so later files can be compared against all earlier ones.
The owning engine calls ``reset()`` before a new run.

Per file:
    1. Extract candidate blocks (functions, methods, statement blocks,
       if / loop / switch statements) that meet minLines and minTokens.
    2. Tokenize each block structurally. Node types and operators are kept;
       identifiers and literals collapse to IDENTIFIER / LITERAL, so renaming
       a variable never hides a duplicate.
    3. Compare each block with every stored block from another file:
       equal fingerprints score 1.0, otherwise

           |distinct(A) & distinct(B)| / max(len(A), len(B))

    4. Report pairs at or above similarityThreshold, one issue per pair,
       then store the file's blocks.

Two indexes keep step 3 from comparing against everything. Since the shared
distinct tokens can exceed neither distinct(A) nor len(B), a block of m
tokens can only reach threshold t when

    t * len(A) <= m <= distinct(A) / t

so only stored blocks whose token count lies in that window (found with
bisect over a sorted count index) and blocks with an identical fingerprint
are scored. Candidates are visited in storage order, so pruning never
changes which matches are reported, nor their order.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Optional

from ..config import DetectorConfig
from ..logging_config import get_logger
from ..models.issue import Category, Issue, IssueBuilder, Severity
from ..scanning.syntax import ParsedFile, SyntaxNode, walk
from .base import BaseDetector
from .node_types import FUNCTION_TYPES, IDENTIFIER_TYPES, LITERAL_TYPES

logger = get_logger(__name__)

EXTRACTABLE_TYPES = FUNCTION_TYPES | {
    "statement_block",
    "if_statement",
    "for_statement",
    "for_in_statement",
    "while_statement",
    "do_statement",
    "switch_statement",
}

IDENTIFIER_TOKEN = "IDENTIFIER"
LITERAL_TOKEN = "LITERAL"

# Literal nodes whose inner structure (string fragments, escapes) is content,
# not shape. Template strings are still entered for their substitutions.
_OPAQUE_LITERALS = LITERAL_TYPES - {"template_string"}

_HASH_BASE = 31
_HASH_MASK = (1 << 64) - 1
_EPSILON = 1e-9


@dataclass(eq=False)
class CodeBlock:
    id: str
    start_line: int
    end_line: int
    tokens: tuple[str, ...]
    fingerprint: str
    file_path: str
    node: SyntaxNode = field(repr=False)
    distinct_tokens: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.distinct_tokens = frozenset(self.tokens)

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(frozen=True)
class DuplicationMatch:
    block: CodeBlock
    other: CodeBlock
    similarity: float
    duplicated_lines: int


@dataclass(frozen=True)
class DuplicationStats:
    total_blocks: int
    processed_files: int


def extract_tokens(node: SyntaxNode) -> list[str]:
    """Structural token sequence of the subtree under ``node``, in pre-order."""
    tokens: list[str] = []
    for child in walk(node, prune=lambda n: n.type in _OPAQUE_LITERALS):
        tokens.append(child.type)
        operator = child.get("operator")
        if isinstance(operator, str):
            tokens.append(operator)
        if child.type in IDENTIFIER_TYPES:
            tokens.append(IDENTIFIER_TOKEN)
        elif child.type in LITERAL_TYPES:
            tokens.append(LITERAL_TOKEN)
    return tokens


def fingerprint(tokens: list[str] | tuple[str, ...]) -> str:
    """Order-sensitive 64-bit polynomial rolling hash of a token sequence."""
    value = 0
    for char in "|".join(tokens):
        value = (value * _HASH_BASE + ord(char)) & _HASH_MASK
    return f"{value:016x}"


def similarity(a: CodeBlock, b: CodeBlock) -> float:
    if a.fingerprint == b.fingerprint:
        return 1.0
    if not a.tokens or not b.tokens:
        return 0.0
    common = len(a.distinct_tokens & b.distinct_tokens)
    return common / max(len(a.tokens), len(b.tokens))


def _severity(match: DuplicationMatch) -> Severity:
    if match.similarity >= 0.95 and match.duplicated_lines >= 20:
        return Severity.CRITICAL
    if match.similarity >= 0.90 and match.duplicated_lines >= 15:
        return Severity.HIGH
    if match.similarity >= 0.85 and match.duplicated_lines >= 10:
        return Severity.MEDIUM
    return Severity.LOW


class DuplicationDetector(BaseDetector):
    """Finds blocks that repeat (nearly) verbatim across files.

    One instance must see every file of a run; create it once, ``reset()``
    it between runs, and read ``get_stats()`` for diagnostics.
    """

    name = "duplication"
    stateful = True
    DEFAULT_THRESHOLDS = {"minLines": 6, "minTokens": 50, "similarityThreshold": 0.85}

    def __init__(self, config: Optional[DetectorConfig] = None):
        super().__init__(config)
        self._blocks: list[CodeBlock] = []
        self._processed_files: set[str] = set()
        self._by_fingerprint: dict[str, list[int]] = {}
        # (token count, storage index), kept sorted
        self._by_size: list[tuple[int, int]] = []

    def reset(self) -> None:
        """Forget every block and file seen so far."""
        self._blocks = []
        self._processed_files = set()
        self._by_fingerprint = {}
        self._by_size = []
        logger.debug("Duplication state cleared")

    def get_stats(self) -> DuplicationStats:
        return DuplicationStats(
            total_blocks=len(self._blocks),
            processed_files=len(self._processed_files),
        )

    def _detect(self, parsed_file: ParsedFile) -> list[Issue]:
        file_blocks = self.extract_blocks(parsed_file)
        matches = self.find_matches(file_blocks)
        issues = [self._issue(parsed_file, match) for match in matches]

        for block in file_blocks:
            self._store(block)
        self._processed_files.add(parsed_file.path)

        logger.debug(
            f"{parsed_file.path}: {len(file_blocks)} blocks, {len(matches)} duplicates, "
            f"{len(self._blocks)} blocks stored"
        )
        return issues

    def extract_blocks(self, parsed_file: ParsedFile) -> list[CodeBlock]:
        min_lines = self.get_threshold("minLines")
        min_tokens = self.get_threshold("minTokens")
        blocks: list[CodeBlock] = []

        for index, node in enumerate(n for n in walk(parsed_file.ast) if n.type in EXTRACTABLE_TYPES):
            start = node.start_line
            end = node.end_line
            if end - start + 1 < min_lines:
                continue
            tokens = extract_tokens(node)
            if len(tokens) < min_tokens:
                continue
            blocks.append(
                CodeBlock(
                    id=f"{parsed_file.path}_{index}",
                    start_line=start,
                    end_line=end,
                    tokens=tuple(tokens),
                    fingerprint=fingerprint(tokens),
                    file_path=parsed_file.path,
                    node=node,
                )
            )
        return blocks

    def find_matches(self, file_blocks: list[CodeBlock]) -> list[DuplicationMatch]:
        """Match new blocks against stored ones, one match per location pair."""
        threshold = self.get_threshold("similarityThreshold")
        matches: list[DuplicationMatch] = []
        seen: set[tuple[str, int, str, int]] = set()

        for block in file_blocks:
            for other in self._candidates(block, threshold):
                if other.file_path == block.file_path:
                    continue
                score = similarity(block, other)
                if score < threshold:
                    continue
                key = (block.file_path, block.start_line, other.file_path, other.start_line)
                mirrored = (other.file_path, other.start_line, block.file_path, block.start_line)
                if key in seen or mirrored in seen:
                    continue
                seen.add(key)
                matches.append(
                    DuplicationMatch(
                        block=block,
                        other=other,
                        similarity=score,
                        duplicated_lines=min(block.line_count, other.line_count),
                    )
                )
        return matches

    def _candidates(self, block: CodeBlock, threshold: float) -> list[CodeBlock]:
        if threshold <= 0:
            return list(self._blocks)

        low = threshold * len(block.tokens) - _EPSILON
        high = len(block.distinct_tokens) / threshold + _EPSILON
        start = bisect.bisect_left(self._by_size, (low,))
        stop = bisect.bisect_right(self._by_size, (high, len(self._blocks)))

        indices = {index for _, index in self._by_size[start:stop]}
        indices.update(self._by_fingerprint.get(block.fingerprint, ()))
        return [self._blocks[i] for i in sorted(indices)]

    def _store(self, block: CodeBlock) -> None:
        index = len(self._blocks)
        self._blocks.append(block)
        self._by_fingerprint.setdefault(block.fingerprint, []).append(index)
        bisect.insort(self._by_size, (len(block.tokens), index))

    def _issue(self, parsed_file: ParsedFile, match: DuplicationMatch) -> Issue:
        percent = round(match.similarity * 100)
        other = match.other
        location = self.create_location(parsed_file, match.block.node)
        return (
            IssueBuilder.create()
            .with_id(self.generate_issue_id())
            .with_category(Category.DUPLICATION)
            .with_severity(_severity(match))
            .with_title(f"Duplicated code detected ({percent}% similar)")
            .with_description(
                f"A block of {match.duplicated_lines} line(s) is {percent}% similar to "
                f"code in {other.file_path}:{other.start_line}-{other.end_line}."
            )
            .with_suggestion(
                "Extract the duplicated code into a reusable function or module "
                "that both locations can import."
            )
            .with_location(location)
            .with_code_snippet(self.extract_code_snippet(parsed_file, location))
            .with_rule("duplicate-code")
            .build()
        )

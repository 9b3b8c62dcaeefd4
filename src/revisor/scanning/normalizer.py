"""Normalizer: converts raw tree-sitter trees to SyntaxNode trees.

Named tree-sitter children become SyntaxNode values under their field name
(or the unnamed ``children`` list). Anonymous tokens that occupy a field,
such as the ``operator`` of a binary expression or the ``kind`` of a
``const`` declaration, become plain string fields. Comments are dropped.
"""

from __future__ import annotations

from typing import Any

from .syntax import Position, SourceLocation, SyntaxNode

# Extras that never take part in detection.
_SKIPPED_TYPES = frozenset({"comment", "html_comment"})


class TreeSitterNormalizer:
    """Builds a SyntaxNode tree from a tree-sitter tree.

    Usage:
        normalizer = TreeSitterNormalizer()
        root = normalizer.convert(tree.root_node, code_bytes)
    """

    def convert(self, root: Any, code_bytes: bytes) -> SyntaxNode:
        """Convert ``root`` and everything under it.

        Iterative: each pending entry pairs a tree-sitter node with its
        already converted counterpart whose children are still to attach.
        """
        converted_root = self._make_node(root, code_bytes)
        pending = [(root, converted_root)]

        while pending:
            ts_node, node = pending.pop()
            cursor = ts_node.walk()
            if not cursor.goto_first_child():
                continue
            while True:
                child = cursor.node
                field_name = cursor.field_name
                if child.is_named:
                    if child.type not in _SKIPPED_TYPES:
                        converted = self._make_node(child, code_bytes)
                        node.add_child(converted, field_name)
                        pending.append((child, converted))
                elif field_name:
                    node.add_field(field_name, child.type)
                if not cursor.goto_next_sibling():
                    break

        return converted_root

    def _make_node(self, ts_node: Any, code_bytes: bytes) -> SyntaxNode:
        start_row, start_col = ts_node.start_point
        end_row, end_col = ts_node.end_point
        loc = SourceLocation(
            start=Position(line=start_row + 1, column=start_col),
            end=Position(line=end_row + 1, column=end_col),
        )
        text = None
        if ts_node.named_child_count == 0:
            text = code_bytes[ts_node.start_byte : ts_node.end_byte].decode(
                "utf-8", errors="replace"
            )
        return SyntaxNode(type=ts_node.type, loc=loc, text=text)

"""Grammar node types shared by the detectors, plus small node helpers."""

from __future__ import annotations

from typing import Optional

from ..scanning.syntax import SyntaxNode

# "function" is what older tree-sitter-javascript releases call function_expression.
FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

FUNCTION_DECLARATION_TYPES = frozenset(
    {"function_declaration", "generator_function_declaration"}
)

CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})

IDENTIFIER_TYPES = frozenset(
    {
        "identifier",
        "property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "private_property_identifier",
        "type_identifier",
        "statement_identifier",
    }
)

LITERAL_TYPES = frozenset(
    {"number", "string", "template_string", "regex", "true", "false", "null", "undefined"}
)

LOGICAL_OPERATORS = frozenset({"&&", "||"})


def function_name(node: SyntaxNode) -> Optional[str]:
    """Best-effort name of a function-like node.

    Anonymous functions take the name of the variable or object key they
    are assigned to.
    """
    name = node.get("name")
    if isinstance(name, SyntaxNode) and name.text:
        return name.text

    parent = node.parent
    if parent is not None and parent.get("value") is node:
        if parent.type == "variable_declarator":
            return parent.name_text("name")
        if parent.type == "pair":
            return parent.name_text("key")
    return None


def parameter_count(node: SyntaxNode) -> int:
    """Number of declared parameters; a bare arrow parameter counts as one."""
    params = node.get("parameters")
    if isinstance(params, SyntaxNode):
        return len(params.children)
    if isinstance(node.get("parameter"), SyntaxNode):
        return 1
    return 0

"""Tests for scanning/syntax.py - tree model and traversal."""

from revisor.scanning.syntax import (
    Position,
    SourceLocation,
    SyntaxNode,
    count_lines_of_code,
    iter_child_nodes,
    walk,
)


def _tree():
    root = SyntaxNode("program")
    func = SyntaxNode("function_declaration")
    name = SyntaxNode("identifier", text="main")
    body = SyntaxNode("statement_block")
    stmt = SyntaxNode("expression_statement")
    root.add_child(func)
    func.add_child(name, "name")
    func.add_child(body, "body")
    body.add_child(stmt)
    return root, func, name, body, stmt


class TestSyntaxNode:
    """Test SyntaxNode field handling."""

    def test_add_child_sets_parent(self):
        root, func, name, body, _ = _tree()
        assert func.parent is root
        assert name.parent is func
        assert body.parent is func

    def test_unnamed_children_collect_in_order(self):
        root = SyntaxNode("program")
        first = SyntaxNode("a")
        second = SyntaxNode("b")
        root.add_child(first)
        root.add_child(second)
        assert root.children == [first, second]

    def test_repeated_field_becomes_list(self):
        node = SyntaxNode("x")
        node.add_field("decorator", SyntaxNode("d1"))
        node.add_field("decorator", SyntaxNode("d2"))
        assert [d.type for d in node.get("decorator")] == ["d1", "d2"]

    def test_name_text(self):
        _, func, _, _, _ = _tree()
        assert func.name_text() == "main"
        assert func.name_text("missing") is None

    def test_line_defaults_without_location(self):
        node = SyntaxNode("x")
        assert node.start_line == 1
        assert node.end_line == 1

    def test_line_span(self):
        loc = SourceLocation(Position(3, 0), Position(7, 1))
        assert loc.line_span == 5


class TestTraversal:
    """Test generic tree walking."""

    def test_walk_is_preorder(self):
        root, func, name, body, stmt = _tree()
        assert list(walk(root)) == [root, func, name, body, stmt]

    def test_scalar_fields_are_skipped(self):
        node = SyntaxNode("binary_expression")
        node.add_field("operator", "&&")
        left = SyntaxNode("identifier", text="a")
        node.add_child(left, "left")
        assert list(iter_child_nodes(node)) == [left]

    def test_prune_yields_node_but_not_subtree(self):
        root, func, name, body, stmt = _tree()
        visited = list(walk(root, prune=lambda n: n.type == "statement_block"))
        assert body in visited
        assert stmt not in visited

    def test_back_reference_fields_are_not_followed(self):
        """A parent pointer stored in fields must not make traversal loop."""
        root, func, _, body, stmt = _tree()
        stmt.fields["parent"] = body
        body.fields["leadingComments"] = [root]
        func.fields["loc"] = root

        visited = list(walk(root))
        assert len(visited) == 5
        assert len(set(map(id, visited))) == 5

    def test_deep_tree_does_not_recurse(self):
        root = SyntaxNode("program")
        current = root
        for _ in range(5000):
            child = SyntaxNode("parenthesized_expression")
            current.add_child(child)
            current = child
        assert sum(1 for _ in walk(root)) == 5001


class TestLinesOfCode:
    """Test count_lines_of_code."""

    def test_skips_blank_and_comment_lines(self):
        content = "\n".join(
            [
                "// header",
                "/*",
                " * block",
                "*/",
                "",
                "const a = 1;",
                "   ",
                "function f() {}",
            ]
        )
        # " * block" is not a bare marker and counts
        assert count_lines_of_code(content) == 3

    def test_empty_content(self):
        assert count_lines_of_code("") == 0

"""End-to-end checks of the tree invariants the cleaning pipeline relies on."""

from robust_html_cleaner.tree import (
    AUTO_GENERATED_AND_EMPTY,
    CommentNode,
    ContentNode,
    StructureRepairer,
    TagAllCondition,
    TagNode,
)


class TestTreeProperties:
    """Ownership, normalization, emptiness, traversal and repair properties."""

    def test_parent_references_match_owners(self) -> None:
        """Test every tag node is owned by exactly the node it names as parent."""
        root = TagNode("html")
        body = TagNode("body")
        root.add_child(body)
        body.add_children([TagNode("p"), [TagNode("div", children=[TagNode("span")])]])

        for node in root.get_all_elements():
            assert node in node.parent.children
            owners = [n for n in [root, *root.get_all_elements()] if node in n.children]
            assert owners == [node.parent]

        div = root.find_element_by_name("div")
        assert div.remove_from_tree()
        assert div not in body.children
        assert root.find_element_by_name("span") is None

    def test_attribute_normalization(self) -> None:
        """Test attribute access is normalized and writes are idempotent."""
        node = TagNode("a")
        node.set_attribute(" Foo ", "b\x01ar")

        assert node.get_attribute("FOO") == "b ar"
        node.set_attribute("foo", node.get_attribute("foo"))
        assert node.get_attribute("foo") == "b ar"

    def test_emptiness_respects_pruning(self) -> None:
        """Test pruned children do not count toward content."""
        child = TagNode("span", pruned=True)
        node = TagNode("div", children=[child])
        assert node.is_empty() is True

        child.pruned = False
        child.add_child(ContentNode("text"))
        assert node.is_empty() is False

    def test_comment_keeps_node_non_empty(self) -> None:
        """Test a comment keeps a node non-empty."""
        node = TagNode("div", children=[CommentNode("x")])
        assert node.is_empty() is False

        node.add_child(TagNode("span", pruned=True))
        assert node.is_empty() is False

    def test_traversal_order_and_recursion(self) -> None:
        """Test pre-order traversal with and without recursion."""
        root, a, b, c, d = (TagNode(n) for n in ("root", "a", "b", "c", "d"))
        root.add_child(a)
        a.add_children([b, c])
        c.add_child(d)

        assert root.get_element_list(TagAllCondition(), recursive=True) == [a, b, c, d]
        assert root.get_element_list(TagAllCondition(), recursive=False) == [a]

    def test_repair_cascade(self) -> None:
        """Test nested empty filler is removed down to the organic parent."""
        innermost = TagNode("u", auto_generated=True)
        middle = TagNode("i", auto_generated=True, children=[innermost])
        outer = TagNode("b", auto_generated=True, children=[middle])
        parent = TagNode("p", children=[outer])

        StructureRepairer().repair(parent)

        assert parent.children == []
        assert parent.find_element(AUTO_GENERATED_AND_EMPTY) is None

    def test_repair_keeps_comment_and_blank_text(self) -> None:
        """Test repair keeps comments and blank text runs."""
        comment = CommentNode("x")
        blank = ContentNode("   ")
        filler = TagNode("p", auto_generated=True)
        node = TagNode("div", children=[comment, blank, filler])

        StructureRepairer().repair(node)

        assert node.children == [comment, blank]
        assert node.is_empty() is False

"""
Tier 0: Data Model Contract Tests

These tests pin down the Node structure and path helpers the engine and
every codec rely on.
"""

import pytest
from arbor.dom import Node, join_path, normalize_path, split_path


class TestNodeCreation:
    def test_node_creation_with_name(self):
        node = Node(name="frontend")
        assert node.name == "frontend"

    def test_node_defaults_are_empty(self):
        node = Node(name="x")
        assert node.payload == ""
        assert node.attributes == []
        assert node.children == []

    def test_defaults_are_not_shared(self):
        a = Node(name="a")
        b = Node(name="b")
        a.children.append(Node(name="c"))
        a.attributes.append(("k", "v"))
        assert b.children == []
        assert b.attributes == []

    def test_node_creation_with_children(self):
        child1 = Node(name="child1")
        child2 = Node(name="child2")
        parent = Node(name="parent", children=[child1, child2])
        assert parent.children[0] is child1
        assert parent.children[1] is child2

    def test_node_add_child(self):
        parent = Node(name="parent")
        child = Node(name="child")
        result = parent.add_child(child)
        assert result is child
        assert parent.children == [child]


class TestNodeMatching:
    def test_matches_ignores_case(self):
        assert Node(name="Frontend").matches("frontend")
        assert Node(name="frontend").matches("FRONTEND")

    def test_matches_different_name(self):
        assert not Node(name="frontend").matches("front")

    def test_find_child_keeps_stored_case(self):
        parent = Node(name="root", children=[Node(name="Api")])
        found = parent.find_child("API")
        assert found is parent.children[0]
        assert found.name == "Api"

    def test_find_child_first_match_wins(self):
        first = Node(name="dup")
        second = Node(name="DUP")
        parent = Node(name="root", children=[first, second])
        assert parent.find_child("dup") is first

    def test_find_child_missing(self):
        assert Node(name="root").find_child("nope") is None


class TestAttributes:
    def test_get_attribute(self):
        node = Node(name="ws", attributes=[("name", "dev"), ("path", "/src")])
        assert node.get_attribute("path") == "/src"
        assert node.get_attribute("missing") is None
        assert node.get_attribute("missing", "x") == "x"

    def test_set_attribute_replaces_in_place(self):
        node = Node(name="ws", attributes=[("a", "1"), ("b", "2")])
        node.set_attribute("a", "9")
        assert node.attributes == [("a", "9"), ("b", "2")]

    def test_set_attribute_appends_new_key(self):
        node = Node(name="ws", attributes=[("a", "1")])
        node.set_attribute("b", "2")
        assert node.attributes == [("a", "1"), ("b", "2")]

    def test_remove_attribute(self):
        node = Node(name="ws", attributes=[("a", "1"), ("b", "2"), ("a", "3")])
        assert node.remove_attribute("a")
        assert node.attributes == [("b", "2")]
        assert not node.remove_attribute("a")


class TestTreeTraversal:
    def test_tree_traversal_depth_first(self):
        root = Node(name="root")
        child1 = Node(name="c1")
        child2 = Node(name="c2")
        grandchild = Node(name="gc")
        root.children = [child1, child2]
        child1.children = [grandchild]

        names = [n.name for n in root.depth_first()]
        assert names == ["root", "c1", "gc", "c2"]

    def test_single_node_traversal(self):
        node = Node(name="alone")
        assert list(node.depth_first()) == [node]


class TestPaths:
    def test_split_colon(self):
        assert split_path("a:b:c") == ["a", "b", "c"]

    def test_split_mixed_separators(self):
        assert split_path("a/b\\c:d") == ["a", "b", "c", "d"]

    def test_split_drops_empty_segments(self):
        assert split_path(":a::b/") == ["a", "b"]

    def test_split_keeps_case(self):
        assert split_path("Web:API") == ["Web", "API"]

    def test_split_empty_raises(self):
        with pytest.raises(ValueError, match="Empty path"):
            split_path("")
        with pytest.raises(ValueError):
            split_path(":/")

    def test_normalize(self):
        assert normalize_path("Web/Api\\V2") == "web:api:v2"

    def test_join(self):
        assert join_path(["a", "b"]) == "a:b"

"""Tests for the box-drawing tree renderer."""

from arbor.core import insert
from arbor.dom import Node
from arbor.render import render_lines, render_tree


def make_tree(name: str, *paths: str) -> Node:
    root = Node(name=name)
    for path in paths:
        insert(root, path)
    return root


class TestRenderLines:
    def test_empty_root(self):
        assert render_lines(Node(name="")) == []

    def test_include_root(self):
        root = make_tree("dev", "frontend:api", "backend")
        assert render_lines(root, include_root=True) == [
            "dev",
            "├───frontend",
            "│   └───api",
            "└───backend",
        ]

    def test_nested_continuation_columns(self):
        root = make_tree("", "a:b:c", "a:d", "e:f")
        assert render_lines(root) == [
            "├───a",
            "│   ├───b",
            "│   │   └───c",
            "│   └───d",
            "└───e",
            "    └───f",
        ]

    def test_single_child_uses_elbow(self):
        root = make_tree("", "only")
        assert render_lines(root) == ["└───only"]

    def test_stored_case_is_rendered(self):
        root = make_tree("", "Frontend")
        insert(root, "frontend:API")
        assert render_lines(root) == ["└───Frontend", "    └───API"]

    def test_deep_last_branch_drops_pipes(self):
        root = make_tree("", "a:b", "c:d:e", "c:f")
        assert render_lines(root) == [
            "├───a",
            "│   └───b",
            "└───c",
            "    ├───d",
            "    │   └───e",
            "    └───f",
        ]


class TestRenderTree:
    def test_every_line_ends_with_newline(self):
        root = make_tree("", "x", "y")
        assert render_tree(root) == "├───x\n└───y\n"

    def test_empty(self):
        assert render_tree(Node(name="")) == ""

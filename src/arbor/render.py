"""
Box-drawing tree diagrams.

    dev
    ├───frontend
    │   └───api
    └───backend

Which ancestor depths still have siblings coming is tracked as a frozenset
handed to each recursive call, so every call sees its own snapshot.
"""

from __future__ import annotations

from .dom import Node

BLANK = "    "
PIPE = "│   "
TEE = "├───"
ELBOW = "└───"


def _prefix(depth: int, open_depths: frozenset[int], is_last: bool) -> str:
    columns = [PIPE if d in open_depths else BLANK for d in range(depth)]
    columns.append(ELBOW if is_last else TEE)
    return "".join(columns)


def _walk(node: Node, depth: int, open_depths: frozenset[int], lines: list[str]) -> None:
    for index, child in enumerate(node.children):
        is_last = index == len(node.children) - 1
        lines.append(_prefix(depth, open_depths, is_last) + child.name)
        below = open_depths - {depth} if is_last else open_depths | {depth}
        _walk(child, depth + 1, below, lines)


def render_lines(root: Node, include_root: bool = False) -> list[str]:
    """
    Diagram lines for everything below root.

    With include_root the root's own name is the first, unindented line.
    """
    lines: list[str] = []
    if include_root:
        lines.append(root.name)
    _walk(root, 0, frozenset(), lines)
    return lines


def render_tree(root: Node, include_root: bool = False) -> str:
    """Full diagram, one line per node, each ending in a newline."""
    return "".join(line + "\n" for line in render_lines(root, include_root))

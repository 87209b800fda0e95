"""
Core tree engine for Arbor.

Implements, over any Node acting as root:
- Path resolution (case-insensitive, first match wins)
- Merge-insert: reuse existing ancestors, append only the unmatched suffix
- Predicate and path-based removal
- Depth-first flattening to colon-joined paths
- Fuzzy existence check with "did you mean" suggestions

The engine knows nothing about codecs or files.
"""

from __future__ import annotations

from collections.abc import Callable

from .dom import Node, join_path, normalize_path, split_path
from .errors import AlreadyExistsError, NotFoundError, SuggestionError


def resolve(root: Node, path: str | list[str]) -> Node | None:
    """Follow each segment as a child name. Returns None on the first miss."""
    segments = split_path(path) if isinstance(path, str) else path
    node = root
    for segment in segments:
        child = node.find_child(segment)
        if child is None:
            return None
        node = child
    return node


def build_chain(segments: list[str], payload: str = "") -> Node:
    """One Node per segment, each the sole child of the previous. Payload goes on the leaf."""
    head = Node(name=segments[0])
    tail = head
    for segment in segments[1:]:
        tail = tail.add_child(Node(name=segment))
    tail.payload = payload
    return head


def insert(root: Node, path: str | list[str], payload: str = "") -> Node:
    """
    Merge-insert a path below root and return the new leaf.

    Existing children matching a prefix of the path are reused, so inserting
    "a:b" then "a:c" yields one "a" with two children. Re-inserting an existing
    leaf raises AlreadyExistsError and leaves the tree untouched.
    """
    segments = split_path(path) if isinstance(path, str) else list(path)
    node = root
    consumed: list[str] = []

    while True:
        head, rest = segments[0], segments[1:]
        child = node.find_child(head)

        if child is None:
            chain = build_chain(segments, payload)
            node.add_child(chain)
            leaf = chain
            while leaf.children:
                leaf = leaf.children[0]
            return leaf

        consumed.append(child.name)
        if not rest:
            raise AlreadyExistsError(join_path(consumed))

        node = child
        segments = rest


def remove_matching(node: Node, predicate: Callable[[Node], bool]) -> Node | None:
    """Detach and return the first direct child satisfying predicate."""
    for index, child in enumerate(node.children):
        if predicate(child):
            return node.children.pop(index)
    return None


def remove(root: Node, path: str | list[str]) -> Node:
    """
    Remove the node addressed by path and return it.

    Only the addressed node (with its subtree) is detached; its ancestors stay.
    Raises NotFoundError naming the first unresolved segment.
    """
    segments = split_path(path) if isinstance(path, str) else list(path)
    parent = root
    resolved: list[str] = []

    for segment in segments[:-1]:
        child = parent.find_child(segment)
        if child is None:
            raise NotFoundError(segment, join_path(resolved))
        resolved.append(child.name)
        parent = child

    leaf = segments[-1]
    removed = remove_matching(parent, lambda child: child.matches(leaf))
    if removed is None:
        raise NotFoundError(leaf, join_path(resolved))
    return removed


def flatten(root: Node) -> list[str]:
    """
    Full path of every node below root, depth-first pre-order.

    Root itself is excluded: children inserted via "x" and "y:z" flatten to
    ["x", "y", "y:z"].
    """
    paths: list[str] = []

    def walk(node: Node, prefix: list[str]) -> None:
        for child in node.children:
            segments = prefix + [child.name]
            paths.append(join_path(segments))
            walk(child, segments)

    walk(root, [])
    return paths


def suggest(root: Node, query: str) -> list[str]:
    """Flattened paths that contain the query or are contained in it, in document order."""
    needle = normalize_path(query)
    return [
        path for path in flatten(root)
        if path.lower() in needle or needle in path.lower()
    ]


def exists(root: Node, query: str) -> None:
    """
    Succeed silently if query names an existing path.

    Otherwise raise SuggestionError with the normalized query and every
    flattened path related to it by substring containment (either direction).
    """
    needle = normalize_path(query)
    paths = flatten(root)
    if any(path.lower() == needle for path in paths):
        return
    raise SuggestionError(needle, suggest(root, needle))

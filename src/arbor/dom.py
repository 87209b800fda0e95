"""
DOM - Document Object Model for Arbor

Every persisted registry document decodes into a tree of Nodes. Nodes are
addressed by paths of names; name comparison is case-insensitive while the
stored casing is kept for display and re-serialization.

Key invariant: a Node exclusively owns its children. The tree never contains
cycles - new nodes are only ever appended as fresh subtrees.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

# ':' '/' and '\' are interchangeable segment separators
PATH_SEPARATOR = ":"
SEPARATOR_PATTERN = re.compile(r"[:/\\]")


@dataclass
class Node:
    """A node in the registry tree."""
    name: str
    payload: str = ""
    attributes: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.lower() == name.lower()

    def find_child(self, name: str) -> Node | None:
        """Return the first direct child whose name matches, in insertion order."""
        for child in self.children:
            if child.matches(name):
                return child
        return None

    def add_child(self, child: Node) -> Node:
        """Add a child node and return it for chaining."""
        self.children.append(child)
        return child

    def get_attribute(self, key: str, default: str | None = None) -> str | None:
        """Value of the first attribute with this key."""
        for k, v in self.attributes:
            if k == key:
                return v
        return default

    def set_attribute(self, key: str, value: str) -> None:
        """Replace the first attribute with this key, or append a new one."""
        for i, (k, _) in enumerate(self.attributes):
            if k == key:
                self.attributes[i] = (key, value)
                return
        self.attributes.append((key, value))

    def remove_attribute(self, key: str) -> bool:
        """Drop every attribute with this key. Returns True if any were removed."""
        kept = [(k, v) for k, v in self.attributes if k != key]
        removed = len(kept) != len(self.attributes)
        self.attributes = kept
        return removed

    def depth_first(self) -> Iterator[Node]:
        """Traverse tree depth-first, yielding self then children."""
        yield self
        for child in self.children:
            yield from child.depth_first()


def split_path(address: str) -> list[str]:
    """
    Split an address like "web:api/v2" into ["web", "api", "v2"].

    Empty segments (leading, trailing or doubled separators) are dropped.
    Raises ValueError if nothing is left.
    """
    segments = [s for s in SEPARATOR_PATTERN.split(address) if s]
    if not segments:
        raise ValueError(f"Empty path: {address!r}")
    return segments


def normalize_path(address: str) -> str:
    """Lower-case an address and unify its separators to ':'."""
    return SEPARATOR_PATTERN.sub(PATH_SEPARATOR, address).lower()


def join_path(segments: list[str]) -> str:
    return PATH_SEPARATOR.join(segments)

"""
Workspace and project registry built on the tree engine.

Document layout (the same for every codec):

    root
    └── workspaces              current="<workspace name>"
        ├── <workspace>         path="<directory>"
        │   └── <project>       sub-projects nest as children
        └── ...

Workspaces are direct children of the "workspaces" node; projects are
addressed inside a workspace with colon paths like "frontend:api".
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from .core import exists, flatten, insert, remove, remove_matching, suggest
from .dom import Node, join_path, split_path
from .errors import NotFoundError, RegistryError, SuggestionError
from .store import DocumentStore

logger = logging.getLogger(__name__)

WORKSPACES_TAG = "workspaces"
CURRENT_ATTR = "current"
PATH_ATTR = "path"


@dataclass
class Workspace:
    """A named workspace and the directory it lives in."""
    name: str
    path: Path
    node: Node

    @classmethod
    def from_node(cls, node: Node) -> Workspace:
        path = node.get_attribute(PATH_ATTR)
        if path is None:
            raise RegistryError(f"Workspace '{node.name}' has no path")
        return cls(name=node.name, path=Path(path), node=node)


class Registry:
    """All workspaces in one document, plus which one is current."""

    def __init__(self, root: Node | None = None):
        self.root = root if root is not None else Node(name="")
        container = self.root.find_child(WORKSPACES_TAG)
        if container is None:
            container = self.root.add_child(Node(name=WORKSPACES_TAG))
        self._container = container

    @classmethod
    def load(cls, store: DocumentStore) -> Registry:
        return cls(store.load())

    def save(self, store: DocumentStore) -> None:
        store.save(self.root)

    # Workspaces

    def workspaces(self) -> list[Workspace]:
        """Workspaces in document order. Entries without a path are skipped."""
        result = []
        for node in self._container.children:
            try:
                result.append(Workspace.from_node(node))
            except RegistryError as e:
                logger.warning("Skipping malformed entry: %s", e)
        return result

    def add_workspace(self, name: str, path: str | Path, create_dir: bool = True) -> Workspace:
        """
        Register a workspace at path.

        Raises AlreadyExistsError if the name is taken (case-insensitive) and
        RegistryError if the name contains a path separator.
        """
        segments = split_path(name)
        if len(segments) != 1 or segments[0] != name:
            raise RegistryError(f"Invalid workspace name: {name!r}")

        node = insert(self._container, segments)
        node.set_attribute(PATH_ATTR, str(path))
        if create_dir:
            Path(path).mkdir(parents=True, exist_ok=True)
        logger.debug("Added workspace %s at %s", name, path)
        return Workspace.from_node(node)

    def lookup(self, name: str) -> Workspace:
        """Find a workspace by name, suggesting similar names on a miss."""
        node = self._container.find_child(name)
        if node is None:
            # Workspace names never contain ':', so depth-1 entries are workspaces
            candidates = [p for p in suggest(self._container, name) if ":" not in p]
            raise SuggestionError(name.lower(), candidates)
        return Workspace.from_node(node)

    def current(self) -> Workspace:
        name = self._container.get_attribute(CURRENT_ATTR)
        if not name:
            raise RegistryError("No workspace currently selected!")
        node = self._container.find_child(name)
        if node is None:
            raise RegistryError(f"Current workspace '{name}' no longer exists")
        return Workspace.from_node(node)

    def set_current(self, name: str) -> Workspace:
        workspace = self.lookup(name)
        self._container.set_attribute(CURRENT_ATTR, workspace.name)
        logger.debug("Current workspace is now %s", workspace.name)
        return workspace

    def remove_workspace(self, name: str, purge: bool = False) -> Workspace:
        """
        Unregister a workspace. With purge, its directory is deleted as well.

        Clears the current selection if it pointed at the removed workspace.
        """
        workspace = self.lookup(name)
        remove_matching(self._container, lambda node: node is workspace.node)

        current = self._container.get_attribute(CURRENT_ATTR)
        if current and workspace.node.matches(current):
            self._container.remove_attribute(CURRENT_ATTR)

        if purge and workspace.path.is_dir():
            shutil.rmtree(workspace.path)
            logger.debug("Purged %s", workspace.path)

        logger.debug("Removed workspace %s", workspace.name)
        return workspace

    # Projects

    def _workspace(self, name: str | None) -> Workspace:
        return self.lookup(name) if name else self.current()

    def add_project(self, address: str, workspace: str | None = None) -> Node:
        """Merge-insert a project path into a workspace (the current one by default)."""
        ws = self._workspace(workspace)
        leaf = insert(ws.node, address)
        logger.debug("Added project %s to %s", address, ws.name)
        return leaf

    def remove_project(self, address: str, workspace: str | None = None) -> Node:
        ws = self._workspace(workspace)
        removed = remove(ws.node, address)
        logger.debug("Removed project %s from %s", address, ws.name)
        return removed

    def lookup_project(self, address: str, workspace: str | None = None) -> tuple[Node, Path]:
        """
        Find a project and its directory.

        The directory is the workspace path joined with the project's stored
        segment names. Misses raise SuggestionError with near matches.
        """
        ws = self._workspace(workspace)
        segments = split_path(address)
        exists(ws.node, join_path(segments))

        names = []
        node = ws.node
        for segment in segments:
            child = node.find_child(segment)
            if child is None:
                # Stored names containing a separator flatten like a deeper path
                raise NotFoundError(segment, join_path(names))
            names.append(child.name)
            node = child

        return node, ws.path.joinpath(*names)

    def projects(self, workspace: str | None = None) -> list[str]:
        """Every project path in a workspace, depth-first."""
        return flatten(self._workspace(workspace).node)

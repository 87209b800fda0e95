"""
CLI interface for Arbor.

Manages workspaces and the projects nested inside them. Every command is one
load -> mutate -> save cycle over the registry document.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import get_config
from .errors import ArborError, RegistryError
from .formats.base import registry as codecs
from .registry import Registry
from .render import render_tree
from .store import DocumentStore

ITEM_TYPES = ("workspace", "project")


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    get_config()

    parser = argparse.ArgumentParser(
        prog="arbor",
        description="Manages workspaces and the projects inside them",
    )

    parser.add_argument(
        "--registry",
        type=str,
        help="Registry document to use (default: from config)",
    )

    parser.add_argument(
        "--format",
        type=str,
        dest="format_name",
        help="Force document format (e.g., records, xml)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log what is loaded, saved and changed",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a new workspace or project")
    new.add_argument("type", choices=ITEM_TYPES, help="Type of item to create")
    new.add_argument("name", help="Workspace name, or project path like 'app:api'")
    new.add_argument("--path", help="Parent directory for a new workspace (default: cwd)")
    new.add_argument("--workspace", "-w", help="Workspace for a new project (default: current)")

    rm = sub.add_parser("remove", help="Remove a workspace or project")
    rm.add_argument("type", choices=ITEM_TYPES, help="Type of item to remove")
    rm.add_argument("name", help="Workspace name, or project path like 'app:api'")
    rm.add_argument("--purge", "-p", action="store_true", help="Erase the workspace directory from disk")
    rm.add_argument("--workspace", "-w", help="Workspace of the project (default: current)")

    switch = sub.add_parser("switch", help="Change the active workspace")
    switch.add_argument("name", help="The name of the workspace")

    sub.add_parser("current", help="Display the current workspace")

    open_ = sub.add_parser("open", help="Print the directory of a project")
    open_.add_argument("name", help="Project path like 'app:api'")
    open_.add_argument("--workspace", "-w", help="Workspace of the project (default: current)")

    tree = sub.add_parser("tree", help="Draw the project tree")
    tree.add_argument("--workspace", "-w", help="Workspace to draw (default: current)")
    tree.add_argument("--all", "-a", action="store_true", help="Draw every workspace")

    lst = sub.add_parser("list", help="List project paths")
    lst.add_argument("--workspace", "-w", help="Workspace to list (default: current)")

    export = sub.add_parser("export", help="Print the registry document in another format")
    export.add_argument("--to", dest="target", required=True, help="Target format (e.g., xml)")
    export.add_argument("--compact", action="store_true", help="Skip pretty-printing")

    return parser.parse_args(args)


def open_store(parsed: argparse.Namespace) -> DocumentStore:
    codec = None
    if parsed.format_name:
        codec = codecs.get_by_name(parsed.format_name)
        if codec is None:
            raise RegistryError(f"Unknown format: {parsed.format_name}")
    return DocumentStore(parsed.registry, codec=codec)


def cmd_new(parsed: argparse.Namespace, reg: Registry) -> str:
    if parsed.type == "workspace":
        parent = Path(parsed.path) if parsed.path else Path.cwd()
        workspace = reg.add_workspace(parsed.name, (parent / parsed.name).resolve())
        reg.set_current(workspace.name)
        return f"Created workspace '{workspace.name}' at {workspace.path}"

    reg.add_project(parsed.name, parsed.workspace)
    return f"Created project '{parsed.name}'"


def cmd_remove(parsed: argparse.Namespace, reg: Registry) -> str:
    if parsed.type == "workspace":
        workspace = reg.remove_workspace(parsed.name, purge=parsed.purge)
        return f"Removed workspace '{workspace.name}'"

    reg.remove_project(parsed.name, parsed.workspace)
    return f"Removed project '{parsed.name}'"


def cmd_tree(parsed: argparse.Namespace, reg: Registry) -> str:
    if parsed.all:
        return "\n".join(
            render_tree(ws.node, include_root=True).rstrip("\n")
            for ws in reg.workspaces()
        )
    ws = reg.lookup(parsed.workspace) if parsed.workspace else reg.current()
    return render_tree(ws.node, include_root=True).rstrip("\n")


def cmd_export(parsed: argparse.Namespace, reg: Registry) -> str:
    codec = codecs.get_by_name(parsed.target)
    if codec is None:
        raise RegistryError(f"Unknown format: {parsed.target}")
    return codec.encode(reg.root, pretty=not parsed.compact).rstrip("\n")


def run(parsed: argparse.Namespace) -> str:
    """Execute one command and return what to print."""
    store = open_store(parsed)
    reg = Registry.load(store)

    if parsed.command == "new":
        message = cmd_new(parsed, reg)
    elif parsed.command == "remove":
        message = cmd_remove(parsed, reg)
    elif parsed.command == "switch":
        workspace = reg.set_current(parsed.name)
        message = f"Switched to workspace '{workspace.name}'"
    elif parsed.command == "current":
        return f"Current workspace: '{reg.current().name}'"
    elif parsed.command == "open":
        _, path = reg.lookup_project(parsed.name, parsed.workspace)
        return str(path)
    elif parsed.command == "tree":
        return cmd_tree(parsed, reg)
    elif parsed.command == "list":
        return "\n".join(reg.projects(parsed.workspace))
    elif parsed.command == "export":
        return cmd_export(parsed, reg)
    else:
        raise RegistryError(f"Unknown command: {parsed.command}")

    # Only mutating commands reach this point
    reg.save(store)
    return message


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        output = run(parsed)
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename}", file=sys.stderr)
        return 1
    except (ArborError, ValueError, OSError) as e:
        # ValueError: empty paths like "::"
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

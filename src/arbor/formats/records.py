"""
Structured-record (JSON) codec.

Every node, root included, becomes an object:

    {"name": "dev", "payload": "...", "attributes": [["path", "/src/dev"]],
     "children": [...]}

Attributes are a list of pairs rather than an object so their order (and any
duplicate keys) survive a round trip. Empty fields are omitted.
"""

from __future__ import annotations

import json
from typing import Any

from ..dom import Node
from ..errors import DecodeError
from .base import CodecStrategy, registry


def node_to_record(node: Node) -> dict[str, Any]:
    record: dict[str, Any] = {"name": node.name}
    if node.payload:
        record["payload"] = node.payload
    if node.attributes:
        record["attributes"] = [[k, v] for k, v in node.attributes]
    if node.children:
        record["children"] = [node_to_record(child) for child in node.children]
    return record


def record_to_node(record: Any, where: str = "$") -> Node:
    """Rebuild a Node from a decoded record, validating its shape."""
    if not isinstance(record, dict):
        raise DecodeError(f"{where}: expected an object, got {type(record).__name__}")

    name = record.get("name", "")
    payload = record.get("payload", "")
    if not isinstance(name, str) or not isinstance(payload, str):
        raise DecodeError(f"{where}: 'name' and 'payload' must be strings")

    raw_attributes = record.get("attributes", [])
    if not isinstance(raw_attributes, list):
        raise DecodeError(f"{where}: 'attributes' must be a list")

    attributes: list[tuple[str, str]] = []
    for pair in raw_attributes:
        if (
            not isinstance(pair, list)
            or len(pair) != 2
            or not all(isinstance(part, str) for part in pair)
        ):
            raise DecodeError(f"{where}: attributes must be [key, value] string pairs")
        attributes.append((pair[0], pair[1]))

    children = record.get("children", [])
    if not isinstance(children, list):
        raise DecodeError(f"{where}: 'children' must be a list")

    return Node(
        name=name,
        payload=payload,
        attributes=attributes,
        children=[
            record_to_node(child, f"{where}.children[{i}]")
            for i, child in enumerate(children)
        ],
    )


class RecordCodec(CodecStrategy):
    """JSON documents of nested node records."""

    @property
    def name(self) -> str:
        return "records"

    @property
    def extensions(self) -> list[str]:
        return [".json"]

    def detect(self, text: str) -> bool:
        return text.lstrip().startswith("{")

    def decode(self, text: str) -> Node:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(f"invalid JSON: {e.msg}", e.pos) from e
        return record_to_node(data)

    def encode(self, root: Node, pretty: bool = True) -> str:
        return json.dumps(
            node_to_record(root),
            indent=2 if pretty else None,
            ensure_ascii=False,
        ) + "\n"


registry.register(RecordCodec())

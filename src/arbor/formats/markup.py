"""
Markup (XML-style) codec.

Each node round-trips to <name k1="v1" k2="v2">payload<child>...</child></name>.
The document root is synthetic: only its children are written, and decoding
returns a root with an empty name holding the top-level elements.

Only the subset the registry needs is supported: elements, attributes, text
and entity references. No namespaces, CDATA or comments.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from xml.sax.saxutils import escape

from ..config import get_config
from ..dom import Node
from ..errors import DecodeError, EncodeError
from .base import CodecStrategy, registry

NAME = r"[A-Za-z_][\w.\-]*"
NAME_PATTERN = re.compile(NAME)

START_TAG = re.compile(
    rf"<({NAME})((?:\s+{NAME}\s*=\s*(?:\"[^\"]*\"|'[^']*'))*)\s*(/?)>"
)
END_TAG = re.compile(rf"</({NAME})\s*>")
ATTRIBUTE = re.compile(rf"({NAME})\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")

ATTRIBUTE_ENTITIES = {'"': "&quot;"}


@dataclass
class Token:
    """One lexical event: start, end, empty (self-closing) or text."""
    kind: str
    name: str = ""
    attributes: list[tuple[str, str]] = field(default_factory=list)
    text: str = ""
    position: int = 0


def tokenize(text: str) -> Iterator[Token]:
    """
    Split markup into start/end/empty/text tokens.

    Text is stripped and whitespace-only runs are dropped, so pretty-printed
    documents decode to the same tree as compact ones.
    """
    pos = 0
    length = len(text)

    while pos < length:
        if text[pos] != "<":
            end = text.find("<", pos)
            if end == -1:
                end = length
            raw = text[pos:end].strip()
            if raw:
                yield Token(kind="text", text=html.unescape(raw), position=pos)
            pos = end
            continue

        # XML declaration / processing instruction: skip
        if text.startswith("<?", pos):
            end = text.find("?>", pos)
            if end == -1:
                raise DecodeError("unterminated declaration", pos)
            pos = end + 2
            continue

        match = END_TAG.match(text, pos)
        if match:
            yield Token(kind="end", name=match.group(1), position=pos)
            pos = match.end()
            continue

        match = START_TAG.match(text, pos)
        if match:
            attributes = [
                (m.group(1), html.unescape(m.group(2) if m.group(2) is not None else m.group(3)))
                for m in ATTRIBUTE.finditer(match.group(2))
            ]
            yield Token(
                kind="empty" if match.group(3) else "start",
                name=match.group(1),
                attributes=attributes,
                position=pos,
            )
            pos = match.end()
            continue

        raise DecodeError("malformed tag", pos)


def build_tree(tokens: Iterable[Token]) -> Node:
    """
    Build a Node graph from a token stream.

    Start pushes a new child and descends, end pops back to the parent, text
    replaces the current node's payload (last text wins).
    """
    root = Node(name="")
    stack = [root]

    for token in tokens:
        if token.kind in ("start", "empty"):
            node = stack[-1].add_child(
                Node(name=token.name, attributes=list(token.attributes))
            )
            if token.kind == "start":
                stack.append(node)
        elif token.kind == "end":
            if len(stack) == 1:
                raise DecodeError(f"unexpected end tag </{token.name}>", token.position)
            if stack[-1].name != token.name:
                raise DecodeError(
                    f"end tag </{token.name}> does not match <{stack[-1].name}>",
                    token.position,
                )
            stack.pop()
        elif token.kind == "text":
            if len(stack) == 1:
                raise DecodeError("text outside of any element", token.position)
            stack[-1].payload = token.text

    if len(stack) > 1:
        raise DecodeError(f"unclosed element <{stack[-1].name}>")

    return root


def _check_name(name: str, what: str) -> None:
    if not NAME_PATTERN.fullmatch(name):
        raise EncodeError(f"{what} {name!r} is not a valid markup name")


def write_node(node: Node, out: list[str]) -> None:
    """Pre-order emission: start tag, payload, children, end tag."""
    _check_name(node.name, "element")
    parts = [f"<{node.name}"]
    for key, value in node.attributes:
        _check_name(key, "attribute")
        parts.append(f' {key}="{escape(value, ATTRIBUTE_ENTITIES)}"')
    parts.append(">")
    out.append("".join(parts))

    if node.payload:
        out.append(escape(node.payload))

    for child in node.children:
        write_node(child, out)

    # Never self-closing
    out.append(f"</{node.name}>")


def indent(text: str, unit: str = "  ") -> str:
    """
    Pretty-print already serialized markup.

    Works purely on the character stream: an opening tag writes the current
    indentation then goes one level deeper, a closing tag goes one level up
    first then writes the indentation, and every '>' ends the line.
    """
    result: list[str] = []
    depth = 0
    chars = iter(text)

    for ch in chars:
        if ch == "<":
            following = next(chars, None)
            if following is None:
                break
            if following == "/":
                depth -= 1
                result.append(unit * depth)
            else:
                result.append(unit * depth)
                depth += 1
            result.append("<" + following)
        elif ch == ">":
            result.append(">\n")
        else:
            result.append(ch)

    return "".join(result)


class MarkupCodec(CodecStrategy):
    """XML-style markup, one element per node."""

    @property
    def name(self) -> str:
        return "xml"

    @property
    def extensions(self) -> list[str]:
        return [".xml"]

    def detect(self, text: str) -> bool:
        return text.lstrip().startswith("<")

    def decode(self, text: str) -> Node:
        return build_tree(tokenize(text))

    def encode(self, root: Node, pretty: bool = True) -> str:
        # The root is synthetic and never written
        if root.name or root.payload or root.attributes:
            raise EncodeError("root node name, payload and attributes cannot be written as markup")
        out: list[str] = []
        for child in root.children:
            write_node(child, out)
        text = "".join(out)
        if pretty:
            text = indent(text, get_config().render.indent)
        return text


registry.register(MarkupCodec())

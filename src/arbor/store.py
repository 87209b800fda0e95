"""
Document store: reads and writes the registry document on disk.

A missing file is an empty document. Saving truncates and rewrites the whole
file; there is no locking, the last writer wins.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import get_config
from .dom import Node
from .errors import DecodeError, RegistryError
from .formats import (
    markup as _markup,  # noqa: F401 - ensure markup codec is registered
)
from .formats import (
    records as _records,  # noqa: F401 - ensure records codec is registered
)
from .formats.base import CodecStrategy, registry

logger = logging.getLogger(__name__)

DEFAULT_CODEC = "records"


def get_codec(path: Path, format_name: str | None = None) -> CodecStrategy | None:
    """
    Codec via explicit name, then file extension.

    Returns None when neither decides; the store then sniffs the document
    content and falls back to the records codec.
    """
    if format_name:
        codec = registry.get_by_name(format_name)
        if codec is None:
            raise RegistryError(f"Unknown format: {format_name}")
        return codec

    return registry.get_by_extension(path.suffix) if path.suffix else None


def default_codec() -> CodecStrategy:
    codec = registry.get_by_name(DEFAULT_CODEC)
    assert codec is not None  # registered on import above
    return codec


class DocumentStore:
    """One registry document and the codec used for it."""

    def __init__(
        self,
        path: str | Path | None = None,
        codec: CodecStrategy | None = None,
        pretty: bool | None = None,
    ):
        cfg = get_config()
        self.path = Path(path).expanduser() if path else cfg.store.resolved_path
        chosen = codec or get_codec(self.path, cfg.store.format)
        # Unpinned stores adopt whatever format an existing document is in
        self._pinned = chosen is not None
        self.codec = chosen or default_codec()
        self.pretty = cfg.render.pretty if pretty is None else pretty

    def load(self) -> Node:
        """Decode the document, or return an empty root if the file is missing."""
        if not self.path.exists():
            logger.debug("No document at %s, starting empty", self.path)
            return Node(name="")

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"{self.path} is not valid UTF-8", e.start) from e
        if not text.strip():
            return Node(name="")

        if not self._pinned:
            match = registry.detect(text, self.path.name)
            if match:
                self.codec = match.strategy

        root = self.codec.decode(text)
        logger.debug("Loaded %s (%s codec)", self.path, self.codec.name)
        return root

    def save(self, root: Node) -> None:
        """Encode root and overwrite the document."""
        text = self.codec.encode(root, pretty=self.pretty)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")
        logger.debug("Saved %s (%s codec)", self.path, self.codec.name)

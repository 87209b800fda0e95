"""
Base codec interface and registry.

Each codec maps a Node graph to and from one textual serialization.
The registry manages codec detection and selection, so the tree engine stays
format-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..dom import Node


class CodecStrategy(ABC):
    """Base class for document codecs."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Codec name used in config and --format."""
        ...

    @property
    @abstractmethod
    def extensions(self) -> list[str]:
        """File extensions this codec handles (e.g., ['.xml'])."""
        ...

    def detect(self, text: str) -> bool:
        """
        Magic detection: returns True if text looks like this format.
        Default implementation returns False (rely on extension only).
        """
        return False

    @abstractmethod
    def decode(self, text: str) -> Node:
        """
        Decode document text into a tree of Nodes.
        Returns the root node. Raises DecodeError on malformed input.
        """
        ...

    @abstractmethod
    def encode(self, root: Node, pretty: bool = True) -> str:
        """Serialize a root node (and everything below it) to text."""
        ...


@dataclass
class CodecMatch:
    """Result of codec detection."""
    strategy: CodecStrategy
    confidence: float  # 0.0 to 1.0


class CodecRegistry:
    """Registry of codecs with detection and selection."""

    def __init__(self):
        self._strategies: list[CodecStrategy] = []
        self._by_extension: dict[str, CodecStrategy] = {}
        self._by_name: dict[str, CodecStrategy] = {}

    def register(self, strategy: CodecStrategy) -> None:
        """Register a codec."""
        self._strategies.append(strategy)
        self._by_name[strategy.name] = strategy
        for ext in strategy.extensions:
            # First registered wins for extension conflicts
            if ext not in self._by_extension:
                self._by_extension[ext] = strategy

    def get_by_name(self, name: str) -> CodecStrategy | None:
        """Get codec by name (for --format override)."""
        return self._by_name.get(name.lower())

    def get_by_extension(self, ext: str) -> CodecStrategy | None:
        """Get codec by file extension."""
        if not ext.startswith('.'):
            ext = '.' + ext
        return self._by_extension.get(ext.lower())

    def detect(self, text: str, filename: str | None = None) -> CodecMatch | None:
        """
        Detect the codec for a document.

        Priority:
        1. Extension match (high confidence)
        2. Magic detection (medium confidence)
        """
        if filename:
            ext = self._get_extension(filename)
            if ext and ext in self._by_extension:
                return CodecMatch(
                    strategy=self._by_extension[ext],
                    confidence=1.0
                )

        for strategy in self._strategies:
            if strategy.detect(text):
                return CodecMatch(
                    strategy=strategy,
                    confidence=0.8
                )

        return None

    def _get_extension(self, filename: str) -> str | None:
        """Extract lowercase extension from filename."""
        if '.' in filename:
            return '.' + filename.rsplit('.', 1)[-1].lower()
        return None

    @property
    def strategies(self) -> list[CodecStrategy]:
        """List all registered codecs."""
        return list(self._strategies)


# Global registry instance
registry = CodecRegistry()

"""
Error kinds raised by the tree engine, codecs and registry.

Every failure the library reports derives from ArborError so callers (the CLI)
can catch one type. I/O failures are left as the built-in OSError.
"""

from __future__ import annotations


class ArborError(Exception):
    """Base class for all arbor errors."""


class NotFoundError(ArborError):
    """A path segment could not be resolved."""

    def __init__(self, segment: str, path: str = ""):
        self.segment = segment
        self.path = path
        where = f" under '{path}'" if path else ""
        super().__init__(f"no such entity '{segment}'{where}")


class SuggestionError(NotFoundError):
    """Lookup failed; carries near-matching paths the caller can offer."""

    def __init__(self, query: str, suggestions: list[str] | None = None):
        self.query = query
        self.suggestions = list(suggestions or [])
        ArborError.__init__(self, self._format())
        self.segment = query
        self.path = ""

    def _format(self) -> str:
        message = f"no such entity '{self.query}'"
        if self.suggestions:
            message += "; did you mean: " + ", ".join(self.suggestions)
        return message


class AlreadyExistsError(ArborError):
    """Merge-insert would create a duplicate leaf."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"'{path}' already exists")


class DecodeError(ArborError):
    """Malformed document text."""

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)


class EncodeError(ArborError):
    """The tree cannot be represented in the chosen format."""


class RegistryError(ArborError):
    """Workspace/project level failure."""

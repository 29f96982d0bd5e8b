"""Exception hierarchy for json-node-editor.

Every error raised by the editing core derives from ``NodeEditError`` so a
view layer can catch one type and show ``str(exc)`` to the user.  Each class
also inherits the closest builtin (``ValueError``, ``LookupError``,
``RuntimeError``) so callers that only know the builtins keep working.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "DocumentError",
    "NodeEditError",
    "ParseError",
    "PathError",
    "PathMismatch",
    "PathNotFound",
    "SessionStateError",
]


class NodeEditError(Exception):
    """Base class for all json-node-editor errors."""


class ParseError(NodeEditError, ValueError):
    """Single-buffer edit text is not valid JSON.

    Attributes:
        text:   The text that failed to parse.
        lineno: 1-based line of the decoder failure.
        colno:  1-based column of the decoder failure.
    """

    def __init__(self, message: str, text: str, lineno: int = 1, colno: int = 1) -> None:
        super().__init__(message)
        self.text = text
        self.lineno = lineno
        self.colno = colno


class DocumentError(NodeEditError, ValueError):
    """The document snapshot read from the store is not valid JSON."""


class PathError(NodeEditError, LookupError):
    """A path could not be followed through a document.

    Attributes:
        path:    The path segments up to and including the failing segment.
        locator: ``format_path`` rendering of the container being inspected.
    """

    def __init__(self, message: str, path: Sequence[str | int], locator: str) -> None:
        super().__init__(message)
        self.path = tuple(path)
        self.locator = locator


class PathMismatch(PathError):
    """A segment expects a container shape the document does not have there."""


class PathNotFound(PathError):
    """A key is absent or an index is out of range."""


class SessionStateError(NodeEditError, RuntimeError):
    """An EditSession operation was invoked in a state that does not allow it."""

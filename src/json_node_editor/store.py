"""MemoryDocumentStore: in-memory DocumentStore.

Holds the document text in memory and records the flags an application
store would track.  Satisfies the ``DocumentStore`` Protocol structurally.
"""

from __future__ import annotations

import logging
from typing import Any

from json_node_editor.config import EditorConfig
from json_node_editor.node.normalizer import deserialize, serialize

__all__ = ["MemoryDocumentStore"]

logger = logging.getLogger(__name__)


class MemoryDocumentStore:
    """A document store backed by a string attribute.

    Args:
        text: Initial document text.  Defaults to an empty document.

    Attributes:
        text:        Current document text.
        has_changes: True once a write was marked dirty; reset by
                     ``mark_saved``.
        recomputing: Last value passed to ``set_recomputing``.
        writes:      Number of ``set_document_text`` calls.
    """

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.has_changes = False
        self.recomputing = False
        self.writes = 0

    @classmethod
    def from_value(
        cls, value: Any, config: EditorConfig | None = None
    ) -> MemoryDocumentStore:
        """Build a store holding ``value`` serialized with ``config``."""
        return cls(serialize(value, config))

    # ------------------------------------------------------------------
    # DocumentStore Protocol surface
    # ------------------------------------------------------------------

    def get_document_text(self) -> str:
        return self.text

    def set_document_text(self, text: str, mark_dirty: bool) -> None:
        self.text = text
        self.writes += 1
        if mark_dirty:
            self.has_changes = True
        logger.debug("Document replaced (%d chars, dirty=%s)", len(text), mark_dirty)

    def set_recomputing(self, flag: bool) -> None:
        self.recomputing = flag

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def value(self) -> Any:
        """Return the decoded document; an empty store decodes as ``{}``."""
        return deserialize(self.text) if self.text else {}

    def mark_saved(self) -> None:
        self.has_changes = False

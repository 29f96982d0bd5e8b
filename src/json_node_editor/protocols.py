"""Collaborator Protocols for json-node-editor.

An EditSession talks to the rest of an application through two structural
interfaces.  Any object with conformant methods passes ``isinstance``
checks; no inheritance required.

Example::

    from json_node_editor.protocols import DocumentStore

    class FileStore:
        def __init__(self, path):
            self.path = path

        def get_document_text(self) -> str:
            return self.path.read_text()

        def set_document_text(self, text: str, mark_dirty: bool) -> None:
            self.path.write_text(text)

        def set_recomputing(self, flag: bool) -> None:
            pass

    assert isinstance(FileStore(p), DocumentStore)  # True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from json_node_editor.node.fields import Node, Path


@runtime_checkable
class DocumentStore(Protocol):
    """Owner of the full JSON document.

    The store must apply each ``set_document_text`` as one atomic
    replacement; the session reads a fresh snapshot per commit and writes
    the whole document back.
    """

    def get_document_text(self) -> str: ...

    def set_document_text(self, text: str, mark_dirty: bool) -> None: ...

    def set_recomputing(self, flag: bool) -> None: ...


@runtime_checkable
class NodeSource(Protocol):
    """Provider of the node currently selected for display.

    ``get_current_node`` returns ``(node, path)`` where ``path`` locates, in
    the store's current document, the container whose children are
    ``node``'s fields; or None when nothing is selected.
    """

    def get_current_node(self) -> tuple[Node, Path] | None: ...

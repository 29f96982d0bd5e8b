"""EditSession: the view/edit/commit/cancel lifecycle for one node.

This is the wiring layer between the pure editing functions and the
application.  It holds the presented node and path, the active edit buffer,
the last error and the last committed text, and drives the DocumentStore.

Lifecycle::

    VIEWING --begin_edit--> EDITING --commit--> COMMITTING --window closes--> VIEWING
                               |  ^
                               |  +-- commit fails (error set, buffers kept)
                               +--cancel--> CANCELLING --> VIEWING

After a successful commit the session stays in COMMITTING while the store's
recomputing flag is set, so that views depending on the document can finish
refreshing before edit controls come back.  The window is closed by the
scheduler after ``EditorConfig.recompute_delay``, by an explicit
``finish_recompute()`` call, or immediately when the session has no
scheduler.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any

from json_node_editor.buffer import (
    EditBuffer,
    EditMode,
    KeyedBuffers,
    SingleBuffer,
    choose_mode,
    seed_text,
)
from json_node_editor.config import EditorConfig
from json_node_editor.errors import DocumentError, NodeEditError, SessionStateError
from json_node_editor.mutator import apply_at, resolve
from json_node_editor.node.fields import Node, NodeField, Path
from json_node_editor.node.normalizer import NodeNormalizer, deserialize, serialize
from json_node_editor.parser import parse_edit_buffer
from json_node_editor.path import check_segment, format_path

if TYPE_CHECKING:
    from json_node_editor.protocols import DocumentStore, NodeSource

__all__ = ["EditSession", "Scheduler", "SessionState"]

logger = logging.getLogger(__name__)

# Matches asyncio's loop.call_later(delay, callback) and
# threading.Timer(delay, callback).start wrapped in a lambda.
Scheduler = Callable[[float, Callable[[], None]], Any]


class SessionState(StrEnum):
    """Lifecycle state of an EditSession.

    - VIEWING:    Showing the node; edit controls enabled.
    - EDITING:    An edit buffer is active.
    - COMMITTING: Commit written; waiting for the recomputation window.
    - CANCELLING: Discarding the edit buffer.
    """

    VIEWING = auto()
    EDITING = auto()
    COMMITTING = auto()
    CANCELLING = auto()


class EditSession:
    """Edits one node of a document held by a DocumentStore.

    Example::

        store = MemoryDocumentStore.from_value({"user": {"name": "Ada", "age": 36}})
        session = EditSession(store)
        session.present(node_from_value({"name": "Ada", "age": 36}), ["user"])

        session.begin_edit()            # KeyedBuffers({"name": "Ada", "age": "36"})
        session.set_field("age", "37")
        session.commit()                # True
        store.value()                   # {"user": {"name": "Ada", "age": 37}}
    """

    def __init__(
        self,
        store: DocumentStore,
        source: NodeSource | None = None,
        config: EditorConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        """Initialise the session in VIEWING with no node presented.

        Args:
            store:     Owner of the full document.
            source:    Optional provider used by ``refresh()``.
            config:    Formatting and commit options.  Defaults to
                ``EditorConfig()``.
            scheduler: Callable ``(delay_seconds, callback)`` used to close the
                recomputation window.  When None the window closes as soon as
                the commit is written.
        """
        self._store = store
        self._source = source
        self._config: EditorConfig = config if config is not None else EditorConfig()
        self._scheduler = scheduler
        self._normalizer = NodeNormalizer(self._config)

        self._node: tuple[NodeField, ...] | None = None
        self._path: tuple[str | int, ...] = ()
        self._state = SessionState.VIEWING
        self._buffer: EditBuffer | None = None
        self._error: str | None = None
        self._last_committed: str | None = None
        self._window = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def node(self) -> tuple[NodeField, ...] | None:
        return self._node

    @property
    def path(self) -> tuple[str | int, ...]:
        return self._path

    @property
    def buffer(self) -> EditBuffer | None:
        """The active edit buffer; None outside of an edit."""
        return self._buffer

    @property
    def mode(self) -> EditMode | None:
        return self._buffer.mode if self._buffer is not None else None

    @property
    def error(self) -> str | None:
        """Message of the last failed commit, cleared on any state change."""
        return self._error

    @property
    def is_editing(self) -> bool:
        """True while the edit surface is shown (editing or committing)."""
        return self._state in (SessionState.EDITING, SessionState.COMMITTING)

    @property
    def can_edit(self) -> bool:
        """True when ``begin_edit()`` would succeed."""
        return self._state is SessionState.VIEWING and self._node is not None

    @property
    def last_committed_text(self) -> str | None:
        return self._last_committed

    @property
    def view_text(self) -> str:
        """Read-only text: the last committed value, else the normalized node."""
        if self._last_committed is not None:
            return self._last_committed
        return self._normalizer.normalize(self._node or ())

    @property
    def path_text(self) -> str:
        return format_path(self._path)

    # ------------------------------------------------------------------
    # Node selection
    # ------------------------------------------------------------------

    def present(self, node: Node | None, path: Path = ()) -> None:
        """Show ``node`` located at ``path``; None clears the selection.

        A node/path pair different from the current one drops the last
        committed text.  The error is always cleared.

        Raises:
            SessionStateError: While an edit is in progress.
            TypeError: If a path segment is neither ``str`` nor ``int``.
        """
        if self._state is SessionState.EDITING:
            raise SessionStateError("Cannot change the presented node while editing")

        new_node = tuple(node) if node is not None else None
        new_path = tuple(check_segment(segment) for segment in path)
        if new_node != self._node or new_path != self._path:
            self._last_committed = None
        self._node = new_node
        self._path = new_path
        self._error = None
        logger.debug("Presenting node at %s", format_path(new_path))

    def refresh(self) -> None:
        """Re-read the selected node from the NodeSource.

        Raises:
            SessionStateError: If the session has no NodeSource, or while an
                edit is in progress.
        """
        if self._source is None:
            raise SessionStateError("Session has no node source to refresh from")
        current = self._source.get_current_node()
        if current is None:
            self.present(None)
        else:
            node, path = current
            self.present(node, path)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def begin_edit(self) -> EditBuffer:
        """Enter EDITING and seed a buffer for the presented node.

        Returns:
            ``KeyedBuffers`` seeded with each keyed scalar's value when the
            node has at least one keyed scalar; otherwise a
            ``SingleBuffer`` seeded with the last committed text or the
            normalized node.

        Raises:
            SessionStateError: Outside VIEWING, or with no node presented.
        """
        if self._state is not SessionState.VIEWING:
            raise SessionStateError(f"Cannot begin editing while {self._state}")
        if self._node is None:
            raise SessionStateError("No node selected")

        if choose_mode(self._node) is EditMode.KEYED:
            fields = {
                f.key: seed_text(f.value)
                for f in self._node
                if f.key and not f.is_container
            }
            self._buffer = KeyedBuffers(fields)
        else:
            text = self._last_committed or self._normalizer.normalize(self._node)
            self._buffer = SingleBuffer(text)

        self._state = SessionState.EDITING
        self._error = None
        logger.debug("Editing %s in %s mode", self.path_text, self._buffer.mode)
        return self._buffer

    def set_text(self, text: str) -> None:
        """Replace the single free-form buffer's text.

        Raises:
            SessionStateError: Outside EDITING or in per-key mode.
        """
        buffer = self._require_buffer()
        if not isinstance(buffer, SingleBuffer):
            raise SessionStateError("Session is editing per key; use set_field()")
        buffer.text = text

    def set_field(self, key: str, text: str) -> None:
        """Replace one per-key buffer's text.

        Raises:
            SessionStateError: Outside EDITING, in single-buffer mode, or for
                a key that is not being edited.
        """
        buffer = self._require_buffer()
        if not isinstance(buffer, KeyedBuffers):
            raise SessionStateError("Session is editing a single buffer; use set_text()")
        if key not in buffer.fields:
            raise SessionStateError(f"Key {key!r} is not being edited")
        buffer.fields[key] = text

    def commit(self) -> bool:
        """Parse the buffer and write it into the document at the node's path.

        On success the store receives the full serialized document marked
        dirty, the replacement becomes the last committed text, and the
        recomputation window opens.  On failure the session stays in
        EDITING with ``error`` set and the buffer untouched.

        Returns:
            True if the document was written.

        Raises:
            SessionStateError: Outside EDITING.
        """
        buffer = self._require_buffer()
        try:
            replacement = parse_edit_buffer(buffer)
            document = self._read_document()
            if self._config.preserve_containers and isinstance(buffer, KeyedBuffers):
                replacement = self._keep_containers(document, replacement)
            updated = apply_at(document, self._path, replacement)
        except NodeEditError as exc:
            self._error = str(exc)
            logger.info("Commit at %s rejected: %s", self.path_text, exc)
            return False

        self._store.set_document_text(serialize(updated, self._config), mark_dirty=True)
        self._last_committed = serialize(replacement, self._config)
        logger.info("Committed %s edit at %s", buffer.mode, self.path_text)

        self._state = SessionState.COMMITTING
        self._store.set_recomputing(True)
        self._open_window()
        return True

    def cancel(self) -> None:
        """Discard the edit buffer and error and return to VIEWING.

        Raises:
            SessionStateError: Outside EDITING.
        """
        self._require_buffer()
        self._state = SessionState.CANCELLING
        self._clear_edit()
        self._state = SessionState.VIEWING
        logger.debug("Edit at %s cancelled", self.path_text)

    def finish_recompute(self) -> bool:
        """Close the recomputation window now.

        Returns:
            True if a window was open; False when there was nothing to close.
        """
        if self._state is not SessionState.COMMITTING:
            return False
        self._store.set_recomputing(False)
        self._clear_edit()
        self._state = SessionState.VIEWING
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_buffer(self) -> EditBuffer:
        if self._state is not SessionState.EDITING or self._buffer is None:
            raise SessionStateError(f"No edit in progress (session is {self._state})")
        return self._buffer

    def _clear_edit(self) -> None:
        self._buffer = None
        self._error = None

    def _read_document(self) -> Any:
        text = self._store.get_document_text()
        if not text or not text.strip():
            return {}
        try:
            return deserialize(text)
        except json.JSONDecodeError as exc:
            msg = (
                f"Document is not valid JSON: {exc.msg} "
                f"(line {exc.lineno}, column {exc.colno})"
            )
            raise DocumentError(msg) from exc
        except ValueError as exc:
            raise DocumentError(f"Document is not valid JSON: {exc}") from exc

    def _keep_containers(self, document: Any, replacement: dict[str, Any]) -> Any:
        """Merge the edited keys over the existing object's container members."""
        existing = resolve(document, self._path)
        if not isinstance(existing, dict):
            return replacement
        merged: dict[str, Any] = {}
        for key, value in existing.items():
            if key in replacement:
                merged[key] = replacement[key]
            elif isinstance(value, (dict, list)):
                merged[key] = value
        for key, value in replacement.items():
            merged.setdefault(key, value)
        return merged

    def _open_window(self) -> None:
        self._window += 1
        if self._scheduler is None:
            self.finish_recompute()
            return
        window = self._window

        def _close() -> None:
            # A later commit or an explicit finish_recompute() supersedes this one.
            if window == self._window:
                self.finish_recompute()

        self._scheduler(self._config.recompute_delay, _close)

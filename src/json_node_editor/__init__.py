"""JSON node editor - edit one subtree of a JSON document and commit it back."""

from __future__ import annotations

from json_node_editor.buffer import EditBuffer, EditMode, KeyedBuffers, SingleBuffer
from json_node_editor.config import EditorConfig
from json_node_editor.errors import (
    DocumentError,
    NodeEditError,
    ParseError,
    PathError,
    PathMismatch,
    PathNotFound,
    SessionStateError,
)
from json_node_editor.mutator import apply_at, resolve
from json_node_editor.node import FieldType, NodeField, node_from_value, normalize_node
from json_node_editor.parser import parse_buffer, parse_field, parse_fields
from json_node_editor.path import format_path
from json_node_editor.session import EditSession, SessionState
from json_node_editor.store import MemoryDocumentStore

__version__: str = "0.1.0"
__all__: list[str] = [
    "DocumentError",
    "EditBuffer",
    "EditMode",
    "EditSession",
    "EditorConfig",
    "FieldType",
    "KeyedBuffers",
    "MemoryDocumentStore",
    "NodeEditError",
    "NodeField",
    "ParseError",
    "PathError",
    "PathMismatch",
    "PathNotFound",
    "SessionState",
    "SessionStateError",
    "SingleBuffer",
    "apply_at",
    "format_path",
    "node_from_value",
    "normalize_node",
    "parse_buffer",
    "parse_field",
    "parse_fields",
    "resolve",
]

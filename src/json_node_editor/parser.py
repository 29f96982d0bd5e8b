"""Field parsing: edited text back into JSON values.

Two policies, chosen by the edit mode:

- Per-key buffers are lenient.  Text that is not JSON becomes a JSON string
  holding that text, so a field typed as ``hello`` commits as ``"hello"``.
  Each key falls back on its own.
- The single free-form buffer is strict.  Text that is not JSON raises
  ``ParseError`` and the commit does not happen.

Both reject the ``NaN``, ``Infinity`` and ``-Infinity`` tokens that Python's
``json`` module accepts by default; they are not JSON.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from json_node_editor.buffer import EditBuffer, KeyedBuffers, SingleBuffer
from json_node_editor.errors import ParseError
from json_node_editor.node.normalizer import deserialize

__all__ = ["parse_buffer", "parse_edit_buffer", "parse_field", "parse_fields"]


def parse_field(text: str) -> Any:
    """Parse one per-key buffer; never raises.

    Returns:
        The decoded JSON value, or ``text`` itself when it is not valid JSON.
    """
    try:
        return deserialize(text)
    except ValueError:
        return text


def parse_fields(fields: Mapping[str, str]) -> dict[str, Any]:
    """Parse every per-key buffer into one JSON object.

    The result has exactly the keys of ``fields``, in the same order, each
    parsed with ``parse_field``.
    """
    return {key: parse_field(text) for key, text in fields.items()}


def parse_buffer(text: str) -> Any:
    """Parse the single free-form buffer as one JSON value.

    Raises:
        ParseError: If ``text`` is not valid JSON.  The message names the
            decoder error and its position.
    """
    try:
        return deserialize(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})"
        raise ParseError(msg, text=text, lineno=exc.lineno, colno=exc.colno) from exc
    except ValueError as exc:
        raise ParseError(f"Invalid JSON: {exc}", text=text) from exc


def parse_edit_buffer(buffer: EditBuffer) -> Any:
    """Parse an edit buffer with the policy of its mode.

    Returns:
        A JSON object for ``KeyedBuffers``; any JSON value for ``SingleBuffer``.

    Raises:
        ParseError: Only for ``SingleBuffer`` text that is not valid JSON.
    """
    if isinstance(buffer, KeyedBuffers):
        return parse_fields(buffer.fields)
    if isinstance(buffer, SingleBuffer):
        return parse_buffer(buffer.text)
    raise TypeError(f"Unsupported edit buffer: {type(buffer)!r}")

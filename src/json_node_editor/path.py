"""Path locators: ``$["customer"][0]["name"]``.

The locator is display text only.  It is not JSON and is never parsed back
into a path.
"""

from __future__ import annotations

import json
from typing import Any

from json_node_editor.node.fields import Path

__all__ = ["ROOT_LOCATOR", "check_segment", "format_path"]

ROOT_LOCATOR = "$"


def check_segment(segment: Any) -> str | int:
    """Return ``segment`` if it is a valid path segment.

    Raises:
        TypeError: If segment is neither ``str`` nor ``int`` (``bool`` is
            rejected even though it subclasses ``int``).
    """
    if isinstance(segment, bool) or not isinstance(segment, (str, int)):
        raise TypeError(f"Path segments must be str or int, got {type(segment)!r}")
    return segment


def format_path(path: Path | None) -> str:
    """Render a path as a locator string.

    Args:
        path: Keys and indices from the document root.  None or empty means
              the root itself.

    Returns:
        ``$`` for the root, otherwise ``$`` followed by one bracketed segment
        per element: keys double-quoted, indices bare.

    Example::

        format_path(["a", 0, "b"])   # '$["a"][0]["b"]'
    """
    if not path:
        return ROOT_LOCATOR
    parts = []
    for segment in path:
        segment = check_segment(segment)
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        else:
            parts.append(f"[{json.dumps(segment, ensure_ascii=False)}]")
    return ROOT_LOCATOR + "".join(parts)

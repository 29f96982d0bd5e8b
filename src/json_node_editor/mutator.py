"""Path-addressed reads and writes on JSON documents.

``apply_at`` replaces the value at a path and returns the whole updated
document.  It works on a deep copy: the snapshot passed in is never
modified, so callers can keep it for comparison or rollback.

Segment rules, for every segment along the walk:
- An ``int`` segment needs a list at the cursor (else ``PathMismatch``) and
  an index inside it (else ``PathNotFound``).  Negative indices are out of
  range; Python's from-the-end indexing is not used.
- A ``str`` segment needs a dict at the cursor (else ``PathMismatch``) and an
  existing key (else ``PathNotFound``).  The last segment is the exception:
  assigning a missing key on an object adds it.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from json_node_editor.errors import PathMismatch, PathNotFound
from json_node_editor.node.fields import Path, field_type_of
from json_node_editor.path import check_segment, format_path

__all__ = ["apply_at", "resolve"]

logger = logging.getLogger(__name__)


def _found_type(value: Any) -> str:
    try:
        return str(field_type_of(value))
    except TypeError:
        return type(value).__name__


def _check_shape(target: Any, segment: str | int, path: Path, depth: int) -> None:
    """Raise PathMismatch unless ``target`` can be indexed by ``segment``."""
    expected, container = ("array", list) if isinstance(segment, int) else ("object", dict)
    if not isinstance(target, container):
        locator = format_path(path[:depth])
        msg = (
            f"Path mismatch at {locator}: expected {expected}, "
            f"found {_found_type(target)}"
        )
        raise PathMismatch(msg, path[: depth + 1], locator)


def _step(target: Any, segment: str | int, path: Path, depth: int) -> Any:
    """Return the child of ``target`` at ``segment``."""
    _check_shape(target, segment, path, depth)
    if isinstance(segment, int):
        if 0 <= segment < len(target):
            return target[segment]
        reason = f"index {segment} out of range for array of length {len(target)}"
    else:
        if segment in target:
            return target[segment]
        reason = f"key {segment!r} not found"
    locator = format_path(path[:depth])
    raise PathNotFound(f"Path not found at {locator}: {reason}", path[: depth + 1], locator)


def resolve(document: Any, path: Path) -> Any:
    """Return the value at ``path`` inside ``document``.

    Args:
        document: Any JSON value.
        path:     Keys and indices from the root; empty returns ``document``.

    Raises:
        PathMismatch: A segment's container shape does not match the document.
        PathNotFound: A key is absent or an index is out of range.
        TypeError:    A segment is neither ``str`` nor ``int``.
    """
    path = [check_segment(segment) for segment in path]
    target = document
    for depth, segment in enumerate(path):
        target = _step(target, segment, path, depth)
    return target


def apply_at(document: Any, path: Path, value: Any) -> Any:
    """Return a copy of ``document`` with the value at ``path`` replaced.

    Args:
        document: Any JSON value.  Not modified.
        path:     Keys and indices from the root.  Empty replaces the whole
                  document and returns ``value`` itself.
        value:    The replacement JSON value.

    Returns:
        The full updated document.

    Raises:
        PathMismatch: A segment's container shape does not match the document.
        PathNotFound: An intermediate key is absent, or an index (at any
            depth) is out of range.
        TypeError:    A segment is neither ``str`` nor ``int``.

    Example::

        doc = {"a": {"b": 1}}
        apply_at(doc, ["a", "b"], 2)   # {"a": {"b": 2}}
        doc                            # {"a": {"b": 1}}
    """
    path = [check_segment(segment) for segment in path]
    if not path:
        return value

    result = copy.deepcopy(document)
    target = result
    for depth, segment in enumerate(path[:-1]):
        target = _step(target, segment, path, depth)

    last = path[-1]
    depth = len(path) - 1
    if isinstance(last, int):
        # Validates shape and range; arrays are never extended.
        _step(target, last, path, depth)
    else:
        _check_shape(target, last, path, depth)
    target[last] = value

    logger.debug("Replaced value at %s", format_path(path))
    return result

"""Edit buffers: the text a user edits before committing.

An edit uses exactly one of two buffer shapes, chosen when editing starts
and kept until the edit is committed or cancelled:

- SingleBuffer: one free-form text for the whole replacement value.
- KeyedBuffers: one text per keyed scalar field of the node.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

from json_node_editor.node.fields import Node
from json_node_editor.node.normalizer import deserialize

__all__ = [
    "EditBuffer",
    "EditMode",
    "KeyedBuffers",
    "SingleBuffer",
    "choose_mode",
    "seed_text",
]


class EditMode(StrEnum):
    """Which buffer shape an edit uses.

    - SINGLE: one free-form buffer, parsed strictly.
    - KEYED:  one buffer per key, parsed leniently.
    """

    SINGLE = auto()
    KEYED = auto()


@dataclass(slots=True)
class SingleBuffer:
    """Free-form text holding the whole replacement value."""

    text: str = ""

    @property
    def mode(self) -> EditMode:
        return EditMode.SINGLE


@dataclass(slots=True)
class KeyedBuffers:
    """Per-key texts; the committed value is an object of exactly these keys."""

    fields: dict[str, str] = field(default_factory=dict)

    @property
    def mode(self) -> EditMode:
        return EditMode.KEYED


EditBuffer = SingleBuffer | KeyedBuffers


def choose_mode(node: Node) -> EditMode:
    """Pick the buffer shape for editing ``node``.

    An object node with at least one scalar entry is edited per key.
    Everything else (a lone unkeyed scalar, array elements, a node of only
    containers, an empty node) is edited as one free-form text.  Unkeyed
    scalars never get a per-key buffer, so several of them on their own
    would leave nothing to edit.
    """
    if any(f.key and not f.is_container for f in node):
        return EditMode.KEYED
    return EditMode.SINGLE


def seed_text(value: Any) -> str:
    """Stringify a scalar value for a per-key buffer.

    Plain strings are shown bare.  A string that would parse back as some
    other JSON value (``"42"``, ``"true"``, ``"null"``, ``"\\"x\\""``) is shown
    quoted so that committing the untouched buffer returns the same string.
    """
    if isinstance(value, str):
        try:
            deserialize(value)
        except ValueError:
            return value
        return json.dumps(value, ensure_ascii=False)
    return json.dumps(value, ensure_ascii=False)

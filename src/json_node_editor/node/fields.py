"""NodeField dataclass and FieldType StrEnum for flattened JSON nodes.

A Node is one level of a JSON document as a view shows it: object entries,
array entries, or a single scalar with no key.  ``node_from_value`` derives
that flattened form from a JSON value.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = [
    "FieldType",
    "JsonValue",
    "Node",
    "NodeField",
    "Path",
    "PathSegment",
    "field_type_of",
    "node_from_value",
]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None

PathSegment = str | int
Path = Sequence[PathSegment]


class FieldType(StrEnum):
    """JSON type of a NodeField value.

    StrEnum values are the lowercased member names:
    - ARRAY   -> "array"
    - OBJECT  -> "object"
    - STRING  -> "string"
    - NUMBER  -> "number"
    - BOOLEAN -> "boolean"
    - NULL    -> "null"
    """

    ARRAY = auto()
    OBJECT = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    NULL = auto()

    @property
    def is_container(self) -> bool:
        return self in (FieldType.ARRAY, FieldType.OBJECT)


@dataclass(frozen=True, slots=True)
class NodeField:
    """One entry of a flattened node.

    Attributes:
        value: The entry's JSON value.
        type:  JSON type of ``value``.  Container entries (``array``/``object``)
               are shown elsewhere in the view and are never edited as text.
        key:   Object key for object entries; None for array entries and for
               a lone scalar.
    """

    value: Any
    type: FieldType
    key: str | None = None

    @property
    def is_container(self) -> bool:
        return self.type.is_container


Node = Sequence[NodeField]


def field_type_of(value: Any) -> FieldType:
    """Return the FieldType of a JSON value.

    Raises:
        TypeError: If value is not a valid JSON type.
    """
    # bool MUST be checked before int: bool subclasses int in Python
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if value is None:
        return FieldType.NULL
    if isinstance(value, dict):
        return FieldType.OBJECT
    if isinstance(value, list):
        return FieldType.ARRAY
    if isinstance(value, str):
        return FieldType.STRING
    if isinstance(value, (int, float)):
        return FieldType.NUMBER
    raise TypeError(f"Unsupported JSON value type: {type(value)!r}")


def node_from_value(value: JsonValue) -> list[NodeField]:
    """Flatten one level of a JSON value into NodeFields.

    Objects yield one keyed field per entry, arrays one unkeyed field per
    element, and a scalar yields a single unkeyed field.

    Example::

        node_from_value({"name": "Ada", "tags": ["x"]})
        # [NodeField("Ada", FieldType.STRING, "name"),
        #  NodeField(["x"], FieldType.ARRAY, "tags")]
    """
    if isinstance(value, dict):
        return [NodeField(v, field_type_of(v), str(k)) for k, v in value.items()]
    if isinstance(value, list):
        return [NodeField(v, field_type_of(v)) for v in value]
    return [NodeField(value, field_type_of(value))]

"""Node subpackage for flattened JSON node primitives.

Re-exports the public API for the node module:
- NodeField: frozen dataclass for one entry of a flattened node
- FieldType: StrEnum of the six JSON value types
- NodeNormalizer: renders a node as canonical JSON text
- node_from_value: flattens one level of a JSON value into NodeFields
"""

from json_node_editor.node.fields import (
    FieldType,
    JsonValue,
    Node,
    NodeField,
    Path,
    PathSegment,
    field_type_of,
    node_from_value,
)
from json_node_editor.node.normalizer import (
    NodeNormalizer,
    deserialize,
    normalize_node,
    serialize,
    value_text,
)

__all__ = [
    "FieldType",
    "JsonValue",
    "Node",
    "NodeField",
    "NodeNormalizer",
    "Path",
    "PathSegment",
    "deserialize",
    "field_type_of",
    "node_from_value",
    "normalize_node",
    "serialize",
    "value_text",
]

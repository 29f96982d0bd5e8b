"""NodeNormalizer: renders a flattened node as canonical JSON text.

Rendering rules:
- An empty node renders as ``{}``.
- A node holding exactly one unkeyed field renders as that value's plain
  text (strings unquoted), not wrapped in an object.
- Any other node renders as a pretty-printed object built from its keyed
  scalar fields.  Array/object fields are left out: the view shows them as
  separate nodes, and they are never edited as raw text.
"""

from __future__ import annotations

import json
import math
from collections.abc import Hashable
from typing import Any

from cachetools import LRUCache

from json_node_editor.config import EditorConfig
from json_node_editor.node.fields import Node

__all__ = [
    "NodeNormalizer",
    "deserialize",
    "normalize_node",
    "serialize",
    "value_text",
]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def deserialize(text: str) -> Any:
    """Decode JSON text, rejecting the ``NaN``/``Infinity`` extensions.

    Raises:
        json.JSONDecodeError: Malformed text.
        ValueError: ``NaN``, ``Infinity`` or ``-Infinity`` appears in the text.
    """
    return json.loads(text, parse_constant=_reject_constant)


def serialize(
    value: Any, config: EditorConfig | None = None, *, allow_nan: bool = False
) -> str:
    """Pretty-print a JSON value using the config's indent and ascii policy.

    Raises:
        ValueError: ``value`` holds a NaN or infinite float and ``allow_nan``
            is False.
    """
    config = config if config is not None else EditorConfig()
    return json.dumps(
        value,
        indent=config.indent,
        ensure_ascii=config.ensure_ascii,
        allow_nan=allow_nan,
    )


def value_text(value: Any, config: EditorConfig | None = None) -> str:
    """Return the plain textual form of a single JSON value.

    Strings come back as-is; booleans, null and numbers use their JSON
    spelling; containers are pretty-printed.  Display text only, so a
    non-finite float renders as ``NaN``/``Infinity`` instead of raising.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return serialize(value, config, allow_nan=True)
    return json.dumps(value)


def _sign(value: Any) -> float | None:
    return math.copysign(1.0, value) if isinstance(value, float) else None


class NodeNormalizer:
    """Renders nodes to canonical text, caching results per instance.

    Each instance owns an ``LRUCache`` keyed by the node's fields, so a view
    that re-renders the same node on every refresh serializes it once.
    Nodes whose values are not hashable (lone container fields) are rendered
    without touching the cache.

    Example usage:
        normalizer = NodeNormalizer()
        normalizer.normalize([])                                  # "{}"
        normalizer.normalize([NodeField("hi", FieldType.STRING)])  # "hi"
    """

    def __init__(self, config: EditorConfig | None = None) -> None:
        self._config: EditorConfig = config if config is not None else EditorConfig()
        self._cache: LRUCache[Hashable, str] = LRUCache(maxsize=self._config.cache_size)

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def curr_size(self) -> int:
        """The current number of rendered nodes stored in the cache."""
        return int(self._cache.currsize)

    def normalize(self, node: Node) -> str:
        """Return the canonical text for ``node``.  Never raises."""
        key = self._cache_key(node)
        if key is None:
            return self._render(node)
        cached = self._cache.get(key)
        if cached is None:
            cached = self._render(node)
            self._cache[key] = cached
        return cached

    def _render(self, node: Node) -> str:
        if not node:
            return "{}"
        if len(node) == 1 and not node[0].key:
            return value_text(node[0].value, self._config)

        obj: dict[str, Any] = {}
        for field in node:
            if field.is_container or not field.key:
                continue
            obj[field.key] = field.value
        return serialize(obj, self._config, allow_nan=True)

    @staticmethod
    def _cache_key(node: Node) -> Hashable | None:
        # type(value) keeps 1, 1.0 and True apart; the float sign keeps
        # 0.0 and -0.0 apart.  Each pair hashes equal.
        key = tuple(
            (field.key, field.type, type(field.value), field.value, _sign(field.value))
            for field in node
        )
        try:
            hash(key)
        except TypeError:
            return None
        return key


# Module-level normalizer for the default config
_normalizer = NodeNormalizer()


def normalize_node(node: Node, config: EditorConfig | None = None) -> str:
    """Render ``node`` as canonical text.

    Args:
        node:   Flattened node fields, in display order.
        config: Formatting options.  Defaults to ``EditorConfig()`` when None.

    Returns:
        ``{}`` for an empty node, the plain value text for a lone unkeyed
        field, otherwise a pretty-printed object of the keyed scalar fields.
    """
    if config is None:
        return _normalizer.normalize(node)
    return NodeNormalizer(config).normalize(node)

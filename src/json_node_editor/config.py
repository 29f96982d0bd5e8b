"""EditorConfig: immutable settings shared by the normalizer and the session.

EditorConfig is a frozen (immutable) dataclass.  Invalid values are rejected
at construction time so a bad config never reaches an edit session.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["EditorConfig"]


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Immutable configuration for rendering and committing node edits.

    Attributes:
        indent: Spaces per level in pretty-printed JSON (view text, committed
            document, last committed text).  ``0`` still inserts newlines.
        ensure_ascii: When True, non-ASCII characters are escaped as
            ``\\uXXXX`` in serialized output.  Default False keeps them as-is.
        recompute_delay: Seconds the recomputation window stays open after a
            commit when the session has a scheduler.
        preserve_containers: When True, a keyed-mode commit onto an existing
            object keeps the object's array/object members instead of
            replacing the whole object with the edited scalar keys.
        cache_size: Maximum number of rendered nodes held by a
            ``NodeNormalizer`` instance.
    """

    indent: int = 2
    ensure_ascii: bool = False
    recompute_delay: float = 0.1
    preserve_containers: bool = False
    cache_size: int = 128

    def __post_init__(self) -> None:
        if self.indent < 0:
            msg = f"indent must be >= 0, got {self.indent}"
            raise ValueError(msg)
        if self.recompute_delay < 0.0:
            msg = f"recompute_delay must be >= 0.0, got {self.recompute_delay}"
            raise ValueError(msg)
        if self.cache_size < 1:
            msg = f"cache_size must be >= 1, got {self.cache_size}"
            raise ValueError(msg)

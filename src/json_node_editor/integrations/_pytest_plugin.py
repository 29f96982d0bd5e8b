"""pytest plugin for json-node-editor.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from json_node_editor import MemoryDocumentStore, PathError, format_path, resolve


@pytest.fixture
def memory_store() -> MemoryDocumentStore:
    """A fresh, empty in-memory DocumentStore for each test."""
    return MemoryDocumentStore()


@pytest.fixture(scope="session")
def assert_json_at() -> Any:
    """Fixture that returns a callable asserting the value at a JSON path.

    The fixture is session-scoped because the returned callable is stateless.

    Usage in tests::

        def test_commit(assert_json_at, memory_store):
            ...
            assert_json_at(memory_store.text, ["user", "age"], 37)

    Returns:
        A callable ``_assert(document, path, expected) -> None``.  ``document``
        may be a decoded JSON value or JSON text.
    """

    def _assert(document: Any, path: list[str | int], expected: Any) -> None:
        """Assert that ``document`` holds ``expected`` at ``path``.

        Raises:
            AssertionError: When the path cannot be followed or the value
                differs, with the locator and both values in the message.
        """
        if isinstance(document, str):
            document = json.loads(document) if document.strip() else {}
        locator = format_path(path)
        try:
            actual = resolve(document, path)
        except PathError as exc:
            raise AssertionError(f"No value at {locator}: {exc}") from exc
        if actual != expected or type(actual) is not type(expected):
            raise AssertionError(
                f"Unexpected value at {locator}\n"
                f"  actual:   {actual!r}\n"
                f"  expected: {expected!r}"
            )

    return _assert

"""Tests for apply_at and resolve.

Covers whole-document replacement, nested replacement, copy-on-write of the
input document, shape mismatches, missing keys and out-of-range indices.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from json_node_editor.errors import PathError, PathMismatch, PathNotFound
from json_node_editor.mutator import apply_at, resolve


@pytest.fixture
def document() -> dict[str, Any]:
    return {
        "customer": {
            "name": "Ada",
            "orders": [
                {"id": 1, "items": ["pen", "ink"]},
                {"id": 2, "items": []},
            ],
        },
        "active": True,
    }


class TestRootReplacement:
    @pytest.mark.parametrize("doc", [{"a": 1}, [1, 2], "text", 3, None])
    def test_empty_path_returns_value_itself(self, doc: Any) -> None:
        replacement = {"new": ["doc"]}
        assert apply_at(doc, [], replacement) is replacement

    def test_empty_tuple_path(self) -> None:
        assert apply_at({"a": 1}, (), 5) == 5


class TestReplacement:
    def test_nested_key(self) -> None:
        doc = {"a": {"b": 1}}
        assert apply_at(doc, ["a", "b"], 2) == {"a": {"b": 2}}

    def test_input_not_mutated(self, document: dict[str, Any]) -> None:
        before = copy.deepcopy(document)
        apply_at(document, ["customer", "orders", 0, "id"], 99)
        assert document == before

    def test_result_shares_no_containers_with_input(
        self, document: dict[str, Any]
    ) -> None:
        result = apply_at(document, ["active"], False)
        result["customer"]["orders"][1]["items"].append("x")
        assert document["customer"]["orders"][1]["items"] == []

    def test_returns_whole_document(self, document: dict[str, Any]) -> None:
        result = apply_at(document, ["customer", "orders", 1, "items"], ["cap"])
        assert result["customer"]["orders"][1]["items"] == ["cap"]
        assert result["customer"]["name"] == "Ada"
        assert result["active"] is True

    def test_array_slot(self, document: dict[str, Any]) -> None:
        result = apply_at(document, ["customer", "orders", 0, "items", 1], "quill")
        assert result["customer"]["orders"][0]["items"] == ["pen", "quill"]

    def test_replace_subtree_with_container(self, document: dict[str, Any]) -> None:
        result = apply_at(document, ["customer"], {"name": "Grace"})
        assert result["customer"] == {"name": "Grace"}

    def test_top_level_array(self) -> None:
        assert apply_at([1, 2, 3], [2], "x") == [1, 2, "x"]

    def test_missing_last_key_is_added(self) -> None:
        assert apply_at({"a": {}}, ["a", "b"], 1) == {"a": {"b": 1}}

    def test_key_order_preserved(self) -> None:
        result = apply_at({"x": 1, "y": 2, "z": 3}, ["y"], 20)
        assert list(result) == ["x", "y", "z"]


class TestPathNotFound:
    def test_index_out_of_range_at_last_segment(self) -> None:
        with pytest.raises(PathNotFound, match="out of range"):
            apply_at({"a": [1, 2]}, ["a", 5], 9)

    def test_index_equal_to_length(self) -> None:
        with pytest.raises(PathNotFound):
            apply_at([1, 2], [2], 9)

    def test_negative_index(self) -> None:
        with pytest.raises(PathNotFound):
            apply_at([1, 2], [-1], 9)

    def test_intermediate_index_out_of_range(self) -> None:
        with pytest.raises(PathNotFound):
            apply_at({"a": [{"b": 1}]}, ["a", 3, "b"], 9)

    def test_missing_intermediate_key(self) -> None:
        with pytest.raises(PathNotFound, match="key 'missing' not found") as exc_info:
            apply_at({"a": {}}, ["missing", "b"], 9)
        assert exc_info.value.path == ("missing",)
        assert exc_info.value.locator == "$"

    def test_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            apply_at({}, ["a", "b"], 1)


class TestPathMismatch:
    def test_key_into_scalar(self) -> None:
        with pytest.raises(PathMismatch) as exc_info:
            apply_at({"a": 1}, ["a", "b"], 9)
        assert str(exc_info.value) == (
            'Path mismatch at $["a"]: expected object, found number'
        )
        assert exc_info.value.locator == '$["a"]'
        assert exc_info.value.path == ("a", "b")

    def test_index_into_object_at_last_segment(self) -> None:
        with pytest.raises(PathMismatch, match="expected array, found object"):
            apply_at({"a": {"0": 1}}, ["a", 0], 9)

    def test_index_into_object_midway(self) -> None:
        with pytest.raises(PathMismatch, match="expected array"):
            apply_at({"a": {"b": 1}}, ["a", 0, "b"], 9)

    def test_key_into_array(self) -> None:
        with pytest.raises(PathMismatch, match="expected object, found array"):
            apply_at({"a": [1]}, ["a", "0"], 9)

    def test_key_into_string(self) -> None:
        with pytest.raises(PathMismatch, match="found string"):
            apply_at("text", ["a"], 9)

    def test_key_into_null(self) -> None:
        with pytest.raises(PathMismatch, match="found null"):
            apply_at({"a": None}, ["a", "b"], 9)

    def test_bool_not_taken_for_number(self) -> None:
        with pytest.raises(PathMismatch, match="found boolean"):
            apply_at({"a": True}, ["a", 0], 9)

    def test_common_base(self) -> None:
        with pytest.raises(PathError):
            apply_at({"a": 1}, ["a", "b"], 9)


class TestSegmentValidation:
    def test_bool_segment_rejected(self) -> None:
        with pytest.raises(TypeError):
            apply_at([1, 2], [True], 9)  # type: ignore[list-item]

    def test_float_segment_rejected(self) -> None:
        with pytest.raises(TypeError):
            resolve([1, 2], [0.0])  # type: ignore[list-item]


class TestResolve:
    def test_root(self, document: dict[str, Any]) -> None:
        assert resolve(document, []) is document

    def test_nested(self, document: dict[str, Any]) -> None:
        assert resolve(document, ["customer", "orders", 0, "items", 1]) == "ink"

    def test_missing_last_key(self, document: dict[str, Any]) -> None:
        with pytest.raises(PathNotFound):
            resolve(document, ["customer", "email"])

    def test_mismatch(self, document: dict[str, Any]) -> None:
        with pytest.raises(PathMismatch):
            resolve(document, ["customer", "name", 0])

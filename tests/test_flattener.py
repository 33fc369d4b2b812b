"""Tests for structured-text flattening."""

from __future__ import annotations

import json

import pytest

from docparity.diff import flatten, is_structured


class TestObjects:
    def test_root_members_have_no_leading_separator(self):
        assert flatten(b'{"a": 1, "b": "x"}') == {"a": "1", "b": '"x"'}

    def test_nested_objects_use_dots(self):
        flat = flatten(b'{"size": {"w": 640, "h": {"px": 480}}}')
        assert flat == {"size.w": "640", "size.h.px": "480"}

    def test_empty_object_contributes_nothing(self):
        assert flatten(b'{"a": {}, "b": 1}') == {"b": "1"}

    def test_document_order_preserved(self):
        flat = flatten(b'{"z": 1, "a": 2, "m": 3}')
        assert list(flat) == ["z", "a", "m"]

    def test_duplicate_keys_last_wins(self):
        assert flatten(b'{"a": 1, "a": 2}') == {"a": "2"}


class TestRawText:
    def test_number_text_is_verbatim(self):
        assert flatten(b'{"a": 1.0, "b": 1e3, "c": -0}') == {"a": "1.0", "b": "1e3", "c": "-0"}

    def test_string_keeps_escapes_and_quotes(self):
        flat = flatten(b'{"a": "caf\\u00e9 \\"x\\""}')
        assert flat["a"] == '"caf\\u00e9 \\"x\\""'

    def test_literals(self):
        flat = flatten(b'{"t": true, "f": false, "n": null}')
        assert flat == {"t": "true", "f": "false", "n": "null"}

    def test_non_finite_literals(self):
        flat = flatten('{"a": NaN, "b": -Infinity, "c": Infinity}')
        assert flat == {"a": "NaN", "b": "-Infinity", "c": "Infinity"}

    def test_whitespace_around_values_excluded(self):
        assert flatten(b'{ "a" :\n   7   }') == {"a": "7"}


class TestArrays:
    def test_empty_array_is_a_leaf(self):
        assert flatten(b'{"items": []}') == {"items": "[]"}

    def test_empty_array_raw_text_keeps_inner_whitespace(self):
        assert flatten(b'{"items": [ ]}') == {"items": "[ ]"}

    def test_scalar_array_is_one_opaque_leaf(self):
        assert flatten(b'{"tags": [1, 2, 3]}') == {"tags": "[1, 2, 3]"}

    def test_array_of_arrays_is_one_leaf(self):
        assert flatten(b'{"m": [[1, 2], [3]]}') == {"m": "[[1, 2], [3]]"}

    def test_array_of_objects_is_indexed(self):
        flat = flatten(b'{"items": [{"id": 1}, {"id": 2, "tag": "x"}]}')
        assert flat == {"items[0].id": "1", "items[1].id": "2", "items[1].tag": '"x"'}

    def test_nested_arrays_of_objects(self):
        flat = flatten(b'{"a": [{"b": [{"c": true}]}]}')
        assert flat == {"a[0].b[0].c": "true"}

    def test_first_element_decides_object_array(self):
        # Non-object elements after an object head contribute nothing
        flat = flatten(b'{"mix": [{"id": 1}, 5, {"id": 3}]}')
        assert flat == {"mix[0].id": "1", "mix[2].id": "3"}

    def test_first_element_decides_scalar_array(self):
        flat = flatten(b'{"mix": [5, {"id": 1}]}')
        assert flat == {"mix": '[5, {"id": 1}]'}

    def test_array_of_objects_inside_object_elements(self):
        doc = {"TopParent": {"Children": [{"Name": "L1", "Rules": [{"Property": "X"}]}]}}
        flat = flatten(json.dumps(doc))
        assert flat == {
            "TopParent.Children[0].Name": '"L1"',
            "TopParent.Children[0].Rules[0].Property": '"X"',
        }


class TestRoots:
    def test_root_array_of_objects(self):
        assert flatten(b'[{"id": 1}]') == {"[0].id": "1"}

    def test_root_scalar_array(self):
        assert flatten(b"[1, 2]") == {"": "[1, 2]"}

    def test_root_scalar(self):
        assert flatten(b'"hello"') == {"": '"hello"'}


class TestInput:
    def test_accepts_str(self):
        assert flatten('{"a": 1}') == {"a": "1"}

    def test_utf8_bom(self):
        assert flatten(b'\xef\xbb\xbf{"a": 1}') == {"a": "1"}

    def test_utf16(self):
        assert flatten('{"a": "b"}'.encode("utf-16")) == {"a": '"b"'}

    def test_invalid_json_raises_value_error(self):
        with pytest.raises(ValueError):
            flatten(b"not json at all")

    def test_binary_raises_value_error(self):
        with pytest.raises(ValueError):
            flatten(b"\x89PNG\r\n\x1a\n\x00\x00")

    def test_deterministic(self, sample_entries):
        payload = sample_entries["Controls/Screen1.json"]
        assert flatten(payload) == flatten(payload)
        assert list(flatten(payload)) == list(flatten(payload))


class TestIsStructured:
    def test_json(self):
        assert is_structured(b'{"a": 1}')

    def test_text(self):
        assert not is_structured(b"hello world")

    def test_binary(self):
        assert not is_structured(b"\xff\xfe\xfd")

    def test_deep_nesting_is_not_structured(self):
        assert not is_structured(b"[" * 100000 + b"]" * 100000)


def test_deep_nesting_raises_value_error():
    with pytest.raises(ValueError, match="nested too deeply"):
        flatten(b"[" * 100000 + b"]" * 100000)

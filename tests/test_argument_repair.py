"""Tests for tool argument repair."""

import pytest

from services.qwen_adapter.core.llm.argument_repair import (
    is_complete_object,
    missing_closers,
    repair_arguments,
    repair_json,
)


class TestMissingClosers:
    """Tests for bracket balancing."""

    def test_balanced(self):
        """Test balanced text needs nothing."""
        assert missing_closers('{"a": [1, 2]}') == ""

    def test_nested_open(self):
        """Test closers come back innermost first."""
        assert missing_closers('{"a": [1, {"b": 2') == "}]}"

    def test_brackets_inside_strings_ignored(self):
        """Test brackets in string literals do not count."""
        assert missing_closers('{"a": "[{", "b": "x\\"]"') == "}"

    def test_inconsistent_nesting(self):
        """Test mismatched closers give up."""
        assert missing_closers('{"a": ]') == ""


class TestRepairJson:
    """Tests for repair_json."""

    def test_valid_json_unchanged(self):
        """Test valid JSON parses as-is."""
        assert repair_json('{"a": 1}') == {"a": 1}

    def test_trailing_comma(self):
        """Test a trailing comma is stripped."""
        assert repair_json('{"a": 1},') == {"a": 1}

    def test_trailing_comma_then_missing_brace(self):
        """Test a dangling comma and an open object are both repaired."""
        assert repair_json('{"a": "x",') == {"a": "x"}

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('{"a": 1', {"a": 1}),
            ("[1, 2", [1, 2]),
            ('{"a": [1, 2', {"a": [1, 2]}),
            ('{"a": {"b": "c"}', {"a": {"b": "c"}}),
        ],
    )
    def test_missing_closers_appended(self, raw, expected):
        """Test the minimal closing characters are appended."""
        assert repair_json(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", "not json", "{{{", '"unterminated', "}"])
    def test_unrecoverable_returns_none(self, raw):
        """Test unrecoverable input gives None without raising."""
        assert repair_json(raw) is None


class TestRepairArguments:
    """Tests for repair_arguments."""

    def test_empty_is_empty_mapping(self):
        """Test empty and missing arguments give an empty mapping."""
        assert repair_arguments("") == {}
        assert repair_arguments(None) == {}
        assert repair_arguments("  ") == {}

    def test_object(self):
        """Test a JSON object is returned as-is."""
        assert repair_arguments('{"path": "/tmp/a", "lines": [1, 2]}') == {"path": "/tmp/a", "lines": [1, 2]}

    def test_repaired_object(self):
        """Test a truncated object is repaired."""
        assert repair_arguments('{"path": "/tmp/a"') == {"path": "/tmp/a"}

    def test_garbage_kept_raw(self):
        """Test unparseable text is preserved under the raw key."""
        assert repair_arguments("path=/tmp/a") == {"_raw_arguments": "path=/tmp/a"}

    def test_non_object_kept_raw(self):
        """Test JSON that is not an object is preserved under the raw key."""
        assert repair_arguments("[1, 2]") == {"_raw_arguments": "[1, 2]"}
        assert repair_arguments("42") == {"_raw_arguments": "42"}

    @pytest.mark.parametrize("raw", ["\x00", "{" * 5000, '{"a": "\\u12', "]]]", "nul", '{"a":1}}'])
    def test_never_raises(self, raw):
        """Test hostile input never raises."""
        assert isinstance(repair_arguments(raw), dict)


class TestIsCompleteObject:
    """Tests for is_complete_object."""

    def test_complete(self):
        """Test a complete object."""
        assert is_complete_object('{"a": 1}')
        assert is_complete_object("{}")

    def test_incomplete_or_empty(self):
        """Test partial, empty and non-object text."""
        assert not is_complete_object("")
        assert not is_complete_object('{"a": ')
        assert not is_complete_object("[]")

"""Tests for attribute normalization and storage."""

import pytest

from robust_html_cleaner.tree.attributes import (
    AttributeStore,
    normalize_attribute_name,
    normalize_attribute_value,
)


class TestNormalization:
    """Test name and value normalization helpers."""

    def test_name_is_trimmed_and_lowercased(self) -> None:
        """Test attribute names are trimmed and lowercased."""
        assert normalize_attribute_name("  Data-ID ") == "data-id"

    def test_none_name_becomes_empty(self) -> None:
        """Test a None name normalizes to the empty string."""
        assert normalize_attribute_name(None) == ""

    def test_control_characters_become_spaces(self) -> None:
        """Test ASCII control characters in values become spaces."""
        assert normalize_attribute_value("b\x01ar") == "b ar"
        assert normalize_attribute_value("a\tb\nc\x7fd") == "a b c d"

    def test_value_is_trimmed(self) -> None:
        """Test values are trimmed after control characters are replaced."""
        assert normalize_attribute_value("  value\n") == "value"
        assert normalize_attribute_value("\x01lead") == "lead"

    def test_non_ascii_whitespace_is_not_trimmed(self) -> None:
        """Test trimming stops at characters above U+0020."""
        assert normalize_attribute_value("\u00a0") == "\u00a0"
        assert normalize_attribute_value(" \u00a0x\u2003 ") == "\u00a0x\u2003"
        assert normalize_attribute_name("\u00a0Id ") == "\u00a0id"

    def test_none_value_becomes_empty(self) -> None:
        """Test a None value normalizes to the empty string."""
        assert normalize_attribute_value(None) == ""

    @pytest.mark.parametrize("raw", [" b\x01ar ", "\x02x\x03", "plain", "  \t  ", "\u00a0 "])
    def test_value_normalization_is_idempotent(self, raw: str) -> None:
        """Test normalizing a value twice changes nothing."""
        once = normalize_attribute_value(raw)
        assert normalize_attribute_value(once) == once


class TestAttributeStore:
    """Test AttributeStore operations."""

    def test_set_then_get_is_case_insensitive(self) -> None:
        """Test lookups ignore name case and whitespace."""
        store = AttributeStore()
        store.set(" Foo ", "b\x01ar")

        assert store.get("FOO") == "b ar"
        assert store.get("foo") == "b ar"
        assert list(store) == ["foo"]

    def test_blank_name_is_ignored(self) -> None:
        """Test blank and None names are not stored."""
        store = AttributeStore()
        store.set("   ", "x")
        store.set(None, "y")

        assert len(store) == 0

    def test_non_breaking_space_value_is_kept(self) -> None:
        """Test a value made of a non-breaking space survives storage."""
        store = AttributeStore()
        store.set("title", "\u00a0")

        assert store.get("title") == "\u00a0"

    def test_overwrite_keeps_original_position(self) -> None:
        """Test overwriting a key keeps its insertion position."""
        store = AttributeStore()
        store.set("a", "1")
        store.set("b", "2")
        store.set("c", "3")
        store.set("A", "changed")

        assert list(store.items()) == [("a", "changed"), ("b", "2"), ("c", "3")]

    def test_get_missing_or_none_name_returns_none(self) -> None:
        """Test get falls back to the default for missing names."""
        store = AttributeStore({"id": "x"})

        assert store.get("class") is None
        assert store.get(None) is None
        assert store.get("class", "default") == "default"

    def test_remove_is_case_insensitive(self) -> None:
        """Test removal ignores name case."""
        store = AttributeStore({"id": "x", "class": "y"})
        store.remove("ID")

        assert not store.has("id")
        assert store.has("class")

    def test_remove_blank_or_missing_is_noop(self) -> None:
        """Test removing blank or missing names changes nothing."""
        store = AttributeStore({"id": "x"})
        store.remove("")
        store.remove("   ")
        store.remove(None)
        store.remove("missing")

        assert store.to_dict() == {"id": "x"}

    def test_has_handles_none(self) -> None:
        """Test membership checks tolerate None and non-string keys."""
        store = AttributeStore({"id": "x"})

        assert store.has("Id")
        assert not store.has(None)
        assert "ID" in store
        assert 3 not in store

    def test_initial_mapping_is_normalized(self) -> None:
        """Test the initial mapping goes through normalization."""
        store = AttributeStore({" HREF ": " /path "})

        assert store.to_dict() == {"href": "/path"}

    def test_copy_is_independent(self) -> None:
        """Test a copied store does not share state."""
        store = AttributeStore({"id": "x"})
        clone = store.copy()
        clone.set("id", "y")

        assert store.get("id") == "x"
        assert clone.get("id") == "y"

    def test_getitem_raises_for_missing(self) -> None:
        """Test indexing a missing name raises KeyError."""
        store = AttributeStore({"id": "x"})

        assert store["ID"] == "x"
        with pytest.raises(KeyError):
            store["missing"]

    def test_equality_with_mapping(self) -> None:
        """Test stores compare equal to normalized mappings."""
        assert AttributeStore({"A": "1"}) == {"a": "1"}
        assert AttributeStore({"a": "1"}) == AttributeStore({"A": "1"})

"""
Tests for find argument normalization.

Design decisions documented:
- Lists, tuples and sets are flattened recursively
- Integer ranges are expanded, other ranges stay one opaque key
- Keys are deduplicated by their text, first occurrence wins
- Multiplicity comes from the original arguments, never from the key count
"""

import pytest
from hypothesis import given, strategies as st

from slug_lookup.arguments import (
    ArgumentKind,
    KeyRange,
    argument_kind,
    flatten_arguments,
    is_multi_args,
    normalize_arguments,
)


class TestArgumentKind:
    """Test tagging of argument shapes."""

    @pytest.mark.parametrize(
        "arg,expected",
        [
            ("red-shoes", ArgumentKind.SCALAR),
            (42, ArgumentKind.SCALAR),
            ({"slug": "red-shoes"}, ArgumentKind.SCALAR),
            (b"bytes", ArgumentKind.SCALAR),
            (None, ArgumentKind.SCALAR),
            (["a"], ArgumentKind.SEQUENCE),
            (("a", "b"), ArgumentKind.SEQUENCE),
            ({"a"}, ArgumentKind.SET),
            (frozenset(), ArgumentKind.SET),
            (range(3), ArgumentKind.RANGE),
            (KeyRange(start="a", end="c"), ArgumentKind.RANGE),
        ],
    )
    def test_argument_kind(self, arg, expected: ArgumentKind) -> None:
        assert argument_kind(arg) is expected


class TestFlattening:
    """Test recursive flattening and range expansion."""

    def test_nested_sequences_are_flattened(self) -> None:
        assert flatten_arguments(["a", ["b", ("c", ["d"])]]) == [
            "a",
            "b",
            "c",
            "d",
        ]

    def test_sets_are_flattened(self) -> None:
        assert sorted(flatten_arguments([{"b", "a"}])) == ["a", "b"]

    def test_builtin_range_is_expanded(self) -> None:
        assert flatten_arguments([range(1, 4)]) == [1, 2, 3]

    def test_numeric_key_range_is_expanded_inclusively(self) -> None:
        assert flatten_arguments([KeyRange(start=1, end=3)]) == [1, 2, 3]

    def test_exclusive_numeric_key_range(self) -> None:
        key_range = KeyRange(start=1, end=3, exclusive=True)
        assert flatten_arguments([key_range]) == [1, 2]

    def test_string_range_passes_through_as_one_key(self) -> None:
        key_range = KeyRange(start="a", end="c")

        keys = normalize_arguments([key_range]).keys

        assert keys == [key_range]
        assert str(keys[0]) == "a..c"

    def test_mappings_pass_through_unchanged(self) -> None:
        mapping = {"slug": "red-shoes"}
        assert flatten_arguments([mapping]) == [mapping]


class TestDeduplication:
    """Test deduplication by textual form."""

    def test_duplicates_collapse_in_first_seen_order(self) -> None:
        keys = normalize_arguments(["b", "a", ["b", "c", "a"]]).keys
        assert keys == ["b", "a", "c"]

    def test_keys_with_same_text_collapse(self) -> None:
        assert normalize_arguments([1, "1"]).keys == [1]

    def test_duplicate_arguments_keep_multi(self) -> None:
        normalized = normalize_arguments(["a", "a"])

        assert normalized.keys == ["a"]
        assert normalized.is_multi is True


class TestMultiplicity:
    """Test the single-versus-list decision."""

    @pytest.mark.parametrize(
        "args,expected",
        [
            (("a",), False),
            ((42,), False),
            (({"slug": "a"},), False),
            ((["a"],), True),
            (([],), True),
            ((("a", "b"),), True),
            (({"a"},), True),
            ((range(1, 4),), True),
            ((KeyRange(start="a", end="c"),), True),
            (("a", "b"), True),
            (("a", "a"), True),
            ((), False),
        ],
    )
    def test_is_multi_args(self, args, expected: bool) -> None:
        assert is_multi_args(args) is expected


flat_keys = st.lists(
    st.one_of(
        st.text(min_size=1, max_size=20),
        st.integers(min_value=-1000, max_value=1000),
    ),
    max_size=20,
)


class TestNormalizationProperties:
    """Property-based tests for normalization."""

    @given(flat_keys)
    def test_normalizing_normalized_keys_is_a_no_op(self, keys) -> None:
        first = normalize_arguments(keys)
        assert normalize_arguments(first.keys).keys == first.keys

    @given(flat_keys)
    def test_normalized_keys_have_unique_text(self, keys) -> None:
        texts = [str(key) for key in normalize_arguments(keys).keys]
        assert len(texts) == len(set(texts))

    @given(flat_keys)
    def test_multiplicity_ignores_deduplication(self, keys) -> None:
        assert normalize_arguments([keys]).is_multi is True

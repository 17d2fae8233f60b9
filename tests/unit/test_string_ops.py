"""Unit tests for the sort/merge/dedup/diff/filter operations."""
import pytest

from android_strings.models import LocalizableString, TranslatedRecord
from android_strings.string_ops import (
    dedup_grouped,
    extract_from_translated,
    filter_by_flag,
    find_localizable,
    find_missing,
    merge_and_group,
    sort_by_name,
    sorted_by_name,
)


def loc(name, value="value"):
    return LocalizableString.localizable(name, value)


def names(strings):
    return [string.name for string in strings]


class TestSorting:
    def test_sort_by_name_sorts_in_place(self):
        strings = [loc("b"), loc("a"), loc("c")]
        sort_by_name(strings)
        assert names(strings) == ["a", "b", "c"]

    def test_sort_is_stable(self):
        strings = [loc("b", "1"), loc("a"), loc("b", "2")]
        assert [s.value for s in sorted_by_name(strings) if s.name == "b"] == ["1", "2"]

    def test_sort_uses_code_point_order(self):
        assert names(sorted_by_name([loc("b"), loc("B"), loc("_a")])) == ["B", "_a", "b"]


class TestMergeAndGroup:
    def test_keeps_every_string(self):
        strings1 = [loc("c"), loc("a"), loc("e")]
        strings2 = [loc("b"), loc("c"), loc("d"), loc("a")]
        merged = merge_and_group(strings1, strings2)
        assert len(merged) == len(strings1) + len(strings2)
        assert names(merged) == ["a", "a", "b", "c", "c", "d", "e"]

    def test_first_list_wins_ties(self):
        merged = merge_and_group([loc("a", "new")], [loc("a", "old"), loc("b", "old")])
        assert [s.value for s in merged] == ["new", "old", "old"]

    def test_ties_keep_each_list_in_input_order(self):
        merged = merge_and_group(
            [loc("b", "1-first"), loc("a", "1"), loc("b", "1-second")],
            [loc("b", "2-first"), loc("b", "2-second")],
        )
        assert [s.value for s in merged] == ["1", "1-first", "1-second", "2-first", "2-second"]

    @pytest.mark.parametrize("strings1, strings2", [
        ([], []),
        ([loc("a")], []),
        ([], [loc("a")]),
    ])
    def test_empty_inputs(self, strings1, strings2):
        assert len(merge_and_group(strings1, strings2)) == len(strings1) + len(strings2)

    def test_inputs_are_not_modified(self):
        strings1 = [loc("b"), loc("a")]
        merge_and_group(strings1, [])
        assert names(strings1) == ["b", "a"]


class TestDedupGrouped:
    def test_keeps_first_of_each_run(self):
        deduped = dedup_grouped([loc("a", "1"), loc("a", "2"), loc("b"), loc("c", "1"), loc("c", "2")])
        assert [(s.name, s.value) for s in deduped] == [("a", "1"), ("b", "value"), ("c", "1")]

    def test_is_idempotent_on_unique_sorted_list(self):
        strings = [loc("a"), loc("b"), loc("c")]
        assert dedup_grouped(strings) == strings
        assert dedup_grouped(dedup_grouped(strings)) == strings

    def test_leaves_non_adjacent_duplicates(self):
        assert names(dedup_grouped([loc("a"), loc("b"), loc("a")])) == ["a", "b", "a"]

    def test_merge_then_dedup_prefers_first_list(self):
        merged = dedup_grouped(merge_and_group([loc("a", "new")], [loc("a", "old"), loc("b", "old")]))
        assert [(s.name, s.value) for s in merged] == [("a", "new"), ("b", "old")]


class TestFindMissing:
    def test_returns_set_difference_sorted(self):
        missing = find_missing([loc("b"), loc("x")], [loc("d"), loc("a"), loc("b"), loc("c")])
        assert names(missing) == ["a", "c", "d"]

    def test_empty_when_lacking_is_superset(self):
        assert find_missing([loc("a"), loc("b"), loc("c")], [loc("b"), loc("a")]) == []

    def test_everything_missing_from_empty_list(self):
        assert names(find_missing([], [loc("b"), loc("a")])) == ["a", "b"]


class TestFilters:
    def test_filter_by_flag(self):
        strings = [loc("a"), LocalizableString.unlocalizable("b", "x"), loc("c")]
        assert names(filter_by_flag(strings, True)) == ["a", "c"]
        assert names(filter_by_flag(strings, False)) == ["b"]
        assert names(find_localizable(strings)) == ["a", "c"]


class TestExtractFromTranslated:
    def test_keeps_records_whose_default_value_is_current(self):
        defaults = [loc("s1", "english 1"), loc("s2", "english 2")]
        records = [
            TranslatedRecord("s2", "english 2", "french 2"),
            TranslatedRecord("s1", "english 1", "french 1"),
        ]
        extracted = extract_from_translated(records, defaults)
        assert extracted == [loc("s1", "french 1"), loc("s2", "french 2")]

    def test_drops_records_of_changed_or_removed_defaults(self):
        defaults = [loc("s1", "english 1 changed")]
        records = [
            TranslatedRecord("s1", "english 1", "french 1"),
            TranslatedRecord("gone", "whatever", "french"),
        ]
        assert extract_from_translated(records, defaults) == []

    def test_flag_comes_from_default_string(self):
        defaults = [LocalizableString.unlocalizable("s1", "x")]
        extracted = extract_from_translated([TranslatedRecord("s1", "x", "y")], defaults)
        assert extracted == [LocalizableString.unlocalizable("s1", "y")]

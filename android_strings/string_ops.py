"""
Sort, merge, dedup, diff and filter operations over lists of strings.

Everything is keyed by `name` and ordered by plain code-point comparison of the
names. The usual composition is `sort -> merge|diff -> dedup -> write`.
"""
from typing import Iterable, List

from android_strings.models import LocalizableString, TranslatedRecord
from android_strings.traversal import by_name, compare, diff


def _name_key(item) -> str:
    return item.name


def sort_by_name(strings: List) -> None:
    """Stable in-place sort of strings (or translated records) by name."""
    strings.sort(key=_name_key)


def sorted_by_name(strings: Iterable) -> List:
    """Stable sorted copy of `strings` by name."""
    return sorted(strings, key=_name_key)


def dedup_grouped(strings: List[LocalizableString]) -> List[LocalizableString]:
    """
    Keep only the first string of every run of consecutive same-named strings.

    The input must already be grouped by name (sorting does that); strings with
    the same name that are not adjacent are left alone.
    """
    deduped: List[LocalizableString] = []
    for string in strings:
        if deduped and deduped[-1].name == string.name:
            continue
        deduped.append(string)
    return deduped


def merge_and_group(
    strings1: Iterable[LocalizableString],
    strings2: Iterable[LocalizableString],
) -> List[LocalizableString]:
    """
    Merge two lists into one sorted list where same-named strings are adjacent.

    Nothing is dropped, so the result holds `len(strings1) + len(strings2)` items.
    Among equal names the strings of `strings1` come before those of `strings2`,
    which lets a following `dedup_grouped` prefer `strings1`.
    """
    # Stable sort of the concatenation keeps strings1 ahead on equal names
    return sorted_by_name([*strings1, *strings2])


def find_missing(
    lacking_strings: Iterable[LocalizableString],
    all_strings: Iterable[LocalizableString],
) -> List[LocalizableString]:
    """
    Strings of `all_strings` whose name does not appear in `lacking_strings`.

    Args:
        lacking_strings: Strings that may be missing some names (e.g. a foreign locale).
        all_strings: The complete set of strings (e.g. the localizable default strings).

    Returns:
        The missing strings in ascending name order. Neither input may repeat a name.
    """
    missing: List[LocalizableString] = []
    diff(
        sorted_by_name(lacking_strings),
        sorted_by_name(all_strings),
        by_name,
        lambda _extra_in_lacking: None,
        missing.append,
    )
    return missing


def filter_by_flag(strings: Iterable[LocalizableString], is_localizable: bool) -> List[LocalizableString]:
    return [string for string in strings if string.is_localizable == is_localizable]


def find_localizable(strings: Iterable[LocalizableString]) -> List[LocalizableString]:
    """Only the strings that are meant to be translated."""
    return filter_by_flag(strings, True)


def extract_from_translated(
    translated_records: Iterable[TranslatedRecord],
    default_strings: Iterable[LocalizableString],
) -> List[LocalizableString]:
    """
    Turn translated records into foreign-locale strings.

    A record is only kept when a default string with the same name exists and
    its value is still the one the translation was made from. The localizable
    flag is carried over from the default string.

    Returns:
        The extracted strings in ascending name order.
    """
    extracted: List[LocalizableString] = []

    def on_equal(record: TranslatedRecord, default_string: LocalizableString) -> None:
        if record.default_value == default_string.value:
            extracted.append(LocalizableString(
                record.name,
                record.translated_value,
                default_string.is_localizable,
            ))

    compare(
        sorted_by_name(translated_records),
        sorted_by_name(default_strings),
        by_name,
        on_equal,
    )
    return extracted

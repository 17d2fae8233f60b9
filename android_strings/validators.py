"""
Consistency checks between the default strings and a foreign locale.

Findings are returned as data. An empty result means the check passed.
"""
from dataclasses import dataclass, field
from typing import Iterable, List

from android_strings import constants
from android_strings.models import LocalizableString, ParsedFormatData
from android_strings.string_ops import find_localizable, find_missing, sorted_by_name
from android_strings.traversal import compare, compare_keys, diff, by_name


@dataclass
class FormatMismatch:
    """A foreign string whose format specifiers differ from its default counterpart."""
    default: ParsedFormatData
    foreign: ParsedFormatData

    def __str__(self) -> str:
        return (
            f"Format string mismatch. Found format strings ({', '.join(self.default.placeholders)}) "
            f"in default ({self.default.string.value}) & found format strings "
            f"({', '.join(self.foreign.placeholders)}) in foreign ({self.foreign.string.value})"
        )


@dataclass
class MissingStrings:
    """
    Attributes:
        extra_in_default: Localizable default strings absent from the foreign locale.
        extra_in_foreign: Foreign strings with no default counterpart.
    """
    extra_in_default: List[LocalizableString] = field(default_factory=list)
    extra_in_foreign: List[LocalizableString] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.extra_in_default and not self.extra_in_foreign


def has_unescaped_apostrophe(value: str) -> bool:
    """True when the value has more `'` than `\\'`. A count check, not a parser."""
    return value.count(constants.APOSTROPHE) != value.count(constants.ESCAPED_APOSTROPHE)


def find_unescaped_apostrophes(strings: Iterable[LocalizableString]) -> List[LocalizableString]:
    """Strings whose value contains an unescaped apostrophe, in input order."""
    return [string for string in strings if has_unescaped_apostrophe(string.value)]


def extract_placeholders(value: str) -> List[str]:
    """Positional format specifiers (`%1$s`, `%2$d`, ...) in order of appearance."""
    return constants.FORMAT_STRING_REGEX.findall(value)


def parse_format_data(strings: Iterable[LocalizableString]) -> List[ParsedFormatData]:
    """Precompute the format specifiers of each string, usually the default ones."""
    return [ParsedFormatData(string, extract_placeholders(string.value)) for string in strings]


def find_format_mismatches(
    default_parsed_data: Iterable[ParsedFormatData],
    foreign_strings: Iterable[LocalizableString],
) -> List[FormatMismatch]:
    """
    Compare format specifiers of same-named default and foreign strings.

    The comparison is order sensitive: `%1$s %2$d` and `%2$d %1$s` mismatch.
    Strings present on only one side are ignored here.

    Returns:
        Mismatches in ascending name order.
    """
    default_parsed_data = sorted(default_parsed_data, key=lambda parsed: parsed.string.name)
    mismatches: List[FormatMismatch] = []

    def on_equal(default: ParsedFormatData, foreign_string: LocalizableString) -> None:
        placeholders = extract_placeholders(foreign_string.value)
        if placeholders != default.placeholders:
            mismatches.append(FormatMismatch(default, ParsedFormatData(foreign_string, placeholders)))

    compare(
        default_parsed_data,
        sorted_by_name(foreign_strings),
        lambda default, foreign_string: compare_keys(default.string.name, foreign_string.name),
        on_equal,
    )
    return mismatches


def find_missing_strings(
    default_strings: Iterable[LocalizableString],
    foreign_strings: Iterable[LocalizableString],
) -> MissingStrings:
    """
    Per-string comparison of the names in both locales.

    Default strings missing from the foreign locale are only reported when
    localizable. Foreign strings unknown to the default locale are always reported.
    """
    missing = MissingStrings()

    def on_extra_in_default(default_string: LocalizableString) -> None:
        if default_string.is_localizable:
            missing.extra_in_default.append(default_string)

    diff(
        sorted_by_name(default_strings),
        sorted_by_name(foreign_strings),
        by_name,
        on_extra_in_default,
        missing.extra_in_foreign.append,
    )
    return missing


def check_completeness(
    default_strings: Iterable[LocalizableString],
    foreign_strings: Iterable[LocalizableString],
) -> bool:
    """Strict check: True only when every localizable default string exists in the foreign locale."""
    return not find_missing(foreign_strings, find_localizable(default_strings))

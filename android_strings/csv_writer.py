"""Writers for the CSV files handed to translators."""
import csv
import logging
from typing import Callable, ContextManager, Dict, Iterable, List, Tuple

from android_strings import constants
from android_strings.errors import StringsIOError
from android_strings.logging_config import LOGGER_NAME
from android_strings.models import LocalizableString, LocaleStrings

logger = logging.getLogger(LOGGER_NAME)

SinkFactory = Callable[[List[str]], ContextManager]


def group_by_default_strings(locale_strings_list: Iterable[LocaleStrings]) -> List[List[LocaleStrings]]:
    """
    Group locales that need exactly the same default strings translated.

    Groups keep the order in which their first locale was seen.
    """
    groups: Dict[Tuple[LocalizableString, ...], List[LocaleStrings]] = {}
    for locale_strings in locale_strings_list:
        groups.setdefault(tuple(locale_strings.default_strings), []).append(locale_strings)
    return list(groups.values())


def write_wide_group(sink, group: List[LocaleStrings]) -> None:
    """Write one wide table whose locale columns are left empty for the translators."""
    locales = [locale_strings.locale for locale_strings in group]
    empty_cells = [""] * len(locales)

    writer = csv.writer(sink, lineterminator="\n")
    try:
        writer.writerow([constants.STRING_NAME_HEADER, constants.DEFAULT_LOCALE_HEADER] + locales)
        for string in group[0].default_strings:
            writer.writerow([string.name, string.value] + empty_cells)
        sink.flush()
    except (csv.Error, OSError) as error:
        raise StringsIOError(f"Could not write table for {', '.join(locales)}: {error}") from error


def write_wide_table(sink_factory: SinkFactory, locale_strings_list: Iterable[LocaleStrings]) -> List[List[str]]:
    """
    Write one wide table per group of locales sharing the same default strings.

    Args:
        sink_factory: Called with the locales of a group; returns a context
            manager yielding a writable text stream for that group's table.
        locale_strings_list: Default strings to translate, per locale.

    Returns:
        The locales of every table written, in writing order.
    """
    written_groups = []
    for group in group_by_default_strings(locale_strings_list):
        locales = [locale_strings.locale for locale_strings in group]
        with sink_factory(locales) as sink:
            write_wide_group(sink, group)
        logger.debug("Wrote %d string(s) for %s", len(group[0].default_strings), ", ".join(locales))
        written_groups.append(locales)
    return written_groups


def write_narrow_table(sink, strings: Iterable[LocalizableString]) -> None:
    """Write `name,value` rows without a header."""
    writer = csv.writer(sink, lineterminator="\n")
    try:
        for string in strings:
            writer.writerow([string.name, string.value])
        sink.flush()
    except (csv.Error, OSError) as error:
        raise StringsIOError(f"Could not write table: {error}") from error

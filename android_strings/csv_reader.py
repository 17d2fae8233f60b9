"""
Readers for the CSV files translators send back.

Wide tables have a header row `string_name,default_locale,<locale>,...` and one
row per string with one column per locale. Narrow tables have no header and
exactly `name,default_value,translated_value` per row.
Cells are trimmed and blank lines are skipped.
"""
import csv
import logging
from typing import Iterable, Iterator, List, Optional

from android_strings import constants
from android_strings.errors import StringsSyntaxError
from android_strings.logging_config import LOGGER_NAME
from android_strings.models import LocaleBucket, TranslatedRecord

logger = logging.getLogger(LOGGER_NAME)


def _rows(source) -> Iterator[List[str]]:
    """Non-blank rows of `source` with every cell stripped."""
    reader = csv.reader(source, skipinitialspace=True)
    try:
        for row in reader:
            if not row:
                continue
            yield [cell.strip() for cell in row]
    except csv.Error as error:
        raise StringsSyntaxError(f"Invalid CSV at line {reader.line_num}: {error}") from error


def _check_header(header: List[str]) -> List[str]:
    if len(header) < 3:
        raise StringsSyntaxError("Too few values in header (at least 3 required)")
    if header[0] != constants.STRING_NAME_HEADER:
        raise StringsSyntaxError(f"First header should be named {constants.STRING_NAME_HEADER}")
    if header[1] != constants.DEFAULT_LOCALE_HEADER:
        raise StringsSyntaxError(f"Second header should be named {constants.DEFAULT_LOCALE_HEADER}")

    locales = header[2:]
    if any(not locale for locale in locales):
        raise StringsSyntaxError("Headers can't be empty strings")
    return locales


def read_wide_table(source, allowed_locales: Optional[Iterable[str]] = None) -> List[LocaleBucket]:
    """
    Read a wide table into one bucket per locale column.

    Args:
        source: Readable text stream (files should be opened with `newline=''`).
        allowed_locales: Locale columns to keep. `None` keeps every column.

    Returns:
        One LocaleBucket per kept column, in header order. Empty cells produce
        no record for that locale.

    Raises:
        StringsSyntaxError: On a bad header, a row whose length differs from the
            header, or a row with an empty string name.
    """
    rows = _rows(source)
    header = next(rows, [])
    locales = _check_header(header)

    allowed = None if allowed_locales is None else set(allowed_locales)
    kept_columns = [
        (index, LocaleBucket(locale))
        for index, locale in enumerate(locales, start=2)
        if allowed is None or locale in allowed
    ]

    for row in rows:
        if len(row) != len(header):
            raise StringsSyntaxError(
                f"Found record with {len(row)} fields, but the header has {len(header)} fields"
            )

        name = row[0]
        if not name:
            raise StringsSyntaxError(f"{constants.STRING_NAME_HEADER} can't be empty for any record")

        default_value = row[1]
        for index, bucket in kept_columns:
            translated_value = row[index]
            if translated_value:
                bucket.records.append(TranslatedRecord(name, default_value, translated_value))

    buckets = [bucket for _, bucket in kept_columns]
    logger.debug(
        "Read wide table with locale(s) %s",
        ", ".join(f"{bucket.locale} ({len(bucket.records)})" for bucket in buckets),
    )
    return buckets


def _narrow_record(row: List[str]) -> TranslatedRecord:
    if not row[0]:
        raise StringsSyntaxError(f"{constants.STRING_NAME_HEADER} can't be empty for any record")
    if len(row) < 2:
        raise StringsSyntaxError(
            f'Too few values in record (exactly 3 required). 1st field => "{row[0]}"'
        )
    if len(row) < 3:
        raise StringsSyntaxError(
            f'Too few values in record (exactly 3 required). 2nd field => "{row[1]}"'
        )
    if len(row) > 3:
        raise StringsSyntaxError(
            f'Too many values in record (exactly 3 required). 4th field => "{row[3]}"'
        )
    return TranslatedRecord(row[0], row[1], row[2])


def read_narrow_table(source) -> List[TranslatedRecord]:
    """
    Read a headerless single-locale table.

    Raises:
        StringsSyntaxError: Naming the short or unexpected field when a row
            does not have exactly three cells, or when a name is empty.
    """
    records = [_narrow_record(row) for row in _rows(source)]
    logger.debug("Read narrow table with %d record(s)", len(records))
    return records

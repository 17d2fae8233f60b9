"""
The three workflows built on the readers, writers and set operations.

- localize: write CSVs of the default strings each foreign locale still lacks.
- localized: merge translated CSVs back into the foreign strings files.
- validate: run the consistency checks on every foreign strings file.

Locales are processed one after the other. Each file is opened only for the
duration of a single read or write.
"""
import glob
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from tqdm import tqdm

from android_strings import constants
from android_strings.csv_reader import read_narrow_table, read_wide_table
from android_strings.csv_writer import write_wide_table
from android_strings.errors import StringsError, StringsIOError, WorkflowError
from android_strings.logging_config import LOGGER_NAME
from android_strings.models import LocalizableString, LocaleStrings, TranslatedRecord
from android_strings.resource_files import (
    build_mapping,
    find_locale_ids,
    foreign_strings_path,
    read_default_strings,
    read_strings_file,
    write_strings_file,
)
from android_strings.string_ops import (
    dedup_grouped,
    extract_from_translated,
    find_localizable,
    find_missing,
    merge_and_group,
)
from android_strings.validators import (
    FormatMismatch,
    MissingStrings,
    check_completeness,
    find_format_mismatches,
    find_missing_strings,
    find_unescaped_apostrophes,
    parse_format_data,
)

logger = logging.getLogger(LOGGER_NAME)

WIDE_FORMAT = "wide"
NARROW_FORMAT = "narrow"

NO_FOREIGN_LOCALES_MESSAGE = "Res dir doesn't have any non-default values dir with strings file!"


def _read_foreign_or_empty(res_dir: str, locale_id: str) -> List[LocalizableString]:
    """A foreign locale without a strings file yet counts as having no strings."""
    file_path = foreign_strings_path(res_dir, locale_id)
    if not os.path.exists(file_path):
        logger.info("No strings file for locale '%s' at '%s' yet.", locale_id, file_path)
        return []
    return read_strings_file(file_path)


def create_output_dir_if_required(output_dir: str) -> None:
    if os.path.isfile(output_dir):
        raise WorkflowError("Output directory path points to a file!", output_dir)
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as error:
        raise StringsIOError(f"Could not create output directory: {error.strerror or error}", output_dir) from error


class CsvFileFactory:
    """Hands out new CSV files in `output_dir`, named after the locales they are for."""

    def __init__(self, output_dir: str):
        self.output_dir = output_dir
        self.created_files: List[str] = []

    @contextmanager
    def __call__(self, locales: List[str]):
        file_path = os.path.join(self.output_dir, f"{'_'.join(locales)}.{constants.CSV_EXTENSION}")
        if os.path.exists(file_path):
            raise WorkflowError("Output file already exists!", file_path)

        try:
            sink = open(file_path, 'x', encoding='utf-8', newline='')
        except OSError as error:
            raise StringsIOError(f"Could not create output file: {error.strerror or error}", file_path) from error

        self.created_files.append(file_path)
        with sink:
            try:
                yield sink
            except StringsError as error:
                raise error.with_path(file_path)


def localize(
    res_dir: str,
    output_dir: str,
    code_to_name: Optional[Dict[str, str]] = None,
    show_progress: bool = True,
) -> List[str]:
    """
    Write the strings every foreign locale still needs translated.

    Args:
        res_dir: The Android `res` directory.
        output_dir: Directory the CSVs are written to. Created when missing.
        code_to_name: Locale id to the human-friendly name used for CSV files
            and columns. Every locale found in `res_dir` is used when empty.
        show_progress: Show a per-locale progress bar.

    Returns:
        Paths of the created CSV files. Locales sharing exactly the same
        missing strings share a file.
    """
    mapping = build_mapping(code_to_name or {}, res_dir)
    if not mapping:
        raise WorkflowError(NO_FOREIGN_LOCALES_MESSAGE, res_dir)

    create_output_dir_if_required(output_dir)
    localizable_default_strings = find_localizable(read_default_strings(res_dir))

    locale_strings_list = []
    for locale_id, name in tqdm(sorted(mapping.items()), desc="Localize", unit="locale", disable=not show_progress):
        foreign_strings = _read_foreign_or_empty(res_dir, locale_id)
        missing = find_missing(foreign_strings, localizable_default_strings)
        if missing:
            logger.info("Locale '%s' is missing %d string(s).", locale_id, len(missing))
            locale_strings_list.append(LocaleStrings(name, missing))
        else:
            logger.info("Locale '%s' is fully localized.", locale_id)

    sink_factory = CsvFileFactory(output_dir)
    write_wide_table(sink_factory, locale_strings_list)
    for file_path in sink_factory.created_files:
        logger.info("Created '%s'.", file_path)
    return sink_factory.created_files


def _read_csv_file(file_path: str, reader, *args):
    try:
        with open(file_path, 'r', encoding='utf-8', newline='') as source:
            return reader(source, *args)
    except OSError as error:
        raise StringsIOError(f"Could not read CSV file: {error.strerror or error}", file_path) from error
    except StringsError as error:
        raise error.with_path(file_path)


def read_wide_tables(input_dir: str, locale_names: Iterable[str]) -> Dict[str, List[TranslatedRecord]]:
    """Translated records per locale name, gathered from every CSV in `input_dir`."""
    if not os.path.isdir(input_dir):
        raise WorkflowError("Input directory doesn't exist or it is not a directory", input_dir)

    locale_names = set(locale_names)
    records_by_locale: Dict[str, List[TranslatedRecord]] = {}
    for file_path in sorted(glob.glob(os.path.join(input_dir, f"*.{constants.CSV_EXTENSION}"))):
        for bucket in _read_csv_file(file_path, read_wide_table, locale_names):
            records_by_locale.setdefault(bucket.locale, []).extend(bucket.records)
    return records_by_locale


def read_narrow_tables(input_dir: str, locale_names: Iterable[str]) -> Dict[str, List[TranslatedRecord]]:
    """Translated records per locale name, read from `<input_dir>/<name>.csv`."""
    records_by_locale: Dict[str, List[TranslatedRecord]] = {}
    for name in locale_names:
        file_path = os.path.join(input_dir, f"{name}.{constants.CSV_EXTENSION}")
        if not os.path.isfile(file_path):
            logger.info("No translations file for '%s' at '%s'.", name, file_path)
            continue
        records_by_locale[name] = _read_csv_file(file_path, read_narrow_table)
    return records_by_locale


def localized(
    res_dir: str,
    input_dir: str,
    name_to_code: Optional[Dict[str, str]] = None,
    input_format: str = WIDE_FORMAT,
    show_progress: bool = True,
) -> List[str]:
    """
    Merge translated CSVs into the foreign strings files.

    Translations whose default value no longer matches the current default
    string are dropped. New translations replace existing ones of the same name.

    Args:
        res_dir: The Android `res` directory.
        input_dir: Directory holding the translated CSVs.
        name_to_code: Human-friendly locale name (CSV column or file name) to
            locale id. Every locale found in `res_dir` maps to itself when empty.
        input_format: `wide` or `narrow`.
        show_progress: Show a per-locale progress bar.

    Returns:
        Paths of the rewritten strings files.
    """
    if input_format not in (WIDE_FORMAT, NARROW_FORMAT):
        raise WorkflowError(f"Unknown input format '{input_format}'")

    mapping = build_mapping(name_to_code or {}, res_dir)
    if not mapping:
        raise WorkflowError(NO_FOREIGN_LOCALES_MESSAGE, res_dir)

    localizable_default_strings = find_localizable(read_default_strings(res_dir))
    if input_format == WIDE_FORMAT:
        records_by_locale = read_wide_tables(input_dir, mapping.keys())
    else:
        records_by_locale = read_narrow_tables(input_dir, mapping.keys())

    written_files = []
    for name, locale_id in tqdm(sorted(mapping.items()), desc="Localized", unit="locale", disable=not show_progress):
        records = records_by_locale.get(name)
        if not records:
            logger.info("No translations found for '%s'.", name)
            continue

        new_strings = extract_from_translated(records, localizable_default_strings)
        skipped = len(records) - len(new_strings)
        if skipped:
            logger.warning(
                "Skipped %d translation(s) for '%s' whose default string changed or no longer exists.",
                skipped, name
            )

        existing_strings = find_localizable(_read_foreign_or_empty(res_dir, locale_id))
        merged_strings = dedup_grouped(merge_and_group(new_strings, existing_strings))

        file_path = foreign_strings_path(res_dir, locale_id)
        write_strings_file(file_path, merged_strings)
        logger.info("Wrote %d string(s) to '%s'.", len(merged_strings), file_path)
        written_files.append(file_path)

    return written_files


@dataclass
class FileValidation:
    """Findings for one foreign strings file."""
    file_path: str
    apostrophe_errors: List[LocalizableString] = field(default_factory=list)
    format_errors: List[FormatMismatch] = field(default_factory=list)
    missing_strings: MissingStrings = field(default_factory=MissingStrings)
    incomplete: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.apostrophe_errors and not self.format_errors and not self.incomplete


@dataclass
class ValidationReport:
    valid_files: List[str] = field(default_factory=list)
    invalid_files: List[FileValidation] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.invalid_files


def _log_findings(result: FileValidation) -> None:
    for string in result.apostrophe_errors:
        logger.warning("Unescaped apostrophe in '%s': (%s)", result.file_path, string)
    for mismatch in result.format_errors:
        logger.warning("Format strings in '%s': %s", result.file_path, mismatch)
    for string in result.missing_strings.extra_in_default:
        logger.warning("Missing from '%s': %s", result.file_path, string.name)
    for string in result.missing_strings.extra_in_foreign:
        logger.warning("Not in default strings but in '%s': %s", result.file_path, string.name)


def validate(res_dir: str, strict: bool = False, show_progress: bool = True) -> ValidationReport:
    """
    Validate every foreign strings file against the default strings.

    Apostrophe and format-string problems always make a file invalid. Missing
    strings are reported for every file, but only make it invalid in strict
    mode, where every localizable default string must be present.
    """
    default_strings = read_default_strings(res_dir)
    default_parsed_data = parse_format_data(default_strings)

    report = ValidationReport()
    for locale_id in tqdm(find_locale_ids(res_dir), desc="Validate", unit="locale", disable=not show_progress):
        file_path = foreign_strings_path(res_dir, locale_id)
        foreign_strings = read_strings_file(file_path)

        result = FileValidation(
            file_path=file_path,
            apostrophe_errors=find_unescaped_apostrophes(foreign_strings),
            format_errors=find_format_mismatches(default_parsed_data, foreign_strings),
            missing_strings=find_missing_strings(default_strings, foreign_strings),
            incomplete=strict and not check_completeness(default_strings, foreign_strings),
        )
        _log_findings(result)

        if result.is_valid:
            logger.info("Validation passed for '%s'.", file_path)
            report.valid_files.append(file_path)
        else:
            logger.error("Validation failed for '%s'.", file_path)
            report.invalid_files.append(result)

    return report

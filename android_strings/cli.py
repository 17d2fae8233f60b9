#!/usr/bin/env python3
"""
android-strings - keep Android string resources in sync across locales

Commands:
    localize   - write CSVs of the strings each foreign locale still lacks
    localized  - merge translated CSVs back into the foreign strings files
    validate   - check foreign strings files for common mistakes

Example:
    android-strings localize --res-dir app/src/main/res --output-dir to_localize --mapping fr=french
    android-strings localized --res-dir app/src/main/res --input-dir localized --mapping fr=french
    android-strings validate --res-dir app/src/main/res --strict
"""
import argparse
import logging
import re
import sys
from typing import Dict, List, Optional

from android_strings import workflows
from android_strings.app_config import AppConfig, load_app_config
from android_strings.errors import StringsError
from android_strings.logging_config import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

MAPPING_REGEX = re.compile(r'^([^=]+)=([^=]+)$')


def parse_mapping(value: str) -> tuple:
    """argparse type for `code=name` pairs."""
    match = MAPPING_REGEX.match(value)
    if not match:
        raise argparse.ArgumentTypeError(f"Mapping should be of the format xx=XX; Found: {value}")
    return match.group(1).strip(), match.group(2).strip()


def _code_to_name(args, config: AppConfig) -> Dict[str, str]:
    if args.mapping:
        return dict(args.mapping)
    return dict(config.language_codes)


def cmd_localize(args, config: AppConfig) -> int:
    created_files = workflows.localize(
        args.res_dir or config.res_dir,
        args.output_dir or config.localize_output_dir,
        _code_to_name(args, config),
        show_progress=config.show_progress,
    )
    if created_files:
        print("Created files:")
        for file_path in created_files:
            print(f"  {file_path}")
    else:
        print("Nothing to localize.")
    return 0


def cmd_localized(args, config: AppConfig) -> int:
    name_to_code = {name: code for code, name in _code_to_name(args, config).items()}
    written_files = workflows.localized(
        args.res_dir or config.res_dir,
        args.input_dir or config.localized_input_dir,
        name_to_code,
        input_format=args.input_format or config.localized_input_format,
        show_progress=config.show_progress,
    )
    if written_files:
        print("Updated files:")
        for file_path in written_files:
            print(f"  {file_path}")
    else:
        print("No translations to merge.")
    return 0


def cmd_validate(args, config: AppConfig) -> int:
    report = workflows.validate(
        args.res_dir or config.res_dir,
        strict=args.strict or config.strict_validation,
        show_progress=config.show_progress,
    )
    for file_path in report.valid_files:
        print(f"OK       {file_path}")
    for result in report.invalid_files:
        print(f"INVALID  {result.file_path}")
        for string in result.apostrophe_errors:
            print(f"    apostrophe: ({string})")
        for mismatch in result.format_errors:
            print(f"    format: {mismatch}")
        if result.incomplete:
            missing = ", ".join(string.name for string in result.missing_strings.extra_in_default)
            print(f"    missing: {missing}")
    return 0 if report.is_valid else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="android-strings",
        description="To help with translations & common validations of Android string resources",
    )
    parser.add_argument("--config", help="YAML configuration file (default: config.yaml)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    localize_parser = subparsers.add_parser("localize", help="Create CSVs of strings that need to be translated")
    localize_parser.add_argument("--res-dir", help="Android res directory")
    localize_parser.add_argument("--output-dir", help="Directory the CSVs are written to")
    localize_parser.add_argument("--mapping", action="append", type=parse_mapping,
                                 help="Locale id to human-friendly name, e.g. fr=french (repeatable)")

    localized_parser = subparsers.add_parser("localized", help="Populate strings XML from translations in CSVs")
    localized_parser.add_argument("--res-dir", help="Android res directory")
    localized_parser.add_argument("--input-dir", help="Directory holding the translated CSVs")
    localized_parser.add_argument("--input-format", choices=[workflows.WIDE_FORMAT, workflows.NARROW_FORMAT],
                                  help="CSV layout (default: wide)")
    localized_parser.add_argument("--mapping", action="append", type=parse_mapping,
                                  help="Locale id to human-friendly name, e.g. fr=french (repeatable)")

    validate_parser = subparsers.add_parser("validate", help="Run common validations on non-default strings files")
    validate_parser.add_argument("--res-dir", help="Android res directory")
    validate_parser.add_argument("--strict", action="store_true",
                                 help="Also require every localizable default string in every locale")

    return parser


COMMANDS = {
    "localize": cmd_localize,
    "localized": cmd_localized,
    "validate": cmd_validate,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = load_app_config(args.config)
    try:
        return COMMANDS[args.command](args, config)
    except StringsError as error:
        logger.error("%s failed: %s", args.command, error)
        return 1


if __name__ == "__main__":
    sys.exit(main())

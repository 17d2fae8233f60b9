"""
Locating, reading and writing the strings files of an Android `res` directory.

    res/values/strings.xml        default locale
    res/values-fr/strings.xml     foreign locale `fr`
"""
import logging
import os
import shutil
import tempfile
from typing import Dict, List

from android_strings import constants
from android_strings.errors import StringsError, StringsIOError, WorkflowError
from android_strings.logging_config import LOGGER_NAME
from android_strings.models import LocalizableString
from android_strings.xml_reader import read_strings
from android_strings.xml_writer import write_strings

logger = logging.getLogger(LOGGER_NAME)


def default_strings_path(res_dir: str) -> str:
    return os.path.join(res_dir, constants.BASE_VALUES_DIR_NAME, constants.STRINGS_FILE_NAME)


def foreign_strings_path(res_dir: str, locale_id: str) -> str:
    values_dir_name = f"{constants.BASE_VALUES_DIR_NAME}-{locale_id}"
    return os.path.join(res_dir, values_dir_name, constants.STRINGS_FILE_NAME)


def read_strings_file(file_path: str) -> List[LocalizableString]:
    """
    Read a strings file, attaching `file_path` to any error raised.

    Raises:
        StringsIOError: If the file can't be opened or read.
        StringsSyntaxError: If the file is not a valid strings file.
    """
    try:
        with open(file_path, 'rb') as source:
            return read_strings(source)
    except OSError as error:
        raise StringsIOError(f"Could not read strings file: {error.strerror or error}", file_path) from error
    except StringsError as error:
        raise error.with_path(file_path)


def read_default_strings(res_dir: str) -> List[LocalizableString]:
    return read_strings_file(default_strings_path(res_dir))


def read_foreign_strings(res_dir: str, locale_id: str) -> List[LocalizableString]:
    return read_strings_file(foreign_strings_path(res_dir, locale_id))


def _apply_target_mode(temp_path: str, file_path: str) -> None:
    """Give the temporary file the permissions the target has, or would get from a plain open()."""
    if os.path.exists(file_path):
        shutil.copymode(file_path, temp_path)
    else:
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(temp_path, 0o666 & ~umask)


def write_strings_file(file_path: str, strings: List[LocalizableString]) -> None:
    """
    Replace `file_path` with a strings document holding `strings`.

    The document goes to a temporary file next to the target first, so a
    failure leaves the existing file untouched. The file keeps its permission
    bits. Missing directories are created.
    """
    directory = os.path.dirname(file_path) or "."
    temp_path = None
    try:
        os.makedirs(directory, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            'w', encoding='utf-8', dir=directory, suffix='.tmp', delete=False
        ) as sink:
            temp_path = sink.name
            write_strings(sink, strings)
        _apply_target_mode(temp_path, file_path)
        os.replace(temp_path, file_path)
        temp_path = None
    except OSError as error:
        raise StringsIOError(f"Could not write strings file: {error.strerror or error}", file_path) from error
    except StringsError as error:
        raise error.with_path(file_path)
    finally:
        if temp_path is not None and os.path.exists(temp_path):
            os.remove(temp_path)


def find_locale_ids(res_dir: str) -> List[str]:
    """
    Locale ids of every `values-<id>` directory holding a strings file.

    Returns:
        Sorted locale ids, the text after the last `-` of each directory name.

    Raises:
        WorkflowError: If `res_dir` doesn't exist or is not a directory.
    """
    if not os.path.isdir(res_dir):
        raise WorkflowError("Res dir path doesn't exist or it is not a directory", res_dir)

    try:
        entries = sorted(os.listdir(res_dir))
    except OSError as error:
        raise StringsIOError(f"Could not list res dir: {error.strerror or error}", res_dir) from error

    locale_ids = []
    for entry in entries:
        strings_file = os.path.join(res_dir, entry, constants.STRINGS_FILE_NAME)
        if not os.path.isfile(strings_file):
            continue
        match = constants.LOCALE_ID_REGEX.search(entry)
        if match:
            locale_ids.append(match.group(1))

    logger.debug("Found locale(s) %s in '%s'", locale_ids, res_dir)
    return locale_ids


def build_mapping(mapping: Dict[str, str], res_dir: str) -> Dict[str, str]:
    """Return `mapping` as is, or map every discovered locale id to itself when it is empty."""
    if mapping:
        return dict(mapping)
    return {locale_id: locale_id for locale_id in find_locale_ids(res_dir)}

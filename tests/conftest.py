import logging
import os

import pytest

from android_strings.logging_config import LOGGER_NAME

XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>\n'


def strings_document(*elements: str) -> str:
    """A strings.xml document holding the given `<string>` element lines."""
    body = "".join(f"    {element}\n" for element in elements)
    return f"{XML_HEADER}<resources>\n{body}</resources>\n"


def write_text(path, content: str) -> str:
    path = str(path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    return path


def read_text(path) -> str:
    with open(str(path), 'r', encoding='utf-8') as f:
        return f.read()


@pytest.fixture
def res_dir(tmp_path):
    """
    An Android res directory with default strings s1 and s2 (plus an
    untranslatable one) and empty `values-fr` and `values-es` locales.
    """
    res = tmp_path / "res"
    write_text(res / "values" / "strings.xml", strings_document(
        '<string name="s1">english 1</string>',
        '<string name="s2">english 2</string>',
        '<string name="app_id" translatable="false">com.example</string>',
    ))
    write_text(res / "values-fr" / "strings.xml", strings_document())
    write_text(res / "values-es" / "strings.xml", strings_document())
    return str(res)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers added by configuration loading so tests don't leak log files or console output."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

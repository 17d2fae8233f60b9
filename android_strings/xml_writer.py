"""Writer for Android `strings.xml` files."""
import logging
import re
from typing import Iterable, List
from xml.parsers import expat
from xml.sax.saxutils import escape

from android_strings import constants
from android_strings.errors import StringsIOError, StringsLogicError
from android_strings.logging_config import LOGGER_NAME
from android_strings.models import LocalizableString

logger = logging.getLogger(LOGGER_NAME)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'
INDENT = "    "

# Tag wrapped around a value so it can be parsed as a standalone document
_VALUE_WRAPPER_TAG = "a"

# XML parsers turn a literal CR into LF and whitespace in attributes into spaces
_TEXT_ENTITIES = {"\r": "&#13;"}
_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\r": "&#13;", "\n": "&#10;", "\t": "&#9;"}

_CDATA_SECTION_REGEX = re.compile(r"(<!\[CDATA\[.*?\]\]>)", re.DOTALL)


def _protect_carriage_returns(value: str) -> str:
    """Turn CRs outside CDATA sections into character references so parsing keeps them."""
    return "".join(
        part if part.startswith(constants.CDATA_START) else part.replace("\r", "&#13;")
        for part in _CDATA_SECTION_REGEX.split(value)
    )


def _escape_attribute(value: str) -> str:
    return escape(value, _ATTRIBUTE_ENTITIES)


def serialize_value(value: str) -> str:
    """
    Turn a string value back into element content.

    The value is parsed as the content of a synthetic element and only its
    character data and CDATA sections are re-emitted. Character data is escaped,
    CDATA sections are written back verbatim, so CDATA markers collected by the
    reader survive the round trip.

    Raises:
        StringsLogicError: If the value is not well-formed element content.
    """
    parts: List[str] = []
    cdata_parts: List[str] = []
    in_cdata = False

    def character_data(text: str) -> None:
        if in_cdata:
            cdata_parts.append(text)
        else:
            parts.append(escape(text, _TEXT_ENTITIES))

    def start_cdata() -> None:
        nonlocal in_cdata
        in_cdata = True
        cdata_parts.clear()

    def end_cdata() -> None:
        nonlocal in_cdata
        in_cdata = False
        parts.append(f"{constants.CDATA_START}{''.join(cdata_parts)}{constants.CDATA_END}")

    parser = expat.ParserCreate()
    parser.CharacterDataHandler = character_data
    parser.StartCdataSectionHandler = start_cdata
    parser.EndCdataSectionHandler = end_cdata
    try:
        parser.Parse(f"<{_VALUE_WRAPPER_TAG}>{_protect_carriage_returns(value)}</{_VALUE_WRAPPER_TAG}>", True)
    except expat.ExpatError as error:
        raise StringsLogicError(f"Can't build writer events from {value!r}: {error}") from error

    return "".join(parts)


def _string_element(string: LocalizableString) -> str:
    attributes = f'{constants.NAME_ATTRIBUTE}="{_escape_attribute(string.name)}"'
    if not string.is_localizable:
        attributes += f' {constants.LOCALIZABLE_ATTRIBUTE}="{constants.FALSE_FLAG}"'

    content = serialize_value(string.value)
    if not content:
        return f"{INDENT}<{constants.STRING_ELEMENT} {attributes} />"
    return f"{INDENT}<{constants.STRING_ELEMENT} {attributes}>{content}</{constants.STRING_ELEMENT}>"


def render_strings(strings: Iterable[LocalizableString]) -> str:
    """Build the whole document. Strings are written in the given order."""
    lines = [XML_DECLARATION]
    elements = [_string_element(string) for string in strings]
    if elements:
        lines.append(f"<{constants.RESOURCES_ELEMENT}>")
        lines.extend(elements)
        lines.append(f"</{constants.RESOURCES_ELEMENT}>")
    else:
        lines.append(f"<{constants.RESOURCES_ELEMENT} />")
    return "\n".join(lines) + "\n"


def write_strings(sink, strings: Iterable[LocalizableString]) -> None:
    """
    Write a complete strings document to `sink`.

    Args:
        sink: Writable text stream (open files should use UTF-8).
        strings: Strings to write.

    Raises:
        StringsLogicError: If a value can't be re-serialized. Nothing is written then.
        StringsIOError: If writing to the sink fails.
    """
    strings = list(strings)
    document = render_strings(strings)
    try:
        sink.write(document)
        sink.flush()
    except OSError as error:
        raise StringsIOError(f"Could not write strings: {error}") from error

    logger.debug("Wrote %d string(s)", len(strings))

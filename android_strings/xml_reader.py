"""
Event driven reader for Android `strings.xml` files.

Nesting is tracked with a stack of element handlers. The handler on top of the
stack decides which handler deals with a newly opened element, so anything
outside `<resources><string>...</string></resources>` ends up in a sink handler
and is ignored at any depth.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional
from xml.parsers import expat

from android_strings import constants
from android_strings.errors import StringsSyntaxError
from android_strings.logging_config import LOGGER_NAME
from android_strings.models import LocalizableString

logger = logging.getLogger(LOGGER_NAME)

READ_CHUNK_SIZE = 64 * 1024


class HandlerKind(Enum):
    ROOT = "root"
    RESOURCES = "resources"
    STRING = "string"
    SINK = "sink"


@dataclass
class ElementHandler:
    """State for one open element. Only STRING handlers collect text."""
    kind: HandlerKind
    name: Optional[str] = None
    is_localizable: bool = True
    parts: List[str] = field(default_factory=list)

    def handler_for_start_element(self, tag_name: str, attributes: Dict[str, str]) -> "ElementHandler":
        if self.kind is HandlerKind.ROOT and tag_name == constants.RESOURCES_ELEMENT:
            return ElementHandler(HandlerKind.RESOURCES)
        if self.kind is HandlerKind.RESOURCES and tag_name == constants.STRING_ELEMENT:
            return _build_string_handler(attributes)
        return ElementHandler(HandlerKind.SINK)

    def handle_characters(self, text: str) -> None:
        if self.kind is HandlerKind.STRING:
            self.parts.append(text)

    def handle_cdata(self, text: str) -> None:
        if self.kind is HandlerKind.STRING:
            self.parts.append(f"{constants.CDATA_START}{text}{constants.CDATA_END}")

    def built_string(self) -> Optional[LocalizableString]:
        if self.kind is not HandlerKind.STRING:
            return None
        return LocalizableString(self.name, "".join(self.parts), self.is_localizable)


def _build_string_handler(attributes: Dict[str, str]) -> ElementHandler:
    name = attributes.get(constants.NAME_ATTRIBUTE)
    if name is None:
        raise StringsSyntaxError("string element is missing required name attribute")

    is_localizable = attributes.get(constants.LOCALIZABLE_ATTRIBUTE) != constants.FALSE_FLAG
    return ElementHandler(HandlerKind.STRING, name=name, is_localizable=is_localizable)


class _StringsCollector:
    """Routes expat callbacks to the handler stack and owns the collected strings."""

    def __init__(self):
        self.strings: List[LocalizableString] = []
        self.handlers: List[ElementHandler] = [ElementHandler(HandlerKind.ROOT)]
        self.cdata_parts: Optional[List[str]] = None

    def start_element(self, tag_name: str, attributes: Dict[str, str]) -> None:
        self.handlers.append(self.handlers[-1].handler_for_start_element(tag_name, attributes))

    def end_element(self, _tag_name: str) -> None:
        built_string = self.handlers.pop().built_string()
        if built_string is not None:
            self.strings.append(built_string)

    def character_data(self, text: str) -> None:
        if self.cdata_parts is not None:
            self.cdata_parts.append(text)
        else:
            self.handlers[-1].handle_characters(text)

    def start_cdata(self) -> None:
        self.cdata_parts = []

    def end_cdata(self) -> None:
        # Adjacent character runs inside one section are a single CDATA run
        self.handlers[-1].handle_cdata("".join(self.cdata_parts))
        self.cdata_parts = None


def read_strings(source) -> List[LocalizableString]:
    """
    Read every `<string>` of a strings file.

    Args:
        source: Readable file-like object returning bytes or str.

    Returns:
        The strings in document order.

    Raises:
        StringsSyntaxError: If the document is not well-formed or a `<string>`
            element has no `name` attribute. Nothing is returned on failure.
    """
    collector = _StringsCollector()
    parser = expat.ParserCreate()
    parser.StartElementHandler = collector.start_element
    parser.EndElementHandler = collector.end_element
    parser.CharacterDataHandler = collector.character_data
    parser.StartCdataSectionHandler = collector.start_cdata
    parser.EndCdataSectionHandler = collector.end_cdata

    try:
        while True:
            chunk = source.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            parser.Parse(chunk, False)
        parser.Parse(b"", True)
    except expat.ExpatError as error:
        raise StringsSyntaxError(str(error)) from error

    logger.debug("Read %d string(s)", len(collector.strings))
    return collector.strings

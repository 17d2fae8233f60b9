"""Names and literals shared by the readers, writers and validators."""
import re

# XML elements & attributes
RESOURCES_ELEMENT = "resources"
STRING_ELEMENT = "string"
NAME_ATTRIBUTE = "name"
LOCALIZABLE_ATTRIBUTE = "translatable"
FALSE_FLAG = "false"

CDATA_START = "<![CDATA["
CDATA_END = "]]>"

# Wide CSV header
STRING_NAME_HEADER = "string_name"
DEFAULT_LOCALE_HEADER = "default_locale"

# Resource directory layout
BASE_VALUES_DIR_NAME = "values"
STRINGS_FILE_NAME = "strings.xml"
CSV_EXTENSION = "csv"

# Locale id is whatever follows the last '-' of a values dir name
LOCALE_ID_REGEX = re.compile(r'-([a-zA-Z]+)$')

# Positional format specifiers like %1$s or %2$d
FORMAT_STRING_REGEX = re.compile(r'%\d+\$[ds]')

APOSTROPHE = "'"
ESCAPED_APOSTROPHE = "\\'"

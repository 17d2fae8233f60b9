"""Value types passed between the readers, the set operations and the writers."""
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class LocalizableString:
    """
    One `<string>` resource.

    Attributes:
        name: Key of the string, unique within a single strings file.
        value: Opaque text. May embed literal `<![CDATA[...]]>` markers.
        is_localizable: False when the element carries `translatable="false"`.
    """
    name: str
    value: str
    is_localizable: bool = True

    @classmethod
    def localizable(cls, name: str, value: str) -> "LocalizableString":
        return cls(name, value, True)

    @classmethod
    def unlocalizable(cls, name: str, value: str) -> "LocalizableString":
        return cls(name, value, False)

    def __str__(self) -> str:
        return f"Localizable: {str(self.is_localizable).lower()}; Name: {self.name}; Value: {self.value}"


@dataclass(frozen=True)
class TranslatedRecord:
    """
    A translation handed back in a CSV.

    The default-locale value the translator worked from travels along so that
    translations of since-changed default strings can be recognised and dropped.
    """
    name: str
    default_value: str
    translated_value: str


@dataclass
class LocaleBucket:
    """Translated records of one locale column of a wide table."""
    locale: str
    records: List[TranslatedRecord] = field(default_factory=list)


@dataclass
class LocaleStrings:
    """Default-locale strings that still need translating into `locale`."""
    locale: str
    default_strings: List[LocalizableString] = field(default_factory=list)


@dataclass
class ParsedFormatData:
    """A string together with the positional format specifiers found in its value, in order."""
    string: LocalizableString
    placeholders: List[str] = field(default_factory=list)

"""Exception hierarchy for reading, writing and reconciling string resources."""
from typing import Optional


class StringsError(Exception):
    """
    Base class for every failure raised by this package.

    Attributes:
        message: Human-readable description of the failure.
        path: Optional file or directory the failure relates to. The layer that
            knows the path attaches it with `with_path`.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def with_path(self, path: str) -> "StringsError":
        self.path = path
        return self

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class StringsSyntaxError(StringsError):
    """Malformed XML or CSV input: bad markup, missing attribute, wrong header or column count."""


class StringsIOError(StringsError):
    """A file could not be opened, read or written."""


class StringsLogicError(StringsError):
    """An internal invariant did not hold, e.g. a value failed to re-serialize."""


class WorkflowError(StringsError):
    """Bad arguments handed to one of the localize/localized/validate workflows."""

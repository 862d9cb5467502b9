"""Custom exception hierarchy for the match loader.

Exception tree:
    DotaLoaderError
    +-- MalformedLineError  (not JSON, not an object, wrong container shape)
    +-- MissingFieldError   (required field absent or null)
    +-- FieldTypeError      (field present but not coercible to its type)
    +-- RangeViolation      (lobby_type / game_mode outside their enumerations)

Errors raised by a storage write-context are never wrapped in these.
"""

from typing import Any, Optional


class DotaLoaderError(Exception):
    """Base exception for all record extraction errors."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
    ):
        self.field = field
        self.value = value
        super().__init__(message)


class MalformedLineError(DotaLoaderError):
    """The line is not a JSON object, or a nested value has the wrong shape."""

    pass


class MissingFieldError(DotaLoaderError):
    """A required field is absent (or JSON-null).

    Never defaulted -- the whole line is rejected.
    """

    pass


class FieldTypeError(DotaLoaderError):
    """A field is present but its value cannot be read as the expected type."""

    pass


class RangeViolation(DotaLoaderError):
    """An enumerated code falls outside its defined range.

    Unrecoverable for the record: the code would otherwise be written to
    permanent storage with no label.
    """

    pass

"""Error kinds exposed at the provider boundary.

Defines the closed ErrorKind taxonomy. Every failure inside the package is
normalized to exactly one of these members before reaching a caller.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from enum import IntEnum

from localeprovider.enums import ErrorOrigin

__all__ = ["ErrorKind"]

_ORIGIN_BY_GROUP: dict[int, ErrorOrigin] = {
    0x0: ErrorOrigin.GENERAL,
    0x1: ErrorOrigin.DATA,
    0x2: ErrorOrigin.LOCALE,
    0x3: ErrorOrigin.DATA_STRUCT,
    0x9: ErrorOrigin.SHORT_STRING,
}


class ErrorKind(IntEnum):
    """Stable error codes, organized by API.

    The numeric values are part of the public contract and never change
    between releases. Callers across a language boundary may match on the
    integer code or on ``stable_name``.

    Organized by group (``code >> 8``):
        0x000-0x0FF: General errors
        0x100-0x1FF: Data errors (lookup and store composition)
        0x200-0x2FF: Locale syntax errors
        0x300-0x3FF: Data struct validity errors
        0x900-0x9FF: Short string errors
    """

    # General errors (0x000)
    UNKNOWN = 0x000
    """The failure is not currently categorized. Please file a bug."""
    WRITEABLE = 0x001
    """Writing to a string or sink failed."""
    OUT_OF_BOUNDS = 0x002

    # Data errors (0x100)
    DATA_MISSING_DATA_KEY = 0x100
    DATA_MISSING_VARIANT = 0x101
    DATA_MISSING_LOCALE = 0x102
    DATA_NEEDS_VARIANT = 0x103
    DATA_NEEDS_LOCALE = 0x104
    DATA_EXTRANEOUS_LOCALE = 0x105
    DATA_FILTERED_RESOURCE = 0x106
    DATA_MISMATCHED_TYPE = 0x107
    DATA_MISSING_PAYLOAD = 0x108
    DATA_INVALID_STATE = 0x109
    DATA_CUSTOM = 0x10A
    DATA_IO = 0x10B
    DATA_UNAVAILABLE_BUFFER_FORMAT = 0x10C
    DATA_MISMATCHED_STORE_KIND = 0x10D
    """Two providers holding different store kinds were combined."""

    # Locale errors (0x200)
    LOCALE_UNDEFINED_SUBTAG = 0x200
    """The subtag being requested was not set."""
    LOCALE_PARSER_LANGUAGE = 0x201
    """The language subtag failed to parse."""
    LOCALE_PARSER_SUBTAG = 0x202
    LOCALE_PARSER_EXTENSION = 0x203

    # Data struct errors (0x300)
    DATA_STRUCT_VALIDITY = 0x300
    """Attempted to construct an invalid data struct."""

    # Short string errors (0x900)
    SHORT_STRING_TOO_LARGE = 0x900
    SHORT_STRING_CONTAINS_NULL = 0x901
    SHORT_STRING_NON_ASCII = 0x902

    @property
    def origin(self) -> ErrorOrigin:
        """Subsystem group this kind belongs to."""
        return _ORIGIN_BY_GROUP[self.value >> 8]

    @property
    def stable_name(self) -> str:
        """CamelCase name that stays fixed across releases.

        Example:
            >>> ErrorKind.DATA_MISSING_DATA_KEY.stable_name
            'DataMissingDataKeyError'
        """
        return "".join(part.capitalize() for part in self.name.split("_")) + "Error"

    @classmethod
    def from_code(cls, code: int) -> ErrorKind:
        """Look up a kind by its numeric code.

        Args:
            code: Integer code as seen across a language boundary

        Returns:
            Matching ErrorKind

        Raises:
            ValueError: If no kind has this code
        """
        try:
            return cls(code)
        except ValueError:
            msg = f"Unknown error code: {code:#05x}"
            raise ValueError(msg) from None

"""Enumerations for localeprovider type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class StoreKind(StrEnum):
    """Variant currently installed in a DataProvider.

    StrEnum provides automatic string conversion: str(StoreKind.EMPTY) == "empty"
    """

    EMPTY = "empty"
    """No backing data: every load fails with a missing data key."""

    BUFFER = "buffer"
    """Backed by a ResourceStore returning serialized buffers."""


class FallbackPriority(StrEnum):
    """Which part of a locale is retained longest during fallback.

    StrEnum provides automatic string conversion: str(FallbackPriority.LANGUAGE) == "language"
    """

    LANGUAGE = "language"
    """Keep the language, shed region and script: de-CH -> de -> und"""

    REGION = "region"
    """Keep the region, shed the language: de-CH -> und-CH -> und"""


class BufferFormat(StrEnum):
    """Serialization format of a buffer returned by a ResourceStore.

    StrEnum provides automatic string conversion: str(BufferFormat.JSON) == "json"
    """

    JSON = "json"
    """UTF-8 JSON text. The only format this build deserializes."""

    POSTCARD = "postcard"
    """Compact binary format. Recognized but not enabled."""

    BINCODE = "bincode"
    """Binary format. Recognized but not enabled."""


class ErrorOrigin(StrEnum):
    """Subsystem group an ErrorKind belongs to.

    StrEnum provides automatic string conversion: str(ErrorOrigin.DATA) == "data"
    """

    GENERAL = "general"
    """Writing, bounds, and uncategorized failures (codes 0x000-0x0FF)."""

    DATA = "data"
    """Resource lookup and store composition (codes 0x100-0x1FF)."""

    LOCALE = "locale"
    """Locale identifier syntax (codes 0x200-0x2FF)."""

    DATA_STRUCT = "data_struct"
    """Validity of constructed data structs (codes 0x300-0x3FF)."""

    SHORT_STRING = "short_string"
    """Fixed-capacity ASCII strings (codes 0x900-0x9FF)."""


__all__ = [
    "BufferFormat",
    "ErrorOrigin",
    "FallbackPriority",
    "StoreKind",
]

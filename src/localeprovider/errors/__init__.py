"""Error taxonomy for the provider layer.

Provides the closed ErrorKind enumeration with stable numeric codes, the
native exception types raised by each subsystem, and total conversions
from those exceptions to ErrorKind.

Python 3.13+. Zero external dependencies.
"""

from .codes import ErrorKind
from .conversion import (
    data_error_kind,
    error_kind_for,
    locale_parse_error_kind,
    segmenter_error_kind,
    short_string_error_kind,
)
from .errors import (
    DataError,
    DataErrorKind,
    DataStructValidityError,
    LocaleParseError,
    ParserErrorKind,
    ProviderError,
    SegmenterError,
    ShortStringError,
    ShortStringErrorKind,
    UndefinedSubtagError,
    WriteError,
)

__all__ = [
    "DataError",
    "DataErrorKind",
    "DataStructValidityError",
    "ErrorKind",
    "LocaleParseError",
    "ParserErrorKind",
    "ProviderError",
    "SegmenterError",
    "ShortStringError",
    "ShortStringErrorKind",
    "UndefinedSubtagError",
    "WriteError",
    "data_error_kind",
    "error_kind_for",
    "locale_parse_error_kind",
    "segmenter_error_kind",
    "short_string_error_kind",
]

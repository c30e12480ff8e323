"""Total conversions from native exceptions to ErrorKind.

One mapping function per native error type, each with a default arm to
ErrorKind.UNKNOWN, plus error_kind_for() which routes any exception to the
right mapping. The original error is logged at DEBUG; logging never
influences the returned kind.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging

from localeprovider.errors.codes import ErrorKind
from localeprovider.errors.errors import (
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
    "data_error_kind",
    "error_kind_for",
    "locale_parse_error_kind",
    "log_conversion",
    "segmenter_error_kind",
    "short_string_error_kind",
]

logger = logging.getLogger(__name__)


def log_conversion(original: object, kind: ErrorKind) -> ErrorKind:
    """Log an original error alongside the kind it was mapped to.

    Args:
        original: Original error or description
        kind: Kind being returned to the caller

    Returns:
        kind, unchanged
    """
    logger.debug("Returning %s (code %#05x) for: %s", kind.stable_name, kind.value, original)
    return kind


def data_error_kind(error: DataError) -> ErrorKind:
    """Map a DataError to its ErrorKind."""
    match error.kind:
        case DataErrorKind.MISSING_DATA_KEY:
            kind = ErrorKind.DATA_MISSING_DATA_KEY
        case DataErrorKind.MISSING_LOCALE:
            kind = ErrorKind.DATA_MISSING_LOCALE
        case DataErrorKind.NEEDS_LOCALE:
            kind = ErrorKind.DATA_NEEDS_LOCALE
        case DataErrorKind.EXTRANEOUS_LOCALE:
            kind = ErrorKind.DATA_EXTRANEOUS_LOCALE
        case DataErrorKind.FILTERED_RESOURCE:
            kind = ErrorKind.DATA_FILTERED_RESOURCE
        case DataErrorKind.MISMATCHED_TYPE:
            kind = ErrorKind.DATA_MISMATCHED_TYPE
        case DataErrorKind.MISSING_PAYLOAD:
            kind = ErrorKind.DATA_MISSING_PAYLOAD
        case DataErrorKind.INVALID_STATE:
            kind = ErrorKind.DATA_INVALID_STATE
        case DataErrorKind.CUSTOM:
            kind = ErrorKind.DATA_CUSTOM
        case DataErrorKind.IO:
            kind = ErrorKind.DATA_IO
        case DataErrorKind.UNAVAILABLE_BUFFER_FORMAT:
            kind = ErrorKind.DATA_UNAVAILABLE_BUFFER_FORMAT
        case _:
            # MISSING_SOURCE_DATA is exporter-only
            kind = ErrorKind.UNKNOWN
    return log_conversion(error, kind)


def locale_parse_error_kind(error: LocaleParseError) -> ErrorKind:
    """Map a LocaleParseError to its ErrorKind."""
    match error.kind:
        case ParserErrorKind.INVALID_LANGUAGE:
            kind = ErrorKind.LOCALE_PARSER_LANGUAGE
        case ParserErrorKind.INVALID_SUBTAG:
            kind = ErrorKind.LOCALE_PARSER_SUBTAG
        case ParserErrorKind.INVALID_EXTENSION:
            kind = ErrorKind.LOCALE_PARSER_EXTENSION
        case _:
            kind = ErrorKind.UNKNOWN
    return log_conversion(error, kind)


def short_string_error_kind(error: ShortStringError) -> ErrorKind:
    """Map a ShortStringError to its ErrorKind."""
    match error.kind:
        case ShortStringErrorKind.TOO_LARGE:
            kind = ErrorKind.SHORT_STRING_TOO_LARGE
        case ShortStringErrorKind.CONTAINS_NULL:
            kind = ErrorKind.SHORT_STRING_CONTAINS_NULL
        case ShortStringErrorKind.NON_ASCII:
            kind = ErrorKind.SHORT_STRING_NON_ASCII
        case _:
            kind = ErrorKind.UNKNOWN
    return log_conversion(error, kind)


def segmenter_error_kind(error: SegmenterError) -> ErrorKind:
    """Map a SegmenterError to its ErrorKind.

    Data failures inside a segmenter keep their data kind; anything else
    is uncategorized.
    """
    if error.data_error is not None:
        return data_error_kind(error.data_error)
    return log_conversion(error, ErrorKind.UNKNOWN)


def error_kind_for(error: BaseException) -> ErrorKind:
    """Map any exception to exactly one ErrorKind.

    Routes native exception types to their dedicated mapping. Exceptions
    from outside the package map to UNKNOWN, except a few builtins with an
    obvious counterpart (OSError, IndexError, OverflowError).

    Args:
        error: Exception raised below the provider boundary

    Returns:
        ErrorKind for the caller
    """
    match error:
        case ProviderError():
            return log_conversion(error, error.kind)
        case DataError():
            return data_error_kind(error)
        case LocaleParseError():
            return locale_parse_error_kind(error)
        case ShortStringError():
            return short_string_error_kind(error)
        case SegmenterError():
            return segmenter_error_kind(error)
        case UndefinedSubtagError():
            return log_conversion(error, ErrorKind.LOCALE_UNDEFINED_SUBTAG)
        case DataStructValidityError():
            return log_conversion(error, ErrorKind.DATA_STRUCT_VALIDITY)
        case WriteError():
            return log_conversion(error, ErrorKind.WRITEABLE)
        case OSError():
            return log_conversion(error, ErrorKind.DATA_IO)
        case IndexError() | OverflowError():
            return log_conversion(error, ErrorKind.OUT_OF_BOUNDS)
        case _:
            return log_conversion(error, ErrorKind.UNKNOWN)

"""Native exception types raised inside the provider layer.

Each subsystem (data lookup, locale parsing, short strings, segmentation)
raises its own exception type. None of them crosses the DataProvider
boundary: conversion.py maps every one of them to an ErrorKind.

ProviderError is the single exception carrying an ErrorKind. It is only
raised on explicit request via Outcome.unwrap().

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from localeprovider.errors.codes import ErrorKind
    from localeprovider.provider.request import DataKey, DataRequest

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Boundary
    "ProviderError",
    # Data lookup
    "DataErrorKind",
    "DataError",
    # Locale syntax
    "ParserErrorKind",
    "LocaleParseError",
    "UndefinedSubtagError",
    # Short strings
    "ShortStringErrorKind",
    "ShortStringError",
    # Other subsystems
    "SegmenterError",
    "DataStructValidityError",
    "WriteError",
]


class ProviderError(Exception):
    """Failure reported by the provider boundary.

    Attributes:
        kind: Stable error kind
    """

    def __init__(self, kind: ErrorKind, message: str | None = None) -> None:
        """Initialize ProviderError.

        Args:
            kind: Stable error kind
            message: Optional human-readable detail (defaults to the kind's stable name)
        """
        super().__init__(message or kind.stable_name)
        self.kind = kind


# ============================================================================
# DATA LOOKUP
# ============================================================================


class DataErrorKind(StrEnum):
    """Category of a data lookup failure."""

    MISSING_DATA_KEY = "missing_data_key"
    """No data for the requested key."""

    MISSING_LOCALE = "missing_locale"
    """The key exists but not for the requested locale."""

    NEEDS_LOCALE = "needs_locale"
    """The request needs a locale but none was supplied."""

    EXTRANEOUS_LOCALE = "extraneous_locale"
    """A locale was supplied for singleton data."""

    FILTERED_RESOURCE = "filtered_resource"
    """The resource was blocked by a filter."""

    MISMATCHED_TYPE = "mismatched_type"
    """The payload does not have the type the key declares."""

    MISSING_PAYLOAD = "missing_payload"
    """A response carried no payload."""

    INVALID_STATE = "invalid_state"
    """A store or key is in a state that cannot serve requests."""

    CUSTOM = "custom"
    """Store-specific failure (malformed blob, bad payload encoding)."""

    IO = "io"
    """Reading the backing source failed."""

    UNAVAILABLE_BUFFER_FORMAT = "unavailable_buffer_format"
    """The buffer format is recognized but not enabled."""

    MISSING_SOURCE_DATA = "missing_source_data"
    """Source data absent while exporting. Only produced by exporters."""

    def into_error(self) -> DataError:
        """Create a DataError of this kind with no context."""
        return DataError(self)

    def with_request(self, request: DataRequest) -> DataError:
        """Create a DataError of this kind carrying request context."""
        return DataError(self, key=request.key, context=str(request.locale))


class DataError(Exception):
    """Data lookup failure.

    Attributes:
        kind: Failure category
        key: Data key involved, if known
        context: Extra detail (typically the requested locale)
        silent: When True, the failure is expected and should not be logged
    """

    def __init__(
        self,
        kind: DataErrorKind,
        *,
        key: DataKey | None = None,
        context: str | None = None,
        silent: bool = False,
    ) -> None:
        """Initialize DataError.

        Args:
            kind: Failure category
            key: Data key involved, if known
            context: Extra detail (typically the requested locale)
            silent: Suppress failure logging
        """
        self.kind = kind
        self.key = key
        self.context = context
        self.silent = silent
        super().__init__(self._describe())

    def _describe(self) -> str:
        parts = [f"data error: {self.kind}"]
        if self.key is not None:
            parts.append(f"key={self.key.path}")
        if self.context:
            parts.append(f"context={self.context}")
        return " ".join(parts)

    def with_context(self, context: str) -> DataError:
        """Return a copy of this error with different context."""
        return DataError(self.kind, key=self.key, context=context, silent=self.silent)

    def with_key(self, key: DataKey) -> DataError:
        """Return a copy of this error attached to a data key."""
        return DataError(self.kind, key=key, context=self.context, silent=self.silent)

    @classmethod
    def custom(cls, context: str) -> DataError:
        """Create a store-specific failure with a description."""
        return cls(DataErrorKind.CUSTOM, context=context)

    @classmethod
    def from_os_error(cls, exc: OSError) -> DataError:
        """Create an IO failure describing an OSError."""
        return cls(DataErrorKind.IO, context=f"{type(exc).__name__}: {exc}")


# ============================================================================
# LOCALE SYNTAX
# ============================================================================


class ParserErrorKind(StrEnum):
    """Which part of a locale identifier failed to parse."""

    INVALID_LANGUAGE = "invalid_language"
    INVALID_SUBTAG = "invalid_subtag"
    INVALID_EXTENSION = "invalid_extension"
    DUPLICATED_EXTENSION = "duplicated_extension"


class LocaleParseError(ValueError):
    """Locale identifier failed to parse.

    Attributes:
        kind: Which part failed
        locale_code: The input that was rejected
    """

    def __init__(self, kind: ParserErrorKind, locale_code: str, detail: str = "") -> None:
        """Initialize LocaleParseError.

        Args:
            kind: Which part failed
            locale_code: The rejected input
            detail: Offending subtag or explanation
        """
        message = f"Invalid locale '{locale_code}': {kind}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.kind = kind
        self.locale_code = locale_code


class UndefinedSubtagError(LookupError):
    """A subtag that is not set on the locale was requested."""

    def __init__(self, subtag: str, locale_code: str) -> None:
        """Initialize UndefinedSubtagError.

        Args:
            subtag: Name of the missing subtag ("script", "region")
            locale_code: Locale it was requested from
        """
        super().__init__(f"Locale '{locale_code}' has no {subtag} subtag")
        self.subtag = subtag
        self.locale_code = locale_code


# ============================================================================
# SHORT STRINGS
# ============================================================================


class ShortStringErrorKind(StrEnum):
    """Why a string was rejected as a ShortString."""

    TOO_LARGE = "too_large"
    CONTAINS_NULL = "contains_null"
    NON_ASCII = "non_ascii"


class ShortStringError(ValueError):
    """String could not be stored as a ShortString.

    Attributes:
        kind: Rejection reason
        max_length: Capacity that applied
        actual_length: Length of the rejected input
    """

    def __init__(
        self,
        kind: ShortStringErrorKind,
        *,
        max_length: int,
        actual_length: int,
    ) -> None:
        """Initialize ShortStringError.

        Args:
            kind: Rejection reason
            max_length: Capacity that applied
            actual_length: Length of the rejected input
        """
        if kind is ShortStringErrorKind.TOO_LARGE:
            message = f"String of length {actual_length} exceeds capacity {max_length}"
        else:
            message = f"String rejected: {kind}"
        super().__init__(message)
        self.kind = kind
        self.max_length = max_length
        self.actual_length = actual_length


# ============================================================================
# OTHER SUBSYSTEMS
# ============================================================================


class SegmenterError(Exception):
    """Failure from a segmenter built on provider data.

    Attributes:
        data_error: Underlying data failure, if the segmenter failed loading data
    """

    def __init__(self, message: str, data_error: DataError | None = None) -> None:
        """Initialize SegmenterError.

        Args:
            message: Description of the failure
            data_error: Underlying data failure, if any
        """
        super().__init__(message)
        self.data_error = data_error


class DataStructValidityError(ValueError):
    """Attempted to construct an invalid data struct."""


class WriteError(Exception):
    """Writing formatted output to a sink failed."""

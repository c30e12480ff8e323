"""Request and response types for data loading.

A DataRequest names what to load (DataKey) and for which locale
(DataLocale, including auxiliary selection subtags). Stores answer with a
BufferResponse holding still-serialized bytes; the provider deserializes
those into a DataResponse for the consumer.

Requests are used for dispatch only and never stored.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any

from localeprovider.enums import BufferFormat, FallbackPriority
from localeprovider.errors.errors import DataError, DataErrorKind
from localeprovider.fallback import LocaleFallbackConfig
from localeprovider.locale import DataLocale

__all__ = [
    "BufferResponse",
    "DataKey",
    "DataRequest",
    "DataRequestMetadata",
    "DataResponse",
    "DataResponseMetadata",
]

# segment(/segment)*@version, e.g. "datetime/gregory/months@1"
_KEY_PATH_PATTERN = re.compile(r"^[a-z0-9_]+(?:/[a-z0-9_]+)*@[1-9][0-9]*$")


@dataclass(frozen=True, slots=True)
class DataKey:
    """Identifier naming a category of structured data.

    Example:
        >>> key = DataKey("datetime/gregory/months@1", extension_key="ca")
        >>> key.fallback_config.extension_key
        'ca'

    Attributes:
        path: Hierarchical name with version suffix ("decimal/symbols@1")
        fallback_priority: Which locale part locale fallback retains longest
        extension_key: Unicode extension keyword relevant to this data
        singleton: Data is not locale-specific; only "und" is valid
        payload_type: Expected type of the deserialized top-level value
    """

    path: str
    fallback_priority: FallbackPriority = FallbackPriority.LANGUAGE
    extension_key: str | None = None
    singleton: bool = False
    payload_type: type = dict

    def __post_init__(self) -> None:
        """Validate the key path.

        Raises:
            DataError: INVALID_STATE if the path is malformed
        """
        if not _KEY_PATH_PATTERN.match(self.path):
            raise DataError(
                DataErrorKind.INVALID_STATE,
                context=f"invalid data key path: {self.path!r}",
            )

    def __str__(self) -> str:
        return self.path

    @property
    def fallback_config(self) -> LocaleFallbackConfig:
        """Fallback configuration derived from this key's metadata."""
        return LocaleFallbackConfig(
            priority=self.fallback_priority,
            extension_key=self.extension_key,
        )


@dataclass(frozen=True, slots=True)
class DataRequestMetadata:
    """Auxiliary request flags.

    Attributes:
        silent: The caller expects failures; do not log them
    """

    silent: bool = False


@dataclass(frozen=True, slots=True)
class DataRequest:
    """A request for one data key in one locale."""

    key: DataKey
    locale: DataLocale = field(default_factory=DataLocale.und)
    metadata: DataRequestMetadata = field(default_factory=DataRequestMetadata)

    @classmethod
    def for_locale(cls, key: DataKey, locale_code: str, *, silent: bool = False) -> DataRequest:
        """Build a request from a locale string.

        Raises:
            LocaleParseError: If locale_code is not well formed
            ShortStringError: If a subtag is not a valid short string
        """
        return cls(key, DataLocale.parse(locale_code), DataRequestMetadata(silent=silent))

    def with_locale(self, locale: DataLocale) -> DataRequest:
        return replace(self, locale=locale)

    def __str__(self) -> str:
        return f"{self.key.path}/{self.locale}"


@dataclass(frozen=True, slots=True)
class DataResponseMetadata:
    """Information about where a response came from.

    Attributes:
        locale: Locale that supplied the data (may differ from the request
            when fallback was used)
        buffer_format: Serialization format the payload was stored in
    """

    locale: DataLocale | None = None
    buffer_format: BufferFormat | None = None


@dataclass(frozen=True, slots=True)
class BufferResponse:
    """Serialized payload returned by a ResourceStore."""

    payload: bytes
    buffer_format: BufferFormat
    metadata: DataResponseMetadata = field(default_factory=DataResponseMetadata)

    def with_locale(self, locale: DataLocale) -> BufferResponse:
        return replace(self, metadata=replace(self.metadata, locale=locale))


@dataclass(frozen=True, slots=True)
class DataResponse:
    """Deserialized payload handed to the consumer."""

    payload: Any
    metadata: DataResponseMetadata = field(default_factory=DataResponseMetadata)

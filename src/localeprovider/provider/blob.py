"""Blob-backed resource store.

BlobDataStore serves data from one immutable byte blob. The blob is
validated once at construction; payloads stay serialized until a request
asks for them.

Blob layout (UTF-8 JSON object):

    {
      "magic": "localeprovider-blob",
      "version": 1,
      "format": "json",
      "resources": {
        "<key path>": {"<locale>": "<serialized payload>", ...},
        ...
      }
    }

For the "json" format each payload is JSON text. For binary formats each
payload is base64 text.

export_blob() produces blobs in this layout.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from localeprovider.constants import BLOB_MAGIC, BLOB_VERSION, DEFAULT_MAX_BLOB_SIZE
from localeprovider.enums import BufferFormat
from localeprovider.errors.errors import (
    DataError,
    DataErrorKind,
    LocaleParseError,
    ShortStringError,
)
from localeprovider.locale import DataLocale
from localeprovider.provider.request import (
    BufferResponse,
    DataKey,
    DataRequest,
    DataResponseMetadata,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ["BlobConfig", "BlobDataStore", "export_blob"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BlobConfig:
    """Limits applied when reading a blob.

    Attributes:
        max_blob_size: Largest accepted blob in bytes (default: 64 MB)
    """

    max_blob_size: int = DEFAULT_MAX_BLOB_SIZE

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_blob_size is not positive
        """
        if self.max_blob_size <= 0:
            msg = f"max_blob_size must be positive, got {self.max_blob_size}"
            raise ValueError(msg)


class BlobDataStore:
    """ResourceStore backed by a validated byte blob.

    Immutable after construction; safe to share across threads.

    Example:
        >>> blob = export_blob({"demo/greeting@1": {"en": {"text": "Hello"}}})
        >>> store = BlobDataStore.try_new_from_blob(blob)
        >>> request = DataRequest.for_locale(DataKey("demo/greeting@1"), "en")
        >>> store.load_buffer(request).payload
        b'{"text":"Hello"}'
    """

    __slots__ = ("_buffer_format", "_resources")

    def __init__(
        self,
        resources: dict[str, dict[DataLocale, bytes]],
        buffer_format: BufferFormat,
    ) -> None:
        """Initialize from already-validated resources.

        Use try_new_from_blob() or try_new_from_path() to build from bytes.
        """
        self._resources = resources
        self._buffer_format = buffer_format

    @classmethod
    def try_new_from_blob(
        cls,
        blob: bytes | bytearray | memoryview,
        config: BlobConfig | None = None,
    ) -> BlobDataStore:
        """Validate a blob and build a store from it.

        Args:
            blob: Blob bytes (copied; later changes to a mutable buffer are not seen)
            config: Reading limits (defaults to BlobConfig())

        Returns:
            Store serving the blob's resources

        Raises:
            DataError: CUSTOM if the blob is malformed or too large,
                UNAVAILABLE_BUFFER_FORMAT if its version or format is not supported
        """
        config = config or BlobConfig()
        if not isinstance(blob, (bytes, bytearray, memoryview)):
            raise DataError.custom(f"blob must be bytes-like, got {type(blob).__name__}")
        data = bytes(blob)
        if len(data) > config.max_blob_size:
            raise DataError.custom(
                f"blob of {len(data)} bytes exceeds limit of {config.max_blob_size}"
            )

        try:
            document = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DataError.custom(f"blob deserialize: {e}") from e
        if not isinstance(document, dict):
            raise DataError.custom("blob root must be an object")
        if document.get("magic") != BLOB_MAGIC:
            raise DataError.custom("not a localeprovider blob")

        version = document.get("version")
        if type(version) is not int or version != BLOB_VERSION:
            raise DataError(
                DataErrorKind.UNAVAILABLE_BUFFER_FORMAT,
                context=f"blob version {version!r}",
            )
        try:
            buffer_format = BufferFormat(document.get("format"))
        except ValueError:
            raise DataError(
                DataErrorKind.UNAVAILABLE_BUFFER_FORMAT,
                context=f"blob format {document.get('format')!r}",
            ) from None

        resources = cls._read_resources(document.get("resources"), buffer_format)
        store = cls(resources, buffer_format)
        logger.info(
            "Loaded blob: %d keys, %d entries, format=%s",
            len(resources),
            sum(len(by_locale) for by_locale in resources.values()),
            buffer_format,
        )
        return store

    @classmethod
    def try_new_from_path(
        cls,
        path: str | Path,
        config: BlobConfig | None = None,
    ) -> BlobDataStore:
        """Read a blob file and build a store from it.

        Raises:
            DataError: IO if the file cannot be read, otherwise as try_new_from_blob()
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise DataError.from_os_error(e) from e
        return cls.try_new_from_blob(data, config)

    @staticmethod
    def _read_resources(
        section: object,
        buffer_format: BufferFormat,
    ) -> dict[str, dict[DataLocale, bytes]]:
        if not isinstance(section, dict):
            raise DataError.custom("blob resources must be an object")

        resources: dict[str, dict[DataLocale, bytes]] = {}
        for path, by_locale in section.items():
            try:
                DataKey(path)
            except DataError as e:
                raise DataError.custom(f"blob contains invalid key {path!r}") from e
            if not isinstance(by_locale, dict):
                raise DataError.custom(f"entries for {path!r} must be an object")

            entries: dict[DataLocale, bytes] = {}
            for locale_code, encoded in by_locale.items():
                try:
                    locale = DataLocale.parse(locale_code)
                except (LocaleParseError, ShortStringError) as e:
                    raise DataError.custom(
                        f"blob contains invalid locale {locale_code!r} for {path!r}"
                    ) from e
                if locale in entries:
                    raise DataError.custom(
                        f"blob contains duplicate locale {locale_code!r} for {path!r}"
                    )
                if not isinstance(encoded, str):
                    raise DataError.custom(f"payload for {path}/{locale_code} must be a string")
                entries[locale] = _decode_payload(encoded, buffer_format, f"{path}/{locale_code}")
            resources[path] = entries
        return resources

    @property
    def buffer_format(self) -> BufferFormat:
        return self._buffer_format

    @property
    def key_paths(self) -> tuple[str, ...]:
        """Key paths present in the blob, sorted."""
        return tuple(sorted(self._resources))

    def locales_for(self, key_path: str) -> tuple[DataLocale, ...]:
        """Locales with data for a key path (empty if the key is absent)."""
        return tuple(self._resources.get(key_path, {}))

    def load_buffer(self, request: DataRequest) -> BufferResponse:
        """Look up the serialized payload for a request.

        Raises:
            DataError: MISSING_DATA_KEY if the blob lacks the key,
                EXTRANEOUS_LOCALE if a singleton key is requested with a locale,
                MISSING_LOCALE if the key has no data for the exact locale
        """
        by_locale = self._resources.get(request.key.path)
        if by_locale is None:
            raise DataErrorKind.MISSING_DATA_KEY.with_request(request)
        if request.key.singleton and not request.locale.is_und:
            raise DataErrorKind.EXTRANEOUS_LOCALE.with_request(request)
        payload = by_locale.get(request.locale)
        if payload is None:
            raise DataErrorKind.MISSING_LOCALE.with_request(request)
        return BufferResponse(
            payload,
            self._buffer_format,
            DataResponseMetadata(locale=request.locale, buffer_format=self._buffer_format),
        )

    def __repr__(self) -> str:
        return f"BlobDataStore(keys={len(self._resources)}, format={self._buffer_format})"


def _decode_payload(encoded: str, buffer_format: BufferFormat, where: str) -> bytes:
    match buffer_format:
        case BufferFormat.JSON:
            return encoded.encode("utf-8")
        case _:
            try:
                return base64.b64decode(encoded, validate=True)
            except (binascii.Error, ValueError) as e:
                raise DataError.custom(f"payload for {where} is not valid base64") from e


def export_blob(resources: Mapping[str, Mapping[str, Any]]) -> bytes:
    """Serialize resources into a JSON-format blob.

    Locale codes are canonicalized, so "en_US" and "en-US" land on the same
    entry (the later one wins).

    Args:
        resources: Key path -> locale code -> JSON-serializable payload

    Returns:
        Blob bytes readable by BlobDataStore.try_new_from_blob()

    Raises:
        DataError: INVALID_STATE for a malformed key path,
            MISSING_SOURCE_DATA for a key with no locales
        LocaleParseError: If a locale code is not well formed
        ShortStringError: If a locale subtag is not a valid short string
        TypeError: If a payload is not JSON-serializable

    Example:
        >>> blob = export_blob({"decimal/symbols@1": {"en": {"decimal": "."}}})
        >>> BlobDataStore.try_new_from_blob(blob).key_paths
        ('decimal/symbols@1',)
    """
    section: dict[str, dict[str, str]] = {}
    for path, by_locale in resources.items():
        key = DataKey(path)
        if not by_locale:
            raise DataError(DataErrorKind.MISSING_SOURCE_DATA, key=key)
        section[path] = {
            str(DataLocale.parse(locale_code)): json.dumps(
                payload, ensure_ascii=False, separators=(",", ":"), sort_keys=True
            )
            for locale_code, payload in by_locale.items()
        }
    document = {
        "magic": BLOB_MAGIC,
        "version": BLOB_VERSION,
        "format": str(BufferFormat.JSON),
        "resources": section,
    }
    return json.dumps(document, ensure_ascii=False, sort_keys=True).encode("utf-8")

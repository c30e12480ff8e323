"""Store capability interface and the empty store.

ResourceStore is the contract every backing store satisfies: resolve a
DataRequest to a serialized BufferResponse or raise DataError. Stores
never return a payload and an error together, and never raise anything
but DataError for data-related failures.

deserialize() turns a BufferResponse into a DataResponse on demand.
Stores do not cache deserialized payloads; caching, if any, belongs to the
store implementation.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Protocol

from localeprovider.enums import BufferFormat
from localeprovider.errors.errors import DataError, DataErrorKind
from localeprovider.provider.request import (
    BufferResponse,
    DataKey,
    DataRequest,
    DataResponse,
)

__all__ = [
    "EmptyDataStore",
    "ResourceStore",
    "deserialize",
]


class ResourceStore(Protocol):
    """Protocol for stores that supply serialized resource data.

    This is a Protocol (structural typing) rather than ABC so any object
    with a matching load_buffer() method can back a DataProvider.

    Example:
        >>> class DictStore:
        ...     def __init__(self, data: dict[tuple[str, str], bytes]) -> None:
        ...         self._data = data
        ...     def load_buffer(self, request: DataRequest) -> BufferResponse:
        ...         try:
        ...             payload = self._data[(request.key.path, str(request.locale))]
        ...         except KeyError:
        ...             raise DataErrorKind.MISSING_LOCALE.with_request(request) from None
        ...         return BufferResponse(payload, BufferFormat.JSON)
        ...
        >>> provider = DataProvider.from_store(DictStore({}))
    """

    def load_buffer(self, request: DataRequest) -> BufferResponse:
        """Load the serialized payload for a request.

        Args:
            request: Key and locale to load

        Returns:
            Serialized payload and its format

        Raises:
            DataError: MISSING_DATA_KEY if the key is unsupported,
                MISSING_LOCALE if the key has no data for the locale,
                or any other kind describing the failure
        """
        ...


class EmptyDataStore:
    """Store with no data. Every request fails with MISSING_DATA_KEY."""

    __slots__ = ()

    def load_buffer(self, request: DataRequest) -> BufferResponse:
        """Reject the request.

        Raises:
            DataError: Always, with kind MISSING_DATA_KEY
        """
        raise DataErrorKind.MISSING_DATA_KEY.with_request(request)

    def __repr__(self) -> str:
        return "EmptyDataStore()"


def deserialize(response: BufferResponse, key: DataKey) -> DataResponse:
    """Decode a serialized payload.

    Args:
        response: Serialized payload from a store
        key: Key the payload was requested for (declares the expected type)

    Returns:
        DataResponse with the decoded payload

    Raises:
        DataError: UNAVAILABLE_BUFFER_FORMAT if the format is not enabled,
            CUSTOM if the payload is malformed,
            MISMATCHED_TYPE if the payload is not of key.payload_type
    """
    match response.buffer_format:
        case BufferFormat.JSON:
            try:
                payload = json.loads(response.payload.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                raise DataError(
                    DataErrorKind.CUSTOM, key=key, context=f"JSON deserialize: {e}"
                ) from e
        case _:
            raise DataError(
                DataErrorKind.UNAVAILABLE_BUFFER_FORMAT,
                key=key,
                context=str(response.buffer_format),
            )

    if not isinstance(payload, key.payload_type):
        raise DataError(
            DataErrorKind.MISMATCHED_TYPE,
            key=key,
            context=f"expected {key.payload_type.__name__}, got {type(payload).__name__}",
        )
    return DataResponse(payload, replace(response.metadata, buffer_format=response.buffer_format))

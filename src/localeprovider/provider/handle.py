"""DataProvider: the consumer-facing handle over one installed store.

A DataProvider owns exactly one Store value, either EmptyStore or
BufferStore. Combinators (fork_by_key, fork_by_locale,
enable_locale_fallback, enable_locale_fallback_with) replace the installed
store with a composite built from it.

Ownership:
    Every combinator first takes the store(s) it consumes, leaving an
    EmptyStore placeholder behind, and only then validates them. A failed
    combinator therefore still consumes its inputs: after a store kind
    mismatch both providers hold EmptyStore. On success the receiving
    provider holds the composite and the other provider holds EmptyStore.

Errors:
    No operation on DataProvider raises for an expected failure. Results
    are Outcome values carrying either a value or an ErrorKind.

Thread safety:
    load() only reads the installed store and is safe to call concurrently
    as long as no combinator runs at the same time. Combinators mutate the
    provider; callers sharing a provider across threads must serialize them.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from localeprovider.enums import StoreKind
from localeprovider.errors.codes import ErrorKind
from localeprovider.errors.conversion import error_kind_for, log_conversion
from localeprovider.errors.errors import DataErrorKind, ProviderError
from localeprovider.provider.blob import BlobConfig, BlobDataStore
from localeprovider.provider.fork import (
    ForkByErrorStore,
    ForkByKeyStore,
    MissingLocalePredicate,
)
from localeprovider.provider.locale_fallback import LocaleFallbackStore, load_fallback_rules
from localeprovider.provider.store import EmptyDataStore, deserialize

if TYPE_CHECKING:
    from collections.abc import Callable

    from localeprovider.fallback import LocaleFallbacker
    from localeprovider.provider.request import DataRequest, DataResponse
    from localeprovider.provider.store import ResourceStore

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Handle
    "DataProvider",
    # Store variants
    "EmptyStore",
    "BufferStore",
    "Store",
    # Results
    "Outcome",
]

logger = logging.getLogger(__name__)

_EMPTY_DATA_STORE = EmptyDataStore()


@dataclass(frozen=True, slots=True)
class EmptyStore:
    """Store variant with no data."""

    @property
    def kind(self) -> StoreKind:
        return StoreKind.EMPTY


@dataclass(frozen=True, slots=True)
class BufferStore:
    """Store variant owning one ResourceStore implementation."""

    inner: ResourceStore

    @property
    def kind(self) -> StoreKind:
        return StoreKind.BUFFER


type Store = EmptyStore | BufferStore
"""Tagged union of store variants. Exactly one is installed at a time."""


@dataclass(frozen=True, slots=True)
class Outcome[T]:
    """Result of a provider operation: a value or an ErrorKind, never both.

    Example:
        >>> outcome = DataProvider.create_empty().load(request)
        >>> outcome.ok
        False
        >>> outcome.error
        <ErrorKind.DATA_MISSING_DATA_KEY: 256>

    Attributes:
        value: Result on success (None for operations without a result)
        error: Error kind on failure, None on success
    """

    value: T | None = None
    error: ErrorKind | None = None

    def __post_init__(self) -> None:
        """Reject outcomes holding both a value and an error.

        Raises:
            ValueError: If value and error are both set
        """
        if self.value is not None and self.error is not None:
            msg = "Outcome cannot hold both a value and an error"
            raise ValueError(msg)

    @classmethod
    def success(cls, value: T | None = None) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind) -> Outcome[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Check if the operation succeeded."""
        return self.error is None

    def unwrap(self) -> T | None:
        """Get the value, raising on failure.

        Raises:
            ProviderError: If the operation failed
        """
        if self.error is not None:
            raise ProviderError(self.error)
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get the value, or ``default`` on failure or when no value is held."""
        if self.error is not None or self.value is None:
            return default
        return self.value


class DataProvider:
    """Loads locale-keyed data from the currently installed store.

    Example - Blob with fallback:
        >>> provider = DataProvider.create_from_bytes(blob).unwrap()
        >>> provider.enable_locale_fallback().ok
        True
        >>> response = provider.load(DataRequest.for_locale(key, "de-CH")).unwrap()
        >>> str(response.metadata.locale)
        'de'

    Example - Fork two blobs by key:
        >>> core = DataProvider.create_from_bytes(core_blob).unwrap()
        >>> extra = DataProvider.create_from_bytes(extra_blob).unwrap()
        >>> core.fork_by_key(extra).ok
        True
        >>> extra.store_kind
        <StoreKind.EMPTY: 'empty'>
    """

    __slots__ = ("_store",)

    def __init__(self, store: Store | None = None) -> None:
        self._store: Store = store if store is not None else EmptyStore()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def create_empty(cls) -> DataProvider:
        """Create a provider with no data. Never fails."""
        return cls(EmptyStore())

    @classmethod
    def create_from_bytes(
        cls,
        blob: bytes | bytearray | memoryview,
        config: BlobConfig | None = None,
    ) -> Outcome[DataProvider]:
        """Create a provider serving a blob.

        Args:
            blob: Blob bytes (see localeprovider.provider.blob for the layout)
            config: Reading limits

        Returns:
            Outcome with the provider, or DATA_CUSTOM /
            DATA_UNAVAILABLE_BUFFER_FORMAT if the blob is rejected
        """
        return cls._create(lambda: BlobDataStore.try_new_from_blob(blob, config))

    @classmethod
    def create_from_path(
        cls,
        path: str | Path,
        config: BlobConfig | None = None,
    ) -> Outcome[DataProvider]:
        """Create a provider serving a blob file.

        Returns:
            Outcome with the provider, DATA_IO if the file cannot be read,
            or the errors of create_from_bytes()
        """
        outcome = cls._create(lambda: BlobDataStore.try_new_from_path(path, config))
        if outcome.ok:
            logger.info("Created provider from %s", Path(path))
        return outcome

    @classmethod
    def from_store(cls, store: ResourceStore) -> DataProvider:
        """Wrap a caller-supplied store as a buffer provider."""
        return cls(BufferStore(store))

    @classmethod
    def _create(cls, build: Callable[[], ResourceStore]) -> Outcome[DataProvider]:
        try:
            store = build()
        except Exception as e:  # pylint: disable=broad-exception-caught
            return Outcome.failure(error_kind_for(e))
        return Outcome.success(cls(BufferStore(store)))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def store(self) -> Store:
        """Currently installed store variant."""
        return self._store

    @property
    def store_kind(self) -> StoreKind:
        return self._store.kind

    def _take(self) -> Store:
        """Remove the installed store, leaving an EmptyStore placeholder."""
        store, self._store = self._store, EmptyStore()
        return store

    def __repr__(self) -> str:
        match self._store:
            case BufferStore(inner):
                return f"DataProvider({inner!r})"
            case _:
                return "DataProvider(empty)"

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def fork_by_key(self, other: DataProvider) -> Outcome[None]:
        """Fork with ``other``, consulted when this provider lacks the key.

        Takes both installed stores first. On success this provider holds
        the fork and ``other`` holds EmptyStore. Both providers must hold
        buffer stores; otherwise both are left holding EmptyStore.

        Returns:
            Empty success, or DATA_MISMATCHED_STORE_KIND
        """
        return self._fork(other, "fork_by_key", ForkByKeyStore)

    def fork_by_locale(self, other: DataProvider) -> Outcome[None]:
        """Fork with ``other``, consulted when this provider lacks the locale.

        Same ownership rules as fork_by_key().

        Returns:
            Empty success, or DATA_MISMATCHED_STORE_KIND
        """
        return self._fork(
            other,
            "fork_by_locale",
            lambda first, second: ForkByErrorStore(first, second, MissingLocalePredicate()),
        )

    def _fork(
        self,
        other: DataProvider,
        operation: str,
        build: Callable[[ResourceStore, ResourceStore], ResourceStore],
    ) -> Outcome[None]:
        first = self._take()
        second = other._take()
        match (first, second):
            case (BufferStore(a), BufferStore(b)):
                self._store = BufferStore(build(a, b))
                return Outcome.success()
            case _:
                kind = ErrorKind.DATA_MISMATCHED_STORE_KIND
                logger.warning(
                    "%s must be passed the same type of provider (got %s and %s)",
                    operation,
                    first.kind,
                    second.kind,
                )
                return Outcome.failure(log_conversion(operation, kind))

    def enable_locale_fallback(self) -> Outcome[None]:
        """Enable locale fallback using the default fallback rules.

        Rules embedded in the installed store take precedence over CLDR
        rules from Babel. The installed store is consumed even on failure.

        Returns:
            Empty success, DATA_MISSING_DATA_KEY if this provider is empty,
            or the error raised while loading embedded rules
        """
        match self._take():
            case BufferStore(inner):
                try:
                    fallbacker = load_fallback_rules(inner)
                except Exception as e:  # pylint: disable=broad-exception-caught
                    kind = error_kind_for(e)
                    logger.warning("enable_locale_fallback failed: %s", kind.stable_name)
                    return Outcome.failure(kind)
                self._store = BufferStore(LocaleFallbackStore(inner, fallbacker))
                return Outcome.success()
            case _:
                return self._fallback_on_empty("enable_locale_fallback")

    def enable_locale_fallback_with(self, fallbacker: LocaleFallbacker) -> Outcome[None]:
        """Enable locale fallback using caller-supplied rules.

        The same fallbacker may be shared by any number of providers.

        Returns:
            Empty success, or DATA_MISSING_DATA_KEY if this provider is empty
        """
        match self._take():
            case BufferStore(inner):
                self._store = BufferStore(LocaleFallbackStore(inner, fallbacker))
                return Outcome.success()
            case _:
                return self._fallback_on_empty("enable_locale_fallback_with")

    @staticmethod
    def _fallback_on_empty(operation: str) -> Outcome[None]:
        logger.warning("%s called on an empty provider", operation)
        return Outcome.failure(error_kind_for(DataErrorKind.MISSING_DATA_KEY.into_error()))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def load(self, request: DataRequest) -> Outcome[DataResponse]:
        """Load and deserialize data for a request.

        Dispatches to the installed store. Never raises: every failure is
        reported as an ErrorKind.

        Args:
            request: Key and locale to load

        Returns:
            Outcome with the DataResponse, or the ErrorKind of the failure
        """
        match self._store:
            case BufferStore(inner):
                store = inner
            case _:
                store = _EMPTY_DATA_STORE
        try:
            response = deserialize(store.load_buffer(request), request.key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            if not request.metadata.silent:
                logger.debug("Load failed for %s: %s", request, e)
            return Outcome.failure(error_kind_for(e))
        return Outcome.success(response)

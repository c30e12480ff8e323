"""Fork stores: try one store, then another on selected failures.

A fork consults its first store and retries the next one only when the
failure matches its predicate. Every other failure is terminal and is
propagated unmodified. Retrying on arbitrary errors would hide real
failures (corrupt payloads, IO errors) behind data from another store.

Components:
    ForkPredicate - Protocol deciding whether a failure allows a retry
    MissingDataKeyPredicate - Retry when the key is unsupported
    MissingLocalePredicate - Retry when the locale is missing
    ForkByErrorStore - Two stores, retry on predicate match
    ForkByKeyStore - ForkByErrorStore retrying on missing keys
    MultiForkByErrorStore - N stores, retry on predicate match

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from localeprovider.errors.errors import DataError, DataErrorKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from localeprovider.provider.request import BufferResponse, DataRequest
    from localeprovider.provider.store import ResourceStore

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Predicates
    "ForkPredicate",
    "MissingDataKeyPredicate",
    "MissingLocalePredicate",
    # Stores
    "ForkByErrorStore",
    "ForkByKeyStore",
    "MultiForkByErrorStore",
]

logger = logging.getLogger(__name__)


class ForkPredicate(Protocol):
    """Decides whether a failure from one store allows trying the next."""

    def test(self, request: DataRequest, error: DataError) -> bool:
        """Return True to retry the request against the next store."""
        ...


class MissingDataKeyPredicate:
    """Retry when the store does not support the requested key."""

    __slots__ = ()

    def test(self, request: DataRequest, error: DataError) -> bool:  # noqa: ARG002
        return error.kind is DataErrorKind.MISSING_DATA_KEY

    def __repr__(self) -> str:
        return "MissingDataKeyPredicate()"


class MissingLocalePredicate:
    """Retry when the store has the key but not the requested locale."""

    __slots__ = ()

    def test(self, request: DataRequest, error: DataError) -> bool:  # noqa: ARG002
        return error.kind is DataErrorKind.MISSING_LOCALE

    def __repr__(self) -> str:
        return "MissingLocalePredicate()"


class ForkByErrorStore:
    """Store that tries ``first`` and, on a matching failure, ``second``.

    When the retry happens, the second store's result is returned as is,
    success or failure.
    """

    __slots__ = ("_first", "_predicate", "_second")

    def __init__(
        self,
        first: ResourceStore,
        second: ResourceStore,
        predicate: ForkPredicate,
    ) -> None:
        self._first = first
        self._second = second
        self._predicate = predicate

    @property
    def predicate(self) -> ForkPredicate:
        return self._predicate

    @property
    def stores(self) -> tuple[ResourceStore, ResourceStore]:
        """The two forked stores, in consultation order."""
        return (self._first, self._second)

    def load_buffer(self, request: DataRequest) -> BufferResponse:
        try:
            return self._first.load_buffer(request)
        except DataError as e:
            if not self._predicate.test(request, e):
                raise
            logger.debug("Fork retrying %s after %s", request, e.kind)
        return self._second.load_buffer(request)

    def __repr__(self) -> str:
        return f"ForkByErrorStore({self._first!r}, {self._second!r}, {self._predicate!r})"


def ForkByKeyStore(first: ResourceStore, second: ResourceStore) -> ForkByErrorStore:  # noqa: N802
    """Fork that tries ``second`` when ``first`` does not support the key."""
    return ForkByErrorStore(first, second, MissingDataKeyPredicate())


class MultiForkByErrorStore:
    """Store that tries each of several stores in turn.

    Moves to the next store only on a failure matching the predicate. If
    every store fails that way, the last store's error is raised.
    """

    __slots__ = ("_predicate", "_stores")

    def __init__(self, stores: Iterable[ResourceStore], predicate: ForkPredicate) -> None:
        """Initialize the fork.

        Args:
            stores: Stores in consultation order
            predicate: Failures allowing a retry

        Raises:
            ValueError: If stores is empty
        """
        self._stores: tuple[ResourceStore, ...] = tuple(stores)
        if not self._stores:
            msg = "MultiForkByErrorStore requires at least one store"
            raise ValueError(msg)
        self._predicate = predicate

    @property
    def stores(self) -> tuple[ResourceStore, ...]:
        return self._stores

    def push(self, store: ResourceStore) -> MultiForkByErrorStore:
        """Return a new fork with ``store`` consulted last."""
        return MultiForkByErrorStore((*self._stores, store), self._predicate)

    def load_buffer(self, request: DataRequest) -> BufferResponse:
        *head, last = self._stores
        for store in head:
            try:
                return store.load_buffer(request)
            except DataError as e:
                if not self._predicate.test(request, e):
                    raise
                logger.debug("Fork retrying %s after %s", request, e.kind)
        return last.load_buffer(request)

    def __repr__(self) -> str:
        return f"MultiForkByErrorStore({len(self._stores)} stores, {self._predicate!r})"

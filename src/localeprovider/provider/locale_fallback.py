"""Locale fallback store.

LocaleFallbackStore expands one request into the fallback candidates
produced by a LocaleFallbacker and returns the first candidate the inner
store can serve. Only MISSING_LOCALE moves on to the next candidate; every
other failure is propagated immediately.

load_fallback_rules() builds a LocaleFallbacker from rules a store embeds
under reserved keys, falling back to the default rules when the store has
none.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from localeprovider.constants import (
    FALLBACK_LIKELY_SUBTAGS_KEY_PATH,
    FALLBACK_PARENTS_KEY_PATH,
)
from localeprovider.errors.errors import DataError, DataErrorKind
from localeprovider.fallback import LocaleFallbacker
from localeprovider.provider.request import DataKey, DataRequest, DataRequestMetadata
from localeprovider.provider.store import deserialize

if TYPE_CHECKING:
    from localeprovider.provider.request import BufferResponse
    from localeprovider.provider.store import ResourceStore

__all__ = [
    "FALLBACK_LIKELY_SUBTAGS_KEY",
    "FALLBACK_PARENTS_KEY",
    "LocaleFallbackStore",
    "load_fallback_rules",
]

logger = logging.getLogger(__name__)

FALLBACK_PARENTS_KEY = DataKey(FALLBACK_PARENTS_KEY_PATH, singleton=True)
"""Embedded parent locale table: {"parents": {child: parent}}"""

FALLBACK_LIKELY_SUBTAGS_KEY = DataKey(FALLBACK_LIKELY_SUBTAGS_KEY_PATH, singleton=True)
"""Embedded likely scripts table: {"scripts": {language: script}}"""


class LocaleFallbackStore:
    """Store that retries requests along a locale fallback chain.

    The response metadata records the candidate locale that supplied the
    data. Singleton keys bypass fallback.
    """

    __slots__ = ("_fallbacker", "_inner")

    def __init__(self, inner: ResourceStore, fallbacker: LocaleFallbacker) -> None:
        self._inner = inner
        self._fallbacker = fallbacker

    @property
    def inner(self) -> ResourceStore:
        return self._inner

    @property
    def fallbacker(self) -> LocaleFallbacker:
        return self._fallbacker

    def load_buffer(self, request: DataRequest) -> BufferResponse:
        """Load the first available candidate.

        Raises:
            DataError: The first failure that is not MISSING_LOCALE, or
                MISSING_LOCALE for the original request if no candidate
                has data
        """
        if request.key.singleton:
            return self._inner.load_buffer(request)

        candidates = self._fallbacker.for_config(request.key.fallback_config)
        last_error: DataError | None = None
        for candidate in candidates.fallback_for(request.locale):
            try:
                response = self._inner.load_buffer(request.with_locale(candidate))
            except DataError as e:
                if e.kind is not DataErrorKind.MISSING_LOCALE:
                    raise
                logger.debug("No data for %s at %s, trying next candidate", request, candidate)
                last_error = e
                continue
            return response.with_locale(candidate)

        # The candidate sequence always yields at least the root locale
        error = last_error or DataErrorKind.MISSING_LOCALE.into_error()
        raise error.with_key(request.key).with_context(str(request.locale))

    def __repr__(self) -> str:
        return f"LocaleFallbackStore({self._inner!r})"


def load_fallback_rules(store: ResourceStore) -> LocaleFallbacker:
    """Build fallback rules for a store.

    Rules embedded in the store under the reserved fallback keys take
    precedence. If the store does not support those keys, the default
    rules are used (CLDR via Babel when installed).

    Args:
        store: Store that may embed fallback rules

    Returns:
        Fallback rules for the store

    Raises:
        DataError: If the embedded rules exist but cannot be loaded
        DataStructValidityError: If the embedded rules are malformed
    """
    parents = _load_rules_table(store, FALLBACK_PARENTS_KEY, "parents")
    if parents is None:
        return LocaleFallbacker.default()
    scripts = _load_rules_table(store, FALLBACK_LIKELY_SUBTAGS_KEY, "scripts") or {}
    fallbacker = LocaleFallbacker(parents=parents, likely_scripts=scripts)
    logger.debug("Using %d embedded fallback parents", fallbacker.parent_count)
    return fallbacker


def _load_rules_table(store: ResourceStore, key: DataKey, field: str) -> dict[str, str] | None:
    request = DataRequest(key, metadata=DataRequestMetadata(silent=True))
    try:
        response = deserialize(store.load_buffer(request), key)
    except DataError as e:
        if e.kind is DataErrorKind.MISSING_DATA_KEY:
            return None
        raise
    table = response.payload.get(field, {})
    if not isinstance(table, dict):
        raise DataError(
            DataErrorKind.MISMATCHED_TYPE,
            key=key,
            context=f"{field} must be an object",
        )
    return table

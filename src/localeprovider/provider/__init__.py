"""Provider package: stores, combinators, and the DataProvider handle.

Submodules:
    request         - DataKey, DataRequest, DataResponse and metadata types
    store           - ResourceStore protocol, EmptyDataStore, deserialize()
    blob            - BlobDataStore, BlobConfig, export_blob()
    fork            - Fork stores and their retry predicates
    locale_fallback - LocaleFallbackStore and embedded fallback rules
    handle          - DataProvider, Store variants, Outcome

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from localeprovider.provider.blob import BlobConfig, BlobDataStore, export_blob
from localeprovider.provider.fork import (
    ForkByErrorStore,
    ForkByKeyStore,
    ForkPredicate,
    MissingDataKeyPredicate,
    MissingLocalePredicate,
    MultiForkByErrorStore,
)
from localeprovider.provider.handle import (
    BufferStore,
    DataProvider,
    EmptyStore,
    Outcome,
    Store,
)
from localeprovider.provider.locale_fallback import LocaleFallbackStore, load_fallback_rules
from localeprovider.provider.request import (
    BufferResponse,
    DataKey,
    DataRequest,
    DataRequestMetadata,
    DataResponse,
    DataResponseMetadata,
)
from localeprovider.provider.store import EmptyDataStore, ResourceStore, deserialize

__all__ = [
    # Handle
    "DataProvider",
    "Outcome",
    "Store",
    "EmptyStore",
    "BufferStore",
    # Request model
    "DataKey",
    "DataRequest",
    "DataRequestMetadata",
    "DataResponse",
    "DataResponseMetadata",
    "BufferResponse",
    # Stores
    "ResourceStore",
    "EmptyDataStore",
    "BlobDataStore",
    "BlobConfig",
    "LocaleFallbackStore",
    "ForkByErrorStore",
    "ForkByKeyStore",
    "MultiForkByErrorStore",
    # Fork predicates
    "ForkPredicate",
    "MissingDataKeyPredicate",
    "MissingLocalePredicate",
    # Helpers
    "deserialize",
    "export_blob",
    "load_fallback_rules",
]

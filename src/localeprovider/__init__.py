"""localeprovider - pluggable loading of locale-keyed resource data.

Supplies structured, locale-keyed data to a consuming library from
interchangeable backing stores. Stores can be composed: forked by key or by
locale, and wrapped with locale fallback. Every failure is reported as one
member of a closed, stably coded ErrorKind enumeration.

Public API:
    DataProvider - Handle over the installed store; factories and combinators
    Outcome - Success value or ErrorKind, returned by every provider operation
    DataKey, DataRequest, DataResponse - Request/response model
    DataLocale - Locale identifiers for requests
    LocaleFallbacker - Reusable locale fallback rules
    export_blob - Build a blob readable by DataProvider.create_from_bytes

Exceptions:
    ProviderError - Raised by Outcome.unwrap() on failure

Submodules:
    localeprovider.errors - ErrorKind taxonomy, native errors, conversions
    localeprovider.provider - Stores, combinators, DataProvider
    localeprovider.fallback - Fallback rules and configuration
    localeprovider.locale - DataLocale parsing
"""

from .errors import ErrorKind, ProviderError
from .fallback import LocaleFallbackConfig, LocaleFallbacker
from .locale import DataLocale
from .provider import (
    DataKey,
    DataProvider,
    DataRequest,
    DataResponse,
    Outcome,
    ResourceStore,
    export_blob,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localeprovider")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DataKey",
    "DataLocale",
    "DataProvider",
    "DataRequest",
    "DataResponse",
    "ErrorKind",
    "LocaleFallbackConfig",
    "LocaleFallbacker",
    "Outcome",
    "ProviderError",
    "ResourceStore",
    "__version__",
    "export_blob",
]

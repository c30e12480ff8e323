"""Babel compatibility layer for optional dependency handling.

Provides centralized, lazy import infrastructure for Babel to ensure consistent
error messaging and import behavior across Babel-dependent code.

Design Rationale:
    localeprovider supports two installation modes:
    - Core: `pip install localeprovider` (no external dependencies)
    - CLDR fallback: `pip install localeprovider[babel]` (Babel supplies
      CLDR parent locales and likely scripts for locale fallback)

    This module ensures that:
    1. Core installations never trigger Babel imports
    2. CLDR-dependent code gets a consistent, helpful error when Babel is missing
    3. Babel types are available for TYPE_CHECKING without runtime import

Usage Pattern:
    from localeprovider.core.babel_compat import require_babel

    def my_function() -> None:
        require_babel("my_function")  # Raises ImportError if Babel missing
        from babel.core import get_global  # Safe to import Babel now
        ...

Python 3.13+.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "BabelImportError",
    "get_cldr_likely_subtags",
    "get_cldr_parent_exceptions",
    "is_babel_available",
    "require_babel",
]


@lru_cache(maxsize=1)
def _check_babel_available() -> bool:
    """Check if Babel is installed (computed once, cached via lru_cache)."""
    try:
        import babel  # noqa: F401, PLC0415  # pylint: disable=unused-import

        return True
    except ImportError:
        return False


class BabelImportError(ImportError):
    """Raised when Babel is required but not installed.

    Provides a consistent, helpful error message directing users to install
    the Babel dependency.
    """

    def __init__(self, feature: str) -> None:
        """Create error with feature-specific message.

        Args:
            feature: Name of the feature/function requiring Babel
        """
        message = (
            f"{feature} requires Babel for CLDR locale data. "
            "Install with: pip install localeprovider[babel]"
        )
        super().__init__(message)
        self.feature = feature


def is_babel_available() -> bool:
    """Check if Babel is installed.

    Uses cached result to avoid repeated import attempts.

    Returns:
        True if Babel is installed and importable, False otherwise.
    """
    return _check_babel_available()


def require_babel(feature: str) -> None:
    """Assert that Babel is available, raising BabelImportError if not.

    Args:
        feature: Name of the feature requiring Babel (for error message)

    Raises:
        BabelImportError: If Babel is not installed
    """
    if not _check_babel_available():
        raise BabelImportError(feature)


def get_cldr_parent_exceptions() -> Mapping[str, str]:
    """Get CLDR parent locale exceptions from Babel's global data.

    Keys and values use Babel's underscore form (e.g. ``"en_GB" -> "en_001"``).
    A value of ``"root"`` means the locale falls back directly to the root.

    Returns:
        Mapping of child locale to parent locale

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_cldr_parent_exceptions")
    from babel.core import get_global  # noqa: PLC0415

    return get_global("parent_exceptions")


def get_cldr_likely_subtags() -> Mapping[str, str]:
    """Get CLDR likely subtags from Babel's global data.

    Keys and values use Babel's underscore form (e.g. ``"sr" -> "sr_Cyrl_RS"``).

    Returns:
        Mapping of partial locale to maximized locale

    Raises:
        BabelImportError: If Babel is not installed
    """
    require_babel("get_cldr_likely_subtags")
    from babel.core import get_global  # noqa: PLC0415

    return get_global("likely_subtags")

"""Shared constants for localeprovider.

This module provides centralized configuration constants used across the
locale, fallback, and provider packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Locale limits: Subtag sizes for the BCP-47 subset accepted by DataLocale
- Fallback limits: Bounds for fallback candidate iteration
- Blob format: Header values and size limits for blob-backed stores
- Reserved keys: Data keys consulted by the provider layer itself

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale limits
    "UND",
    "MAX_SUBTAG_LENGTH",
    "MAX_VARIANTS",
    # Fallback limits
    "MAX_FALLBACK_STEPS",
    # Blob format
    "BLOB_MAGIC",
    "BLOB_VERSION",
    "DEFAULT_MAX_BLOB_SIZE",
    # Reserved keys
    "FALLBACK_PARENTS_KEY_PATH",
    "FALLBACK_LIKELY_SUBTAGS_KEY_PATH",
]

# ============================================================================
# LOCALE LIMITS
# ============================================================================

# The root locale. Every fallback chain terminates here.
UND: str = "und"

# Longest subtag allowed anywhere in a locale identifier.
# BCP-47 caps language, variant, and extension subtags at 8 characters.
MAX_SUBTAG_LENGTH: int = 8

# Variants beyond this count are rejected as malformed input.
MAX_VARIANTS: int = 8

# ============================================================================
# FALLBACK LIMITS
# ============================================================================

# Upper bound on candidates produced for one request locale.
# A well-formed parents table never produces chains longer than ~6 entries;
# a cyclic custom table would otherwise loop forever.
MAX_FALLBACK_STEPS: int = 32

# ============================================================================
# BLOB FORMAT
# ============================================================================

# Marker identifying a localeprovider blob. Blobs without it are rejected.
BLOB_MAGIC: str = "localeprovider-blob"

# Only this blob layout version is readable.
BLOB_VERSION: int = 1

# Default maximum blob size in bytes (64 MB).
# Prevents unbounded allocation when decoding untrusted blobs.
DEFAULT_MAX_BLOB_SIZE: int = 64 * 1024 * 1024

# ============================================================================
# RESERVED KEYS
# ============================================================================

# Fallback rules a blob may embed (loaded at locale "und").
# Consulted by DataProvider.enable_locale_fallback() before CLDR data.
FALLBACK_PARENTS_KEY_PATH: str = "fallback/parents@1"
FALLBACK_LIKELY_SUBTAGS_KEY_PATH: str = "fallback/likelysubtags@1"

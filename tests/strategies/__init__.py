"""Hypothesis strategies for localeprovider property-based testing.

This package provides reusable strategies for generating test data
across multiple test modules. Strategies are organized by domain:

- locales: Locale codes, extension subtags, fallback parent tables
- provider: Data key paths, resource tables, corrupted blobs

Usage:
    from tests.strategies import locale_codes, resource_tables
    from tests.strategies.provider import corrupted_blobs

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - locale_codes, locale_codes_with_extensions, parent_tables
    - resource_tables, corrupted_blobs
"""

from .locales import locale_codes, locale_codes_with_extensions, parent_tables
from .provider import corrupted_blobs, key_paths, payload_values, resource_tables

__all__ = [
    "corrupted_blobs",
    "key_paths",
    "locale_codes",
    "locale_codes_with_extensions",
    "parent_tables",
    "payload_values",
    "resource_tables",
]

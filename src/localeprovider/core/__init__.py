"""Core utilities shared across the locale, fallback, and provider layers.

By isolating these utilities here, we maintain a clean dependency graph:

    errors <- core <- locale <- fallback <- provider

Exports:
    ShortString: Validated fixed-capacity ASCII string
    BabelImportError: Raised when CLDR data is needed but Babel is missing
    is_babel_available: Check for the optional Babel dependency

Python 3.13+.
"""

from .babel_compat import BabelImportError, is_babel_available
from .short_string import ShortString

__all__ = ["BabelImportError", "ShortString", "is_babel_available"]

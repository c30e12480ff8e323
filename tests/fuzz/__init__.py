"""Fuzz testing infrastructure for localeprovider.

This package contains:
- test_provider_fuzz: Arbitrary blobs, locale strings, and combinator
  sequences driven through the DataProvider boundary

Python 3.13+.
"""

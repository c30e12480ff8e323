"""Fixed-capacity ASCII strings used for locale subtags.

Locale subtags (language, script, region, variants, extension values) are
short ASCII strings with a hard capacity. ShortString validates that once
at construction so the rest of the package can treat subtags as trusted.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from localeprovider.constants import MAX_SUBTAG_LENGTH
from localeprovider.errors.errors import ShortStringError, ShortStringErrorKind

__all__ = ["ShortString"]


@dataclass(frozen=True, slots=True)
class ShortString:
    """Validated ASCII string of bounded length.

    Construct with try_from_str(); the dataclass constructor does not
    validate.

    Example:
        >>> ShortString.try_from_str("Latn").value
        'Latn'
        >>> ShortString.try_from_str("Łatn")
        Traceback (most recent call last):
        ...
        localeprovider.errors.errors.ShortStringError: String rejected: non_ascii

    Attributes:
        value: The validated string
    """

    value: str

    @classmethod
    def try_from_str(cls, text: str, max_length: int = MAX_SUBTAG_LENGTH) -> ShortString:
        """Validate and wrap a string.

        Checks run in order: length, NUL characters, ASCII.

        Args:
            text: Candidate string
            max_length: Capacity in characters

        Returns:
            ShortString wrapping text

        Raises:
            ShortStringError: If text is too long, contains NUL, or is not ASCII
        """
        if len(text) > max_length:
            raise ShortStringError(
                ShortStringErrorKind.TOO_LARGE,
                max_length=max_length,
                actual_length=len(text),
            )
        if "\x00" in text:
            raise ShortStringError(
                ShortStringErrorKind.CONTAINS_NULL,
                max_length=max_length,
                actual_length=len(text),
            )
        if not text.isascii():
            raise ShortStringError(
                ShortStringErrorKind.NON_ASCII,
                max_length=max_length,
                actual_length=len(text),
            )
        return cls(text)

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)

    def is_alpha(self) -> bool:
        """Check if every character is an ASCII letter."""
        return self.value.isalpha()

    def is_numeric(self) -> bool:
        """Check if every character is an ASCII digit."""
        return self.value.isdigit()

    def is_alphanumeric(self) -> bool:
        """Check if every character is an ASCII letter or digit."""
        return self.value.isalnum()

    def to_lower(self) -> ShortString:
        """Return a lowercased copy."""
        return ShortString(self.value.lower())

    def to_upper(self) -> ShortString:
        """Return an uppercased copy."""
        return ShortString(self.value.upper())

    def to_title(self) -> ShortString:
        """Return a copy with the first letter uppercased and the rest lowercased."""
        return ShortString(self.value[:1].upper() + self.value[1:].lower())

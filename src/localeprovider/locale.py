"""Locale identifiers for data requests.

DataLocale is the locale carried by every DataRequest. It understands the
BCP-47 subset relevant to data selection:

    language[-script][-region][-variant]*[-u-key-value...][-x-aux...]

Underscores are accepted as separators so POSIX/Babel style codes
("en_US") parse the same as BCP-47 ("en-US"). Parsed locales are kept in
canonical case, so equal locales compare and hash equal regardless of
input spelling.

The private-use ("-x-") subtags carry auxiliary selection attributes: they
select a variant of the data (e.g. "short" month names) and are preserved
unchanged throughout locale fallback.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from localeprovider.constants import MAX_VARIANTS, UND
from localeprovider.core.short_string import ShortString
from localeprovider.errors.errors import (
    LocaleParseError,
    ParserErrorKind,
    UndefinedSubtagError,
)

__all__ = ["DataLocale", "normalize_locale"]


def _is_language(subtag: ShortString) -> bool:
    return subtag.is_alpha() and (2 <= len(subtag) <= 3 or 5 <= len(subtag) <= 8)


def _is_script(subtag: ShortString) -> bool:
    return len(subtag) == 4 and subtag.is_alpha()


def _is_region(subtag: ShortString) -> bool:
    return (len(subtag) == 2 and subtag.is_alpha()) or (len(subtag) == 3 and subtag.is_numeric())


def _is_variant(subtag: ShortString) -> bool:
    if not subtag.is_alphanumeric():
        return False
    if 5 <= len(subtag) <= 8:
        return True
    return len(subtag) == 4 and subtag.value[0].isdigit()


def _is_keyword_key(subtag: ShortString) -> bool:
    return len(subtag) == 2 and subtag.is_alphanumeric() and subtag.value[1].isalpha()


def _is_keyword_value(subtag: ShortString) -> bool:
    return 3 <= len(subtag) <= 8 and subtag.is_alphanumeric()


def _is_private_use(subtag: ShortString) -> bool:
    return 1 <= len(subtag) <= 8 and subtag.is_alphanumeric()


@dataclass(frozen=True, slots=True)
class DataLocale:
    """Locale used to select localized data.

    Immutable and hashable. Construct via parse() or und(); the dataclass
    constructor trusts its arguments to be canonical.

    Example:
        >>> loc = DataLocale.parse("zh_hant_tw")
        >>> str(loc)
        'zh-Hant-TW'
        >>> str(DataLocale.parse("en-US-u-ca-buddhist-x-short"))
        'en-US-u-ca-buddhist-x-short'

    Attributes:
        language: Lowercase language subtag ("und" for the root locale)
        script: Titlecase script subtag, if any
        region: Uppercase region subtag, if any
        variants: Lowercase variant subtags in input order
        keywords: Unicode extension keywords as sorted (key, value) pairs
        aux: Private-use subtags selecting a data variant
    """

    language: str = UND
    script: str | None = None
    region: str | None = None
    variants: tuple[str, ...] = ()
    keywords: tuple[tuple[str, str], ...] = ()
    aux: tuple[str, ...] = ()

    @classmethod
    def und(cls) -> DataLocale:
        """The root locale."""
        return cls()

    @classmethod
    def parse(cls, locale_code: str) -> DataLocale:
        """Parse a locale identifier.

        Args:
            locale_code: BCP-47 or POSIX style identifier (e.g. "de-CH", "sr_Latn")

        Returns:
            DataLocale in canonical form

        Raises:
            ShortStringError: If a subtag is longer than 8 characters,
                contains NUL, or is not ASCII
            LocaleParseError: If the identifier is not well formed
        """
        if not locale_code:
            raise LocaleParseError(ParserErrorKind.INVALID_LANGUAGE, locale_code, "empty")

        parts = [ShortString.try_from_str(p) for p in locale_code.replace("_", "-").split("-")]
        if any(len(p) == 0 for p in parts):
            raise LocaleParseError(ParserErrorKind.INVALID_SUBTAG, locale_code, "empty subtag")

        first = parts[0].to_lower()
        if first.value == "root":
            first = ShortString(UND)
        if not _is_language(first):
            raise LocaleParseError(ParserErrorKind.INVALID_LANGUAGE, locale_code, first.value)

        index = 1
        script: str | None = None
        region: str | None = None
        if index < len(parts) and _is_script(parts[index]):
            script = parts[index].to_title().value
            index += 1
        if index < len(parts) and _is_region(parts[index]):
            region = parts[index].to_upper().value
            index += 1

        variants: list[str] = []
        while index < len(parts) and _is_variant(parts[index]):
            variant = parts[index].to_lower().value
            if variant in variants:
                raise LocaleParseError(
                    ParserErrorKind.INVALID_SUBTAG, locale_code, f"duplicate variant {variant}"
                )
            variants.append(variant)
            index += 1
        if len(variants) > MAX_VARIANTS:
            raise LocaleParseError(ParserErrorKind.INVALID_SUBTAG, locale_code, "too many variants")

        keywords, aux = cls._parse_extensions(locale_code, [p.to_lower() for p in parts[index:]])

        return cls(
            language=first.value,
            script=script,
            region=region,
            variants=tuple(variants),
            keywords=keywords,
            aux=aux,
        )

    @staticmethod
    def _parse_extensions(
        locale_code: str,
        parts: list[ShortString],
    ) -> tuple[tuple[tuple[str, str], ...], tuple[str, ...]]:
        """Parse the "-u-" and "-x-" sections following the variants."""
        keywords: dict[str, str] = {}
        aux: list[str] = []
        seen_unicode = False
        index = 0
        while index < len(parts):
            singleton = parts[index].value
            index += 1
            match singleton:
                case "x":
                    aux = [p.value for p in parts[index:]]
                    if not aux or not all(_is_private_use(p) for p in parts[index:]):
                        raise LocaleParseError(
                            ParserErrorKind.INVALID_EXTENSION, locale_code, "private use"
                        )
                    index = len(parts)
                case "u":
                    if seen_unicode:
                        raise LocaleParseError(
                            ParserErrorKind.DUPLICATED_EXTENSION, locale_code, "u"
                        )
                    seen_unicode = True
                    if index >= len(parts) or not _is_keyword_key(parts[index]):
                        raise LocaleParseError(
                            ParserErrorKind.INVALID_EXTENSION, locale_code, "u"
                        )
                    while index < len(parts) and _is_keyword_key(parts[index]):
                        key = parts[index].value
                        index += 1
                        values: list[str] = []
                        while index < len(parts) and _is_keyword_value(parts[index]):
                            values.append(parts[index].value)
                            index += 1
                        if key in keywords:
                            raise LocaleParseError(
                                ParserErrorKind.DUPLICATED_EXTENSION, locale_code, key
                            )
                        keywords[key] = "-".join(values) if values else "true"
                case _ if len(singleton) == 1:
                    raise LocaleParseError(
                        ParserErrorKind.INVALID_EXTENSION, locale_code, singleton
                    )
                case _:
                    raise LocaleParseError(ParserErrorKind.INVALID_SUBTAG, locale_code, singleton)
        return tuple(sorted(keywords.items())), tuple(aux)

    def __str__(self) -> str:
        parts = [self.language]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        parts.extend(self.variants)
        if self.keywords:
            parts.append("u")
            for key, value in self.keywords:
                parts.append(key)
                if value != "true":
                    parts.append(value)
        if self.aux:
            parts.append("x")
            parts.extend(self.aux)
        return "-".join(parts)

    @property
    def is_und(self) -> bool:
        """Check if this is exactly the root locale (no subtags or extensions)."""
        return self == DataLocale()

    @property
    def is_langid_und(self) -> bool:
        """Check if language, script, region, and variants are all unset."""
        return (
            self.language == UND
            and self.script is None
            and self.region is None
            and not self.variants
        )

    def require_script(self) -> str:
        """Get the script subtag.

        Raises:
            UndefinedSubtagError: If no script is set
        """
        if self.script is None:
            raise UndefinedSubtagError("script", str(self))
        return self.script

    def require_region(self) -> str:
        """Get the region subtag.

        Raises:
            UndefinedSubtagError: If no region is set
        """
        if self.region is None:
            raise UndefinedSubtagError("region", str(self))
        return self.region

    def get_keyword(self, key: str) -> str | None:
        """Get a Unicode extension keyword value, if present."""
        for k, v in self.keywords:
            if k == key:
                return v
        return None

    def langid(self) -> str:
        """Language identifier without extensions or aux subtags."""
        return str(replace(self, keywords=(), aux=()))

    def with_language(self, language: str) -> DataLocale:
        return replace(self, language=language)

    def with_script(self, script: str | None) -> DataLocale:
        return replace(self, script=script)

    def with_region(self, region: str | None) -> DataLocale:
        return replace(self, region=region)

    def with_aux(self, aux: tuple[str, ...]) -> DataLocale:
        return replace(self, aux=aux)

    def without_variants(self) -> DataLocale:
        return replace(self, variants=())

    def without_extensions(self) -> DataLocale:
        return replace(self, keywords=())

    def retain_keyword(self, key: str | None) -> DataLocale:
        """Drop every Unicode extension keyword except ``key``."""
        return replace(self, keywords=tuple((k, v) for k, v in self.keywords if k == key))


def normalize_locale(locale_code: str) -> str:
    """Convert a locale code to canonical BCP-47 form.

    Args:
        locale_code: BCP-47 or POSIX style identifier

    Returns:
        Canonical identifier (e.g. "en_us" -> "en-US")

    Raises:
        ShortStringError: If a subtag is not a valid short string
        LocaleParseError: If the identifier is not well formed

    Example:
        >>> normalize_locale("pt_br")
        'pt-BR'
        >>> normalize_locale("root")
        'und'
    """
    return str(DataLocale.parse(locale_code))

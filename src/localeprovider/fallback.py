"""Locale fallback rules.

Given a requested locale, produces the ordered sequence of progressively
less specific locales to try when data for the requested locale is
missing. The sequence is lazy, finite, free of duplicates, and always ends
with the root locale ("und", keeping any auxiliary subtags).

Components:
    LocaleFallbackConfig - Immutable per-key fallback configuration
    LocaleFallbacker - Reusable fallback rules (parent locales, likely scripts)
    LocaleFallbackerWithConfig - Rules bound to a configuration

A LocaleFallbacker is immutable after construction and may be shared
across threads and across many providers.

Algorithm (language priority, the default):
    1. Drop Unicode extension keywords other than the configured one
    2. Drop variants
    3. Drop the configured extension keyword
    4. Follow the parent locale table, if the locale has an entry
    5. Otherwise drop the region
    6. Otherwise drop the script if it is the language's likely script,
       else jump to the root
    7. Root

Region priority keeps the region and sheds the language instead:
    de-CH -> und-CH -> und

Python 3.13+. Babel optional (CLDR rules via LocaleFallbacker.from_cldr()).
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from localeprovider.constants import MAX_FALLBACK_STEPS, UND
from localeprovider.core.babel_compat import (
    get_cldr_likely_subtags,
    get_cldr_parent_exceptions,
    is_babel_available,
)
from localeprovider.enums import FallbackPriority
from localeprovider.errors.errors import (
    DataStructValidityError,
    LocaleParseError,
    ShortStringError,
)
from localeprovider.locale import DataLocale

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

__all__ = [
    "LocaleFallbackConfig",
    "LocaleFallbacker",
    "LocaleFallbackerWithConfig",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocaleFallbackConfig:
    """Configuration for one fallback iteration.

    Attributes:
        priority: Whether the language or the region is retained longest
        extension_key: Unicode extension keyword (e.g. "ca") kept after
            all other keywords have been dropped
    """

    priority: FallbackPriority = FallbackPriority.LANGUAGE
    extension_key: str | None = None

    def __post_init__(self) -> None:
        """Validate the extension key.

        Raises:
            ValueError: If extension_key is not a two-character keyword key
        """
        if self.extension_key is not None:
            key = self.extension_key
            if len(key) != 2 or not key.isascii() or not key.isalnum() or not key[1].isalpha():
                msg = f"extension_key must be a two-character keyword key, got: {key!r}"
                raise ValueError(msg)
            if key != key.lower():
                msg = f"extension_key must be lowercase, got: {key!r}"
                raise ValueError(msg)


class LocaleFallbacker:
    """Reusable locale fallback rules.

    Example:
        >>> fallbacker = LocaleFallbacker(parents={"es-MX": "es-419"})
        >>> chain = fallbacker.for_config(LocaleFallbackConfig()).fallback_for(
        ...     DataLocale.parse("es-MX"))
        >>> [str(loc) for loc in chain]
        ['es-MX', 'es-419', 'es', 'und']
    """

    __slots__ = ("_likely_scripts", "_parents")

    def __init__(
        self,
        parents: Mapping[str, str] | None = None,
        likely_scripts: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize fallback rules.

        Args:
            parents: Child language identifier -> parent language identifier.
                A parent of "und" (or "root") sends the child straight to the root.
            likely_scripts: Language subtag -> its default script (e.g. "sr" -> "Cyrl")

        Raises:
            DataStructValidityError: If an entry is not a valid language identifier
        """
        self._parents: dict[DataLocale, DataLocale] = {}
        for child, parent in (parents or {}).items():
            child_locale = self._parse_langid(child)
            self._parents[child_locale] = self._parse_langid(parent)

        self._likely_scripts: dict[str, str] = {}
        for language, script in (likely_scripts or {}).items():
            parsed = self._parse_langid(f"{language}-{script}")
            if parsed.script is None or parsed.region is not None or parsed.variants:
                msg = f"Invalid likely script entry: {language!r} -> {script!r}"
                raise DataStructValidityError(msg)
            self._likely_scripts[parsed.language] = parsed.script

    @staticmethod
    def _parse_langid(code: object) -> DataLocale:
        if not isinstance(code, str):
            msg = f"Fallback rule entries must be strings, got {type(code).__name__}"
            raise DataStructValidityError(msg)
        try:
            parsed = DataLocale.parse(code)
        except (LocaleParseError, ShortStringError) as e:
            msg = f"Invalid locale in fallback rules: {code!r}"
            raise DataStructValidityError(msg) from e
        if parsed.keywords or parsed.aux:
            msg = f"Fallback rules must use bare language identifiers, got: {code!r}"
            raise DataStructValidityError(msg)
        return parsed

    @classmethod
    def structural(cls) -> LocaleFallbacker:
        """Rules with no locale data: fallback by truncation only."""
        return cls()

    @classmethod
    def from_cldr(cls) -> LocaleFallbacker:
        """Rules built from CLDR data shipped with Babel.

        The instance is built once and shared.

        Raises:
            BabelImportError: If Babel is not installed
        """
        return _cldr_fallbacker()

    @classmethod
    def default(cls) -> LocaleFallbacker:
        """CLDR rules when Babel is installed, structural rules otherwise."""
        if is_babel_available():
            return cls.from_cldr()
        logger.debug("Babel not installed; using structural locale fallback")
        return cls.structural()

    @property
    def parent_count(self) -> int:
        """Number of parent locale entries."""
        return len(self._parents)

    def parent_of(self, locale: DataLocale) -> DataLocale | None:
        """Get the explicit parent of a language identifier, if any."""
        return self._parents.get(
            DataLocale(locale.language, locale.script, locale.region, locale.variants)
        )

    def likely_script(self, language: str) -> str | None:
        """Get the default script for a language, if known."""
        return self._likely_scripts.get(language)

    def for_config(self, config: LocaleFallbackConfig) -> LocaleFallbackerWithConfig:
        """Bind these rules to a configuration."""
        return LocaleFallbackerWithConfig(self, config)


class LocaleFallbackerWithConfig:
    """Fallback rules bound to one configuration."""

    __slots__ = ("_config", "_fallbacker")

    def __init__(self, fallbacker: LocaleFallbacker, config: LocaleFallbackConfig) -> None:
        self._fallbacker = fallbacker
        self._config = config

    @property
    def config(self) -> LocaleFallbackConfig:
        return self._config

    def fallback_for(self, locale: DataLocale) -> Iterator[DataLocale]:
        """Yield fallback candidates for a locale, most specific first.

        The first candidate is the request locale itself. When it carries a
        redundant default script, the same locale without that script comes
        next. The last candidate is the root locale carrying the
        request's auxiliary subtags.

        Args:
            locale: Requested locale

        Yields:
            Candidate locales, without duplicates
        """
        root = DataLocale(aux=locale.aux)
        current = self._normalize(locale)
        seen: set[DataLocale] = set()
        if current != locale:
            seen.add(locale)
            yield locale
        for _ in range(MAX_FALLBACK_STEPS):
            if current not in seen:
                seen.add(current)
                yield current
            if current == root:
                return
            current = self._step(current, root)
        if root not in seen:
            logger.debug("Fallback for %s truncated after %d steps", locale, MAX_FALLBACK_STEPS)
            yield root

    def _normalize(self, locale: DataLocale) -> DataLocale:
        if locale.script is not None:
            likely = self._fallbacker.likely_script(locale.language)
            if likely == locale.script:
                return locale.with_script(None)
        return locale

    def _step(self, locale: DataLocale, root: DataLocale) -> DataLocale:
        extension_key = self._config.extension_key
        if any(key != extension_key for key, _ in locale.keywords):
            return locale.retain_keyword(extension_key)
        if locale.variants:
            return locale.without_variants()
        if locale.keywords:
            return locale.without_extensions()

        match self._config.priority:
            case FallbackPriority.REGION:
                return self._step_region(locale, root)
            case _:
                return self._step_language(locale, root)

    def _step_language(self, locale: DataLocale, root: DataLocale) -> DataLocale:
        parent = self._fallbacker.parent_of(locale)
        if parent is not None:
            return replace(
                locale,
                language=parent.language,
                script=parent.script,
                region=parent.region,
                variants=parent.variants,
            )
        if locale.region is not None:
            return locale.with_region(None)
        if locale.script is not None:
            if self._fallbacker.likely_script(locale.language) == locale.script:
                return locale.with_script(None)
            return root
        return root

    @staticmethod
    def _step_region(locale: DataLocale, root: DataLocale) -> DataLocale:
        if locale.region is not None and (locale.language != UND or locale.script is not None):
            return DataLocale(region=locale.region, aux=locale.aux)
        return root


@functools.lru_cache(maxsize=1)
def _cldr_fallbacker() -> LocaleFallbacker:
    """Build CLDR fallback rules from Babel's global data (cached)."""
    parents: dict[str, str] = {}
    for child, parent in get_cldr_parent_exceptions().items():
        if _is_parsable(child) and (parent == "root" or _is_parsable(parent)):
            parents[child] = parent
        else:
            logger.debug("Skipping CLDR parent entry %s -> %s", child, parent)

    likely_scripts: dict[str, str] = {}
    for partial, maximized in get_cldr_likely_subtags().items():
        if "_" in partial or partial == UND or not _is_parsable(maximized):
            continue
        script = DataLocale.parse(maximized).script
        if script is not None and _is_parsable(partial):
            likely_scripts[DataLocale.parse(partial).language] = script

    fallbacker = LocaleFallbacker(parents=parents, likely_scripts=likely_scripts)
    logger.info(
        "Loaded CLDR fallback rules: %d parents, %d likely scripts",
        len(parents),
        len(likely_scripts),
    )
    return fallbacker


def _is_parsable(code: str) -> bool:
    try:
        parsed = DataLocale.parse(code)
    except (LocaleParseError, ShortStringError):
        return False
    return not parsed.keywords and not parsed.aux

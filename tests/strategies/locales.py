"""Hypothesis strategies for DataLocale and fallback property-based testing.

Provides reusable strategies for generating locale test data:
- Well-formed locale codes built from valid subtags
- Locale codes with extension keywords and aux subtags
- Fallback rules (parent tables) including cyclic ones

Event-Emitting Strategies (HypoFuzz-Optimized):
- locale_codes: Emits locale_shape=lang|lang_script|lang_region|full
- locale_codes_with_extensions: Emits locale_ext=keywords|aux|both
- parent_tables: Emits parent_table=acyclic|cyclic

Python 3.13+.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn

_LANGUAGES = ["en", "de", "fr", "es", "pt", "zh", "sr", "lv", "lt", "ja", "yue", "und"]
_SCRIPTS = ["Latn", "Cyrl", "Hans", "Hant", "Arab"]
_REGIONS = ["US", "GB", "DE", "CH", "AT", "MX", "BR", "TW", "419", "001"]
_VARIANTS = ["valencia", "posix", "1996", "fonipa"]
_KEYWORD_KEYS = ["ca", "nu", "hc", "co"]
_KEYWORD_VALUES = ["buddhist", "latn", "h12", "phonebk", "gregory"]
_AUX = ["short", "narrow", "wide", "x1"]


@st.composite
def locale_codes(draw: DrawFn) -> str:
    """Generate well-formed language identifiers (no extensions).

    Separators are drawn from "-" and "_", case is randomized.

    Events emitted:
    - locale_shape=lang|lang_script|lang_region|full
    """
    language = draw(st.sampled_from(_LANGUAGES))
    script = draw(st.none() | st.sampled_from(_SCRIPTS))
    region = draw(st.none() | st.sampled_from(_REGIONS))
    variant = draw(st.none() | st.sampled_from(_VARIANTS))

    match (script is not None, region is not None):
        case (False, False):
            shape = "lang"
        case (True, False):
            shape = "lang_script"
        case (False, True):
            shape = "lang_region"
        case _:
            shape = "full"
    event(f"locale_shape={shape}")

    parts = [p for p in (language, script, region, variant) if p is not None]
    parts = [p.upper() if draw(st.booleans()) else p for p in parts]
    separator = draw(st.sampled_from(["-", "_"]))
    return separator.join(parts)


@st.composite
def locale_codes_with_extensions(draw: DrawFn) -> str:
    """Generate locale codes carrying -u- keywords, -x- aux subtags, or both.

    Events emitted:
    - locale_ext=keywords|aux|both
    """
    base = draw(locale_codes()).replace("_", "-")
    keys = draw(st.lists(st.sampled_from(_KEYWORD_KEYS), min_size=0, max_size=3, unique=True))
    aux = draw(st.lists(st.sampled_from(_AUX), min_size=0, max_size=2))
    if not keys and not aux:
        keys = ["ca"]

    event(f"locale_ext={'both' if keys and aux else 'keywords' if keys else 'aux'}")

    parts = [base]
    if keys:
        parts.append("u")
        for key in keys:
            parts.extend([key, draw(st.sampled_from(_KEYWORD_VALUES))])
    if aux:
        parts.append("x")
        parts.extend(aux)
    return "-".join(parts)


@st.composite
def parent_tables(draw: DrawFn) -> dict[str, str]:
    """Generate parent locale tables for LocaleFallbacker.

    Events emitted:
    - parent_table=acyclic|cyclic
    """
    children = draw(
        st.lists(st.sampled_from(["es-MX", "es-AR", "en-GB", "en-AU", "pt-AO"]), unique=True)
    )
    parents = st.sampled_from(["es-419", "en-001", "pt-PT", "und"])
    table = {child: draw(parents) for child in children}
    if draw(st.booleans()):
        table["en-001"] = "en-150"
        table["en-150"] = "en-001"
        event("parent_table=cyclic")
    else:
        event("parent_table=acyclic")
    return table

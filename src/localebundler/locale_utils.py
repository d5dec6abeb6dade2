"""Locale decomposition into fallback hierarchy parts.

Centralizes locale identifier parsing used throughout the codebase. A locale
maps to the ordered set of hierarchy parts whose data the runtime layers,
least specific first, so that more specific parts override general ones:

    root            generic data shared by every locale
    en              language-specific data (date formats, ...)
    zh-Hant         language + script
    zh-Hant-TW      language + script + region
    en-US           language + region
    und-US          region-specific data shared by all languages (currency, ...)

Parsing is delegated to Babel so identifiers are normalized the same way as
CLDR data (lowercase language, titlecase script, uppercase region).

Python 3.13+.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

from localebundler.constants import ROOT_PART, UNDETERMINED_LANGUAGE, WILDCARD_LOCALE
from localebundler.types import LocaleCode, PartKey

__all__ = [
    "LocaleTag",
    "charset_key",
    "decompose",
    "likely_script",
    "part_directory",
]


@dataclass(frozen=True, slots=True)
class LocaleTag:
    """Structured locale identifier.

    Attributes:
        language: Lowercase language subtag (e.g., 'zh')
        script: Titlecase script subtag (e.g., 'Hant'), if present
        region: Uppercase region subtag (e.g., 'TW'), if present
    """

    language: str
    script: str | None = None
    region: str | None = None

    @classmethod
    def parse(cls, identifier: LocaleCode) -> LocaleTag | None:
        """Parse a hyphenated (or underscored) locale identifier.

        Args:
            identifier: Locale identifier (e.g., 'zh-Hant-TW', 'en_US')

        Returns:
            Parsed LocaleTag, or None when the identifier is empty or invalid

        Example:
            >>> LocaleTag.parse("zh-hant-tw")
            LocaleTag(language='zh', script='Hant', region='TW')
            >>> LocaleTag.parse("") is None
            True
        """
        # Lazy import: Babel loads CLDR data at import time; defer until needed
        from babel.core import parse_locale  # noqa: PLC0415

        if not identifier or not isinstance(identifier, str):
            return None
        try:
            parts = parse_locale(identifier.strip().replace("_", "-"), sep="-")
        except ValueError:
            return None
        language, region, script = parts[0], parts[1], parts[2]
        return cls(language=language, script=script, region=region)

    @property
    def lang_script(self) -> str:
        """Language with optional script, e.g. 'zh-Hant' or 'en'."""
        return f"{self.language}-{self.script}" if self.script else self.language


@functools.lru_cache(maxsize=512)
def decompose(identifier: LocaleCode) -> tuple[PartKey, ...]:
    """Decompose a locale identifier into hierarchy part keys.

    Parts are ordered most-general first. Script parts are included only
    when a script subtag is present; region parts only when a region is
    present. Never raises: empty, invalid and wildcard identifiers yield
    the root part alone.

    Pure function; results are cached.

    Args:
        identifier: Locale identifier (e.g., 'zh-Hant-TW')

    Returns:
        Tuple of part keys

    Example:
        >>> decompose("en-US")
        ('root', 'en', 'en-US', 'und-US')
        >>> decompose("zh-Hant-TW")
        ('root', 'zh', 'zh-Hant', 'zh-Hant-TW', 'zh-TW', 'und-TW')
    """
    if identifier == WILDCARD_LOCALE:
        return (ROOT_PART,)
    tag = LocaleTag.parse(identifier)
    if tag is None:
        return (ROOT_PART,)

    parts = [ROOT_PART, tag.language]
    if tag.script:
        parts.append(f"{tag.language}-{tag.script}")
        if tag.region:
            parts.append(f"{tag.language}-{tag.script}-{tag.region}")
    if tag.region:
        parts.append(f"{tag.language}-{tag.region}")
        parts.append(f"{UNDETERMINED_LANGUAGE}-{tag.region}")
    # und-<region> input would otherwise repeat the region-only part
    return tuple(dict.fromkeys(parts))


def part_directory(part: PartKey) -> str:
    """Return the repository-relative directory holding a part's documents.

    Example:
        >>> part_directory("root")
        ''
        >>> part_directory("und-US")
        'und/US'
    """
    if part == ROOT_PART:
        return ""
    return part.replace("-", "/")


def charset_key(identifier: LocaleCode) -> str | None:
    """Return the language[-script] key used by the language-to-charset table.

    The wildcard locale maps to itself so that globally applicable charsets
    can be requested.

    Returns:
        'language' or 'language-script', or None for unparsable identifiers
    """
    if identifier == WILDCARD_LOCALE:
        return WILDCARD_LOCALE
    tag = LocaleTag.parse(identifier)
    return tag.lang_script if tag is not None else None


@functools.lru_cache(maxsize=512)
def likely_script(identifier: LocaleCode) -> str | None:
    """Return the writing script a locale is most likely written in.

    An explicit script subtag wins. Otherwise CLDR likely subtags are
    consulted for language+region, then language, then the region alone.

    Args:
        identifier: Locale identifier (e.g., 'zh-TW')

    Returns:
        ISO 15924 script code (e.g., 'Hant'), or None if unknown

    Example:
        >>> likely_script("zh-TW")
        'Hant'
        >>> likely_script("sr")
        'Cyrl'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel.core import get_global, parse_locale  # noqa: PLC0415

    tag = LocaleTag.parse(identifier)
    if tag is None:
        return None
    if tag.script:
        return tag.script

    likely_subtags = get_global("likely_subtags")
    candidates = []
    if tag.region:
        candidates.append(f"{tag.language}_{tag.region}")
    candidates.append(tag.language)
    if tag.region:
        candidates.append(f"{UNDETERMINED_LANGUAGE}_{tag.region}")

    for key in candidates:
        expanded = likely_subtags.get(key)
        if not expanded:
            continue
        try:
            script = parse_locale(expanded)[2]
        except ValueError:
            continue
        if script:
            return script
    return None

"""Tests for locale_utils.py: parsing, decomposition and likely scripts.

Includes property-based tests with Hypothesis for decomposition shape.

Python 3.13+.
"""

from hypothesis import event, given
from hypothesis import strategies as st

from localebundler.locale_utils import (
    LocaleTag,
    charset_key,
    decompose,
    likely_script,
    part_directory,
)

# Well-formed identifiers: language, optional titlecase script, optional region
_languages = st.sampled_from(["en", "fr", "zh", "sr", "de", "ja"])
_scripts = st.sampled_from([None, "Latn", "Hans", "Hant", "Cyrl"])
_regions = st.sampled_from([None, "US", "GB", "TW", "FR", "RS", "CN"])


@st.composite
def locale_identifiers(draw: st.DrawFn) -> tuple[str, str, str | None, str | None]:
    language = draw(_languages)
    script = draw(_scripts)
    region = draw(_regions)
    identifier = "-".join(p for p in (language, script, region) if p)
    return identifier, language, script, region


class TestLocaleTagParse:
    """Test LocaleTag.parse normalization."""

    def test_language_only(self) -> None:
        """Bare language parses with no script or region."""
        assert LocaleTag.parse("fr") == LocaleTag("fr")

    def test_language_region(self) -> None:
        """Language and region are split."""
        assert LocaleTag.parse("en-US") == LocaleTag("en", None, "US")

    def test_full_identifier_case_normalized(self) -> None:
        """Subtags are normalized to CLDR casing."""
        assert LocaleTag.parse("zh-hant-tw") == LocaleTag("zh", "Hant", "TW")

    def test_underscore_separator(self) -> None:
        """POSIX-style underscores are accepted."""
        assert LocaleTag.parse("en_GB") == LocaleTag("en", None, "GB")

    def test_surrounding_whitespace_ignored(self) -> None:
        """Whitespace around the identifier is stripped."""
        assert LocaleTag.parse("  de-DE ") == LocaleTag("de", None, "DE")

    def test_empty_is_none(self) -> None:
        """Empty identifier does not parse."""
        assert LocaleTag.parse("") is None

    def test_invalid_is_none(self) -> None:
        """Identifiers Babel rejects do not parse."""
        assert LocaleTag.parse("12-34") is None

    def test_lang_script(self) -> None:
        """lang_script includes the script only when present."""
        assert LocaleTag("zh", "Hans", "CN").lang_script == "zh-Hans"
        assert LocaleTag("en", None, "US").lang_script == "en"


class TestDecompose:
    """Test decompose() part ordering."""

    def test_language_region(self) -> None:
        """Language + region gives root, language, locale and region-only part."""
        assert decompose("en-US") == ("root", "en", "en-US", "und-US")

    def test_language_script_region(self) -> None:
        """Script parts come before the language-region parts."""
        assert decompose("zh-Hant-TW") == (
            "root",
            "zh",
            "zh-Hant",
            "zh-Hant-TW",
            "zh-TW",
            "und-TW",
        )

    def test_language_script(self) -> None:
        """Script without region adds only the language-script part."""
        assert decompose("sr-Latn") == ("root", "sr", "sr-Latn")

    def test_language_only(self) -> None:
        """Bare language gives root and the language."""
        assert decompose("fr") == ("root", "fr")

    def test_wildcard(self) -> None:
        """Wildcard locale maps to root only."""
        assert decompose("*") == ("root",)

    def test_invalid_yields_root(self) -> None:
        """Unparsable identifiers never raise and map to root only."""
        assert decompose("") == ("root",)
        assert decompose("not a locale!") == ("root",)

    def test_region_only_locale(self) -> None:
        """und-<region> does not repeat the region-only part."""
        assert decompose("und-US") == ("root", "und", "und-US")

    def test_normalized_input(self) -> None:
        """Lowercase input yields canonical part keys."""
        assert decompose("en-gb") == ("root", "en", "en-GB", "und-GB")

    @given(locale_identifiers())
    def test_decomposition_shape(
        self, sample: tuple[str, str, str | None, str | None]
    ) -> None:
        """PROPERTY: root first, parts unique, script/region parts only when present."""
        identifier, language, script, region = sample
        parts = decompose(identifier)
        event(f"parts={len(parts)}")

        assert parts[0] == "root"
        assert parts[1] == language
        assert len(parts) == len(set(parts))
        assert (f"{language}-{script}" in parts) == bool(script)
        assert (f"und-{region}" in parts) == bool(region)
        expected = 2 + (1 if script else 0) + (2 if region else 0)
        expected += 1 if script and region else 0
        assert len(parts) == expected

    @given(st.text(alphabet="abcdefgXYZ-_ 0123*", max_size=16))
    def test_never_raises(self, identifier: str) -> None:
        """PROPERTY: any identifier decomposes, always starting at root."""
        parts = decompose(identifier)
        assert parts[0] == "root"


class TestPartDirectory:
    """Test part_directory() repository layout mapping."""

    def test_root_is_repository_root(self) -> None:
        """Root documents live at the top level."""
        assert part_directory("root") == ""

    def test_hyphens_become_directories(self) -> None:
        """Each subtag is one directory level."""
        assert part_directory("zh-Hant-TW") == "zh/Hant/TW"
        assert part_directory("und-US") == "und/US"


class TestCharsetKey:
    """Test charset_key() language-to-charset lookup keys."""

    def test_region_dropped(self) -> None:
        """Region does not participate in the key."""
        assert charset_key("en-US") == "en"

    def test_script_kept(self) -> None:
        """Script is part of the key."""
        assert charset_key("zh-Hans-CN") == "zh-Hans"

    def test_wildcard(self) -> None:
        """Wildcard maps to itself."""
        assert charset_key("*") == "*"

    def test_invalid(self) -> None:
        """Unparsable identifiers have no key."""
        assert charset_key("") is None


class TestLikelyScript:
    """Test likely_script() against CLDR likely subtags."""

    def test_explicit_script_wins(self) -> None:
        """An explicit script subtag is returned as-is."""
        assert likely_script("sr-Latn-RS") == "Latn"

    def test_language_default(self) -> None:
        """Language alone resolves through likely subtags."""
        assert likely_script("en-US") == "Latn"
        assert likely_script("ru-RU") == "Cyrl"
        assert likely_script("sr") == "Cyrl"

    def test_region_refines_script(self) -> None:
        """Language + region selects the regional script."""
        assert likely_script("zh-TW") == "Hant"
        assert likely_script("zh-CN") == "Hans"

    def test_invalid(self) -> None:
        """Unparsable identifiers have no script."""
        assert likely_script("") is None

"""Tests for category classification and runtime name mangling.

Python 3.13+.
"""

import pytest

from localebundler.enums import CategoryKind
from localebundler.resolution.categories import CategoryToken, classify, data_name, zone_name


class TestClassify:
    """Test classify() dispatch on category names."""

    def test_ordinary(self) -> None:
        """Unrecognized names are ordinary hierarchy categories."""
        token = classify("dateformats")
        assert token == CategoryToken("dateformats")
        assert token.kind is CategoryKind.ORDINARY
        assert not token.is_special

    @pytest.mark.parametrize(
        ("name", "kind"),
        [
            ("charset", CategoryKind.CHARSET),
            ("charmaps", CategoryKind.CHARMAPS),
            ("zoneinfo", CategoryKind.ZONEINFO),
        ],
    )
    def test_special_names(self, name: str, kind: CategoryKind) -> None:
        """Reserved names classify to their special kinds."""
        token = classify(name)
        assert token.kind is kind
        assert token.is_special

    def test_unqualified_normalization(self) -> None:
        """A bare form is a normalization request with no qualifier."""
        token = classify("nfd")
        assert token.kind is CategoryKind.NORMALIZATION
        assert token.form == "nfd"
        assert token.qualifier == ""

    def test_qualified_normalization(self) -> None:
        """form/script carries the script qualifier."""
        token = classify("nfkc/Latn")
        assert token.form == "nfkc"
        assert token.qualifier == "Latn"

    def test_all_qualifier(self) -> None:
        """The all qualifier is kept verbatim."""
        assert classify("nfc/all").qualifier == "all"

    def test_lookalike_is_ordinary(self) -> None:
        """Names that only start like a form are ordinary."""
        assert classify("nfcx").kind is CategoryKind.ORDINARY
        assert classify("charsets").kind is CategoryKind.ORDINARY

    def test_tokens_sort_by_name(self) -> None:
        """Tokens order by name for deterministic iteration."""
        tokens = sorted([classify("zoneinfo"), classify("ctype"), classify("nfc")])
        assert [t.name for t in tokens] == ["ctype", "nfc", "zoneinfo"]


class TestDataName:
    """Test data_name() identifier mangling."""

    def test_root_and_wildcard_are_empty(self) -> None:
        """Root-level names have no suffix."""
        assert data_name("root") == ""
        assert data_name("*") == ""
        assert data_name("") == ""

    def test_unsafe_characters_replaced(self) -> None:
        """Separators and punctuation become underscores."""
        assert data_name("zh-Hant-TW") == "zh_Hant_TW"
        assert data_name("ISO-8859-1") == "ISO_8859_1"
        assert data_name("ctype.alpha") == "ctype_alpha"

    def test_plain_name_unchanged(self) -> None:
        """Identifier-safe names pass through."""
        assert data_name("numberformats") == "numberformats"


class TestZoneName:
    """Test zone_name() runtime zone keys."""

    def test_signs_mangled(self) -> None:
        """Minus becomes m and plus becomes p."""
        assert zone_name("Etc/GMT-10") == "Etc/GMTm10"
        assert zone_name("Etc/GMT+1") == "Etc/GMTp1"

    def test_other_zones_unchanged(self) -> None:
        """Slashes and underscores are kept."""
        assert zone_name("America/New_York") == "America/New_York"

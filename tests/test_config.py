"""Tests for BuildOptions validation and host option mapping.

Python 3.13+.
"""

from pathlib import Path

import pytest

from localebundler.config import BuildOptions
from localebundler.constants import DEFAULT_LOCALES
from localebundler.enums import AssemblyMode, CompilationMode, TargetProfile


class TestBuildOptions:
    """Test BuildOptions construction."""

    def test_defaults(self) -> None:
        """Defaults target the common locales with assembled output."""
        options = BuildOptions()
        assert options.locales == DEFAULT_LOCALES
        assert options.assembly is AssemblyMode.ASSEMBLED
        assert options.compilation is CompilationMode.UNCOMPILED
        assert options.target is TargetProfile.WEB
        assert options.size == "standard"
        assert options.quiescence_delay == 0.25
        assert options.module_root == "ilib"

    def test_locales_deduplicated_in_order(self) -> None:
        """Duplicate and blank locales are dropped; order is kept."""
        options = BuildOptions(locales=("fr-FR", " en-US", "fr-FR", ""))
        assert options.locales == ("fr-FR", "en-US")

    def test_comma_separated_locales(self) -> None:
        """A comma-separated string is split."""
        assert BuildOptions(locales="en-US, de-DE").locales == ("en-US", "de-DE")

    def test_empty_locales_rejected(self) -> None:
        """At least one locale is required."""
        with pytest.raises(ValueError, match="locale"):
            BuildOptions(locales=())

    def test_enum_strings_coerced(self) -> None:
        """Plain strings become enum members."""
        options = BuildOptions(assembly="dynamicdata", compilation="compiled", target="node")
        assert options.assembly is AssemblyMode.DYNAMICDATA
        assert options.compilation is CompilationMode.COMPILED
        assert options.target is TargetProfile.NODE

    def test_unknown_enum_rejected(self) -> None:
        """Unknown enum values are rejected."""
        with pytest.raises(ValueError, match="bogus"):
            BuildOptions(assembly="bogus")

    def test_empty_size_rejected(self) -> None:
        """size must be non-empty."""
        with pytest.raises(ValueError, match="size"):
            BuildOptions(size="")

    def test_negative_delay_rejected(self) -> None:
        """quiescence_delay must be non-negative."""
        with pytest.raises(ValueError, match="quiescence_delay"):
            BuildOptions(quiescence_delay=-1)

    def test_locales_dir(self, tmp_path: Path) -> None:
        """Artifacts go to <output_dir>/locales."""
        options = BuildOptions(output_dir=str(tmp_path))
        assert options.locales_dir == tmp_path.resolve() / "locales"

    def test_module_root_from_repository_root(self) -> None:
        """An explicit repository root is the runtime module root."""
        assert BuildOptions(repository_root="/opt/ilib").module_root == "/opt/ilib"

    def test_frozen(self) -> None:
        """Options are immutable."""
        options = BuildOptions()
        with pytest.raises(AttributeError):
            options.size = "full"  # type: ignore[misc]


class TestFromMapping:
    """Test BuildOptions.from_mapping() host option handling."""

    def test_host_spellings(self) -> None:
        """Host option names map onto fields."""
        options = BuildOptions.from_mapping(
            {
                "locales": "en-US,fr-FR",
                "assembly": "dynamic",
                "ilibRoot": "/opt/ilib",
                "tempDir": "build/tmp",
                "quiescenceDelay": "0.5",
                "debug": 1,
            }
        )
        assert options.locales == ("en-US", "fr-FR")
        assert options.assembly is AssemblyMode.DYNAMIC
        assert options.repository_root == "/opt/ilib"
        assert options.output_dir == "build/tmp"
        assert options.quiescence_delay == 0.5
        assert options.debug is True

    def test_none_and_unknown_ignored(self) -> None:
        """None values take defaults and unknown keys are ignored."""
        options = BuildOptions.from_mapping({"locales": None, "mode": "x", "size": None})
        assert options == BuildOptions()

    def test_none_mapping(self) -> None:
        """A missing mapping gives the defaults."""
        assert BuildOptions.from_mapping(None) == BuildOptions()

    def test_locale_list(self) -> None:
        """Locales may be given as a list."""
        options = BuildOptions.from_mapping({"locales": ["ja-JP", "ko-KR"]})
        assert options.locales == ("ja-JP", "ko-KR")

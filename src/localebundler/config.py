"""Build configuration for localebundler.

Provides a single frozen dataclass that encapsulates every option the host
build pipeline can pass, with validation at construction time and a
constructor from the host's loosely typed option mapping.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from localebundler.constants import (
    DEFAULT_LOCALES,
    DEFAULT_MODULE_ROOT,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_QUIESCENCE_DELAY,
    DEFAULT_SIZE,
    LOCALES_DIRECTORY,
)
from localebundler.enums import AssemblyMode, CompilationMode, TargetProfile
from localebundler.types import LocaleCode

__all__ = ["BuildOptions"]

# Host option spellings accepted in addition to the field names
_OPTION_ALIASES: dict[str, str] = {
    "ilibRoot": "repository_root",
    "tempDir": "output_dir",
    "quiescenceDelay": "quiescence_delay",
}


def _split_locales(value: str | Iterable[str]) -> tuple[LocaleCode, ...]:
    if isinstance(value, str):
        value = value.split(",")
    return tuple(locale.strip() for locale in value if locale and locale.strip())


@dataclass(frozen=True, slots=True)
class BuildOptions:
    """Immutable configuration for one locale data build.

    All fields have defaults; ``BuildOptions()`` targets the built-in list
    of common locales with assembled output.

    Attributes:
        locales: Target locales (duplicates removed, order kept).
        assembly: Assembled (immediate-effect artifacts) or dynamic /
            dynamicdata (deferred installers loaded on demand).
        compilation: Repository sub-path layout selector.
        size: Data-size profile; selects the compiled layout sub-path.
        target: Runtime the generated loader code is written for.
        debug: Log per-unit processing at INFO instead of DEBUG.
        repository_root: Root of the locale data package. None discovers
            node_modules/ilib above the working directory.
        output_dir: Output root; artifacts go to <output_dir>/locales.
        quiescence_delay: Seconds a trigger unit waits for other units to
            finish recording requests when no completion signal is given.

    Example:
        >>> options = BuildOptions(locales=("en-US", "fr-FR"), assembly=AssemblyMode.DYNAMIC)
        >>> options.locales_dir
        PosixPath('.../assets/locales')
    """

    locales: tuple[LocaleCode, ...] = DEFAULT_LOCALES
    assembly: AssemblyMode = AssemblyMode.ASSEMBLED
    compilation: CompilationMode = CompilationMode.UNCOMPILED
    size: str = DEFAULT_SIZE
    target: TargetProfile = TargetProfile.WEB
    debug: bool = False
    repository_root: str | None = None
    output_dir: str = DEFAULT_OUTPUT_DIR
    quiescence_delay: float = DEFAULT_QUIESCENCE_DELAY

    def __post_init__(self) -> None:
        """Normalize and validate option values.

        Raises:
            ValueError: If locales is empty, an enum option has an unknown
                value, size is empty, or quiescence_delay is negative.
        """
        locales = tuple(dict.fromkeys(_split_locales(self.locales)))
        if not locales:
            msg = "At least one locale is required"
            raise ValueError(msg)
        object.__setattr__(self, "locales", locales)

        # StrEnum construction raises ValueError for unknown values
        object.__setattr__(self, "assembly", AssemblyMode(self.assembly))
        object.__setattr__(self, "compilation", CompilationMode(self.compilation))
        object.__setattr__(self, "target", TargetProfile(self.target))

        if not self.size:
            msg = "size must be a non-empty profile name"
            raise ValueError(msg)
        if self.quiescence_delay < 0:
            msg = f"quiescence_delay must be non-negative, got {self.quiescence_delay}"
            raise ValueError(msg)

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> BuildOptions:
        """Build options from a host-provided option mapping.

        Accepts ``locales`` as a list or comma-separated string and the host
        spellings ``ilibRoot``, ``tempDir`` and ``quiescenceDelay``. Missing
        or None values take the defaults; unknown keys are ignored.

        Example:
            >>> BuildOptions.from_mapping({"locales": "en-US,fr-FR", "assembly": "dynamic"})
            BuildOptions(locales=('en-US', 'fr-FR'), assembly=<AssemblyMode.DYNAMIC: 'dynamic'>, ...)
        """
        known = set(cls.__dataclass_fields__)
        kwargs: dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value
        if "locales" in kwargs:
            kwargs["locales"] = _split_locales(kwargs["locales"])
        if "debug" in kwargs:
            kwargs["debug"] = bool(kwargs["debug"])
        if "quiescence_delay" in kwargs:
            kwargs["quiescence_delay"] = float(kwargs["quiescence_delay"])
        return cls(**kwargs)

    @property
    def locales_dir(self) -> Path:
        """Absolute directory receiving the emitted artifacts."""
        return Path(self.output_dir).resolve() / LOCALES_DIRECTORY

    @property
    def module_root(self) -> str:
        """Module path of the runtime package used in generated require() calls."""
        return str(self.repository_root) if self.repository_root else DEFAULT_MODULE_ROOT

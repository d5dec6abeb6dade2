"""Enumerations for localebundler type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, so option values read from a host
configuration mapping compare equal to the members directly.

Python 3.13+.
"""

from enum import StrEnum


class CategoryKind(StrEnum):
    """Resolution semantics of a requested data category.

    StrEnum provides automatic string conversion: str(CategoryKind.ZONEINFO) == "zoneinfo"
    """

    ORDINARY = "ordinary"
    """Resolved per hierarchy part: dateformats, numberformats, ..."""

    CHARSET = "charset"
    """Character set definitions for the languages of the target locales."""

    CHARMAPS = "charmaps"
    """Charsets plus their mapping tables, bucketed by language[-script]."""

    ZONEINFO = "zoneinfo"
    """Time zone data, global to root."""

    NORMALIZATION = "normalization"
    """Unicode normalization tables: nfc, nfd, nfkc, nfkd [/script]."""


class AssemblyMode(StrEnum):
    """How emitted locale data reaches the runtime.

    StrEnum provides automatic string conversion: str(AssemblyMode.DYNAMIC) == "dynamic"
    """

    ASSEMBLED = "assembled"
    """Artifacts take effect immediately when required into the bundle."""

    DYNAMIC = "dynamic"
    """Code and data are both loaded on demand."""

    DYNAMICDATA = "dynamicdata"
    """Code is bundled; only locale data is loaded on demand."""


class CompilationMode(StrEnum):
    """Repository sub-path layout.

    StrEnum provides automatic string conversion: str(CompilationMode.UNCOMPILED) == "uncompiled"
    """

    UNCOMPILED = "uncompiled"
    """Raw source documents under js/locale."""

    COMPILED = "compiled"
    """Pre-built documents under js/output/<size>/locale."""


class TargetProfile(StrEnum):
    """Runtime the generated loader code is written for.

    StrEnum provides automatic string conversion: str(TargetProfile.WEB) == "web"
    """

    WEB = "web"
    """Browser bundles; parts are fetched as named chunks."""

    NODE = "node"
    """Server-side bundles; parts are required synchronously."""


class LoadStatus(StrEnum):
    """Outcome of reading one repository document.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Document read and parsed."""

    NOT_FOUND = "not_found"
    """No document at this address (not an error)."""

    ERROR = "error"
    """Document exists but could not be read or parsed."""


__all__ = [
    "AssemblyMode",
    "CategoryKind",
    "CompilationMode",
    "LoadStatus",
    "TargetProfile",
]

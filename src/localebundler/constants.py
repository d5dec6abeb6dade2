"""Shared constants for localebundler.

Centralizes the names, defaults and file-layout conventions used across the
resolution and assembly packages. Placing them here avoids circular imports
and provides a single source of truth.

Constants are grouped by domain:
- Locale hierarchy: part keys with a fixed meaning
- Categories: special category names and normalization forms
- Repository layout: well-known document names and directories
- Emission: artifact naming and runtime module paths
- Build defaults: option defaults for BuildOptions

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale hierarchy
    "ROOT_PART",
    "UNDETERMINED_LANGUAGE",
    "WILDCARD_LOCALE",
    # Categories
    "CHARSET_CATEGORY",
    "CHARMAPS_CATEGORY",
    "ZONEINFO_CATEGORY",
    "NORMALIZATION_FORMS",
    "ALL_SCRIPTS",
    # Repository layout
    "DOCUMENT_SUFFIX",
    "LANG2CHARSET_DOCUMENT",
    "CHARSET_ALIASES_DOCUMENT",
    "CHARSET_DIRECTORY",
    "CHARMAPS_DIRECTORY",
    "ZONEINFO_DIRECTORY",
    "ZONETAB_DOCUMENT",
    "GENERIC_ZONE_SUBDIRECTORY",
    # Emission
    "LOCALES_DIRECTORY",
    "ARTIFACT_SUFFIX",
    "MANIFEST_NAME",
    "MANIFEST_SUFFIX",
    "RUNTIME_NAMESPACE",
    "DEFAULT_MODULE_ROOT",
    "VERSION_PLACEHOLDER",
    # Build defaults
    "DEFAULT_LOCALES",
    "DEFAULT_SIZE",
    "DEFAULT_OUTPUT_DIR",
    "DEFAULT_QUIESCENCE_DELAY",
]

# ============================================================================
# LOCALE HIERARCHY
# ============================================================================

# Least specific part; shared by every locale and home of all non-locale data.
ROOT_PART: str = "root"

# Language subtag used for region-only parts (und-US).
UNDETERMINED_LANGUAGE: str = "und"

# Locale identifier meaning "applies to every locale". Decomposes to root only.
WILDCARD_LOCALE: str = "*"

# ============================================================================
# CATEGORIES
# ============================================================================

CHARSET_CATEGORY: str = "charset"
CHARMAPS_CATEGORY: str = "charmaps"
ZONEINFO_CATEGORY: str = "zoneinfo"

# Unicode normalization forms; requested as "nfc" or "nfc/<script>".
NORMALIZATION_FORMS: tuple[str, ...] = ("nfc", "nfd", "nfkc", "nfkd")

# Qualifier selecting the aggregate document that covers every script.
ALL_SCRIPTS: str = "all"

# ============================================================================
# REPOSITORY LAYOUT
# ============================================================================

DOCUMENT_SUFFIX: str = ".json"

# language[-script] -> list of applicable charset names
LANG2CHARSET_DOCUMENT: str = "lang2charset.json"
CHARSET_ALIASES_DOCUMENT: str = "charsetaliases.json"
CHARSET_DIRECTORY: str = "charset"
CHARMAPS_DIRECTORY: str = "charmaps"

ZONEINFO_DIRECTORY: str = "zoneinfo"
# region -> list of zone identifiers
ZONETAB_DOCUMENT: str = "zonetab.json"
# Nested directory of generic (non-geographic) zones, e.g. Etc/GMT+1
GENERIC_ZONE_SUBDIRECTORY: str = "Etc"

# ============================================================================
# EMISSION
# ============================================================================

LOCALES_DIRECTORY: str = "locales"
ARTIFACT_SUFFIX: str = ".js"

# Pseudo part naming the manifest; always the last entry of the emitted list.
MANIFEST_NAME: str = "ilibmanifest"
MANIFEST_SUFFIX: str = ".json"

# Runtime namespace that every payload is merged into.
RUNTIME_NAMESPACE: str = "ilib.data"

# Module root used in generated require() calls unless overridden.
DEFAULT_MODULE_ROOT: str = "ilib"

# Replaced with the real version by the host pipeline after rewriting.
VERSION_PLACEHOLDER: str = "__VERSION__"

# ============================================================================
# BUILD DEFAULTS
# ============================================================================

DEFAULT_LOCALES: tuple[str, ...] = (
    "en-AU", "en-CA", "en-GB", "en-IN", "en-NG", "en-PH",
    "en-PK", "en-US", "en-ZA", "de-DE", "fr-CA", "fr-FR",
    "es-AR", "es-ES", "es-MX", "id-ID", "it-IT", "ja-JP",
    "ko-KR", "pt-BR", "ru-RU", "tr-TR", "vi-VN", "zxx-XX",
    "zh-Hans-CN", "zh-Hant-HK", "zh-Hant-TW", "zh-Hans-SG",
)

DEFAULT_SIZE: str = "standard"

# Relative to the working directory of the build.
DEFAULT_OUTPUT_DIR: str = "assets"

# Seconds a trigger unit waits for concurrently scheduled units to finish
# recording their requests when the host gives no completion signal.
DEFAULT_QUIESCENCE_DELAY: float = 0.25

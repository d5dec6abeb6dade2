"""Type aliases for the locale data domain.

Provides semantic type aliases used throughout the resolution and assembly
packages and by host code when annotating build integration call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import Any, TypeAlias

__all__ = [
    "CategoryName",
    "Document",
    "DocumentPath",
    "LocaleCode",
    "PartKey",
]

LocaleCode: TypeAlias = str
"""BCP-47 style locale identifier (e.g., 'en-US', 'zh-Hant-TW')."""

PartKey: TypeAlias = str
"""Node of the locale fallback hierarchy (e.g., 'root', 'en', 'und-US')."""

CategoryName: TypeAlias = str
"""Requested data category as written in a !data directive (e.g., 'dateformats')."""

DocumentPath: TypeAlias = str
"""Repository-relative, '/'-separated document path (e.g., 'fr/numberformats.json')."""

Document: TypeAlias = Any
"""Parsed JSON value of a repository document (usually a mapping)."""

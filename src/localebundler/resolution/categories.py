"""Category token classification.

Each requested category name is classified once, when it is recorded, into
a CategoryToken carrying its resolution semantics. The resolver dispatches
on CategoryToken.kind instead of re-testing string patterns.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from localebundler.constants import (
    CHARMAPS_CATEGORY,
    CHARSET_CATEGORY,
    ROOT_PART,
    WILDCARD_LOCALE,
    ZONEINFO_CATEGORY,
)
from localebundler.enums import CategoryKind
from localebundler.types import CategoryName

__all__ = [
    "CategoryToken",
    "classify",
    "data_name",
    "zone_name",
]

_NORMALIZATION_PATTERN = re.compile(r"(nfc|nfd|nfkc|nfkd)(?:/(\w+))?")

_SPECIAL_KINDS: dict[str, CategoryKind] = {
    CHARSET_CATEGORY: CategoryKind.CHARSET,
    CHARMAPS_CATEGORY: CategoryKind.CHARMAPS,
    ZONEINFO_CATEGORY: CategoryKind.ZONEINFO,
}

# Characters that cannot appear in a runtime identifier
_DATA_NAME_UNSAFE = re.compile(r"[.:()/\\+\-]")


@dataclass(frozen=True, slots=True, order=True)
class CategoryToken:
    """A classified category request.

    Ordered by name so that snapshots can be iterated deterministically.

    Attributes:
        name: Category name as requested (e.g., 'dateformats', 'nfc/Latn')
        kind: Resolution semantics
        form: Normalization form ('nfc', ...) for NORMALIZATION tokens, else ''
        qualifier: Script qualifier for NORMALIZATION tokens ('Latn', 'all'),
            '' when unqualified
    """

    name: CategoryName
    kind: CategoryKind = CategoryKind.ORDINARY
    form: str = ""
    qualifier: str = ""

    @property
    def is_special(self) -> bool:
        """Check if the category is resolved outside the locale hierarchy."""
        return self.kind is not CategoryKind.ORDINARY


def classify(name: CategoryName) -> CategoryToken:
    """Classify a requested category name.

    Args:
        name: Category name from a !data directive

    Returns:
        CategoryToken with kind (and form/qualifier for normalization)

    Example:
        >>> classify("dateformats").kind
        <CategoryKind.ORDINARY: 'ordinary'>
        >>> classify("nfkc/Latn")
        CategoryToken(name='nfkc/Latn', kind=<CategoryKind.NORMALIZATION: 'normalization'>, form='nfkc', qualifier='Latn')
    """
    special = _SPECIAL_KINDS.get(name)
    if special is not None:
        return CategoryToken(name=name, kind=special)

    match = _NORMALIZATION_PATTERN.fullmatch(name)
    if match is not None:
        return CategoryToken(
            name=name,
            kind=CategoryKind.NORMALIZATION,
            form=match.group(1),
            qualifier=match.group(2) or "",
        )

    return CategoryToken(name=name)


def data_name(name: str) -> str:
    """Convert a category, part or charset name into a runtime identifier.

    Example:
        >>> data_name("en-US")
        'en_US'
        >>> data_name("root")
        ''
    """
    if not name or name in (ROOT_PART, WILDCARD_LOCALE):
        return ""
    return _DATA_NAME_UNSAFE.sub("_", name)


def zone_name(zone: str) -> str:
    """Convert a zone identifier into the key used by the runtime zone table.

    Example:
        >>> zone_name("Etc/GMT-10")
        'Etc/GMTm10'
    """
    return zone.replace("-", "m").replace("+", "p")

"""Category resolution package.

Turns requested category names into resolved repository documents.

Submodules:
    categories - CategoryToken classification and runtime name mangling
    documents  - JSON document parsing and structured merging
    repository - DataRepository protocol, PathDataRepository, load results
    resolver   - CategoryResolver and DataEntry

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from localebundler.resolution.categories import CategoryToken, classify, data_name, zone_name
from localebundler.resolution.documents import merge_documents, parse_document
from localebundler.resolution.repository import (
    DataRepository,
    DocumentLoadResult,
    PathDataRepository,
    ResolutionSummary,
    find_repository_root,
    repository_path,
)
from localebundler.resolution.resolver import CategoryResolver, DataEntry

__all__ = [
    # Classification
    "CategoryToken",
    "classify",
    "data_name",
    "zone_name",
    # Documents
    "merge_documents",
    "parse_document",
    # Repository access
    "DataRepository",
    "PathDataRepository",
    "find_repository_root",
    "repository_path",
    "DocumentLoadResult",
    "ResolutionSummary",
    # Resolution
    "CategoryResolver",
    "DataEntry",
]

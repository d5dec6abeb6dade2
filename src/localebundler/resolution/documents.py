"""Repository document parsing and structured merging.

Repository documents are JSON. The runtime layers the documents of a
locale's parts on top of each other, least specific first; merge_documents()
expresses that layering as a deterministic operation over associative
documents so it can be reasoned about and tested independent of the shape
of any particular category.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from localebundler.errors import RepositoryReadError
from localebundler.types import Document

__all__ = [
    "merge_documents",
    "parse_document",
    "serialize_document",
]


def parse_document(text: str, path: str) -> Document:
    """Parse the JSON text of a repository document.

    Args:
        text: Raw document text
        path: Document path, for error reporting

    Returns:
        Parsed JSON value

    Raises:
        RepositoryReadError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"Malformed document {path}: {e.msg} (line {e.lineno}, column {e.colno})"
        raise RepositoryReadError(msg, path=path) from e


def serialize_document(document: Document) -> str:
    """Serialize a document as a JavaScript/JSON literal.

    Key order is preserved so emitted artifacts are byte-stable across builds.
    """
    return json.dumps(document, ensure_ascii=False, separators=(",", ":"))


def merge_documents(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge two associative documents, the override winning per key.

    Nested mappings present on both sides are merged recursively. Any other
    value (scalars, lists, a mapping replacing a scalar) is replaced
    wholesale by the override. Neither input is mutated.

    Args:
        base: Less specific document
        override: More specific document

    Returns:
        New merged document

    Example:
        >>> merge_documents({"a": 1, "n": {"x": 1, "y": 2}}, {"n": {"y": 3}, "b": 2})
        {'a': 1, 'n': {'x': 1, 'y': 3}, 'b': 2}
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_documents(current, value)
        else:
            merged[key] = value
    return merged

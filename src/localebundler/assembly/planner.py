"""Bundle planning: which data goes into which part artifact.

The planner turns the build's sealed request set and the configured target
locales into a BundlePlan: for every hierarchy part that has data, the
ordered entries to emit into that part's artifact.

Deduplication:
    Locales share parts (en-US and en-GB both decompose to root and en).
    Each (part, entry key) pair is stored exactly once; the first
    resolution wins and the repository is not consulted again for a pair
    already planned. Parts with no entries never appear in the plan, so
    no empty artifacts are emitted.

Ordering:
    Deterministic for a given request set, whatever order the requests
    arrived in: locales in configured order, each locale's parts least
    specific first, ordinary categories sorted by name; then charsets,
    time zones and normalization tables. Root is always the first part.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import TYPE_CHECKING

from localebundler.constants import ROOT_PART
from localebundler.enums import CategoryKind
from localebundler.errors import ConfigurationError
from localebundler.locale_utils import decompose, likely_script
from localebundler.resolution.documents import merge_documents
from localebundler.resolution.repository import DataRepository, ResolutionSummary
from localebundler.resolution.resolver import CategoryResolver, DataEntry
from localebundler.types import Document, LocaleCode, PartKey

if TYPE_CHECKING:
    from localebundler.assembly.aggregator import RequestAggregator

__all__ = ["BundlePlan", "BundlePlanner", "DataEntry"]

logger = logging.getLogger(__name__)


class BundlePlan:
    """Immutable mapping of part key -> ordered data entries.

    Example:
        >>> plan.parts
        ('root', 'fr')
        >>> [entry.key for entry in plan.entries("fr")]
        ['numberformats']
    """

    __slots__ = ("_parts", "_summary")

    def __init__(
        self,
        parts: Mapping[PartKey, Mapping[str, DataEntry]],
        summary: ResolutionSummary | None = None,
    ) -> None:
        """Initialize plan.

        Args:
            parts: Part key -> entry key -> entry. Empty parts are dropped.
            summary: Document reads made while planning
        """
        ordered = sorted(
            (part for part, entries in parts.items() if entries),
            key=lambda part: part != ROOT_PART,
        )
        self._parts: dict[PartKey, dict[str, DataEntry]] = {
            part: dict(parts[part]) for part in ordered
        }
        self._summary = summary if summary is not None else ResolutionSummary(results=())

    @property
    def parts(self) -> tuple[PartKey, ...]:
        """Part keys with at least one entry, root first."""
        return tuple(self._parts)

    @property
    def summary(self) -> ResolutionSummary:
        """Document reads made while planning, including skipped failures."""
        return self._summary

    def entries(self, part: PartKey) -> tuple[DataEntry, ...]:
        """Entries planned for a part, in emission order (empty if none)."""
        return tuple(self._parts.get(part, {}).values())

    def get(self, part: PartKey, key: str) -> DataEntry | None:
        """Return the entry for (part, key), or None."""
        return self._parts.get(part, {}).get(key)

    def layered(self, locale: LocaleCode, key: str) -> Document | None:
        """Return the document the runtime sees for a locale after layering.

        Applies the entries for key from each of the locale's parts, least
        specific first, the way the runtime installs them: associative
        documents are merged with merge_documents(), anything else is
        replaced by the more specific part.

        Args:
            locale: Target locale
            key: Entry key (the category name for ordinary categories)

        Returns:
            Effective document, or None if no part of the locale has the key
        """
        result: Document | None = None
        for part in decompose(locale):
            entry = self.get(part, key)
            if entry is None:
                continue
            if isinstance(result, Mapping) and isinstance(entry.payload, Mapping):
                result = merge_documents(result, entry.payload)
            else:
                result = entry.payload
        return result

    @property
    def entry_count(self) -> int:
        """Total number of entries across all parts."""
        return sum(len(entries) for entries in self._parts.values())

    def __contains__(self, part: object) -> bool:
        """Check if a part has any planned entries."""
        return part in self._parts

    def __iter__(self) -> Iterator[PartKey]:
        """Iterate over part keys, root first."""
        return iter(self._parts)

    def __len__(self) -> int:
        """Return the number of parts."""
        return len(self._parts)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"BundlePlan(parts={list(self._parts)}, entries={self.entry_count})"


class BundlePlanner:
    """Builds a BundlePlan from a request set and the target locales.

    Example:
        >>> planner = BundlePlanner(PathDataRepository(root), ["en-US", "fr-FR"])
        >>> plan = planner.plan(requests)
    """

    __slots__ = ("_locales", "_repository")

    def __init__(self, repository: DataRepository, locales: Iterable[LocaleCode]) -> None:
        """Initialize planner.

        Args:
            repository: Locale data repository
            locales: Target locales in configured order
        """
        self._repository = repository
        self._locales: tuple[LocaleCode, ...] = tuple(dict.fromkeys(locales))

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Target locales in configured order."""
        return self._locales

    def plan(self, requests: RequestAggregator | None) -> BundlePlan:
        """Seal the request set and compute the plan.

        Args:
            requests: Build-wide request aggregator

        Returns:
            Completed BundlePlan

        Raises:
            ConfigurationError: If no request aggregator was provided
        """
        if requests is None:
            msg = (
                "Locale data cannot be planned without a request aggregator. "
                "Create a BuildContext for the build and pass it to every unit."
            )
            raise ConfigurationError(msg)

        tokens = sorted(requests.seal())
        resolver = CategoryResolver(self._repository)
        parts: dict[PartKey, dict[str, DataEntry]] = {}

        def add(part: PartKey, entry: DataEntry) -> None:
            bucket = parts.setdefault(part, {})
            if entry.key not in bucket:
                bucket[entry.key] = entry

        ordinary = [token for token in tokens if token.kind is CategoryKind.ORDINARY]
        for locale in self._locales:
            for part in decompose(locale):
                for token in ordinary:
                    if token.name in parts.get(part, ()):
                        continue
                    entry = resolver.resolve_ordinary(part, token)
                    if entry is not None:
                        add(part, entry)

        for part, entry in resolver.resolve_charsets(self._locales, tokens):
            add(part, entry)

        if any(token.kind is CategoryKind.ZONEINFO for token in tokens):
            for entry in resolver.resolve_zoneinfo(self._locales):
                add(ROOT_PART, entry)

        if any(token.kind is CategoryKind.NORMALIZATION for token in tokens):
            scripts = [
                script for script in map(likely_script, self._locales) if script is not None
            ]
            for entry in resolver.resolve_normalization(tokens, scripts):
                add(ROOT_PART, entry)

        plan = BundlePlan(parts, resolver.summary)
        logger.info(
            "Planned %d locale data parts (%d entries) for %d locales and %d categories",
            len(plan),
            plan.entry_count,
            len(self._locales),
            len(tokens),
        )
        if plan.summary.has_errors:
            logger.warning(
                "%d repository documents could not be loaded and were skipped",
                plan.summary.errors,
            )
        return plan

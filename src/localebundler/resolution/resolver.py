"""Category resolution against the locale data repository.

Resolves classified category tokens into DataEntry records: the payload of
one repository document together with the runtime expression it is
installed into.

Architecture:
    - Ordinary categories are resolved per hierarchy part. The planner asks
      for every part of every locale; each part with a document is a hit.
      There is no stop at the first match because the runtime loads parts
      additively, least specific first, layering overrides.
    - charset / charmaps resolve through the language-to-charset table.
      Charset definitions go to root; charmaps are bucketed by the
      language[-script] that asked for them.
    - zoneinfo resolves through the region-to-zones table and always adds
      every generic zone, all under root.
    - Normalization forms resolve per writing script, under root.

Error handling:
    Every read goes through CategoryResolver._load(). A missing document is
    a miss, not an error. A document that exists but cannot be read or
    parsed is logged with its path, recorded as an ERROR load result and
    treated as a miss. Nothing in this module raises for repository content.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from localebundler.constants import (
    ALL_SCRIPTS,
    CHARMAPS_CATEGORY,
    CHARMAPS_DIRECTORY,
    CHARSET_ALIASES_DOCUMENT,
    CHARSET_CATEGORY,
    CHARSET_DIRECTORY,
    DOCUMENT_SUFFIX,
    GENERIC_ZONE_SUBDIRECTORY,
    LANG2CHARSET_DOCUMENT,
    NORMALIZATION_FORMS,
    ROOT_PART,
    RUNTIME_NAMESPACE,
    WILDCARD_LOCALE,
    ZONEINFO_CATEGORY,
    ZONEINFO_DIRECTORY,
    ZONETAB_DOCUMENT,
)
from localebundler.enums import CategoryKind, LoadStatus
from localebundler.errors import RepositoryReadError
from localebundler.locale_utils import LocaleTag, charset_key, part_directory
from localebundler.resolution.categories import CategoryToken, data_name, zone_name
from localebundler.resolution.documents import parse_document
from localebundler.resolution.repository import (
    DataRepository,
    DocumentLoadResult,
    ResolutionSummary,
)
from localebundler.types import CategoryName, Document, DocumentPath, LocaleCode, PartKey

__all__ = ["CategoryResolver", "DataEntry"]

logger = logging.getLogger(__name__)

# Sentinel distinguishing "not loaded yet" from a cached miss
_MISSING = object()


@dataclass(frozen=True, slots=True)
class DataEntry:
    """One resolved document and where the runtime installs it.

    Attributes:
        key: Identity of the entry within its part (category name, charset
            name, zone identifier, 'nfc/Latn', ...). The planner stores at
            most one entry per (part, key).
        category: Requested category that produced the entry
        target: Runtime expression receiving the payload
            (e.g., 'ilib.data.dateformats_en')
        payload: Parsed document
        merge: True to extend the target with the payload, False to assign
        comment: Optional comment emitted above the statement
    """

    key: str
    category: CategoryName
    target: str
    payload: Document
    merge: bool = False
    comment: str | None = None


def _document_path(directory: str, name: str) -> DocumentPath:
    filename = f"{name}{DOCUMENT_SUFFIX}"
    return f"{directory}/{filename}" if directory else filename


class CategoryResolver:
    """Resolves category tokens against a DataRepository.

    Each document is read at most once per resolver; repeated lookups of the
    same path (a charmap shared by several languages, say) reuse the first
    result, including a recorded failure.

    Not thread-safe: a resolver belongs to a single planning run, which the
    build context serializes.

    Example:
        >>> resolver = CategoryResolver(PathDataRepository("ilib/js/locale"))
        >>> entry = resolver.resolve_ordinary("fr", classify("numberformats"))
        >>> entry.target
        'ilib.data.numberformats_fr'
    """

    __slots__ = ("_documents", "_repository", "_results")

    def __init__(self, repository: DataRepository) -> None:
        """Initialize resolver.

        Args:
            repository: Read-only source of locale data documents
        """
        self._repository = repository
        self._documents: dict[DocumentPath, object] = {}
        self._results: list[DocumentLoadResult] = []

    @property
    def summary(self) -> ResolutionSummary:
        """Summary of every document read attempted so far."""
        return ResolutionSummary(results=tuple(self._results))

    def _load(self, path: DocumentPath) -> Document | None:
        """Load and parse one document, degrading every failure to a miss.

        Returns:
            Parsed document, or None if absent or unusable
        """
        cached = self._documents.get(path, _MISSING)
        if cached is not _MISSING:
            return cached
        document = self._load_uncached(path)
        self._documents[path] = document
        return document

    def _load_uncached(self, path: DocumentPath) -> Document | None:
        source_path = self._repository.describe_path(path)
        try:
            if not self._repository.exists(path):
                return None
            text = self._repository.read(path)
            document = parse_document(text, source_path)
        except FileNotFoundError:
            # Removed between the existence check and the read
            self._results.append(
                DocumentLoadResult(path=path, status=LoadStatus.NOT_FOUND, source_path=source_path)
            )
            return None
        except RepositoryReadError as e:
            logger.warning("Skipping malformed document %s: %s", source_path, e)
            self._results.append(
                DocumentLoadResult(
                    path=path, status=LoadStatus.ERROR, error=e, source_path=source_path
                )
            )
            return None
        except (OSError, ValueError) as e:
            # Permission errors, unsafe paths from odd category names, etc.
            logger.warning("Skipping unreadable document %s: %s", source_path, e)
            self._results.append(
                DocumentLoadResult(
                    path=path, status=LoadStatus.ERROR, error=e, source_path=source_path
                )
            )
            return None

        logger.debug("Loaded document %s", source_path)
        self._results.append(
            DocumentLoadResult(path=path, status=LoadStatus.SUCCESS, source_path=source_path)
        )
        return document

    def _list(self, directory: DocumentPath) -> list[str]:
        """List documents in a repository directory; unreadable means empty."""
        try:
            return self._repository.list_documents(directory)
        except OSError as e:
            logger.warning(
                "Cannot list %s: %s", self._repository.describe_path(directory), e
            )
            return []

    # ------------------------------------------------------------------
    # Ordinary categories
    # ------------------------------------------------------------------

    def resolve_ordinary(self, part: PartKey, token: CategoryToken) -> DataEntry | None:
        """Resolve an ordinary category at exactly one hierarchy part.

        Args:
            part: Part key (e.g., 'root', 'fr', 'und-US')
            token: Ordinary category token

        Returns:
            DataEntry if the part holds a document for the category, else None
        """
        document = self._load(_document_path(part_directory(part), token.name))
        if document is None:
            return None
        target = f"{RUNTIME_NAMESPACE}.{data_name(token.name)}"
        if part != ROOT_PART:
            target += f"_{data_name(part)}"
        return DataEntry(key=token.name, category=token.name, target=target, payload=document)

    # ------------------------------------------------------------------
    # charset / charmaps
    # ------------------------------------------------------------------

    def resolve_charsets(
        self,
        locales: Iterable[LocaleCode],
        tokens: Iterable[CategoryToken],
    ) -> list[tuple[PartKey, DataEntry]]:
        """Resolve charset and charmap data for the target locales.

        Charset definitions (and the alias table) are always recorded under
        root, even when only charmaps were requested, because a charmap needs
        its charset. Charmaps are recorded under the language[-script] part
        that asked for them, or root for the wildcard locale, and only for
        charsets whose definition is not flagged optional.

        Args:
            locales: Target locales
            tokens: Requested tokens; only CHARSET/CHARMAPS kinds are considered

        Returns:
            (part, entry) pairs in resolution order
        """
        kinds = {token.kind for token in tokens}
        if not kinds & {CategoryKind.CHARSET, CategoryKind.CHARMAPS}:
            return []
        wants_charmaps = CategoryKind.CHARMAPS in kinds

        table = self._load(LANG2CHARSET_DOCUMENT)
        if not isinstance(table, Mapping):
            return []

        # dicts as insertion-ordered sets
        charsets: dict[str, None] = {}
        charmaps: dict[str, dict[str, None]] = {}
        for locale in locales:
            lang_key = charset_key(locale)
            names = table.get(lang_key) if lang_key else None
            if not names:
                continue
            for name in names:
                charsets[name] = None
            if wants_charmaps:
                bucket = charmaps.setdefault(lang_key, {})
                for name in names:
                    bucket[name] = None

        resolved: list[tuple[PartKey, DataEntry]] = []
        if not charsets:
            return resolved

        aliases = self._load(CHARSET_ALIASES_DOCUMENT)
        if aliases is not None:
            resolved.append((
                ROOT_PART,
                DataEntry(
                    key="charsetaliases",
                    category=CHARSET_CATEGORY,
                    target=f"{RUNTIME_NAMESPACE}.charsetaliases",
                    payload=aliases,
                ),
            ))

        optional: set[str] = set()
        for name in charsets:
            document = self._load(_document_path(CHARSET_DIRECTORY, name))
            if document is None:
                continue
            resolved.append((
                ROOT_PART,
                DataEntry(
                    key=name,
                    category=CHARSET_CATEGORY,
                    target=f"{RUNTIME_NAMESPACE}.charset_{data_name(name)}",
                    payload=document,
                ),
            ))
            if isinstance(document, Mapping) and document.get("optional") is True:
                optional.add(name)

        for lang_key, names in charmaps.items():
            part = ROOT_PART if lang_key == WILDCARD_LOCALE else lang_key
            for name in names:
                if name in optional:
                    logger.debug("Skipping charmap for optional charset %s", name)
                    continue
                document = self._load(_document_path(CHARMAPS_DIRECTORY, name))
                if document is None:
                    continue
                resolved.append((
                    part,
                    DataEntry(
                        key=f"{CHARMAPS_CATEGORY}/{name}",
                        category=CHARMAPS_CATEGORY,
                        target=f"{RUNTIME_NAMESPACE}.charmaps_{data_name(name)}",
                        payload=document,
                    ),
                ))
        return resolved

    # ------------------------------------------------------------------
    # zoneinfo
    # ------------------------------------------------------------------

    def resolve_zoneinfo(self, locales: Iterable[LocaleCode]) -> list[DataEntry]:
        """Resolve time zone data for the target locales.

        Includes the region-to-zones table itself, the zones of every region
        among the target locales, and every generic zone in the zone
        directory and its Etc subdirectory, whether or not any requested
        region uses them.

        Args:
            locales: Target locales

        Returns:
            Entries, all destined for root
        """
        resolved: dict[str, DataEntry] = {}

        zonetab = self._load(f"{ZONEINFO_DIRECTORY}/{ZONETAB_DOCUMENT}")
        if zonetab is not None:
            resolved["zonetab"] = DataEntry(
                key="zonetab",
                category=ZONEINFO_CATEGORY,
                target=f"{RUNTIME_NAMESPACE}.{ZONEINFO_CATEGORY}.zonetab",
                payload=zonetab,
            )

        zones: dict[str, None] = {}
        if isinstance(zonetab, Mapping):
            regions: dict[str, None] = {}
            for locale in locales:
                tag = LocaleTag.parse(locale)
                if tag is not None and tag.region:
                    regions[tag.region] = None
            for region in regions:
                for zone in zonetab.get(region) or ():
                    zones[zone] = None

        for name in self._list(ZONEINFO_DIRECTORY):
            if name != ZONETAB_DOCUMENT:
                zones[name[: -len(DOCUMENT_SUFFIX)]] = None
        for name in self._list(f"{ZONEINFO_DIRECTORY}/{GENERIC_ZONE_SUBDIRECTORY}"):
            zones[f"{GENERIC_ZONE_SUBDIRECTORY}/{name[: -len(DOCUMENT_SUFFIX)]}"] = None

        for zone in zones:
            if zone in resolved:
                continue
            document = self._load(_document_path(ZONEINFO_DIRECTORY, zone))
            if document is None:
                continue
            resolved[zone] = DataEntry(
                key=zone,
                category=ZONEINFO_CATEGORY,
                target=f'{RUNTIME_NAMESPACE}.{ZONEINFO_CATEGORY}["{zone_name(zone)}"]',
                payload=document,
            )
        return list(resolved.values())

    # ------------------------------------------------------------------
    # Normalization forms
    # ------------------------------------------------------------------

    def resolve_normalization(
        self,
        tokens: Iterable[CategoryToken],
        scripts: Iterable[str],
    ) -> list[DataEntry]:
        """Resolve normalization tables per form and writing script.

        For each requested form:
        - the 'all' qualifier resolves only the aggregate all-scripts
          document, since it already contains every script;
        - otherwise each explicitly qualified script is resolved, and an
          unqualified request adds every script implied by the target
          locales.

        Args:
            tokens: Requested tokens; only NORMALIZATION kind is considered
            scripts: Scripts implied by the target locales, in locale order

        Returns:
            Entries, all destined for root, merged into ilib.data.norm.<form>
        """
        qualifiers: dict[str, set[str]] = {}
        for token in tokens:
            if token.kind is CategoryKind.NORMALIZATION:
                qualifiers.setdefault(token.form, set()).add(token.qualifier)

        implied = list(dict.fromkeys(scripts))
        resolved: list[DataEntry] = []
        for form in NORMALIZATION_FORMS:
            requested = qualifiers.get(form)
            if requested is None:
                continue
            if ALL_SCRIPTS in requested:
                selected = [ALL_SCRIPTS]
            else:
                selected = sorted(requested - {""})
                if "" in requested:
                    selected.extend(s for s in implied if s not in selected)

            for script in selected:
                document = self._load(_document_path(form, script))
                if document is None:
                    continue
                logger.debug("Including %s for script %s", form, script)
                resolved.append(
                    DataEntry(
                        key=f"{form}/{script}",
                        category=form,
                        target=f"{RUNTIME_NAMESPACE}.norm.{form}",
                        payload=document,
                        merge=True,
                        comment=f"form {form} script {script}",
                    )
                )
        return resolved

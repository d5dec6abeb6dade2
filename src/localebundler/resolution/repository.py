"""Locale data repository access.

Provides the protocol for read-only locale data repositories, a filesystem
implementation with path-traversal security, repository discovery, and
result/summary data structures for tracking document reads.

Components:
    DataRepository - Protocol for reading repository documents (structural typing)
    PathDataRepository - Disk-based repository with path-traversal prevention
    repository_path - Layout directory for a compilation mode and size profile
    find_repository_root - Discovery of an installed locale data package
    DocumentLoadResult - Immutable result of a single document read
    ResolutionSummary - Immutable aggregate of all reads made while planning

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from localebundler.constants import DEFAULT_SIZE, DOCUMENT_SUFFIX
from localebundler.enums import CompilationMode, LoadStatus
from localebundler.errors import ConfigurationError
from localebundler.types import DocumentPath

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "DataRepository",
    # Concrete repository
    "PathDataRepository",
    # Layout and discovery
    "repository_path",
    "find_repository_root",
    # Load result types
    "DocumentLoadResult",
    "ResolutionSummary",
]

# Installed package providing the locale data tree
_DATA_PACKAGE = Path("node_modules") / "ilib"


class DataRepository(Protocol):
    """Protocol for read-only access to locale data documents.

    Paths are repository-relative and '/'-separated
    (e.g., 'fr/numberformats.json', 'zoneinfo/Etc/GMT+1.json').
    Implementations must tolerate concurrent reads without locking.
    """

    def exists(self, path: DocumentPath) -> bool:
        """Check whether a document exists at path."""

    def read(self, path: DocumentPath) -> str:
        """Read document text.

        Raises:
            FileNotFoundError: If no document exists at path
            OSError: If the document cannot be read
        """

    def list_documents(self, directory: DocumentPath) -> list[str]:
        """List document file names (with suffix) directly inside directory.

        Returns an empty list if the directory does not exist.
        """

    def describe_path(self, path: DocumentPath) -> str:
        """Return human-readable path for diagnostics."""
        return path


@dataclass(frozen=True, slots=True)
class PathDataRepository:
    """File system locale data repository.

    Implements DataRepository for a directory tree of JSON documents.

    Security:
        Document paths containing '..' or absolute paths are rejected.
        All resolved paths are validated against the fixed root directory.

    Example:
        >>> repo = PathDataRepository("node_modules/ilib/js/locale")
        >>> repo.exists("fr/numberformats.json")
        True

    Attributes:
        root: Directory containing the locale data tree
    """

    root: str
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory."""
        object.__setattr__(self, "_resolved_root", Path(self.root).resolve())

    def _resolve(self, path: DocumentPath) -> Path:
        """Resolve a repository-relative path, rejecting traversal.

        Raises:
            ValueError: If path is absolute or escapes the root directory
        """
        if Path(path).is_absolute() or path.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in document path: '{path}'"
            raise ValueError(msg)
        if ".." in Path(path).parts:
            msg = f"Path traversal sequences not allowed in document path: '{path}'"
            raise ValueError(msg)
        full_path = (self._resolved_root / path).resolve()
        try:
            full_path.relative_to(self._resolved_root)
        except ValueError:
            msg = f"Path traversal detected: '{path}' escapes repository root"
            raise ValueError(msg) from None
        return full_path

    def exists(self, path: DocumentPath) -> bool:
        """Check whether a document exists at path."""
        return self._resolve(path).is_file()

    def read(self, path: DocumentPath) -> str:
        """Read document text as UTF-8."""
        return self._resolve(path).read_text(encoding="utf-8")

    def list_documents(self, directory: DocumentPath) -> list[str]:
        """List JSON document names directly inside directory, sorted."""
        base = self._resolve(directory) if directory else self._resolved_root
        if not base.is_dir():
            return []
        return sorted(
            entry.name
            for entry in base.iterdir()
            if entry.is_file() and entry.name.endswith(DOCUMENT_SUFFIX)
        )

    def describe_path(self, path: DocumentPath) -> str:
        """Return the absolute filesystem path of a document."""
        return str(self._resolved_root / path)


def repository_path(
    root: str | Path,
    compilation: CompilationMode = CompilationMode.UNCOMPILED,
    size: str = DEFAULT_SIZE,
) -> Path:
    """Return the locale data directory inside a data package.

    Args:
        root: Root of the locale data package
        compilation: Layout selector
        size: Data-size profile (compiled layout only)

    Returns:
        Directory containing the locale data tree

    Example:
        >>> repository_path("/opt/ilib")
        PosixPath('/opt/ilib/js/locale')
        >>> repository_path("/opt/ilib", CompilationMode.COMPILED, "full")
        PosixPath('/opt/ilib/js/output/full/locale')
    """
    base = Path(root)
    if compilation is CompilationMode.COMPILED:
        return base / "js" / "output" / size / "locale"
    return base / "js" / "locale"


def find_repository_root(start: str | Path | None = None) -> Path:
    """Locate an installed locale data package.

    Walks from start (default: current directory) up to the filesystem root
    looking for node_modules/ilib/package.json.

    Returns:
        Root directory of the data package

    Raises:
        ConfigurationError: If no data package can be found
    """
    current = Path(start).resolve() if start is not None else Path.cwd().resolve()
    for directory in (current, *current.parents):
        candidate = directory / _DATA_PACKAGE
        if (candidate / "package.json").is_file():
            return candidate
    msg = (
        f"No locale data repository found above {current}. "
        "Install the data package or set the repository_root option."
    )
    raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class DocumentLoadResult:
    """Result of reading a single repository document.

    Attributes:
        path: Repository-relative document path
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
        source_path: Human-readable path to the document
    """

    path: DocumentPath
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None

    @property
    def is_success(self) -> bool:
        """Check if the document was read and parsed."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if the document does not exist (not an error)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the document exists but failed to load."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class ResolutionSummary:
    """Immutable aggregate of document reads made while building a plan.

    Only documents that exist are read, so successful and failed reads are
    tracked; misses leave no trace unless a loader reports them.

    Attributes:
        results: All individual load results (immutable tuple)

    Example:
        >>> summary = plan.summary
        >>> for result in summary.get_errors():
        ...     print(f"Skipped {result.source_path}: {result.error}")
    """

    results: tuple[DocumentLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"ResolutionSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of read attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of documents read and parsed."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of documents that disappeared between check and read."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of unreadable or malformed documents."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def has_errors(self) -> bool:
        """Check if any document failed to load."""
        return self.errors > 0

    def get_errors(self) -> tuple[DocumentLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_successful(self) -> tuple[DocumentLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

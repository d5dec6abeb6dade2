"""Exception hierarchy for localebundler.

Hierarchy:
    LocaleBundlerError (base)
    ├─ ConfigurationError (missing collaborator; fatal)
    ├─ RepositoryReadError (unreadable or malformed document; recovered locally)
    └─ EmissionError (artifact could not be written; fatal for the trigger unit)

Resolution misses are not errors and have no exception type: a category with
no document at a part is simply absent from the plan.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "EmissionError",
    "LocaleBundlerError",
    "RepositoryReadError",
]


class LocaleBundlerError(Exception):
    """Base exception for all localebundler errors."""


class ConfigurationError(LocaleBundlerError):
    """A required collaborator is missing.

    Examples:
    - Planner invoked without a request aggregator
    - Rewriter constructed without a build context
    - No repository root given and none could be discovered

    Aborts the build step that triggered it.
    """


class RepositoryReadError(LocaleBundlerError):
    """A repository document exists but cannot be read or parsed.

    Never escapes the resolver: the document is logged, recorded in the
    plan's resolution summary and skipped.

    Attributes:
        path: Human-readable path of the offending document
    """

    def __init__(self, message: str, *, path: str) -> None:
        """Initialize RepositoryReadError.

        Args:
            message: Human-readable error description
            path: Path of the offending document
        """
        super().__init__(message)
        self.path = path


class EmissionError(LocaleBundlerError):
    """An output artifact or the manifest could not be written.

    Generated loader code would reference a file that does not exist, so
    the trigger unit that caused the emission fails.

    Attributes:
        path: Output path that could not be created or written
    """

    def __init__(self, message: str, *, path: str) -> None:
        """Initialize EmissionError.

        Args:
            message: Human-readable error description
            path: Output path that failed
        """
        super().__init__(message)
        self.path = path

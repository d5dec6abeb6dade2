"""Build-wide aggregation of category requests.

Every source unit in a build reports the categories it needs; the
RequestAggregator collects them into one set shared by the whole build.
Units run as independent tasks in any order, so recording is thread-safe
and order-independent: any permutation of the same record() calls yields
the same snapshot.

Lifecycle:
    created empty at build start -> grows as units are scanned ->
    sealed when the first trigger finalizes -> read, never mutated.

Requests are never retracted. A request arriving after the seal cannot be
honored by the already-computed plan; it is logged and kept aside in
late_requests so the host can detect under-collection.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from localebundler.resolution.categories import CategoryToken, classify
from localebundler.types import CategoryName

__all__ = ["RequestAggregator"]

logger = logging.getLogger(__name__)


class RequestAggregator:
    """Thread-safe, append-only set of category requests for one build.

    Example:
        >>> requests = RequestAggregator()
        >>> requests.record("dateformats")
        True
        >>> requests.record("dateformats")
        False
        >>> sorted(t.name for t in requests.snapshot())
        ['dateformats']
    """

    __slots__ = ("_late", "_lock", "_sealed", "_tokens")

    def __init__(self) -> None:
        """Initialize an empty request set."""
        # Coarse lock around O(1) set operations
        self._lock = threading.Lock()
        self._tokens: dict[CategoryName, CategoryToken] = {}
        self._late: dict[CategoryName, CategoryToken] = {}
        self._sealed = False

    def record(self, name: CategoryName) -> bool:
        """Record a category request.

        The name is classified once here; duplicates are no-ops.

        Args:
            name: Category name from a !data directive

        Returns:
            True if the request was new, False if already recorded or the
            set is sealed
        """
        if not name:
            return False
        with self._lock:
            if name in self._tokens:
                return False
            if self._sealed:
                if name not in self._late:
                    self._late[name] = classify(name)
                    logger.warning(
                        "Category '%s' requested after locale data was finalized; "
                        "it is not included in this build",
                        name,
                    )
                return False
            self._tokens[name] = classify(name)
            logger.debug("Recorded category request: %s", name)
            return True

    def record_many(self, names: Iterable[CategoryName]) -> int:
        """Record several category requests.

        Returns:
            Number of requests that were new
        """
        return sum(1 for name in names if self.record(name))

    def snapshot(self) -> frozenset[CategoryToken]:
        """Return the current requests without mutating the set."""
        with self._lock:
            return frozenset(self._tokens.values())

    def seal(self) -> frozenset[CategoryToken]:
        """Freeze the request set and return its final contents.

        Idempotent: later calls return the same snapshot.
        """
        with self._lock:
            self._sealed = True
            return frozenset(self._tokens.values())

    @property
    def sealed(self) -> bool:
        """Check if the request set has been finalized."""
        with self._lock:
            return self._sealed

    @property
    def late_requests(self) -> frozenset[CategoryToken]:
        """Requests that arrived after the seal and were not honored."""
        with self._lock:
            return frozenset(self._late.values())

    def __len__(self) -> int:
        """Return the number of recorded requests."""
        with self._lock:
            return len(self._tokens)

    def __contains__(self, name: object) -> bool:
        """Check if a category name has been recorded."""
        with self._lock:
            return name in self._tokens

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"RequestAggregator(requests={len(self)}, sealed={self.sealed})"

"""Per-build context: shared request state, completion barrier, finalize.

A BuildContext is created once per build and passed explicitly to every
unit-processing call. It owns the only mutable state shared between units:
the request aggregator, the memoized plan and the emitter's EmittedSet.
Independent builds in the same process use independent contexts.

Completion barrier:
    A trigger unit must not finalize before every other unit has recorded
    its requests. Two strategies are supported:

    - Explicit (explicit_barrier=True): the host calls
      mark_units_enumerated() once every non-trigger unit has been scanned,
      and triggers wait for that signal.
    - Heuristic (default): with no signal, a trigger waits a fixed
      quiescence delay so that concurrently scheduled units can finish
      recording. This is a soft guarantee: under heavy load a slow unit may
      record after finalization. Such requests are reported by
      RequestAggregator.late_requests rather than silently dropped.

Finalization:
    finalize() is mutually exclusive across concurrent triggers. The first
    call seals the request set and computes the plan; every call emits
    (write-once) and returns the same part list.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
import time

from localebundler.assembly.aggregator import RequestAggregator
from localebundler.assembly.emitter import BundleEmitter
from localebundler.assembly.planner import BundlePlan, BundlePlanner
from localebundler.config import BuildOptions
from localebundler.resolution.repository import (
    DataRepository,
    PathDataRepository,
    find_repository_root,
    repository_path,
)

__all__ = ["BuildContext"]

logger = logging.getLogger(__name__)


class BuildContext:
    """State shared by every unit of one build.

    Thread Safety:
        All methods are thread-safe. record() traffic goes through the
        aggregator's lock; finalize() is serialized by its own lock.

    Example:
        >>> context = BuildContext(BuildOptions(locales=("en-US", "fr-FR")),
        ...                        repository=PathDataRepository("ilib/js/locale"))
        >>> context.requests.record("numberformats")
        True
        >>> context.finalize()
        ('root', 'fr', 'ilibmanifest')
    """

    __slots__ = (
        "_emitter",
        "_explicit_barrier",
        "_finalize_lock",
        "_options",
        "_plan",
        "_repository",
        "_requests",
        "_units_enumerated",
    )

    def __init__(
        self,
        options: BuildOptions | None = None,
        *,
        repository: DataRepository | None = None,
        explicit_barrier: bool = False,
    ) -> None:
        """Initialize build context.

        Args:
            options: Build options (defaults apply when None)
            repository: Locale data repository. None opens the repository
                selected by the options on first use.
            explicit_barrier: Wait for mark_units_enumerated() instead of the
                quiescence delay before finalizing
        """
        self._options = options if options is not None else BuildOptions()
        self._repository = repository
        self._explicit_barrier = explicit_barrier
        self._requests = RequestAggregator()
        self._emitter = BundleEmitter(
            self._options.locales_dir,
            self._options.assembly,
            module_root=self._options.module_root,
        )
        self._units_enumerated = threading.Event()
        self._finalize_lock = threading.Lock()
        self._plan: BundlePlan | None = None

    @property
    def options(self) -> BuildOptions:
        """Build options."""
        return self._options

    @property
    def requests(self) -> RequestAggregator:
        """Build-wide request aggregator."""
        return self._requests

    @property
    def emitter(self) -> BundleEmitter:
        """Artifact emitter owning the EmittedSet."""
        return self._emitter

    @property
    def plan(self) -> BundlePlan | None:
        """Memoized plan, or None before the first finalize()."""
        return self._plan

    @property
    def explicit_barrier(self) -> bool:
        """Whether triggers wait for mark_units_enumerated()."""
        return self._explicit_barrier

    @property
    def repository(self) -> DataRepository:
        """Locale data repository, opened on first access.

        Raises:
            ConfigurationError: If no repository root is configured and none
                can be discovered
        """
        if self._repository is None:
            root = self._options.repository_root or find_repository_root()
            directory = repository_path(root, self._options.compilation, self._options.size)
            logger.info("Using locale data repository %s", directory)
            self._repository = PathDataRepository(str(directory))
        return self._repository

    @property
    def units_enumerated(self) -> bool:
        """Whether the host has signalled that all units were scanned."""
        return self._units_enumerated.is_set()

    def mark_units_enumerated(self) -> None:
        """Signal that every non-trigger unit has recorded its requests."""
        self._units_enumerated.set()

    def await_barrier(self, timeout: float | None = None) -> bool:
        """Block until requests are complete enough to finalize.

        Returns immediately once mark_units_enumerated() has been called.
        With an explicit barrier, waits for that signal; otherwise sleeps the
        configured quiescence delay.

        Args:
            timeout: Maximum seconds to wait for an explicit signal.
                None waits indefinitely. Ignored for the heuristic barrier.

        Returns:
            True if the completion signal was observed
        """
        if self._units_enumerated.is_set():
            return True
        if self._explicit_barrier:
            return self._units_enumerated.wait(timeout)
        time.sleep(self._options.quiescence_delay)
        return self._units_enumerated.is_set()

    def finalize(self) -> tuple[str, ...]:
        """Plan once, emit write-once, and return the emitted part list.

        Returns:
            Part keys of the plan followed by the manifest pseudo-entry

        Raises:
            ConfigurationError: If the repository cannot be located
            EmissionError: If an artifact cannot be written
        """
        with self._finalize_lock:
            if self._plan is None:
                planner = BundlePlanner(self.repository, self._options.locales)
                self._plan = planner.plan(self._requests)
            return self._emitter.emit(self._plan)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"BuildContext(locales={len(self._options.locales)}, "
            f"assembly={self._options.assembly!s}, "
            f"requests={len(self._requests)}, "
            f"finalized={self._plan is not None})"
        )

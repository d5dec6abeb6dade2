"""Reference host pipeline for running a whole build.

Hosts with their own build graph drive BuildContext and DirectiveRewriter
directly. run_build() is a self-contained driver for scripts and tests: it
processes every unit on a thread pool and gives trigger units the explicit
completion signal once all other units have been scanned, so no request
can be missed.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from localebundler.assembly.context import BuildContext
from localebundler.assembly.rewriter import DirectiveRewriter
from localebundler.config import BuildOptions
from localebundler.resolution.repository import DataRepository

__all__ = ["BuildResult", "run_build"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Outcome of run_build().

    Attributes:
        outputs: Unit name -> rewritten source
        parts: Emitted part list (plan parts plus the manifest entry);
            empty if no unit contained a trigger
        context: The build context, for inspecting the plan and requests
    """

    outputs: Mapping[str, str]
    parts: tuple[str, ...]
    context: BuildContext


def run_build(
    units: Mapping[str, str],
    options: BuildOptions | None = None,
    *,
    repository: DataRepository | None = None,
    max_workers: int = 8,
) -> BuildResult:
    """Rewrite every unit of a build and emit its locale data.

    Non-trigger units are processed concurrently; trigger units are
    submitted alongside them and block on the build's explicit barrier,
    which is released once every non-trigger unit has finished.

    Args:
        units: Unit name -> source text
        options: Build options (defaults apply when None)
        repository: Locale data repository override
        max_workers: Thread pool size (at least 2 when triggers are present)

    Returns:
        BuildResult with rewritten sources

    Raises:
        ConfigurationError: If the repository cannot be located
        EmissionError: If an artifact cannot be written
        ValueError: If max_workers is not positive
    """
    if max_workers <= 0:
        msg = f"max_workers must be positive, got {max_workers}"
        raise ValueError(msg)

    context = BuildContext(options, repository=repository, explicit_barrier=True)
    rewriter = DirectiveRewriter(context)
    triggers = [name for name, source in units.items() if rewriter.has_trigger(source)]
    trigger_set = set(triggers)
    scanners = [name for name in units if name not in trigger_set]
    # Blocked triggers must not starve the scanners of workers
    workers = max_workers + len(triggers)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        trigger_futures = {
            name: executor.submit(rewriter.rewrite, units[name], name) for name in triggers
        }
        scanner_futures = {
            name: executor.submit(rewriter.rewrite, units[name], name) for name in scanners
        }
        try:
            outputs = {name: future.result() for name, future in scanner_futures.items()}
        finally:
            # Release triggers even when a scanner failed so the pool can shut down
            context.mark_units_enumerated()
        for name, future in trigger_futures.items():
            outputs[name] = future.result()

    logger.info(
        "Build processed %d units (%d triggers), %d categories requested",
        len(units),
        len(triggers),
        len(context.requests),
    )
    ordered = {name: outputs[name] for name in units}
    return BuildResult(
        outputs=ordered,
        parts=context.finalize() if triggers else (),
        context=context,
    )

"""Locale data assembly package.

Aggregates requests across a build, plans and emits part artifacts, and
rewrites source units.

Submodules:
    aggregator - RequestAggregator (build-wide, thread-safe request set)
    planner    - BundlePlanner, BundlePlan
    emitter    - BundleEmitter, artifact rendering
    context    - BuildContext (shared state, barrier, finalize)
    rewriter   - DirectiveRewriter

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from localebundler.assembly.aggregator import RequestAggregator
from localebundler.assembly.context import BuildContext
from localebundler.assembly.emitter import BundleEmitter, render_artifact, render_entry
from localebundler.assembly.planner import BundlePlan, BundlePlanner
from localebundler.assembly.rewriter import DirectiveRewriter

__all__ = [
    # Shared build state
    "BuildContext",
    "RequestAggregator",
    # Planning
    "BundlePlan",
    "BundlePlanner",
    # Emission
    "BundleEmitter",
    "render_artifact",
    "render_entry",
    # Source rewriting
    "DirectiveRewriter",
]

"""localebundler - Locale data assembly for compiled application bundles.

Collects the locale data categories that source units request through
embedded annotations, resolves them for every configured locale against a
locale data repository, and emits one deduplicated artifact per locale
hierarchy part, written at most once per build.

Public API:
    BuildOptions - Build configuration
    BuildContext - Per-build shared state, completion barrier and finalize
    DirectiveRewriter - Source unit scanning and rewriting
    run_build - Reference host pipeline for a whole build
    decompose - Locale identifier -> hierarchy part keys

Exceptions:
    LocaleBundlerError - Base exception class
    ConfigurationError - Missing collaborator
    RepositoryReadError - Unreadable or malformed repository document
    EmissionError - Artifact could not be written

Submodules:
    localebundler.resolution - Category classification, repository access, resolver
    localebundler.assembly - Aggregation, planning, emission, rewriting
    localebundler.locale_utils - Locale parsing and decomposition
"""

# Essential Public API - Minimal exports for clean namespace
from .assembly import BuildContext, DirectiveRewriter
from .build import BuildResult, run_build
from .config import BuildOptions
from .errors import ConfigurationError, EmissionError, LocaleBundlerError, RepositoryReadError
from .locale_utils import decompose

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("localebundler")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BuildContext",
    "BuildOptions",
    "BuildResult",
    "ConfigurationError",
    "DirectiveRewriter",
    "EmissionError",
    "LocaleBundlerError",
    "RepositoryReadError",
    "__version__",
    "decompose",
    "run_build",
]

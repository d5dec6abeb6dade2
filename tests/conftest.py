"""Pytest configuration for the localebundler test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 200 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz

Fixtures:
- data_root: a small on-disk locale data tree laid out like the real
  repository (ordinary categories, charsets, charmaps, zoneinfo and
  normalization tables)
- repository: PathDataRepository over data_root
- make_context: factory for BuildContext instances writing into tmp_path
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from localebundler.assembly.context import BuildContext
from localebundler.config import BuildOptions
from localebundler.resolution.repository import PathDataRepository

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# LOCALE DATA FIXTURES
# =============================================================================

# Repository-relative path -> document. Strings are written verbatim
# (used for malformed documents); everything else is written as JSON.
SAMPLE_DOCUMENTS: dict[str, Any] = {
    # Ordinary categories
    "numberformats.json": {"decimalChar": ".", "groupChar": ",", "pctFmt": "{n}%"},
    "fr/numberformats.json": {"decimalChar": ",", "groupChar": " "},
    "dateformats.json": {"gregorian": {"order": "{date} {time}", "date": "short"}},
    "en/dateformats.json": {"gregorian": {"date": "M/d/yy"}},
    "en/GB/dateformats.json": {"gregorian": {"date": "dd/MM/yyyy"}},
    "und/US/currency.json": {"currency": "USD"},
    "und/FR/currency.json": {"currency": "EUR"},
    "zh/Hant/TW/sysres.json": {"yes": "是"},
    # Charsets
    "lang2charset.json": {
        "en": ["US-ASCII", "ISO-8859-1"],
        "fr": ["ISO-8859-1", "ISO-8859-15"],
        "zh-Hans": ["GB2312"],
        "*": ["UTF-8"],
    },
    "charsetaliases.json": {"ascii": "US-ASCII", "latin1": "ISO-8859-1"},
    "charset/US-ASCII.json": {"name": "US-ASCII", "min": 1, "max": 1},
    "charset/ISO-8859-1.json": {"name": "ISO-8859-1", "min": 1, "max": 1},
    "charset/ISO-8859-15.json": {"name": "ISO-8859-15", "optional": True},
    "charset/GB2312.json": {"name": "GB2312", "min": 1, "max": 2},
    "charset/UTF-8.json": {"name": "UTF-8", "min": 1, "max": 4},
    "charmaps/US-ASCII.json": {"from": {"A": [65]}},
    "charmaps/ISO-8859-1.json": {"from": {"é": [233]}},
    "charmaps/ISO-8859-15.json": {"from": {"€": [164]}},
    "charmaps/GB2312.json": {"from": {"中": [214, 208]}},
    "charmaps/UTF-8.json": {"from": {}},
    # Time zones
    "zoneinfo/zonetab.json": {
        "US": ["America/New_York", "America/Chicago"],
        "FR": ["Europe/Paris"],
    },
    "zoneinfo/America/New_York.json": {"o": "-5:0", "f": "E{c}T"},
    "zoneinfo/America/Chicago.json": {"o": "-6:0", "f": "C{c}T"},
    "zoneinfo/Europe/Paris.json": {"o": "1:0", "f": "CE{c}T"},
    "zoneinfo/UTC.json": {"o": "0:0", "f": "UTC"},
    "zoneinfo/Etc/GMT+1.json": {"o": "-1:0", "f": "GMT-1"},
    "zoneinfo/Etc/GMT-10.json": {"o": "10:0", "f": "GMT+10"},
    # Normalization tables
    "nfc/all.json": {"ccc": {"all": 1}},
    "nfc/Latn.json": {"ccc": {"Latn": 1}},
    "nfc/Cyrl.json": {"ccc": {"Cyrl": 1}},
    "nfc/Hans.json": {"ccc": {"Hans": 1}},
    "nfd/Latn.json": {"decomp": {"Latn": 1}},
    "nfd/Cyrl.json": {"decomp": {"Cyrl": 1}},
}


def write_documents(root: Path, documents: dict[str, Any]) -> Path:
    """Write a locale data tree under root and return root."""
    for relative, document in documents.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Directory holding the sample locale data tree."""
    return write_documents(tmp_path / "data", SAMPLE_DOCUMENTS)


@pytest.fixture
def repository(data_root: Path) -> PathDataRepository:
    """Repository over the sample locale data tree."""
    return PathDataRepository(str(data_root))


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Output root for emitted artifacts."""
    return tmp_path / "out"


@pytest.fixture
def make_context(
    repository: PathDataRepository, output_dir: Path
) -> Callable[..., BuildContext]:
    """Factory for build contexts over the sample repository.

    Keyword arguments are BuildOptions fields; explicit_barrier is passed to
    the context. The quiescence delay defaults to zero to keep tests fast.
    """

    def factory(*, explicit_barrier: bool = False, **option_values: Any) -> BuildContext:
        option_values.setdefault("output_dir", str(output_dir))
        option_values.setdefault("quiescence_delay", 0.0)
        options = BuildOptions(**option_values)
        return BuildContext(options, repository=repository, explicit_barrier=explicit_barrier)

    return factory

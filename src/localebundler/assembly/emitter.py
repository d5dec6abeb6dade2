"""Serialization and write-once emission of part artifacts.

Each planned part becomes one JavaScript module under
<output>/locales/<part>.js, in one of two encodings:

- Immediate effect (assembled builds): the module requires the runtime and
  installs every payload into its data namespace as soon as it is loaded.
- Deferred installer (dynamic builds): the module exports
  installLocale(ilib), which the runtime loader calls when the part is
  needed, so parts can be fetched lazily.

A manifest (<output>/locales/ilibmanifest.json) lists every emitted part
and is written once per build.

Write-once semantics:
    The emitter tracks the parts it has written (the EmittedSet). The
    check-then-write for each part happens under a lock, so concurrent or
    repeated emit() calls in one build write every artifact exactly once.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from localebundler.constants import (
    ARTIFACT_SUFFIX,
    DEFAULT_MODULE_ROOT,
    MANIFEST_NAME,
    MANIFEST_SUFFIX,
    ROOT_PART,
)
from localebundler.enums import AssemblyMode
from localebundler.errors import EmissionError
from localebundler.resolution.documents import serialize_document
from localebundler.resolution.resolver import DataEntry
from localebundler.types import PartKey

if TYPE_CHECKING:
    from localebundler.assembly.planner import BundlePlan

__all__ = ["BundleEmitter", "render_artifact", "render_entry"]

logger = logging.getLogger(__name__)

_GENERATED_HEADER = (
    "/*\n"
    " * WARNING: this is a file generated by localebundler.\n"
    " * Do not hand edit or else your changes may be overwritten and lost.\n"
    " */\n"
)

_ROOT_COMMENT = "// root of the locale hierarchy: data shared by every locale\n"


def render_entry(entry: DataEntry) -> str:
    """Render one data entry as a JavaScript statement.

    Example:
        >>> render_entry(DataEntry("numberformats", "numberformats",
        ...                        "ilib.data.numberformats_fr", {"decimalChar": ","}))
        'ilib.data.numberformats_fr = {"decimalChar":","};\\n'
    """
    payload = serialize_document(entry.payload)
    statement = (
        f"ilib.extend({entry.target}, {payload});\n"
        if entry.merge
        else f"{entry.target} = {payload};\n"
    )
    if entry.comment:
        return f"// {entry.comment}\n{statement}"
    return statement


def render_artifact(
    part: PartKey,
    entries: Iterable[DataEntry],
    assembly: AssemblyMode = AssemblyMode.ASSEMBLED,
    module_root: str = DEFAULT_MODULE_ROOT,
) -> str:
    """Render the JavaScript module for one part.

    Args:
        part: Part key
        entries: Entries planned for the part, in order
        assembly: ASSEMBLED for immediate effect, otherwise a deferred
            installLocale(ilib) installer
        module_root: Module path of the runtime package for require()

    Returns:
        Module source text
    """
    deferred = assembly is not AssemblyMode.ASSEMBLED
    output = [_GENERATED_HEADER]
    if part == ROOT_PART:
        output.append(_ROOT_COMMENT)
    output.append(
        "module.exports.installLocale = function(ilib) {\n"
        if deferred
        else f"var ilib = require('{module_root}/lib/ilib.js');\n"
    )
    output.extend(render_entry(entry) for entry in entries)
    output.append("};\n" if deferred else "module.exports = ilib;\n")
    return "".join(output)


class BundleEmitter:
    """Writes plan artifacts and the manifest, each at most once per build.

    Thread Safety:
        emit() is serialized by an internal lock; the EmittedSet check and
        the write it guards are atomic relative to other emit() calls.

    Example:
        >>> emitter = BundleEmitter("assets/locales", AssemblyMode.DYNAMIC)
        >>> emitter.emit(plan)
        ('root', 'fr', 'ilibmanifest')
        >>> emitter.emit(plan)  # no further writes
        ('root', 'fr', 'ilibmanifest')
    """

    __slots__ = (
        "_assembly",
        "_emitted",
        "_lock",
        "_locales_dir",
        "_manifest_written",
        "_module_root",
        "_writes",
    )

    def __init__(
        self,
        locales_dir: str | Path,
        assembly: AssemblyMode = AssemblyMode.ASSEMBLED,
        *,
        module_root: str = DEFAULT_MODULE_ROOT,
    ) -> None:
        """Initialize emitter.

        Args:
            locales_dir: Directory receiving <part>.js and the manifest
            assembly: Encoding selector
            module_root: Module path of the runtime package for require()
        """
        self._locales_dir = Path(locales_dir)
        self._assembly = AssemblyMode(assembly)
        self._module_root = module_root
        self._lock = threading.Lock()
        # dict as an insertion-ordered EmittedSet
        self._emitted: dict[PartKey, None] = {}
        self._manifest_written = False
        self._writes = 0

    @property
    def locales_dir(self) -> Path:
        """Directory receiving the artifacts."""
        return self._locales_dir

    @property
    def emitted(self) -> tuple[PartKey, ...]:
        """Parts written so far in this build, in write order."""
        with self._lock:
            return tuple(self._emitted)

    @property
    def writes(self) -> int:
        """Number of files physically written (artifacts plus manifest)."""
        with self._lock:
            return self._writes

    def artifact_path(self, part: PartKey) -> Path:
        """Output path of a part artifact (or of the manifest)."""
        suffix = MANIFEST_SUFFIX if part == MANIFEST_NAME else ARTIFACT_SUFFIX
        return self._locales_dir / f"{part}{suffix}"

    def emit(self, plan: BundlePlan) -> tuple[str, ...]:
        """Write every planned part not yet emitted, then the manifest.

        Args:
            plan: Completed bundle plan

        Returns:
            The plan's part keys followed by the manifest pseudo-entry;
            identical on every call for the same plan

        Raises:
            EmissionError: If the output directory or a file cannot be written
        """
        with self._lock:
            for part in plan.parts:
                if part in self._emitted:
                    continue
                source = render_artifact(
                    part, plan.entries(part), self._assembly, self._module_root
                )
                self._write(self.artifact_path(part), source)
                self._emitted[part] = None
                logger.info("Emitted locale data part %s (%d bytes)", part, len(source))

            if not self._manifest_written:
                manifest = {"files": [*self._emitted, MANIFEST_NAME]}
                self._write(
                    self.artifact_path(MANIFEST_NAME), json.dumps(manifest, indent=4) + "\n"
                )
                self._manifest_written = True

        return (*plan.parts, MANIFEST_NAME)

    def _write(self, path: Path, text: str) -> None:
        """Write one output file, creating directories as needed.

        Raises:
            EmissionError: On any filesystem failure
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write locale data artifact %s: %s", path, e)
            msg = f"Cannot write locale data artifact {path}: {e}"
            raise EmissionError(msg, path=str(path)) from e
        self._writes += 1
        logger.debug("Wrote %s", path)

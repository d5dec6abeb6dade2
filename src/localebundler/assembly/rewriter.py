"""Directive scanning and rewriting for source units.

Recognized directives:

    /* !data dateformats sysres */   records each category name
    // !data dateformats sysres      same, line form
    // !macro localelist             replaced with the configured locales
    "!macro ilibversion"             quoted form, replaced including quotes
    // !defineLocaleData             replaced with locale data setup code
    // !loadLocaleData               replaced with a per-part loader dispatch

Macro names are matched case-insensitively: localelist / locale-list
expand to a JSON array literal of the configured locales, and
ilibversion / version expand to a placeholder the host pipeline replaces
with the build version.

A unit without triggers only feeds the build's request aggregator and
returns at once. A unit with a trigger waits on the build context's
barrier, finalizes (plan once, emit write-once) and inlines code
generated from the emitted part list.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterable

from localebundler.assembly.context import BuildContext
from localebundler.constants import MANIFEST_NAME, ROOT_PART, VERSION_PLACEHOLDER
from localebundler.enums import AssemblyMode, TargetProfile
from localebundler.errors import ConfigurationError

__all__ = ["DirectiveRewriter"]

logger = logging.getLogger(__name__)

_DATA_BLOCK_PATTERN = re.compile(r"/\*\s*!data\s*([^*]+)\*/")
_DATA_LINE_PATTERN = re.compile(r"//\s*!data\s*([^\n]+)")

_MACRO_LINE_PATTERN = re.compile(r"//\s*!macro\s*(\S*)")
_MACRO_QUOTED_PATTERN = re.compile(r"[\"']!macro\s*(\S*)[\"']")

_DEFINE_PATTERN = re.compile(r"//\s*!defineLocaleData")
_LOAD_PATTERN = re.compile(r"//\s*!loadLocaleData")

_LOCALE_LIST_MACROS = frozenset({"localelist", "locale-list"})
_VERSION_MACROS = frozenset({"ilibversion", "version"})


class DirectiveRewriter:
    """Rewrites source units for one build.

    Stateless apart from the build context, so one rewriter may be shared
    by every worker thread of a build.

    Example:
        >>> rewriter = DirectiveRewriter(context)
        >>> rewriter.rewrite("// !data dateformats\\nvar x = 1;\\n")
        '// !data dateformats\\nvar x = 1;\\n'
        >>> "dateformats" in context.requests
        True
    """

    __slots__ = ("_context",)

    def __init__(self, context: BuildContext | None) -> None:
        """Initialize rewriter.

        Args:
            context: Build context shared by every unit of the build

        Raises:
            ConfigurationError: If context is None
        """
        if context is None:
            msg = (
                "DirectiveRewriter cannot run without a BuildContext. "
                "Create one per build and pass it to every unit."
            )
            raise ConfigurationError(msg)
        self._context = context

    @property
    def context(self) -> BuildContext:
        """Build context this rewriter feeds."""
        return self._context

    @staticmethod
    def has_trigger(source: str) -> bool:
        """Check if a unit contains a define or load trigger directive."""
        return bool(_DEFINE_PATTERN.search(source) or _LOAD_PATTERN.search(source))

    @staticmethod
    def scan_categories(source: str) -> list[str]:
        """Return every category name declared by !data directives, in order."""
        names: list[str] = []
        for pattern in (_DATA_BLOCK_PATTERN, _DATA_LINE_PATTERN):
            for match in pattern.finditer(source):
                names.extend(name for name in match.group(1).split() if name)
        return names

    def rewrite(self, source: str, resource: str | None = None) -> str:
        """Process one source unit.

        Args:
            source: Unit source text
            resource: Unit name for diagnostics

        Returns:
            Rewritten source text

        Raises:
            ConfigurationError: If a trigger needs the repository and none
                can be located
            EmissionError: If a trigger's artifacts cannot be written
        """
        options = self._context.options
        level = logging.INFO if options.debug else logging.DEBUG
        logger.log(level, "Processing unit %s", resource or "<anonymous>")

        self._context.requests.record_many(self.scan_categories(source))

        output = self._process_macros(_MACRO_LINE_PATTERN, source)
        output = self._process_macros(_MACRO_QUOTED_PATTERN, output)

        if not self.has_trigger(output):
            return output

        if not self._context.await_barrier():
            logger.log(
                level,
                "Finalizing locale data for %s after %.2fs quiescence delay",
                resource or "<anonymous>",
                options.quiescence_delay,
            )
        files = self._context.finalize()

        output = self._replace_first(_DEFINE_PATTERN, output, lambda: self._define_code(files))
        return self._replace_first(_LOAD_PATTERN, output, lambda: self._load_code(files))

    # ------------------------------------------------------------------
    # Macros
    # ------------------------------------------------------------------

    def _process_macros(self, pattern: re.Pattern[str], text: str) -> str:
        return pattern.sub(lambda match: self._expand_macro(match.group(1)), text)

    def _expand_macro(self, name: str) -> str:
        key = name.lower()
        if key in _LOCALE_LIST_MACROS:
            return json.dumps(list(self._context.options.locales))
        if key in _VERSION_MACROS:
            # Resolved to the real version later by the host pipeline
            return VERSION_PLACEHOLDER
        if name:
            logger.warning("Unknown macro '%s' removed", name)
        return ""

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    @staticmethod
    def _replace_first(
        pattern: re.Pattern[str], text: str, generate: Callable[[], str]
    ) -> str:
        match = pattern.search(text)
        if match is None:
            return text
        return text[: match.start()] + generate() + text[match.end() :]

    def _module_path(self, part: str) -> str:
        return self._context.emitter.artifact_path(part).as_posix()

    def _define_code(self, files: Iterable[str]) -> str:
        options = self._context.options
        if options.assembly is not AssemblyMode.ASSEMBLED:
            dyncode = "true" if options.assembly is AssemblyMode.DYNAMIC else "false"
            return (
                f"ilib.WebpackLoader = require('{options.module_root}/lib/WebpackLoader.js');\n"
                "ilib.setLoaderCallback(ilib.WebpackLoader(ilib));\n"
                f"ilib._dyncode = {dyncode};\n"
                "ilib._dyndata = true;\n"
            )

        output = []
        for part in files:
            if part == MANIFEST_NAME:
                continue
            name = "locale" + part.replace("-", "_")
            output.append(
                f"var {name} = require('{self._module_path(part)}'); "
                f"{name} && typeof({name}.installLocale) === 'function' && "
                f"{name}.installLocale(ilib);\n"
            )
        output.append("ilib._dyncode = false;\nilib._dyndata = false;\n")
        return "".join(output)

    def _load_code(self, files: Iterable[str]) -> str:
        web = self._context.options.target is TargetProfile.WEB
        output = []
        for part in files:
            if part == ROOT_PART:
                output.append("default:\n")
            path = self._module_path(part)
            fetch = (
                f"System.import(/* webpackChunkName: '{part}' */ '{path}')"
                if web
                else f"Promise.resolve(require('{path}'))"
            )
            output.append(f"        case '{part}':\n")
            output.append(f"            {fetch}.then(function(module) {{\n")
            if part != MANIFEST_NAME:
                output.append(
                    "                module && typeof(module.installLocale) === \"function\" "
                    "&& module.installLocale(ilib);\n"
                )
            output.append(
                "                callback(module);\n"
                "            });\n"
                "            break;\n"
            )
        return "".join(output)

"""Section classification for import statements.

Classification is a static lexical heuristic: require paths and mixin names
are compared against curated standard-library tables. Nothing is looked up
on disk or over the network, so an unlisted standard-library module is
reported as third party.
"""

import re
from typing import FrozenSet, Iterable, Optional

from .types import ImportKind, Section

# Ruby standard library require paths. Not exhaustive.
STDLIB_MODULES: FrozenSet[str] = frozenset(
    {
        "abbrev",
        "base64",
        "benchmark",
        "bigdecimal",
        "cgi",
        "csv",
        "date",
        "delegate",
        "digest",
        "drb",
        "english",
        "erb",
        "etc",
        "fcntl",
        "fiddle",
        "fileutils",
        "find",
        "forwardable",
        "getoptlong",
        "io/console",
        "io/nonblock",
        "io/wait",
        "ipaddr",
        "irb",
        "json",
        "logger",
        "matrix",
        "minitest",
        "monitor",
        "mutex_m",
        "net/ftp",
        "net/http",
        "net/https",
        "net/imap",
        "net/pop",
        "net/smtp",
        "nkf",
        "objspace",
        "observer",
        "open-uri",
        "open3",
        "openssl",
        "optparse",
        "ostruct",
        "pathname",
        "pp",
        "prettyprint",
        "prime",
        "pstore",
        "psych",
        "racc",
        "rake",
        "rdoc",
        "readline",
        "resolv",
        "ripper",
        "rss",
        "securerandom",
        "set",
        "shellwords",
        "singleton",
        "socket",
        "stringio",
        "strscan",
        "syslog",
        "tempfile",
        "time",
        "timeout",
        "tmpdir",
        "tracer",
        "tsort",
        "un",
        "uri",
        "weakref",
        "webrick",
        "yaml",
        "zlib",
    }
)

# Standard-library modules commonly mixed in; matched as name prefixes.
STDLIB_MIXINS = (
    "Comparable",
    "Enumerable",
    "Forwardable",
    "Observable",
    "Singleton",
    "MonitorMixin",
    "Mutex_m",
)

REQUIRE_PATH_PATTERN = re.compile(r"^require(?:\s+|\()['\"]([^'\"]+)['\"]")
MIXIN_NAME_PATTERN = re.compile(r"^(?:include|extend|using)(?:\s+|\()([A-Z]\w*(?:::\w+)*)")


def require_path(stripped: str) -> Optional[str]:
    """Extract the quoted path from a ``require`` line."""
    match = REQUIRE_PATH_PATTERN.match(stripped)
    return match.group(1) if match else None


def mixin_name(stripped: str) -> Optional[str]:
    """Extract the constant from an ``include``/``extend``/``using`` line."""
    match = MIXIN_NAME_PATTERN.match(stripped)
    return match.group(1) if match else None


class SectionClassifier:
    """Maps import statements to sections."""

    def __init__(
        self,
        extra_modules: Iterable[str] = (),
        extra_mixins: Iterable[str] = (),
    ):
        self.stdlib_modules = STDLIB_MODULES | frozenset(extra_modules)
        self.stdlib_mixins = STDLIB_MIXINS + tuple(extra_mixins)

    def classify(self, kind: ImportKind, raw_line: str) -> Section:
        """Return the section for a statement of ``kind`` written as ``raw_line``."""
        stripped = raw_line.strip()

        if kind == ImportKind.REQUIRE:
            path = require_path(stripped)
            if path and self.is_stdlib_module(path):
                return Section.STDLIB
            return Section.THIRDPARTY

        if kind == ImportKind.REQUIRE_RELATIVE:
            return Section.LOCALFOLDER

        if kind in (ImportKind.INCLUDE, ImportKind.EXTEND, ImportKind.USING):
            name = mixin_name(stripped)
            if name and self.is_stdlib_mixin(name):
                return Section.STDLIB
            return Section.FIRSTPARTY

        # autoload is project-specific
        return Section.FIRSTPARTY

    def is_stdlib_module(self, path: str) -> bool:
        """Check a require path against the stdlib table, allowing sub-paths."""
        base = path[:-3] if path.endswith(".rb") else path
        if base in self.stdlib_modules:
            return True
        return any(base.startswith(f"{mod}/") for mod in self.stdlib_modules)

    def is_stdlib_mixin(self, name: str) -> bool:
        return any(name.startswith(mixin) for mixin in self.stdlib_mixins)


DEFAULT_CLASSIFIER = SectionClassifier()

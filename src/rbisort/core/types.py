# src/rbisort/core/types.py

from enum import Enum


class LineKind(Enum):
    """Kinds of source line the parser can report."""
    SHEBANG = "shebang"
    MAGIC_COMMENT = "magic_comment"
    REQUIRE = "require"
    REQUIRE_RELATIVE = "require_relative"
    INCLUDE = "include"
    EXTEND = "extend"
    AUTOLOAD = "autoload"
    USING = "using"
    COMMENT = "comment"
    BLANK = "blank"
    CODE = "code"
    LITERAL = "literal"     # inside a heredoc or triple-quoted region

    @property
    def is_import(self) -> bool:
        return self.value in _IMPORT_VALUES


class ImportKind(Enum):
    """Statement forms that count as imports."""
    REQUIRE = "require"                     # load
    REQUIRE_RELATIVE = "require_relative"   # relative load
    INCLUDE = "include"                     # mixin inclusion
    EXTEND = "extend"                       # mixin extension
    AUTOLOAD = "autoload"
    USING = "using"                         # refinement activation

    @classmethod
    def from_line_kind(cls, kind: LineKind) -> "ImportKind":
        return cls(kind.value)

    @property
    def order(self) -> int:
        return TYPE_ORDER[self]


_IMPORT_VALUES = {kind.value for kind in ImportKind}


class Section(Enum):
    """Import sections, in output order."""
    STDLIB = "stdlib"
    THIRDPARTY = "thirdparty"
    FIRSTPARTY = "firstparty"
    LOCALFOLDER = "localfolder"

    @property
    def order(self) -> int:
        return SECTION_ORDER[self]


class SortResult(Enum):
    """Outcome of processing a single file."""
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"


SECTION_ORDER = {
    Section.STDLIB: 0,
    Section.THIRDPARTY: 1,
    Section.FIRSTPARTY: 2,
    Section.LOCALFOLDER: 3,
}

TYPE_ORDER = {
    ImportKind.REQUIRE: 0,
    ImportKind.REQUIRE_RELATIVE: 1,
    ImportKind.INCLUDE: 2,
    ImportKind.EXTEND: 3,
    ImportKind.AUTOLOAD: 4,
    ImportKind.USING: 5,
}

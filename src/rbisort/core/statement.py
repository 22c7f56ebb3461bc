# src/rbisort/core/statement.py

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .parser import has_skip_directive
from .sections import DEFAULT_CLASSIFIER, SectionClassifier
from .types import ImportKind, Section

_KEYWORD_PREFIX = {kind: re.compile(rf"^{kind.value}\s+") for kind in ImportKind}

_TARGET_PATTERNS = {
    ImportKind.REQUIRE: re.compile(r"^require(?:\s+|\()['\"]([^'\"]+)['\"]"),
    ImportKind.REQUIRE_RELATIVE: re.compile(r"^require_relative(?:\s+|\()['\"]([^'\"]+)['\"]"),
    # Mixin keys cover the whole argument list
    ImportKind.INCLUDE: re.compile(r"^include[\s(]+([^#]+?)\s*\)?\s*(?:#.*)?$"),
    ImportKind.EXTEND: re.compile(r"^extend[\s(]+([^#]+?)\s*\)?\s*(?:#.*)?$"),
    ImportKind.USING: re.compile(r"^using[\s(]+([^#]+?)\s*\)?\s*(?:#.*)?$"),
    ImportKind.AUTOLOAD: re.compile(r"^autoload[\s(]+:?(\w+)"),
}

_WHITESPACE = re.compile(r"\s+")


@dataclass
class ImportStatement:
    """A single import line together with the comments that travel with it."""

    raw_line: str
    kind: ImportKind
    section: Section
    leading_comments: List[str] = field(default_factory=list)
    indentation: str = ""
    sort_key: str = ""
    normalized_key: str = ""
    skip_sorting: bool = False

    @classmethod
    def from_line(
        cls,
        raw_line: str,
        kind: ImportKind,
        leading_comments: Optional[List[str]] = None,
        indentation: str = "",
        classifier: Optional[SectionClassifier] = None,
    ) -> "ImportStatement":
        """Build a statement, deriving section, keys and skip flag from the line."""
        classifier = classifier or DEFAULT_CLASSIFIER
        stripped = raw_line.strip()
        return cls(
            raw_line=raw_line,
            kind=kind,
            section=classifier.classify(kind, raw_line),
            leading_comments=list(leading_comments or []),
            indentation=indentation,
            sort_key=_KEYWORD_PREFIX[kind].sub("", stripped, count=1),
            normalized_key=_normalized_key(kind, stripped),
            skip_sorting=has_skip_directive(raw_line),
        )

    @property
    def order_key(self) -> Tuple[int, int, str]:
        """Composite sort key: section, then statement kind, then text."""
        return (self.section.order, self.kind.order, self.sort_key)

    @property
    def has_blank_leading(self) -> bool:
        return any(not line.strip() for line in self.leading_comments)

    @property
    def comment_lines(self) -> List[str]:
        """Leading comments with any swallowed blank lines removed."""
        return [line for line in self.leading_comments if line.strip()]

    def to_lines(self) -> List[str]:
        return [*self.leading_comments, self.raw_line]


def _normalized_key(kind: ImportKind, stripped: str) -> str:
    match = _TARGET_PATTERNS[kind].match(stripped)
    target = match.group(1) if match else stripped
    return f"{kind.value}:{_WHITESPACE.sub('', target)}"

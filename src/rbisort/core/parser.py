"""Line classification for Ruby source files.

The parser never builds a syntax tree. Each line is classified on its own
with line-start anchored regular expressions, which is enough to find the
``require``/``include``/``extend``/``autoload``/``using`` statements that
make up an import block.
"""

import re
from typing import Optional

from .types import LineKind

MAGIC_COMMENT_PATTERN = re.compile(
    r"^#\s*(?:encoding|coding|frozen_string_literal|warn_indent|shareable_constant_value):",
    re.IGNORECASE,
)
SKIP_LINE_PATTERN = re.compile(r"#\s*isort:\s*skip\b", re.IGNORECASE)
SKIP_FILE_PATTERN = re.compile(r"^\s*#\s*isort:\s*skip_file\b", re.IGNORECASE)

HEREDOC_PATTERN = re.compile(r"<<[-~]?['\"]?([A-Za-z_]\w*)['\"]?")
TRIPLE_QUOTES = ('"""', "'''")

IMPORT_KEYWORDS = ("require", "require_relative", "include", "extend", "autoload", "using")
_KEYWORD_GROUP = "(?:" + "|".join(IMPORT_KEYWORDS) + ")"

# Lines that are string expressions which merely mention an import keyword,
# e.g. ``msg = "include Foo"`` or ``puts "require 'json'"``.
_STRING_ASSIGNMENT = re.compile(r"^\w+\s*=\s*['\"].*" + _KEYWORD_GROUP + r".*['\"]")
_STRING_ARGUMENT = re.compile(r"^\w+\s+['\"].*" + _KEYWORD_GROUP + r".*['\"]")
_STRING_CALL = re.compile(r"^\w+\(['\"].*" + _KEYWORD_GROUP + r".*['\"]\)")

# Checked in order; require_relative must be tried before require.
IMPORT_PATTERNS = (
    (LineKind.REQUIRE_RELATIVE, re.compile(r"^require_relative(?:\s+|\()['\"]")),
    (LineKind.REQUIRE, re.compile(r"^require(?:\s+|\()['\"]")),
    (LineKind.INCLUDE, re.compile(r"^include(?:\s+|\()[A-Z]")),
    (LineKind.EXTEND, re.compile(r"^extend(?:\s+|\()[A-Z]")),
    (LineKind.AUTOLOAD, re.compile(r"^autoload(?:\s+|\():")),
    (LineKind.USING, re.compile(r"^using(?:\s+|\()[A-Z]")),
)

_INDENTATION = re.compile(r"^[ \t]*")


def extract_indentation(line: str) -> str:
    """Return the leading whitespace of a line."""
    return _INDENTATION.match(line).group(0)


def has_skip_directive(line: str) -> bool:
    """Check for a trailing ``isort:skip`` marker (but not ``isort:skip_file``)."""
    return bool(SKIP_LINE_PATTERN.search(line)) and not SKIP_FILE_PATTERN.search(line)


def has_skip_file_directive(line: str) -> bool:
    """Check for an ``isort:skip_file`` marker."""
    return bool(SKIP_FILE_PATTERN.search(line))


def heredoc_delimiter(line: str) -> Optional[str]:
    """Return the terminator of a heredoc opened on this line, if any."""
    match = HEREDOC_PATTERN.search(line)
    return match.group(1) if match else None


def triple_quote_opener(stripped: str) -> Optional[str]:
    """Return the quote marker if the line opens an unterminated triple-quoted region."""
    for marker in TRIPLE_QUOTES:
        if stripped.startswith(marker) and stripped.count(marker) < 2:
            return marker
    return None


def string_contains_import_keyword(stripped: str) -> bool:
    """Heuristically detect lines where an import keyword sits inside a string literal.

    This is a regex guard, not a tokenizer. A keyword that appears after the
    first quote character of the line is treated as quoted text, which also
    rejects imports whose path happens to contain a keyword.
    """
    if (
        _STRING_ASSIGNMENT.match(stripped)
        or _STRING_ARGUMENT.match(stripped)
        or _STRING_CALL.match(stripped)
    ):
        return True

    quote_positions = [pos for pos in (stripped.find('"'), stripped.find("'")) if pos >= 0]
    if not quote_positions:
        return False
    first_quote = min(quote_positions)

    for keyword in IMPORT_KEYWORDS:
        keyword_pos = stripped.find(keyword)
        if keyword_pos > 0 and keyword_pos > first_quote:
            return True
    return False


class LineClassifier:
    """Classifies single lines of Ruby source."""

    def classify(self, line: str, line_number: int, in_literal: bool = False) -> LineKind:
        """Classify a line.

        Args:
            line: The raw line, with or without its newline.
            line_number: 1-based position of the line in the file.
            in_literal: Whether the scanner is inside a heredoc or
                triple-quoted region, in which case nothing is classified.
        """
        if in_literal:
            return LineKind.LITERAL

        stripped = line.strip()
        if not stripped:
            return LineKind.BLANK
        if stripped.startswith("#"):
            return self._classify_comment(stripped, line_number)
        return self._classify_code(stripped)

    def _classify_comment(self, stripped: str, line_number: int) -> LineKind:
        if line_number == 1 and stripped.startswith("#!"):
            return LineKind.SHEBANG
        if MAGIC_COMMENT_PATTERN.match(stripped):
            return LineKind.MAGIC_COMMENT
        return LineKind.COMMENT

    def _classify_code(self, stripped: str) -> LineKind:
        if string_contains_import_keyword(stripped):
            return LineKind.CODE

        for kind, pattern in IMPORT_PATTERNS:
            if pattern.match(stripped):
                return kind
        return LineKind.CODE

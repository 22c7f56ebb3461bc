"""Sorting imports in a single Ruby file.

``FileProcessor`` reads a file, finds its import blocks, sorts each block
and stitches the result back together with the untouched surrounding
lines. Files are read and written whole.
"""

import difflib
from pathlib import Path
from typing import List, Optional

from .block import ImportBlock
from .config import Config
from .errors import EncodingError, ExistingSyntaxErrors, IntroducedSyntaxErrors
from .logging import get_audit_logger, get_debug_logger
from .parser import has_skip_file_directive
from .scanner import BlockScanner
from .sections import SectionClassifier
from .types import SortResult
from .validator import SyntaxValidator

# Re-sorting can merge blocks that the previous pass only separated by blank
# lines; a few passes always reach a stable result for real files.
MAX_PASSES = 5

audit_log = get_audit_logger()
debug_log = get_debug_logger()


def split_lines(content: str) -> List[str]:
    """Split text into lines that all end with a newline."""
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [f"{line}\n" for line in lines]


def normalize_newlines(content: str) -> str:
    return content.replace("\r\n", "\n").replace("\r", "\n")


def reconstruct_file(lines: List[str], blocks: List[ImportBlock]) -> str:
    """Merge sorted blocks back into the original lines.

    Lines outside blocks are copied verbatim, except that a run of blank
    lines between two blocks becomes a single blank line. The result ends
    with exactly one newline.
    """
    if not blocks:
        return "".join(lines)

    result = []
    last_end = -1

    for block_index, block in enumerate(sorted(blocks, key=lambda b: b.start_line)):
        gap = lines[last_end + 1 : block.start_line]
        rendered = block.render()

        if block_index > 0 and all(not line.strip() for line in gap):
            leading_blanks = 0
            while leading_blanks < len(rendered) and not rendered[leading_blanks].strip():
                leading_blanks += 1
            if gap or leading_blanks:
                result.append("\n")
            rendered = rendered[leading_blanks:]
        else:
            result.extend(gap)

        result.extend(rendered)
        last_end = block.end_line

    result.extend(lines[last_end + 1 :])

    content = "".join(result)
    if content:
        content = f"{content.rstrip()}\n"
    return content


def sort_once(content: str, scanner: BlockScanner) -> str:
    """Run a single scan/sort/reconstruct pass."""
    lines = split_lines(content)
    blocks = scanner.scan(lines)
    if not blocks:
        return content

    for block in blocks:
        block.sort_and_dedupe()
    return reconstruct_file(lines, blocks)


def sort_content(content: str, scanner: Optional[BlockScanner] = None) -> str:
    """Sort the imports in ``content`` until the output is stable."""
    scanner = scanner or BlockScanner()
    result = content
    for _ in range(MAX_PASSES):
        sorted_content = sort_once(result, scanner)
        if sorted_content == result:
            return result
        result = sorted_content

    debug_log.warning(f"Import sorting did not settle after {MAX_PASSES} passes")
    return result


class FileProcessor:
    """Sorts, checks or diffs the imports of one file."""

    def __init__(
        self,
        file_path: Path,
        config: Optional[Config] = None,
        validator: Optional[SyntaxValidator] = None,
    ):
        self.file_path = Path(file_path)
        self.config = config or Config()
        self.validator = validator or SyntaxValidator(self.config.ruby)
        self.scanner = BlockScanner(
            sections=SectionClassifier(
                extra_modules=self.config.extra_stdlib_modules,
                extra_mixins=self.config.extra_stdlib_mixins,
            )
        )

    def process(self) -> SortResult:
        """Sort imports in place.

        Raises:
            FileNotFoundError: The file does not exist.
            EncodingError: The file is not valid UTF-8.
            ExistingSyntaxErrors: Atomic mode and the file does not parse.
            IntroducedSyntaxErrors: Atomic mode and the sorted file would not parse.
        """
        original = self._read()
        if not original:
            return SortResult.UNCHANGED

        if self._has_skip_file_directive(original):
            audit_log.info(f"Skipped {self.file_path}: isort:skip_file directive")
            return SortResult.SKIPPED

        if self.config.atomic:
            error = self.validator.check_syntax(original)
            if error is not None:
                audit_log.info(f"Rejected {self.file_path}: existing syntax errors")
                raise ExistingSyntaxErrors(self.file_path, error)

        new_content = sort_content(original, self.scanner)
        if new_content == original:
            return SortResult.UNCHANGED

        if self.config.atomic:
            error = self.validator.check_syntax(new_content)
            if error is not None:
                audit_log.info(f"Rejected {self.file_path}: sorting would break syntax")
                raise IntroducedSyntaxErrors(self.file_path, error)

        self._write(new_content)
        audit_log.info(f"Sorted imports in {self.file_path}")
        return SortResult.CHANGED

    def check(self) -> bool:
        """Return True if sorting would change the file. Never writes."""
        return self._sorted_content() is not None

    def diff(self) -> Optional[str]:
        """Return a unified diff of the pending changes, or None. Never writes."""
        original = self._read()
        new_content = self._sorted_content(original)
        if new_content is None:
            return None

        diff = difflib.unified_diff(
            split_lines(original),
            split_lines(new_content),
            fromfile=f"{self.file_path} (original)",
            tofile=f"{self.file_path} (sorted)",
        )
        return "".join(diff) or None

    def _sorted_content(self, original: Optional[str] = None) -> Optional[str]:
        """Sorted text if it differs from the file, else None."""
        if original is None:
            original = self._read()
        if not original or self._has_skip_file_directive(original):
            return None

        new_content = sort_content(original, self.scanner)
        return None if new_content == original else new_content

    def _read(self) -> str:
        data = self.file_path.read_bytes()
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError(self.file_path, str(e)) from e
        return normalize_newlines(content)

    def _write(self, content: str) -> None:
        with open(self.file_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)

    def _has_skip_file_directive(self, content: str) -> bool:
        head = content.split("\n", self.config.skip_file_scan_lines)[: self.config.skip_file_scan_lines]
        return any(has_skip_file_directive(line) for line in head)

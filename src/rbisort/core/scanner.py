"""Import block detection.

The scanner makes a single forward pass over a file's lines and groups
import statements into blocks. All scanning state lives in a ``ScanState``
record that ``BlockScanner.step`` advances one line at a time, so the
transition rules can be exercised without touching the filesystem.

A block ends at any of:

* a non-import code line, shebang or magic comment,
* two or more consecutive blank lines,
* an import at a different indentation (which starts a new block).

Only the lines from a block's first attached comment through its last
import statement belong to the block. Everything else, including comments
that end up not attached to any import, is left to pass through untouched.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .block import ImportBlock
from .logging import get_debug_logger
from .parser import LineClassifier, extract_indentation, heredoc_delimiter, triple_quote_opener
from .sections import DEFAULT_CLASSIFIER, SectionClassifier
from .statement import ImportStatement
from .types import ImportKind, LineKind

debug_log = get_debug_logger()


@dataclass
class ScanState:
    """Scanner state threaded through the line fold."""

    blocks: List[ImportBlock] = field(default_factory=list)
    current: Optional[ImportBlock] = None
    pending_comments: List[str] = field(default_factory=list)
    pending_blanks: List[str] = field(default_factory=list)
    heredoc: Optional[str] = None
    triple_quote: Optional[str] = None

    @property
    def in_literal(self) -> bool:
        return self.heredoc is not None or self.triple_quote is not None

    @property
    def block_open(self) -> bool:
        return self.current is not None and not self.current.is_empty()

    def reset_pending(self):
        self.pending_comments = []
        self.pending_blanks = []


class BlockScanner:
    """Finds import blocks in a sequence of source lines."""

    def __init__(
        self,
        classifier: Optional[LineClassifier] = None,
        sections: Optional[SectionClassifier] = None,
    ):
        self.classifier = classifier or LineClassifier()
        self.sections = sections or DEFAULT_CLASSIFIER

    def scan(self, lines: Iterable[str]) -> List[ImportBlock]:
        """Scan all lines and return the blocks in file order."""
        state = ScanState()
        for index, line in enumerate(lines):
            self.step(state, index, line)
        return self.finish(state)

    def finish(self, state: ScanState) -> List[ImportBlock]:
        """Close any open block. Trailing comments stay outside it."""
        self._close_block(state)
        state.reset_pending()
        return state.blocks

    def step(self, state: ScanState, index: int, line: str) -> ScanState:
        """Advance the scan by one line (``index`` is 0-based)."""
        kind = self.classifier.classify(line, index + 1, in_literal=state.in_literal)

        if kind == LineKind.LITERAL:
            self._track_literal_end(state, line.strip())
        elif kind in (LineKind.SHEBANG, LineKind.MAGIC_COMMENT, LineKind.CODE):
            self._close_block(state)
            state.reset_pending()
            if kind == LineKind.CODE:
                self._track_literal_start(state, line)
        elif kind == LineKind.COMMENT:
            self._on_comment(state, line)
        elif kind == LineKind.BLANK:
            self._on_blank(state, index, line)
        else:
            self._on_import(state, index, line, ImportKind.from_line_kind(kind))
        return state

    def _track_literal_start(self, state: ScanState, line: str):
        delimiter = heredoc_delimiter(line)
        if delimiter:
            state.heredoc = delimiter
            return
        state.triple_quote = triple_quote_opener(line.strip())

    def _track_literal_end(self, state: ScanState, stripped: str):
        if state.heredoc is not None:
            if stripped == state.heredoc:
                state.heredoc = None
        elif stripped.endswith(state.triple_quote):
            state.triple_quote = None

    def _on_comment(self, state: ScanState, line: str):
        if not state.pending_blanks:
            state.pending_comments.append(line)
        elif state.block_open:
            # Inside a block the gap is kept with the next import.
            state.pending_comments = [*state.pending_comments, *state.pending_blanks, line]
            state.pending_blanks = []
        else:
            # A blank line separates earlier comments from any later import.
            state.pending_comments = [line]
            state.pending_blanks = []

    def _on_blank(self, state: ScanState, index: int, line: str):
        if state.block_open:
            state.pending_blanks.append(line)
            if len(state.pending_blanks) > 1:
                debug_log.debug(f"Blank lines end import block at line {index + 1}")
                self._close_block(state)
                state.reset_pending()
        else:
            state.pending_comments = []
            state.pending_blanks.append(line)

    def _on_import(self, state: ScanState, index: int, line: str, kind: ImportKind):
        indentation = extract_indentation(line)

        if state.current is not None and state.current.indentation != indentation:
            debug_log.debug(f"Indentation change starts new import block at line {index + 1}")
            self._close_block(state)

        if state.current is not None and state.pending_blanks:
            state.pending_comments = [*state.pending_blanks, *state.pending_comments]
            state.pending_blanks = []

        if state.current is None:
            leading = list(state.pending_blanks)
            if leading and state.pending_comments:
                # Comments followed by a blank line float free of this import.
                state.pending_comments = []
            while state.pending_comments and not state.pending_comments[0].strip():
                leading.append(state.pending_comments.pop(0))
            state.current = ImportBlock(
                indentation=indentation,
                start_line=index - len(state.pending_comments) - len(leading),
                leading_content=leading,
            )

        statement = ImportStatement.from_line(
            raw_line=line,
            kind=kind,
            leading_comments=state.pending_comments,
            indentation=indentation,
            classifier=self.sections,
        )
        state.current.add_statement(statement)
        state.current.end_line = index
        state.reset_pending()

    def _close_block(self, state: ScanState):
        block = state.current
        state.current = None
        if block is None or block.is_empty():
            return
        debug_log.debug(
            f"Import block lines {block.start_line + 1}-{block.end_line + 1}: "
            f"{len(block)} statement(s)"
        )
        state.blocks.append(block)

# src/rbisort/core/block.py

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .logging import get_debug_logger
from .statement import ImportStatement

debug_log = get_debug_logger()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class ImportBlock:
    """A maximal run of import statements at a single indentation level."""

    indentation: str = ""
    statements: List[ImportStatement] = field(default_factory=list)
    start_line: Optional[int] = None
    end_line: Optional[int] = None
    leading_content: List[str] = field(default_factory=list)

    def add_statement(self, statement: ImportStatement):
        self.statements.append(statement)

    def is_empty(self) -> bool:
        return not self.statements

    def __len__(self) -> int:
        return len(self.statements)

    @property
    def line_count(self) -> int:
        """Number of original lines the block spans."""
        if self.start_line is None or self.end_line is None:
            return 0
        return self.end_line - self.start_line + 1

    def sort_and_dedupe(self) -> "ImportBlock":
        """Sort statements, drop duplicates and re-place ``isort:skip`` statements.

        Skipped statements keep their approximate relative position: each
        one is inserted at its original index scaled onto the new list,
        in ascending original order.
        """
        if not self.statements:
            return self

        original_count = len(self.statements)
        skipped = []
        sortable = []
        for index, stmt in enumerate(self.statements):
            if stmt.skip_sorting:
                skipped.append((index, stmt))
            else:
                sortable.append(stmt)

        sortable.sort(key=lambda stmt: stmt.order_key)

        seen = set()
        result = []
        for stmt in sortable:
            if stmt.normalized_key in seen:
                debug_log.debug(f"Dropping duplicate import: {stmt.raw_line.strip()}")
                continue
            seen.add(stmt.normalized_key)
            result.append(stmt)

        for skip_index, (position, stmt) in enumerate(skipped):
            ratio = position / max(1, original_count - 1)
            insert_at = _round_half_up(ratio * (len(result) + skip_index))
            insert_at = min(max(insert_at, 0), len(result))
            result.insert(insert_at, stmt)

        self.statements = result
        return self

    def render(self) -> List[str]:
        """Render the block back to source lines."""
        if not self.statements:
            return []

        lines = list(self.leading_content)
        previous = None

        for stmt in self.statements:
            if previous is not None and (
                stmt.section != previous.section
                or stmt.kind != previous.kind
                or stmt.has_blank_leading
            ):
                if not (lines and not lines[-1].strip()):
                    lines.append(f"{self.indentation}\n")

            lines.extend(stmt.comment_lines)
            lines.append(stmt.raw_line)
            previous = stmt

        return lines

"""Tests for sorting and rendering import blocks."""

import pytest

from rbisort.core.block import ImportBlock
from rbisort.core.statement import ImportStatement
from rbisort.core.types import ImportKind


def make_stmt(line, kind=ImportKind.REQUIRE, comments=None, indentation=""):
    return ImportStatement.from_line(
        f"{indentation}{line}\n", kind, leading_comments=comments, indentation=indentation
    )


def make_block(*statements, indentation=""):
    block = ImportBlock(indentation=indentation, start_line=0, end_line=len(statements) - 1)
    for stmt in statements:
        block.add_statement(stmt)
    return block


def raw_lines(block):
    return [stmt.raw_line.strip() for stmt in block.statements]


def test_empty_block():
    """Test an empty block sorts and renders to nothing."""
    block = ImportBlock()
    assert block.is_empty()
    assert block.sort_and_dedupe() is block
    assert block.render() == []
    assert block.line_count == 0


def test_line_count():
    """Test the span covers start and end lines."""
    block = ImportBlock(start_line=3, end_line=6)
    assert block.line_count == 4


def test_sorts_by_section_kind_and_text():
    """Test the full ordering across sections and kinds."""
    block = make_block(
        make_stmt("require_relative 'helper'", ImportKind.REQUIRE_RELATIVE),
        make_stmt("require 'rails'"),
        make_stmt("include Comparable", ImportKind.INCLUDE),
        make_stmt("require 'json'"),
        make_stmt("extend ActiveSupport::Concern", ImportKind.EXTEND),
        make_stmt("require 'csv'"),
    )
    block.sort_and_dedupe()

    assert raw_lines(block) == [
        "require 'csv'",
        "require 'json'",
        "include Comparable",
        "require 'rails'",
        "extend ActiveSupport::Concern",
        "require_relative 'helper'",
    ]


def test_duplicates_keep_first_occurrence():
    """Test duplicates are dropped, keeping the first one and its comments."""
    first = make_stmt("require 'json'", comments=["# parse config\n"])
    block = make_block(first, make_stmt("require 'yaml'"), make_stmt("require 'json'"))
    block.sort_and_dedupe()

    assert raw_lines(block) == ["require 'json'", "require 'yaml'"]
    assert block.statements[0] is first


def test_duplicates_across_quote_styles():
    """Test the same require written differently is deduplicated."""
    block = make_block(make_stmt("require('json')"), make_stmt("require 'json'"))
    block.sort_and_dedupe()
    assert raw_lines(block) == ["require 'json'"]


def test_sort_is_idempotent():
    """Test sorting an already sorted block changes nothing."""
    block = make_block(make_stmt("require 'b'"), make_stmt("require 'a'"))
    once = raw_lines(block.sort_and_dedupe())
    twice = raw_lines(block.sort_and_dedupe())
    assert once == twice == ["require 'a'", "require 'b'"]


class TestSkipReinsertion:
    """Pinned statements keep their approximate relative position."""

    def test_single_skipped_statement(self):
        """Test a lone pinned statement is kept."""
        block = make_block(make_stmt("require 'z' # isort:skip"))
        block.sort_and_dedupe()
        assert raw_lines(block) == ["require 'z' # isort:skip"]

    def test_all_skipped_keep_order(self):
        """Test a block of only pinned statements keeps its order."""
        block = make_block(
            make_stmt("require 'b' # isort:skip"),
            make_stmt("require 'a' # isort:skip"),
        )
        block.sort_and_dedupe()
        assert raw_lines(block) == ["require 'b' # isort:skip", "require 'a' # isort:skip"]

    def test_first_and_last_positions(self):
        """Test pinned statements at the ends stay at the ends."""
        block = make_block(
            make_stmt("require 'z_lib' # isort:skip"),
            make_stmt("require 'yaml'"),
            make_stmt("require 'json'"),
            make_stmt("require 'a_lib' # isort:skip"),
        )
        block.sort_and_dedupe()

        assert raw_lines(block) == [
            "require 'z_lib' # isort:skip",
            "require 'json'",
            "require 'yaml'",
            "require 'a_lib' # isort:skip",
        ]

    @pytest.mark.parametrize(
        "lines,expected",
        [
            (
                ["require 'c'", "require 'b' # isort:skip", "require 'a'"],
                ["require 'a'", "require 'b' # isort:skip", "require 'c'"],
            ),
            (
                ["require 'd'", "require 'c' # isort:skip", "require 'b'", "require 'a'"],
                ["require 'a'", "require 'c' # isort:skip", "require 'b'", "require 'd'"],
            ),
        ],
    )
    def test_middle_positions(self, lines, expected):
        """Test pinned statements are scaled onto the sorted list."""
        block = make_block(*(make_stmt(line) for line in lines))
        block.sort_and_dedupe()
        assert raw_lines(block) == expected

    def test_skipped_duplicates_are_kept(self):
        """Test pinned statements never take part in deduplication."""
        block = make_block(
            make_stmt("require 'json'"),
            make_stmt("require 'json' # isort:skip"),
        )
        block.sort_and_dedupe()
        assert raw_lines(block) == ["require 'json'", "require 'json' # isort:skip"]


class TestRender:
    """Rendering blocks back to lines."""

    def test_section_change_adds_blank(self):
        """Test a blank line separates sections."""
        block = make_block(make_stmt("require 'json'"), make_stmt("require 'rails'"))
        assert block.render() == ["require 'json'\n", "\n", "require 'rails'\n"]

    def test_kind_change_adds_blank(self):
        """Test a blank line separates statement kinds in the same section."""
        block = make_block(
            make_stmt("require 'set'"),
            make_stmt("include Comparable", ImportKind.INCLUDE),
        )
        assert block.render() == ["require 'set'\n", "\n", "include Comparable\n"]

    def test_same_group_has_no_blank(self):
        """Test statements in the same group are rendered together."""
        block = make_block(make_stmt("require 'json'"), make_stmt("require 'set'"))
        assert block.render() == ["require 'json'\n", "require 'set'\n"]

    def test_comments_render_before_statement(self):
        """Test leading comments are emitted before their statement."""
        block = make_block(
            make_stmt("require 'json'"),
            make_stmt("require 'set'", comments=["# sets\n"]),
        )
        assert block.render() == ["require 'json'\n", "# sets\n", "require 'set'\n"]

    def test_blank_leading_comment_is_a_single_separator(self):
        """Test a swallowed blank line becomes one separator."""
        block = make_block(
            make_stmt("require 'json'"),
            make_stmt("require 'rails'", comments=["\n", "# gems\n"]),
        )
        assert block.render() == ["require 'json'\n", "\n", "# gems\n", "require 'rails'\n"]

    def test_first_statement_never_gets_a_separator(self):
        """Test blank leading entries on the first statement add nothing."""
        block = make_block(make_stmt("require 'json'", comments=["\n"]))
        assert block.render() == ["require 'json'\n"]

    def test_leading_content_is_emitted_first(self):
        """Test block leading content is kept in front."""
        block = make_block(make_stmt("require 'json'"))
        block.leading_content = ["\n"]
        assert block.render() == ["\n", "require 'json'\n"]

    def test_separator_uses_block_indentation(self):
        """Test nested blocks indent their separator lines."""
        block = make_block(
            make_stmt("include Comparable", ImportKind.INCLUDE, indentation="  "),
            make_stmt("extend Forwardable", ImportKind.EXTEND, indentation="  "),
            indentation="  ",
        )
        assert block.render() == ["  include Comparable\n", "  \n", "  extend Forwardable\n"]

    def test_render_after_sort(self):
        """Test a mixed block sorts and renders with group separators."""
        block = make_block(
            make_stmt("require_relative 'helper'", ImportKind.REQUIRE_RELATIVE),
            make_stmt("require 'rails'"),
            make_stmt("require 'json'"),
        )
        block.sort_and_dedupe()
        assert block.render() == [
            "require 'json'\n",
            "\n",
            "require 'rails'\n",
            "\n",
            "require_relative 'helper'\n",
        ]

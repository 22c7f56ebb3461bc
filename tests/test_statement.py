"""Tests for import statements."""

from rbisort.core.sections import SectionClassifier
from rbisort.core.statement import ImportStatement
from rbisort.core.types import ImportKind, Section


def test_from_line_derives_fields():
    """Test section, keys and indentation are derived from the line."""
    stmt = ImportStatement.from_line("  require 'json'\n", ImportKind.REQUIRE, indentation="  ")

    assert stmt.section == Section.STDLIB
    assert stmt.sort_key == "'json'"
    assert stmt.normalized_key == "require:json"
    assert stmt.indentation == "  "
    assert stmt.leading_comments == []
    assert not stmt.skip_sorting


def test_quote_style_does_not_change_identity():
    """Test single and double quoted paths normalize to the same key."""
    single = ImportStatement.from_line("require 'json'\n", ImportKind.REQUIRE)
    double = ImportStatement.from_line('require "json"\n', ImportKind.REQUIRE)
    paren = ImportStatement.from_line("require('json')\n", ImportKind.REQUIRE)

    assert single.normalized_key == double.normalized_key == paren.normalized_key


def test_kind_is_part_of_identity():
    """Test require and require_relative of the same path are distinct."""
    req = ImportStatement.from_line("require 'helper'\n", ImportKind.REQUIRE)
    rel = ImportStatement.from_line("require_relative 'helper'\n", ImportKind.REQUIRE_RELATIVE)

    assert req.normalized_key != rel.normalized_key
    assert rel.sort_key == "'helper'"


def test_mixin_keys():
    """Test keys for include, extend, autoload and using."""
    inc = ImportStatement.from_line("include Comparable\n", ImportKind.INCLUDE)
    ext = ImportStatement.from_line("extend(Forwardable)\n", ImportKind.EXTEND)
    auto = ImportStatement.from_line("autoload :CSV, 'csv'\n", ImportKind.AUTOLOAD)
    using = ImportStatement.from_line("using Refinements::Strings\n", ImportKind.USING)

    assert inc.normalized_key == "include:Comparable"
    assert inc.sort_key == "Comparable"
    assert ext.normalized_key == "extend:Forwardable"
    assert auto.normalized_key == "autoload:CSV"
    assert auto.sort_key == ":CSV, 'csv'"
    assert using.normalized_key == "using:Refinements::Strings"


def test_mixin_key_covers_every_argument():
    """Test multi-module mixins keep all their names in the key."""
    single = ImportStatement.from_line("include Foo\n", ImportKind.INCLUDE)
    multi = ImportStatement.from_line("include Foo, Bar\n", ImportKind.INCLUDE)
    paren = ImportStatement.from_line("include(Foo,Bar)\n", ImportKind.INCLUDE)
    commented = ImportStatement.from_line("include Foo # isort:skip\n", ImportKind.INCLUDE)

    assert multi.normalized_key == "include:Foo,Bar"
    assert paren.normalized_key == multi.normalized_key
    assert single.normalized_key != multi.normalized_key
    assert commented.normalized_key == single.normalized_key


def test_skip_directive_sets_flag():
    """Test an isort:skip comment marks the statement as pinned."""
    stmt = ImportStatement.from_line("require 'z' # isort:skip\n", ImportKind.REQUIRE)
    assert stmt.skip_sorting


def test_order_key_is_section_then_kind_then_text():
    """Test the composite ordering."""
    stdlib = ImportStatement.from_line("require 'set'\n", ImportKind.REQUIRE)
    gem = ImportStatement.from_line("require 'rails'\n", ImportKind.REQUIRE)
    mixin = ImportStatement.from_line("include Comparable\n", ImportKind.INCLUDE)
    local = ImportStatement.from_line("require_relative 'a'\n", ImportKind.REQUIRE_RELATIVE)

    ordered = sorted([local, gem, mixin, stdlib], key=lambda s: s.order_key)
    assert ordered == [stdlib, mixin, gem, local]


def test_sort_key_is_case_sensitive():
    """Test uppercase sorts before lowercase."""
    upper = ImportStatement.from_line("require 'JSON'\n", ImportKind.REQUIRE)
    lower = ImportStatement.from_line("require 'csv'\n", ImportKind.REQUIRE)
    assert upper.sort_key < lower.sort_key


def test_leading_comments():
    """Test comment helpers and line output."""
    stmt = ImportStatement.from_line(
        "require 'yaml'\n",
        ImportKind.REQUIRE,
        leading_comments=["\n", "# config\n"],
    )

    assert stmt.has_blank_leading
    assert stmt.comment_lines == ["# config\n"]
    assert stmt.to_lines() == ["\n", "# config\n", "require 'yaml'\n"]


def test_leading_comments_are_copied():
    """Test the statement does not share the caller's list."""
    comments = ["# one\n"]
    stmt = ImportStatement.from_line("require 'a'\n", ImportKind.REQUIRE, leading_comments=comments)
    comments.append("# two\n")
    assert stmt.leading_comments == ["# one\n"]


def test_custom_classifier():
    """Test a configured classifier is used for the section."""
    classifier = SectionClassifier(extra_modules=["rails"])
    stmt = ImportStatement.from_line("require 'rails'\n", ImportKind.REQUIRE, classifier=classifier)
    assert stmt.section == Section.STDLIB

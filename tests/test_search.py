"""Tests for queries, visibility and the declaration scanner."""

import io

import pytest

from zdoc.parser import parse_file
from zdoc.render import DocWriter
from zdoc.search import Query, QueryKind, ascii_fold, identifier, identifier_match, is_public
from zdoc.search.scanner import search, search_source


TEST_SOURCE = '''
const foo: u32 = 1;
pub const bar: i32 = 2;
pub const Baz = struct { z: u32 };
fn quix() void { }
'''

SOURCE_WITHOUT_Z = '''
const foo: u32 = 1;
pub const bar: i32 = 2;
fn quix() void { }
'''

FN_SOURCE = '''
pub fn add(a: u32, b: u32) u32 {
    return a + b;
}

pub fn addOne(a: u32) u32 {
    return a + 1;
}
'''

DOC_SOURCE = '''//! Module docs.
//! Second line.

const std = @import("std");

/// Adds two numbers.
/// Wraps on overflow.
pub fn add(a: u32, b: u32) u32 {
    return a +% b;
}
'''


def run(source: str, query: Query) -> str:
    buffer = io.StringIO()
    search_source(source, query, DocWriter(buffer))
    return buffer.getvalue()


def test_ascii_fold():
    """Test that only ASCII letters are folded."""
    assert ascii_fold("HeLLo_42") == "hello_42"
    assert ascii_fold("ÄBC") == "Äbc"


def test_query_matching():
    """Test the four query kinds."""
    assert not Query.none().matches("foo")
    assert Query.all().matches("foo")
    assert Query.all().matches(None)
    assert Query.exact("FOO").matches("foo")
    assert not Query.exact("fo").matches("foo")
    assert Query.sub("O").matches("foo")
    assert Query.sub("").matches("foo")
    assert not Query.exact("foo").matches(None)
    assert not Query.sub("").matches(None)
    assert not Query.exact("äbc").matches("ÄBC")


def test_query_from_args():
    """Test building a query from command-line arguments."""
    assert Query.from_args("foo") == Query.exact("foo")
    assert Query.from_args("foo", substring=True) == Query.sub("foo")
    assert Query.from_args(None) == Query.all()
    assert Query.from_args(None, substring=True) == Query.all()
    assert Query.from_args(None, browse_mode="none") == Query.none()
    assert Query.from_args("foo", doc_only=True) == Query.none()
    assert str(Query.sub("foo")) == "sub:foo"
    assert str(Query.none()) == "none"


def test_shows_file_doc():
    """Test that only browsing queries print the file doc comment."""
    assert Query.none().shows_file_doc
    assert Query.all().shows_file_doc
    assert not Query.exact("x").shows_file_doc
    assert Query(QueryKind.SUB, "x").shows_file_doc is False


def test_identifier_exact_match():
    """Test exact matching against each top-level declaration."""
    tree = parse_file(TEST_SOURCE)
    names = ["foo", "bar", "baz", "quix"]
    for decl, name in zip(tree.root_decls, names):
        assert identifier_match(tree, decl, Query.exact(name))


def test_identifier_sub_match():
    """Test substring matching against each top-level declaration."""
    tree = parse_file(TEST_SOURCE)
    fragments = ["fo", "ar", "baz", "UI"]
    for decl, fragment in zip(tree.root_decls, fragments):
        assert identifier_match(tree, decl, Query.sub(fragment))


def test_no_identifier_exact_match():
    """Test that no declaration is named exactly "z"."""
    tree = parse_file(TEST_SOURCE)
    for decl in tree.root_decls:
        assert not identifier_match(tree, decl, Query.exact("z"))


def test_no_identifier_sub_match():
    """Test that no identifier contains "z" once Baz is gone."""
    tree = parse_file(SOURCE_WITHOUT_Z)
    for decl in tree.root_decls:
        assert not identifier_match(tree, decl, Query.sub("z"))


def test_is_public():
    """Test visibility of top-level declarations."""
    tree = parse_file(TEST_SOURCE)
    assert [is_public(tree, d) for d in tree.root_decls] == [False, True, True, False]


def test_is_public_through_modifiers():
    """Test that extern, inline and library names do not hide pub."""
    source = '''
pub extern "c" fn write(fd: c_int, buf: [*]const u8, n: usize) isize;
export fn exported() void {}
pub inline fn fast() void {}
extern fn hidden() void;
pub threadlocal var counter: u32 = 0;
'''
    tree = parse_file(source)
    assert [is_public(tree, d) for d in tree.root_decls] == [True, True, True, False, True]
    assert [identifier(tree, d) for d in tree.root_decls] == [
        "write", "exported", "fast", "hidden", "counter",
    ]


def test_fields_always_public():
    """Test that container fields count as public."""
    tree = parse_file(TEST_SOURCE)
    field = tree.root_decls[2].container.members[0]
    assert is_public(tree, field)
    assert identifier(tree, field) is None


def test_usingnamespace():
    """Test that usingnamespace is public only with pub and never matched by name."""
    source = '''
pub usingnamespace @import("other.zig");
usingnamespace @import("private.zig");
'''
    tree = parse_file(source)
    public, private = tree.root_decls

    assert is_public(tree, public)
    assert not is_public(tree, private)
    assert identifier(tree, public) is None
    assert not identifier_match(tree, public, Query.exact("usingnamespace"))
    assert not identifier_match(tree, public, Query.sub(""))
    assert run(source, Query.all()) == 'pub usingnamespace @import("other.zig");\n'


@pytest.mark.parametrize("query,expected", [
    (Query.exact("bar"), "pub const bar: i32 = 2;\n"),
    (Query.exact("foo"), ""),
    (Query.sub("az"), "pub const Baz = struct {\n    z: u32,\n};\n"),
    (Query.sub("ui"), ""),
])
def test_search_simple_source(query, expected):
    """Test that only public matching declarations are printed."""
    assert run(TEST_SOURCE, query) == expected


def test_search_case_insensitive():
    """Test that exact lookups ignore ASCII case."""
    assert run(TEST_SOURCE, Query.exact("BAR")) == "pub const bar: i32 = 2;\n"


def test_search_substring_separates_entries():
    """Test that consecutive entries are separated by one blank line."""
    expected = (
        "pub fn add(a: u32, b: u32) u32 { ... }\n"
        "\n"
        "pub fn addOne(a: u32) u32 { ... }\n"
    )
    assert run(FN_SOURCE, Query.sub("add")) == expected
    assert run(FN_SOURCE, Query.exact("add")) == "pub fn add(a: u32, b: u32) u32 { ... }\n"


def test_search_doc_only():
    """Test that Query.none prints the file doc comment and nothing else."""
    assert run(DOC_SOURCE, Query.none()) == "//! Module docs.\n//! Second line.\n"


def test_search_all():
    """Test browsing: file doc first, then every public declaration."""
    expected = (
        "//! Module docs.\n"
        "//! Second line.\n"
        "\n"
        "/// Adds two numbers.\n"
        "/// Wraps on overflow.\n"
        "pub fn add(a: u32, b: u32) u32 { ... }\n"
    )
    assert run(DOC_SOURCE, Query.all()) == expected


def test_search_exact_omits_file_doc():
    """Test that a lookup never prints the file doc comment."""
    output = run(DOC_SOURCE, Query.exact("add"))
    assert output.startswith("/// Adds two numbers.\n")
    assert "//!" not in output


def test_search_without_file_doc():
    """Test that a missing file doc comment prints nothing extra."""
    assert run(TEST_SOURCE, Query.none()) == ""


def test_search_skips_unrenderable_declaration():
    """Test that a failing declaration is skipped and the scan continues."""
    source = '''
pub const usage =
    \\\\usage: zdoc
    \\\\
;
pub const version = "0.1";
'''
    assert run(source, Query.all()) == 'pub const version = "0.1";\n'


def test_writer_spans_files():
    """Test that the separator carries over between files."""
    buffer = io.StringIO()
    writer = DocWriter(buffer)
    first = search(parse_file("pub const a = 1;\n", "a.zig"), Query.all(), writer)
    second = search(parse_file("pub const b = 2;\n", "b.zig"), Query.all(), writer)

    assert (first, second) == (1, 1)
    assert writer.entries == 2
    assert buffer.getvalue() == "pub const a = 1;\n\npub const b = 2;\n"

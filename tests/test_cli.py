"""Tests for the zdoc command line."""

import io
import logging

import pytest
import structlog
from click.testing import CliRunner

from zdoc.cli import cli
from zdoc.logging import configure_logging
from zdoc.render import DocWriter
from zdoc.search import Query
from zdoc.search.scanner import search_source


SOURCE = '''//! Sample module.

const foo: u32 = 1;
pub const bar: i32 = 2;
pub const Baz = struct { z: u32 };
'''

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch):
    """Reset logging and ZDOC_* variables between tests."""
    for name in ("ZDOC_ZIG", "ZDOC_INDENT_WIDTH", "ZDOC_LOG_LEVEL", "ZDOC_BROWSE_MODE"):
        monkeypatch.delenv(name, raising=False)
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "sample.zig"
    path.write_text(SOURCE)
    return path


def test_no_args_prints_usage():
    """Test that running without arguments prints usage and succeeds."""
    result = runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "usage: zdoc [-s] [-d] [source] <identifier>" in result.output


def test_too_many_args(source_file):
    """Test that a third positional argument is rejected."""
    result = runner.invoke(cli, [str(source_file), "bar", "extra"])
    assert result.exit_code == 1
    assert "too many args" in result.output


def test_exact_lookup(source_file):
    """Test a plain identifier lookup."""
    result = runner.invoke(cli, [str(source_file), "bar"])
    assert result.exit_code == 0
    assert result.output == "pub const bar: i32 = 2;\n"


def test_substring_lookup(source_file):
    """Test -s substring lookup."""
    result = runner.invoke(cli, ["-s", str(source_file), "AZ"])
    assert result.exit_code == 0
    assert result.output == "pub const Baz = struct {\n    z: u32,\n};\n"


def test_browse_without_identifier(source_file):
    """Test that a bare source lists the file doc and public declarations."""
    result = runner.invoke(cli, [str(source_file)])
    assert result.exit_code == 0
    assert result.output == (
        "//! Sample module.\n"
        "\n"
        "pub const bar: i32 = 2;\n"
        "\n"
        "pub const Baz = struct {\n"
        "    z: u32,\n"
        "};\n"
    )


def test_doc_only(source_file):
    """Test that -d prints only the file doc comment."""
    result = runner.invoke(cli, ["-d", str(source_file)])
    assert result.exit_code == 0
    assert result.output == "//! Sample module.\n"


def test_browse_mode_none(source_file, monkeypatch):
    """Test that ZDOC_BROWSE_MODE=none makes a bare source doc-only."""
    monkeypatch.setenv("ZDOC_BROWSE_MODE", "none")
    result = runner.invoke(cli, [str(source_file)])
    assert result.exit_code == 0
    assert result.output == "//! Sample module.\n"


def test_indent_width_from_env(source_file, monkeypatch):
    """Test that ZDOC_INDENT_WIDTH changes nested indentation."""
    monkeypatch.setenv("ZDOC_INDENT_WIDTH", "2")
    result = runner.invoke(cli, [str(source_file), "baz"])
    assert result.exit_code == 0
    assert result.output == "pub const Baz = struct {\n  z: u32,\n};\n"


def test_invalid_config(source_file, monkeypatch):
    """Test that a bad setting is fatal."""
    monkeypatch.setenv("ZDOC_INDENT_WIDTH", "wide")
    result = runner.invoke(cli, [str(source_file), "bar"])
    assert result.exit_code == 1
    assert "invalid value for ZDOC_INDENT_WIDTH" in result.output


def test_missing_source(tmp_path):
    """Test that a missing source is fatal with a one-line message."""
    result = runner.invoke(cli, [str(tmp_path / "missing.zig"), "x"])
    assert result.exit_code == 1
    assert "missing.zig: no such file or directory" in result.output


def test_syntax_error(tmp_path):
    """Test that unparsable source is fatal."""
    path = tmp_path / "broken.zig"
    path.write_text("pub fn (\n")
    result = runner.invoke(cli, [str(path), "x"])
    assert result.exit_code == 1
    assert "syntax error" in result.output


def test_no_match_prints_nothing(source_file):
    """Test that a lookup without matches succeeds silently."""
    result = runner.invoke(cli, [str(source_file), "foo"])
    assert result.exit_code == 0
    assert result.output == ""


def test_verbose_logs_go_to_stderr(source_file):
    """Test that debug events never reach the result stream."""
    result = runner.invoke(cli, ["-v", str(source_file), "bar"])
    assert result.exit_code == 0
    assert result.stdout == "pub const bar: i32 = 2;\n"
    assert "file_scanned" in result.stderr


def test_module_loggers_follow_configuration(capsys):
    """Test that loggers created at import time use the configured handler."""
    configure_logging(level="DEBUG")
    buffer = io.StringIO()
    search_source(SOURCE, Query.exact("bar"), DocWriter(buffer), "sample.zig")

    captured = capsys.readouterr()
    assert buffer.getvalue() == "pub const bar: i32 = 2;\n"
    assert captured.out == ""
    assert "file_scanned" in captured.err

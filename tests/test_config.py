"""Tests for settings and error types."""

import pytest

from zdoc.config import Settings, load_settings
from zdoc.errors import ConfigError, ErrorCode, ParseError, SourceError


def test_defaults():
    """Test settings with an empty environment."""
    assert load_settings({}) == Settings()
    assert Settings().indent_width == 4
    assert Settings().browse_mode == "all"


def test_environment_overrides():
    """Test that ZDOC_* variables are read."""
    settings = load_settings({
        "ZDOC_ZIG": "/opt/zig/zig",
        "ZDOC_INDENT_WIDTH": "2",
        "ZDOC_LOG_LEVEL": "debug",
        "ZDOC_BROWSE_MODE": "NONE",
    })
    assert settings == Settings(
        zig_exe="/opt/zig/zig",
        indent_width=2,
        log_level="DEBUG",
        browse_mode="none",
    )


@pytest.mark.parametrize("env", [
    {"ZDOC_INDENT_WIDTH": "four"},
    {"ZDOC_INDENT_WIDTH": "0"},
    {"ZDOC_INDENT_WIDTH": "-2"},
    {"ZDOC_BROWSE_MODE": "some"},
])
def test_invalid_values(env):
    """Test that bad values raise ConfigError naming the variable."""
    with pytest.raises(ConfigError) as exc:
        load_settings(env)
    assert exc.value.code is ErrorCode.CONFIG_INVALID_VALUE
    assert next(iter(env)) in str(exc.value)


def test_error_details():
    """Test that errors carry a message, a code and structured details."""
    error = ParseError.syntax("main.zig", 3, 7)
    assert str(error) == "main.zig:3:7: syntax error"
    assert error.code == 3001
    assert error.error_name == "PARSE_SYNTAX_ERROR"
    assert error.details == {"file": "main.zig", "line": 3, "column": 7}


def test_errors_are_exceptions():
    """Test that errors can be raised and caught by base class."""
    with pytest.raises(SourceError):
        raise SourceError.not_found("x.zig")
    assert SourceError.not_found("x.zig").error_name == "SOURCE_NOT_FOUND"

"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError


# File extension of searchable sources
SOURCE_EXTENSION = ".zig"

# Location prefix rewritten against the toolchain's std_dir
STD_ALIAS = "std"

# Directories never entered while walking a source tree
SKIP_DIRS = frozenset({"zig-cache", ".zig-cache", "zig-out"})

# Indentation unit of rendered output
DEFAULT_INDENT_WIDTH = 4

# What to do when no identifier is given: "all" lists every public
# declaration with the file doc comment, "none" prints the doc comment only
BROWSE_MODES = ("all", "none")


@dataclass(frozen=True)
class Settings:
    """zdoc configuration."""
    zig_exe: str = "zig"
    indent_width: int = DEFAULT_INDENT_WIDTH
    log_level: str = "WARNING"
    browse_mode: str = "all"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ZDOC_* environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Settings with defaults applied for unset variables
    """
    env = os.environ if environ is None else environ

    raw_indent = env.get("ZDOC_INDENT_WIDTH", str(DEFAULT_INDENT_WIDTH))
    try:
        indent_width = int(raw_indent)
    except ValueError:
        raise ConfigError.invalid_value("ZDOC_INDENT_WIDTH", raw_indent, "not an integer")
    if indent_width <= 0:
        raise ConfigError.invalid_value("ZDOC_INDENT_WIDTH", raw_indent, "must be positive")

    browse_mode = env.get("ZDOC_BROWSE_MODE", "all").lower()
    if browse_mode not in BROWSE_MODES:
        raise ConfigError.invalid_value(
            "ZDOC_BROWSE_MODE", browse_mode, f"expected one of {', '.join(BROWSE_MODES)}"
        )

    return Settings(
        zig_exe=env.get("ZDOC_ZIG", "zig"),
        indent_width=indent_width,
        log_level=env.get("ZDOC_LOG_LEVEL", "WARNING").upper(),
        browse_mode=browse_mode,
    )

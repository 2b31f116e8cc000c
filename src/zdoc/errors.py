"""zdoc error types with typed error codes.

Error code ranges:
- 1xxx: Source resolution and I/O
- 2xxx: Config
- 3xxx: Parse
- 4xxx: Render
- 5xxx: Toolchain
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Source (1xxx)
    SOURCE_NOT_FOUND = 1001
    SOURCE_UNREADABLE = 1002

    # Config (2xxx)
    CONFIG_INVALID_VALUE = 2001

    # Parse (3xxx)
    PARSE_SYNTAX_ERROR = 3001

    # Render (4xxx)
    RENDER_UNSUPPORTED = 4001

    # Toolchain (5xxx)
    TOOLCHAIN_FAILED = 5001
    TOOLCHAIN_BAD_OUTPUT = 5002


@dataclass(eq=False)
class ZdocError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_SYNTAX_ERROR')."""
        return self.code.name

    def __str__(self) -> str:
        return self.message


class SourceError(ZdocError):
    """Missing or unreadable source locations."""

    @classmethod
    def not_found(cls, path: str) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_NOT_FOUND,
            message=f"{path}: no such file or directory",
            details={"path": path},
        )

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "SourceError":
        return cls(
            code=ErrorCode.SOURCE_UNREADABLE,
            message=f"{path}: {reason}",
            details={"path": path, "reason": reason},
        )


class ConfigError(ZdocError):
    """Configuration-related errors."""

    @classmethod
    def invalid_value(cls, name: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"invalid value for {name}: {reason}",
            details={"name": name, "value": str(value), "reason": reason},
        )


class ParseError(ZdocError):
    """Malformed source text."""

    @classmethod
    def syntax(cls, filename: str, line: int, column: int) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_SYNTAX_ERROR,
            message=f"{filename}:{line}:{column}: syntax error",
            details={"file": filename, "line": line, "column": column},
        )


class RenderError(ZdocError):
    """A declaration shape the renderer cannot format."""

    @classmethod
    def unsupported(cls, what: str, line: int) -> "RenderError":
        return cls(
            code=ErrorCode.RENDER_UNSUPPORTED,
            message=f"line {line}: unsupported {what}",
            details={"what": what, "line": line},
        )


class ToolchainError(ZdocError):
    """Failures running or reading the zig toolchain."""

    @classmethod
    def failed(cls, command: str, stderr: str) -> "ToolchainError":
        return cls(
            code=ErrorCode.TOOLCHAIN_FAILED,
            message=f"{command}: {stderr.strip()}",
            details={"command": command, "stderr": stderr},
        )

    @classmethod
    def bad_output(cls, command: str, reason: str) -> "ToolchainError":
        return cls(
            code=ErrorCode.TOOLCHAIN_BAD_OUTPUT,
            message=f"{command}: {reason}",
            details={"command": command, "reason": reason},
        )

"""Resolve a source location to the .zig files it names."""

import json
import os
import re
import subprocess
from pathlib import Path
from typing import Optional

from ..config import SKIP_DIRS, SOURCE_EXTENSION, STD_ALIAS, Settings
from ..errors import SourceError, ToolchainError
from ..logging import get_logger

logger = get_logger(__name__)

# ZON output of newer toolchains: .std_dir = "/usr/lib/zig/std",
_ZON_STD_DIR = re.compile(r'\.std_dir\s*=\s*"((?:[^"\\]|\\.)*)"')


def should_skip_dir(name: str) -> bool:
    """Check if a directory is left out of recursive walks."""
    return name.startswith(".") or name in SKIP_DIRS


def discover_source_files(root: Path) -> list[Path]:
    """Walk root recursively, following symlinks, and collect .zig files.

    Args:
        root: Directory to walk

    Returns:
        Sorted list of source file paths
    """
    files = []
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_dir(d))
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.suffix == SOURCE_EXTENSION and path.is_file():
                files.append(path)
    return files


def parse_zig_env(output: str) -> str:
    """Extract std_dir from `zig env` output (JSON or ZON).

    Raises:
        ToolchainError: no std_dir in the output
    """
    try:
        env = json.loads(output)
    except json.JSONDecodeError:
        match = _ZON_STD_DIR.search(output)
        if not match:
            raise ToolchainError.bad_output("zig env", "no std_dir in output")
        return match.group(1).replace('\\"', '"').replace("\\\\", "\\")

    std_dir = env.get("std_dir") if isinstance(env, dict) else None
    if not isinstance(std_dir, str):
        raise ToolchainError.bad_output("zig env", "no std_dir in output")
    return std_dir


def zig_std_path(zig_exe: str = "zig") -> Path:
    """Ask the toolchain where its standard library lives.

    Raises:
        ToolchainError: the command failed or printed something unexpected
    """
    command = f"{zig_exe} env"
    try:
        result = subprocess.run(
            [zig_exe, "env"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ToolchainError.failed(command, str(e))

    if result.returncode != 0:
        raise ToolchainError.failed(command, result.stderr)

    std_dir = parse_zig_env(result.stdout)
    logger.debug("std_dir_resolved", std_dir=std_dir)
    return Path(std_dir)


def expand_source_path(location: str, settings: Optional[Settings] = None) -> list[Path]:
    """Resolve a source location into files to search.

    Args:
        location: A file, a directory, or a `std.`-prefixed module path
            such as `std.fmt`
        settings: Toolchain settings (default: Settings())

    Returns:
        Files in search order

    Raises:
        SourceError: the location does not exist
        ToolchainError: the std alias could not be resolved
    """
    settings = settings or Settings()

    # std.foo.bar -> <std_dir>/foo/bar.zig
    prefix = STD_ALIAS + "."
    if location.startswith(prefix):
        std_root = zig_std_path(settings.zig_exe)
        relative = location[len(prefix):].replace(".", os.sep) + SOURCE_EXTENSION
        return [std_root / relative]

    path = Path(location)
    if not path.exists():
        # A bare "std" that is not a local path means the whole std lib.
        if location == STD_ALIAS:
            std_root = zig_std_path(settings.zig_exe)
            logger.debug("std_fallback", std_dir=str(std_root))
            return expand_source_path(str(std_root), settings)
        raise SourceError.not_found(location)

    if path.is_file():
        return [path]

    files = discover_source_files(path.resolve())
    logger.debug("source_expanded", location=location, file_count=len(files))
    return files


def read_source(path: Path) -> str:
    """Read a source file as UTF-8.

    Raises:
        SourceError: the file cannot be read
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SourceError.not_found(str(path))
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError.unreadable(str(path), str(e))

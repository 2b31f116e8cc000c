"""Search tool - resolve sources, scan each file, collect output."""

import io
from typing import Optional

from ..config import Settings, load_settings
from ..errors import ZdocError
from ..logging import get_logger
from ..render import DocWriter
from ..search import Query
from ..search.scanner import search
from ..parser import parse_file
from .sources import expand_source_path, read_source

logger = get_logger(__name__)


def run_search(
    location: str,
    query: Query,
    writer: DocWriter,
    settings: Optional[Settings] = None,
) -> int:
    """Search every file a location resolves to, in order.

    Each file is read, parsed, scanned and released before the next one.
    Any error aborts the whole run.

    Returns:
        Number of files searched
    """
    settings = settings or Settings()
    files = expand_source_path(location, settings)
    for path in files:
        content = read_source(path)
        tree = parse_file(content, str(path))
        search(tree, query, writer, settings.indent_width)
    logger.debug("search_finished", location=location, files=len(files), entries=writer.entries)
    return len(files)


def search_docs(
    source: str,
    identifier: Optional[str] = None,
    substring: bool = False,
    doc_only: bool = False,
    settings: Optional[Settings] = None,
) -> dict:
    """Search Zig sources for public declarations and their docs.

    Args:
        source: File, directory or `std.`-prefixed module path
        identifier: Name to look up; omit to browse
        substring: Match identifiers containing the name
        doc_only: Print file doc comments only
        settings: Custom settings (default: from environment)

    Returns:
        Dict with the rendered output
    """
    try:
        settings = settings or load_settings()
        query = Query.from_args(identifier, substring, doc_only, settings.browse_mode)
        buffer = io.StringIO()
        writer = DocWriter(buffer)
        file_count = run_search(source, query, writer, settings)
    except ZdocError as e:
        return {"error": str(e), "code": e.code.value}

    return {
        "source": source,
        "query": str(query),
        "file_count": file_count,
        "entry_count": writer.entries,
        "output": buffer.getvalue(),
    }


def list_sources(source: str, settings: Optional[Settings] = None) -> dict:
    """List the files a source location resolves to.

    Args:
        source: File, directory or `std.`-prefixed module path
        settings: Custom settings (default: from environment)

    Returns:
        Dict with resolved file paths
    """
    try:
        settings = settings or load_settings()
        files = expand_source_path(source, settings)
    except ZdocError as e:
        return {"error": str(e), "code": e.code.value}

    return {
        "source": source,
        "file_count": len(files),
        "files": [str(f) for f in files],
    }

"""Declaration scanner: walks top-level declarations and renders matches."""

from ..config import DEFAULT_INDENT_WIDTH
from ..errors import RenderError
from ..logging import get_logger
from ..parser import SyntaxTree, parse_file
from ..render import DocWriter, render_pub_member
from .classify import identifier, identifier_match, is_public
from .query import Query

logger = get_logger(__name__)


def search(
    tree: SyntaxTree,
    query: Query,
    writer: DocWriter,
    indent_width: int = DEFAULT_INDENT_WIDTH,
) -> int:
    """Write the public declarations of tree selected by query.

    With Query.none() or Query.all() the file doc comment is written first.
    A declaration that fails to render is logged and skipped.

    Returns:
        Number of entries written for this file
    """
    entries = 0
    if query.shows_file_doc:
        doc = tree.container_doc_comments()
        if doc:
            writer.write_entry(doc)
            entries += 1

    for decl in tree.root_decls:
        if not is_public(tree, decl):
            continue
        if not identifier_match(tree, decl, query):
            continue
        try:
            lines = render_pub_member(tree, decl, indent_width)
        except RenderError as e:
            logger.warning(
                "declaration_skipped",
                file=tree.filename,
                name=identifier(tree, decl),
                reason=e.message,
            )
            continue
        if lines:
            writer.write_entry(lines)
            entries += 1

    logger.debug(
        "file_scanned",
        file=tree.filename,
        declarations=len(tree.root_decls),
        entries=entries,
        query=str(query),
    )
    return entries


def search_source(
    content: str,
    query: Query,
    writer: DocWriter,
    filename: str = "<source>",
    indent_width: int = DEFAULT_INDENT_WIDTH,
) -> int:
    """Parse content and search it; the tree is dropped on return."""
    tree = parse_file(content, filename)
    return search(tree, query, writer, indent_width)

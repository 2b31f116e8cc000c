"""Visibility and identifier extraction for declaration nodes."""

from typing import Optional

from ..parser import (
    CONTAINER_FIELD_TAGS,
    FN_PROTO_TAGS,
    VAR_DECL_TAGS,
    Node,
    NodeTag,
    SyntaxTree,
    TokenKind,
)
from .query import Query

_PUBLIC_MODIFIERS = frozenset({"pub", "export"})

# Modifiers that may sit between `pub` and the declaration keyword
_TRANSPARENT_MODIFIERS = frozenset({
    "extern", "comptime", "threadlocal", "inline", "noinline",
})

_SCANNED_TAGS = FN_PROTO_TAGS | VAR_DECL_TAGS | {NodeTag.FN_DECL}


def is_public(tree: SyntaxTree, node: Node) -> bool:
    """Reports whether the declaration is visible to other modules."""
    if node.tag in CONTAINER_FIELD_TAGS:
        return True

    if node.tag is NodeTag.USINGNAMESPACE:
        i = node.main_token - 1
        return i >= 0 and tree.tokens[i].text == "pub"

    if node.tag not in _SCANNED_TAGS:
        return False

    i = node.main_token
    while i > 0:
        i -= 1
        token = tree.tokens[i]
        if token.text in _PUBLIC_MODIFIERS:
            return True
        if token.text in _TRANSPARENT_MODIFIERS or token.kind is TokenKind.STRING:
            continue
        break
    return False


def identifier(tree: SyntaxTree, node: Node) -> Optional[str]:
    """Return the node's identifier, if any."""
    if node.tag is NodeTag.FN_DECL:
        return identifier(tree, node.proto)

    if node.tag in FN_PROTO_TAGS:
        idx = node.fn_token + 1
        if idx < len(tree.tokens) and tree.tokens[idx].kind is TokenKind.IDENTIFIER:
            return tree.token_text(idx)
        return None

    if node.tag in VAR_DECL_TAGS:
        return tree.token_text(node.mut_token + 1)

    return None


def identifier_match(tree: SyntaxTree, node: Node, query: Query) -> bool:
    """Reports whether the query selects the node, case-insensitive."""
    return query.matches(identifier(tree, node))

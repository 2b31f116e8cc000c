"""Parser package turning Zig source into declaration trees."""

from .tokens import Token, TokenKind, ZIG_KEYWORDS, tokenize
from .nodes import (
    CONTAINER_FIELD_TAGS,
    FN_PROTO_TAGS,
    VAR_DECL_TAGS,
    ComptimeBlock,
    ContainerDecl,
    ContainerField,
    FnDecl,
    FnProto,
    Node,
    NodeTag,
    Span,
    TestDecl,
    UsingNamespace,
    VarDecl,
)
from .syntax import SyntaxTree, parse_file

__all__ = [
    "Token",
    "TokenKind",
    "ZIG_KEYWORDS",
    "tokenize",
    "CONTAINER_FIELD_TAGS",
    "FN_PROTO_TAGS",
    "VAR_DECL_TAGS",
    "ComptimeBlock",
    "ContainerDecl",
    "ContainerField",
    "FnDecl",
    "FnProto",
    "Node",
    "NodeTag",
    "Span",
    "TestDecl",
    "UsingNamespace",
    "VarDecl",
    "SyntaxTree",
    "parse_file",
]

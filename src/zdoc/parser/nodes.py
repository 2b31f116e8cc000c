"""Declaration node types."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional


class NodeTag(Enum):
    """Closed set of container-level declaration shapes."""
    FN_DECL = "fn_decl"
    # Prototypes are split by parameter count and by whether any of
    # align/addrspace/linksection/callconv is present.
    FN_PROTO_SIMPLE = "fn_proto_simple"
    FN_PROTO_MULTI = "fn_proto_multi"
    FN_PROTO_ONE = "fn_proto_one"
    FN_PROTO = "fn_proto"
    SIMPLE_VAR_DECL = "simple_var_decl"
    ALIGNED_VAR_DECL = "aligned_var_decl"
    GLOBAL_VAR_DECL = "global_var_decl"
    CONTAINER_FIELD_INIT = "container_field_init"
    CONTAINER_FIELD_ALIGN = "container_field_align"
    CONTAINER_FIELD = "container_field"
    USINGNAMESPACE = "usingnamespace"
    TEST_DECL = "test_decl"
    COMPTIME = "comptime"


FN_PROTO_TAGS = frozenset({
    NodeTag.FN_PROTO_SIMPLE,
    NodeTag.FN_PROTO_MULTI,
    NodeTag.FN_PROTO_ONE,
    NodeTag.FN_PROTO,
})

VAR_DECL_TAGS = frozenset({
    NodeTag.SIMPLE_VAR_DECL,
    NodeTag.ALIGNED_VAR_DECL,
    NodeTag.GLOBAL_VAR_DECL,
})

CONTAINER_FIELD_TAGS = frozenset({
    NodeTag.CONTAINER_FIELD_INIT,
    NodeTag.CONTAINER_FIELD_ALIGN,
    NodeTag.CONTAINER_FIELD,
})


class Span(NamedTuple):
    """Half-open range of token indices."""
    start: int
    end: int


@dataclass(frozen=True)
class Node:
    """A container member. Token positions index into SyntaxTree.tokens."""
    tag: NodeTag
    first_token: int                # first token, modifiers included
    main_token: int                 # fn, const/var, test, usingnamespace, comptime or field name
    end_token: int                  # one past the last token


@dataclass(frozen=True)
class FnProto(Node):
    fn_token: int
    lparen: int
    rparen: int
    params: tuple[Span, ...]
    attributes: tuple[Span, ...]    # align(..), addrspace(..), linksection(..), callconv(..)
    return_type: Span


@dataclass(frozen=True)
class FnDecl(Node):
    proto: FnProto
    body: Span


@dataclass(frozen=True)
class ContainerDecl:
    """A struct/enum/union/opaque literal used as a binding's initializer."""
    head: Span                      # e.g. `extern struct`, `enum(u8)`
    lbrace: int
    rbrace: int
    members: tuple[Node, ...]


@dataclass(frozen=True)
class VarDecl(Node):
    mut_token: int
    type_expr: Optional[Span]
    attributes: tuple[Span, ...]    # align(..), addrspace(..), linksection(..)
    init: Optional[Span]
    container: Optional[ContainerDecl] = None


@dataclass(frozen=True)
class ContainerField(Node):
    name_token: Optional[int]       # None for tuple fields with a complex type
    type_expr: Optional[Span]
    align: Optional[Span]
    value: Optional[Span]
    comptime_token: Optional[int] = None


@dataclass(frozen=True)
class UsingNamespace(Node):
    expr: Span


@dataclass(frozen=True)
class TestDecl(Node):
    body: Span


@dataclass(frozen=True)
class ComptimeBlock(Node):
    body: Span

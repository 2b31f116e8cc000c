"""Container-level declaration builder.

Segments a validated token stream into declaration nodes: functions,
bindings, fields, usingnamespace, test and comptime blocks. Container
literals used as binding initializers are segmented recursively.
"""

from typing import Optional

from .nodes import (
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
from .tokens import Token, TokenKind

# Modifiers that may precede fn and const/var at container level
_DECL_MODIFIERS = frozenset({"pub", "export", "extern", "inline", "noinline", "threadlocal"})

_FN_ATTRIBUTES = frozenset({"align", "addrspace", "linksection", "callconv"})
_VAR_ATTRIBUTES = frozenset({"align", "addrspace", "linksection"})

_CONTAINER_KEYWORDS = frozenset({"struct", "enum", "union", "opaque"})
_CONTAINER_LAYOUTS = frozenset({"extern", "packed"})

# Tokens after which align(..)/addrspace(..) belong to a pointer type
_POINTER_PREFIX = frozenset({"*", "**", "]", "const", "volatile", "allowzero"})

_OPENERS = frozenset({"(", "[", "{"})


def match_brackets(tokens: list[Token]) -> dict[int, int]:
    """Map every bracket token index to its partner, in both directions."""
    pairs: dict[int, int] = {}
    stack: list[int] = []
    for i, tok in enumerate(tokens):
        if tok.kind is not TokenKind.SYMBOL:
            continue
        if tok.text in _OPENERS:
            stack.append(i)
        elif tok.text in (")", "]", "}") and stack:
            j = stack.pop()
            pairs[i] = j
            pairs[j] = i
    return pairs


class MemberParser:
    """Builds declaration nodes over a bracket-matched token list."""

    def __init__(self, tokens: list[Token], pairs: dict[int, int]):
        self.tokens = tokens
        self.pairs = pairs

    def members(self, start: int, end: int) -> list[Node]:
        """Segment tokens[start:end] into container members, in order."""
        nodes = []
        i = start
        while i < end:
            node = self._member(i, end)
            nodes.append(node)
            i = max(node.end_token, i + 1)
        return nodes

    def _text(self, i: int) -> str:
        return self.tokens[i].text if i < len(self.tokens) else ""

    def _skip(self, i: int) -> int:
        """Advance past token i, jumping over a whole bracket group."""
        if self._text(i) in _OPENERS and i in self.pairs:
            return self.pairs[i] + 1
        return i + 1

    def _find(self, i: int, end: int, stops: frozenset) -> int:
        """First index in [i, end) at bracket depth 0 whose text is in stops."""
        while i < end:
            if self._text(i) in stops:
                return i
            i = self._skip(i)
        return end

    def _member(self, first: int, end: int) -> Node:
        j = first
        while j < end:
            text = self._text(j)
            if text == "extern":
                j += 1
                if j < end and self.tokens[j].kind is TokenKind.STRING:
                    j += 1
                continue
            if text in _DECL_MODIFIERS:
                j += 1
                continue
            break

        text = self._text(j)
        if text == "fn":
            return self._fn(first, j, end)
        if text in ("const", "var"):
            return self._var_decl(first, j, end)
        if text == "test":
            return self._block_decl(TestDecl, NodeTag.TEST_DECL, first, j, end)
        if text == "comptime" and self._text(j + 1) == "{":
            return self._block_decl(ComptimeBlock, NodeTag.COMPTIME, first, j, end)
        if text == "usingnamespace":
            semi = self._find(j + 1, end, frozenset({";"}))
            return UsingNamespace(
                tag=NodeTag.USINGNAMESPACE,
                first_token=first,
                main_token=j,
                end_token=min(semi + 1, end),
                expr=Span(j + 1, semi),
            )
        return self._field(first, end)

    def _block_decl(self, cls, tag: NodeTag, first: int, main: int, end: int) -> Node:
        lbrace = self._find(main + 1, end, frozenset({"{"}))
        rbrace = self.pairs.get(lbrace, end - 1)
        return cls(
            tag=tag,
            first_token=first,
            main_token=main,
            end_token=rbrace + 1,
            body=Span(lbrace, rbrace + 1),
        )

    def _fn(self, first: int, fn_token: int, end: int) -> Node:
        k = fn_token + 1
        if self.tokens[k].kind is TokenKind.IDENTIFIER:
            k += 1
        lparen = k
        rparen = self.pairs[lparen]
        params = self._split_commas(lparen + 1, rparen)

        k = rparen + 1
        attributes = []
        while self._text(k) in _FN_ATTRIBUTES and self._text(k + 1) == "(":
            close = self.pairs[k + 1]
            attributes.append(Span(k, close + 1))
            k = close + 1

        ret_start = k
        while k < end:
            text = self._text(k)
            if text == ";":
                return self._proto(first, fn_token, lparen, rparen, params, attributes,
                                   Span(ret_start, k), k + 1)
            if text == "{" and not self._is_type_brace(k):
                proto = self._proto(first, fn_token, lparen, rparen, params, attributes,
                                    Span(ret_start, k), k)
                rbrace = self.pairs[k]
                return FnDecl(
                    tag=NodeTag.FN_DECL,
                    first_token=first,
                    main_token=fn_token,
                    end_token=rbrace + 1,
                    proto=proto,
                    body=Span(k, rbrace + 1),
                )
            k = self._skip(k)

        return self._proto(first, fn_token, lparen, rparen, params, attributes,
                           Span(ret_start, end), end)

    def _proto(self, first, fn_token, lparen, rparen, params, attributes, return_type, end_token) -> FnProto:
        if len(params) <= 1:
            tag = NodeTag.FN_PROTO_ONE if attributes else NodeTag.FN_PROTO_SIMPLE
        else:
            tag = NodeTag.FN_PROTO if attributes else NodeTag.FN_PROTO_MULTI
        return FnProto(
            tag=tag,
            first_token=first,
            main_token=fn_token,
            end_token=end_token,
            fn_token=fn_token,
            lparen=lparen,
            rparen=rparen,
            params=tuple(params),
            attributes=tuple(attributes),
            return_type=return_type,
        )

    def _is_type_brace(self, lbrace: int) -> bool:
        """Reports whether `{` opens a container or error set inside a type."""
        prev = self._text(lbrace - 1)
        if prev in _CONTAINER_KEYWORDS or prev == "error":
            return True
        if prev == ")":
            opener = self.pairs.get(lbrace - 1)
            return opener is not None and self._text(opener - 1) in ("struct", "enum", "union")
        return False

    def _split_commas(self, start: int, end: int) -> list[Span]:
        """Split [start, end) on depth-0 commas; a trailing comma adds nothing."""
        spans = []
        i = start
        while i < end:
            comma = self._find(i, end, frozenset({","}))
            spans.append(Span(i, comma))
            i = comma + 1
        return spans

    def _type_end(self, start: int, end: int) -> int:
        """End of a declared type: `=`, `;` or a declaration-level attribute."""
        i = start
        while i < end:
            text = self._text(i)
            if text in ("=", ";", ","):
                return i
            if text == "linksection":
                return i
            if text in ("align", "addrspace") and self._text(i - 1) not in _POINTER_PREFIX:
                return i
            i = self._skip(i)
        return end

    def _var_decl(self, first: int, mut_token: int, end: int) -> VarDecl:
        k = mut_token + 2
        type_expr = None
        if self._text(k) == ":":
            type_end = self._type_end(k + 1, end)
            type_expr = Span(k + 1, type_end)
            k = type_end

        attributes = []
        while self._text(k) in _VAR_ATTRIBUTES and self._text(k + 1) == "(":
            close = self.pairs[k + 1]
            attributes.append(Span(k, close + 1))
            k = close + 1

        init = None
        if self._text(k) == "=":
            semi = self._find(k + 1, end, frozenset({";"}))
            init = Span(k + 1, semi)
            k = semi

        if not attributes:
            tag = NodeTag.SIMPLE_VAR_DECL
        elif type_expr is None and all(self._text(a.start) == "align" for a in attributes):
            tag = NodeTag.ALIGNED_VAR_DECL
        else:
            tag = NodeTag.GLOBAL_VAR_DECL

        return VarDecl(
            tag=tag,
            first_token=first,
            main_token=mut_token,
            end_token=min(k + 1, end),
            mut_token=mut_token,
            type_expr=type_expr,
            attributes=tuple(attributes),
            init=init,
            container=self._container(init) if init else None,
        )

    def _container(self, init: Span) -> Optional[ContainerDecl]:
        """Recognize `[extern|packed] struct|enum|union|opaque [(..)] { .. }`."""
        k = init.start
        while k < init.end and self._text(k) in _CONTAINER_LAYOUTS:
            k += 1
        if k >= init.end or self._text(k) not in _CONTAINER_KEYWORDS:
            return None
        k += 1
        if self._text(k) == "(":
            k = self.pairs[k] + 1
        if self._text(k) != "{":
            return None
        rbrace = self.pairs[k]
        if rbrace + 1 != init.end:
            return None
        return ContainerDecl(
            head=Span(init.start, k),
            lbrace=k,
            rbrace=rbrace,
            members=tuple(self.members(k + 1, rbrace)),
        )

    def _field(self, first: int, end: int) -> ContainerField:
        comma = self._find(first, end, frozenset({",", ";"}))
        k = first
        comptime_token = None
        if self._text(k) == "comptime":
            comptime_token = k
            k += 1

        name_token = None
        type_expr = None
        named = (
            k < comma
            and self.tokens[k].kind is TokenKind.IDENTIFIER
            and (k + 1 >= comma or self._text(k + 1) in (":", "=", "align"))
        )
        if named:
            name_token = k
            k += 1
            if self._text(k) == ":":
                type_end = self._type_end(k + 1, comma)
                type_expr = Span(k + 1, type_end)
                k = type_end
        else:
            type_end = self._type_end(k, comma)
            type_expr = Span(k, type_end)
            k = type_end

        align = None
        if self._text(k) == "align" and self._text(k + 1) == "(":
            close = self.pairs[k + 1]
            align = Span(k, close + 1)
            k = close + 1

        value = None
        if k < comma and self._text(k) == "=":
            value = Span(k + 1, comma)

        if align is not None and value is not None:
            tag = NodeTag.CONTAINER_FIELD
        elif align is not None:
            tag = NodeTag.CONTAINER_FIELD_ALIGN
        else:
            tag = NodeTag.CONTAINER_FIELD_INIT

        return ContainerField(
            tag=tag,
            first_token=first,
            main_token=name_token if name_token is not None else type_expr.start,
            end_token=min(comma + 1, end),
            name_token=name_token,
            type_expr=type_expr,
            align=align,
            value=value,
            comptime_token=comptime_token,
        )

"""Selective renderer: the public surface of a declaration.

Reproduces doc comments and signatures, replaces function bodies with a
marker and recurses into container literals showing public members only.
Test and comptime blocks never appear.
"""

from contextlib import contextmanager
from typing import Iterator

from ..config import DEFAULT_INDENT_WIDTH
from ..errors import RenderError
from ..logging import get_logger
from ..parser import (
    CONTAINER_FIELD_TAGS,
    FN_PROTO_TAGS,
    VAR_DECL_TAGS,
    ContainerDecl,
    ContainerField,
    FnProto,
    Node,
    NodeTag,
    Span,
    SyntaxTree,
    UsingNamespace,
    VarDecl,
)
from ..search.classify import identifier, is_public
from .spacing import format_tokens

logger = get_logger(__name__)

# Stands in for an elided function body
BODY_MARKER = "{ ... }"

_NEVER_RENDERED = frozenset({NodeTag.TEST_DECL, NodeTag.COMPTIME})


class Renderer:
    """Renders nodes of one tree into indented lines."""

    def __init__(self, tree: SyntaxTree, indent_width: int = DEFAULT_INDENT_WIDTH, depth: int = 0):
        self.tree = tree
        self.indent_width = indent_width
        self.depth = depth
        self.lines: list[str] = []

    def _emit(self, text: str):
        self.lines.append(" " * (self.depth * self.indent_width) + text)

    @contextmanager
    def _indented(self) -> Iterator[None]:
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def _format(self, span: Span) -> str:
        return format_tokens(self.tree.span_tokens(span))

    def _modifiers(self, node: Node) -> str:
        """Modifier prefix such as `pub `, `pub extern "c" ` or ``."""
        text = self._format(Span(node.first_token, node.main_token))
        return text + " " if text else ""

    def render_member(self, node: Node):
        """Render doc comments and the public surface of node."""
        if node.tag in _NEVER_RENDERED:
            return

        for line in self.tree.doc_comments(node):
            self._emit(line)

        if node.tag is NodeTag.FN_DECL:
            self._fn_proto(node.proto, " " + BODY_MARKER)
        elif node.tag in FN_PROTO_TAGS:
            self._fn_proto(node, ";")
        elif node.tag in VAR_DECL_TAGS:
            self._var_decl(node)
        elif node.tag in CONTAINER_FIELD_TAGS:
            self._field(node)
        elif node.tag is NodeTag.USINGNAMESPACE:
            self._usingnamespace(node)
        else:
            raise RenderError.unsupported(f"declaration {node.tag.value}",
                                          self.tree.tokens[node.main_token].line)

    def _fn_proto(self, proto: FnProto, suffix: str):
        head = self._modifiers(proto) + "fn"
        name_idx = proto.fn_token + 1
        if name_idx < proto.lparen:
            head += " " + self.tree.token_text(name_idx)
        else:
            head += " "

        tail = ")"
        for attr in proto.attributes:
            tail += " " + self._format(attr)
        return_type = self._format(proto.return_type)
        if return_type:
            tail += " " + return_type
        tail += suffix

        params = [self._format(p) for p in proto.params]
        docs = [self.tree.doc_comments_before(p.start) for p in proto.params]
        trailing_comma = bool(proto.params) and self.tree.token_text(proto.rparen - 1) == ","
        if not trailing_comma and not any(docs):
            self._emit(head + "(" + ", ".join(params) + tail)
            return

        # One parameter per line, each after its doc comments
        self._emit(head + "(")
        with self._indented():
            for param, doc in zip(params, docs):
                for line in doc:
                    self._emit(line)
                self._emit(param + ",")
        self._emit(tail)

    def _var_decl(self, decl: VarDecl):
        text = self._modifiers(decl) + self.tree.token_text(decl.mut_token)
        text += " " + self.tree.token_text(decl.mut_token + 1)
        if decl.type_expr is not None:
            text += ": " + self._format(decl.type_expr)
        for attr in decl.attributes:
            text += " " + self._format(attr)

        if decl.container is not None:
            self._container(text + " = ", decl.container)
            return
        if decl.init is not None:
            text += " = " + self._format(decl.init)
        self._emit(text + ";")

    def _container(self, prefix: str, container: ContainerDecl):
        head = prefix + self._format(container.head) + " {"
        doc = self.tree.container_doc_comments(container.lbrace)
        rendered = self._public_members(container)
        if not rendered and not doc:
            self._emit(head + "};")
            return

        self._emit(head)
        with self._indented():
            for line in doc:
                self._emit(line)
        if doc and rendered:
            self.lines.append("")
        previous = None
        for member, lines in rendered:
            if previous is not None and not (
                previous.tag in CONTAINER_FIELD_TAGS and member.tag in CONTAINER_FIELD_TAGS
            ):
                self.lines.append("")
            self.lines.extend(lines)
            previous = member
        self._emit("};")

    def _public_members(self, container: ContainerDecl) -> list[tuple[Node, list[str]]]:
        """Render each public member into its own buffer, one level deeper.

        A member that fails to render is logged and left out; its siblings
        are still rendered.
        """
        rendered = []
        for member in container.members:
            if member.tag in _NEVER_RENDERED or not is_public(self.tree, member):
                continue
            child = Renderer(self.tree, self.indent_width, self.depth + 1)
            try:
                child.render_member(member)
            except RenderError as e:
                logger.warning(
                    "member_skipped",
                    file=self.tree.filename,
                    member=identifier(self.tree, member),
                    reason=e.message,
                )
                continue
            if child.lines:
                rendered.append((member, child.lines))
        return rendered

    def _field(self, field: ContainerField):
        text = self._format(Span(field.first_token, field.end_token))
        if text.endswith(","):
            text = text[:-1]
        self._emit(text + ",")

    def _usingnamespace(self, node: UsingNamespace):
        text = self._modifiers(node) + "usingnamespace"
        expr = self._format(node.expr)
        if expr:
            text += " " + expr
        self._emit(text + ";")


def render_pub_member(tree: SyntaxTree, node: Node, indent_width: int = DEFAULT_INDENT_WIDTH) -> list[str]:
    """Render a declaration's doc comments and public surface.

    Args:
        tree: Tree owning the node
        node: Declaration to render
        indent_width: Spaces per nesting level

    Returns:
        Output lines, without trailing newlines

    Raises:
        RenderError: the declaration uses an unsupported shape
    """
    renderer = Renderer(tree, indent_width)
    renderer.render_member(node)
    return renderer.lines

"""Token stream extraction from the tree-sitter Zig grammar."""

import re
from dataclasses import dataclass
from enum import Enum

from tree_sitter_language_pack import get_parser

from ..errors import ParseError


class TokenKind(str, Enum):
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    BUILTIN = "builtin"
    STRING = "string"
    MULTILINE_STRING = "multiline_string"
    CHAR = "char"
    NUMBER = "number"
    COMMENT = "comment"
    SYMBOL = "symbol"


ZIG_KEYWORDS = frozenset({
    "addrspace", "align", "allowzero", "and", "anyframe", "anytype", "asm",
    "async", "await", "break", "callconv", "catch", "comptime", "const",
    "continue", "defer", "else", "enum", "errdefer", "error", "export",
    "extern", "fn", "for", "if", "inline", "linksection", "noalias",
    "noinline", "nosuspend", "opaque", "or", "orelse", "packed", "pub",
    "resume", "return", "struct", "suspend", "switch", "test", "threadlocal",
    "try", "union", "unreachable", "usingnamespace", "var", "volatile", "while",
})

_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Grammar node types whose whole text is one lexical token
_ATOMIC_TYPES = frozenset({
    "identifier", "builtin_identifier", "builtinidentifier",
    "integer", "float", "number",
})


@dataclass(frozen=True)
class Token:
    """A lexical token with its position in the source."""
    kind: TokenKind
    text: str
    start_byte: int
    end_byte: int
    line: int                       # 1-indexed

    def is_doc_comment(self) -> bool:
        """Reports whether this is a `///` declaration doc comment."""
        return (
            self.kind is TokenKind.COMMENT
            and self.text.startswith("///")
            and not self.text.startswith("////")
        )

    def is_container_doc_comment(self) -> bool:
        """Reports whether this is a `//!` file-level doc comment."""
        return self.kind is TokenKind.COMMENT and self.text.startswith("//!")


def classify(text: str) -> TokenKind:
    """Determine the token kind from its source text."""
    if text.startswith("//"):
        return TokenKind.COMMENT
    if text.startswith("\\\\"):
        return TokenKind.MULTILINE_STRING
    if text.startswith('"'):
        return TokenKind.STRING
    if text.startswith("'"):
        return TokenKind.CHAR
    if text.startswith('@"'):
        return TokenKind.IDENTIFIER
    if text.startswith("@"):
        return TokenKind.BUILTIN
    if text[0].isdigit():
        return TokenKind.NUMBER
    if _WORD.fullmatch(text):
        return TokenKind.KEYWORD if text in ZIG_KEYWORDS else TokenKind.IDENTIFIER
    return TokenKind.SYMBOL


def tokenize(content: str, filename: str = "<source>") -> tuple[list[Token], list[Token]]:
    """Parse Zig source with tree-sitter and flatten it into tokens.

    Args:
        content: Raw source code
        filename: File path (for error messages)

    Returns:
        (code tokens, comment tokens), each in source order

    Raises:
        ParseError: the grammar rejected the source
    """
    source_bytes = content.encode("utf-8")
    parser = get_parser("zig")
    tree = parser.parse(source_bytes)

    if tree.root_node.has_error:
        line, column = _first_error(tree.root_node)
        raise ParseError.syntax(filename, line, column)

    code: list[Token] = []
    comments: list[Token] = []
    _collect(tree.root_node, source_bytes, code, comments)
    return code, comments


def _is_atomic(node, text: str) -> bool:
    """Reports whether a grammar node is lexed as a single token."""
    if node.child_count == 0:
        return True
    node_type = node.type.lower()
    if node_type in _ATOMIC_TYPES:
        return True
    if "comment" in node_type:
        return text.startswith("//")
    if "string" in node_type:
        return text.startswith(('"', "\\\\"))
    if "char" in node_type:
        return text.startswith("'")
    return False


def _collect(node, source_bytes: bytes, code: list, comments: list):
    """Recursively gather leaf tokens in source order."""
    text = source_bytes[node.start_byte:node.end_byte].decode("utf-8")
    if not _is_atomic(node, text):
        for child in node.children:
            _collect(child, source_bytes, code, comments)
        return

    text = text.rstrip()
    if not text:
        return
    kind = classify(text)
    if kind is TokenKind.COMMENT:
        comments.extend(_comment_lines(text, node.start_byte, node.start_point[0] + 1))
        return
    code.append(Token(
        kind=kind,
        text=text,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        line=node.start_point[0] + 1,
    ))


def _comment_lines(text: str, start_byte: int, line: int) -> list[Token]:
    """Split a comment node into one token per source line.

    Some grammar versions merge consecutive doc comment lines into a
    single node.
    """
    tokens = []
    offset = start_byte
    for i, raw in enumerate(text.split("\n")):
        size = len(raw.encode("utf-8"))
        stripped = raw.strip()
        if stripped:
            lead = len(raw) - len(raw.lstrip())
            begin = offset + lead
            tokens.append(Token(
                kind=TokenKind.COMMENT,
                text=stripped,
                start_byte=begin,
                end_byte=begin + len(stripped.encode("utf-8")),
                line=line + i,
            ))
        offset += size + 1
    return tokens


def _first_error(node) -> tuple[int, int]:
    """Locate the first ERROR or MISSING node, 1-indexed."""
    if node.type == "ERROR" or node.is_missing:
        return node.start_point[0] + 1, node.start_point[1] + 1
    for child in node.children:
        if child.has_error or child.is_missing:
            return _first_error(child)
    return node.start_point[0] + 1, node.start_point[1] + 1

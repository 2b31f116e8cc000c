"""SyntaxTree: one parsed source file."""

from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Optional

from .members import MemberParser, match_brackets
from .nodes import Node, Span
from .tokens import Token, tokenize


@dataclass(frozen=True)
class SyntaxTree:
    """Tokens, comments and top-level declarations of a single file."""
    filename: str
    source: str
    tokens: list[Token]
    comments: list[Token]
    pairs: dict[int, int] = field(repr=False)
    root_decls: list[Node] = field(repr=False)
    comment_starts: list[int] = field(repr=False)

    def token_text(self, index: int) -> str:
        return self.tokens[index].text

    def span_tokens(self, span: Span) -> list[Token]:
        return self.tokens[span.start:span.end]

    def _comments_between(self, lo: int, hi: int) -> list[Token]:
        """Comments starting in the byte range [lo, hi)."""
        i = bisect_left(self.comment_starts, lo)
        j = bisect_left(self.comment_starts, hi)
        return self.comments[i:j]

    def _gap_before(self, index: int) -> tuple[int, int]:
        """Byte range between token index-1 and token index."""
        lo = self.tokens[index - 1].end_byte if index > 0 else 0
        if index < len(self.tokens):
            return lo, self.tokens[index].start_byte
        return lo, len(self.source.encode("utf-8"))

    def doc_comments_before(self, index: int) -> list[str]:
        """`///` lines directly preceding token index."""
        return [c.text for c in self._comments_between(*self._gap_before(index))
                if c.is_doc_comment()]

    def doc_comments(self, node: Node) -> list[str]:
        """Doc comment lines between the previous token and the node's first token."""
        return self.doc_comments_before(node.first_token)

    def container_doc_comments(self, lbrace: Optional[int] = None) -> list[str]:
        """The contiguous `//!` block opening a container.

        Without lbrace this is the file itself; otherwise the container
        literal whose `{` is token lbrace.
        """
        index = 0 if lbrace is None else lbrace + 1
        lines = []
        for comment in self._comments_between(*self._gap_before(index)):
            if comment.is_container_doc_comment():
                lines.append(comment.text)
            elif lines:
                break
        return lines


def parse_file(content: str, filename: str = "<source>") -> SyntaxTree:
    """Parse Zig source into a SyntaxTree.

    Args:
        content: Raw source code
        filename: File path (for error messages and logging)

    Returns:
        SyntaxTree with top-level declarations in source order

    Raises:
        ParseError: the source is not valid Zig
    """
    tokens, comments = tokenize(content, filename)
    pairs = match_brackets(tokens)
    root_decls = MemberParser(tokens, pairs).members(0, len(tokens))
    return SyntaxTree(
        filename=filename,
        source=content,
        tokens=tokens,
        comments=comments,
        pairs=pairs,
        root_decls=root_decls,
        comment_starts=[c.start_byte for c in comments],
    )

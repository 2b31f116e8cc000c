"""Token spacing model.

Re-derives inter-token whitespace for a run of tokens, following the
layout zig fmt produces for single-line expressions: operators spaced,
calls and indexing tight, prefix operators glued to their operand.
"""

from typing import Sequence

from ..errors import RenderError
from ..parser import Token, TokenKind

# Never followed by a space
_TIGHT_AFTER = frozenset({"(", "[", "."})
# Never preceded by a space
_TIGHT_BEFORE = frozenset({",", ";", ")", "]", ":"})

_PREFIX_OPERATORS = frozenset({"*", "**", "?", "!", "&", "-", "-%", "~"})

# Ranges are written without spaces: a[0..n], 1...5
_RANGES = frozenset({"..", "..."})

# Keywords whose argument list is glued on: align(4), enum(u8)
_TIGHT_PAREN_KEYWORDS = frozenset({
    "align", "addrspace", "callconv", "linksection", "struct", "enum", "union",
})

# Jumps that take a label: break :blk, continue :outer
_LABEL_JUMPS = frozenset({"break", "continue"})

# Keywords that end an operand like an identifier would
_VALUE_KEYWORDS = frozenset({"unreachable", "anytype", "anyframe", "error"})

_OPERAND_KINDS = frozenset({
    TokenKind.IDENTIFIER,
    TokenKind.BUILTIN,
    TokenKind.STRING,
    TokenKind.CHAR,
    TokenKind.NUMBER,
})


def format_tokens(tokens: Sequence[Token]) -> str:
    """Join tokens into one line of canonically spaced source.

    Raises:
        RenderError: the run contains a multiline string literal
    """
    parts: list[str] = []
    prev = None
    prev_operand = False        # prev ends an operand: x, 1, ), ]
    prev_tight = False          # prev binds to the next token: prefix op, range, binary !
    brackets: list[bool] = []   # per open `[`: True when it starts a type prefix
    unpadded = _single_member_error_sets(tokens)

    for i, tok in enumerate(tokens):
        text = tok.text
        if tok.kind is TokenKind.MULTILINE_STRING:
            raise RenderError.unsupported("multiline string literal", tok.line)
        # Trailing commas only make sense on multi-line layouts
        if text == "," and i + 1 < len(tokens) and tokens[i + 1].text in ("}", ")"):
            continue

        if (prev is not None and not prev_tight and i not in unpadded
                and _spaced(prev, tok, prev_operand, brackets)):
            parts.append(" ")
        parts.append(text)

        operand = False
        tight = False
        if prev is not None and prev.text == "." and text != "{":
            operand = True
        elif text == ":" and prev is not None and prev.text in _LABEL_JUMPS:
            tight = True
        elif text == "[":
            brackets.append(not prev_operand)
        elif text == "]":
            type_prefix = brackets.pop() if brackets else False
            operand = not type_prefix
            tight = type_prefix
        elif text in _PREFIX_OPERATORS and not prev_operand:
            tight = True
        elif text == "!":
            tight = True
        elif text in _RANGES:
            tight = prev_operand
        else:
            operand = (
                tok.kind in _OPERAND_KINDS
                or text in (")", "}")
                or text in _VALUE_KEYWORDS
                or text.startswith(".") and len(text) > 1 and text not in _RANGES
            )

        prev = tok
        prev_operand = operand
        prev_tight = tight

    return "".join(parts)


def _single_member_error_sets(tokens: Sequence[Token]) -> set[int]:
    """Indices after which no space goes in `error{A}`."""
    unpadded = set()
    for i in range(len(tokens) - 3):
        if (tokens[i].text == "error" and tokens[i + 1].text == "{"
                and tokens[i + 3].text == "}"):
            unpadded.update((i + 2, i + 3))
    return unpadded


def _spaced(prev: Token, tok: Token, prev_operand: bool, brackets: list[bool]) -> bool:
    """Reports whether a space separates prev and tok."""
    text = tok.text
    if text == ":" and prev.text in _LABEL_JUMPS:
        return True
    if prev.text in _TIGHT_AFTER:
        return False
    if text in _TIGHT_BEFORE:
        return False

    if text == "{":
        if prev.text == "error" or prev.kind is TokenKind.IDENTIFIER or prev.text == "]":
            return False
        return True
    if prev.text == "{":
        return text != "}"
    if text == "}":
        return True

    if text == "(":
        return not (prev_operand or prev.text in _TIGHT_PAREN_KEYWORDS)
    if text == "[":
        return not prev_operand
    if text == "." or text.startswith(".") and text not in _RANGES:
        return not prev_operand
    if text == "!" or text in _RANGES:
        return not prev_operand

    if prev.text == ":" and brackets:
        # sentinel: [:0]u8, [*:0]const u8
        return False
    return True

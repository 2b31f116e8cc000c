"""Identifier queries."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ASCII-only case folding; non-ASCII letters are compared as-is
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "abcdefghijklmnopqrstuvwxyz",
)


def ascii_fold(text: str) -> str:
    return text.translate(_ASCII_LOWER)


class QueryKind(str, Enum):
    NONE = "none"       # matches nothing; file doc comment only
    ALL = "all"         # matches every declaration
    EXACT = "exact"     # case-insensitive full match
    SUB = "sub"         # case-insensitive substring match


@dataclass(frozen=True)
class Query:
    """Which declarations a search selects."""
    kind: QueryKind
    text: str = ""

    @classmethod
    def none(cls) -> "Query":
        return cls(QueryKind.NONE)

    @classmethod
    def all(cls) -> "Query":
        return cls(QueryKind.ALL)

    @classmethod
    def exact(cls, name: str) -> "Query":
        return cls(QueryKind.EXACT, name)

    @classmethod
    def sub(cls, fragment: str) -> "Query":
        return cls(QueryKind.SUB, fragment)

    @classmethod
    def from_args(
        cls,
        identifier: Optional[str],
        substring: bool = False,
        doc_only: bool = False,
        browse_mode: str = "all",
    ) -> "Query":
        """Build the query for a command line.

        With no identifier the query is browse_mode ("all" or "none");
        doc_only always selects Query.none().
        """
        if doc_only:
            return cls.none()
        if identifier is None:
            return cls(QueryKind(browse_mode))
        if substring:
            return cls.sub(identifier)
        return cls.exact(identifier)

    @property
    def shows_file_doc(self) -> bool:
        """Reports whether the file-level doc comment is printed."""
        return self.kind in (QueryKind.NONE, QueryKind.ALL)

    def matches(self, identifier: Optional[str]) -> bool:
        """Reports whether a declaration with this identifier is selected."""
        if self.kind is QueryKind.NONE:
            return False
        if self.kind is QueryKind.ALL:
            return True
        if identifier is None:
            return False
        if self.kind is QueryKind.EXACT:
            return ascii_fold(identifier) == ascii_fold(self.text)
        return ascii_fold(self.text) in ascii_fold(identifier)

    def __str__(self) -> str:
        if self.kind in (QueryKind.EXACT, QueryKind.SUB):
            return f"{self.kind.value}:{self.text}"
        return self.kind.value

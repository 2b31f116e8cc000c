"""Search package: queries, visibility and identifier matching.

The declaration scanner lives in zdoc.search.scanner.
"""

from .query import Query, QueryKind, ascii_fold
from .classify import identifier, identifier_match, is_public

__all__ = [
    "Query",
    "QueryKind",
    "ascii_fold",
    "identifier",
    "identifier_match",
    "is_public",
]

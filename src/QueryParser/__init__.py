"""QueryParser: search query strings to engine-agnostic trees and back."""

from __future__ import annotations

from QueryParser.core.errors import QueryParseError
from QueryParser.core.patterns import DEFAULT_PATTERNS, Patterns
from QueryParser.core.query import Item, Query, iter_leaves
from QueryParser.parser import ParseResult, QueryParser, parse_query, unparse

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PATTERNS",
    "Item",
    "ParseResult",
    "Patterns",
    "Query",
    "QueryParseError",
    "QueryParser",
    "iter_leaves",
    "parse_query",
    "unparse",
]

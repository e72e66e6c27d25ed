"""Query string parsing and serialization.

Exports the configured `QueryParser` facade together with the function-level
entry points used by it.
"""

from __future__ import annotations

from QueryParser.parser.engine import QueryParser
from QueryParser.parser.grammar import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, ParseResult, check_max_depth, parse_query
from QueryParser.parser.unparse import unparse, unparse_item

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "ParseResult",
    "QueryParser",
    "check_max_depth",
    "parse_query",
    "unparse",
    "unparse_item",
]

"""Configured query parser.

`QueryParser` binds a recognizer set and parse options once, then parses and
unparses any number of queries. Instances hold no per-call state, so one
instance can serve several threads.
"""

from __future__ import annotations

import threading
from typing import Any

from QueryParser.core.errors import QueryParseError
from QueryParser.core.patterns import DEFAULT_PATTERNS, Patterns
from QueryParser.core.query import Query
from QueryParser.parser.grammar import DEFAULT_MAX_DEPTH, ParseResult, check_max_depth, parse_query
from QueryParser.parser.unparse import unparse
from QueryParser.utils.log import log


class QueryParser:
    """Parse query strings into `Query` trees and back.

    Example:
        >>> qp = QueryParser()
        >>> q = qp.parse('+title:python "exact phrase" -java')
        >>> qp.unparse(q)
        '+title:python "exact phrase" -java'
    """

    def __init__(
        self,
        patterns: Patterns | None = None,
        *,
        implicit_plus: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
        warn_dropped_sign: bool = True,
    ) -> None:
        """Initialize a parser.

        Args:
            patterns: Recognizer set; defaults to `DEFAULT_PATTERNS`.
            implicit_plus: Default for `parse(..., implicit_plus=None)`.
            max_depth: Maximum parenthesis nesting accepted.
            warn_dropped_sign: Log a warning when `+a OR b` drops the `+`.

        Raises:
            ValueError: If `max_depth` is not between 1 and `MAX_DEPTH_LIMIT`.
        """
        self.patterns = patterns or DEFAULT_PATTERNS
        self.implicit_plus = implicit_plus
        self.max_depth = check_max_depth(max_depth)
        self.warn_dropped_sign = warn_dropped_sign
        self._local = threading.local()

    @classmethod
    def configure(cls, patterns: dict[str, Any] | None = None, **options: Any) -> QueryParser:
        """Build a parser from recognizer overrides.

        Args:
            patterns: Mapping of recognizer name (`term`, `field`,
                `operator`, `operator_no_field`, `and`, `or`, `not`) to a
                regex string, a list of literal spellings or a matcher.
            **options: Keyword options of `QueryParser.__init__`.
        """
        return cls(Patterns.build(**(patterns or {})), **options)

    @property
    def last_error(self) -> str | None:
        """Message of the last failed `try_parse` in the calling thread."""
        return getattr(self._local, "error", None)

    def parse(self, text: str, implicit_plus: bool | None = None) -> Query:
        """Parse a query string.

        Args:
            text: Query string.
            implicit_plus: Put unsigned items in `mandatory`; None uses the
                instance default.

        Returns:
            Parsed query.

        Raises:
            QueryParseError: If the string is not a valid query.
        """
        if implicit_plus is None:
            implicit_plus = self.implicit_plus
        log.debug("Parsing query=%r implicit_plus=%s", text, implicit_plus)
        query = parse_query(
            text,
            patterns=self.patterns,
            implicit_plus=implicit_plus,
            max_depth=self.max_depth,
            warn_dropped_sign=self.warn_dropped_sign,
        )
        log.debug(
            "Parsed query: mandatory=%d optional=%d excluded=%d",
            len(query.mandatory),
            len(query.optional),
            len(query.excluded),
        )
        return query

    def try_parse(self, text: str, implicit_plus: bool | None = None) -> ParseResult:
        """Parse a query string, returning the error instead of raising it."""
        try:
            query = self.parse(text, implicit_plus)
        except QueryParseError as e:
            log.debug("Parse failed: %s", e)
            self._local.error = str(e)
            return ParseResult(text=text, error=e)
        self._local.error = None
        return ParseResult(text=text, query=query)

    def unparse(self, query: Query) -> str:
        """Render a query into canonical text for this parser's patterns."""
        return unparse(query, self.patterns)

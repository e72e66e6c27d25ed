"""Errors raised while parsing a query string.

Every failure aborts the current parse call only. The exception carries the
offending query and the position where scanning stopped so callers can point
at the construct.
"""

from __future__ import annotations


class QueryParseError(ValueError):
    """Base class for all query syntax errors.

    Attributes:
        message: Human-readable description of the problem.
        query: Full query string being parsed.
        position: Offset in `query` where the problem was detected.
    """

    def __init__(self, message: str, *, query: str = "", position: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.query = query
        self.position = position

    def __str__(self) -> str:
        if not self.query:
            return self.message
        return f"[{self.query}] : {self.message} (at position {self.position})"


class UnmatchedParenthesisError(QueryParseError):
    """A `(` without its `)` or a `)` without its `(`."""


class UnexpectedTokenError(QueryParseError):
    """Text that cannot continue the query at this point."""


class InvalidOperatorForEmptyFieldError(QueryParseError):
    """An operator used without a field that requires one."""


class NestedFieldUnderDistributionError(QueryParseError):
    """An explicit field inside `field:( ... )`."""


class AmbiguousBooleanMixingError(QueryParseError):
    """`AND` and `OR` at the same level without parentheses."""


class UnsoundNegatedOrError(QueryParseError):
    """A `-` or `NOT` operand of `OR`."""


class UnterminatedQuoteError(QueryParseError):
    pass


class EmptyQuotedValueError(QueryParseError):
    pass


class NestingTooDeepError(QueryParseError):
    """Parentheses nested deeper than the configured limit."""

"""Recursive-descent parser for query strings.

Grammar:

    Query       := Item*
    Item        := SignPrefix? (Field Operator)? Value
    SignPrefix  := '+' | '-' | 'NOT'
    Value       := Term | QuotedPhrase | '(' Query ')'

`AND` / `OR` connectors between items are desugared while parsing:

- `a AND b`  -> `+a +b`
- `a OR b`   -> `a b`
- `NOT a`    -> `-a`
- `+a OR b`  -> `a b` (the `+` is dropped)
- `-a OR b`  -> error, there is no sign-prefix equivalent
- `a AND b OR c` -> error, use parentheses to group

`field:(a b)` parses the group with `field` and its operator as defaults, so
the nested items read `field:a field:b`. A field inside such a group is an
error; a field-less operator replaces the distributed one (`foo:(~a)` reads
`foo~a`).
"""

from __future__ import annotations

from dataclasses import dataclass

from QueryParser.core.errors import (
    AmbiguousBooleanMixingError,
    NestedFieldUnderDistributionError,
    NestingTooDeepError,
    QueryParseError,
    UnexpectedTokenError,
    UnmatchedParenthesisError,
    UnsoundNegatedOrError,
)
from QueryParser.core.patterns import DEFAULT_PATTERNS, Patterns
from QueryParser.core.query import DEFAULT_OP, Item, Query
from QueryParser.parser.scanner import Scanner
from QueryParser.utils.log import log

DEFAULT_MAX_DEPTH = 64
# Each nesting level costs three Python frames; stay well below the
# interpreter recursion limit.
MAX_DEPTH_LIMIT = 200

_BUCKET_FOR_SIGN = {"+": "mandatory", "": "optional", "-": "excluded"}


def check_max_depth(max_depth: int) -> int:
    """Return `max_depth` if it is a usable nesting limit.

    Raises:
        ValueError: If it is not between 1 and `MAX_DEPTH_LIMIT`.
    """
    if not 0 < max_depth <= MAX_DEPTH_LIMIT:
        raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}")
    return max_depth


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of one parse call: exactly one of `query` / `error` is set."""

    text: str
    query: Query | None = None
    error: QueryParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Query:
        """Return the query, or raise the recorded error."""
        if self.error is not None:
            raise self.error
        assert self.query is not None
        return self.query


class _RecursiveDescent:
    """One parse run. Holds the scanner and the per-call options."""

    def __init__(
        self,
        text: str,
        patterns: Patterns,
        *,
        implicit_plus: bool,
        max_depth: int,
        warn_dropped_sign: bool,
    ) -> None:
        self.scanner = Scanner(text, patterns)
        self.patterns = patterns
        self.implicit_plus = implicit_plus
        self.max_depth = check_max_depth(max_depth)
        self.warn_dropped_sign = warn_dropped_sign

    def parse(self) -> Query:
        query = self._sequence("", DEFAULT_OP, depth=0)
        if not self.scanner.at_end():
            raise self.scanner.error(UnmatchedParenthesisError, "')' without matching '('")
        return query

    def _sequence(self, parent_field: str, parent_op: str, *, depth: int) -> Query:
        """Parse items up to the end of input or a closing parenthesis."""
        s = self.scanner
        buckets: dict[str, list[Item]] = {bucket: [] for bucket in _BUCKET_FOR_SIGN.values()}
        pre_bool: str | None = None

        s.skip_ws()
        while not s.at_end() and s.peek() != ")":
            start = s.pos
            explicit = s.sign()
            if explicit is None and s.connector(self.patterns.not_):
                explicit = "-"
            item = self._item(parent_field, parent_op, depth=depth)
            s.skip_ws()

            post_bool = self._connector()
            if pre_bool and post_bool and pre_bool != post_bool:
                raise s.error(
                    AmbiguousBooleanMixingError,
                    "cannot mix AND/OR in one group; use parentheses",
                )
            sign = self._desugar(explicit, pre_bool or post_bool, start)
            pre_bool = post_bool
            buckets[_BUCKET_FOR_SIGN[sign]].append(item)

        if pre_bool:
            raise s.error(UnexpectedTokenError, f"missing operand after {pre_bool}")
        return Query(**buckets)

    def _item(self, parent_field: str, parent_op: str, *, depth: int) -> Item:
        s = self.scanner
        start = s.pos
        field_op = s.field_op()
        if field_op is None:
            op = s.bare_op()
            if op is not None:
                field_op = ("", op)

        if field_op is not None:
            if parent_field and field_op[0]:
                raise s.error(
                    NestedFieldUnderDistributionError,
                    f"field '{field_op[0]}' inside '{parent_field}{parent_op}( )'",
                    position=start,
                )
            # a field-less operator keeps the distributed field
            field, op = field_op[0] or parent_field, field_op[1]
        else:
            field, op = parent_field, parent_op

        quoted = s.quoted()
        if quoted is not None:
            quote, content = quoted
            return Item(field=field, op=op, value=content, quote=quote)

        if s.peek() == "(":
            return Item(value=self._group(field, op, depth=depth))

        term = s.term()
        if term is not None:
            return Item(field=field, op=op, value=term)

        if field_op is not None:
            raise s.error(UnexpectedTokenError, f"missing value after '{field}{op}'")
        raise s.error(UnexpectedTokenError, f"unexpected string '{s.rest()}'")

    def _group(self, field: str, op: str, *, depth: int) -> Query:
        s = self.scanner
        open_pos = s.pos
        if depth >= self.max_depth:
            raise s.error(NestingTooDeepError, f"parentheses nested deeper than {self.max_depth}")
        s.accept("(")
        sub = self._sequence(field, op, depth=depth + 1)
        if not s.accept(")"):
            raise s.error(UnmatchedParenthesisError, "'(' without matching ')'", position=open_pos)
        if sub.is_empty():
            raise s.error(UnexpectedTokenError, "empty parentheses", position=open_pos)
        return sub

    def _connector(self) -> str | None:
        if self.scanner.connector(self.patterns.and_):
            return "AND"
        if self.scanner.connector(self.patterns.or_):
            return "OR"
        return None

    def _desugar(self, explicit: str | None, connector: str | None, start: int) -> str:
        """Return the sign of an item given its prefix and its connector."""
        sign = explicit or ("+" if self.implicit_plus else "")
        if connector == "OR":
            if sign == "-":
                raise self.scanner.error(
                    UnsoundNegatedOrError,
                    "operands of OR cannot have '-' or NOT prefix",
                    position=start,
                )
            if sign == "+" and explicit and self.warn_dropped_sign:
                log.warning(
                    "[%s] : '+' dropped on OR operand at position %d",
                    self.scanner.text,
                    start,
                )
            return ""
        if connector == "AND" and not sign:
            return "+"
        return sign


def parse_query(
    text: str,
    *,
    patterns: Patterns = DEFAULT_PATTERNS,
    implicit_plus: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    warn_dropped_sign: bool = True,
) -> Query:
    """Parse a query string into a `Query`.

    Args:
        text: Query string as typed by a user.
        patterns: Recognizer set.
        implicit_plus: Put unsigned items in `mandatory` instead of `optional`.
        max_depth: Maximum parenthesis nesting.
        warn_dropped_sign: Log a warning when `+a OR b` loses its `+`.

    Returns:
        The parsed query. Empty or blank input gives an empty query.

    Raises:
        QueryParseError: On any syntax error; no partial result is kept.
        ValueError: If `max_depth` is out of range.
    """
    return _RecursiveDescent(
        text,
        patterns,
        implicit_plus=implicit_plus,
        max_depth=max_depth,
        warn_dropped_sign=warn_dropped_sign,
    ).parse()

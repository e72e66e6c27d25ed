"""Tokenizer for query strings.

The scanner keeps a position into the query text and recognizes one lexical
element at a time. Each `accept`-style method either consumes the element
and returns it, or leaves the position untouched and returns None.
"""

from __future__ import annotations

import re
from typing import TypeVar

from QueryParser.core.errors import (
    EmptyQuotedValueError,
    InvalidOperatorForEmptyFieldError,
    QueryParseError,
    UnexpectedTokenError,
    UnterminatedQuoteError,
)
from QueryParser.core.patterns import Matcher, MatchLike, Patterns

QUOTES = ("\"", "'")
SIGN_CHARS = ("+", "-")

_RE_SPACE = re.compile(r"\s+")
_RE_WORD_CHAR = re.compile(r"\w")

E = TypeVar("E", bound=QueryParseError)


class Scanner:
    """Cursor over a query string driven by a `Patterns` recognizer set."""

    def __init__(self, text: str, patterns: Patterns) -> None:
        self.text = text
        self.patterns = patterns
        self.pos = 0

    def error(self, cls: type[E], message: str, *, position: int | None = None) -> E:
        """Build an error located at the current (or given) position."""
        return cls(message, query=self.text, position=self.pos if position is None else position)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos : self.pos + 1]

    def rest(self) -> str:
        return self.text[self.pos :]

    def skip_ws(self) -> None:
        m = _RE_SPACE.match(self.text, self.pos)
        if m:
            self.pos = m.end()

    def accept(self, char: str) -> bool:
        if self.peek() == char:
            self.pos += 1
            return True
        return False

    def _match(self, matcher: Matcher, pos: int | None = None) -> MatchLike | None:
        start = self.pos if pos is None else pos
        m = matcher.match(self.text, start)
        if m is None or m.end() <= start:
            return None
        return m

    def sign(self) -> str | None:
        """Consume a `+`/`-` prefix glued to the item that follows it.

        Raises:
            UnexpectedTokenError: If the sign is followed by whitespace, `)`
                or the end of the input.
        """
        char = self.peek()
        if char not in SIGN_CHARS:
            return None
        following = self.text[self.pos + 1 : self.pos + 2]
        if not following or following.isspace() or following == ")":
            raise self.error(UnexpectedTokenError, f"sign '{char}' is not followed by a value")
        self.pos += 1
        return char

    def connector(self, matcher: Matcher) -> bool:
        """Consume a connector word and the whitespace after it.

        The word must end at a word boundary, so `ANDROID` is a term and not
        `AND` followed by `ROID`.
        """
        m = self._match(matcher)
        if m is None:
            return False
        end = m.end()
        if end < len(self.text) and _RE_WORD_CHAR.match(self.text, end):
            return False
        self.pos = end
        self.skip_ws()
        return True

    def field_op(self) -> tuple[str, str] | None:
        """Consume `<field><operator>` with nothing between the two."""
        field = self._match(self.patterns.field)
        if field is None:
            return None
        op = self._match(self.patterns.operator, field.end())
        if op is None:
            return None
        self.pos = op.end()
        self.skip_ws()
        return field.group(), op.group()

    def bare_op(self) -> str | None:
        """Consume an operator that has no field in front of it.

        Raises:
            InvalidOperatorForEmptyFieldError: If the operator is not one of
                the operators allowed without a field.
        """
        op = self._match(self.patterns.operator)
        if op is None:
            return None
        no_field = self._match(self.patterns.operator_no_field)
        if no_field is None or no_field.end() != op.end():
            raise self.error(
                InvalidOperatorForEmptyFieldError,
                f"operator '{op.group()}' requires a field name",
            )
        self.pos = op.end()
        self.skip_ws()
        return op.group()

    def quoted(self) -> tuple[str, str] | None:
        """Consume a quoted value and return `(quote, content)`.

        Content is taken verbatim up to the matching quote character.

        Raises:
            UnterminatedQuoteError: If the closing quote is missing.
            EmptyQuotedValueError: If nothing is between the quotes.
        """
        quote = self.peek()
        if quote not in QUOTES:
            return None
        close = self.text.find(quote, self.pos + 1)
        if close < 0:
            raise self.error(UnterminatedQuoteError, f"no closing {quote} for quoted value")
        content = self.text[self.pos + 1 : close]
        if not content:
            raise self.error(EmptyQuotedValueError, "empty quoted value")
        self.pos = close + 1
        return quote, content

    def term(self) -> str | None:
        m = self._match(self.patterns.term)
        if m is None:
            return None
        self.pos = m.end()
        return m.group()

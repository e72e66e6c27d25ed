"""Query serializer.

Renders a `Query` into the canonical query string: mandatory items first,
then optional, then excluded, each as `<sign><field><op><value>` and joined by
single spaces. Parsing the result with the same patterns gives back an equal
query.
"""

from __future__ import annotations

from QueryParser.core.errors import QueryParseError
from QueryParser.core.patterns import DEFAULT_PATTERNS, Patterns
from QueryParser.core.query import DEFAULT_OP, SIGNS, Item, Query
from QueryParser.parser.scanner import QUOTES, SIGN_CHARS, Scanner


def _prefix_reads_back(item: Item, patterns: Patterns) -> bool:
    """Tell whether `<field><op><value>` scans back to the same field and operator.

    An operator followed by a value that starts with operator characters can
    read as a longer operator (`f<` + `=3` reads as `f<=` + `3`).
    """
    prefix = f"{item.field}{item.op}"
    s = Scanner(prefix + item.value, patterns)
    try:
        read = s.field_op() if item.field else ("", s.bare_op())
    except QueryParseError:
        return False
    return read == (item.field, item.op) and s.pos == len(prefix)


def _reads_back_bare(
    item: Item,
    patterns: Patterns,
    *,
    signed: bool,
    leading: bool,
) -> bool:
    """Tell whether the value of `item` written without quotes scans back the same.

    Args:
        item: Scalar item to render.
        patterns: Recognizers the text will be parsed with.
        signed: A `+`/`-` is written in front of the item.
        leading: The item comes first in its group, so no `AND`/`OR`
            connector can be read in front of it.
    """
    value = item.value
    if not value or value[0] in QUOTES or value[0] == "(":
        return False
    s = Scanner(value, patterns)
    if s.term() != value:
        return False
    if item.field or item.op != DEFAULT_OP:
        return _prefix_reads_back(item, patterns)
    if not signed and value[0] in SIGN_CHARS:
        return False

    connectors = [] if signed else [patterns.not_]
    if not leading:
        connectors += [patterns.and_, patterns.or_]
    for connector in connectors:
        s.pos = 0
        if s.connector(connector):
            return False

    s.pos = 0
    try:
        if s.field_op() is not None or s.bare_op() is not None:
            return False
    except QueryParseError:
        return False
    return True


def _quote_for(item: Item) -> str:
    value = item.value
    if item.quote in QUOTES and item.quote not in value:
        return item.quote
    return "'" if "\"" in value else "\""


def unparse_item(
    item: Item,
    patterns: Patterns = DEFAULT_PATTERNS,
    *,
    sign: str = "",
    leading: bool = True,
) -> str:
    """Render one item, prefixed by `sign`."""
    if isinstance(item.value, Query):
        inner = f"({unparse(item.value, patterns)})"
        return f"{sign}{item.field}{DEFAULT_OP}{inner}" if item.field else f"{sign}{inner}"

    prefix = "" if not item.field and item.op == DEFAULT_OP else f"{item.field}{item.op}"
    if item.quote or not _reads_back_bare(item, patterns, signed=bool(sign), leading=leading):
        quote = _quote_for(item)
        return f"{sign}{prefix}{quote}{item.value}{quote}"
    return f"{sign}{prefix}{item.value}"


def unparse(query: Query, patterns: Patterns = DEFAULT_PATTERNS) -> str:
    """Render a query into its canonical string form.

    Args:
        query: Query built by the parser or by hand.
        patterns: Recognizers the output is meant to be parsed with.

    Returns:
        Canonical query string; "" for an empty query.
    """
    parts: list[str] = []
    for bucket, items in query.buckets():
        for item in items:
            parts.append(unparse_item(item, patterns, sign=SIGNS[bucket], leading=not parts))
    return " ".join(parts)

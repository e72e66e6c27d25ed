"""Command implementations for QueryParser CLI.

Encapsulates the parse/unparse/repl logic, separated from CLI parameter
handling and output formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from QueryParser.core.query import Query
from QueryParser.parser import ParseResult, QueryParser
from QueryParser.renderers import OutputWriter
from QueryParser.utils.log import log

IMPLICIT_PLUS_PREFIX = "++"


@dataclass(slots=True)
class ParseCommand:
    """Parse query strings and hand each outcome to the output writer."""

    parser: QueryParser
    output_writer: OutputWriter

    def parse_one(self, text: str, implicit_plus: bool | None = None) -> ParseResult:
        result = self.parser.try_parse(text, implicit_plus)
        canonical = self.parser.unparse(result.query) if result.query is not None else None
        self.output_writer.write_result(result, canonical)
        return result

    def execute(self, queries: Iterable[str], implicit_plus: bool | None = None) -> int:
        """Parse every query.

        Returns:
            Number of queries that failed to parse.
        """
        failures = 0
        for idx, text in enumerate(queries, start=1):
            log.debug("Query %d: %r", idx, text)
            if not self.parse_one(text, implicit_plus).ok:
                failures += 1
        if failures:
            log.warning("%d query(s) failed to parse", failures)
        return failures


@dataclass(slots=True)
class ReplCommand:
    """Line-oriented harness: one query per input line.

    A line starting with ``++`` is parsed in implicit-plus mode with the
    prefix removed. Errors are reported and the loop goes on.
    """

    parse_command: ParseCommand

    def execute(self, lines: Iterable[str]) -> int:
        """Parse each line.

        Returns:
            Number of lines that failed to parse.
        """
        failures = 0
        for line in lines:
            text = line.rstrip("\r\n")
            implicit_plus = None
            if text.startswith(IMPLICIT_PLUS_PREFIX):
                text = text[len(IMPLICIT_PLUS_PREFIX) :]
                implicit_plus = True
            if not self.parse_command.parse_one(text, implicit_plus).ok:
                failures += 1
        return failures


@dataclass(slots=True)
class UnparseCommand:
    """Render a query given in its mapping form back into query text."""

    parser: QueryParser

    def execute(self, raw: Mapping[str, Any]) -> str:
        """Build the query and return its canonical text.

        Raises:
            TypeError: If the mapping does not describe a query.
            ValueError: If the mapping has unknown buckets.
        """
        query = Query.from_dict(raw)
        return self.parser.unparse(query)

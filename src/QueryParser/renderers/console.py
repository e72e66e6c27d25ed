"""Console text output renderers.

Renders a parse outcome as the canonical query followed by an indented dump
of the tree, one item per line.
"""

from __future__ import annotations

import click

from QueryParser.core.query import Item, Query
from QueryParser.parser import ParseResult
from QueryParser.renderers.base import OutputWriter


def _fmt_item(item: Item) -> str:
    parts = [f"field={item.field!r}", f"op={item.op!r}"]
    if not isinstance(item.value, Query):
        parts.append(f"value={item.value!r}")
    if item.quote:
        parts.append(f"quote={item.quote!r}")
    return " ".join(parts)


def format_tree(query: Query, indent: int = 0) -> list[str]:
    """Dump a query tree as indented lines.

    Empty buckets are skipped; nested queries are indented under their item.
    """
    pad = "  " * indent
    lines: list[str] = []
    for bucket, items in query.buckets():
        if not items:
            continue
        lines.append(f"{pad}{bucket}:")
        for item in items:
            lines.append(f"{pad}  - {_fmt_item(item)}")
            if isinstance(item.value, Query):
                lines.extend(format_tree(item.value, indent + 2))
    return lines


def render_text(result: ParseResult, canonical: str | None) -> str:
    """Render one parse outcome into a human-readable text block."""
    if result.error is not None:
        return f"{result.error}\n"
    assert result.query is not None
    lines = [canonical or ""]
    lines.extend(format_tree(result.query, indent=1))
    return "\n".join(lines) + "\n"


class ConsoleOutputWriter(OutputWriter):
    """Write results to standard output."""

    def write_result(self, result: ParseResult, canonical: str | None) -> None:
        click.echo(render_text(result, canonical), nl=False)

    def finalize(self, action: str) -> None:
        """No-op for console output."""

"""CLI package for QueryParser.

Holds the click interface, the command runner and the command
implementations for parse, unparse and repl.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from QueryParser.cli.runner import CommandRunner
from QueryParser.cli.ui import cli


def main() -> None:
    """Run QueryParser CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()

"""Command runner for coordinating CLI execution.

Manages logging configuration, component creation and error handling for
command execution.
"""

from __future__ import annotations

import json
from typing import Iterable, TextIO

import click

from QueryParser.cli.commands import ParseCommand, ReplCommand, UnparseCommand
from QueryParser.cli.factories import create_query_parser
from QueryParser.config import AppConfig
from QueryParser.renderers import create_output_writer
from QueryParser.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution.

    Configures logging, builds the parser and the output writer from the
    application config, and turns unexpected failures into `click.Abort`.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def _configure_logging(self, action: str) -> None:
        configure_logging(
            level=self.config.log.level,
            action=action,
            log_to_file=self.config.log.to_file,
            log_dir=self.config.log.dir,
        )

    def _parse_command(self) -> ParseCommand:
        return ParseCommand(
            parser=create_query_parser(self.config),
            output_writer=create_output_writer(self.config),
        )

    def run_parse(self, action: str, queries: Iterable[str], implicit_plus: bool | None) -> int:
        """Parse the given queries.

        Returns:
            Number of queries that failed to parse.

        Raises:
            click.Abort: When the command fails for a reason other than
                query syntax.
        """
        self._configure_logging(action)
        try:
            command = self._parse_command()
            failures = command.execute(queries, implicit_plus)
            command.output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("Parse failed: %s", e)
            raise click.Abort from e
        return failures

    def run_repl(self, action: str, stream: TextIO) -> int:
        """Parse queries read line by line from `stream`.

        Raises:
            click.Abort: When the command fails for a reason other than
                query syntax.
        """
        self._configure_logging(action)
        try:
            command = self._parse_command()
            failures = ReplCommand(command).execute(stream)
            command.output_writer.finalize(action)
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("REPL failed: %s", e)
            raise click.Abort from e
        return failures

    def run_unparse(self, action: str, stream: TextIO) -> str:
        """Read a JSON query from `stream` and return its canonical text.

        Raises:
            click.Abort: When the input is not a valid JSON query.
        """
        self._configure_logging(action)
        try:
            raw = json.load(stream)
            return UnparseCommand(create_query_parser(self.config)).execute(raw)
        except (ValueError, TypeError) as e:
            log.error("Unparse failed: %s", e)
            raise click.Abort from e

"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

import click
from dotenv import load_dotenv

from QueryParser.cli.runner import CommandRunner
from QueryParser.config import DEFAULT_CONFIG_PATH, load_config_with_defaults


@click.group(help="QueryParser: parse search queries into trees and back.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    envvar="QUERY_PARSER_CONFIG",
    help="Path to YAML config file, merged over the defaults.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()
    try:
        ctx.obj = load_config_with_defaults(config_path)
    except (OSError, TypeError, ValueError) as e:
        raise click.UsageError(f"Invalid config {config_path}: {e}") from e


@cli.command("parse")
@click.argument("queries", nargs=-1, required=True)
@click.option(
    "--implicit-plus/--no-implicit-plus",
    default=None,
    help="Treat unsigned items as mandatory (default from config).",
)
@click.pass_context
def parse_cmd(ctx: click.Context, queries: tuple[str, ...], implicit_plus: bool | None) -> None:
    """Parse QUERIES and print their canonical form and tree.

    Exits with status 1 when any query fails to parse.
    """
    runner = CommandRunner(ctx.obj)
    failures = runner.run_parse(ctx.command.name, queries, implicit_plus)
    if failures:
        ctx.exit(1)


@cli.command("repl")
@click.option(
    "--input",
    "input_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
    help="File to read queries from, one per line (default: stdin).",
)
@click.pass_context
def repl_cmd(ctx: click.Context, input_file: TextIO) -> None:
    """Read queries line by line; a leading '++' turns on implicit plus."""
    runner = CommandRunner(ctx.obj)
    runner.run_repl(ctx.command.name, input_file)


@cli.command("unparse")
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.pass_context
def unparse_cmd(ctx: click.Context, source: TextIO) -> None:
    """Print the canonical query text of a JSON query tree read from SOURCE."""
    runner = CommandRunner(ctx.obj)
    click.echo(runner.run_unparse(ctx.command.name, source))

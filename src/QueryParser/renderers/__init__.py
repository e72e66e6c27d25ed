"""Output renderers for command results.

Provides the OutputWriter abstraction, console and JSON implementations, and
a factory that builds writers from configuration.
"""

from __future__ import annotations

from QueryParser.config import AppConfig
from QueryParser.renderers.base import MultiOutputWriter, OutputWriter
from QueryParser.renderers.console import ConsoleOutputWriter, format_tree, render_text
from QueryParser.renderers.json import JsonFileWriter, render_json


def create_output_writer(config: AppConfig) -> OutputWriter:
    """Create output writer based on config.

    Raises:
        ValueError: If no known format is configured.
    """
    writers: list[OutputWriter] = []
    if "console" in config.output.formats:
        writers.append(ConsoleOutputWriter())
    if "json" in config.output.formats:
        writers.append(JsonFileWriter(config.output.base_dir))

    if not writers:
        raise ValueError("No output writers configured")
    return MultiOutputWriter(writers)


__all__ = [
    "ConsoleOutputWriter",
    "JsonFileWriter",
    "MultiOutputWriter",
    "OutputWriter",
    "create_output_writer",
    "format_tree",
    "render_json",
    "render_text",
]

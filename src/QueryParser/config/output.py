"""Output domain configuration for rendering parse results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from QueryParser.config.common import expect_choices, expect_str, get_section, require

_ALLOWED_FORMATS = ("console", "json")


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Output configuration.

    Attributes:
        base_dir: Directory that receives file outputs (`json/...`).
        formats: Enabled writers, in the order they run.
    """

    base_dir: str
    formats: tuple[str, ...]


def load_output(raw: Mapping[str, Any]) -> OutputConfig:
    """Load and validate the `output` section.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If keys are missing, empty or name an unknown format.
    """
    section = get_section(raw, "output", required=True)
    return OutputConfig(
        base_dir=expect_str(*require(section, "output", "base_dir"), allow_empty=False),
        formats=expect_choices(*require(section, "output", "formats"), _ALLOWED_FORMATS),
    )

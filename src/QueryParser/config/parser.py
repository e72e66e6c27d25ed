"""Parser domain configuration: parse options and recognizer overrides."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from QueryParser.config.common import (
    expect_bool,
    expect_int,
    expect_pattern,
    expect_str,
    get_section,
    require,
)
from QueryParser.core.patterns import Patterns, normalize_pattern_name
from QueryParser.parser.grammar import check_max_depth


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Store validated parser options.

    Attributes:
        implicit_plus: Put unsigned items in `mandatory` by default.
        max_depth: Maximum parenthesis nesting.
        warn_dropped_sign: Log a warning when `+a OR b` drops the `+`.
        patterns: Recognizer overrides keyed by `Patterns` attribute name.
            A string is a regex; a tuple lists literal spellings.
    """

    implicit_plus: bool
    max_depth: int
    warn_dropped_sign: bool
    patterns: Mapping[str, str | tuple[str, ...]]


def load_parser(raw: Mapping[str, Any]) -> ParserConfig:
    """Load the `parser` section and the optional `patterns` section.

    Raises:
        TypeError: If config types are invalid or a pattern name is unknown.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "parser", required=True)
    return ParserConfig(
        implicit_plus=expect_bool(*require(section, "parser", "implicit_plus")),
        max_depth=expect_int(*require(section, "parser", "max_depth")),
        warn_dropped_sign=expect_bool(*require(section, "parser", "warn_dropped_sign")),
        patterns=_parse_patterns(get_section(raw, "patterns", required=False)),
    )


def check_parser(config: ParserConfig) -> None:
    """Validate parser domain constraints.

    Compiles the recognizer overrides so that bad regexes are reported at
    load time rather than on the first parse.

    Raises:
        ValueError: If `max_depth` is out of range or a pattern is unusable.
    """
    try:
        check_max_depth(config.max_depth)
    except ValueError as e:
        raise ValueError(f"parser.{e}") from None
    build_patterns(config)


def build_patterns(config: ParserConfig) -> Patterns:
    """Return the recognizer set described by `config`."""
    return Patterns.build(**config.patterns)


def _parse_patterns(section: Mapping[str, Any]) -> dict[str, str | tuple[str, ...]]:
    """Map recognizer names to overrides; null values keep the default."""
    out: dict[str, str | tuple[str, ...]] = {}
    for key, value in section.items():
        config_key = f"patterns.{key}"
        name = normalize_pattern_name(expect_str(key, config_key))
        if value is not None:
            out[name] = expect_pattern(value, config_key)
    return out

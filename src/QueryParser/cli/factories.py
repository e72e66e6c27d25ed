"""Factory functions for CLI component creation."""

from __future__ import annotations

from QueryParser.config import AppConfig, build_patterns
from QueryParser.parser import QueryParser
from QueryParser.utils.log import log


def create_query_parser(config: AppConfig) -> QueryParser:
    """Create a parser from the ``parser`` and ``patterns`` config sections.

    Args:
        config: Application configuration.

    Returns:
        Configured QueryParser instance.
    """
    if config.parser.patterns:
        log.debug("Pattern overrides: %s", sorted(config.parser.patterns))
    return QueryParser(
        build_patterns(config.parser),
        implicit_plus=config.parser.implicit_plus,
        max_depth=config.parser.max_depth,
        warn_dropped_sign=config.parser.warn_dropped_sign,
    )

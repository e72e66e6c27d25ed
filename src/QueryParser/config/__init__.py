"""Public configuration API for QueryParser."""

from __future__ import annotations

from QueryParser.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    LogConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from QueryParser.config.output import OutputConfig
from QueryParser.config.parser import ParserConfig, build_patterns

__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "LogConfig",
    "OutputConfig",
    "ParserConfig",
    "build_patterns",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]

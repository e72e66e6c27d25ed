"""Application config orchestration and YAML loading entrypoints."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from QueryParser.config.common import expect_bool, expect_choice, expect_str, get_section, require
from QueryParser.config.output import OutputConfig, load_output
from QueryParser.config.parser import ParserConfig, check_parser, load_parser

DEFAULT_CONFIG_PATH = Path("config/default.yml")

# Used when config/default.yml is not present, e.g. outside a source checkout.
BUILTIN_DEFAULTS: dict[str, Any] = {
    "log": {"level": "INFO", "to_file": False, "dir": "log"},
    "parser": {"implicit_plus": False, "max_depth": 64, "warn_dropped_sign": True},
    "output": {"base_dir": "output", "formats": ["console"]},
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Arguments for `utils.log.configure_logging`."""

    level: str
    to_file: bool
    dir: str


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application root configuration."""

    log: LogConfig
    parser: ParserConfig
    output: OutputConfig


def load_log(raw: Mapping[str, Any]) -> LogConfig:
    """Load the `log` section; `level` is case-insensitive."""
    section = get_section(raw, "log", required=True)
    return LogConfig(
        level=expect_choice(*require(section, "log", "level"), _LOG_LEVELS),
        to_file=expect_bool(*require(section, "log", "to_file")),
        dir=expect_str(*require(section, "log", "dir"), allow_empty=False),
    )


def parse_config_dict(raw: Mapping[str, Any]) -> AppConfig:
    """Parse normalized mapping into AppConfig."""
    parser = load_parser(raw)
    check_parser(parser)
    return AppConfig(log=load_log(raw), parser=parser, output=load_output(raw))


def load_config(path: Path) -> AppConfig:
    """Load YAML config file without default merge."""
    return parse_config_dict(parse_yaml(path.read_text(encoding="utf-8")))


def load_config_with_defaults(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load config by merging defaults and optional override.

    Falls back to `BUILTIN_DEFAULTS` when `default_path` does not exist.
    """
    if default_path.is_file():
        base = parse_yaml(default_path.read_text(encoding="utf-8"))
    else:
        base = merge_config_dicts(BUILTIN_DEFAULTS, {})
    if config_path == default_path:
        return parse_config_dict(base)
    override = parse_yaml(config_path.read_text(encoding="utf-8"))
    return parse_config_dict(merge_config_dicts(base, override))


def parse_yaml(text: str) -> dict[str, Any]:
    """Parse raw YAML text into a mapping."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, Mapping):
        raise ValueError("Config root must be a mapping/object")
    return dict(data)


def merge_config_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge two config mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], Mapping) and isinstance(value, Mapping):
            merged[key] = merge_config_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged

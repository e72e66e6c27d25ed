"""Tests for layered config parsing and validation."""

import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from QueryParser import Item
from QueryParser.cli.factories import create_query_parser
from QueryParser.config import load_config, load_config_with_defaults, parse_config_dict


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": False, "dir": "log"},
        "parser": {"implicit_plus": False, "max_depth": 64, "warn_dropped_sign": True},
        "patterns": None,
        "output": {"base_dir": "output", "formats": ["console"]},
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.log.level, "INFO")
        self.assertFalse(cfg.parser.implicit_plus)
        self.assertEqual(cfg.parser.max_depth, 64)
        self.assertEqual(cfg.parser.patterns, {})
        self.assertEqual(cfg.output.formats, ("console",))

    def test_pattern_overrides(self) -> None:
        raw = _base_raw_config()
        raw["patterns"] = {"and": ["&&", "AND"], "field": r"[a-z_.]+", "not": None}
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.parser.patterns, {"and_": ("&&", "AND"), "field": r"[a-z_.]+"})

        qp = create_query_parser(cfg)
        q = qp.parse("a.b:x && y")
        self.assertEqual(q.mandatory, (Item("a.b", ":", "x"), Item(value="y")))

    def test_parser_options_reach_the_parser(self) -> None:
        raw = _base_raw_config()
        raw["parser"] = {"implicit_plus": True, "max_depth": 2, "warn_dropped_sign": False}
        qp = create_query_parser(parse_config_dict(raw))
        self.assertTrue(qp.implicit_plus)
        self.assertEqual(qp.max_depth, 2)
        self.assertEqual(qp.parse("a").mandatory, (Item(value="a"),))

    def test_unknown_pattern_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["patterns"] = {"adverb": "x"}
        with self.assertRaises(TypeError) as ctx:
            parse_config_dict(raw)
        self.assertIn("adverb", str(ctx.exception))

    def test_invalid_regex_is_reported_at_load(self) -> None:
        raw = _base_raw_config()
        raw["patterns"] = {"term": "[unclosed"}
        with self.assertRaises(ValueError) as ctx:
            parse_config_dict(raw)
        self.assertIn("patterns.term", str(ctx.exception))

    def test_empty_matching_pattern_is_rejected(self) -> None:
        raw = _base_raw_config()
        raw["patterns"] = {"term": ".*"}
        with self.assertRaises(ValueError):
            parse_config_dict(raw)

    def test_type_and_range_errors(self) -> None:
        raw = _base_raw_config()
        raw["parser"]["max_depth"] = 0
        with self.assertRaises(ValueError):
            parse_config_dict(raw)

        raw = _base_raw_config()
        raw["parser"]["implicit_plus"] = "yes"
        with self.assertRaises(TypeError):
            parse_config_dict(raw)

        raw = _base_raw_config()
        raw["log"]["level"] = "LOUD"
        with self.assertRaises(ValueError):
            parse_config_dict(raw)

        raw = _base_raw_config()
        raw["output"]["formats"] = ["html"]
        with self.assertRaises(ValueError):
            parse_config_dict(raw)

    def test_max_depth_upper_bound(self) -> None:
        raw = _base_raw_config()
        raw["parser"]["max_depth"] = 100000
        with self.assertRaises(ValueError) as ctx:
            parse_config_dict(raw)
        self.assertIn("parser.max_depth", str(ctx.exception))

    def test_keywords_are_case_insensitive(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "debug"
        raw["output"]["formats"] = ["JSON", "console", "json"]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.log.level, "DEBUG")
        self.assertEqual(cfg.output.formats, ("json", "console"))

    def test_pattern_literal_lists_are_checked(self) -> None:
        raw = _base_raw_config()
        raw["patterns"] = {"or": []}
        with self.assertRaises(ValueError):
            parse_config_dict(raw)

        raw["patterns"] = {"or": ["||", 3]}
        with self.assertRaises(TypeError) as ctx:
            parse_config_dict(raw)
        self.assertIn("patterns.or[1]", str(ctx.exception))

        raw["patterns"] = {"or": {"x": 1}}
        with self.assertRaises(TypeError):
            parse_config_dict(raw)

    def test_missing_section(self) -> None:
        raw = _base_raw_config()
        del raw["parser"]
        with self.assertRaises(ValueError) as ctx:
            parse_config_dict(raw)
        self.assertIn("parser", str(ctx.exception))

    def test_repo_default_config_loads(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        self.assertEqual(cfg.parser.max_depth, 64)
        self.assertEqual(cfg.parser.patterns, {})

    def test_override_is_merged_over_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            override = Path(tmp) / "override.yml"
            override.write_text("parser:\n  implicit_plus: true\npatterns:\n  or: ['||']\n", encoding="utf-8")
            cfg = load_config_with_defaults(override, default_path=REPO_ROOT / "config" / "default.yml")
        self.assertTrue(cfg.parser.implicit_plus)
        self.assertEqual(cfg.parser.max_depth, 64)
        self.assertEqual(cfg.parser.patterns, {"or_": ("||",)})

    def test_builtin_defaults_when_default_file_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "default.yml"
            cfg = load_config_with_defaults(missing, default_path=missing)
        self.assertEqual(cfg.log.level, "INFO")
        self.assertEqual(cfg.output.formats, ("console",))


if __name__ == "__main__":
    unittest.main()

"""Recognizers used by the scanner.

A recognizer is anything with a `match(text, pos)` method returning a match
object (with `group()` and `end()`) or None. Compiled regular expressions fit
as they are; plain strings are compiled as regexes, and sequences of strings
are treated as literal spellings tried longest first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Iterable, Protocol


class MatchLike(Protocol):
    def group(self) -> str: ...

    def end(self) -> int: ...


class Matcher(Protocol):
    def match(self, text: str, pos: int = ...) -> MatchLike | None: ...


DEFAULT_OPERATORS = ("==", "<=", ">=", "!=", "=~", "!~", ":", "=", "<", ">", "~")
DEFAULT_OPERATORS_NO_FIELD = ("=~", "!~", "~", ":")
DEFAULT_AND = ("AND", "ET", "UND", "E")
DEFAULT_OR = ("OR", "OU", "ODER", "O")
DEFAULT_NOT = ("NOT", "PAS", "NICHT", "NON")


def literal_alternation(spellings: Iterable[str]) -> re.Pattern[str]:
    """Compile literal spellings into one regex, longest spelling first.

    Ordering by length gives longest-match semantics to regex alternation,
    so `<=` is preferred over `<` followed by `=`.

    Raises:
        ValueError: If no spelling is given or one of them is empty.
    """
    items = list(spellings)
    if not items:
        raise ValueError("at least one spelling is required")
    for item in items:
        if not isinstance(item, str):
            raise TypeError("spellings must be strings")
        if not item:
            raise ValueError("spellings must not be empty")
    ordered = sorted(dict.fromkeys(items), key=len, reverse=True)
    return re.compile("|".join(re.escape(item) for item in ordered))


def compile_matcher(value: Any, name: str) -> Matcher:
    """Turn a recognizer setting into a `Matcher`.

    Args:
        value: Regex string, compiled pattern, list/tuple of literal
            spellings, or any object with a `match(text, pos)` method.
        name: Recognizer name for error messages.

    Returns:
        A matcher that does not match the empty string.

    Raises:
        TypeError: If the value cannot be used as a recognizer.
        ValueError: If the recognizer matches the empty string.
    """
    if isinstance(value, str):
        try:
            matcher: Any = re.compile(value)
        except re.error as e:
            raise ValueError(f"patterns.{name} is not a valid regex: {e}") from e
    elif isinstance(value, (list, tuple, frozenset, set)):
        matcher = literal_alternation(value if isinstance(value, (list, tuple)) else sorted(value))
    elif callable(getattr(value, "match", None)):
        matcher = value
    else:
        raise TypeError(f"patterns.{name} must be a regex, a list of strings or a matcher")

    if matcher.match("", 0) is not None:
        raise ValueError(f"patterns.{name} must not match the empty string")
    return matcher


@dataclass(frozen=True, slots=True)
class Patterns:
    """The recognizer set of one parser instance.

    Attributes:
        term: One bare term (default: no whitespace, no parentheses).
        field: A field name.
        operator: Any comparison operator.
        operator_no_field: Operators allowed with an empty field.
        and_: `AND` connector words.
        or_: `OR` connector words.
        not_: `NOT` connector words.
    """

    term: Matcher
    field: Matcher
    operator: Matcher
    operator_no_field: Matcher
    and_: Matcher
    or_: Matcher
    not_: Matcher

    @classmethod
    def build(cls, **overrides: Any) -> Patterns:
        """Build a recognizer set, overriding any default by name.

        `and`, `or` and `not` are accepted as aliases of `and_`, `or_` and
        `not_`; `None` keeps the default.

        Raises:
            TypeError: On unknown recognizer names or unusable values.
            ValueError: If a recognizer matches the empty string.
        """
        settings: dict[str, Any] = {
            "term": r"[^\s()]+",
            "field": r"\w+",
            "operator": DEFAULT_OPERATORS,
            "operator_no_field": DEFAULT_OPERATORS_NO_FIELD,
            "and_": DEFAULT_AND,
            "or_": DEFAULT_OR,
            "not_": DEFAULT_NOT,
        }
        for key, value in overrides.items():
            name = normalize_pattern_name(key)
            if value is not None:
                settings[name] = value
        return cls(**{name: compile_matcher(value, name) for name, value in settings.items()})


PATTERN_NAMES = tuple(f.name for f in fields(Patterns))


def normalize_pattern_name(key: str) -> str:
    """Map a configuration key to a `Patterns` attribute name.

    Raises:
        TypeError: If the key names no recognizer.
    """
    name = key.strip().lower().replace("-", "_")
    if name in ("and", "or", "not"):
        name += "_"
    if name in ("operatornofield", "op_no_field"):
        name = "operator_no_field"
    if name not in PATTERN_NAMES:
        raise TypeError(f"Unknown pattern: {key}")
    return name


DEFAULT_PATTERNS = Patterns.build()

"""Typed accessors for the YAML config tree.

Every accessor takes the dotted key path (`parser.max_depth`) so error
messages point at the offending entry.
"""

from __future__ import annotations

from typing import Any, Collection, Mapping


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> Mapping[str, Any]:
    """Return a top-level section; optional missing sections read as `{}`.

    Raises:
        ValueError: If a required section is missing.
        TypeError: If the section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return {}
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return section


def require(section: Mapping[str, Any], name: str, field: str) -> tuple[Any, str]:
    """Return `(value, "name.field")` for a key that must be present."""
    config_key = f"{name}.{field}"
    if field not in section:
        raise ValueError(f"Missing required config: {config_key}")
    return section[field], config_key


def expect_str(value: Any, config_key: str, *, allow_empty: bool = True) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{config_key} must be a string")
    if not allow_empty and not value.strip():
        raise ValueError(f"{config_key} must not be empty")
    return value


def expect_bool(value: Any, config_key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{config_key} must be a boolean")
    return value


def expect_int(value: Any, config_key: str) -> int:
    """Validate an integer; YAML booleans are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{config_key} must be an integer")
    return value


def expect_choice(value: Any, config_key: str, allowed: Collection[str]) -> str:
    """Validate a case-insensitive keyword and return it as spelled in `allowed`."""
    text = expect_str(value, config_key)
    by_folded = {choice.casefold(): choice for choice in allowed}
    try:
        return by_folded[text.casefold()]
    except KeyError:
        raise ValueError(f"{config_key} must be one of {sorted(allowed)}") from None


def expect_choices(value: Any, config_key: str, allowed: Collection[str]) -> tuple[str, ...]:
    """Validate a non-empty list of keywords from `allowed`, dropping repeats."""
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a list")
    if not value:
        raise ValueError(f"{config_key} must include at least one entry")
    out: list[str] = []
    for idx, item in enumerate(value):
        choice = expect_choice(item, f"{config_key}[{idx}]", allowed)
        if choice not in out:
            out.append(choice)
    return tuple(out)


def expect_pattern(value: Any, config_key: str) -> str | tuple[str, ...]:
    """Validate one recognizer override.

    A string is a regular expression; a list holds literal spellings, each a
    non-empty string. Compilation is left to `Patterns.build`.
    """
    if isinstance(value, str):
        return expect_str(value, config_key, allow_empty=False)
    if not isinstance(value, list):
        raise TypeError(f"{config_key} must be a regex string or a list of literals")
    if not value:
        raise ValueError(f"{config_key} must list at least one literal")
    return tuple(
        expect_str(item, f"{config_key}[{idx}]", allow_empty=False) for idx, item in enumerate(value)
    )

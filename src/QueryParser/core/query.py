from __future__ import annotations

from dataclasses import dataclass, replace
from dataclasses import field as dataclass_field
from typing import Any, Iterator, Mapping, Sequence

SUBQUERY_OP = "()"
DEFAULT_OP = ":"

BUCKETS = ("mandatory", "optional", "excluded")
SIGNS = {"mandatory": "+", "optional": "", "excluded": "-"}

# Keys accepted by `Query.from_dict` in addition to the bucket names.
_SIGN_KEYS = {"+": "mandatory", "": "optional", "-": "excluded"}


@dataclass(frozen=True, slots=True)
class Item:
    """One field/operator/value unit of a query.

    `value` is either a scalar string (term or quoted phrase content) or a
    nested `Query`. A nested value always carries the `"()"` operator; the
    operator is derived from the value, never checked against it.

    Attributes:
        field: Field name, or "" when no field was given.
        op: Comparison operator, or "()" for a nested query.
        value: Scalar string or nested `Query`.
        quote: Quote character used in source form, or None. Serialization
            hint only; it takes no part in equality.

    Groups built by the parser never carry a field: `foo:(a b)` gives a
    group item with field "" whose leaves read `foo:a foo:b`. A field on a
    hand-built group applies to its leaves (see `iter_leaves`).
    """

    field: str = ""
    op: str = DEFAULT_OP
    value: str | Query = ""
    quote: str | None = dataclass_field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.value, Query):
            object.__setattr__(self, "op", SUBQUERY_OP)
            object.__setattr__(self, "quote", None)
        elif self.op == SUBQUERY_OP:
            raise TypeError("an item with op '()' must hold a nested Query")
        elif not isinstance(self.value, str):
            raise TypeError(f"item value must be a string or Query, got {type(self.value).__name__}")

    @property
    def is_subquery(self) -> bool:
        return isinstance(self.value, Query)

    def to_dict(self) -> dict[str, Any]:
        value: Any = self.value.to_dict() if isinstance(self.value, Query) else self.value
        d: dict[str, Any] = {"field": self.field, "op": self.op, "value": value}
        if self.quote:
            d["quote"] = self.quote
        return d

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Item:
        if not isinstance(raw, Mapping):
            raise TypeError("item must be an object")
        value = raw.get("value", "")
        if isinstance(value, Mapping):
            value = Query.from_dict(value)
        return cls(
            field=str(raw.get("field") or ""),
            op=str(raw.get("op") or DEFAULT_OP),
            value=value,
            quote=raw.get("quote") or None,
        )


@dataclass(frozen=True, slots=True)
class Query:
    """Parsed query: three ordered sign buckets of `Item`.

    Attributes:
        mandatory: Items prefixed by `+` (or forced there by `AND`).
        optional: Unsigned items.
        excluded: Items prefixed by `-` or `NOT`.
    """

    mandatory: tuple[Item, ...] = ()
    optional: tuple[Item, ...] = ()
    excluded: tuple[Item, ...] = ()

    def __post_init__(self) -> None:
        for bucket in BUCKETS:
            object.__setattr__(self, bucket, tuple(getattr(self, bucket)))

    def is_empty(self) -> bool:
        return not (self.mandatory or self.optional or self.excluded)

    def buckets(self) -> Iterator[tuple[str, tuple[Item, ...]]]:
        """Yield `(bucket_name, items)` in canonical order."""
        for bucket in BUCKETS:
            yield bucket, getattr(self, bucket)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {bucket: [item.to_dict() for item in items] for bucket, items in self.buckets()}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Query:
        """Build a query from its mapping form.

        Accepts either the bucket names (`mandatory`/`optional`/`excluded`) or
        the sign glyphs (`+`/`""`/`-`) as keys; missing buckets are empty.

        Raises:
            TypeError: If the mapping or its items have the wrong shape.
            ValueError: If an unknown bucket key is present.
        """
        if not isinstance(raw, Mapping):
            raise TypeError("query must be an object")
        buckets: dict[str, list[Item]] = {bucket: [] for bucket in BUCKETS}
        for key, items in raw.items():
            bucket = _SIGN_KEYS.get(key, key)
            if bucket not in buckets:
                raise ValueError(f"Unknown query bucket: {key!r}")
            if items is None:
                continue
            if not isinstance(items, Sequence) or isinstance(items, str):
                raise TypeError(f"{bucket} must be a list of items")
            buckets[bucket].extend(Item.from_dict(item) for item in items)
        return cls(**{bucket: tuple(items) for bucket, items in buckets.items()})


def iter_leaves(query: Query, *, field: str = "") -> Iterator[tuple[tuple[str, ...], Item]]:
    """Yield scalar leaves of a query with group fields distributed.

    A group item carrying a field passes it on to every nested leaf that has
    none, which is how a consumer reads `field:(a b)`. The tree itself is not
    modified.

    Args:
        query: Query to walk.
        field: Field inherited from an enclosing group.

    Yields:
        `(bucket_path, item)` where `bucket_path` lists the bucket names from
        the root down to the leaf.
    """
    for bucket, items in query.buckets():
        for item in items:
            effective = item.field or field
            if isinstance(item.value, Query):
                for path, leaf in iter_leaves(item.value, field=effective):
                    yield (bucket, *path), leaf
            elif effective != item.field:
                yield (bucket,), replace(item, field=effective)
            else:
                yield (bucket,), item

"""Tests for field/operator distribution over parenthesized groups."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from QueryParser import Item, Query, QueryParser, iter_leaves
from QueryParser.core.errors import NestedFieldUnderDistributionError


def _leaves(query: Query) -> list[Item]:
    return [leaf for _, leaf in iter_leaves(query)]


class TestFieldDistribution(unittest.TestCase):
    def setUp(self) -> None:
        self.qp = QueryParser()

    def test_field_attaches_to_each_leaf(self) -> None:
        q = self.qp.parse("foo:(bar bie)")
        self.assertEqual(
            q,
            Query(optional=(Item(value=Query(optional=(Item("foo", ":", "bar"), Item("foo", ":", "bie")))),)),
        )
        self.assertEqual(_leaves(q), _leaves(self.qp.parse("foo:bar foo:bie")))

    def test_operator_is_distributed_too(self) -> None:
        q = self.qp.parse("year>=(2020 2021)")
        self.assertEqual(_leaves(q), [Item("year", ">=", "2020"), Item("year", ">=", "2021")])

    def test_distribution_reaches_nested_groups(self) -> None:
        q = self.qp.parse("foo:(a (b c))")
        self.assertEqual(_leaves(q), [Item("foo", ":", "a"), Item("foo", ":", "b"), Item("foo", ":", "c")])

    def test_signs_inside_distributed_group(self) -> None:
        q = self.qp.parse('+foo:(+a -b "c d")')
        group = q.mandatory[0].value
        self.assertEqual(group.mandatory, (Item("foo", ":", "a"),))
        self.assertEqual(group.optional, (Item("foo", ":", "c d", '"'),))
        self.assertEqual(group.excluded, (Item("foo", ":", "b"),))

    def test_leaf_paths_record_buckets(self) -> None:
        q = self.qp.parse("-foo:(+a b)")
        self.assertEqual(
            list(iter_leaves(q)),
            [
                (("excluded", "mandatory"), Item("foo", ":", "a")),
                (("excluded", "optional"), Item("foo", ":", "b")),
            ],
        )

    def test_nested_field_fails(self) -> None:
        with self.assertRaises(NestedFieldUnderDistributionError):
            self.qp.parse("foo:(bar:bie)")
        with self.assertRaises(NestedFieldUnderDistributionError):
            self.qp.parse("foo:(a (b c:d))")

    def test_fieldless_operator_overrides_distributed_operator(self) -> None:
        q = self.qp.parse("foo:(~bar baz)")
        self.assertEqual(_leaves(q), [Item("foo", "~", "bar"), Item("foo", ":", "baz")])
        self.assertEqual(_leaves(q), _leaves(self.qp.parse("foo~bar foo:baz")))
        self.assertEqual(self.qp.unparse(q), "(foo~bar foo:baz)")

    def test_field_operator_pair_inside_group_fails(self) -> None:
        with self.assertRaises(NestedFieldUnderDistributionError) as ctx:
            self.qp.parse("foo:(bar~bie)")
        self.assertIn("field 'bar'", str(ctx.exception))

    def test_fieldless_operator_group_allows_fields(self) -> None:
        q = self.qp.parse("~(a x:b)")
        self.assertEqual(_leaves(q), [Item("", "~", "a"), Item("x", ":", "b")])

    def test_group_field_from_construction(self) -> None:
        q = Query(optional=(Item(field="title", value=Query(optional=(Item(value="a"), Item(value="b")))),))
        self.assertEqual(_leaves(q), [Item("title", ":", "a"), Item("title", ":", "b")])
        # the tree itself is untouched
        self.assertEqual(q.optional[0].value.optional[0].field, "")


if __name__ == "__main__":
    unittest.main()

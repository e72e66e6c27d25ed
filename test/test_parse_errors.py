"""Tests for syntax errors and the error-reporting surface."""

import sys
import threading
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from QueryParser import QueryParser
from QueryParser.parser import MAX_DEPTH_LIMIT
from QueryParser.core.errors import (
    EmptyQuotedValueError,
    InvalidOperatorForEmptyFieldError,
    NestingTooDeepError,
    QueryParseError,
    UnexpectedTokenError,
    UnmatchedParenthesisError,
    UnterminatedQuoteError,
)


class TestParseErrors(unittest.TestCase):
    def setUp(self) -> None:
        self.qp = QueryParser()

    def test_unmatched_parentheses(self) -> None:
        with self.assertRaises(UnmatchedParenthesisError) as ctx:
            self.qp.parse("x (a b")
        self.assertEqual(ctx.exception.position, 2)
        with self.assertRaises(UnmatchedParenthesisError):
            self.qp.parse("a b)")

    def test_missing_value_after_operator(self) -> None:
        for text in ("title:", "title: ", "(title:)", "a<="):
            with self.subTest(text=text):
                with self.assertRaises(UnexpectedTokenError) as ctx:
                    self.qp.parse(text)
                self.assertIn("missing value", ctx.exception.message)

    def test_dangling_sign(self) -> None:
        for text in ("+ a", "a -", "(a +)", "-"):
            with self.subTest(text=text):
                with self.assertRaises(UnexpectedTokenError):
                    self.qp.parse(text)

    def test_empty_group(self) -> None:
        with self.assertRaises(UnexpectedTokenError):
            self.qp.parse("a ( ) b")

    def test_operator_requires_field(self) -> None:
        for text in ("<=3", "=foo", "a >5"):
            with self.subTest(text=text):
                with self.assertRaises(InvalidOperatorForEmptyFieldError):
                    self.qp.parse(text)

    def test_quotes(self) -> None:
        with self.assertRaises(UnterminatedQuoteError):
            self.qp.parse('title:"open phrase')
        with self.assertRaises(EmptyQuotedValueError):
            self.qp.parse("a ''")

    def test_nesting_limit(self) -> None:
        qp = QueryParser(max_depth=3)
        self.assertFalse(qp.parse("(((a)))").is_empty())
        with self.assertRaises(NestingTooDeepError):
            qp.parse("((((a))))")

    def test_max_depth_must_be_in_range(self) -> None:
        with self.assertRaises(ValueError):
            QueryParser(max_depth=0)
        with self.assertRaises(ValueError):
            QueryParser(max_depth=MAX_DEPTH_LIMIT + 1)

    def test_deepest_allowed_nesting_is_reported_not_recursion(self) -> None:
        qp = QueryParser(max_depth=MAX_DEPTH_LIMIT)
        deep = "(" * MAX_DEPTH_LIMIT + "a" + ")" * MAX_DEPTH_LIMIT
        self.assertFalse(qp.parse(deep).is_empty())
        result = qp.try_parse("(" + deep + ")")
        self.assertIsInstance(result.error, NestingTooDeepError)

    def test_error_is_a_value_error_with_context(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            self.qp.parse("a b)")
        err = ctx.exception
        self.assertIsInstance(err, QueryParseError)
        self.assertEqual(err.query, "a b)")
        self.assertEqual(err.position, 3)
        self.assertTrue(str(err).startswith("[a b)] : "))

    def test_try_parse_returns_error(self) -> None:
        result = self.qp.try_parse("a AND b OR c")
        self.assertFalse(result.ok)
        self.assertIsNone(result.query)
        self.assertIn("cannot mix AND/OR", self.qp.last_error)
        with self.assertRaises(QueryParseError):
            result.unwrap()

        result = self.qp.try_parse("a b")
        self.assertTrue(result.ok)
        self.assertEqual(len(result.unwrap().optional), 2)
        self.assertIsNone(self.qp.last_error)

    def test_last_error_is_per_thread(self) -> None:
        self.qp.try_parse("(")
        seen: list[str | None] = []
        worker = threading.Thread(target=lambda: seen.append(self.qp.last_error))
        worker.start()
        worker.join()
        self.assertEqual(seen, [None])
        self.assertIsNotNone(self.qp.last_error)


if __name__ == "__main__":
    unittest.main()

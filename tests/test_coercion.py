"""
Coercion Tests

Tests for the strict scalar coercion rules, both on their own and
through the container
"""

import sys
import os
import unittest

# Add tests directory to path for local imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from autowire import TypeMismatchError, coerce

from conftest import AutowireTestCase, create_container
from fixtures import Holder


CAST_TO_STRING = [
    (0, "0"),
    (42, "42"),
    (1.5, "1.5"),
    (1.0, "1.0"),
    (0.0, "0.0"),
    (True, "true"),
    (False, "false"),
]

CAST_TO_INT = [
    ("0", 0),
    ("1", 1),
    ("-7", -7),
    (1.0, 1),
    (0.0, 0),
    (True, 1),
    (False, 0),
]

CAST_TO_FLOAT = [
    ("0", 0.0),
    ("1", 1.0),
    ("1.0", 1.0),
    ("1.5", 1.5),
    (0, 0.0),
    (42, 42.0),
    (True, 1.0),
    (False, 0.0),
]

CAST_TO_BOOL = [
    (0, False),
    ("false", False),
    ("off", False),
    ("no", False),
    ("0", False),
    ("", False),
    ("FALSE", False),
    (1, True),
    ("true", True),
    ("on", True),
    ("yes", True),
    ("1", True),
    ("Yes", True),
]

CAST_TO_INT_FAILS = [
    ("foo", "str"),
    ("00", "str"),
    (" 0", "str"),
    ("0 ", "str"),
    ("+1", "str"),
    ("1_000", "str"),
    (1.1, "float"),
    ("1.1", "str"),
]

CAST_TO_FLOAT_FAILS = ["foo", "00", " 0", "0 ", "nan", "1e3"]

CAST_TO_BOOL_FAILS = [
    ("foo", "str"),
    ("00", "str"),
    (" 0", "str"),
    ("0 ", "str"),
    (42, "int"),
    (0.0, "float"),
    (1.0, "float"),
]


class TestCoerce(unittest.TestCase):
    """The coercion table"""

    def _assert_coerces(self, cases, target):
        for value, expected in cases:
            with self.subTest(value=value, target=target.__name__):
                result = coerce(value, target)
                self.assertEqual(result, expected)
                self.assertIs(type(result), target)

    def test_to_string(self):
        self._assert_coerces(CAST_TO_STRING, str)

    def test_to_int(self):
        self._assert_coerces(CAST_TO_INT, int)

    def test_to_float(self):
        self._assert_coerces(CAST_TO_FLOAT, float)

    def test_to_bool(self):
        self._assert_coerces(CAST_TO_BOOL, bool)

    def test_matching_types_unchanged(self):
        """Values already of the target type pass through"""
        for value in ("x", 5, 2.5, True):
            with self.subTest(value=value):
                self.assertIs(coerce(value, type(value)), value)

    def test_int_rejections_leave_value_unchanged(self):
        for value, kind in CAST_TO_INT_FAILS:
            with self.subTest(value=value):
                result = coerce(value, int)
                self.assertEqual(result, value)
                self.assertEqual(type(result).__name__, kind)

    def test_float_rejections_leave_value_unchanged(self):
        for value in CAST_TO_FLOAT_FAILS:
            with self.subTest(value=value):
                self.assertIs(coerce(value, float), value)

    def test_bool_rejections_leave_value_unchanged(self):
        for value, kind in CAST_TO_BOOL_FAILS:
            with self.subTest(value=value):
                result = coerce(value, bool)
                self.assertEqual(type(result).__name__, kind)

    def test_non_finite_float_to_string_rejected(self):
        """nan has no JSON rendering"""
        self.assertIsInstance(coerce(float("nan"), str), float)


def make_str_holder(value: str) -> Holder:
    return Holder(value)


def make_int_holder(value: int) -> Holder:
    return Holder(value)


def make_float_holder(value: float) -> Holder:
    return Holder(value)


def make_bool_holder(value: bool) -> Holder:
    return Holder(value)


HOLDER_FACTORIES = {
    str: make_str_holder,
    int: make_int_holder,
    float: make_float_holder,
    bool: make_bool_holder,
}


class TestCoercionThroughContainer(AutowireTestCase):
    """Variables are coerced to the annotated parameter type"""

    def _resolve(self, target, value):
        container = create_container({Holder: HOLDER_FACTORIES[target], "value": value})
        return container.resolve(Holder).value

    def test_float_to_string(self):
        """1.0 renders as "1.0" for a str parameter"""
        self.assertEqual(self._resolve(str, 1.0), "1.0")

    def test_bool_variable(self):
        self.assertIs(self._resolve(bool, "off"), False)

    def test_int_mismatch(self):
        """"00" is rejected for an int parameter"""
        with self.assertRaises(TypeMismatchError) as ctx:
            self._resolve(int, "00")

        self.assertEqual(
            str(ctx.exception),
            "Container variable $value expected type int, but got str"
        )

    def test_float_mismatch(self):
        for value in CAST_TO_FLOAT_FAILS:
            with self.subTest(value=value):
                with self.assertRaises(TypeMismatchError) as ctx:
                    self._resolve(float, value)
                self.assertIn("expected type float, but got str", str(ctx.exception))

    def test_bool_mismatch_reports_actual_kind(self):
        for value, kind in CAST_TO_BOOL_FAILS:
            with self.subTest(value=value):
                with self.assertRaises(TypeMismatchError) as ctx:
                    self._resolve(bool, value)
                self.assertEqual(ctx.exception.actual, kind)


if __name__ == '__main__':
    unittest.main()

"""
Structural equality for grading.

Values arrive from JSON on both sides, so the comparison follows JSON's data
model: one number type, no coercion between containers, key order ignored.
Inputs must be acyclic.
"""

from collections.abc import Mapping, Sequence
from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def values_equal(actual: Any, expected: Any) -> bool:
    """
    Return True if *actual* and *expected* are structurally equal.

    - Booleans only equal booleans (``True`` is not ``1``).
    - Numbers compare by value, so ``5 == 5.0``.
    - Sequences: same length, element-wise equal, order matters.
    - Mappings: same key set, values equal under each key.
    - Anything else: equal only if of compatible type and ``==``.
    """
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected

    if _is_number(actual) and _is_number(expected):
        return actual == expected

    if isinstance(actual, Mapping) and isinstance(expected, Mapping):
        if set(actual.keys()) != set(expected.keys()):
            return False
        return all(values_equal(actual[key], expected[key]) for key in actual)

    if _is_sequence(actual) and _is_sequence(expected):
        if len(actual) != len(expected):
            return False
        return all(values_equal(a, e) for a, e in zip(actual, expected))

    if type(actual) is not type(expected):
        return False

    return actual == expected

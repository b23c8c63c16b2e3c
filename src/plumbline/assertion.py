"""Chainable ``expect`` matchers."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from numbers import Real
from typing import Any

from plumbline.errors import AssertionData, AssertionFailedError
from plumbline.unset import UNSET

_SCALARS = (type(None), bool, int, float, complex, str, bytes)


def strict_equal(a: Any, b: Any) -> bool:
    """Identity, or same-typed scalars with equal values."""
    if a is b:
        return not (isinstance(a, float) and math.isnan(a))
    if type(a) is not type(b) or not isinstance(a, _SCALARS):
        return False
    return a == b


def _to_number(text: str) -> float | None:
    text = text.strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return None


def loose_equal(a: Any, b: Any) -> bool:
    """Equality that also converts between strings and numbers."""
    if a is None or a is UNSET or b is None or b is UNSET:
        return (a is None or a is UNSET) and (b is None or b is UNSET)
    if isinstance(a, str) and isinstance(b, Real):
        return _to_number(a) == b
    if isinstance(b, str) and isinstance(a, Real):
        return _to_number(b) == a
    return bool(a == b)


def lookup(subject: Any, key: Any) -> Any:
    """``subject[key]``, then ``subject.key``, else ``UNSET``.

    Mappings are only indexed for keys they already hold, so a
    ``defaultdict`` subject is never grown by a lookup.
    """
    if isinstance(subject, Mapping):
        return subject[key] if key in subject else UNSET
    try:
        return subject[key]
    except (KeyError, IndexError, TypeError):
        pass
    if isinstance(key, str):
        return getattr(subject, key, UNSET)
    return UNSET


def _has_key(subject: Any, key: Any) -> bool:
    if isinstance(subject, Mapping):
        return key in subject
    return isinstance(key, str) and hasattr(subject, key)


def _values(subject: Any) -> list[Any]:
    if isinstance(subject, Mapping):
        return list(subject.values())
    if isinstance(subject, (str, bytes, list, tuple, set, frozenset, range)):
        return list(subject)
    return list(vars(subject).values())


def _is_nan(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isnan(value)


def _describe(value: Any) -> str:
    if isinstance(value, type):
        return value.__qualname__
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    return str(value)


class Assertion:
    """A subject under test plus the polarity its matchers check with.

    Instances are immutable: ``not_`` hands back a new, inverted
    ``Assertion`` so ``expect(x)`` can be reused after ``expect(x).not_``.
    Every matcher returns ``None`` when the expectation holds and raises
    :class:`AssertionFailedError` otherwise.
    """

    __slots__ = ("_subject", "_invert")

    def __init__(self, subject: Any = UNSET, invert: bool = False):
        self._subject = subject
        self._invert = invert

    @property
    def subject(self) -> Any:
        return self._subject

    @property
    def invert(self) -> bool:
        return self._invert

    @property
    def not_(self) -> Assertion:
        return Assertion(self._subject, not self._invert)

    def __repr__(self) -> str:
        prefix = "expect.not_" if self._invert else "expect"
        return f"<Assertion {prefix}({self._subject!r})>"

    def evaluate(self, condition: Any, message: str, data: AssertionData) -> None:
        should_fail = bool(condition) if self._invert else not condition
        if should_fail:
            raise AssertionFailedError(message, data)

    def _check(self, condition: Any, message: str, expected: Any) -> None:
        self.evaluate(condition, message, AssertionData(expected, self._subject))

    # Equality

    def to_be(self, expected: Any) -> None:
        self._check(
            strict_equal(self._subject, expected),
            f"Expected {_describe(self._subject)} to be {_describe(expected)}",
            expected,
        )

    def to_equal(self, expected: Any) -> None:
        self._check(
            loose_equal(self._subject, expected),
            f"Expected {_describe(self._subject)} to equal {_describe(expected)}",
            expected,
        )

    def to_strict_equal(self, expected: Any) -> None:
        self._check(
            strict_equal(self._subject, expected),
            f"Expected {_describe(self._subject)} to strictly equal {_describe(expected)}",
            expected,
        )

    # Value kinds

    def to_be_truthy(self) -> None:
        self._check(
            bool(self._subject), f"Expected {_describe(self._subject)} to be truthy", True
        )

    def to_be_falsy(self) -> None:
        self._check(
            not self._subject, f"Expected {_describe(self._subject)} to be falsy", False
        )

    def to_be_null(self) -> None:
        self._check(
            self._subject is None, f"Expected {_describe(self._subject)} to be null", None
        )

    def to_be_undefined(self) -> None:
        self._check(
            self._subject is UNSET,
            f"Expected {_describe(self._subject)} to be undefined",
            UNSET,
        )

    def to_be_defined(self) -> None:
        self._check(
            self._subject is not UNSET,
            f"Expected {_describe(self._subject)} to be defined",
            "defined value",
        )

    def to_be_nan(self) -> None:
        self._check(
            _is_nan(self._subject),
            f"Expected {_describe(self._subject)} to be NaN",
            math.nan,
        )

    def to_be_instance_of(self, expected: type | tuple[type, ...]) -> None:
        self._check(
            isinstance(self._subject, expected),
            f"Expected {_describe(self._subject)} to be an instance of {_describe(expected)}",
            expected,
        )

    def to_match(self, pattern: str | re.Pattern[str]) -> None:
        self._check(
            re.search(pattern, self._subject) is not None,
            f"Expected {_describe(self._subject)} to match {_describe(pattern)}",
            pattern,
        )

    # Callables

    def _call_subject(self) -> BaseException | None:
        if not callable(self._subject):
            raise TypeError(
                f"Expected a callable subject, got {type(self._subject).__name__}"
            )
        try:
            self._subject()
        except KeyboardInterrupt:
            raise
        except BaseException as exc:
            return exc
        return None

    def to_throw(self) -> None:
        error = self._call_subject()
        self.evaluate(
            error is not None,
            "Expected function to throw an error",
            AssertionData("Exception", error),
        )

    def to_throw_error(self, expected: type[BaseException]) -> None:
        error = self._call_subject()
        self.evaluate(
            isinstance(error, expected),
            f"Expected function to throw an instance of {_describe(expected)}",
            AssertionData(expected, error),
        )

    # Properties and length

    def to_have_property(self, key: Any) -> None:
        # Truthiness, not presence: a property holding 0 or "" reads as missing.
        self._check(
            lookup(self._subject, key),
            f"Expected object to have property {_describe(key)}",
            key,
        )

    def to_have_length(self, expected: int) -> None:
        length = len(self._subject)
        self.evaluate(
            length == expected,
            f"Expected array to have length of {expected}",
            AssertionData(expected, length),
        )

    to_have_property_of = to_have_property
    to_have_length_of = to_have_length

    # Containment

    def to_contain(self, expected: Any) -> None:
        self._check(
            expected in self._subject,
            f"Expected array to contain {_describe(expected)}",
            expected,
        )

    # Same check as to_contain, no deep comparison.
    to_contain_equal = to_contain

    def to_contain_key(self, key: Any) -> None:
        self._check(
            _has_key(self._subject, key),
            f"Expected object to contain key {_describe(key)}",
            key,
        )

    def to_contain_value(self, value: Any) -> None:
        self._check(
            value in _values(self._subject),
            f"Expected object to contain value {_describe(value)}",
            value,
        )

    def to_contain_entry(self, entry: tuple[Any, Any]) -> None:
        key, value = entry
        self._check(
            strict_equal(lookup(self._subject, key), value),
            f"Expected object to contain entry {_describe(list(entry))}",
            entry,
        )

    def to_contain_equal_entry(self, entry: tuple[Any, Any]) -> None:
        key, value = entry
        self._check(
            loose_equal(lookup(self._subject, key), value),
            f"Expected object to contain entry {_describe(list(entry))}",
            entry,
        )

    # Ordering

    def to_be_greater_than(self, expected: Any) -> None:
        self._check(
            self._subject > expected,
            f"Expected {_describe(self._subject)} to be greater than {_describe(expected)}",
            expected,
        )

    def to_be_greater_than_or_equal(self, expected: Any) -> None:
        self._check(
            self._subject >= expected,
            f"Expected {_describe(self._subject)} to be greater than or equal to {_describe(expected)}",
            expected,
        )

    def to_be_less_than(self, expected: Any) -> None:
        self._check(
            self._subject < expected,
            f"Expected {_describe(self._subject)} to be less than {_describe(expected)}",
            expected,
        )

    def to_be_less_than_or_equal(self, expected: Any) -> None:
        self._check(
            self._subject <= expected,
            f"Expected {_describe(self._subject)} to be less than or equal to {_describe(expected)}",
            expected,
        )

    def to_be_close_to(self, expected: float, delta: float) -> None:
        self._check(
            abs(self._subject - expected) <= delta,
            f"Expected {_describe(self._subject)} to be close to {_describe(expected)}",
            expected,
        )


def expect(subject: Any = UNSET) -> Assertion:
    """Start an expectation about ``subject``."""
    return Assertion(subject)

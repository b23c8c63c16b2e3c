"""A small test runner with a chainable ``expect`` matcher DSL."""

from plumbline.assertion import Assertion, expect
from plumbline.errors import AssertionData, AssertionFailedError
from plumbline.runner import (
    AssertionFailure,
    Runner,
    TestOutcome,
    UnexpectedError,
)
from plumbline.unset import UNSET

_default_runner = Runner()

test = _default_runner.test
it = _default_runner.it

__all__ = [
    "Assertion",
    "AssertionData",
    "AssertionFailedError",
    "AssertionFailure",
    "Runner",
    "TestOutcome",
    "UNSET",
    "UnexpectedError",
    "expect",
    "it",
    "test",
]

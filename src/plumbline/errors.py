"""Structured assertion failures and their diff rendering."""

from __future__ import annotations

import json
import re
import traceback
from dataclasses import dataclass
from typing import Any

from plumbline.console import GRAY, GREEN, RED, paint
from plumbline.unset import UNSET


@dataclass(frozen=True)
class AssertionData:
    """Raw values behind a failed expectation.

    Attributes:
        expected: What the matcher was looking for.
        actual: What the subject turned out to be (or the derived value the
            matcher compared, such as a length).
    """

    expected: Any
    actual: Any


def _fallback(value: Any) -> Any:
    if value is UNSET:
        return "undefined"
    if isinstance(value, type):
        return value.__qualname__
    if isinstance(value, BaseException):
        return f"{type(value).__name__}({str(value)!r})"
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return [repr(v) for v in value]
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    return repr(value)


def serialize(value: Any) -> str:
    """Render a value for a diff, structurally where JSON allows it."""
    if value is UNSET:
        return "undefined"
    try:
        return json.dumps(value, indent=2, default=_fallback, ensure_ascii=False)
    except (TypeError, ValueError):
        # Mixed-type keys or circular references.
        return repr(value)


class AssertionFailedError(AssertionError):
    """Raised by a matcher when its expectation does not hold."""

    def __init__(self, message: str, data: AssertionData):
        super().__init__(message)
        self.message = message
        self.data = data

    def render_diff(self, indent: int = 0, color: bool = True) -> str:
        pad = " " * indent
        expected = f"- Expected: {serialize(self.data.expected)}"
        actual = f"+ Actual: {serialize(self.data.actual)}"

        lines = paint(expected, RED, color).splitlines() + paint(
            actual, GREEN, color
        ).splitlines()
        return "\n".join([lines[0], *(f"{pad}{line}" for line in lines[1:])])

    def render_full(self, color: bool = True) -> str:
        """Diff block followed by the traceback, de-emphasized."""
        if self.__traceback__ is not None:
            trace = "".join(traceback.format_exception(self)).rstrip()
        else:
            trace = f"{type(self).__name__}: {self.message}"
        return f"\n{self.render_diff(0, color)}\n\n{paint(trace, GRAY, color)}"

from __future__ import annotations

import logging
import sys
import time
import traceback
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TextIO, Union

from plumbline.config import RunnerConfig
from plumbline.console import GRAY, paint, status_line
from plumbline.errors import AssertionFailedError


@dataclass(frozen=True)
class AssertionFailure:
    """A matcher's expectation did not hold."""

    error: AssertionFailedError


@dataclass(frozen=True)
class UnexpectedError:
    """The body raised something other than an assertion failure."""

    error: BaseException
    trace: str


Failure = Union[AssertionFailure, UnexpectedError]


@dataclass(frozen=True)
class TestOutcome:
    __test__ = False  # keep pytest from collecting this class

    description: str
    elapsed_ms: float
    failure: Failure | None = None

    @property
    def passed(self) -> bool:
        return self.failure is None


Listener = Callable[[TestOutcome], None]


def classify(error: BaseException) -> Failure:
    """Tag a raised error as an assertion failure or an unexpected error."""
    if isinstance(error, AssertionFailedError):
        return AssertionFailure(error)
    trace = "".join(traceback.format_exception(error)).rstrip()
    return UnexpectedError(error, trace or str(error))


class Runner:
    """Runs test bodies one at a time and reports each outcome to a sink.

    The runner keeps no state between calls. Anything that wants totals
    registers a listener, which receives every :class:`TestOutcome` after
    its lines have been written.
    """

    def __init__(
        self,
        sink: TextIO | None = None,
        config: RunnerConfig | None = None,
        logger: logging.Logger | None = None,
        listeners: Iterable[Listener] = (),
    ):
        self._sink = sink
        self.config = config or RunnerConfig()
        self.logger = logger or logging.getLogger("plumbline.runner")
        self.listeners = list(listeners)

    @property
    def sink(self) -> TextIO:
        # Resolved per call so capture tools that swap sys.stdout still see output
        return self._sink if self._sink is not None else sys.stdout

    def _write(self, text: str) -> None:
        print(text, file=self.sink)

    def test(self, description: str, body: Callable[[], object]) -> None:
        """Run ``body`` and report whether it passed."""
        self.logger.debug(f"Running test '{description}'")
        start = time.perf_counter()

        try:
            body()
        except KeyboardInterrupt:
            raise
        except BaseException as e:
            elapsed_ms = (time.perf_counter() - start) * 1000
            outcome = TestOutcome(description, elapsed_ms, classify(e))
        else:
            elapsed_ms = (time.perf_counter() - start) * 1000
            outcome = TestOutcome(description, elapsed_ms)

        self.report(outcome)

    it = test

    def report(self, outcome: TestOutcome) -> None:
        """Write the lines for one outcome and notify listeners."""
        color = self.config.color
        line = status_line(
            outcome.description,
            outcome.elapsed_ms,
            outcome.passed,
            precision=self.config.precision,
            color=color,
        )
        self._write(f"\n{line}")

        failure = outcome.failure
        if isinstance(failure, AssertionFailure):
            self._write(failure.error.render_full(color))
            self.logger.debug(
                f"Test '{outcome.description}' failed: {failure.error.message}"
            )
        elif isinstance(failure, UnexpectedError):
            self._write(paint(failure.trace, GRAY, color))
            self.logger.debug(
                f"Test '{outcome.description}' raised {type(failure.error).__name__}: {failure.error}"
            )
        else:
            self.logger.debug(
                f"Test '{outcome.description}' passed in {outcome.elapsed_ms:.4f}ms"
            )

        for listener in self.listeners:
            listener(outcome)

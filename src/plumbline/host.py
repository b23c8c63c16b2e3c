"""Hand the DSL to test scripts and execute them."""

from __future__ import annotations

import runpy
import time
from pathlib import Path
from typing import Any

from plumbline.assertion import Assertion, expect
from plumbline.errors import AssertionFailedError
from plumbline.runner import Runner, TestOutcome, classify
from plumbline.unset import UNSET


def namespace(runner: Runner) -> dict[str, Any]:
    """Globals a test script sees: the runner's ``test``/``it`` and the DSL."""
    return {
        "test": runner.test,
        "it": runner.it,
        "expect": expect,
        "Assertion": Assertion,
        "AssertionFailedError": AssertionFailedError,
        "UNSET": UNSET,
    }


def run_file(path: Path, runner: Runner) -> None:
    """Execute one test script with the injected namespace.

    An error escaping the script outside of any ``test()`` call (a syntax
    error, a failing import, a stray raise or ``sys.exit()`` at module level)
    is reported as an outcome named after the file, so the next script still
    runs. Only ``KeyboardInterrupt`` propagates.
    """
    runner.logger.debug(f"Executing test script {path}")
    start = time.perf_counter()
    try:
        runpy.run_path(str(path), init_globals=namespace(runner), run_name="__main__")
    except KeyboardInterrupt:
        raise
    except BaseException as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        runner.logger.error(f"Test script {path} failed outside a test: {e}")
        runner.report(TestOutcome(f"{path} (module)", elapsed_ms, classify(e)))

"""Tests for executing test scripts with the injected namespace."""

import textwrap

from plumbline.assertion import Assertion, expect
from plumbline.errors import AssertionFailedError
from plumbline.host import namespace, run_file
from plumbline.runner import AssertionFailure, UnexpectedError
from plumbline.unset import UNSET


def _script(tmp_path, body: str, name: str = "checks.py"):
    path = tmp_path / name
    path.write_text(textwrap.dedent(body))
    return path


def test_namespace_binds_runner(runner):
    ns = namespace(runner)
    assert ns["test"] == runner.test
    assert ns["it"] == runner.it
    assert ns["expect"] is expect
    assert ns["Assertion"] is Assertion
    assert ns["AssertionFailedError"] is AssertionFailedError
    assert ns["UNSET"] is UNSET


def test_run_file_reports_every_test(tmp_path, runner, recorder, sink):
    path = _script(
        tmp_path,
        """
        test("Add two numbers", lambda: expect(1 + 2).to_be(3))
        test("Sub two numbers", lambda: expect(1 - 2).to_be(4))

        def danger():
            raise RuntimeError("Danger!")

        test("Calls a function", danger)
        it("Calls a dangerous function", lambda: expect(danger).to_throw())
        """,
    )

    run_file(path, runner)

    assert [o.description for o in recorder.outcomes] == [
        "Add two numbers",
        "Sub two numbers",
        "Calls a function",
        "Calls a dangerous function",
    ]
    assert [o.passed for o in recorder.outcomes] == [True, False, False, True]
    assert isinstance(recorder.outcomes[1].failure, AssertionFailure)
    assert isinstance(recorder.outcomes[2].failure, UnexpectedError)
    assert "- Expected: 4" in sink.getvalue()


def test_run_file_module_level_error_is_reported(tmp_path, runner, recorder):
    path = _script(
        tmp_path,
        """
        test("before", lambda: None)
        raise ImportError("no such thing")
        """,
    )

    run_file(path, runner)

    assert len(recorder.outcomes) == 2
    module_outcome = recorder.outcomes[1]
    assert module_outcome.description == f"{path} (module)"
    assert isinstance(module_outcome.failure, UnexpectedError)
    assert isinstance(module_outcome.failure.error, ImportError)


def test_run_file_syntax_error_is_reported(tmp_path, runner, recorder):
    path = _script(tmp_path, "test('broken', lambda: \n")

    run_file(path, runner)

    assert len(recorder.outcomes) == 1
    assert isinstance(recorder.outcomes[0].failure.error, SyntaxError)


def test_run_file_module_level_exit_is_reported(tmp_path, runner, recorder):
    path = _script(
        tmp_path,
        """
        import sys

        test("before exit", lambda: None)
        sys.exit(3)
        test("never reached", lambda: None)
        """,
    )

    run_file(path, runner)
    run_file(_script(tmp_path, "test('next script', lambda: None)\n", "later.py"), runner)

    assert [o.description for o in recorder.outcomes] == [
        "before exit",
        f"{path} (module)",
        "next script",
    ]
    assert isinstance(recorder.outcomes[1].failure.error, SystemExit)
    assert recorder.outcomes[1].failure.error.code == 3


def test_scripts_do_not_leak_into_builtins(tmp_path, runner):
    import builtins

    run_file(_script(tmp_path, "test('x', lambda: None)\n"), runner)
    assert not hasattr(builtins, "expect")

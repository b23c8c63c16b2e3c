from __future__ import annotations

from pathlib import Path
from typing import Any

from junitparser import Error, Failure, JUnitXml, TestCase, TestSuite

from plumbline.metrics import summarize
from plumbline.runner import AssertionFailure, TestOutcome, UnexpectedError


def _build_case(outcome: TestOutcome, classname: str) -> TestCase:
    case = TestCase(outcome.description, classname=classname)
    case.time = round(outcome.elapsed_ms / 1000, 6)

    failure = outcome.failure
    if isinstance(failure, AssertionFailure):
        result = Failure(failure.error.message, type_="AssertionFailedError")
        result.text = failure.error.render_diff(color=False)
        case.result = [result]
    elif isinstance(failure, UnexpectedError):
        result = Error(str(failure.error), type_=type(failure.error).__name__)
        result.text = failure.trace
        case.result = [result]
    return case


def write_junit(run_dir: Path, results: dict[str, list[TestOutcome]]) -> Path:
    """Write junit.xml with one suite per test script, return path."""
    xml = JUnitXml()

    for suite_name, outcomes in results.items():
        suite = TestSuite(suite_name)
        summary = summarize(outcomes)

        suite.add_property("pass_rate", str(summary.pass_rate))
        for stat_name, stat_val in summary.durations.to_dict().items():
            if stat_val is not None:
                suite.add_property(f"duration_ms_{stat_name}", str(stat_val))

        for outcome in outcomes:
            suite.add_testcase(_build_case(outcome, suite_name))

        # Set time after add_testcase (add_testcase resets it via update_statistics)
        suite.time = round(sum(o.elapsed_ms for o in outcomes) / 1000, 6)

        # Use append (not +=) to preserve properties and time
        xml.append(suite)

    run_dir.mkdir(parents=True, exist_ok=True)
    junit_path = run_dir / "junit.xml"
    xml.write(str(junit_path), pretty=True)
    return junit_path


def generate_report(run_dir: Path) -> Path:
    """Render junit.xml → report.html using Jinja2 template, return path."""
    import yaml
    from jinja2 import Environment, FileSystemLoader

    junit_path = run_dir / "junit.xml"
    report_path = run_dir / "report.html"

    meta: dict[str, Any] = {}
    meta_path = run_dir / "meta.yaml"
    if meta_path.exists():
        meta = yaml.safe_load(meta_path.read_text()) or {}

    xml = JUnitXml.fromfile(str(junit_path))

    suites = []
    for suite in xml:
        cases = []
        for case in suite:
            result = None
            if case.result:
                first = case.result[0]
                result = {
                    "status": type(first).__name__,
                    "message": first.message or "",
                    "text": first.text or "",
                }
            cases.append(
                {"name": case.name, "time": case.time, "result": result}
            )

        suites.append(
            {
                "name": suite.name,
                "tests": suite.tests,
                "failures": suite.failures,
                "errors": suite.errors,
                "time": suite.time,
                "properties": {p.name: p.value for p in suite.properties()},
                "cases": cases,
            }
        )

    total_tests = sum(s["tests"] for s in suites)
    total_failures = sum(s["failures"] for s in suites)
    total_errors = sum(s["errors"] for s in suites)

    tmpl_dir = Path(__file__).parent / "templates"
    env = Environment(loader=FileSystemLoader(str(tmpl_dir)), autoescape=True)
    template = env.get_template("report.html.j2")

    html = template.render(
        suites=suites,
        total_tests=total_tests,
        total_failures=total_failures,
        total_errors=total_errors,
        total_passed=total_tests - total_failures - total_errors,
        run_dir=str(run_dir),
        meta=meta,
    )
    report_path.write_text(html, encoding="utf-8")
    return report_path

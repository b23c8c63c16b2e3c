from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import typer

app = typer.Typer(name="plumbline", help="Run expect-style test scripts")
schema_app = typer.Typer(name="schema", help="Generate config schema tooling")
app.add_typer(schema_app, name="schema")

EXAMPLE_TEST = """\
# Executed by `plumbline run`; test, it and expect are provided by the runner.

test("Add two numbers", lambda: expect(1 + 2).to_be(3))

test("Sub two numbers", lambda: expect(1 - 2).to_be(4))


def danger():
    raise RuntimeError("Danger!")


test("Calls a function", danger)

it("Calls a dangerous function", lambda: expect(danger).to_throw())
"""

EXAMPLE_CONFIG = """\
color: true
precision: 4
output_dir: ${PLUMBLINE_OUTPUT_DIR:-runs}
report: true
"""


@app.command()
def run(
    files: list[str] = typer.Argument(help="Test scripts to execute, in order"),
    config: str | None = typer.Option(None, help="Path to plumbline.yaml"),
    output_dir: str | None = typer.Option(
        None, help="Output directory for run results"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable ANSI colors"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    no_report: bool = typer.Option(
        False, "--no-report", help="Skip writing report.html"
    ),
):
    """Execute test scripts and report every test() they declare."""
    import yaml

    from plumbline.config import RunnerConfig, load_config
    from plumbline.host import run_file
    from plumbline.metrics import Recorder, summarize
    from plumbline.reporting.junit import generate_report, write_junit
    from plumbline.runner import Runner
    from plumbline.verbose import RUN_LOG_NAME, close_run_log, open_run_log

    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        try:
            runner_config = load_config(config_path)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    else:
        runner_config = RunnerConfig()

    overrides: dict = {}
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if no_color:
        overrides["color"] = False
    if no_report:
        overrides["report"] = False
    runner_config = runner_config.model_copy(update=overrides)

    paths = [Path(f) for f in files]
    missing = [str(p) for p in paths if not p.is_file()]
    if missing:
        typer.echo(f"Error: test script not found: {', '.join(missing)}", err=True)
        raise typer.Exit(1)

    run_id = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S")
    run_dir = Path(runner_config.output_dir) / run_id
    run_dir.mkdir(parents=True, exist_ok=True)

    logger = open_run_log(run_dir, verbose=verbose)
    logger.debug(f"Starting run {run_id} with {len(paths)} script(s)")

    results = {}
    for path in paths:
        recorder = Recorder()
        runner = Runner(config=runner_config, logger=logger, listeners=[recorder])
        run_file(path, runner)
        results[str(path)] = recorder.outcomes

    write_junit(run_dir, results)

    try:
        import importlib.metadata

        plumbline_version = importlib.metadata.version("plumbline")
    except Exception:
        plumbline_version = "unknown"

    meta = {
        "run_id": run_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "scripts": [str(p) for p in paths],
        "plumbline_version": plumbline_version,
    }
    (run_dir / "meta.yaml").write_text(yaml.dump(meta, default_flow_style=False))

    all_outcomes = [o for outcomes in results.values() for o in outcomes]
    summary = summarize(all_outcomes)
    logger.debug(f"Run {run_id} finished: {summary.to_dict()}")
    close_run_log(logger)

    typer.echo(
        f"\n{summary.total} test(s): {summary.passed} passed, "
        f"{summary.failed} failed, {summary.errors} errored"
    )
    typer.echo(f"Run saved: {run_dir}")
    if runner_config.report:
        report_path = generate_report(run_dir)
        typer.echo(f"Report: {report_path}")
    if not verbose:
        typer.echo(f"Debug log: {run_dir / RUN_LOG_NAME}")

    if summary.passed != summary.total:
        raise typer.Exit(1)


@app.command()
def report(
    run_dir: str = typer.Argument(help="Path to run output directory"),
):
    """Regenerate the HTML report from a previous run."""
    from plumbline.reporting.junit import generate_report

    run_path = Path(run_dir)
    if not run_path.exists() or not (run_path / "junit.xml").exists():
        typer.echo(f"Error: not a valid run directory: {run_dir}", err=True)
        raise typer.Exit(1)

    report_path = generate_report(run_path)
    typer.echo(f"Report generated: {report_path}")


@app.command()
def init(
    dir: str = typer.Option(
        "plumbline", "--dir", help="Directory to initialize the test project in"
    ),
):
    """Initialize a project with an example config and test script."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    config_file = project_dir / "plumbline.yaml"
    if config_file.exists():
        typer.echo(f"plumbline.yaml already exists in {dir}, skipping.")
        return

    config_file.write_text(EXAMPLE_CONFIG)
    (project_dir / "example_test.py").write_text(EXAMPLE_TEST)

    typer.echo(f"Initialized test project in {dir}:")
    typer.echo("  plumbline.yaml   - runner config")
    typer.echo("  example_test.py  - example test script")


@schema_app.command("generate")
def schema_generate(
    out: str = typer.Option(
        "plumbline.schema.json", help="Output path for the JSON Schema"
    ),
):
    """Generate JSON Schema for plumbline.yaml."""
    from plumbline.schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")

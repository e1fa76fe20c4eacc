"""CLI entry point for the portal QA runner."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from portal_qa.executor.errors import ScenarioExecutionError, SessionFatalError
from portal_qa.executor.executor import Executor
from portal_qa.executor.expectation_parser import validate_expectation
from portal_qa.models.config import RunnerConfig
from portal_qa.models.scenario import ActionKind, TestScenario, load_scenarios
from portal_qa.reporter.json_report import (
    build_error_report,
    build_report,
    generate_json_report,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(path: str | None) -> RunnerConfig:
    if path is None:
        return RunnerConfig()
    try:
        return RunnerConfig.load(path)
    except FileNotFoundError:
        console.print(f"[red]Config file not found: {path}[/red]")
        console.print("Run 'portal-qa init' to create a default config.")
        sys.exit(1)


def _load_scenarios(path: str) -> list[TestScenario]:
    try:
        return load_scenarios(path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Invalid scenario file {path}:[/red] {escape(str(e))}")
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Run acceptance scenarios against a live web portal."""
    setup_logging(verbose)


@cli.command()
@click.option("--url", "-u", required=True, help="Portal URL to test")
@click.option("--scenarios", "-s", "scenarios_file", required=True, help="Path to scenarios JSON")
@click.option("--config", "-c", default=None, help="Config file path")
@click.option("--output", "-o", default=None, help="Directory for the JSON report")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--screenshots", is_flag=True, help="Capture screenshots of failed scenarios")
def run(
    url: str,
    scenarios_file: str,
    config: str | None,
    output: str | None,
    headed: bool,
    screenshots: bool,
) -> None:
    """Execute scenarios against a portal and print the results."""
    cfg = _load_config(config)
    if headed:
        cfg.session.headless = False
    if screenshots:
        cfg.screenshot_on_failure = True
    if output:
        cfg.output_dir = output
    scenarios = _load_scenarios(scenarios_file)

    executor = Executor(cfg)
    report_path = Path(cfg.output_dir) / f"report_{executor.run_id}.json"
    try:
        result = executor.run(url, scenarios)
    except SessionFatalError as e:
        console.print(f"[red]Run aborted:[/red] {escape(str(e))}")
        if output:
            generate_json_report(build_error_report(e), report_path)
        sys.exit(2)

    table = Table(title=f"Results for {url}")
    table.add_column("#", justify="right")
    table.add_column("Scenario")
    table.add_column("Action")
    table.add_column("Result")
    table.add_column("Detail")
    for i, r in enumerate(result.results, 1):
        status = "[green]PASS[/green]" if r.passed else "[red]FAIL[/red]"
        detail = escape(r.error or r.actual_value or "")
        table.add_row(str(i), escape(r.scenario.description), escape(r.scenario.action), status, detail)
    console.print(table)

    summary = result.summary
    console.print(
        f"Total: {summary.total}  "
        f"Passed: [green]{summary.passed}[/green]  "
        f"Failed: [red]{summary.failed}[/red]"
    )

    if output:
        generate_json_report(build_report(result), report_path)
        console.print(f"  JSON report: [blue]{report_path}[/blue]")

    if not result.all_passed:
        sys.exit(1)


@cli.command()
@click.option("--scenarios", "-s", "scenarios_file", required=True, help="Path to scenarios JSON")
def validate(scenarios_file: str) -> None:
    """Check scenario actions and expectation phrasing without a browser."""
    scenarios = _load_scenarios(scenarios_file)
    problems = 0
    for i, scenario in enumerate(scenarios, 1):
        try:
            kind = ActionKind.parse(scenario.action)
            validate_expectation(kind, scenario.expected_result)
        except ScenarioExecutionError as e:
            problems += 1
            console.print(f"  {i}. [red]{escape(str(e))}[/red]")
        else:
            console.print(f"  {i}. [green]ok[/green] {escape(scenario.description)}")

    if problems:
        console.print(f"[red]{problems} of {len(scenarios)} scenarios have problems[/red]")
        sys.exit(1)
    console.print(f"[green]All {len(scenarios)} scenarios are valid[/green]")


@cli.command()
@click.option("--path", "-p", default="portal-qa.json", help="Where to write the config")
def init(path: str) -> None:
    """Create a default configuration file."""
    config_path = Path(path)
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    RunnerConfig().save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nYou can now customize this file and run:")
    console.print(f"  [blue]portal-qa run -c {config_path} -u URL -s scenarios.json[/blue]")


if __name__ == "__main__":
    cli()

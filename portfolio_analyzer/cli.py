"""Command line interface for the GitHub portfolio analyzer."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from .analyzer import PortfolioAnalyzer
from .api_client import GitHubApiClient
from .collector import GitHubProfileCollector
from .config import Config
from .console import Console
from .constants import ERROR_MESSAGES, INFO_MESSAGES
from .display import render_report
from .models import AnalysisOutcome, AnalysisStatus
from .reporter import Reporter
from .session import AnalysisSession
from .utils import parse_timestamp

app = typer.Typer(help="Score a GitHub profile as a developer portfolio.")
config_app = typer.Typer(help="Manage configuration settings")
app.add_typer(config_app, name="config")

console = Console()

EXIT_CODES = {
    AnalysisStatus.ANALYSED: 0,
    AnalysisStatus.INVALID_IDENTIFIER: 1,
    AnalysisStatus.FAILED: 1,
    AnalysisStatus.NO_REPOSITORIES: 2,
}


class OutputFormat(str, Enum):
    """Where the finished report goes."""

    TERMINAL = "terminal"
    MARKDOWN = "markdown"
    JSON = "json"


def _load_config() -> Config:
    """Load configuration, exiting with a readable message when invalid.

    Raises:
        typer.Exit: If configuration is invalid
    """
    try:
        return Config.load()
    except ValueError as exc:
        console.print_error(exc, context=f"{ERROR_MESSAGES['config_invalid']}:")
        raise typer.Exit(code=1) from exc


def _build_collector(config: Config) -> GitHubProfileCollector:
    return GitHubProfileCollector(config)


def _parse_now(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Expected an ISO 8601 timestamp, got '{value}'") from exc


def _report_failure(outcome: AnalysisOutcome) -> None:
    if outcome.status is AnalysisStatus.NO_REPOSITORIES:
        console.print(f"[warning]{outcome.message}[/]")
        return

    console.print_error(outcome.message or ERROR_MESSAGES['fetch_failed'])
    if outcome.detail and console.is_verbose():
        console.print(f"[muted]{outcome.detail}[/]")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output for debugging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-essential output",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """CLI entry-point callback for shared initialisation."""
    console.set_verbose(verbose)
    console.set_quiet(quiet)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

    if no_color:
        os.environ["NO_COLOR"] = "1"
        console.no_color = True


@app.command()
def analyze(
    target: str = typer.Argument(
        ...,
        help="GitHub username or profile URL (e.g. octocat or https://github.com/octocat)",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TERMINAL,
        "--format",
        "-f",
        case_sensitive=False,
        help="terminal, markdown (writes report.md) or json (writes report.json)",
    ),
    output_dir: Path = typer.Option(
        Path("reports"),
        "--output",
        "-o",
        help="Output directory for report files",
    ),
    now: Optional[str] = typer.Option(
        None,
        "--now",
        help="Reference time as ISO 8601, for reproducible scores",
    ),
) -> None:
    """Analyze a public GitHub profile and print its portfolio score.

    Examples:
        gpa analyze octocat
        gpa analyze https://github.com/octocat --format markdown -o out/
        gpa analyze octocat --format json --now 2024-01-01T00:00:00Z
    """
    config = _load_config()
    reference_time = _parse_now(now)

    with _build_collector(config) as collector:
        session = AnalysisSession(PortfolioAnalyzer(collector, hosts=config.server.profile_hosts))
        with console.status(f"[accent]{INFO_MESSAGES['analyzing']}", spinner="dots"):
            outcome = session.run(target, reference_time)

    if not outcome.ok:
        _report_failure(outcome)
        raise typer.Exit(code=EXIT_CODES[outcome.status])

    profile, report = outcome.profile, outcome.report

    if output_format is OutputFormat.TERMINAL:
        render_report(console, profile, report)
        return

    reporter = Reporter(output_dir=output_dir)
    if output_format is OutputFormat.MARKDOWN:
        path = reporter.generate_markdown(profile, report)
    else:
        path = reporter.generate_json(profile, report)
    console.print(f"[success]{INFO_MESSAGES['report_written']}:[/] {path}")


@config_app.command("show")
def show_config() -> None:
    """Display current configuration settings."""
    config = _load_config()
    console.print_json(json.dumps(config.to_display_dict()))


@config_app.command("get")
def config_get(
    key: str = typer.Argument(..., help="Configuration key in dot notation (e.g. api.timeout)"),
) -> None:
    """Get a configuration value.

    Examples:
        gpa config get api.timeout
        gpa config get server.api_url
    """
    config = _load_config()
    try:
        value = config.get_value(key)
    except ValueError as exc:
        console.print_error(exc)
        raise typer.Exit(code=1) from exc
    console.print(f"{key} = {value}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Configuration key in dot notation (e.g. api.timeout)"),
    value: str = typer.Argument(..., help="Value to set"),
) -> None:
    """Set a configuration value.

    Examples:
        gpa config set api.timeout 10
        gpa config set server.custom_hosts github.example.com
        gpa config set api.enable_cache false
    """
    config = _load_config()
    try:
        config.set_value(key, value)
        config.dump()
    except ValueError as exc:
        console.print_error(exc)
        raise typer.Exit(code=1) from exc
    console.print(f"[success]✓ Configuration updated:[/] {key} = {value}")


@app.command(name="clear-cache")
def clear_cache() -> None:
    """Clear the API response cache.

    Examples:
        gpa clear-cache
    """
    if GitHubApiClient.clear_cache():
        console.print("[success]Cleared API cache successfully[/]")
    else:
        console.print("[info]No cache found to clear[/]")


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()

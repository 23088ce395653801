"""
CLI commands for the API behaviour suite

Provides commands for:
- Running the behave scenarios (parallel or sequential)
- Rendering the HTML report from the JSON results
- Validating configuration
- Checking that the target API is reachable
"""

import sys
import logging
import click
from typing import Optional, Tuple

from apisuite.core.exceptions import ReportError

logger = logging.getLogger(__name__)


@click.group()
def cli() -> None:
    """JSON Placeholder API suite - test commands"""
    pass


@cli.command()
@click.option("--workers", type=int, default=None, help="Parallel behave processes")
@click.option("--sequential", is_flag=True, help="Run all features in one process")
@click.option("--tags", multiple=True, help="Behave tag expression (repeatable)")
@click.option("--retries", type=int, default=None, help="Retries per failing scenario")
@click.option("--base-url", default=None, help="Override the target API base URL")
@click.option("--report/--no-report", default=True, help="Render the HTML report afterwards")
def run(
    workers: Optional[int],
    sequential: bool,
    tags: Tuple[str, ...],
    retries: Optional[int],
    base_url: Optional[str],
    report: bool,
) -> None:
    """
    Run the behave scenarios

    Exits non-zero when any feature fails.
    """
    from apisuite.runner import run_suite
    from config.settings import get_config

    settings = get_config()
    result = run_suite(
        settings,
        workers=workers,
        parallel=False if sequential else None,
        tags=list(tags),
        retries=retries,
        base_url=base_url,
    )

    for feature_run in result.runs:
        click.echo(feature_run.output)

    if not result.runs:
        click.echo("No feature files found.", err=True)
    for feature_run in result.failed:
        click.echo(f"✗ {feature_run.target} failed (exit {feature_run.returncode})", err=True)
    if result.passed:
        click.echo(f"✓ {len(result.runs)} feature run(s) passed")

    if report and result.runs:
        _render_report(settings)

    sys.exit(result.exit_code)


@cli.command()
def report() -> None:
    """Render the HTML report from the last run's JSON results"""
    from config.settings import get_config

    if not _render_report(get_config()):
        sys.exit(1)


def _render_report(settings) -> bool:
    from apisuite.reporting import build_custom_data, build_metadata, generate_report

    try:
        path = generate_report(
            settings.REPORT_JSON_DIR(),
            settings.REPORT_HTML_DIR(),
            title=settings.REPORT_TITLE(),
            metadata=build_metadata(),
            custom_data=build_custom_data(settings.PROJECT_NAME(), settings.ENVIRONMENT_NAME()),
        )
    except ReportError as e:
        click.echo(f"Error: {e}", err=True)
        return False
    click.echo(f"✅ HTML report generated in: {path.parent}/")
    return True


@cli.command()
def check_config() -> None:
    """Validate the configuration and print any issues"""
    from config.settings import get_config

    settings = get_config()
    issues = settings.validate_config()
    if issues:
        click.echo("Configuration issues:", err=True)
        for issue in issues:
            click.echo(f"  ✗ {issue}", err=True)
        sys.exit(1)

    click.echo(f"✓ Configuration OK ({settings.__name__})")
    click.echo(f"  Base URL: {settings.BASE_URL()}")
    click.echo(f"  Retries:  {settings.RETRIES()}")
    click.echo(f"  Workers:  {settings.WORKERS() or 'auto'}")


@cli.command()
@click.option("--base-url", default=None, help="Override the target API base URL")
def health_check(base_url: Optional[str]) -> None:
    """Check that the target API answers"""
    from apisuite.health import run_health_checks

    results = run_health_checks(base_url=base_url)
    healthy = True
    for name, (ok, message) in results.items():
        click.echo(f"{'✓' if ok else '✗'} {name}: {message}")
        healthy = healthy and ok

    if not healthy:
        sys.exit(1)

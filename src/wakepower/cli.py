"""
Command-line interface for wakepower.

Provides commands for analyzing a parsed batch of running events and power
samples, and for managing configuration.
"""

import json
import logging

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

import click

from pydantic import ValidationError

from wakepower.analysis.estimator import PowerEstimator
from wakepower.config import (
    get_baseline_threshold,
    get_config_path,
    load_config,
    set_baseline_threshold,
    unset_baseline_threshold,
)
from wakepower.constants import TABLE_CURRENT, TABLE_DURATION, TABLE_ENERGY
from wakepower.constants import StatisticsColumns as SC
from wakepower.logging_config import setup_logging
from wakepower.models.timeline import AnalysisInput
from wakepower.utils.formatting import (
    format_text_table,
    render_ranking,
    render_statistics_tables,
    render_summary,
)

logger = logging.getLogger(__name__)

try:
    __version__ = get_version("wakepower")
except PackageNotFoundError:
    __version__ = "dev"


def load_analysis_input(path: Path) -> AnalysisInput:
    """
    Load a parsed analysis batch from a JSON file.

    Args:
        path: JSON file with running_events and power_samples arrays

    Returns:
        Validated AnalysisInput

    Raises:
        click.ClickException: If the file is not valid JSON or fails validation
    """
    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}") from e

    try:
        return AnalysisInput.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(f"Invalid analysis input in {path}:\n{e}") from e


def _echo_report(estimator: PowerEstimator) -> None:
    click.echo(f"\n{'=' * 60}")
    click.echo("Wakeup reasons by energy")
    click.echo(f"{'=' * 60}")
    ranking = render_ranking(estimator.ranked_reasons())
    if ranking:
        click.echo(format_text_table(["Reason", "Energy"], ranking))
    else:
        click.echo("No wakeup reasons within the power trace.")

    tables = render_statistics_tables(estimator.statistics_tables())
    columns = {
        TABLE_DURATION: SC.DURATION,
        TABLE_CURRENT: SC.CURRENT,
        TABLE_ENERGY: SC.ENERGY,
    }
    for title, rows in tables.items():
        if not rows:
            continue
        click.echo(f"\n{title}")
        headers = ["Reason", *(c.capitalize() for c in columns[title])]
        click.echo(format_text_table(headers, rows))

    summary = render_summary(estimator.global_summary())
    click.echo(f"\n{'=' * 60}")
    click.echo("Summary")
    click.echo(f"{'=' * 60}")
    click.echo(f"  Suspend: {summary['suspendTime']:>12}  {summary['suspendEnergy']:>14}")
    click.echo(f"  Wakeup:  {summary['wakeupTime']:>12}  {summary['wakeupEnergy']:>14}")
    click.echo(f"  Avg suspend current: {summary['avgSuspendCurrent']}")
    click.echo(f"  Avg wakeup current:  {summary['avgWakeupCurrent']}")


@click.group()
@click.version_option(__version__, prog_name="wakepower")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """wakepower: attribute power-monitor energy to wakeup reasons"""
    setup_logging(verbose=verbose, console_format="%(levelname)s: %(message)s")


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--threshold",
    type=click.FloatRange(min=0, min_open=True),
    help="Baseline current threshold in mA (overrides config)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    show_default=True,
    help="Output format",
)
def analyze(input_path: Path, threshold: float | None, output_format: str) -> None:
    """Attribute power to wakeup reasons for a parsed JSON batch."""
    batch = load_analysis_input(input_path)

    if threshold is None:
        threshold = batch.baseline_threshold_ma
    if threshold is None:
        threshold = get_baseline_threshold()

    logger.info(
        f"Loaded {len(batch.running_events)} running events and "
        f"{len(batch.power_samples)} power samples from {input_path}"
    )

    try:
        estimator = PowerEstimator(
            batch.running_events,
            batch.power_samples,
            baseline_threshold_ma=threshold,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "json":
        report = {
            "baseline_threshold_ma": estimator.baseline_threshold_ma,
            "ranked_reasons": [r.model_dump() for r in estimator.ranked_reasons()],
            "statistics": estimator.statistics_tables().model_dump(),
            "summary": estimator.global_summary().model_dump(),
        }
        click.echo(json.dumps(report, indent=2))
        return

    click.echo(f"Baseline threshold: {estimator.baseline_threshold_ma:g} mA")
    _echo_report(estimator)


@cli.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("set-threshold")
@click.argument("threshold_ma", type=float)
def set_threshold_cmd(threshold_ma: float) -> None:
    """Set the default baseline current threshold (mA)."""
    try:
        set_baseline_threshold(threshold_ma)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"✓ Baseline threshold: {threshold_ma:g} mA")
    click.echo(f"  Config: {get_config_path()}")


@config.command("unset-threshold")
def unset_threshold_cmd() -> None:
    """Remove the baseline threshold setting (use the built-in default)."""
    configured = load_config().get("analysis", {}).get("baseline_threshold_ma")
    if configured is not None:
        unset_baseline_threshold()
        click.echo(f"✓ Removed baseline threshold: {configured:g} mA")
    else:
        click.echo("No baseline threshold was configured.")
    click.echo(f"  Using default: {get_baseline_threshold():g} mA")


@config.command("show")
def show_config_cmd() -> None:
    """Show all configuration settings."""
    config_path = get_config_path()
    if not config_path.exists():
        click.echo(f"No config file: {config_path}")
        click.echo(f"Baseline threshold: {get_baseline_threshold():g} mA (default)")
        return

    click.echo(f"Config file: {config_path}\n")
    config_data = load_config()
    if not config_data:
        click.echo("Configuration is empty.")
        return

    click.echo("Settings:")
    for section, values in config_data.items():
        click.echo(f"  [{section}]")
        if isinstance(values, dict):
            for key, value in values.items():
                click.echo(f"    {key} = {value!r}")


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()

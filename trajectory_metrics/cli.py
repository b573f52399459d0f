"""
Command-Line Interface for trajectory metrics.
Uses 'click' for argument parsing and 'rich' for the summary table.
"""
import csv
import json
import logging
import math
from pathlib import Path
from typing import Dict, List, Optional

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import MetricsConfig, load_config
from .constants import ALL_METRICS, COORDINATE_AXES, LOG_DATE_FORMAT, LOG_FORMAT, ROLE_IST, ROLE_SOLL
from .evaluation import PrecisionGrader, evaluate
from .exceptions import TrajectoryMetricsError
from .records import trajectory_from_records
from .results import MetricResult
from .trajectory import Trajectory

logger = logging.getLogger("TrajectoryMetricsCLI")


def load_csv_trajectory(path: str, role: str) -> Trajectory:
    """
    Read a trajectory CSV with ``x``, ``y``, optional ``z`` and ``timestamp``
    columns. Storage-style columns (``x_soll``, ``x_ist``, ...) work as well.
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        rows = []
        for row in reader:
            renamed = {}
            for key, value in row.items():
                if key is None:
                    continue
                key = key.strip()
                if key in COORDINATE_AXES:
                    key = f"{key}_{role}"
                if value is not None and value.strip() == "":
                    value = None
                renamed[key] = value
            rows.append(renamed)
    logger.debug(f"Read {len(rows)} {role} rows from {path}")
    return trajectory_from_records(rows, role, name=Path(path).stem)


def _format(value: Optional[float]) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "-"
    return f"{value:.4f}"


def _render_table(results: Dict[str, MetricResult], grades: Dict[str, str], no_color: bool) -> None:
    console = Console(no_color=no_color, highlight=False)
    table = Table(show_header=True, header_style="bold magenta", title="Soll/Ist comparison")
    table.add_column("Metric", style="cyan")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Avg", justify="right")
    table.add_column("Std", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Evaluation")
    for name, result in results.items():
        table.add_row(
            name,
            _format(result.min_distance),
            _format(result.max_distance),
            _format(result.average_distance),
            _format(result.standard_deviation),
            _format(result.score),
            grades[name],
        )
    console.print(table)


def _json_summary(results: Dict[str, MetricResult], grades: Dict[str, str]) -> Dict[str, Dict]:
    summary = {}
    for name, result in results.items():
        entry = result.to_dict()
        entry.pop("accumulated_cost")
        entry.pop("aligned_soll")
        entry.pop("aligned_ist")
        entry["evaluation"] = grades[name]
        summary[name] = entry
    return summary


@click.group()
@click.version_option(__version__, prog_name="trajectory-metrics")
def main():
    """
    Trajectory metrics.

    Compares a planned (soll) robot trajectory with a measured (ist)
    trajectory using Euclidean, DTW, discrete Frechet and LCSS metrics.
    """


@main.command()
@click.argument("soll_csv", type=click.Path(exists=True, dir_okay=False))
@click.argument("ist_csv", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--metric",
    "-m",
    "metric_names",
    multiple=True,
    type=click.Choice(ALL_METRICS),
    help="Metric to compute (repeatable). Defaults to the configured metrics.",
)
@click.option("--window", type=int, default=None, help="Band width for the general DTW.")
@click.option("--johnen-window", type=int, default=None, help="Band width for the Johnen DTW.")
@click.option("--threshold", type=float, default=None, help="LCSS matching threshold.")
@click.option("--lcss-window", type=int, default=None, help="LCSS temporal window in samples.")
@click.option("--dimensions", type=int, default=None, help="Number of leading coordinates compared.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON configuration file.",
)
@click.option("--json-output", is_flag=True, help="Print results as JSON.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides the configuration).",
)
def compare(
    soll_csv: str,
    ist_csv: str,
    metric_names: List[str],
    window: Optional[int],
    johnen_window: Optional[int],
    threshold: Optional[float],
    lcss_window: Optional[int],
    dimensions: Optional[int],
    config_path: Optional[str],
    json_output: bool,
    no_color: bool,
    log_level: Optional[str],
):
    """Compare the trajectory in SOLL_CSV with the one in IST_CSV."""
    try:
        config = load_config(config_path) if config_path else MetricsConfig()
        overrides = {
            "dtw_window": window,
            "johnen_window": johnen_window,
            "lcss_threshold": threshold,
            "lcss_window": lcss_window,
            "dimensions": dimensions,
            "log_level": log_level,
        }
        for key, value in overrides.items():
            if value is not None:
                setattr(config, key, value)
        if metric_names:
            config.metrics = list(metric_names)
        config.validate()

        logging.basicConfig(
            level=getattr(logging, config.log_level.upper(), logging.INFO),
            format=LOG_FORMAT,
            datefmt=LOG_DATE_FORMAT,
        )

        soll = load_csv_trajectory(soll_csv, ROLE_SOLL)
        ist = load_csv_trajectory(ist_csv, ROLE_IST)
        logger.info(f"Comparing {len(soll)} soll samples with {len(ist)} ist samples")

        results = evaluate(soll, ist, config=config)
        grades = PrecisionGrader.assess_all(results, config)
    except TrajectoryMetricsError as e:
        raise click.ClickException(str(e)) from e

    if json_output:
        click.echo(
            json.dumps(
                {"soll": soll_csv, "ist": ist_csv, "results": _json_summary(results, grades)},
                indent=2,
            )
        )
    else:
        _render_table(results, grades, no_color)


@main.command(name="metrics")
def list_metrics():
    """List the available metric names."""
    for name in ALL_METRICS:
        click.echo(name)


if __name__ == "__main__":
    main()

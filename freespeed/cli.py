"""
CLI interface for free speed calibration.

Usage:
    network-freespeed --network network.xml.gz --features features.csv validation/*.csv
    network-freespeed --network network.xml.gz --params params.json --output network-opt.xml.gz
"""

import logging
from pathlib import Path

import click
import uvicorn

from freespeed.calibration.report import ReportGenerator
from freespeed.calibration.service import CalibrationService
from freespeed.config import settings
from freespeed.main import create_app, setup_logging

logger = logging.getLogger(__name__)


@click.command("network-freespeed")
@click.option(
    "--network",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Input network"
)
@click.option(
    "--features",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Per-link feature table (default: FREESPEED_FEATURES_FILE)"
)
@click.option("--output", default=None, type=click.Path(path_type=Path), help="Path to output network")
@click.option(
    "--params",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Apply params and write to output if given"
)
@click.option("--output-dir", default=None, type=click.Path(path_type=Path), help="Directory for artifacts")
@click.option("--port", default=None, type=int, help="Port of the interactive endpoint")
@click.option("--report", default=None, type=click.Path(path_type=Path), help="Save batch report as JSON")
@click.argument(
    "validation_files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def cli(network, features, output, params, output_dir, port, report, validation_files):
    """
    Start server for freespeed optimization.

    With --output and --params the parameters are applied once and the
    network is written. Otherwise the baseline and preset factors are
    scored and an endpoint for an external tuner is started.
    """
    setup_logging(settings.log_level)

    features = features or settings.features_file
    output_dir = output_dir or settings.output_dir

    service = CalibrationService.load(
        network,
        features,
        validation_files,
        output_dir=output_dir,
        min_speed_factor=settings.min_speed_factor,
        save_label=settings.save_label,
        save_network_name=settings.save_network_name,
    )

    if output is not None and params is not None:
        result = service.run_direct(params, output)
        click.echo(f"rmse: {result.rmse}, mae: {result.mae}")
        click.echo(f"Network written: {output}")
        return

    batch = service.run_batch()

    generator = ReportGenerator()
    click.echo(generator.generate_console(batch))
    if report is not None:
        generator.save_json(batch, report)
        click.echo(f"JSON saved: {report}")

    app = create_app(service)
    port = port or settings.port
    logger.info(f"Serving evaluations on {settings.host}:{port}")
    uvicorn.run(app, host=settings.host, port=port, log_level=settings.log_level.lower())


def main():
    cli()


if __name__ == "__main__":
    main()

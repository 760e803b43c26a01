"""Command-line interface for welch_psd.

Provides a ``click``-based CLI that streams a sample file through a
:class:`~welch_psd.estimator.PsdEstimator` and prints the averaged
power spectral density, plus a helper listing the supported windows.

Usage::

    welch-psd estimate samples.txt --sample-count 256 --sample-frequency 1000
    welch-psd estimate samples.txt -n 64 -f 8000 --segments-per-result 10
    welch-psd estimate samples.txt --config psd.yaml --plot
    welch-psd windows
"""

import logging
from typing import List, Optional, Tuple

import click

from welch_psd.analysis import dominant_bin, spectral_concentration, to_bins
from welch_psd.config import load_config
from welch_psd.errors import PsdError
from welch_psd.estimator import PsdEstimator
from welch_psd.formatters import format_density, format_frequency
from welch_psd.io import iter_segments
from welch_psd.logs import LOG_LEVELS, setup_logging
from welch_psd.models import PsdBin
from welch_psd.plotting import plot_psd
from welch_psd.windows import WINDOW_CORRECTION, WindowType

logger = logging.getLogger(__name__)

#: Valid window choices for the ``--window`` option.
WINDOW_CHOICES = click.Choice(
    [w.value for w in WindowType],
    case_sensitive=False,
)


def _echo_result(label: str, bins: List[PsdBin]) -> None:
    """Print one finalized estimate as a table."""
    click.echo(label)
    click.echo(f"{'bin':>5}  {'frequency':>12}  {'psd (/Hz)':>12}")
    for b in bins:
        click.echo(
            f"{b.index:>5}  {format_frequency(b.frequency):>12}  "
            f"{format_density(b.density):>12}"
        )

    density = [b.density for b in bins]
    peak = dominant_bin(density)
    share = spectral_concentration(density, peak)
    click.echo(
        f"Dominant: bin {peak} at {format_frequency(bins[peak].frequency)} "
        f"({share:.1%} of total)"
    )


@click.group()
@click.version_option(package_name="welch-psd")
def cli() -> None:
    """welch-psd — streaming Welch power spectral density estimator."""


@cli.command()
@click.argument("samples_file", type=click.Path(exists=True))
@click.option("--sample-count", "-n", type=int, default=None,
              help="Samples per segment.")
@click.option("--sample-frequency", "-f", type=float, default=None,
              help="Sampling rate in Hz.")
@click.option("--window", "-w", type=WINDOW_CHOICES, default=None,
              help="Window applied to every segment.")
@click.option("--segments-per-result", "-k", type=int, default=None,
              help="Report a result every K segments (0: once at the end).")
@click.option("--config", "-c", "config_file", type=click.Path(), default=None,
              help="Path to a YAML configuration file.")
@click.option("--plot/--no-plot", default=False,
              help="Open an interactive plot of the results.")
@click.option("--title", "-t", default="Power Spectral Density",
              help="Plot title.")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default=None, help="Logging verbosity.")
def estimate(
    samples_file: str,
    sample_count: Optional[int],
    sample_frequency: Optional[float],
    window: Optional[str],
    segments_per_result: Optional[int],
    config_file: Optional[str],
    plot: bool,
    title: str,
    log_level: Optional[str],
) -> None:
    """Estimate the PSD of an integer sample file."""
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc))

    try:
        setup_logging(log_level or config.logging.level)
    except ValueError as exc:
        raise click.ClickException(str(exc))

    settings = config.estimator
    count = sample_count if sample_count is not None else settings.sample_count
    fs = sample_frequency if sample_frequency is not None else settings.sample_frequency
    window_name = window or settings.window
    per_result = (
        segments_per_result if segments_per_result is not None
        else settings.segments_per_result
    )
    if per_result < 0:
        raise click.ClickException(
            f"--segments-per-result must be >= 0, got {per_result}"
        )

    estimator = PsdEstimator(samples_count_max=settings.samples_count_max)
    datasets: List[Tuple[str, List[PsdBin]]] = []

    def finalize(segments: int) -> None:
        result = estimator.get_result()
        bins = to_bins(result, count, fs)
        label = f"Result {len(datasets) + 1} ({segments} segment(s))"
        _echo_result(label, bins)
        datasets.append((label, bins))

    try:
        estimator.setup(count, fs, window_name)
        logger.info("Reading %s in segments of %d samples", samples_file, count)

        total = 0
        for segment in iter_segments(samples_file, count):
            estimator.compute_segment(segment)
            total += 1
            if per_result and estimator.segment_count == per_result:
                finalize(per_result)

        if total == 0:
            raise click.ClickException(
                f"{samples_file} holds no complete segment of {count} samples"
            )
        if estimator.segment_count:
            finalize(estimator.segment_count)
    except (PsdError, ValueError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Processed {total} segment(s) into {len(datasets)} result(s).")

    if plot:
        plot_psd(datasets=datasets, title=title, show=True)


@cli.command(name="windows")
def windows_cmd() -> None:
    """List supported windows and their energy correction factors."""
    for kind in WindowType:
        click.echo(f"{kind.value:<10} {WINDOW_CORRECTION[kind]:.2f}")


if __name__ == "__main__":
    cli()

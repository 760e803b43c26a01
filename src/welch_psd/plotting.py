"""Interactive PSD plotting with Plotly.

Plots one or more finalized PSD estimates as overlaid line traces
with formatted hover text.  Figures are returned (and optionally
shown) but never written to disk.
"""

from typing import List, Tuple

import plotly.graph_objects as go

from welch_psd.formatters import format_density, format_frequency
from welch_psd.models import PsdBin


def plot_psd(
    datasets: List[Tuple[str, List[PsdBin]]],
    title: str = "Power Spectral Density",
    show: bool = True,
    log_scale: bool = True,
) -> go.Figure:
    """Create an interactive PSD plot.

    Args:
        datasets: List of ``(name, bins)`` tuples.  Each *bins* is a
            list of :class:`~welch_psd.models.PsdBin`, as returned by
            :func:`~welch_psd.analysis.to_bins`.  Multiple entries
            produce overlaid traces.
        title: Chart title.
        show: If ``True``, opens the plot in the default browser.
        log_scale: Use a logarithmic density axis.

    Returns:
        The Plotly :class:`~plotly.graph_objects.Figure`.

    Raises:
        ValueError: If *datasets* is empty.
    """
    if not datasets:
        raise ValueError("Cannot plot PSD without datasets")

    fig = go.Figure()

    for name, bins in datasets:
        freqs = [b.frequency for b in bins]
        density = [b.density for b in bins]
        hover_texts = [
            f"Bin {b.index}<br>{format_frequency(b.frequency)}<br>"
            f"{format_density(b.density)} /Hz"
            for b in bins
        ]
        fig.add_trace(go.Scatter(
            x=freqs,
            y=density,
            mode="lines+markers",
            name=name,
            hovertext=hover_texts,
            hoverinfo="text",
        ))

    fig.update_layout(
        title=title,
        xaxis_title="Frequency (Hz)",
        yaxis_title="PSD (units²/Hz)",
        hovermode="x unified",
        template="plotly_dark",
    )
    if log_scale:
        fig.update_yaxes(type="log", exponentformat="e")

    if show:
        fig.show()

    return fig

"""
Matplotlib bar chart for category scores.

Draws one bar per category from a ChartSeries. The y-axis runs from 0 to a
fixed, caller-supplied maximum so charts from different sessions share a
scale.
"""

from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt

from mai.export import ChartSeries

SERIES_LABEL = "Your Score"
BAR_COLOR = (99 / 255, 102 / 255, 241 / 255, 0.5)


def render_bar_chart(
    series: ChartSeries,
    y_max: int,
    path: Optional[Union[str, Path]] = None,
    title: Optional[str] = None,
):
    """
    Draw the score chart.

    Args:
        series: Labels and values from to_chart_series()
        y_max: Fixed y-axis maximum
        path: If given, the figure is also saved there (format from extension)
        title: Optional chart title

    Returns:
        matplotlib Figure (caller closes it)
    """
    fig, ax = plt.subplots(figsize=(max(4, 2 * len(series.labels)), 4))
    ax.bar(series.labels, series.values, color=BAR_COLOR, label=SERIES_LABEL)
    ax.set_ylim(0, y_max)
    ax.set_ylabel(SERIES_LABEL)
    ax.grid(True, axis="y", linestyle="--", linewidth=0.4, alpha=0.6)
    if title:
        ax.set_title(title)
    fig.tight_layout()
    if path is not None:
        fig.savefig(path)
    return fig

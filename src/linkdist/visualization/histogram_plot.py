# src/linkdist/visualization/histogram_plot.py
import os
import logging
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from typing import Optional, Sequence, Tuple

# 1024x768 pixels
FIGURE_SIZE = (10.24, 7.68)
FIGURE_DPI = 100

# Log-scale bars start below 1 so that a count of 1 is still drawn
LOG_FLOOR = 0.5


class HistogramPlotter:
    """Renders (value, count) histograms as fixed-size bar charts"""

    def __init__(self, output_dir: Optional[str] = None):
        """Initialize the histogram plotter

        Args:
            output_dir: Directory to save charts (optional)
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self.output_dir = output_dir

        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        sns.set_style("whitegrid")

    def plot_histogram(self, data: Sequence[Tuple[int, int]], save_path: Optional[str] = None,
                       title: str = "Histogram", x_limit: int = 100, y_limit: int = 0,
                       log_y: bool = False, x_label: str = "Value",
                       y_label: str = "Number of nodes") -> plt.Figure:
        """Plot a histogram as unit-wide bars

        Args:
            data: Ascending (x, count) pairs
            save_path: File name to save the chart as (optional); ".png" is
                appended when no image extension is given
            title: Chart title
            x_limit: Upper bound of the x axis; entries at or beyond it are not drawn
            y_limit: Upper bound of the y axis; ignored with ``log_y``, and
                a value of 0 or less autoscales a linear axis
            log_y: Whether to use a logarithmic y axis

        Returns:
            Matplotlib figure
        """
        fig, ax = plt.subplots(figsize=FIGURE_SIZE, dpi=FIGURE_DPI)

        visible = [(x, y) for x, y in data if 0 <= x < x_limit]
        xs = np.array([x for x, _ in visible], dtype=float)
        counts = np.array([y for _, y in visible], dtype=float)

        if log_y:
            max_count = max((y for _, y in data), default=1)
            heights = np.maximum(counts, 1.0) - LOG_FLOOR
            ax.bar(xs, heights, width=1.0, align="edge", bottom=LOG_FLOOR, color="steelblue")
            ax.set_yscale("log")
            ax.set_ylim(LOG_FLOOR, max_count + 1)
        else:
            ax.bar(xs, counts, width=1.0, align="edge", color="steelblue")
            if y_limit > 0:
                ax.set_ylim(0, y_limit)

        ax.set_xlim(0, x_limit)
        ax.set_xlabel(x_label)
        ax.set_ylabel(y_label)
        ax.set_title(title, fontsize=20)

        if save_path:
            if not save_path.endswith((".png", ".jpg", ".pdf", ".svg")):
                save_path += ".png"

            full_path = os.path.join(self.output_dir, save_path) if self.output_dir else save_path
            fig.savefig(full_path, dpi=FIGURE_DPI)
            self.logger.debug(f"Saved histogram '{title}' to {full_path}")

        return fig

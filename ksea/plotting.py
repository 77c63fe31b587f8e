"""
Step 5 — KSEA bar plot.

Horizontal bar chart of kinase z-scores, one bar per kinase of the display
view, ascending by z-score and coloured by significance tag.
"""

from __future__ import annotations

import logging
from typing import Optional

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from .columns import COLOR  # noqa: E402

logger = logging.getLogger(__name__)

PLOT_WIDTH_IN: float = 6.0
PLOT_HEIGHT_EXPONENT: float = 0.55  # height = n_kinases ** 0.55 inches
PLOT_DPI: int = 300


def plot_height(n_kinases: int) -> float:
    """Figure height in inches for *n_kinases* bars."""
    return n_kinases ** PLOT_HEIGHT_EXPONENT


def plot_zscores(display: pd.DataFrame, output_path: str) -> Optional[str]:
    """Render the KSEA bar plot to *output_path*.

    The file format follows the extension (``.tiff``, ``.png``, ``.pdf`` …).

    Returns
    -------
    str or None
        *output_path*, or ``None`` when *display* is empty and nothing
        was drawn.
    """
    if display.empty:
        logger.warning("No kinases pass the substrate cutoff; bar plot skipped")
        return None

    fig, ax = plt.subplots(figsize=(PLOT_WIDTH_IN, plot_height(len(display))))
    try:
        positions = range(len(display))
        ax.barh(
            positions,
            display["z.score"].astype(float),
            color=display[COLOR].tolist(),
            edgecolor="none",
        )
        ax.set_yticks(list(positions))
        ax.set_yticklabels(display["Kinase.Gene"].astype(str), fontsize=7.8)
        ax.tick_params(axis="x", labelsize=10.4)
        ax.set_xlabel("Kinase z-score", fontsize=13)
        ax.set_ylim(-0.5, len(display) - 0.5)
        for side in ("top", "right"):
            ax.spines[side].set_visible(False)
        fig.tight_layout()
        fig.savefig(output_path, dpi=PLOT_DPI)
    finally:
        plt.close(fig)

    logger.info("Bar plot of %d kinases saved: %s", len(display), output_path)
    return output_path

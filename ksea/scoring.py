"""
Step 4 — Kinase enrichment scoring (Casado et al. 2013).

For every kinase with at least one kinase-substrate link:

  m          number of links (substrate sites)
  mS         mean ``log2FC`` of those links
  Enrichment mS / |mean log2FC of the whole experiment|
  z.score    (mS - mean) * sqrt(m) / sd, population taken over all
             normalised experimental rows
  p.value    one-tailed normal tail at |z|, i.e. ``Φ(-|z|)``
  FDR        Benjamini-Hochberg over every scored kinase

FDR is always computed on the full kinase set; ``display_scores`` only
filters and re-orders, it never recomputes significance.
"""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
import pandas as pd
from scipy.stats import norm
from statsmodels.stats.multitest import fdrcorrection

from .columns import (
    COLOR,
    DEFAULT_COLOR,
    DOWN_COLOR,
    LOG2FC,
    SCORE_COLUMNS,
    UP_COLOR,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Statistics helpers
# ---------------------------------------------------------------------------
def population_stats(px_norm: pd.DataFrame) -> Tuple[float, float]:
    """Return ``(mean, sd)`` of ``log2FC`` over all experimental rows.

    NaN values are excluded; ``sd`` is the sample standard deviation.
    """
    values = pd.to_numeric(px_norm[LOG2FC], errors="coerce").dropna()
    return float(values.mean()), float(values.std(ddof=1))


def bh_adjust(pvalues: pd.Series) -> pd.Series:
    """Benjamini-Hochberg adjustment; NaN p-values stay NaN and are left out."""
    adjusted = pd.Series(np.nan, index=pvalues.index, dtype=float)
    valid = pvalues.notna()
    if valid.any():
        _, fdr = fdrcorrection(pvalues[valid].to_numpy(dtype=float), method="indep")
        adjusted[valid] = fdr
    return adjusted


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
def score_kinases(links: pd.DataFrame, px_norm: pd.DataFrame) -> pd.DataFrame:
    """Compute KSEA scores for every kinase in *links*.

    Parameters
    ----------
    links : pd.DataFrame
        Kinase-substrate links from :func:`ksea.annotation.build_ks_links`.
    px_norm : pd.DataFrame
        The complete normalised experimental table (population statistics).

    Returns
    -------
    pd.DataFrame
        Columns ``Kinase.Gene, mS, Enrichment, m, z.score, p.value, FDR``,
        sorted by ``Kinase.Gene``.  Empty when *links* is empty.
    """
    if links.empty:
        logger.warning("No kinase-substrate links to score; returning empty scores")
        return pd.DataFrame(columns=SCORE_COLUMNS)

    mean, sd = population_stats(px_norm)
    if not np.isfinite(sd) or sd == 0:
        logger.warning(
            "Standard deviation of log2FC is %s; z-scores are undefined", sd
        )

    scores = (
        links.groupby("Kinase.Gene", sort=True)[LOG2FC]
        .agg(mS="mean", m="size")
        .reset_index()
    )
    scores["Enrichment"] = scores["mS"] / abs(mean)
    scores["z.score"] = (scores["mS"] - mean) * np.sqrt(scores["m"]) / sd
    scores["p.value"] = norm.cdf(-scores["z.score"].abs())
    scores["FDR"] = bh_adjust(scores["p.value"])

    logger.info(
        "Scored %d kinases (population mean=%.4f, sd=%.4f)", len(scores), mean, sd
    )
    return scores[SCORE_COLUMNS]


# ---------------------------------------------------------------------------
# Display view
# ---------------------------------------------------------------------------
def significance_colors(scores: pd.DataFrame, p_cutoff: float) -> pd.Series:
    """Colour tag per kinase: red/blue when ``p.value < p_cutoff``, else black."""
    colors = pd.Series(DEFAULT_COLOR, index=scores.index, dtype=object)
    significant = scores["p.value"].astype(float) < p_cutoff
    up = scores["z.score"].astype(float) > 0
    colors[significant & up] = UP_COLOR
    colors[significant & ~up] = DOWN_COLOR
    return colors


def display_scores(
    scores: pd.DataFrame,
    m_cutoff: float,
    p_cutoff: float,
) -> pd.DataFrame:
    """Kinases with ``m >= m_cutoff``, ascending by z-score, with a ``color`` tag."""
    view = scores[scores["m"].astype(float) >= m_cutoff]
    view = view.sort_values("z.score", kind="mergesort").reset_index(drop=True)
    view[COLOR] = significance_colors(view, p_cutoff)

    n_sig = int((view[COLOR] != DEFAULT_COLOR).sum())
    logger.info(
        "Display view: %d / %d kinases with m >= %g (%d with p < %g)",
        len(view),
        len(scores),
        m_cutoff,
        n_sig,
        p_cutoff,
    )
    return view

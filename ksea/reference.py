"""
Step 2 — Kinase-substrate reference filtering.

Selects the PhosphoSitePlus & NetworKIN rows that may serve as evidence in
this run:

* curated mode (default) keeps ``PhosphoSitePlus`` rows only;
* NetworKIN mode keeps ``NetworKIN`` rows whose ``networkin_score`` reaches
  the cutoff.  Curated rows are not mixed in; the ``Source`` tag decides,
  not the presence of a score.
"""

from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from .columns import (
    CURATED_SOURCES,
    KSDATA_REQUIRED,
    NETWORKIN_SCORE,
    PREDICTED_SOURCES,
    SOURCE,
)

logger = logging.getLogger(__name__)


def check_ksdata_columns(ksdata: pd.DataFrame) -> None:
    """Raise ``ValueError`` if *ksdata* lacks a required column."""
    missing = [c for c in KSDATA_REQUIRED if c not in ksdata.columns]
    if missing:
        raise ValueError(f"Kinase-substrate dataset is missing columns: {missing}")


def filter_ksdata(
    ksdata: pd.DataFrame,
    networkin: bool = False,
    networkin_cutoff: Optional[float] = None,
) -> pd.DataFrame:
    """Return the reference rows eligible for the evidence join.

    Parameters
    ----------
    ksdata : pd.DataFrame
        PhosphoSitePlus & NetworKIN dataset.
    networkin : bool
        Use NetworKIN predictions instead of curated links.
    networkin_cutoff : float, optional
        Minimum ``networkin_score`` (inclusive).  Required if *networkin*.

    Raises
    ------
    ValueError
        If *networkin* is set without a cutoff, or columns are missing.
    """
    if networkin and networkin_cutoff is None:
        raise ValueError(
            "networkin_cutoff is required when NetworKIN predictions are included."
        )
    check_ksdata_columns(ksdata)

    source = ksdata[SOURCE].astype(str).str.strip()
    if networkin:
        scores = pd.to_numeric(ksdata[NETWORKIN_SCORE], errors="coerce")
        mask = source.isin(PREDICTED_SOURCES) & (scores >= networkin_cutoff)
        mode = f"NetworKIN (score >= {networkin_cutoff:g})"
    else:
        mask = source.isin(CURATED_SOURCES)
        mode = "PhosphoSitePlus"

    filtered = ksdata[mask].reset_index(drop=True)
    logger.info(
        "Reference filter [%s]: kept %d / %d rows", mode, len(filtered), len(ksdata)
    )
    if filtered.empty:
        logger.warning("No kinase-substrate annotations passed the %s filter", mode)
    return filtered

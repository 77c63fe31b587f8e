"""
Step 1 — Peptide normalisation.

Expands multi-site peptides to one phosphosite per row and derives
``log2FC`` from the raw fold change.  Rows whose fold change cannot give a
finite log2 value are discarded, never imputed.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from .columns import (
    LOG2FC,
    PX_COLUMNS,
    RESIDUE_SEPARATOR,
    SUB_GENE,
    SUB_MOD_RSD,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Residue expansion
# ---------------------------------------------------------------------------
def expand_residues(px: pd.DataFrame) -> pd.DataFrame:
    """Split ``;``-separated ``Residue.Both`` values into separate rows.

    A peptide listing *k* phosphosites yields *k* rows that share every
    other field.  Tokens are whitespace-stripped and empty tokens ignored;
    a row left with no token is dropped.  Expanded rows keep the position
    of their parent row.
    """
    missing = set(PX_COLUMNS) - set(px.columns)
    if missing:
        raise ValueError(f"Required columns are missing: {missing}")

    df = px.copy()
    df["Residue.Both"] = (
        df["Residue.Both"]
        .fillna("")
        .astype(str)
        .str.split(RESIDUE_SEPARATOR)
        .apply(lambda tokens: [t.strip() for t in tokens if t.strip()])
    )
    n_multi = int((df["Residue.Both"].apply(len) > 1).sum())

    df = df.explode("Residue.Both")
    df = df[df["Residue.Both"].notna()].reset_index(drop=True)

    logger.debug(
        "Expanded %d multi-site peptides: %d -> %d rows", n_multi, len(px), len(df)
    )
    return df


# ---------------------------------------------------------------------------
# log2 fold change
# ---------------------------------------------------------------------------
def log2_fold_change(fc: pd.Series) -> pd.Series:
    """Return ``log2(|FC|)``; unparseable values become NaN.

    The sign of the fold change is dropped before the logarithm.  Zero and
    infinite fold changes map to non-finite values.
    """
    values = pd.to_numeric(fc.astype(str).str.strip(), errors="coerce")
    with np.errstate(divide="ignore"):
        return np.log2(values.abs())


def normalize_px(px: pd.DataFrame) -> pd.DataFrame:
    """Normalise an experimental table to one residue per row with ``log2FC``.

    Parameters
    ----------
    px : pd.DataFrame
        Columns ``Protein, Gene, Peptide, Residue.Both, p, FC``.

    Returns
    -------
    pd.DataFrame
        Columns ``Protein, SUB_GENE, Peptide, SUB_MOD_RSD, p, FC, log2FC``;
        every ``log2FC`` finite.  A ``p`` of ``"NULL"`` is kept as-is.
    """
    df = expand_residues(px)[PX_COLUMNS]
    df = df.rename(columns={"Gene": SUB_GENE, "Residue.Both": SUB_MOD_RSD})
    df[LOG2FC] = log2_fold_change(df["FC"])

    keep = np.isfinite(df[LOG2FC].to_numpy(dtype=float))
    n_dropped = int((~keep).sum())
    if n_dropped:
        logger.info("Dropped %d rows without a usable fold change", n_dropped)
    df = df[keep].reset_index(drop=True)

    logger.info("Normalised to %d rows (one residue per row)", len(df))
    return df

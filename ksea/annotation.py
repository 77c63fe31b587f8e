"""
Step 3 — Joining experimental sites to kinase-substrate annotations.

The normalised experimental table and the filtered reference are
inner-joined on substrate gene and residue.  Duplicate evidence for the
same (kinase, substrate, site, source) is collapsed by averaging
``log2FC``; this covers repeated detections of one site as well as rows
multiplied by the join itself.
"""

from __future__ import annotations

import logging

import pandas as pd

from .columns import (
    ACCESSION_COLUMNS,
    ISOFORM_SEPARATOR,
    JOIN_KEYS,
    KINASE_GENE,
    LINK_COLUMNS,
    LINK_KEYS,
    LOG2FC,
    NO_ISOFORM_SUFFIX,
    SOURCE,
    SUB_GENE,
    SUB_MOD_RSD,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Isoform handling
# ---------------------------------------------------------------------------
def strip_isoform(accessions: pd.Series) -> pd.Series:
    """Collapse isoform accessions to the canonical one (``P31749-2`` -> ``P31749``)."""
    return accessions.astype(str).str.split(ISOFORM_SEPARATOR, n=1).str[0]


# ---------------------------------------------------------------------------
# Join
# ---------------------------------------------------------------------------
def join_annotations(px_norm: pd.DataFrame, ks_filtered: pd.DataFrame) -> pd.DataFrame:
    """Inner-join normalised PX rows with reference rows on the substrate site.

    Keys are ``SUB_GENE`` and ``SUB_MOD_RSD``.  Canonical accessions are
    added afterwards as ``<column>.noIsoform`` for every accession column
    present; they take no part in the join.
    """
    px_side = px_norm.drop(columns=[KINASE_GENE, SOURCE], errors="ignore")
    joined = ks_filtered.merge(px_side, on=JOIN_KEYS, how="inner")

    for col in ACCESSION_COLUMNS:
        if col in joined.columns:
            joined[col + NO_ISOFORM_SUFFIX] = strip_isoform(joined[col])

    joined = joined.sort_values(KINASE_GENE, kind="mergesort").reset_index(drop=True)
    logger.info(
        "Joined %d experimental rows with %d annotations: %d matches",
        len(px_norm),
        len(ks_filtered),
        len(joined),
    )
    return joined


# ---------------------------------------------------------------------------
# Deduplication
# ---------------------------------------------------------------------------
def aggregate_evidence(joined: pd.DataFrame) -> pd.DataFrame:
    """Collapse joined rows to one kinase-substrate link per unique site.

    Returns
    -------
    pd.DataFrame
        Columns ``Kinase.Gene, Substrate.Gene, Substrate.Mod, Source,
        log2FC``; ``log2FC`` is the mean over all contributing rows.
        Sorted by ``Kinase.Gene``.
    """
    abbrev = joined[[KINASE_GENE, SUB_GENE, SUB_MOD_RSD, SOURCE, LOG2FC]].set_axis(
        LINK_COLUMNS, axis=1
    )
    if abbrev.empty:
        return pd.DataFrame(columns=LINK_COLUMNS)

    links = (
        abbrev.groupby(LINK_KEYS, sort=True)[LOG2FC]
        .mean()
        .reset_index()
        .sort_values("Kinase.Gene", kind="mergesort")
        .reset_index(drop=True)
    )
    logger.info(
        "Aggregated %d matches into %d kinase-substrate links (%d kinases)",
        len(joined),
        len(links),
        links["Kinase.Gene"].nunique(),
    )
    return links


def build_ks_links(px_norm: pd.DataFrame, ks_filtered: pd.DataFrame) -> pd.DataFrame:
    """Join and aggregate in one call; empty input gives an empty link table."""
    links = aggregate_evidence(join_annotations(px_norm, ks_filtered))
    if links.empty:
        logger.warning(
            "No kinase-substrate links found; check the reference filter "
            "settings and the gene/residue format of the experimental data"
        )
    return links

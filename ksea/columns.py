"""
Column contracts, source categories and colour tags shared by all steps.

Experimental table (PX)
-----------------------
Six columns in this exact order::

    Protein, Gene, Peptide, Residue.Both, p, FC

  - Protein      : UniProt ID of the parent protein
  - Gene         : HUGO gene name of the parent protein
  - Peptide      : peptide sequence
  - Residue.Both : all phosphosites on the peptide, ``;``-separated (``S102;T105``)
  - p            : peptide p-value, or ``"NULL"`` when none was calculated
  - FC           : fold change, not log-transformed (control as denominator)

Kinase-substrate dataset (KSData)
---------------------------------
The PhosphoSitePlus & NetworKIN table.  Rows are tagged by ``Source``:
``PhosphoSitePlus`` (curated) or ``NetworKIN`` (predicted, scored by
``networkin_score``).

References
----------
  Casado et al., Sci Signal 2013 – KSEA
  Hornbeck et al., Nucleic Acids Res 2015 – PhosphoSitePlus
  Horn et al., Nat Methods 2014 – NetworKIN
"""

from __future__ import annotations

from typing import FrozenSet, List

# ---------------------------------------------------------------------------
# Experimental (PX) columns
# ---------------------------------------------------------------------------
PX_COLUMNS: List[str] = ["Protein", "Gene", "Peptide", "Residue.Both", "p", "FC"]

RESIDUE_SEPARATOR: str = ";"
NULL_P_VALUE: str = "NULL"

# Normalised PX: gene/residue renamed to the KSData join keys
SUB_GENE: str = "SUB_GENE"
SUB_MOD_RSD: str = "SUB_MOD_RSD"
LOG2FC: str = "log2FC"
JOIN_KEYS: List[str] = [SUB_GENE, SUB_MOD_RSD]

# ---------------------------------------------------------------------------
# Kinase-substrate dataset (KSData) columns
# ---------------------------------------------------------------------------
KINASE_GENE: str = "GENE"
SOURCE: str = "Source"
NETWORKIN_SCORE: str = "networkin_score"
KSDATA_REQUIRED: List[str] = [KINASE_GENE, SUB_GENE, SUB_MOD_RSD, SOURCE, NETWORKIN_SCORE]

# Accession columns that may carry an isoform suffix (``P31749-2``)
ACCESSION_COLUMNS: List[str] = ["KIN_ACC_ID", "SUB_ACC_ID"]
ISOFORM_SEPARATOR: str = "-"
NO_ISOFORM_SUFFIX: str = ".noIsoform"

CURATED_SOURCES: FrozenSet[str] = frozenset({"PhosphoSitePlus"})
PREDICTED_SOURCES: FrozenSet[str] = frozenset({"NetworKIN"})

# ---------------------------------------------------------------------------
# Output tables
# ---------------------------------------------------------------------------
LINK_KEYS: List[str] = ["Kinase.Gene", "Substrate.Gene", "Substrate.Mod", "Source"]
LINK_COLUMNS: List[str] = LINK_KEYS + [LOG2FC]

SCORE_COLUMNS: List[str] = [
    "Kinase.Gene",
    "mS",
    "Enrichment",
    "m",
    "z.score",
    "p.value",
    "FDR",
]

# ---------------------------------------------------------------------------
# Bar-plot colour tags
# ---------------------------------------------------------------------------
COLOR: str = "color"
DEFAULT_COLOR: str = "black"  # not significant
UP_COLOR: str = "red"  # significant, z > 0
DOWN_COLOR: str = "blue"  # significant, z < 0

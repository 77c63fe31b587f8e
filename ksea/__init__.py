"""
ksea — Kinase-Substrate Enrichment Analysis

Infers relative kinase activity from phosphoproteomics data
(Casado et al. 2013):
  1. Normalising peptides to one phosphosite per row with log2 fold change.
  2. Selecting curated (PhosphoSitePlus) or predicted (NetworKIN)
     kinase-substrate annotations.
  3. Linking measured phosphosites to their kinases.
  4. Scoring every kinase: mean log2FC, enrichment, z-score, p-value, FDR.
  5. Reporting a z-score bar plot plus CSV / Excel result tables.

Usage
-----
CLI ::

    python -m ksea -x PX.csv -k KSData.csv -o ./results -m 5 -p 0.05

CLI (with NetworKIN predictions) ::

    python -m ksea -x PX.csv -k KSData.csv --networkin --networkin-cutoff 5

Programmatic ::

    from ksea import KSEAConfig, run_ksea, run_pipeline
    result = run_ksea("PX.csv", "KSData.csv", KSEAConfig(m_cutoff=2))
    outputs = run_pipeline("PX.csv", "KSData.csv", output_dir="./results")
"""

__version__ = "1.0.0"

from .config import KSEAConfig  # noqa: F401
from .pipeline import KSEAResult, run_ksea, run_pipeline  # noqa: F401

__all__ = ["KSEAConfig", "KSEAResult", "run_ksea", "run_pipeline", "__version__"]

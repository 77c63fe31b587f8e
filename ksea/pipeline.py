"""
Pipeline orchestrator — runs all KSEA steps in sequence.

Steps
-----
1. **Normalisation** – One phosphosite per row, ``log2FC`` from FC
2. **Reference**     – Select PhosphoSitePlus or NetworKIN annotations
3. **Annotation**    – Join sites to kinases, average duplicate evidence
4. **Scoring**       – mS, Enrichment, m, z-score, p-value, FDR per kinase
5. **Reporting**     – Bar plot, CSV tables and an Excel workbook

Metadata (version, timestamp, input files, parameters) is recorded in the
output Excel ``metadata`` sheet for reproducibility.
"""

from __future__ import annotations

import datetime
import logging
import os
from typing import Any, Dict, NamedTuple, Optional

import pandas as pd

from . import __version__
from .annotation import build_ks_links
from .columns import COLOR, DEFAULT_COLOR
from .config import KSEAConfig
from .normalization import normalize_px
from .plotting import plot_zscores
from .readers import TableSource, load_ksdata, load_px
from .reference import filter_ksdata
from .scoring import display_scores, score_kinases

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Output file names
# ---------------------------------------------------------------------------
LINKS_FILENAME = "Kinase-Substrate Links.csv"
SCORES_FILENAME = "KSEA Kinase Scores.csv"
PLOT_BASENAME = "KSEA Bar Plot"
EXCEL_FILENAME = "KSEA Results.xlsx"


class KSEAResult(NamedTuple):
    """In-memory tables of one KSEA run."""

    px: pd.DataFrame  # normalised experimental data
    ks_links: pd.DataFrame  # kinase-substrate links
    scores: pd.DataFrame  # all kinases, sorted by name
    display: pd.DataFrame  # m >= m_cutoff, sorted by z-score, with colour


def _describe_source(source: TableSource) -> str:
    if isinstance(source, pd.DataFrame):
        return "<DataFrame>"
    return os.path.basename(os.fspath(source))


def run_ksea(
    px: TableSource,
    ksdata: TableSource,
    config: Optional[KSEAConfig] = None,
) -> KSEAResult:
    """Run the KSEA calculation without writing any files.

    Parameters
    ----------
    px : str, path or pd.DataFrame
        Experimental table (``Protein, Gene, Peptide, Residue.Both, p, FC``).
    ksdata : str, path or pd.DataFrame
        PhosphoSitePlus & NetworKIN kinase-substrate dataset.
    config : KSEAConfig, optional
        Run settings; defaults to ``KSEAConfig()``.

    Raises
    ------
    ValueError
        On invalid settings or malformed input tables.
    """
    config = (config or KSEAConfig()).validate()

    px_df = load_px(px)
    ks_df = load_ksdata(ksdata)

    logger.info("Step 1/4: Normalising experimental data …")
    px_norm = normalize_px(px_df)

    logger.info("Step 2/4: Filtering kinase-substrate dataset …")
    ks_filtered = filter_ksdata(ks_df, config.networkin, config.networkin_cutoff)

    logger.info("Step 3/4: Linking phosphosites to kinases …")
    ks_links = build_ks_links(px_norm, ks_filtered)

    logger.info("Step 4/4: Scoring kinases …")
    scores = score_kinases(ks_links, px_norm)
    display = display_scores(scores, config.m_cutoff, config.p_cutoff)

    return KSEAResult(px=px_norm, ks_links=ks_links, scores=scores, display=display)


def run_pipeline(
    px: TableSource,
    ksdata: TableSource,
    output_dir: str = ".",
    config: Optional[KSEAConfig] = None,
    plot_format: str = "tiff",
    write_excel: bool = True,
) -> Dict[str, Any]:
    """Execute the full KSEA analysis and write its outputs.

    Parameters
    ----------
    px : str, path or pd.DataFrame
        Experimental phosphoproteomics table.
    ksdata : str, path or pd.DataFrame
        PhosphoSitePlus & NetworKIN dataset.
    output_dir : str
        Directory for result files (default ``"."``).
    config : KSEAConfig, optional
        Run settings; defaults to ``KSEAConfig()``.
    plot_format : str
        Bar plot file extension (default ``"tiff"``).
    write_excel : bool
        Also write ``KSEA Results.xlsx`` (default True).

    Returns
    -------
    dict
        Keys: ``links_path``, ``scores_path``, ``plot_path``, ``excel_path``,
        ``n_links``, ``n_kinases``, ``n_displayed``, ``n_significant``,
        ``result``, ``metadata``.  ``plot_path`` is ``None`` if nothing was
        plotted and ``excel_path`` is ``None`` if *write_excel* is False.
    """
    config = config or KSEAConfig()
    result = run_ksea(px, ksdata, config)

    os.makedirs(output_dir, exist_ok=True)
    links_path = os.path.join(output_dir, LINKS_FILENAME)
    scores_path = os.path.join(output_dir, SCORES_FILENAME)
    plot_path = os.path.join(output_dir, f"{PLOT_BASENAME}.{plot_format.lstrip('.')}")
    excel_path = os.path.join(output_dir, EXCEL_FILENAME) if write_excel else None

    # ── Reporting ─────────────────────────────────────────────────────────
    logger.info("Writing results …")
    plot_path = plot_zscores(result.display, plot_path)
    result.ks_links.to_csv(links_path, index=False)
    result.scores.to_csv(scores_path, index=False)

    n_significant = int((result.display[COLOR] != DEFAULT_COLOR).sum())
    if result.ks_links.empty:
        logger.warning(
            "Analysis produced no kinase-substrate links; "
            "the inputs or settings are likely misconfigured"
        )

    # ── Metadata for reproducibility ──────────────────────────────────────
    metadata: Dict[str, Any] = {
        "ksea_version": __version__,
        "timestamp": datetime.datetime.now().isoformat(),
        "px_file": _describe_source(px),
        "ksdata_file": _describe_source(ksdata),
        **config._asdict(),
    }

    if excel_path is not None:
        metadata_df = pd.DataFrame(
            [
                {
                    **metadata,
                    "normalised_sites": len(result.px),
                    "ks_links": len(result.ks_links),
                    "kinases": len(result.scores),
                    "displayed_kinases": len(result.display),
                    "significant_kinases": n_significant,
                }
            ]
        )
        with pd.ExcelWriter(excel_path, engine="openpyxl") as writer:
            result.scores.to_excel(writer, index=False, sheet_name="kinase_scores")
            result.ks_links.to_excel(writer, index=False, sheet_name="ks_links")
            result.display.to_excel(writer, index=False, sheet_name="bar_plot_data")
            metadata_df.to_excel(writer, index=False, sheet_name="metadata")

    logger.info("Pipeline complete. Results saved to: %s", output_dir)

    return {
        "links_path": links_path,
        "scores_path": scores_path,
        "plot_path": plot_path,
        "excel_path": excel_path,
        "n_links": len(result.ks_links),
        "n_kinases": len(result.scores),
        "n_displayed": len(result.display),
        "n_significant": n_significant,
        "result": result,
        "metadata": metadata,
    }

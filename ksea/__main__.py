"""
CLI entry point for the ksea package.

Usage
-----
    # Curated PhosphoSitePlus links
    python -m ksea -x PX.csv -k KSData.csv -o ./results -m 2 -p 0.05

    # Include NetworKIN predictions, verbose logging
    python -m ksea -x PX.csv -k KSData.csv --networkin --networkin-cutoff 5 -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import KSEAConfig


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``ksea`` command."""
    parser = argparse.ArgumentParser(
        prog="ksea",
        description="KSEA — Kinase-Substrate Enrichment Analysis",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ksea {__version__}",
    )
    parser.add_argument(
        "-x",
        "--px",
        type=str,
        required=True,
        help="Experimental data (.csv/.tsv/.xlsx) with columns "
        "Protein, Gene, Peptide, Residue.Both, p, FC",
    )
    parser.add_argument(
        "-k",
        "--ksdata",
        type=str,
        required=True,
        help="PhosphoSitePlus & NetworKIN kinase-substrate dataset",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=".",
        help="Output directory for results (default: current directory)",
    )
    parser.add_argument(
        "--networkin",
        action="store_true",
        help="Use NetworKIN predictions instead of PhosphoSitePlus links",
    )
    parser.add_argument(
        "--networkin-cutoff",
        type=float,
        default=None,
        help="Minimum NetworKIN score (required with --networkin)",
    )
    parser.add_argument(
        "-m",
        "--m-cutoff",
        type=float,
        default=5,
        help="Minimum substrates per kinase shown in the bar plot (default: 5)",
    )
    parser.add_argument(
        "-p",
        "--p-cutoff",
        type=float,
        default=0.05,
        help="p-value cutoff for highlighting kinases (default: 0.05)",
    )
    parser.add_argument(
        "--plot-format",
        type=str,
        default="tiff",
        help="Bar plot file format: tiff, png, pdf … (default: tiff)",
    )
    parser.add_argument(
        "--no-excel",
        action="store_true",
        help="Skip the Excel workbook output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose logging output (DEBUG level)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the KSEA pipeline."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.networkin and args.networkin_cutoff is None:
        parser.error("--networkin-cutoff is required with --networkin")

    config = KSEAConfig(
        networkin=args.networkin,
        networkin_cutoff=args.networkin_cutoff,
        m_cutoff=args.m_cutoff,
        p_cutoff=args.p_cutoff,
    )

    from .pipeline import run_pipeline

    try:
        result = run_pipeline(
            px=args.px,
            ksdata=args.ksdata,
            output_dir=args.output,
            config=config,
            plot_format=args.plot_format,
            write_excel=not args.no_excel,
        )

        print(f"\n{'=' * 55}")
        print("  KSEA Analysis Complete")
        print(f"{'=' * 55}")
        print(f"  K-S links     : {result['n_links']}")
        print(f"  Kinases       : {result['n_kinases']}")
        print(f"  Plotted       : {result['n_displayed']} (m >= {config.m_cutoff:g})")
        print(f"  Significant   : {result['n_significant']} (p < {config.p_cutoff:g})")
        print(f"{'─' * 55}")
        print(f"  Links CSV     : {result['links_path']}")
        print(f"  Scores CSV    : {result['scores_path']}")
        print(f"  Bar plot      : {result['plot_path'] or '(skipped)'}")
        if result["excel_path"]:
            print(f"  Excel output  : {result['excel_path']}")
        print(f"{'=' * 55}\n")

    except Exception as e:
        logging.getLogger(__name__).error("Pipeline failed: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

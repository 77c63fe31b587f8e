"""
Input loading for the experimental (PX) and kinase-substrate (KSData) tables.

Supported formats: ``.csv``, ``.tsv`` / ``.txt`` (tab-separated) and
``.xlsx`` (first worksheet, read with openpyxl).
"""

from __future__ import annotations

import logging
import os
from typing import Union

import pandas as pd

from .columns import PX_COLUMNS
from .reference import check_ksdata_columns

logger = logging.getLogger(__name__)

TableSource = Union[str, "os.PathLike[str]", pd.DataFrame]


def read_table(path: Union[str, "os.PathLike[str]"]) -> pd.DataFrame:
    """Read a delimited or Excel table, choosing the reader by extension.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    ValueError
        If the extension is not supported.
    """
    path = os.fspath(path)
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Input file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext == ".csv":
        df = pd.read_csv(path)
    elif ext in (".tsv", ".txt"):
        df = pd.read_csv(path, sep="\t")
    elif ext == ".xlsx":
        df = pd.read_excel(path, engine="openpyxl")
    else:
        raise ValueError(f"Unsupported table format '{ext}': {path}")

    logger.debug("Read %d rows x %d columns from %s", len(df), df.shape[1], path)
    return df


def _as_frame(source: TableSource) -> pd.DataFrame:
    if isinstance(source, pd.DataFrame):
        return source.copy()
    return read_table(source)


def load_px(source: TableSource) -> pd.DataFrame:
    """Load the experimental table and check its six columns and their order.

    Raises
    ------
    ValueError
        If the first six columns are not
        ``Protein, Gene, Peptide, Residue.Both, p, FC``.
    """
    px = _as_frame(source)
    head = [str(c).strip() for c in px.columns[: len(PX_COLUMNS)]]
    if head != PX_COLUMNS:
        raise ValueError(
            f"Experimental data must start with columns {PX_COLUMNS} "
            f"(in this order); found {head}"
        )
    px.columns = head + list(px.columns[len(PX_COLUMNS):])
    logger.info("Loaded experimental data: %d peptides", len(px))
    return px


def load_ksdata(source: TableSource) -> pd.DataFrame:
    """Load the PhosphoSitePlus & NetworKIN dataset and check required columns."""
    ksdata = _as_frame(source)
    check_ksdata_columns(ksdata)
    logger.info("Loaded kinase-substrate dataset: %d annotations", len(ksdata))
    return ksdata

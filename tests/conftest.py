"""
Test configuration and fixtures for ksea tests.
"""

import matplotlib

matplotlib.use("Agg")

import pandas as pd  # noqa: E402
import pytest  # noqa: E402

INF = float("inf")


@pytest.fixture
def px_df():
    """Experimental table: one multi-site peptide, one zero FC, one non-numeric FC."""
    return pd.DataFrame(
        {
            "Protein": ["P31749", "P31749", "P49841", "P28482", "Q92934", "O43524"],
            "Gene": ["AKT1", "AKT1", "GSK3B", "MAPK1", "BAD", "FOXO3"],
            "Peptide": ["RPRFSPEE", "RPRFSPEEK", "SGRPRTTSF", "VADPDHDHTGFLTEY", "RSRHSSYP", "SPRRRAASM"],
            "Residue.Both": ["S1", "S1", "S9;T10", "T185", "S75", "S253"],
            "p": ["NULL", 0.01, 0.2, 0.1, 0.3, 0.4],
            "FC": [2, 4, 0.5, -8, 0, "abc"],
        }
    )


@pytest.fixture
def ksdata_df():
    """PhosphoSitePlus & NetworKIN rows matching (and missing) the PX fixture."""
    return pd.DataFrame(
        {
            "KINASE": ["PKACA", "Akt1", "Akt1", "MEK1", "Akt1", "CK2A1", "CDK1"],
            "KIN_ACC_ID": ["P17612-2", "P31749", "P31749", "Q02750", "P31749", "P68400", "P06493"],
            "GENE": ["PRKACA", "AKT1", "AKT1", "MAP2K1", "AKT1", "CSNK2A1", "CDK1"],
            "SUB_ACC_ID": ["P31749-1", "P49841", "P49841", "P28482", "O43524", "P31749", "P31749"],
            "SUB_GENE": ["AKT1", "GSK3B", "GSK3B", "MAPK1", "FOXO3", "AKT1", "AKT1"],
            "SUB_MOD_RSD": ["S1", "S9", "T10", "T185", "S253", "S1", "S1"],
            "networkin_score": [INF, INF, INF, INF, INF, 4.9, 5.0],
            "Source": [
                "PhosphoSitePlus",
                "PhosphoSitePlus",
                "PhosphoSitePlus",
                "PhosphoSitePlus",
                "PhosphoSitePlus",
                "NetworKIN",
                "NetworKIN",
            ],
        }
    )


@pytest.fixture
def px_norm(px_df):
    from ksea.normalization import normalize_px

    return normalize_px(px_df)


@pytest.fixture
def curated_links(px_norm, ksdata_df):
    from ksea.annotation import build_ks_links
    from ksea.reference import filter_ksdata

    return build_ks_links(px_norm, filter_ksdata(ksdata_df))


@pytest.fixture
def input_files(tmp_path, px_df, ksdata_df):
    """The PX and KSData fixtures written as CSV files."""
    px_path = tmp_path / "PX.csv"
    ks_path = tmp_path / "KSData.csv"
    px_df.to_csv(px_path, index=False)
    ksdata_df.to_csv(ks_path, index=False)
    return px_path, ks_path

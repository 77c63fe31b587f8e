"""
Test kinase enrichment scoring and the bar-plot view.
"""

import math

import pandas as pd
import pytest

from ksea.scoring import (
    bh_adjust,
    display_scores,
    population_stats,
    score_kinases,
    significance_colors,
)

# log2FC of the normalised PX fixture: 1, 2, -1, -1, 3
MEAN = 0.8
SD = math.sqrt(3.2)


def _phi_upper(z):
    return 0.5 * math.erfc(abs(z) / math.sqrt(2))


def _bh(pvalues):
    n = len(pvalues)
    order = sorted(range(n), key=lambda i: pvalues[i])
    adjusted = [0.0] * n
    running = 1.0
    for rank in range(n, 0, -1):
        i = order[rank - 1]
        running = min(running, pvalues[i] * n / rank)
        adjusted[i] = running
    return adjusted


def test_population_stats(px_norm):
    mean, sd = population_stats(px_norm)

    assert mean == pytest.approx(MEAN)
    assert sd == pytest.approx(SD)


def test_population_stats_ignore_nan():
    mean, sd = population_stats(pd.DataFrame({"log2FC": [1.0, float("nan"), 3.0]}))

    assert mean == pytest.approx(2.0)
    assert sd == pytest.approx(math.sqrt(2.0))


def test_score_kinases(curated_links, px_norm):
    scores = score_kinases(curated_links, px_norm)

    assert list(scores.columns) == [
        "Kinase.Gene",
        "mS",
        "Enrichment",
        "m",
        "z.score",
        "p.value",
        "FDR",
    ]
    assert scores["Kinase.Gene"].tolist() == ["AKT1", "MAP2K1", "PRKACA"]
    assert scores["m"].tolist() == [2, 1, 1]
    assert scores["mS"].tolist() == pytest.approx([-1.0, 3.0, 1.5])
    assert scores["Enrichment"].tolist() == pytest.approx([-1.0 / MEAN, 3.0 / MEAN, 1.5 / MEAN])

    expected_z = [
        (-1.0 - MEAN) * math.sqrt(2) / SD,
        (3.0 - MEAN) / SD,
        (1.5 - MEAN) / SD,
    ]
    expected_p = [_phi_upper(z) for z in expected_z]
    assert scores["z.score"].tolist() == pytest.approx(expected_z)
    assert scores["p.value"].tolist() == pytest.approx(expected_p)
    assert scores["FDR"].tolist() == pytest.approx(_bh(expected_p))


def test_p_value_is_one_tailed_for_both_signs(curated_links, px_norm):
    scores = score_kinases(curated_links, px_norm)

    assert (scores["p.value"] <= 0.5).all()
    assert (scores["p.value"] >= 0).all()


def test_score_kinases_empty_links(px_norm):
    empty = pd.DataFrame(
        columns=["Kinase.Gene", "Substrate.Gene", "Substrate.Mod", "Source", "log2FC"]
    )

    scores = score_kinases(empty, px_norm)
    view = display_scores(scores, m_cutoff=1, p_cutoff=0.05)

    assert scores.empty
    assert "FDR" in scores.columns
    assert view.empty


def test_bh_adjust_leaves_nan_out():
    got = bh_adjust(pd.Series([0.01, float("nan"), 0.04]))

    assert got.iloc[0] == pytest.approx(0.02)
    assert math.isnan(got.iloc[1])
    assert got.iloc[2] == pytest.approx(0.04)


def test_display_filters_by_m_and_sorts_by_z(curated_links, px_norm):
    scores = score_kinases(curated_links, px_norm)

    view = display_scores(scores, m_cutoff=2, p_cutoff=0.05)

    # PRKACA and MAP2K1 have a single substrate
    assert view["Kinase.Gene"].tolist() == ["AKT1"]
    assert "PRKACA" in scores["Kinase.Gene"].tolist()


def test_display_sorted_ascending_by_z(curated_links, px_norm):
    scores = score_kinases(curated_links, px_norm)

    view = display_scores(scores, m_cutoff=0, p_cutoff=0.05)

    assert view["Kinase.Gene"].tolist() == ["AKT1", "PRKACA", "MAP2K1"]
    assert view["z.score"].is_monotonic_increasing


def test_fdr_unchanged_by_display_filter(curated_links, px_norm):
    scores = score_kinases(curated_links, px_norm)

    view = display_scores(scores, m_cutoff=2, p_cutoff=0.05)
    full = scores.set_index("Kinase.Gene")["FDR"]

    for _, row in view.iterrows():
        assert row["FDR"] == full[row["Kinase.Gene"]]
    # recomputing on the filtered set would give a different answer
    assert bh_adjust(view["p.value"]).iloc[0] != pytest.approx(view["FDR"].iloc[0])


def test_significance_colors():
    scores = pd.DataFrame(
        {
            "z.score": [2.5, -2.5, 0.3, -0.3],
            "p.value": [0.006, 0.006, 0.38, 0.38],
        }
    )

    colors = significance_colors(scores, p_cutoff=0.05)

    assert colors.tolist() == ["red", "blue", "black", "black"]


def test_display_adds_color_column(curated_links, px_norm):
    scores = score_kinases(curated_links, px_norm)

    view = display_scores(scores, m_cutoff=0, p_cutoff=0.2)

    # MAP2K1 z = 1.23 (p = 0.11); AKT1 z = -1.42 (p = 0.08)
    assert dict(zip(view["Kinase.Gene"], view["color"])) == {
        "AKT1": "blue",
        "PRKACA": "black",
        "MAP2K1": "red",
    }

"""
Test run configuration checks.
"""

import pytest

from ksea.config import KSEAConfig


def test_defaults_are_valid():
    config = KSEAConfig().validate()

    assert config.networkin is False
    assert config.m_cutoff == 5
    assert config.p_cutoff == 0.05


def test_networkin_requires_cutoff():
    with pytest.raises(ValueError, match="networkin_cutoff"):
        KSEAConfig(networkin=True).validate()

    assert KSEAConfig(networkin=True, networkin_cutoff=5).validate().networkin_cutoff == 5


@pytest.mark.parametrize("m_cutoff", [-1, -0.5])
def test_negative_m_cutoff(m_cutoff):
    with pytest.raises(ValueError, match="m_cutoff"):
        KSEAConfig(m_cutoff=m_cutoff).validate()


@pytest.mark.parametrize("p_cutoff", [0, 1, 1.5, -0.1])
def test_p_cutoff_out_of_range(p_cutoff):
    with pytest.raises(ValueError, match="p_cutoff"):
        KSEAConfig(p_cutoff=p_cutoff).validate()

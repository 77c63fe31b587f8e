"""
Run-time settings for a KSEA analysis.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)


class KSEAConfig(NamedTuple):
    """Scalar settings of one KSEA run.

    Attributes
    ----------
    networkin : bool
        Use NetworKIN predictions instead of curated PhosphoSitePlus links.
    networkin_cutoff : float, optional
        Minimum ``networkin_score``; required when *networkin* is True.
    m_cutoff : float
        Minimum number of substrates for a kinase to appear in the bar plot.
    p_cutoff : float
        p-value below which a kinase is coloured as significant.
    """

    networkin: bool = False
    networkin_cutoff: Optional[float] = None
    m_cutoff: float = 5
    p_cutoff: float = 0.05

    def validate(self) -> "KSEAConfig":
        """Return ``self`` if the settings are usable.

        Raises
        ------
        ValueError
            On a missing NetworKIN cutoff or out-of-range cutoffs.
        """
        if self.networkin and self.networkin_cutoff is None:
            raise ValueError(
                "networkin_cutoff is required when NetworKIN predictions are included."
            )
        if self.m_cutoff < 0:
            raise ValueError(f"m_cutoff must be >= 0, got {self.m_cutoff}")
        if not 0 < self.p_cutoff < 1:
            raise ValueError(f"p_cutoff must be between 0 and 1, got {self.p_cutoff}")
        logger.debug("Configuration: %s", self._asdict())
        return self

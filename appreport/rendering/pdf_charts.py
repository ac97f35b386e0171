#!/usr/bin/env python3
"""
Inline bar charts for PDF tables.

Bars are drawn directly on the ReportLab canvas so they sit inside table
cells.  Bar length is the item's value divided by an authoritative total
(not by the largest item), which keeps bars comparable between reports.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np
from reportlab.platypus import Flowable

from appreport.core.pdf_styles import COLORS

LOGGER = logging.getLogger(__name__)

DEFAULT_BAR_HEIGHT = 7


# ============================================================================
# BAR GEOMETRY
# ============================================================================
def _as_array(values: Sequence[Optional[float]]) -> np.ndarray:
    return np.array([np.nan if v is None else v for v in values], dtype=float)


def bar_fractions(values: Sequence[Optional[float]],
                  total: Optional[float]) -> List[Optional[float]]:
    """
    Fraction of ``total`` for each value.

    Missing values, and every value when ``total`` is missing or not
    positive, give None.

    Example:
        >>> bar_fractions([100, 300], 500)
        [0.2, 0.6]
    """
    if total is None or total <= 0:
        return [None] * len(values)
    fractions = _as_array(values) / float(total)
    return [None if np.isnan(f) else float(f) for f in fractions]


def distribution_fractions(values: Sequence[Optional[float]]) -> List[Optional[float]]:
    """Fractions of the breakdown's own sum (version distribution bars)."""
    arr = _as_array(values)
    return bar_fractions(values, float(np.nansum(arr)) if arr.size else None)


# ============================================================================
# FLOWABLE
# ============================================================================
class HorizontalBar(Flowable):
    """
    Horizontal bar filled to ``fraction`` of its width.

    Fractions outside [0, 1] are clamped when drawn; None draws only the track.
    """

    def __init__(self, fraction: Optional[float], width: float,
                 height: float = DEFAULT_BAR_HEIGHT):
        super().__init__()
        self.fraction = fraction
        self.bar_width = width
        self.bar_height = height

    def wrap(self, availWidth, availHeight):
        self.bar_width = min(self.bar_width, availWidth)
        return self.bar_width, self.bar_height

    def draw(self):
        c = self.canv
        c.saveState()
        c.setStrokeColor(COLORS['bar_track'])
        c.setFillColor(COLORS['bar_track'])
        c.rect(0, 0, self.bar_width, self.bar_height, stroke=0, fill=1)
        if self.fraction is not None:
            filled = self.bar_width * min(max(self.fraction, 0.0), 1.0)
            if filled > 0:
                c.setFillColor(COLORS['bar'])
                c.rect(0, 0, filled, self.bar_height, stroke=0, fill=1)
        c.restoreState()

    def __repr__(self) -> str:
        return f"HorizontalBar(fraction={self.fraction!r})"

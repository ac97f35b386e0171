#!/usr/bin/env python3
"""
Metric change computation for report generation.

Provides:
- compute_metric_changes(): every current/last pair of a report as one
  long-format DataFrame
- select_high_variance(): rows whose percent change exceeds a threshold
"""
from __future__ import annotations

import logging
from typing import Dict, List

import numpy as np
import pandas as pd

from appreport.models.metrics import percent_change
from appreport.models.report_config import ReportConfig

LOGGER = logging.getLogger(__name__)

CHANGE_COLUMNS = ["section", "metric", "kind", "current", "last", "change"]


def _row(section: str, metric: str, kind: str, current, last) -> Dict:
    return {
        "section": section,
        "metric": metric,
        "kind": kind,
        "current": current,
        "last": last,
        "change": percent_change(current, last),
    }


# ============================================================================
# COMPUTATION FUNCTIONS
# ============================================================================
def compute_metric_changes(config: ReportConfig) -> pd.DataFrame:
    """
    Collect every metric pair of the report.

    Columns: section, metric, kind, current, last, change.  ``change`` is
    NaN where the percent change is undefined.

    Example:
        >>> df = compute_metric_changes(ReportConfig())
        >>> list(df.columns)
        ['section', 'metric', 'kind', 'current', 'last', 'change']
    """
    rows: List[Dict] = []

    for pair in config.ios_metrics.metric_pairs():
        rows.append(_row("iOS", pair.spec.label, pair.spec.kind, pair.current, pair.last))

    for pair in config.android_metrics.metric_pairs():
        rows.append(_row("Android", pair.spec.label, pair.spec.kind, pair.current, pair.last))

    for share in config.ios_metrics.download_shares():
        rows.append(_row("Download Sources", f"{share.name} Downloads", "value",
                         share.current_downloads, share.last_downloads))
        rows.append(_row("Download Sources", f"{share.name} Share", "percent",
                         share.current_percentage, share.last_percentage))

    comparison = config.platform_comparison
    rows.append(_row("Platform Comparison", "iOS Share of Downloads", "percent",
                     comparison.ios_user_percent, comparison.ios_user_percent_last))
    rows.append(_row("Platform Comparison", "Android Share of Downloads", "percent",
                     comparison.android_user_percent, comparison.android_user_percent_last))

    df = pd.DataFrame(rows, columns=CHANGE_COLUMNS)
    df["change"] = pd.to_numeric(df["change"], errors="coerce")

    LOGGER.debug("Metric pairs: %d (%d with a defined change)",
                 len(df), int(df["change"].notna().sum()))
    return df


def select_high_variance(changes: pd.DataFrame, threshold: float) -> pd.DataFrame:
    """
    Rows whose absolute percent change is strictly greater than ``threshold``.

    Undefined changes never qualify.  Input order is kept.
    """
    if changes.empty:
        return changes.copy()
    magnitude = np.abs(changes["change"].to_numpy(dtype=float))
    mask = np.nan_to_num(magnitude, nan=-np.inf) > float(threshold)
    selected = changes.loc[mask].reset_index(drop=True)
    LOGGER.debug("High-variance metrics above %.2f%%: %d", threshold, len(selected))
    return selected

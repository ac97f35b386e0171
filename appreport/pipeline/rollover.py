#!/usr/bin/env python3
"""
Rollover: turn a finished report into the starting point for the next one.

Current-period values move into the last-period slots and are cleared, the
report date becomes the last report date and the report date moves forward
by one calendar month.
"""
from __future__ import annotations

import calendar
import logging
from copy import deepcopy
from typing import Optional, Tuple

import pandas as pd

from appreport.models.report_config import ReportConfig

LOGGER = logging.getLogger(__name__)


def advance_one_month(month: Optional[int], day: Optional[int],
                      year: Optional[int]) -> Tuple[Optional[int], Optional[int], Optional[int]]:
    """
    Add one calendar month, clamping to the end of the target month.

    Incomplete dates are returned unchanged.

    Example:
        >>> advance_one_month(1, 31, 2025)
        (2, 28, 2025)
        >>> advance_one_month(12, 15, 2025)
        (1, 15, 2026)
    """
    if not all(part is not None and part > 0 for part in (month, day, year)):
        return month, day, year
    try:
        last_day = calendar.monthrange(year, month)[1]
        start = pd.Timestamp(year=year, month=month, day=min(day, last_day))
        target = start + pd.DateOffset(months=1)
    except (ValueError, OverflowError) as exc:
        LOGGER.debug("Cannot advance %s/%s/%s: %s", month, day, year, exc)
        return month, day, year
    return int(target.month), int(target.day), int(target.year)


def _roll_pairs(metrics) -> None:
    for spec in metrics.METRICS:
        setattr(metrics, f"{spec.key}_last", getattr(metrics, spec.key))
        setattr(metrics, spec.key, None)


def _clear_distribution(items: list) -> None:
    for item in items:
        item.daily_active_users = None


def rollover_config(config: ReportConfig) -> ReportConfig:
    """
    Return a copy of ``config`` rolled forward one period.

    The input is not modified.
    """
    rolled = deepcopy(config)

    _roll_pairs(rolled.ios_metrics)
    _roll_pairs(rolled.android_metrics)

    for source in rolled.ios_metrics.download_sources:
        source.last_downloads = source.current_downloads
        source.current_downloads = None

    # Version breakdowns have no last-period slot; keep the labels only.
    _clear_distribution(rolled.ios_metrics.version_distribution)
    _clear_distribution(rolled.android_metrics.version_distribution)

    rolled.last_report_month = config.report_month
    rolled.last_report_day = config.report_day
    rolled.last_report_year = config.report_year
    (rolled.report_month,
     rolled.report_day,
     rolled.report_year) = advance_one_month(config.report_month, config.report_day,
                                             config.report_year)

    LOGGER.debug("Rolled report %s -> %s",
                 config.formatted_report_date() or "(no date)",
                 rolled.formatted_report_date() or "(no date)")
    return rolled


__all__ = ["advance_one_month", "rollover_config"]

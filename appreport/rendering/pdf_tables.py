#!/usr/bin/env python3
"""
Table rendering utilities for PDF reports.

Handles:
- DataFrame -> ReportLab Table conversion
- Styled header row
- Deterministic alternating row backgrounds
- Colouring of signed change columns
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from reportlab.lib.colors import Color
from reportlab.platypus import Paragraph, Table, TableStyle

from appreport.core.formatting import (
    MISSING, format_metric, format_percent, format_percent_change, format_value,
)
from appreport.core.pdf_styles import COLORS, CONTENT_WIDTH, FONT_BODY, FONT_HEADING, style_h2
from appreport.rendering.pdf_charts import HorizontalBar, bar_fractions, distribution_fractions

LOGGER = logging.getLogger(__name__)

HEADER_FONT_SIZE = 8
BODY_FONT_SIZE = 9
CHANGE_HEADER = "% Change"

KEY_METRIC_WEIGHTS = (2.0, 1.3, 1.3, 1.0)
KEY_METRIC_WEIGHTS_CURRENT = (2.0, 1.3)
HIGH_VARIANCE_WEIGHTS = (2.4, 1.4, 1.0, 1.0, 1.0)


def row_background(index: int) -> Color:
    """Background for data row ``index`` (0-based): even white, odd grey."""
    return COLORS['row_even'] if index % 2 == 0 else COLORS['row_odd']


def _change_color(text) -> Optional[Color]:
    if not isinstance(text, str) or text == MISSING:
        return None
    if text.startswith('+'):
        return COLORS['increase']
    if text.startswith('-'):
        return COLORS['decrease']
    return None


# ============================================================================
# FRAME BUILDERS
# ============================================================================
def period_headers(config) -> Tuple[str, str]:
    """Column titles for the current and last period (dates when known)."""
    return (config.formatted_report_date() or "Current",
            config.formatted_last_report_date() or "Last Period")


def metric_pairs_frame(pairs: Iterable, current_header: str, last_header: str,
                       include_last: bool) -> pd.DataFrame:
    """
    Display frame for a platform's key metrics.

    Columns: Metric, <current>, and with ``include_last`` also <last> and
    "% Change".
    """
    columns = ["Metric", current_header]
    if include_last:
        columns += [last_header, CHANGE_HEADER]
    rows = []
    for pair in pairs:
        row = [pair.spec.label, format_metric(pair.current, pair.spec.kind)]
        if include_last:
            row += [format_metric(pair.last, pair.spec.kind), format_percent_change(pair.change)]
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


# ============================================================================
# TABLE BUILDER
# ============================================================================
def create_metrics_table(
        df: pd.DataFrame,
        title: Optional[str] = None,
        max_width: float = CONTENT_WIDTH,
        col_weights: Optional[Sequence[float]] = None,
        change_columns: Sequence[str] = (),
) -> List:
    """
    Convert a DataFrame of display values to a styled ReportLab Table.

    Cells are used as given: strings are drawn as plain text, Flowables
    (e.g. bars) are embedded.  Format numbers before calling.

    Args:
        df: DataFrame whose columns become the header row
        title: Optional subsection title paragraph
        max_width: Total table width
        col_weights: Relative column widths (equal when omitted)
        change_columns: Columns holding signed changes, coloured by sign

    Returns:
        List of flowables [Paragraph(title), Table]

    Example:
        >>> df = pd.DataFrame({'Metric': ['Impressions'], '10/1/2025': ['1,200']})
        >>> flowables = create_metrics_table(df, title="Key Metrics Overview")
    """
    flowables = []

    if df.empty:
        LOGGER.debug("Empty DataFrame provided to create_metrics_table")
        return flowables

    if title:
        flowables.append(Paragraph(title, style_h2))

    headers = [str(c) for c in df.columns]
    rows = df.fillna(MISSING).values.tolist()
    table_data = [headers] + rows

    # ========================================================================
    # COLUMN WIDTHS
    # ========================================================================
    weights = list(col_weights) if col_weights else [1.0] * len(headers)
    if len(weights) != len(headers):
        raise ValueError(
            f"col_weights has {len(weights)} entries for {len(headers)} columns"
        )
    total_weight = float(sum(weights))
    col_widths = [max_width * w / total_weight for w in weights]

    table = Table(table_data, colWidths=col_widths, repeatRows=1)

    # ========================================================================
    # STYLING
    # ========================================================================
    style_commands = [
        # Header row
        ('BACKGROUND', (0, 0), (-1, 0), COLORS['header_bg']),
        ('TEXTCOLOR', (0, 0), (-1, 0), COLORS['header_text']),
        ('FONTNAME', (0, 0), (-1, 0), FONT_HEADING),
        ('FONTSIZE', (0, 0), (-1, 0), HEADER_FONT_SIZE),
        ('TOPPADDING', (0, 0), (-1, 0), 8),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),

        # Data rows
        ('FONTNAME', (0, 1), (-1, -1), FONT_BODY),
        ('FONTSIZE', (0, 1), (-1, -1), BODY_FONT_SIZE),
        ('TEXTCOLOR', (0, 1), (-1, -1), COLORS['text_dark']),
        ('TOPPADDING', (0, 1), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 1), (-1, -1), 6),

        ('LEFTPADDING', (0, 0), (-1, -1), 6),
        ('RIGHTPADDING', (0, 0), (-1, -1), 6),

        ('GRID', (0, 0), (-1, -1), 0.5, COLORS['border']),

        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('ALIGN', (0, 0), (0, -1), 'LEFT'),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
    ]

    for row_idx in range(len(rows)):
        style_commands.append(
            ('BACKGROUND', (0, row_idx + 1), (-1, row_idx + 1), row_background(row_idx))
        )

    for col_name in change_columns:
        if col_name not in headers:
            continue
        col_idx = headers.index(col_name)
        for row_idx, row in enumerate(rows):
            color = _change_color(row[col_idx])
            if color is not None:
                style_commands.append(
                    ('TEXTCOLOR', (col_idx, row_idx + 1), (col_idx, row_idx + 1), color)
                )

    table.setStyle(TableStyle(style_commands))
    flowables.append(table)

    return flowables


# ============================================================================
# BREAKDOWN FRAMES (with bars)
# ============================================================================
DOWNLOAD_SOURCE_WEIGHTS = (1.4, 0.8, 1.1, 0.9, 1.3, 0.9, 1.0)
DOWNLOAD_SOURCE_WEIGHTS_CURRENT = (1.6, 1.0, 1.2, 1.4)
VERSION_WEIGHTS = (1.5, 1.5, 1.0, 2.0)


def _bar_width(weights: Sequence[float], max_width: float = CONTENT_WIDTH) -> float:
    # last column holds the bar; leave the cell padding free
    return max_width * weights[-1] / float(sum(weights)) - 12


def download_sources_frame(shares: Sequence, total_downloads: Optional[float],
                           include_last: bool) -> pd.DataFrame:
    """
    Display frame for the download source breakdown.

    Bars are current downloads over the iOS total downloads metric.
    """
    weights = DOWNLOAD_SOURCE_WEIGHTS if include_last else DOWNLOAD_SOURCE_WEIGHTS_CURRENT
    width = _bar_width(weights)
    fractions = bar_fractions([s.current_downloads for s in shares], total_downloads)

    columns = ["Source", "Share", "Downloads"]
    if include_last:
        columns += ["Last Share", "Last Downloads", CHANGE_HEADER]
    columns.append("of Total")

    rows = []
    for share, fraction in zip(shares, fractions):
        row = [share.name, format_percent(share.current_percentage),
               format_value(share.current_downloads)]
        if include_last:
            row += [format_percent(share.last_percentage),
                    format_value(share.last_downloads),
                    format_percent_change(share.downloads_change)]
        row.append(HorizontalBar(fraction, width))
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def version_distribution_frame(items: Sequence) -> pd.DataFrame:
    """Display frame for a per-version DAU breakdown; bars use the breakdown's own sum."""
    width = _bar_width(VERSION_WEIGHTS)
    fractions = distribution_fractions([item.daily_active_users for item in items])
    rows = [
        [item.version, format_value(item.daily_active_users),
         format_percent(None if fraction is None else fraction * 100),
         HorizontalBar(fraction, width)]
        for item, fraction in zip(items, fractions)
    ]
    return pd.DataFrame(rows, columns=["Version", "Daily Active Users", "Share", ""])


COMPARISON_WEIGHTS = (1.6, 1, 1, 1, 1, 1, 1)
COMPARISON_WEIGHTS_CURRENT = (1.6, 1, 1)


def comparison_frame(rows: Iterable, current_header: str, last_header: str,
                     include_last: bool) -> pd.DataFrame:
    """Display frame for the iOS vs Android comparison; headers span two lines."""
    columns = ["Metric", f"iOS\n{current_header}", f"Android\n{current_header}"]
    if include_last:
        columns += [f"iOS\n{last_header}", f"Android\n{last_header}",
                    f"iOS\n{CHANGE_HEADER}", f"Android\n{CHANGE_HEADER}"]
    data = []
    for row in rows:
        kind = row.spec.kind
        line = [row.spec.label, format_metric(row.ios, kind), format_metric(row.android, kind)]
        if include_last:
            line += [format_metric(row.ios_last, kind), format_metric(row.android_last, kind),
                     format_percent_change(row.ios_change),
                     format_percent_change(row.android_change)]
        data.append(line)
    return pd.DataFrame(data, columns=columns)
